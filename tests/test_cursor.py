"""Tests for the bounds-checked buffer cursor."""

import pytest

from fastosu.cursor import Cursor
from fastosu.errors import MalformedBeatmapError


def test_read_int_stops_at_first_non_digit():
    cursor = Cursor(b" 42abc")
    assert cursor.read_int() == 42
    assert cursor.pos == 3


def test_read_float_accepts_c_style_literals():
    assert Cursor(b"1.5e2,").read_float() == 150.0
    assert Cursor(b"-.5").read_float() == -0.5
    assert Cursor(b"+3").read_float() == 3.0


def test_read_int_without_digits_is_malformed():
    cursor = Cursor(b"abc")
    cursor.section = "General"
    cursor.field = "mode"
    with pytest.raises(MalformedBeatmapError) as info:
        cursor.read_int()
    assert info.value.offset == 0
    assert info.value.section == "General"
    assert info.value.field == "mode"


def test_skip_past_stays_on_current_line():
    cursor = Cursor(b"1,2\r\n3,4")
    cursor.skip_past(b",")
    assert cursor.read_int() == 2
    with pytest.raises(MalformedBeatmapError):
        cursor.skip_past(b",")
    assert cursor.pos == 3


def test_match_key_requires_colon_after_key():
    cursor = Cursor(b"TitleUnicode:x\r\n")
    assert not cursor.match_key(b"Title")
    assert cursor.pos == 0

    cursor = Cursor(b"Title :  Song\r\n")
    assert cursor.match_key(b"Title")
    assert cursor.read_line() == b"Song"
    assert cursor.at_end()


def test_read_line_handles_both_terminators():
    cursor = Cursor(b"a\r\nb\nc")
    assert cursor.read_line() == b"a"
    assert cursor.read_line() == b"b"
    assert cursor.read_line() == b"c"
    assert cursor.at_end()


def test_advance_past_end_is_malformed():
    cursor = Cursor(b"[")
    cursor.advance()
    with pytest.raises(MalformedBeatmapError):
        cursor.advance()
    with pytest.raises(MalformedBeatmapError):
        cursor.peek()


def test_count_lines_until_blank():
    cursor = Cursor(b"a\r\nb\r\n\r\nc\r\n")
    assert cursor.count_lines_until_blank() == 2
    assert cursor.pos == 0


def test_count_lines_until_blank_stops_at_end():
    assert Cursor(b"a\r\nb").count_lines_until_blank() == 2
    assert Cursor(b"").count_lines_until_blank() == 0


def test_count_lines_to_end_ignores_blank_lines():
    cursor = Cursor(b"a\r\nb\r\n\r\nc\r\n\r\n")
    assert cursor.count_lines_to_end() == 3
    assert cursor.pos == 0


def test_count_in_span():
    cursor = Cursor(b"|1:2|3:4,2,100")
    assert cursor.count_in_span(b":", b",") == 2
    with pytest.raises(MalformedBeatmapError):
        Cursor(b"|1:2|3:4").count_in_span(b":", b",")


def test_context_manager_drops_buffer():
    with Cursor(b"abc") as cursor:
        assert cursor.peek() == ord("a")
    assert cursor.at_end()


def test_oversized_integer_literal_is_malformed():
    cursor = Cursor(b"9" * 5000 + b",")
    cursor.section = "HitObjects"
    cursor.field = "x"
    with pytest.raises(MalformedBeatmapError) as info:
        cursor.read_int()
    assert info.value.offset == 0
    assert info.value.field == "x"
    assert cursor.pos == 0
