"""Advance-only cursor over a beatmap byte buffer.

Every primitive is bounds checked: running off the end of the buffer or
missing an expected delimiter raises MalformedBeatmapError carrying the
current offset plus the section and field being decoded.
"""

from __future__ import annotations

import re

from fastosu.errors import MalformedBeatmapError

# C-style numeric literals: leading blanks, optional sign, stop at the first
# byte that can't continue the number.
_INT_RE = re.compile(rb"[ \t]*([+-]?[0-9]+)")
_FLOAT_RE = re.compile(rb"[ \t]*([+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")

_CR = 0x0D


class Cursor:
    """Forward-only position in an immutable byte buffer.

    Use as a context manager so the buffer reference is dropped on every exit
    path, including decode failures.
    """

    def __init__(self, data: bytes) -> None:
        self._data = data
        self.pos = 0
        self.end = len(data)
        # Decoding context reported in errors
        self.section: str | None = None
        self.field: str | None = None

    def __enter__(self) -> Cursor:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._data = b""
        self.end = 0

    def error(self, message: str) -> MalformedBeatmapError:
        return MalformedBeatmapError(message, self.pos, self.section, self.field)

    def at_end(self) -> bool:
        return self.pos >= self.end

    def peek(self) -> int:
        if self.pos >= self.end:
            raise self.error("unexpected end of input")
        return self._data[self.pos]

    def startswith(self, literal: bytes) -> bool:
        return self._data.startswith(literal, self.pos)

    def line_end(self) -> int:
        """Offset where the current line's content stops (before CR LF / LF)."""
        idx = self._data.find(b"\n", self.pos, self.end)
        if idx == -1:
            idx = self.end
        if idx > self.pos and self._data[idx - 1] == _CR:
            idx -= 1
        return idx

    def at_blank_line(self) -> bool:
        return self.line_end() == self.pos

    def advance(self, count: int = 1) -> None:
        if self.pos + count > self.end:
            raise self.error("unexpected end of input")
        self.pos += count

    def match(self, literal: bytes) -> bool:
        """Advance past literal if the buffer holds it here."""
        if self._data.startswith(literal, self.pos):
            self.pos += len(literal)
            return True
        return False

    def match_key(self, key: bytes) -> bool:
        """Advance past "key:" and any blanks after it.

        The key only matches when a colon follows it (blanks allowed in
        between), so a key never matches a longer key it prefixes.
        """
        if not self._data.startswith(key, self.pos):
            return False
        idx = self.pos + len(key)
        while idx < self.end and self._data[idx] in b" \t":
            idx += 1
        if idx >= self.end or self._data[idx] != 0x3A:  # ':'
            return False
        self.pos = idx + 1
        self.skip_blanks()
        return True

    def expect(self, literal: bytes) -> None:
        if not self.match(literal):
            raise self.error(f"expected {literal.decode('ascii')!r}")

    def skip_until(self, delimiter: bytes) -> None:
        """Move to the next occurrence of delimiter on the current line."""
        idx = self._data.find(delimiter, self.pos, self.line_end())
        if idx == -1:
            raise self.error(f"missing {delimiter.decode('ascii')!r} delimiter")
        self.pos = idx

    def skip_past(self, delimiter: bytes) -> None:
        self.skip_until(delimiter)
        self.pos += len(delimiter)

    def skip_blanks(self) -> None:
        while self.pos < self.end and self._data[self.pos] in b" \t":
            self.pos += 1

    def skip_line(self) -> None:
        """Move to the start of the next line, or to the end of the buffer."""
        idx = self._data.find(b"\n", self.pos, self.end)
        self.pos = self.end if idx == -1 else idx + 1

    def skip_blank_lines(self) -> None:
        while not self.at_end() and self.at_blank_line():
            self.skip_line()

    def seek_byte(self, value: bytes) -> bool:
        """Move to the next occurrence of value anywhere ahead; False if none."""
        idx = self._data.find(value, self.pos, self.end)
        if idx == -1:
            self.pos = self.end
            return False
        self.pos = idx
        return True

    def read_int(self) -> int:
        found = _INT_RE.match(self._data, self.pos, self.end)
        if found is None:
            raise self.error("expected an integer")
        try:
            value = int(found.group(1))
        except ValueError:
            raise self.error("integer literal out of range") from None
        self.pos = found.end()
        return value

    def read_float(self) -> float:
        found = _FLOAT_RE.match(self._data, self.pos, self.end)
        if found is None:
            raise self.error("expected a number")
        self.pos = found.end()
        return float(found.group(1))

    def read_line(self) -> bytes:
        """Return the rest of the current line's content and move past its terminator."""
        stop = self.line_end()
        content = self._data[self.pos:stop]
        self.pos = stop
        self.skip_line()
        return content

    def count_in_span(self, value: bytes, delimiter: bytes) -> int:
        """Count occurrences of value between here and the next delimiter on this line."""
        stop = self._data.find(delimiter, self.pos, self.line_end())
        if stop == -1:
            raise self.error(f"missing {delimiter.decode('ascii')!r} delimiter")
        return self._data.count(value, self.pos, stop)

    def _line_bounds(self, start: int) -> tuple[int, int]:
        """Content end and next-line start for the line beginning at start."""
        idx = self._data.find(b"\n", start, self.end)
        nxt = self.end if idx == -1 else idx + 1
        stop = self.end if idx == -1 else idx
        if stop > start and self._data[stop - 1] == _CR:
            stop -= 1
        return stop, nxt

    def count_lines_until_blank(self) -> int:
        """Number of lines from here up to the first blank line or the buffer end."""
        count = 0
        start = self.pos
        while start < self.end:
            line_start = start
            stop, start = self._line_bounds(start)
            if stop == line_start:
                break
            count += 1
        return count

    def count_lines_to_end(self) -> int:
        """Number of non-blank lines from here to the buffer end."""
        count = 0
        start = self.pos
        while start < self.end:
            line_start = start
            stop, start = self._line_bounds(start)
            if stop > line_start:
                count += 1
        return count
