"""Single-pass scanner turning a .osu byte buffer into a Beatmap."""

from __future__ import annotations

import dataclasses
import logging
from enum import Enum

from fastosu.config import (
    FORMAT_HEADER,
    MAX_STRING_BYTES,
    SLIDER_BIT,
    SPINNER_BIT,
    TEXT_ENCODING,
    UTF8_BOM,
)
from fastosu.cursor import Cursor
from fastosu.errors import BeatmapAllocationError, FieldTooLongError
from fastosu.models import (
    Beatmap,
    Circle,
    CurvePoint,
    CurveType,
    HitObject,
    Slider,
    Spinner,
    TimingPoint,
)

logger = logging.getLogger(__name__)


class Section(Enum):
    NONE = "None"
    GENERAL = "General"
    METADATA = "Metadata"
    DIFFICULTY = "Difficulty"
    TIMING_POINTS = "TimingPoints"
    HIT_OBJECTS = "HitObjects"


# Headers are told apart by their first letter
_SECTION_BY_INITIAL = {
    ord("G"): Section.GENERAL,
    ord("M"): Section.METADATA,
    ord("D"): Section.DIFFICULTY,
    ord("T"): Section.TIMING_POINTS,
    ord("H"): Section.HIT_OBJECTS,
}


class FieldKind(Enum):
    INT = "int"
    FLOAT = "float"
    STRING = "string"


# key, Beatmap attribute, decoder
_FIELDS: dict[Section, tuple[tuple[bytes, str, FieldKind], ...]] = {
    Section.GENERAL: (
        (b"AudioFilename", "audio_file_name", FieldKind.STRING),
        (b"AudioLeadIn", "audio_lead_in", FieldKind.INT),
        (b"Countdown", "countdown", FieldKind.INT),
        (b"CountdownOffset", "countdown_offset", FieldKind.INT),
        (b"StackLeniency", "stack_leniency", FieldKind.FLOAT),
        (b"Mode", "mode", FieldKind.INT),
    ),
    Section.METADATA: (
        (b"Title", "title", FieldKind.STRING),
        (b"Artist", "artist", FieldKind.STRING),
        (b"Creator", "creator", FieldKind.STRING),
        (b"Version", "version", FieldKind.STRING),
        (b"BeatmapID", "beatmap_id", FieldKind.INT),
        (b"BeatmapSetID", "beatmap_set_id", FieldKind.INT),
    ),
    Section.DIFFICULTY: (
        (b"HPDrainRate", "hp_drain_rate", FieldKind.FLOAT),
        (b"CircleSize", "circle_size", FieldKind.FLOAT),
        (b"OverallDifficulty", "overall_difficulty", FieldKind.FLOAT),
        (b"ApproachRate", "approach_rate", FieldKind.FLOAT),
        (b"SliderMultiplier", "slider_multiplier", FieldKind.FLOAT),
        (b"SliderTickRate", "slider_tick_rate", FieldKind.FLOAT),
    ),
}


def _index_by_initial(
    fields: tuple[tuple[bytes, str, FieldKind], ...],
) -> dict[int, list[tuple[bytes, str, FieldKind]]]:
    index: dict[int, list[tuple[bytes, str, FieldKind]]] = {}
    for entry in fields:
        index.setdefault(entry[0][0], []).append(entry)
    return index


_FIELDS_BY_INITIAL = {section: _index_by_initial(fields) for section, fields in _FIELDS.items()}


class _BeatmapScanner:
    """Walks the buffer once, filling a Beatmap section by section."""

    def __init__(self, cursor: Cursor, beatmap: Beatmap) -> None:
        self.cursor = cursor
        self.beatmap = beatmap

    def run(self) -> None:
        cursor = self.cursor
        self._read_format_version()

        if not cursor.seek_byte(b"["):
            logger.debug("No section headers found")
            return

        section = Section.NONE
        while not cursor.at_end():
            if cursor.peek() == ord("["):
                section = self._read_header()
                if section is Section.TIMING_POINTS:
                    self._read_timing_points()
                    section = Section.NONE
                elif section is Section.HIT_OBJECTS:
                    # Always the last section; nothing after it is scanned
                    self._read_hit_objects()
                    return
            elif section in _FIELDS_BY_INITIAL:
                self._read_field(section)
            else:
                cursor.skip_line()

    def _set_context(self, section: Section | None, field: str | None = None) -> None:
        self.cursor.section = section.value if section else None
        self.cursor.field = field

    def _read_format_version(self) -> None:
        cursor = self.cursor
        cursor.match(UTF8_BOM)
        if cursor.match(FORMAT_HEADER):
            self._set_context(None, "format_version")
            self.beatmap.format_version = cursor.read_int()
            self._set_context(None)
            cursor.skip_line()

    def _read_header(self) -> Section:
        cursor = self.cursor
        self._set_context(None, "section header")
        start = cursor.pos
        cursor.advance()  # '['
        section = _SECTION_BY_INITIAL.get(cursor.peek(), Section.NONE)
        if section is not Section.NONE and not cursor.startswith(section.value.encode("ascii") + b"]"):
            section = Section.NONE
        cursor.skip_line()

        if section is Section.NONE:
            logger.debug("Skipping unrecognized section at byte %d", start)
        else:
            logger.debug("Entering [%s] at byte %d", section.value, start)
        self._set_context(section)
        return section

    def _read_field(self, section: Section) -> None:
        cursor = self.cursor
        if cursor.at_blank_line():
            cursor.skip_line()
            return

        for key, attr, kind in _FIELDS_BY_INITIAL[section].get(cursor.peek(), ()):
            if cursor.match_key(key):
                self._set_context(section, attr)
                self._decode_field(attr, kind)
                self._set_context(section)
                return

        cursor.skip_line()

    def _decode_field(self, attr: str, kind: FieldKind) -> None:
        cursor = self.cursor
        if kind is FieldKind.STRING:
            raw = cursor.read_line()
            if len(raw) > MAX_STRING_BYTES:
                raise FieldTooLongError(attr, len(raw), MAX_STRING_BYTES)
            setattr(self.beatmap, attr, raw.decode(TEXT_ENCODING, errors="replace"))
            setattr(self.beatmap, f"{attr}_size", len(raw))
            return

        if kind is FieldKind.INT:
            value: int | float = cursor.read_int()
        else:
            value = cursor.read_float()
        setattr(self.beatmap, attr, value)
        cursor.skip_line()

    def _read_timing_points(self) -> None:
        count = self.cursor.count_lines_until_blank()
        logger.debug("Reading %d timing points", count)

        points = self.beatmap.timing_points = []
        for _ in range(count):
            points.append(self._read_timing_point())

    def _read_timing_point(self) -> TimingPoint:
        cursor = self.cursor
        section = Section.TIMING_POINTS

        self._set_context(section, "time")
        time = cursor.read_int()
        cursor.skip_past(b",")

        self._set_context(section, "beatLength")
        beat_length = cursor.read_float()
        cursor.skip_past(b",")

        self._set_context(section, "meter")
        meter = cursor.read_int()
        cursor.skip_past(b",")

        # sampleSet, sampleIndex, volume are not kept
        self._set_context(section, "sample fields")
        for _ in range(3):
            cursor.skip_past(b",")

        self._set_context(section, "uninherited")
        uninherited = cursor.read_int() != 0

        cursor.skip_line()
        self._set_context(section)
        return TimingPoint(time=time, beat_length=beat_length, meter=meter, uninherited=uninherited)

    def _read_hit_objects(self) -> None:
        count = self.cursor.count_lines_to_end()
        logger.debug("Reading %d hit objects", count)

        objects = self.beatmap.hit_objects = []
        for _ in range(count):
            self.cursor.skip_blank_lines()
            objects.append(self._read_hit_object())

    def _read_int_field(self, name: str) -> int:
        self._set_context(Section.HIT_OBJECTS, name)
        value = self.cursor.read_int()
        self.cursor.skip_past(b",")
        return value

    def _read_hit_object(self) -> HitObject:
        cursor = self.cursor
        x = self._read_int_field("x")
        y = self._read_int_field("y")
        time = self._read_int_field("time")
        obj_type = self._read_int_field("type")
        # cursor now sits on hitSound, which is not kept

        params: Circle | Slider | Spinner
        if obj_type & SLIDER_BIT:
            self._set_context(Section.HIT_OBJECTS, "hitSound")
            cursor.skip_past(b",")
            params = self._read_slider()
        elif obj_type & SPINNER_BIT:
            self._set_context(Section.HIT_OBJECTS, "hitSound")
            cursor.skip_past(b",")
            self._set_context(Section.HIT_OBJECTS, "endTime")
            params = Spinner(end_time=cursor.read_int())
        else:
            params = Circle()

        cursor.skip_line()
        self._set_context(Section.HIT_OBJECTS)
        return HitObject(x=x, y=y, time=time, type=obj_type, params=params)

    def _read_slider(self) -> Slider:
        cursor = self.cursor

        self._set_context(Section.HIT_OBJECTS, "curveType")
        letter = chr(cursor.peek())
        try:
            curve_type = CurveType(letter)
        except ValueError:
            raise cursor.error(f"unknown curve type {letter!r}") from None
        cursor.advance()

        self._set_context(Section.HIT_OBJECTS, "curvePoints")
        # One ':' per x:y pair before the terminating comma
        count = cursor.count_in_span(b":", b",")
        curve_points = [self._read_curve_point() for _ in range(count)]
        cursor.expect(b",")

        self._set_context(Section.HIT_OBJECTS, "slides")
        slides = cursor.read_int()
        cursor.skip_past(b",")

        self._set_context(Section.HIT_OBJECTS, "length")
        length = cursor.read_float()
        # edgeSounds, edgeSets and hitSample are not kept

        return Slider(curve_type=curve_type, curve_points=curve_points, slides=slides, length=length)

    def _read_curve_point(self) -> CurvePoint:
        cursor = self.cursor
        cursor.expect(b"|")
        x = cursor.read_int()
        cursor.expect(b":")
        y = cursor.read_int()
        return CurvePoint(x=x, y=y)


def parse_beatmap(data: bytes | bytearray | memoryview, out: Beatmap | None = None) -> Beatmap:
    """Parse a loaded .osu buffer.

    Args:
        data: The whole file contents.
        out: Optional record to fill. It is only written once the parse has
            succeeded, so a failed parse never leaves it half populated.

    Raises:
        FieldTooLongError: A bounded string field exceeds 255 bytes.
        MalformedBeatmapError: A delimiter, number or header is missing.
        BeatmapAllocationError: An entry list could not be allocated.
    """
    beatmap = Beatmap()
    try:
        with Cursor(bytes(data)) as cursor:
            _BeatmapScanner(cursor, beatmap).run()
    except MemoryError as exc:
        beatmap.release()
        raise BeatmapAllocationError("Ran out of memory while building beatmap lists") from exc
    except BaseException:
        beatmap.release()
        raise

    logger.debug(
        "Parsed beatmap %r: %d timing points, %d hit objects",
        beatmap.title,
        beatmap.timing_points_count,
        beatmap.hit_objects_count,
    )
    if out is None:
        return beatmap

    for field in dataclasses.fields(Beatmap):
        setattr(out, field.name, getattr(beatmap, field.name))
    return out
