"""Fast single-pass parser for .osu beatmap files."""

from fastosu.errors import (
    BeatmapAllocationError,
    BeatmapError,
    BeatmapReadError,
    FieldTooLongError,
    MalformedBeatmapError,
)
from fastosu.loader import load_beatmap
from fastosu.models import (
    Beatmap,
    Circle,
    Countdown,
    CurvePoint,
    CurveType,
    GameMode,
    HitObject,
    Slider,
    Spinner,
    TimingPoint,
)
from fastosu.parser import parse_beatmap

__all__ = [
    "Beatmap",
    "BeatmapAllocationError",
    "BeatmapError",
    "BeatmapReadError",
    "Circle",
    "Countdown",
    "CurvePoint",
    "CurveType",
    "FieldTooLongError",
    "GameMode",
    "HitObject",
    "MalformedBeatmapError",
    "Slider",
    "Spinner",
    "TimingPoint",
    "load_beatmap",
    "parse_beatmap",
]
