"""Beatmap data model populated by the scanner."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum

from fastosu.config import NEW_COMBO_BIT


class Countdown(IntEnum):
    NONE = 0
    NORMAL = 1
    HALF = 2
    DOUBLE = 3


class GameMode(IntEnum):
    STANDARD = 0
    TAIKO = 1
    FRUITS = 2
    MANIA = 3


class CurveType(Enum):
    BEZIER = "B"
    CATMULL = "C"
    LINEAR = "L"
    PERFECT = "P"


@dataclass
class TimingPoint:
    time: int  # ms
    beat_length: float  # ms per beat, negative for inherited points
    meter: int
    uninherited: bool

    @property
    def bpm(self) -> float | None:
        """Tempo of an uninherited point, None for inherited ones."""
        if not self.uninherited or self.beat_length <= 0:
            return None
        return 60000.0 / self.beat_length

    @property
    def slider_velocity(self) -> float:
        """Slider velocity multiplier (inherited points encode it as -100/x)."""
        if self.uninherited or self.beat_length >= 0:
            return 1.0
        return -100.0 / self.beat_length


@dataclass
class CurvePoint:
    x: int
    y: int


@dataclass(frozen=True)
class Circle:
    """Hit circle; carries no extra payload."""


@dataclass
class Slider:
    curve_type: CurveType
    curve_points: list[CurvePoint] = field(default_factory=list)
    slides: int = 1
    length: float = 0.0

    @property
    def curve_points_count(self) -> int:
        return len(self.curve_points)


@dataclass
class Spinner:
    end_time: int  # ms


@dataclass
class HitObject:
    """A single playable event in a beatmap."""

    x: int
    y: int
    time: int  # ms
    type: int  # bitmask, see fastosu.config
    params: Circle | Slider | Spinner = field(default_factory=Circle)

    @property
    def is_circle(self) -> bool:
        return isinstance(self.params, Circle)

    @property
    def is_slider(self) -> bool:
        return isinstance(self.params, Slider)

    @property
    def is_spinner(self) -> bool:
        return isinstance(self.params, Spinner)

    @property
    def new_combo(self) -> bool:
        return bool(self.type & NEW_COMBO_BIT)


@dataclass
class Beatmap:
    """Parsed representation of a .osu file.

    Created zero-valued, filled by one parse and torn down with release().
    """

    format_version: int | None = None

    # [General]
    audio_file_name: str = ""
    audio_file_name_size: int = 0
    audio_lead_in: int = 0
    countdown: int = 0  # see Countdown
    stack_leniency: float = 0.0
    mode: int = 0  # see GameMode
    countdown_offset: int = 0

    # [Metadata]
    title: str = ""
    title_size: int = 0
    artist: str = ""
    artist_size: int = 0
    creator: str = ""
    creator_size: int = 0
    version: str = ""  # difficulty name
    version_size: int = 0
    beatmap_id: int = 0
    beatmap_set_id: int = 0

    # [Difficulty]
    hp_drain_rate: float = 0.0
    circle_size: float = 0.0
    overall_difficulty: float = 0.0
    approach_rate: float = 0.0
    slider_multiplier: float = 0.0
    slider_tick_rate: float = 0.0

    timing_points: list[TimingPoint] = field(default_factory=list)
    hit_objects: list[HitObject] = field(default_factory=list)

    @property
    def timing_points_count(self) -> int:
        return len(self.timing_points)

    @property
    def hit_objects_count(self) -> int:
        return len(self.hit_objects)

    def object_counts(self) -> dict[str, int]:
        """Number of circles, sliders and spinners."""
        counts = {"circles": 0, "sliders": 0, "spinners": 0}
        for obj in self.hit_objects:
            if obj.is_slider:
                counts["sliders"] += 1
            elif obj.is_spinner:
                counts["spinners"] += 1
            else:
                counts["circles"] += 1
        return counts

    def release(self) -> None:
        """Drop every owned list. Safe to call on a partial or released record."""
        for obj in self.hit_objects:
            if isinstance(obj.params, Slider):
                obj.params.curve_points.clear()
        self.hit_objects.clear()
        self.timing_points.clear()
