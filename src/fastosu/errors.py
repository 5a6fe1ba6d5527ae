"""Errors raised while loading or scanning a beatmap."""

from __future__ import annotations


class BeatmapError(Exception):
    """Base class for every beatmap loading failure."""


class BeatmapReadError(BeatmapError):
    """Raised when the beatmap file cannot be opened or read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to read {path}: {reason}")
        self.path = path
        self.reason = reason


class BeatmapAllocationError(BeatmapError):
    """Raised when an entry list cannot be allocated."""


class FieldTooLongError(BeatmapError):
    """Raised when a bounded string field exceeds its capacity."""

    def __init__(self, field: str, size: int, limit: int) -> None:
        super().__init__(f"{field} is {size} bytes long (limit {limit})")
        self.field = field
        self.size = size
        self.limit = limit


class MalformedBeatmapError(BeatmapError):
    """Raised when a delimiter, number or header is missing where required."""

    def __init__(
        self,
        message: str,
        offset: int,
        section: str | None = None,
        field: str | None = None,
    ) -> None:
        where = section or "preamble"
        if field:
            where = f"{where}.{field}"
        super().__init__(f"{message} at byte {offset} ({where})")
        self.offset = offset
        self.section = section
        self.field = field
