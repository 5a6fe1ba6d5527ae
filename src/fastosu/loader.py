"""Load .osu files from disk into the Beatmap model."""

from __future__ import annotations

import logging
from pathlib import Path

from fastosu.errors import BeatmapAllocationError, BeatmapReadError
from fastosu.models import Beatmap
from fastosu.parser import parse_beatmap

logger = logging.getLogger(__name__)


def read_beatmap_bytes(file_path: str | Path) -> bytes:
    """Read the whole file, closing it on every exit path.

    Raises:
        BeatmapReadError: If the file cannot be opened or read.
        BeatmapAllocationError: If the contents don't fit in memory.
    """
    path = Path(file_path)
    try:
        with path.open("rb") as handle:
            return handle.read()
    except MemoryError as exc:
        raise BeatmapAllocationError(f"{path.name} is too large to load") from exc
    except OSError as exc:
        raise BeatmapReadError(str(path), exc.strerror or str(exc)) from exc


def load_beatmap(file_path: str | Path, out: Beatmap | None = None) -> Beatmap:
    """Load a .osu file and return the parsed Beatmap.

    Args:
        file_path: Path to a .osu file.
        out: Optional record to fill in place.

    Raises:
        BeatmapReadError: If the file cannot be read.
        FieldTooLongError: If a bounded string field overflows.
        MalformedBeatmapError: If the contents are not a valid beatmap.
    """
    path = Path(file_path)
    beatmap = parse_beatmap(read_beatmap_bytes(path), out)

    logger.info(
        "Loaded %s: %d timing points, %d hit objects",
        path.name,
        beatmap.timing_points_count,
        beatmap.hit_objects_count,
    )
    return beatmap
