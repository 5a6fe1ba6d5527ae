"""Entry point for `python -m fastosu` or the `fastosu` console script."""

from __future__ import annotations

import argparse
import logging
import sys
from enum import IntEnum

from fastosu.errors import (
    BeatmapAllocationError,
    BeatmapError,
    BeatmapReadError,
    FieldTooLongError,
)
from fastosu.loader import load_beatmap
from fastosu.models import Beatmap, Countdown, GameMode

# Exit status per failure kind
EXIT_READ_ERROR = 2
EXIT_FIELD_TOO_LONG = 3
EXIT_MALFORMED = 4
EXIT_ALLOCATION = 5


def _exit_code(exc: BeatmapError) -> int:
    if isinstance(exc, BeatmapReadError):
        return EXIT_READ_ERROR
    elif isinstance(exc, FieldTooLongError):
        return EXIT_FIELD_TOO_LONG
    elif isinstance(exc, BeatmapAllocationError):
        return EXIT_ALLOCATION
    else:
        return EXIT_MALFORMED


def _enum_name(enum_cls: type[IntEnum], value: int) -> str:
    try:
        return enum_cls(value).name.lower()
    except ValueError:
        return str(value)


def format_summary(beatmap: Beatmap) -> str:
    mode = _enum_name(GameMode, beatmap.mode)
    countdown = _enum_name(Countdown, beatmap.countdown)
    counts = beatmap.object_counts()
    return (
        f"{beatmap.artist} - {beatmap.title} [{beatmap.version}] by {beatmap.creator}\n"
        f"  mode: {mode}  countdown: {countdown}  audio: {beatmap.audio_file_name}\n"
        f"  timing points: {beatmap.timing_points_count}\n"
        f"  hit objects: {beatmap.hit_objects_count} "
        f"({counts['circles']} circles, {counts['sliders']} sliders, {counts['spinners']} spinners)"
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="fastosu — summarize .osu beatmap files")
    parser.add_argument("paths", nargs="+", help=".osu files to parse")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log scanner progress")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    status = 0
    for path in args.paths:
        try:
            beatmap = load_beatmap(path)
        except BeatmapError as exc:
            print(f"{path}: {exc}", file=sys.stderr)
            status = status or _exit_code(exc)
            continue
        print(format_summary(beatmap))
        beatmap.release()
    return status


if __name__ == "__main__":
    sys.exit(main())
