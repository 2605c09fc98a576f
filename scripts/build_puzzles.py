#!/usr/bin/env python3
"""
build the daily puzzle schedule from the curated dictionary.

usage:
    python scripts/build_puzzles.py
    python scripts/build_puzzles.py --start=2026-02-10 --count=30

generates:
    - data/puzzles-v1.json (left alone if nothing but the timestamp would change)
"""

import argparse
import sys
from pathlib import Path

# add parent dir to path so we can import beebuilder
sys.path.insert(0, str(Path(__file__).parent.parent))

from beebuilder.config import Config
from beebuilder.errors import ConfigurationError
from beebuilder.pipeline import build_puzzles
from beebuilder.schedule import parse_iso_date, today_in


def positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got: {value}")
    if n < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got: {value}")
    return n


def iso_date(value: str):
    try:
        return parse_iso_date(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def main(argv: list[str] | None = None) -> int:
    config = Config()
    parser = argparse.ArgumentParser(description="build the daily puzzle schedule")
    parser.add_argument(
        "--start",
        type=iso_date,
        default=None,
        help=f"date of the first puzzle YYYY-MM-DD (default: today in {config.day_boundary_tz})"
    )
    parser.add_argument(
        "--count",
        type=positive_int,
        default=config.max_puzzles,
        help=f"number of puzzles to publish (default: {config.max_puzzles})"
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=Path("."),
        help="project root holding data/ (default: current directory)"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="only print the summary line"
    )
    args = parser.parse_args(argv)

    config.root = args.root
    start = args.start or today_in(config.day_boundary_tz)

    try:
        build = build_puzzles(start, args.count, config, verbose=not args.quiet)
    except (ConfigurationError, OSError, ValueError, KeyError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if not build.written:
        print("puzzle build skipped write (no content changes).")
    print(
        f"puzzle build complete. candidates={build.candidates} "
        f"published={len(build.schedule.puzzles)}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
