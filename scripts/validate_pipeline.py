#!/usr/bin/env python3
"""
check the dictionary and puzzle schedule artifacts.

usage:
    python scripts/validate_pipeline.py

exits 1 and prints the first failed check if anything is off.
"""

import argparse
import sys
from pathlib import Path

# add parent dir to path so we can import beebuilder
sys.path.insert(0, str(Path(__file__).parent.parent))

from beebuilder.config import Config
from beebuilder.errors import ConfigurationError, PipelineValidationError
from beebuilder.pipeline import validate_artifacts


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="validate pipeline artifacts")
    parser.add_argument(
        "--root",
        type=Path,
        default=Path("."),
        help="project root holding data/ (default: current directory)"
    )
    args = parser.parse_args(argv)

    try:
        summary = validate_artifacts(Config(root=args.root))
    except (PipelineValidationError, ConfigurationError, OSError, ValueError) as e:
        print(f"pipeline validation failed: {e}", file=sys.stderr)
        return 1

    print(
        f"pipeline validation passed: dictionaryWords={summary.dictionary_words} "
        f"puzzles={summary.puzzles} minLength={summary.min_length}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
