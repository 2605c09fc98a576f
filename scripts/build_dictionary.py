#!/usr/bin/env python3
"""
build the curated dictionary.

usage:
    python scripts/build_dictionary.py
    python scripts/build_dictionary.py --root path/to/project

reads:
    data/raw/policy.json, data/raw/allowlist.txt, data/raw/blocklist.txt,
    plus the source lists and frequency table named by the policy

generates:
    - data/dictionary-v1.json
    - data/dictionary-v1-meta.json
"""

import argparse
import sys
from pathlib import Path

# add parent dir to path so we can import beebuilder
sys.path.insert(0, str(Path(__file__).parent.parent))

from beebuilder.config import Config
from beebuilder.errors import ConfigurationError
from beebuilder.pipeline import build_dictionary


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="build the curated dictionary")
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

    config = Config(root=args.root)
    try:
        build = build_dictionary(config, verbose=not args.quiet)
    except (ConfigurationError, OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if not build.written["dictionary"]:
        print("dictionary unchanged, skipped write.")
    print(f"dictionary build complete. words={len(build.result.dictionary.words)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
