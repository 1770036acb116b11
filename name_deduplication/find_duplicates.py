"""
Command-line entry point: read a list of company names, print duplicate groups.

    $ find-duplicates companies.txt
    $ python -m name_deduplication companies.txt
    Duplicate groups:

    Group 1:
    - Acme Inc
    - Acme
    Total groups found: 1

The core (normalizer + clusterer) never touches files or stdout; this module
is the only place that does.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError

from .clusterer import Group, NameClusterer, build_normalized_map
from .normalizer import NameNormalizer
from .settings import DEFAULT_MAX_LENGTH_GAP, DEFAULT_THRESHOLD, DedupSettings

logger = logging.getLogger(__name__)

DEFAULT_INPUT = "companies.txt"
LOG_FORMAT = "%(levelname).1s | %(name)s | %(message)s"


def read_names(path: Path) -> list[str]:
    """One name per line, surrounding whitespace stripped.  Blank lines are kept."""
    with path.open(encoding="utf-8") as fh:
        return [line.strip() for line in fh]


def find_duplicates(names: Sequence[str], settings: Optional[DedupSettings] = None) -> list[Group]:
    """Normalise every distinct name, then cluster the full list."""
    settings = settings or DedupSettings()
    normalizer = NameNormalizer.from_settings(settings)
    clusterer = NameClusterer(settings)
    normalized = build_normalized_map(names, normalizer)
    return clusterer.cluster(names, normalized)


def render_groups(groups: Sequence[Group]) -> str:
    """Empty string when there is nothing to report."""
    if not groups:
        return ""

    lines = ["Duplicate groups:", ""]
    for index, group in enumerate(groups, start=1):
        lines.append(f"Group {index}:")
        lines.extend(f"- {name}" for name in group)
    lines.append(f"Total groups found: {len(groups)}")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="find-duplicates",
        description="Find probable duplicate company names in a text file.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=DEFAULT_INPUT,
        type=Path,
        help=f"file with one company name per line (default: {DEFAULT_INPUT})",
    )
    parser.add_argument(
        "--threshold",
        type=int,
        default=DEFAULT_THRESHOLD,
        help=f"max edit distance between grouped names (default: {DEFAULT_THRESHOLD})",
    )
    parser.add_argument(
        "--max-length-gap",
        type=int,
        default=DEFAULT_MAX_LENGTH_GAP,
        help=f"length difference that stops a scan (default: {DEFAULT_MAX_LENGTH_GAP})",
    )
    parser.add_argument(
        "--complete",
        action="store_true",
        help="compare every pair instead of the greedy forward scan",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
    )

    try:
        settings = DedupSettings(
            threshold=args.threshold,
            max_length_gap=args.max_length_gap,
            complete=args.complete,
        )
    except ValidationError as exc:
        parser.error(
            "; ".join(f"{'.'.join(map(str, e['loc']))}: {e['msg']}" for e in exc.errors())
        )

    try:
        names = read_names(args.path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Cannot read %s: %s", args.path, exc)
        return 1

    output = render_groups(find_duplicates(names, settings))
    if output:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
