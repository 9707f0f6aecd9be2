"""Command-line entry point."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import DEFAULT_TAGS, AnalysisConfig
from .exceptions import DedupStatsError
from .models import ChunkBounds
from .pipeline import Pipeline
from .stats.aggregator import DEFAULT_LAYER_NAME
from .stats.report import format_report

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="oci-dedup-stats",
        description=(
            "Compare deduplication of OCI images stored as plain layers "
            "and as puzzlefs content-defined chunks"
        ),
    )
    parser.add_argument("repo", nargs="?", help="Registry to fetch images from")
    parser.add_argument("base_dir", nargs="?", help="Repository path in the registry")
    parser.add_argument("--stats", action="store_true", help="print stats")
    parser.add_argument("--rebuild", action="store_true", help="rebuild everything")
    parser.add_argument(
        "--puzzle", action="store_true", help="rebuild only the puzzlefs images"
    )
    parser.add_argument("--min", type=int, help="fastcdc min chunk size")
    parser.add_argument("--avg", type=int, help="fastcdc average chunk size")
    parser.add_argument("--max", type=int, help="fastcdc max chunk size")
    parser.add_argument(
        "--tag",
        dest="tags",
        action="append",
        help=f"snapshot tag to analyze, may be repeated (default: {' '.join(DEFAULT_TAGS)})",
    )
    parser.add_argument(
        "--work-dir",
        type=Path,
        default=Path("."),
        help="directory holding one subdirectory per tag",
    )
    parser.add_argument(
        "--layer-name",
        default=DEFAULT_LAYER_NAME,
        help="reference name of the puzzlefs rootfs in the chunked index",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def run(args: argparse.Namespace) -> None:
    config = AnalysisConfig(
        tags=args.tags or list(DEFAULT_TAGS),
        work_dir=args.work_dir,
        layer_name=args.layer_name,
        repo=args.repo,
        base_dir=args.base_dir,
    )
    bounds = ChunkBounds(min=args.min, avg=args.avg, max=args.max)
    pipeline = Pipeline(config)

    if args.rebuild:
        pipeline.rebuild(bounds)

    if args.puzzle:
        pipeline.rebuild_chunked(bounds)

    if args.stats:
        for line in format_report(pipeline.report()):
            print(line)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.rebuild and (not args.repo or not args.base_dir):
        parser.error("--rebuild requires REPO and BASEDIR")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        run(args)
    except DedupStatsError as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
