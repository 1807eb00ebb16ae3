"""Command-line interface for donorbrief."""

import argparse
import datetime
import logging
import sys
from pathlib import Path
from typing import Optional

from .config import BriefConfig
from .pipeline import compute_brief
from .preprocessing import load_gift_csv
from .report import brief_to_json, render_text

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        handlers=[logging.StreamHandler()]
    )


def parse_date(value: str) -> datetime.date:
    try:
        return datetime.date.fromisoformat(value.strip())
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="donorbrief",
        description="Summarise a donation export into a donor brief.",
    )
    parser.add_argument("-i", "--input", type=Path, required=True, help="Path to donations CSV")
    parser.add_argument(
        "-l", "--lapsed-days", type=int, default=365,
        help="Days since last gift to mark lapsed (default 365)"
    )
    parser.add_argument(
        "--recent-days", type=int, default=90,
        help="Momentum window length in days (default 90)"
    )
    parser.add_argument(
        "--major-threshold", type=float, default=10_000.0,
        help="Lifetime giving for the major tier (default 10000)"
    )
    parser.add_argument(
        "--mid-threshold", type=float, default=1_000.0,
        help="Lifetime giving for the mid tier (default 1000)"
    )
    parser.add_argument(
        "--ack-days", type=int, default=7,
        help="Days allowed to acknowledge a gift (default 7)"
    )
    parser.add_argument("-t", "--top", type=int, default=5, help="Top donors to display (default 5)")
    parser.add_argument(
        "--queue-size", type=int, default=10,
        help="Stewardship queue length (default 10)"
    )
    parser.add_argument("-j", "--json", type=Path, default=None, help="Write JSON report to PATH")
    parser.add_argument(
        "-a", "--as-of", type=parse_date, default=None,
        help="Use this date for window, lapsed and overdue checks (YYYY-MM-DD)"
    )
    parser.add_argument(
        "--n-jobs", type=int, default=None,
        help="Worker threads for metric calculation (default sequential)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    return parser


def main(argv: Optional[list] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if not args.input.exists():
        print(f"Input not found: {args.input}", file=sys.stderr)
        return 1

    try:
        config = BriefConfig(
            as_of=args.as_of or datetime.date.today(),
            lapsed_days=args.lapsed_days,
            recent_days=args.recent_days,
            major_threshold=args.major_threshold,
            mid_threshold=args.mid_threshold,
            ack_days=args.ack_days,
            top_n=args.top,
            queue_size=args.queue_size,
        )
        records, row_warnings = load_gift_csv(args.input)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 1

    if not records:
        print("No valid gift rows found after validation", file=sys.stderr)
        return 1

    brief = compute_brief(records, config, row_warnings=row_warnings, n_jobs=args.n_jobs)
    sys.stdout.write(render_text(brief, input_path=str(args.input)))

    if args.json:
        args.json.write_text(brief_to_json(brief, input_path=str(args.input)), encoding="utf-8")
        logger.info("Wrote JSON report to %s", args.json)

    return 0


if __name__ == "__main__":
    sys.exit(main())
