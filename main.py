#!/usr/bin/env python3
"""
Hot Feed - rank trending community content from the command line.

Command-line entry point for operators:
  - Fetch candidates from the community API (threads, marketplace, brokers)
  - Rank them by engagement inside the recency window
  - Print the ranked feed (or its JSON wire form)

Usage:
    python main.py                      # Top 50 across all content types
    python main.py --limit 5            # Sidebar-sized feed
    python main.py --types thread ea    # Only threads and EAs
    python main.py --highlights solved  # This week's solved threads
    python main.py --json               # Print the GET /api/hot payload

Examples:
    # Quick look at what the sidebar widget would show
    python main.py -l 5 -v

    # Feed with exponential decay enabled
    python main.py --half-life-hours 48
"""

import argparse
import json
import sys
from pathlib import Path

from loguru import logger

from hotfeed import __version__
from hotfeed.config import (
    HOT_DEFAULT_LIMIT,
    HOT_WINDOW_DAYS,
    LOG_DIR,
    print_config_summary,
    validate_config,
)
from hotfeed.feed_service import FeedConfig, FeedResult, HotFeedService
from hotfeed.models.content_item import ContentType
from hotfeed.ranking.aggregator import DEFAULT_HIGHLIGHTS_LIMIT, HIGHLIGHT_TABS
from hotfeed.ranking.assembler import assemble_feed
from hotfeed.utils.logger import setup_logging


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="hotfeed",
        description="Rank trending threads, marketplace content and brokers.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                           Top items across all content types
  %(prog)s --limit 5                 Only the top 5
  %(prog)s --types thread,broker     Only threads and brokers
  %(prog)s --window-days 3           Rank the last 3 days only
  %(prog)s --highlights trending     This week's trending threads
  %(prog)s --json                    Print the JSON feed
        """,
    )

    # Ranking options
    parser.add_argument(
        "--limit", "-l",
        type=int,
        default=None,
        metavar="N",
        help=f"Maximum items in the feed (default: {HOT_DEFAULT_LIMIT})",
    )

    parser.add_argument(
        "--types", "-t",
        nargs="+",
        metavar="TYPE",
        help=f"Content types to rank: {', '.join(t.value for t in ContentType)} (default: all)",
    )

    parser.add_argument(
        "--window-days", "-w",
        type=float,
        default=None,
        metavar="DAYS",
        help=f"Recency window in days (default: {HOT_WINDOW_DAYS:g})",
    )

    parser.add_argument(
        "--half-life-hours",
        type=float,
        default=None,
        metavar="HOURS",
        help="Enable exponential decay with this half-life (default: off)",
    )

    parser.add_argument(
        "--highlights",
        choices=HIGHLIGHT_TABS,
        metavar="TAB",
        help=f"Show thread highlights instead: {', '.join(HIGHLIGHT_TABS)}",
    )

    # Output options
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the feed as JSON (same shape as GET /api/hot)",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug logging",
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only show errors and the feed",
    )

    # Info options
    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Show current configuration and exit",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def show_config() -> None:
    """Display current configuration."""
    print("=" * 60)
    print("Hot Feed Configuration")
    print("=" * 60)
    print_config_summary()

    errors = validate_config()
    if errors:
        print("\nConfiguration warnings:")
        for error in errors:
            print(f"  ⚠️  {error}")
    else:
        print("\n✓ Configuration valid")
    print("=" * 60)


def print_result(result: FeedResult, as_json: bool = False) -> None:
    """Print the feed as a summary or as JSON."""
    if as_json:
        print(json.dumps(assemble_feed(result.feed), indent=2, default=str))
    else:
        print(result.to_summary())


def main(argv: list = None) -> int:
    """
    Main entry point.

    Args:
        argv: Command-line arguments (default: sys.argv[1:]).

    Returns:
        Exit code (0 = success, 1 = every source failed, 2 = bad configuration).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.show_config:
        show_config()
        return 0

    log_level = "DEBUG" if args.verbose else ("ERROR" if args.quiet or args.json else "INFO")
    setup_logging(log_dir=Path(LOG_DIR) if LOG_DIR else None, log_level=log_level, app_name="cli")

    errors = validate_config()
    if errors:
        for error in errors:
            print(f"❌ {error}", file=sys.stderr)
        return 2

    try:
        config = FeedConfig.from_args(args)
    except ValueError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2

    if args.limit is not None and args.limit < 0:
        print(f"❌ --limit cannot be negative, got {args.limit}", file=sys.stderr)
        return 2

    try:
        service = HotFeedService(config=config)
        if args.highlights:
            result = service.get_highlights(tab=args.highlights, limit=args.limit if args.limit is not None else DEFAULT_HIGHLIGHTS_LIMIT)
        else:
            result = service.get_hot_feed(limit=args.limit)

        print_result(result, as_json=args.json)

        if result.all_sources_failed:
            return 1
        return 0

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 130
    except Exception as e:
        logger.exception("Feed computation failed")
        print(f"\n❌ Feed error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
