"""
Main CLI entry point for the game reviews package.
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from ..catalog import build_catalog
from ..config import DATABASE_PATH, DEFAULT_STYLESHEET, MARKDOWN_PER_CATEGORY_LIMIT, RECENT_LIMIT
from ..database import ReviewsDatabase, create_database
from ..error_handling import GameReviewsError
from ..igdb import IGDB, NoOpCache, SqliteCache
from ..logging_config import setup_logging
from ..markdown import render_markdown
from ..renderer import ReviewRenderer, load_stylesheet

logger = logging.getLogger(__name__)


def write_output(content: str, output: Optional[Path]) -> None:
    """Write to ``output``, or to stdout when no path is given."""
    if output is None:
        sys.stdout.write(content)
        sys.stdout.flush()
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding="utf-8")
    logger.info(f"Wrote {len(content)} characters to {output}")


def load_catalog(args: argparse.Namespace):
    db = ReviewsDatabase(args.db)
    cache = NoOpCache() if getattr(args, "no_cache", False) else SqliteCache(args.db)
    igdb = IGDB(cache)
    return build_catalog(db, igdb, recent_limit=getattr(args, "recent", RECENT_LIMIT))


def cmd_generate(args: argparse.Namespace) -> None:
    catalog = load_catalog(args)
    renderer = ReviewRenderer(stylesheet=load_stylesheet(args.stylesheet))
    write_output(renderer.render(catalog), args.output)
    logger.info(f"Generated reviews for {catalog.review_count} games")


def cmd_markdown(args: argparse.Namespace) -> None:
    catalog = load_catalog(args)
    write_output(render_markdown(catalog, per_category_limit=args.limit), args.output)


def cmd_init_db(args: argparse.Namespace) -> None:
    create_database(args.db)
    print(f"Database created successfully at {args.db}")


def cmd_stats(args: argparse.Namespace) -> None:
    stats = ReviewsDatabase(args.db).get_statistics()
    print("\n" + "=" * 60)
    print("REVIEW CATALOG")
    print("=" * 60)
    print(f"Categories: {stats.get('total_categories', 0)}")
    print(f"Reviews: {stats.get('total_reviews', 0)}")
    for title, count in stats.get('reviews_per_category', {}).items():
        print(f"  - {title}: {count}")
    print("=" * 60)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate the game reviews page")
    parser.add_argument("--db", type=Path, default=DATABASE_PATH, help="SQLite database path")
    parser.add_argument("--log-file", type=str, default=None, help="Custom log file name or absolute path")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Render the HTML page")
    generate.add_argument("--output", "-o", type=Path, default=None, help="Output file (default: stdout)")
    generate.add_argument("--stylesheet", type=Path, default=DEFAULT_STYLESHEET, help="CSS file to inline")
    generate.add_argument("--recent", type=int, default=RECENT_LIMIT, help="Number of last additions to list")
    generate.add_argument("--no-cache", action="store_true", help="Always query IGDB")
    generate.set_defaults(func=cmd_generate)

    markdown = subparsers.add_parser("markdown", help="Render the catalog as Markdown")
    markdown.add_argument("--output", "-o", type=Path, default=None, help="Output file (default: stdout)")
    markdown.add_argument("--limit", type=int, default=MARKDOWN_PER_CATEGORY_LIMIT,
                          help="Maximum reviews per category")
    markdown.add_argument("--no-cache", action="store_true", help="Always query IGDB")
    markdown.set_defaults(func=cmd_markdown)

    init_db = subparsers.add_parser("init-db", help="Create the database schema")
    init_db.set_defaults(func=cmd_init_db)

    stats = subparsers.add_parser("stats", help="Show catalog statistics")
    stats.set_defaults(func=cmd_stats)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    # Build a default per-run log filename when not provided
    if args.log_file:
        log_file = args.log_file
    else:
        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = f"run_{ts}_{args.command}.log"
    setup_logging(log_file, level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        args.func(args)
    except KeyboardInterrupt:
        print("\nProcess interrupted by user", file=sys.stderr)
        return 130
    except GameReviewsError as e:
        logger.error(f"{args.command} failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
