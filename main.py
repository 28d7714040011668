# main.py

"""Entry point for the temp_snapshots job (run once, then exit)."""

import argparse
import asyncio
import logging
import sys

from src.config.logging_config import setup_logging
from src.config.settings import Settings

logger = logging.getLogger("temp_snapshots.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="temp_snapshots",
        description=(
            "Scrape a city temperature table and store it as a dated "
            "sheet in a bounded Google Sheets history."
        ),
        epilog=f"History capacity: {Settings.MAX_SNAPSHOTS} sheets",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Source page URL (default: $CRAWL_URL).",
    )
    parser.add_argument(
        "--spreadsheet-id",
        default=None,
        dest="spreadsheet_id",
        help="Target spreadsheet (default: $GOOGLE_SPREADSHEET_ID).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=False,
        dest="dry_run",
        help="Extract and transform only; print the table, write nothing.",
    )
    parser.add_argument(
        "--health",
        action="store_true",
        default=False,
        help="Check that the source page and the spreadsheet respond.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Echo INFO log records to stderr.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Route to a snapshot run, a dry run, or a health check."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = setup_logging(verbose=args.verbose)
    logger.info("temp_snapshots starting, log file: %s", log_file)

    from src.cli.runner import (
        EXIT_CONFIG,
        check_config,
        run_dry,
        run_health_check,
        run_snapshot,
    )

    overrides = {
        "CRAWL_URL": args.url,
        "GOOGLE_SPREADSHEET_ID": args.spreadsheet_id,
    }
    needed = ["CRAWL_URL"]
    if not args.dry_run:
        needed.extend(Settings.REQUIRED_ENV)
    if not check_config(needed, overrides):
        sys.exit(EXIT_CONFIG)

    url = args.url or Settings.CRAWL_URL
    try:
        if args.dry_run:
            exit_code = asyncio.run(run_dry(url))
        elif args.health:
            exit_code = asyncio.run(
                run_health_check(url, args.spreadsheet_id)
            )
        else:
            exit_code = asyncio.run(run_snapshot(url, args.spreadsheet_id))
    except Exception:
        logger.critical("Fatal error during run", exc_info=True)
        raise
    finally:
        logger.info("temp_snapshots shutting down")
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
