# =============================================================================
# OPENSEA LISTING SYNC
# Module: listing_sync/__main__.py
# Purpose: CLI entry point for running a sync
# =============================================================================
#
# USAGE:
# python -m listing_sync --max-pages 10
#
# OPTIONS:
# --settings   YAML settings file (default: config/sync.yaml)
# --env-file   .env file to load before reading the environment
# --max-pages  Stop after this many pages (default: no limit)
# --dry-run    Normalize only, don't post to the backend
# --log-file   Also write logs to logs/sync/
# --verbose    Enable debug logging
#
# EXIT CODES:
# 0 run finished, 1 missing configuration or fatal error, 130 interrupted
#
# =============================================================================

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from shared.logging_config import SYNC_LOGGER_NAME, setup_logging

from .config import SyncConfig, load_env_file, load_settings
from .exceptions import ConfigurationError
from .syncer import ListingSyncer, SyncStats


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="python -m listing_sync",
        description="OpenSea Listing Sync - Forward active collection listings to the backend",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m listing_sync
  python -m listing_sync --max-pages 2 --dry-run
  python -m listing_sync --env-file ./prod.env --log-file

Required environment:
  OPENSEA_API_KEY, NFT_CONTRACT_ADDRESS
Optional environment:
  PROXY_CONTRACT_ADDRESS, BACKEND_URL
        """,
    )

    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="YAML settings file (default: config/sync.yaml)",
    )

    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help=".env file to load (default: .env in project root)",
    )

    parser.add_argument(
        "--max-pages",
        type=int,
        default=None,
        help="Stop after this many pages (default: no limit)",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Normalize listings but don't post them to the backend",
    )

    parser.add_argument(
        "--log-file",
        action="store_true",
        help="Also write logs to logs/sync/",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    return parser.parse_args(argv)


def print_summary(stats: SyncStats) -> None:
    """Print the final counters."""
    print("\n" + "=" * 60)
    print("SYNC SUMMARY")
    print("=" * 60)
    print(f"Total orders scanned: {stats.total_scanned}")
    print(f"Total orders sent:    {stats.total_sent}")
    print(f"Skipped (no token):   {stats.total_skipped}")
    print(f"Rejected by backend:  {stats.total_failed}")
    print(f"Pages fetched:        {stats.pages_fetched}")
    print(f"Stop reason:          {stats.stop_reason.value if stats.stop_reason else 'n/a'}")
    print(f"Duration:             {stats.run_duration_seconds:.1f}s")
    if stats.dry_run:
        print()
        print("[DRY RUN - Nothing sent to the backend]")
    print("=" * 60)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        file_output=args.log_file,
    )
    logger = logging.getLogger(f"{SYNC_LOGGER_NAME}.cli")

    if args.max_pages is not None and args.max_pages <= 0:
        logger.error(f"--max-pages must be positive: {args.max_pages}")
        return 1

    try:
        load_env_file(args.env_file)
        config = SyncConfig.from_env(settings=load_settings(args.settings))
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    logger.debug(f"Config: {config.redacted()}")

    try:
        syncer = ListingSyncer(config, max_pages=args.max_pages)
        stats = syncer.run(dry_run=args.dry_run)
        print_summary(stats)
        return 0

    except KeyboardInterrupt:
        logger.info("Sync interrupted by user")
        return 130

    except Exception as e:
        logger.exception(f"Sync failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
