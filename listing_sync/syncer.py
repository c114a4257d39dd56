# =============================================================================
# OPENSEA LISTING SYNC
# Module: listing_sync/syncer.py
# Purpose: Loop driver - fetch pages, normalize, forward
# =============================================================================
#
# STATES:
#   START -> FETCHING -> PROCESSING_PAGE -> (FETCHING | DONE)
#
# PIPELINE (per page):
# 1. Fetch a page of orders (cursor pagination)
# 2. Normalize each order; skip orders without a token id
# 3. Forward each listing to the backend, one at a time
# 4. Pause between listings and between pages (politeness delays)
#
# A failed fetch or an empty page ends the run like normal exhaustion.
#
# =============================================================================

import logging
import time
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Optional, Set

from .client import OpenSeaClient, OrderPage
from .config import SyncConfig
from .forwarder import BackendForwarder
from .normalizer import ListingNormalizer

logger = logging.getLogger(__name__)


class StopReason(Enum):
    """Why the pagination loop ended."""
    EXHAUSTED = "exhausted"
    FETCH_FAILED = "fetch_failed"
    EMPTY_PAGE = "empty_page"
    MAX_PAGES = "max_pages"
    REPEATED_CURSOR = "repeated_cursor"


@dataclass
class SyncStats:
    """Statistics from a sync run."""
    total_scanned: int = 0
    total_sent: int = 0
    total_skipped: int = 0
    total_failed: int = 0
    pages_fetched: int = 0
    stop_reason: Optional[StopReason] = None
    run_duration_seconds: float = 0.0
    dry_run: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["stop_reason"] = self.stop_reason.value if self.stop_reason else None
        return data


class ListingSyncer:
    """
    Drives one sync run.

    Coordinates:
    - OpenSeaClient for pages
    - ListingNormalizer for canonical listings
    - BackendForwarder for delivery
    """

    def __init__(
        self,
        config: SyncConfig,
        client: Optional[OpenSeaClient] = None,
        forwarder: Optional[BackendForwarder] = None,
        normalizer: Optional[ListingNormalizer] = None,
        sleep: Callable[[float], None] = time.sleep,
        max_pages: Optional[int] = None,
    ):
        """
        Initialize the syncer.

        Args:
            config: Run configuration
            client: Page source (defaults to OpenSeaClient(config))
            forwarder: Listing sink (defaults to BackendForwarder(config))
            normalizer: Defaults to ListingNormalizer(config.marketplace_contract)
            sleep: Delay function (replaced in tests)
            max_pages: Stop after this many pages (None = no limit)
        """
        self.config = config
        self.client = client or OpenSeaClient(config)
        self.forwarder = forwarder or BackendForwarder(config)
        self.normalizer = normalizer or ListingNormalizer(config.marketplace_contract)
        self.sleep = sleep
        self.max_pages = max_pages

    def run(self, dry_run: bool = False) -> SyncStats:
        """
        Execute the full sync loop.

        Args:
            dry_run: If True, normalize and count but don't forward

        Returns:
            SyncStats with run statistics
        """
        start_time = datetime.now(timezone.utc)
        stats = SyncStats(dry_run=dry_run)

        logger.info("=" * 60)
        logger.info("OPENSEA LISTING SYNC - Starting run")
        logger.info(f"Collection: {self.config.collection_address} ({self.config.chain})")
        logger.info(f"Backend: {self.config.backend_url}")
        logger.info(f"Dry run: {dry_run}")
        logger.info("=" * 60)

        cursor: Optional[str] = None
        seen_cursors: Set[Optional[str]] = set()

        while True:
            logger.info(f"Fetching orders (cursor={cursor or 'null'})")
            seen_cursors.add(cursor)
            page = self.client.fetch_page(cursor)

            if page is None:
                logger.info("Fetch failed, stopping.")
                stats.stop_reason = StopReason.FETCH_FAILED
                break

            stats.pages_fetched += 1

            if page.is_empty:
                if cursor:
                    logger.warning(f"Empty page for cursor {cursor}, treating as end of data")
                else:
                    logger.info("No orders found.")
                stats.stop_reason = StopReason.EMPTY_PAGE
                break

            self._process_page(page, stats, dry_run)

            if not page.has_more:
                logger.info("No more pages.")
                stats.stop_reason = StopReason.EXHAUSTED
                break

            if self.max_pages is not None and stats.pages_fetched >= self.max_pages:
                logger.info(f"Reached page limit of {self.max_pages}.")
                stats.stop_reason = StopReason.MAX_PAGES
                break

            if page.next_cursor in seen_cursors:
                logger.warning(f"Received repeated cursor '{page.next_cursor}', stopping pagination")
                stats.stop_reason = StopReason.REPEATED_CURSOR
                break

            cursor = page.next_cursor
            self.sleep(self.config.page_delay_seconds)

        stats.run_duration_seconds = (datetime.now(timezone.utc) - start_time).total_seconds()

        logger.info("=" * 60)
        logger.info("SYNC COMPLETE")
        logger.info(f"Duration: {stats.run_duration_seconds:.1f}s")
        logger.info(f"Pages: {stats.pages_fetched} ({stats.stop_reason.value})")
        logger.info(f"Total orders scanned: {stats.total_scanned}")
        logger.info(f"Total orders sent: {stats.total_sent}")
        logger.info("=" * 60)

        return stats

    def _process_page(self, page: OrderPage, stats: SyncStats, dry_run: bool) -> None:
        """Normalize and forward every order of a page, in order."""
        for order in page.orders:
            listing = self.normalizer.normalize(order)
            if listing is None:
                stats.total_skipped += 1
                continue

            stats.total_scanned += 1

            if dry_run:
                logger.info(
                    f"[DRY RUN] token {listing.token_id} price={listing.price} "
                    f"seller={listing.seller_address}"
                )
                continue

            if self.forwarder.forward(listing):
                stats.total_sent += 1
            else:
                stats.total_failed += 1

            self.sleep(self.config.listing_delay_seconds)
