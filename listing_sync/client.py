# =============================================================================
# OPENSEA LISTING SYNC
# Module: listing_sync/client.py
# Purpose: HTTP client for the OpenSea v2 orders API (cursor pagination)
# =============================================================================
#
# DESIGN:
# - One request per page, no retries
# - Soft failure: bad status, transport error or malformed body => None
# - A body without an orders list => empty page (caller treats as exhausted)
#
# API REFERENCE:
# Base URL: https://api.opensea.io/api/v2
# Endpoint: GET /orders/{chain}/{order_type}
#   ?limit=&asset_contract_address=&cursor=
# Header:   X-API-KEY
# Body:     {"orders": [...], "next": "<cursor>" | null}
#
# =============================================================================

import logging
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional

import requests

from .config import SyncConfig
from .exceptions import UpstreamFetchError

logger = logging.getLogger(__name__)


@dataclass
class OrderPage:
    """One page of raw orders."""
    orders: List[Any] = field(default_factory=list)
    next_cursor: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.orders

    @property
    def has_more(self) -> bool:
        return bool(self.next_cursor)


class OpenSeaClient:
    """
    Pager over active listings of one collection.

    Features:
    - Cursor pagination
    - Configurable timeout
    - Clear error logging
    """

    USER_AGENT = "OpenSeaListingSync/1.0"
    # Max chars of an error body copied into logs
    ERROR_BODY_LIMIT = 500

    def __init__(
        self,
        config: SyncConfig,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the OpenSea client.

        Args:
            config: Run configuration (API key, collection, chain, page size)
            session: Optional requests session (injected in tests)
        """
        self.config = config
        self.session = session or requests.Session()

    @property
    def orders_url(self) -> str:
        return (
            f"{self.config.opensea_base_url}/orders/"
            f"{self.config.chain}/{self.config.order_type}"
        )

    def fetch_page(self, cursor: Optional[str] = None) -> Optional[OrderPage]:
        """
        Fetch one page of listings.

        Args:
            cursor: Continuation cursor from the previous page (None = first)

        Returns:
            OrderPage, or None if the fetch failed
        """
        try:
            data = self._request(cursor)
        except UpstreamFetchError as e:
            logger.warning(f"OpenSea error: {e}")
            return None
        except requests.exceptions.Timeout:
            logger.warning(f"OpenSea request timed out after {self.config.request_timeout_seconds}s")
            return None
        except requests.exceptions.RequestException as e:
            logger.warning(f"OpenSea request failed: {e}")
            return None

        return self._parse_page(data)

    def _request(self, cursor: Optional[str]) -> Dict[str, Any]:
        """
        Make the GET request and decode the body.

        Raises:
            UpstreamFetchError: Non-2xx status or a body that is not a JSON object
            requests.exceptions.RequestException: Transport failure
        """
        params = {
            "limit": self.config.page_size,
            "asset_contract_address": self.config.collection_address,
        }
        if cursor:
            params["cursor"] = cursor

        logger.debug(f"GET {self.orders_url} cursor={cursor}")

        response = self.session.get(
            self.orders_url,
            params=params,
            headers={
                "Accept": "application/json",
                "User-Agent": self.USER_AGENT,
                "X-API-KEY": self.config.api_key,
            },
            timeout=self.config.request_timeout_seconds,
        )

        if not 200 <= response.status_code < 300:
            raise UpstreamFetchError(
                self._body_text(response) or "request rejected",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamFetchError(f"Invalid JSON body: {e}", status_code=response.status_code)

        if not isinstance(data, dict):
            raise UpstreamFetchError(
                f"Unexpected response type: {type(data).__name__}",
                status_code=response.status_code,
            )

        return data

    def _parse_page(self, data: Dict[str, Any]) -> OrderPage:
        """Build an OrderPage; missing or malformed orders => empty page.

        Entries are passed through as-is, so a page holding only
        unusable entries is not empty: the normalizer skips them and
        pagination continues.
        """
        orders = data.get("orders")
        if not isinstance(orders, list):
            logger.warning("OpenSea response has no orders list")
            orders = []

        raw_cursor = data.get("next") or data.get("cursor")
        next_cursor = str(raw_cursor) if raw_cursor else None

        logger.info(f"Fetched {len(orders)} orders (next cursor: {'yes' if next_cursor else 'no'})")
        return OrderPage(orders=list(orders), next_cursor=next_cursor)

    def _body_text(self, response: requests.Response) -> str:
        return (response.text or "")[: self.ERROR_BODY_LIMIT]
