# =============================================================================
# OPENSEA LISTING SYNC
# Module: listing_sync/forwarder.py
# Purpose: Post canonical listings to the backend ingestion endpoint
# =============================================================================
#
# CONTRACT:
# forward(listing) -> bool
#   True  only for a 2xx response whose JSON body has a truthy "success"
#   False for everything else (logged, never raised, never retried)
#
# =============================================================================

import logging
from typing import Any, Dict, Optional

import requests

from .config import SyncConfig
from .exceptions import BackendForwardError
from .normalizer import CanonicalListing

logger = logging.getLogger(__name__)


class BackendForwarder:
    """Sends one listing per request to POST {backend_url}/order."""

    ORDER_ENDPOINT = "/order"
    ERROR_BODY_LIMIT = 300

    def __init__(
        self,
        config: SyncConfig,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the forwarder.

        Args:
            config: Run configuration (backend URL, timeout)
            session: Optional requests session (injected in tests)
        """
        self.config = config
        self.session = session or requests.Session()

    @property
    def order_url(self) -> str:
        return f"{self.config.backend_url}{self.ORDER_ENDPOINT}"

    def forward(self, listing: CanonicalListing) -> bool:
        """
        Forward a listing to the backend.

        Args:
            listing: Normalized listing

        Returns:
            True if the backend accepted it
        """
        try:
            self._post(listing.to_dict())
        except BackendForwardError as e:
            logger.warning(f"Backend rejected token {listing.token_id}: {e}")
            return False
        except requests.exceptions.RequestException as e:
            logger.warning(f"Backend request failed for token {listing.token_id}: {e}")
            return False

        logger.debug(f"Backend accepted token {listing.token_id} ({listing.order_hash})")
        return True

    def _post(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST the payload and validate the reply.

        Raises:
            BackendForwardError: Non-2xx, unparseable body, or success flag not set
            requests.exceptions.RequestException: Transport failure
        """
        response = self.session.post(
            self.order_url,
            json=payload,
            headers={"Content-Type": "application/json"},
            timeout=self.config.request_timeout_seconds,
        )

        if not 200 <= response.status_code < 300:
            raise BackendForwardError(
                (response.text or "")[: self.ERROR_BODY_LIMIT] or "request rejected",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError:
            raise BackendForwardError(
                "Unparseable response body", status_code=response.status_code
            )

        if not isinstance(data, dict) or not data.get("success"):
            raise BackendForwardError(f"Backend returned failure: {data}")

        return data
