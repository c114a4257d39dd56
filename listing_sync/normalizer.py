# =============================================================================
# OPENSEA LISTING SYNC
# Module: listing_sync/normalizer.py
# Purpose: Normalize raw OpenSea orders into canonical listings
# =============================================================================
#
# OUTPUT SCHEMA (wire form sent to POST /order):
# {
#     "tokenId": string | number,
#     "price": number,                 0 if unresolvable
#     "sellerAddress": string,         lowercase, "unknown" if unresolvable
#     "seaportOrder": object,          protocol data, else the whole raw order
#     "orderHash": string,             "{tokenId}-{sellerAddress}" if absent
#     "image": string | null,
#     "marketplaceContract": string | null,
# }
#
# DESIGN:
# - Deterministic: same input => same output
# - Never raises: unexpected shapes degrade to defaults or a skip (None)
# - Skip only when no nft meta or no token id can be found
#
# =============================================================================

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

from .extractors import (
    Number,
    coerce_price,
    extract_image,
    extract_maker,
    extract_nft_meta,
    extract_order_hash,
    extract_price,
    extract_protocol_data,
    extract_token_id,
    maker_address,
)

logger = logging.getLogger(__name__)

UNKNOWN_SELLER = "unknown"

# Key under which the backend /order endpoint reads the order data
ORDER_PAYLOAD_WIRE_KEY = "seaportOrder"


@dataclass(frozen=True)
class CanonicalListing:
    """Fixed-shape listing forwarded to the backend."""
    token_id: Union[str, int]
    price: Number
    seller_address: str
    order_payload: Any
    order_hash: str
    image: Optional[str]
    marketplace_contract: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON body expected by the backend."""
        return {
            "tokenId": self.token_id,
            "price": self.price,
            "sellerAddress": self.seller_address,
            ORDER_PAYLOAD_WIRE_KEY: self.order_payload,
            "orderHash": self.order_hash,
            "image": self.image,
            "marketplaceContract": self.marketplace_contract,
        }


@dataclass(frozen=True)
class OrderFields:
    """Order-level fields, each possibly unresolved."""
    protocol_data: Any = None
    seller_address: Optional[str] = None
    order_hash: Optional[str] = None
    price: Number = 0


class ListingNormalizer:
    """
    Turns raw OpenSea orders into CanonicalListing records.

    Holds only the marketplace contract, which is constant per run.
    """

    def __init__(self, marketplace_contract: Optional[str] = None):
        """
        Initialize the normalizer.

        Args:
            marketplace_contract: Proxy contract embedded in every listing
        """
        self.marketplace_contract = marketplace_contract

    def normalize(self, order: Any) -> Optional[CanonicalListing]:
        """
        Normalize a single raw order.

        Args:
            order: Raw order entry from the orders API (non-dicts are skipped)

        Returns:
            CanonicalListing, or None when the order must be skipped
        """
        if not isinstance(order, dict):
            logger.debug(f"Skipping non-object order entry: {type(order).__name__}")
            return None

        token_id, image = self._extract_token(order)
        if token_id is None:
            return None

        fields = self._extract_order_fields(order)
        seller = fields.seller_address or UNKNOWN_SELLER

        return CanonicalListing(
            token_id=token_id,
            price=fields.price,
            seller_address=seller,
            order_payload=fields.protocol_data if fields.protocol_data is not None else order,
            order_hash=fields.order_hash or f"{token_id}-{seller}",
            image=image,
            marketplace_contract=self.marketplace_contract,
        )

    def _extract_token(self, order: Dict[str, Any]) -> Tuple[Optional[Union[str, int]], Optional[str]]:
        """Token id and image; (None, None) if the token cannot be identified."""
        try:
            nft_meta = extract_nft_meta(order)
            if nft_meta is None:
                logger.debug("Skipping order without nft metadata")
                return None, None

            token_id = extract_token_id(nft_meta)
            if token_id is None:
                logger.debug("Skipping order without token id")
                return None, None

            return token_id, extract_image(nft_meta)
        except Exception as e:
            logger.debug(f"Token extraction failed, skipping order: {e}")
            return None, None

    def _extract_order_fields(self, order: Dict[str, Any]) -> OrderFields:
        """Protocol data, seller, hash and price; all defaults on any fault."""
        try:
            return OrderFields(
                protocol_data=extract_protocol_data(order),
                seller_address=maker_address(extract_maker(order)),
                order_hash=extract_order_hash(order),
                price=coerce_price(extract_price(order)),
            )
        except Exception as e:
            logger.debug(f"Order field extraction failed, using defaults: {e}")
            return OrderFields()
