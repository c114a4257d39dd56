# =============================================================================
# OPENSEA LISTING SYNC
# Module: listing_sync/extractors.py
# Purpose: Ordered first-match field extraction over raw OpenSea orders
# =============================================================================
#
# The OpenSea v2 orders API has returned several shapes over time. Every
# field we need is looked up through an explicit, ordered tuple of accessors.
# The first accessor yielding a resolved value wins.
#
# "Resolved" = not None and not an empty string.
#
# PRIORITY ORDER (per field):
#   nft meta     criteria.metadata > asset > assets[0] > item > items[0]
#   token id     identifier > token_id > tokenId > id
#   image        image_url > image > thumbnail > metadata.image
#   protocol     protocol_data > protocolData > protocol
#   maker        maker > maker_address
#   order hash   order_hash > hash
#   price        price.current.value > price.value > current_price > starting_price
#
# =============================================================================

import math
from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional, Sequence, Tuple, Union

Accessor = Callable[[Any], Any]
Number = Union[int, float]

# Faults an accessor may hit on an unexpected structure; they count as no match
LOOKUP_ERRORS = (AttributeError, KeyError, IndexError, TypeError, ValueError)


def is_resolved(value: Any) -> bool:
    """A value counts as present unless it is None or an empty string."""
    return value is not None and value != ""


def path(*keys: Union[str, int]) -> Accessor:
    """
    Build an accessor walking nested mappings/lists.

    String keys index mappings, int keys index lists. Any missing step
    yields None.
    """
    def accessor(source: Any) -> Any:
        current = source
        for key in keys:
            if isinstance(key, int):
                if not isinstance(current, (list, tuple)) or not 0 <= key < len(current):
                    return None
                current = current[key]
            elif isinstance(current, Mapping):
                current = current.get(key)
            else:
                return None
            if current is None:
                return None
        return current

    accessor.__name__ = "path(" + ".".join(str(k) for k in keys) + ")"
    return accessor


def first_match(
    source: Any,
    accessors: Sequence[Accessor],
    accept: Callable[[Any], bool] = is_resolved,
) -> Any:
    """
    Evaluate accessors in order and return the first accepted value.

    Args:
        source: Object to read from
        accessors: Ordered accessors (highest priority first)
        accept: Predicate a value must satisfy to win

    Returns:
        First accepted value, or None
    """
    for accessor in accessors:
        try:
            value = accessor(source)
        except LOOKUP_ERRORS:
            continue
        if accept(value):
            return value
    return None


# =============================================================================
# ACCESSOR CHAINS
# =============================================================================

NFT_META_ACCESSORS: Tuple[Accessor, ...] = (
    path("criteria", "metadata"),
    path("asset"),
    path("assets", 0),
    path("item"),
    path("items", 0),
)

TOKEN_ID_ACCESSORS: Tuple[Accessor, ...] = (
    path("identifier"),
    path("token_id"),
    path("tokenId"),
    path("id"),
)

IMAGE_ACCESSORS: Tuple[Accessor, ...] = (
    path("image_url"),
    path("image"),
    path("thumbnail"),
    path("metadata", "image"),
)

PROTOCOL_ACCESSORS: Tuple[Accessor, ...] = (
    path("protocol_data"),
    path("protocolData"),
    path("protocol"),
)

MAKER_ACCESSORS: Tuple[Accessor, ...] = (
    path("maker"),
    path("maker_address"),
)

ORDER_HASH_ACCESSORS: Tuple[Accessor, ...] = (
    path("order_hash"),
    path("hash"),
)

PRICE_ACCESSORS: Tuple[Accessor, ...] = (
    path("price", "current", "value"),
    path("price", "value"),
    path("current_price"),
    path("starting_price"),
)


# =============================================================================
# FIELD EXTRACTORS
# =============================================================================

def _is_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


def _is_token_id(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, (str, int)) and is_resolved(value)


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def extract_nft_meta(order: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Locate the token description inside a raw order."""
    return first_match(order, NFT_META_ACCESSORS, accept=_is_mapping)


def extract_token_id(nft_meta: Optional[Dict[str, Any]]) -> Optional[Union[str, int]]:
    """Token identifier from nft meta (string or int, as the API sent it)."""
    return first_match(nft_meta, TOKEN_ID_ACCESSORS, accept=_is_token_id)


def extract_image(nft_meta: Optional[Dict[str, Any]]) -> Optional[str]:
    """Image URL from nft meta."""
    return first_match(nft_meta, IMAGE_ACCESSORS, accept=_is_text)


def extract_protocol_data(order: Dict[str, Any]) -> Any:
    """Protocol specific order data (Seaport parameters + signature)."""
    return first_match(order, PROTOCOL_ACCESSORS)


def extract_maker(order: Dict[str, Any]) -> Any:
    """Raw maker value: an account mapping or a plain address string."""
    return first_match(order, MAKER_ACCESSORS)


def extract_order_hash(order: Dict[str, Any]) -> Optional[str]:
    value = first_match(order, ORDER_HASH_ACCESSORS)
    return str(value) if value is not None else None


def extract_price(order: Dict[str, Any]) -> Any:
    """Raw price value (usually a wei amount as a string)."""
    return first_match(order, PRICE_ACCESSORS)


def maker_address(maker: Any) -> Optional[str]:
    """
    Lowercased address of a maker.

    Accepts {"address": "0x.."} or "0x.."; anything else has no address.
    """
    if isinstance(maker, Mapping):
        address = maker.get("address")
    else:
        address = maker

    if isinstance(address, str) and address.strip():
        return address.strip().lower()
    return None


def coerce_price(value: Any) -> Number:
    """
    Convert a raw price to a number.

    Integral strings become int (wei amounts exceed float precision),
    other numeric strings become float. Anything else is 0.
    """
    if value is None or isinstance(value, bool):
        return 0

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        return value if math.isfinite(value) else 0

    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return 0
        return number if math.isfinite(number) else 0

    return 0
