# =============================================================================
# OPENSEA LISTING SYNC - MOCK DATA
# =============================================================================
#
# PURPOSE:
# Raw order fixtures in the different shapes the OpenSea orders API has
# produced, so tests run fully OFFLINE.
#
# SHAPES COVERED:
# - v2 criteria.metadata (current)
# - asset / assets[] (legacy)
# - item / items[] (intermediate)
#
# =============================================================================

from typing import Any, Dict, List, Optional

SELLER = "0xAbCdEf0000000000000000000000000000000001"
PROXY_CONTRACT = "0x00000000000000ADc04C56Bf30aC9d3c0aAF14dC"
ONE_APE_WEI = "1000000000000000000"


def seaport_protocol_data(offerer: str = SELLER) -> Dict[str, Any]:
    """Minimal Seaport order parameters + signature."""
    return {
        "parameters": {
            "offerer": offerer,
            "zone": "0x0000000000000000000000000000000000000000",
            "offer": [{"itemType": 2, "token": "0xcollection", "identifierOrCriteria": "42"}],
            "consideration": [],
            "orderType": 0,
        },
        "signature": "0xsig",
    }


def v2_order(
    token_id: Optional[str] = "42",
    price: Optional[str] = ONE_APE_WEI,
    seller: Optional[str] = SELLER,
    order_hash: Optional[str] = "0xhash42",
    image: Optional[str] = "https://i.seadn.io/42.png",
) -> Dict[str, Any]:
    """Current v2 shape: token info under criteria.metadata."""
    metadata: Dict[str, Any] = {"name": f"Token #{token_id}"}
    if token_id is not None:
        metadata["identifier"] = token_id
    if image is not None:
        metadata["image_url"] = image

    order: Dict[str, Any] = {
        "criteria": {"collection": {"slug": "test-collection"}, "metadata": metadata},
        "protocol_data": seaport_protocol_data(),
        "chain": "apechain",
        "type": "basic",
    }
    if price is not None:
        order["price"] = {"current": {"currency": "APE", "decimals": 18, "value": price}}
    if seller is not None:
        order["maker"] = {"address": seller}
    if order_hash is not None:
        order["order_hash"] = order_hash
    return order


def legacy_asset_order(token_id: str = "7") -> Dict[str, Any]:
    """Legacy shape: asset + maker string + current_price."""
    return {
        "asset": {"token_id": token_id, "image": "https://img/legacy.png"},
        "maker_address": "0xLEGACYSELLER",
        "current_price": "2500000000000000000",
        "hash": "0xlegacyhash",
        "protocolData": {"signature": "0xlegacy"},
    }


def items_order(token_id: int = 9) -> Dict[str, Any]:
    """Intermediate shape: items[] with numeric tokenId."""
    return {
        "items": [{"tokenId": token_id, "thumbnail": "https://img/thumb.png"}],
        "starting_price": 0.75,
    }


def tokenless_order() -> Dict[str, Any]:
    """Order with nothing identifying a token."""
    return {
        "price": {"current": {"value": ONE_APE_WEI}},
        "maker": {"address": SELLER},
        "order_hash": "0xorphan",
    }


def orders_body(orders: List[Dict[str, Any]], next_cursor: Optional[str] = None) -> Dict[str, Any]:
    """Response body of GET /orders/{chain}/listings."""
    return {"orders": orders, "next": next_cursor, "previous": None}
