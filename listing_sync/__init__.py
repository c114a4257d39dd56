# =============================================================================
# OPENSEA LISTING SYNC
# Module: listing_sync/__init__.py
# Purpose: Sync active OpenSea listings of one collection into the backend
# =============================================================================
#
# ONE SOURCE, ONE SINK:
# Pages of active sell orders are fetched from the OpenSea v2 orders API,
# normalized into a fixed listing shape and posted to the backend one by one.
# No state survives a run besides the console output.
#
# DESIGN PRINCIPLES:
# - Shape tolerant: several historical order shapes are understood
# - Skip and continue: a bad record or a rejected post never stops the run
# - Deterministic: same order => same listing
#
# =============================================================================

from .exceptions import (
    SyncError,
    ConfigurationError,
    UpstreamFetchError,
    BackendForwardError,
)
from .config import SyncConfig, load_env_file, load_settings
from .client import OpenSeaClient, OrderPage
from .normalizer import ListingNormalizer, CanonicalListing
from .forwarder import BackendForwarder
from .syncer import ListingSyncer, SyncStats, StopReason

__all__ = [
    "SyncError",
    "ConfigurationError",
    "UpstreamFetchError",
    "BackendForwardError",
    "SyncConfig",
    "load_env_file",
    "load_settings",
    "OpenSeaClient",
    "OrderPage",
    "ListingNormalizer",
    "CanonicalListing",
    "BackendForwarder",
    "ListingSyncer",
    "SyncStats",
    "StopReason",
]
