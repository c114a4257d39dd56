# =============================================================================
# OPENSEA LISTING SYNC - SHARED MODULE
# =============================================================================
#
# Shared utilities with no sync logic of their own.
#
# CONTENTS:
# - Logging utilities
#
# =============================================================================

from .logging_config import setup_logging, get_sync_logger, SYNC_LOGGER_NAME

__all__ = [
    "setup_logging",
    "get_sync_logger",
    "SYNC_LOGGER_NAME",
]
