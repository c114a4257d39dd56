# =============================================================================
# OPENSEA LISTING SYNC
# Module: listing_sync/exceptions.py
# Purpose: Error taxonomy for the sync pipeline
# =============================================================================
#
# EXCEPTION HIERARCHY:
#
# SyncError (base)
# ├── ConfigurationError   - FATAL: required setting missing or unreadable
# ├── UpstreamFetchError   - SOFT: page discarded, pagination stops
# └── BackendForwardError  - SOFT: listing counted as scanned, not sent
#
# Upstream and backend errors never leave their component. They are raised
# internally and converted into a None page or a False forward result.
#
# =============================================================================

from typing import Optional


class SyncError(Exception):
    """
    Base class for all sync errors.

    Allows catching every expected failure in a single except block.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        """
        Initialize sync error.

        Args:
            message: Error description
            status_code: HTTP status code, if the error came from a response
        """
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"[HTTP {self.status_code}] {self.message}"
        return self.message


class ConfigurationError(SyncError):
    """A required setting is missing. The process must abort before any I/O."""

    def __init__(self, message: str, setting: Optional[str] = None):
        self.setting = setting
        super().__init__(message)


class UpstreamFetchError(SyncError):
    """The marketplace API returned a bad status or an unparseable body."""


class BackendForwardError(SyncError):
    """The backend rejected a listing or answered with something unusable."""
