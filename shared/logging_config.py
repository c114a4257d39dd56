# =============================================================================
# OPENSEA LISTING SYNC - LOGGING CONFIGURATION
# =============================================================================
#
# All sync modules log through the "listing_sync" logger tree
# (logging.getLogger(__name__) inside listing_sync/*).
#
# Console output is always available. File output is opt-in because a sync
# run writes nothing to disk by default:
#   logs/sync/sync_<timestamp>.log
#
# =============================================================================

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional


SYNC_LOGGER_NAME = "listing_sync"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


# =============================================================================
# LOG DIRECTORIES (relative to project root)
# =============================================================================

def _get_project_root() -> Path:
    """Get the project root directory."""
    # This file is at shared/logging_config.py
    # Project root is one level up
    return Path(__file__).parent.parent


def _get_log_dir() -> Path:
    return _get_project_root() / "logs" / "sync"


# =============================================================================
# LOGGING SETUP
# =============================================================================

def setup_logging(
    level: int = logging.INFO,
    console_output: bool = True,
    file_output: bool = False,
    log_dir: Optional[Path] = None,
) -> Optional[Path]:
    """
    Configure logging for the sync.

    Args:
        level: Logging level
        console_output: Whether to log to stdout
        file_output: Whether to log to a timestamped file
        log_dir: Directory for the log file (defaults to logs/sync)

    Returns:
        Path of the log file, or None when file output is off
    """
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    logger = logging.getLogger(SYNC_LOGGER_NAME)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    log_file = None
    if file_output:
        target_dir = Path(log_dir) if log_dir else _get_log_dir()
        target_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = target_dir / f"sync_{timestamp}.log"

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Reduce noise from urllib3
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    if log_file:
        logger.info(f"Log file: {log_file}")

    return log_file


def get_sync_logger() -> logging.Logger:
    """Get the top-level sync logger."""
    return logging.getLogger(SYNC_LOGGER_NAME)
