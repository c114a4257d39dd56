# =============================================================================
# OPENSEA LISTING SYNC
# Module: listing_sync/config.py
# Purpose: Immutable run configuration built once at startup
# =============================================================================
#
# SOURCES:
# - Environment variables (optionally pre-loaded from a .env file)
#     OPENSEA_API_KEY         required
#     NFT_CONTRACT_ADDRESS    required
#     PROXY_CONTRACT_ADDRESS  optional, embedded into every listing
#     BACKEND_URL             optional, defaults to DEFAULT_BACKEND_URL
# - Tunables from config/sync.yaml (chain, page size, delays, timeout)
#
# USAGE:
#   from listing_sync.config import SyncConfig, load_env_file
#
#   load_env_file()
#   config = SyncConfig.from_env()
#
# After startup nothing reads os.environ again. The config value is passed
# into the client and the forwarder explicitly.
#
# =============================================================================

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, Mapping, Optional

import yaml
from dotenv import load_dotenv

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Base directory
BASE_DIR = Path(__file__).parent.parent
SETTINGS_PATH = BASE_DIR / "config" / "sync.yaml"
ENV_FILE_PATH = BASE_DIR / ".env"

# Environment variables
API_KEY_ENV_VAR: str = "OPENSEA_API_KEY"
COLLECTION_ENV_VAR: str = "NFT_CONTRACT_ADDRESS"
MARKETPLACE_CONTRACT_ENV_VAR: str = "PROXY_CONTRACT_ADDRESS"
BACKEND_URL_ENV_VAR: str = "BACKEND_URL"

DEFAULT_BACKEND_URL: str = "http://localhost:3000"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "opensea_base_url": "https://api.opensea.io/api/v2",
    "chain": "apechain",
    "order_type": "listings",
    "page_size": 50,
    "listing_delay_seconds": 0.2,
    "page_delay_seconds": 0.5,
    "request_timeout_seconds": 30,
}


@dataclass(frozen=True)
class SyncConfig:
    """Everything a sync run needs, captured once."""
    api_key: str
    collection_address: str
    backend_url: str = DEFAULT_BACKEND_URL
    marketplace_contract: Optional[str] = None

    opensea_base_url: str = DEFAULT_SETTINGS["opensea_base_url"]
    chain: str = DEFAULT_SETTINGS["chain"]
    order_type: str = DEFAULT_SETTINGS["order_type"]
    page_size: int = DEFAULT_SETTINGS["page_size"]
    listing_delay_seconds: float = DEFAULT_SETTINGS["listing_delay_seconds"]
    page_delay_seconds: float = DEFAULT_SETTINGS["page_delay_seconds"]
    request_timeout_seconds: float = DEFAULT_SETTINGS["request_timeout_seconds"]

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        settings: Optional[Dict[str, Any]] = None,
    ) -> "SyncConfig":
        """
        Build a config from environment variables and settings.

        Args:
            environ: Mapping to read variables from (defaults to os.environ)
            settings: Tunables, usually from load_settings() (defaults to
                DEFAULT_SETTINGS)

        Returns:
            SyncConfig

        Raises:
            ConfigurationError: If the API key or the collection is missing
        """
        env = os.environ if environ is None else environ

        api_key = _read_var(env, API_KEY_ENV_VAR)
        if not api_key:
            raise ConfigurationError(
                f"{API_KEY_ENV_VAR} is missing in env", setting=API_KEY_ENV_VAR
            )

        collection = _read_var(env, COLLECTION_ENV_VAR)
        if not collection:
            raise ConfigurationError(
                f"{COLLECTION_ENV_VAR} is missing in env", setting=COLLECTION_ENV_VAR
            )

        backend_url = _read_var(env, BACKEND_URL_ENV_VAR) or DEFAULT_BACKEND_URL
        marketplace_contract = _read_var(env, MARKETPLACE_CONTRACT_ENV_VAR)

        merged = dict(DEFAULT_SETTINGS)
        if settings:
            merged.update({k: v for k, v in settings.items() if k in DEFAULT_SETTINGS})

        try:
            return cls(
                api_key=api_key,
                collection_address=collection,
                backend_url=backend_url.rstrip("/"),
                marketplace_contract=marketplace_contract,
                opensea_base_url=str(merged["opensea_base_url"]).rstrip("/"),
                chain=str(merged["chain"]),
                order_type=str(merged["order_type"]),
                page_size=int(merged["page_size"]),
                listing_delay_seconds=float(merged["listing_delay_seconds"]),
                page_delay_seconds=float(merged["page_delay_seconds"]),
                request_timeout_seconds=float(merged["request_timeout_seconds"]),
            )
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid value in settings: {e}")

    def redacted(self) -> Dict[str, Any]:
        """Config summary safe for logging (API key masked)."""
        masked = self.api_key[:4] + "..." if len(self.api_key) > 4 else "***"
        return {
            "api_key": masked,
            "collection_address": self.collection_address,
            "backend_url": self.backend_url,
            "marketplace_contract": self.marketplace_contract,
            "chain": self.chain,
            "order_type": self.order_type,
            "page_size": self.page_size,
        }


def _read_var(env: Mapping[str, str], name: str) -> Optional[str]:
    """Read and strip a variable; empty counts as unset."""
    raw = env.get(name)
    if raw is None:
        return None
    value = raw.strip()
    return value or None


def load_env_file(env_file: Optional[Path] = None) -> bool:
    """
    Load variables from a .env file without overriding existing ones.

    Args:
        env_file: Path to the .env file. Defaults to <project root>/.env

    Returns:
        True if a file was found and loaded
    """
    path = Path(env_file) if env_file else ENV_FILE_PATH
    if not path.exists():
        logger.debug(f"No .env file at {path}")
        return False

    load_dotenv(path, override=False)
    logger.debug(f"Loaded environment from {path}")
    return True


def load_settings(settings_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load tunables from a YAML file.

    Missing file: built-in defaults. Unknown keys are ignored.

    Args:
        settings_path: Path to the YAML file. Defaults to config/sync.yaml

    Returns:
        Settings dictionary (always contains every DEFAULT_SETTINGS key)

    Raises:
        ConfigurationError: If the file exists but is unreadable or not a mapping
    """
    path = Path(settings_path) if settings_path else SETTINGS_PATH
    settings = dict(DEFAULT_SETTINGS)

    if not path.exists():
        logger.warning(f"Settings file not found: {path}, using defaults")
        return settings

    try:
        with open(path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to load settings from {path}: {e}")

    if not isinstance(loaded, dict):
        raise ConfigurationError(f"Settings file {path} must contain a mapping")

    unknown = sorted(k for k in loaded if k not in DEFAULT_SETTINGS)
    if unknown:
        logger.warning(f"Ignoring unknown settings: {', '.join(unknown)}")

    settings.update({k: v for k, v in loaded.items() if k in DEFAULT_SETTINGS})
    logger.debug(f"Loaded settings from {path}")
    return settings
