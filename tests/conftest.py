"""Global test fixtures: config without delays, fake HTTP responses."""
import logging
from typing import Any, Optional
from unittest.mock import MagicMock

import pytest

from listing_sync.config import SyncConfig
from shared.logging_config import SYNC_LOGGER_NAME
from tests.mock_data import PROXY_CONTRACT


@pytest.fixture(autouse=True)
def reset_sync_logger():
    """Drop handlers bound to per-test captured streams."""
    yield
    logger = logging.getLogger(SYNC_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def sync_config():
    """Config with test credentials and zero politeness delays."""
    return SyncConfig(
        api_key="test_api_key",
        collection_address="0xcollection",
        backend_url="http://backend.test",
        marketplace_contract=PROXY_CONTRACT,
        listing_delay_seconds=0.0,
        page_delay_seconds=0.0,
        request_timeout_seconds=5,
    )


def make_response(
    status_code: int = 200,
    json_data: Any = None,
    text: str = "",
    json_error: Optional[Exception] = None,
) -> MagicMock:
    """Build a requests.Response stand-in."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.text = text
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def response_factory():
    return make_response
