"""
UNIT TESTS - BACKEND FORWARDER
==============================
Tests fuer listing_sync/forwarder.py
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from listing_sync.forwarder import BackendForwarder
from listing_sync.normalizer import ListingNormalizer
from tests.mock_data import PROXY_CONTRACT, v2_order


@pytest.fixture
def listing():
    return ListingNormalizer(PROXY_CONTRACT).normalize(v2_order())


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def forwarder(sync_config, session):
    return BackendForwarder(sync_config, session=session)


class TestForwardSuccess:

    def test_success_flag_true(self, forwarder, session, listing, response_factory):
        session.post.return_value = response_factory(200, {"success": True})

        assert forwarder.forward(listing) is True

    def test_posts_listing_json(self, forwarder, session, listing, response_factory):
        session.post.return_value = response_factory(200, {"success": True})

        forwarder.forward(listing)

        session.post.assert_called_once()
        args, kwargs = session.post.call_args
        assert args[0] == "http://backend.test/order"
        assert kwargs["json"] == listing.to_dict()
        assert kwargs["timeout"] == 5


class TestForwardFailure:

    def test_http_500(self, forwarder, session, listing, response_factory):
        session.post.return_value = response_factory(500, text="Internal Server Error")
        assert forwarder.forward(listing) is False

    @pytest.mark.parametrize("status", [301, 302, 304])
    def test_redirect_status(self, forwarder, session, listing, response_factory, status):
        response = response_factory(status, {"success": True})
        session.post.return_value = response
        assert forwarder.forward(listing) is False

    def test_unparseable_body(self, forwarder, session, listing, response_factory):
        session.post.return_value = response_factory(200, json_error=ValueError("no json"))
        assert forwarder.forward(listing) is False

    def test_success_false(self, forwarder, session, listing, response_factory):
        session.post.return_value = response_factory(200, {"success": False, "error": "dup"})
        assert forwarder.forward(listing) is False

    def test_success_missing(self, forwarder, session, listing, response_factory):
        session.post.return_value = response_factory(200, {"ok": True})
        assert forwarder.forward(listing) is False

    def test_body_not_an_object(self, forwarder, session, listing, response_factory):
        session.post.return_value = response_factory(200, ["success"])
        assert forwarder.forward(listing) is False

    def test_connection_error(self, forwarder, session, listing):
        session.post.side_effect = requests.exceptions.ConnectionError("refused")
        assert forwarder.forward(listing) is False

    def test_timeout(self, forwarder, session, listing):
        session.post.side_effect = requests.exceptions.Timeout("slow")
        assert forwarder.forward(listing) is False

    def test_no_retry(self, forwarder, session, listing, response_factory):
        session.post.return_value = response_factory(503)
        forwarder.forward(listing)
        assert session.post.call_count == 1
