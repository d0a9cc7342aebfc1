"""
Read-only smoke tests against a running GRAMS backend
Tests: /resource-request/stats, /resource-request/my-requests, /resource-request/allocated

Skipped unless GRAMS_LIVE_API_URL and the role tokens are set.
"""
import asyncio

import pytest
import requests

from api import ApiConnector, ApiSettings, AuthContext, create_http_session
from grams.resource_requests.domain.errors import PermissionDenied
from grams.resource_requests.domain.stats import aggregate
from grams.resource_requests.infrastructure.rest_gateway import RestResourceRequestGateway
from tests.test_config import LIVE_BASE_URL, get_token

pytestmark = pytest.mark.skipif(not LIVE_BASE_URL, reason="GRAMS_LIVE_API_URL not set")


def gateway_for(role, tmp_path):
    token = get_token(role)
    if not token:
        pytest.skip(f"No token configured for {role}")
    settings = ApiSettings(config_file=tmp_path / "config.json", api_base_url=LIVE_BASE_URL)
    return RestResourceRequestGateway(ApiConnector(create_http_session(), AuthContext(token), settings))


class TestEnvelope:
    """Raw envelope checks with plain requests"""

    def test_stats_requires_token(self):
        response = requests.get(f"{LIVE_BASE_URL}/resource-request/stats", timeout=30)
        assert response.status_code == 401

    def test_stats_envelope(self):
        token = get_token("admin")
        if not token:
            pytest.skip("No token configured for admin")
        response = requests.get(
            f"{LIVE_BASE_URL}/resource-request/stats",
            headers={"Authorization": f"Bearer {token}"},
            timeout=30,
        )
        data = response.json()

        assert response.status_code == 200
        assert data["success"] is True
        for key in ("total", "pending", "approved", "rejected"):
            assert key in data["data"]


class TestGateway:
    """Same endpoints through the gateway"""

    def test_my_requests_buckets_add_up(self, tmp_path):
        requests_ = asyncio.run(gateway_for("engineer", tmp_path).list_mine())
        stats = aggregate(requests_)

        assert stats.pending + stats.approved + stats.rejected == stats.total

    def test_allocated_ledger(self, tmp_path):
        allocated = asyncio.run(gateway_for("admin", tmp_path).list_allocated())

        for request in allocated.requests:
            assert request.remaining_amount >= -0.01

    def test_bad_token_is_permission_denied(self, tmp_path):
        settings = ApiSettings(config_file=tmp_path / "config.json", api_base_url=LIVE_BASE_URL)
        gateway = RestResourceRequestGateway(
            ApiConnector(create_http_session(), AuthContext("not-a-token"), settings)
        )

        with pytest.raises(PermissionDenied):
            asyncio.run(gateway.list_mine())
