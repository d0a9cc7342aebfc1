import asyncio

import pytest
import requests

from api.auth import AuthContext
from api.config import ApiSettings
from api.connection import ApiConnector
from api.endpoints import build_url
from grams.resource_requests.domain.errors import GatewayError, NotFound, PermissionDenied


class FakeResponse:
    def __init__(self, status_code, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.sent = []
        self.closed = False

    def request(self, method, url, **kwargs):
        self.sent.append((method, url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True


def run(coro):
    return asyncio.run(coro)


def make_connector(session, token="secret-token", tmp_path=None):
    settings = ApiSettings(config_file=tmp_path / "missing.json", api_base_url="http://grams.test/api/")
    return ApiConnector(session, AuthContext(token), settings)


def test_successful_call_sends_bearer_token_and_json(tmp_path):
    session = FakeSession(FakeResponse(200, {"success": True, "data": {"ok": 1}}))
    connector = make_connector(session, tmp_path=tmp_path)

    payload = run(connector.call("POST", "http://grams.test/api/x", body={"a": 1}))

    assert payload["data"] == {"ok": 1}
    method, url, kwargs = session.sent[0]
    assert method == "POST"
    assert kwargs["headers"] == {"Authorization": "Bearer secret-token"}
    assert kwargs["json"] == {"a": 1}
    assert kwargs["timeout"] == 120.0
    assert connector.base_url == "http://grams.test/api"


def test_anonymous_call_has_no_authorization_header(tmp_path):
    session = FakeSession(FakeResponse(200, {"success": True}))
    connector = make_connector(session, token=None, tmp_path=tmp_path)

    run(connector.call("GET", "http://grams.test/api/x"))

    assert session.sent[0][2]["headers"] == {}


@pytest.mark.parametrize(
    "status_code, error_type",
    [(401, PermissionDenied), (403, PermissionDenied), (404, NotFound), (500, GatewayError), (400, GatewayError)],
)
def test_error_status_maps_to_domain_error(tmp_path, status_code, error_type):
    session = FakeSession(FakeResponse(status_code, {"success": False, "message": "Nope"}))
    connector = make_connector(session, tmp_path=tmp_path)

    with pytest.raises(error_type, match="Nope"):
        run(connector.call("GET", "http://grams.test/api/x"))


def test_success_false_with_200_is_an_error_with_fallback_message(tmp_path):
    session = FakeSession(FakeResponse(200, {"success": False}))
    connector = make_connector(session, tmp_path=tmp_path)

    with pytest.raises(GatewayError) as exc_info:
        run(connector.call("GET", "http://grams.test/api/x", fallback="Failed to fetch requests"))

    assert exc_info.value.message == "Failed to fetch requests"
    assert exc_info.value.status_code == 200


def test_non_json_body_uses_fallback(tmp_path):
    session = FakeSession(FakeResponse(502, text="<html>Bad gateway</html>"))
    connector = make_connector(session, tmp_path=tmp_path)

    with pytest.raises(GatewayError) as exc_info:
        run(connector.call("GET", "http://grams.test/api/x", fallback="Failed to fetch requests"))

    assert exc_info.value.status_code == 502


def test_network_failure_becomes_gateway_error(tmp_path):
    session = FakeSession(error=requests.ConnectionError("connection refused"))
    connector = make_connector(session, tmp_path=tmp_path)

    with pytest.raises(GatewayError, match="Failed to approve request"):
        run(connector.call("PUT", "http://grams.test/api/x", fallback="Failed to approve request"))


def test_close_closes_session(tmp_path):
    session = FakeSession()
    make_connector(session, tmp_path=tmp_path).close()

    assert session.closed


def test_build_url_quotes_path_params():
    url = build_url("http://grams.test/api/", "resource-requests", "approve", id="a/b c")

    assert url == "http://grams.test/api/resource-request/a%2Fb%20c/approve"


def test_build_url_unknown_endpoint():
    with pytest.raises(KeyError):
        build_url("http://grams.test/api", "resource-requests", "archive")


def test_build_url_budget_category():
    url = build_url("http://grams.test/api", "budget", "category", category="Roads & Drains")

    assert url == "http://grams.test/api/budget/system/category/Roads%20%26%20Drains"
