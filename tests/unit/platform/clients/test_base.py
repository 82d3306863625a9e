"""HTTP-level tests for the shared API client plumbing.

Uses respx to intercept httpx requests and verifies status mapping,
header propagation and body decoding.
"""

import httpx
import pytest
import respx

from voice_admin.platform.clients.base import ApiClient
from voice_admin.platform.clients.exceptions import (
    AdminAuthenticationError,
    AdminConflictError,
    AdminConnectionError,
    AdminHTTPError,
    AdminNotFoundError,
    AdminProtocolError,
)
from voice_admin.platform.constants import USER_AGENT

BASE_URL = "https://api.example.com/v1"


class StaticAuth(httpx.Auth):
    def auth_flow(self, request):
        request.headers["Authorization"] = "Bearer test-token"
        yield request


@pytest.fixture
def client():
    with ApiClient(BASE_URL + "/", auth=StaticAuth()) as c:
        yield c


class TestApiClientRequests:
    """Tests for request construction."""

    def test_trailing_slash_is_stripped(self, client):
        assert client.base_url == BASE_URL

    @respx.mock
    def test_user_agent_and_auth_headers_are_sent(self, client):
        route = respx.get(f"{BASE_URL}/things").mock(return_value=httpx.Response(200, json={"ok": True}))

        assert client._request("GET", "/things") == {"ok": True}

        request = route.calls[0].request
        assert request.headers["user-agent"] == USER_AGENT
        assert request.headers["authorization"] == "Bearer test-token"

    @respx.mock
    def test_unauthenticated_request_has_no_authorization(self, client):
        route = respx.get("https://other.example.com/open").mock(return_value=httpx.Response(200, json=[]))

        client._request("GET", "https://other.example.com/open", authenticated=False)

        assert "authorization" not in route.calls[0].request.headers

    @respx.mock
    def test_empty_body_returns_none(self, client):
        respx.put(f"{BASE_URL}/things/1").mock(return_value=httpx.Response(204))

        assert client._request("PUT", "/things/1", json={"a": 1}) is None


class TestApiClientErrors:
    """Tests for mapping failures onto the exception hierarchy."""

    @respx.mock
    @pytest.mark.parametrize(
        ("status", "error_type"),
        [
            (401, AdminAuthenticationError),
            (403, AdminAuthenticationError),
            (404, AdminNotFoundError),
            (409, AdminConflictError),
            (500, AdminHTTPError),
            (429, AdminHTTPError),
        ],
    )
    def test_status_mapping(self, client, status, error_type):
        respx.get(f"{BASE_URL}/things").mock(return_value=httpx.Response(status, text="nope"))

        with pytest.raises(error_type):
            client._request("GET", "/things")

    @respx.mock
    def test_error_body_is_truncated(self, client):
        respx.get(f"{BASE_URL}/things").mock(return_value=httpx.Response(500, text="x" * 1000))

        with pytest.raises(AdminHTTPError) as exc_info:
            client._request("GET", "/things")

        assert exc_info.value.status_code == 500
        assert str(exc_info.value).endswith(": " + "x" * 300)

    @respx.mock
    def test_transport_failure_is_connection_error(self, client):
        respx.get(f"{BASE_URL}/things").mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(AdminConnectionError) as exc_info:
            client._request("GET", "/things")

        assert exc_info.value.url == f"{BASE_URL}/things"

    @respx.mock
    def test_invalid_json_is_protocol_error(self, client):
        respx.get(f"{BASE_URL}/things").mock(return_value=httpx.Response(200, text="<html>"))

        with pytest.raises(AdminProtocolError):
            client._request("GET", "/things")
