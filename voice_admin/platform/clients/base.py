"""Shared HTTP plumbing for the administrative API clients.

Wraps a synchronous ``httpx.Client`` and maps transport failures and
error statuses onto the exception hierarchy in
``voice_admin.platform.clients.exceptions``.
"""

from typing import Any

import httpx

from voice_admin.platform.clients.exceptions import (
    AdminAuthenticationError,
    AdminConflictError,
    AdminConnectionError,
    AdminHTTPError,
    AdminNotFoundError,
    AdminProtocolError,
)
from voice_admin.platform.constants import USER_AGENT

_MAX_ERROR_BODY = 300


class ApiClient:
    """Base class for a JSON API reached through one base URL."""

    def __init__(
        self,
        base_url: str,
        *,
        auth: httpx.Auth | None = None,
        httpx_client: httpx.Client | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: Base URL every relative path is joined to.
            auth: Optional httpx auth applied to authenticated requests.
            httpx_client: Optional pre-configured HTTP client.
        """
        self._base_url = base_url.rstrip("/")
        self._auth = auth
        self._httpx_client = httpx_client or httpx.Client(headers={"user-agent": USER_AGENT})
        self._owns_httpx_client = httpx_client is None

    @property
    def base_url(self) -> str:
        return self._base_url

    def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_httpx_client:
            self._httpx_client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def _url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self._base_url}/{path.lstrip('/')}"

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        authenticated: bool = True,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Args:
            method: HTTP method.
            path: Path relative to the base URL, or an absolute URL.
            params: Optional query parameters.
            json: Optional JSON body.
            authenticated: Whether to apply this client's auth.

        Returns:
            The decoded JSON body, or None for empty responses.

        Raises:
            AdminConnectionError: If the request cannot be sent.
            AdminAuthenticationError: On 401/403 responses.
            AdminNotFoundError: On 404 responses.
            AdminConflictError: On 409 responses.
            AdminHTTPError: On any other error status.
            AdminProtocolError: If the body is not valid JSON.
        """
        url = self._url(path)
        auth = self._auth if authenticated and self._auth is not None else httpx.USE_CLIENT_DEFAULT
        try:
            response = self._httpx_client.request(method, url, params=params, json=json, auth=auth)
        except httpx.HTTPError as e:
            raise AdminConnectionError(message=str(e), url=url) from e

        if response.is_error:
            self._raise_for_status(response, url)

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise AdminProtocolError(message=f"Invalid JSON: {e}", url=url) from e

    @staticmethod
    def _raise_for_status(response: httpx.Response, url: str) -> None:
        body = response.text[:_MAX_ERROR_BODY]
        status = response.status_code
        if status in (401, 403):
            raise AdminAuthenticationError(message=body or response.reason_phrase, status_code=status)
        if status == 404:
            raise AdminNotFoundError(message=body, url=url)
        if status == 409:
            raise AdminConflictError(message=body, url=url)
        raise AdminHTTPError(message=body, status_code=status, url=url)
