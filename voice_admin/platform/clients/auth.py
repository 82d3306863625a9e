"""OAuth2 client-credentials authentication.

Provides a token provider that acquires and caches access tokens per scope,
and an ``httpx.Auth`` implementation that attaches them to requests.
"""

import time
from collections.abc import Generator
from dataclasses import dataclass

import httpx

from voice_admin.platform.clients.exceptions import AdminAuthenticationError
from voice_admin.platform.constants import USER_AGENT

# Tokens are refreshed this many seconds before they expire
_EXPIRY_MARGIN_SECONDS = 60.0


@dataclass(frozen=True)
class AccessToken:
    token: str
    expires_at: float

    def is_expired(self) -> bool:
        return time.monotonic() > self.expires_at - _EXPIRY_MARGIN_SECONDS


class TokenProvider:
    """Client-credentials token provider with a per-scope cache."""

    def __init__(
        self,
        token_url: str,
        client_id: str,
        client_secret: str,
        httpx_client: httpx.Client | None = None,
    ):
        self._token_url = token_url
        self._client_id = client_id
        self._client_secret = client_secret
        self._httpx_client = httpx_client or httpx.Client(headers={"user-agent": USER_AGENT})
        self._owns_httpx_client = httpx_client is None
        self._tokens: dict[str, AccessToken] = {}

    def __repr__(self) -> str:
        """Obfuscate the client secret in string representation."""
        return f"TokenProvider(token_url={self._token_url!r}, client_id={self._client_id!r}, client_secret=<obfuscated>)"

    def get_token(self, scope: str) -> str:
        """Return a valid access token for the scope, acquiring one if needed.

        Raises:
            AdminAuthenticationError: If the identity provider refuses the
                credentials or cannot be reached.
        """
        cached = self._tokens.get(scope)
        if cached is not None and not cached.is_expired():
            return cached.token

        token = self._acquire(scope)
        self._tokens[scope] = token
        return token.token

    def _acquire(self, scope: str) -> AccessToken:
        data = {
            "grant_type": "client_credentials",
            "client_id": self._client_id,
            "client_secret": self._client_secret,
            "scope": scope,
        }
        try:
            response = self._httpx_client.post(self._token_url, data=data)
        except httpx.HTTPError as e:
            raise AdminAuthenticationError(f"identity provider unreachable: {e}") from e

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}

        if response.is_error:
            detail = payload.get("error_description") or payload.get("error") or response.reason_phrase
            raise AdminAuthenticationError(detail, status_code=response.status_code)

        access_token = payload.get("access_token")
        if not access_token:
            raise AdminAuthenticationError("token response carried no access_token")

        expires_in = float(payload.get("expires_in", 3600))
        return AccessToken(token=access_token, expires_at=time.monotonic() + expires_in)

    def close(self) -> None:
        if self._owns_httpx_client:
            self._httpx_client.close()


class BearerAuth(httpx.Auth):
    """Attach a bearer token for one scope to every request."""

    def __init__(self, provider: TokenProvider, scope: str):
        self._provider = provider
        self._scope = scope

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"Bearer {self._provider.get_token(self._scope)}"
        yield request
