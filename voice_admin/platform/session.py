"""Explicit administrative session.

An ``AdminSession`` owns the authenticated clients for one run against one
tenant. It is created once at the CLI boundary and passed to every workflow.
"""

from dataclasses import dataclass
from typing import Any

from voice_admin.platform.clients.auth import BearerAuth, TokenProvider
from voice_admin.platform.clients.calling import CallingPlatformClient
from voice_admin.platform.clients.directory import DirectoryClient
from voice_admin.platform.clients.open_data import OpenDataClient
from voice_admin.platform.observability import get_logger
from voice_admin.platform.settings import Settings

logger = get_logger(__name__)


@dataclass
class AdminSession:
    """Authenticated clients for a single run."""

    directory: DirectoryClient
    calling: CallingPlatformClient
    open_data: OpenDataClient
    token_provider: TokenProvider | None = None

    @classmethod
    def connect(cls, settings: Settings) -> "AdminSession":
        """Authenticate against the tenant and build the clients.

        Tokens for both administrative scopes are acquired up front so an
        authentication failure aborts the run before any work is attempted.

        Raises:
            AdminAuthenticationError: If either token cannot be acquired.
        """
        provider = TokenProvider(
            token_url=settings.token_url,
            client_id=settings.auth.client_id,
            client_secret=settings.auth.client_secret,
        )
        try:
            provider.get_token(settings.directory.scope)
            provider.get_token(settings.calling.scope)
        except Exception:
            provider.close()
            raise

        logger.info("Authenticated", tenant=settings.auth.tenant_id, client_id=settings.auth.client_id)
        return cls(
            directory=DirectoryClient(
                settings.directory.url,
                authority=settings.auth.authority,
                auth=BearerAuth(provider, settings.directory.scope),
            ),
            calling=CallingPlatformClient(
                settings.calling.url,
                auth=BearerAuth(provider, settings.calling.scope),
            ),
            open_data=OpenDataClient(settings.open_data.url, settings.open_data.resource_id),
            token_provider=provider,
        )

    def close(self) -> None:
        """Close every client owned by the session."""
        self.directory.close()
        self.calling.close()
        self.open_data.close()
        if self.token_provider is not None:
            self.token_provider.close()

    def __enter__(self) -> "AdminSession":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
