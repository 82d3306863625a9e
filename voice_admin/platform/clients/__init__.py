"""HTTP clients for external services.

This module provides clients for the identity provider, the directory, the
calling platform and the public-holiday open-data feed.
"""

from voice_admin.platform.clients.auth import BearerAuth, TokenProvider
from voice_admin.platform.clients.calling import CallingPlatformClient, ResourceAccount
from voice_admin.platform.clients.directory import DirectoryClient, DirectoryUser
from voice_admin.platform.clients.exceptions import (
    AdminAuthenticationError,
    AdminClientError,
    AdminConflictError,
    AdminConnectionError,
    AdminHTTPError,
    AdminNotFoundError,
    AdminProtocolError,
)
from voice_admin.platform.clients.open_data import OpenDataClient

__all__ = [
    # Auth
    "BearerAuth",
    "TokenProvider",
    # Clients
    "CallingPlatformClient",
    "DirectoryClient",
    "OpenDataClient",
    # Resources
    "DirectoryUser",
    "ResourceAccount",
    # Exceptions
    "AdminClientError",
    "AdminConnectionError",
    "AdminAuthenticationError",
    "AdminHTTPError",
    "AdminNotFoundError",
    "AdminConflictError",
    "AdminProtocolError",
]
