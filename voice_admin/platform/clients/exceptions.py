"""Custom exception hierarchy for the administrative API clients.

This module defines a structured exception hierarchy for handling errors
that can occur when talking to the identity provider, the directory, the
calling platform and the open-data feed.
"""


class AdminClientError(Exception):
    """Base exception for all administrative client errors."""


class AdminConnectionError(AdminClientError):
    """Raised when a connection to a remote API fails."""

    def __init__(self, message: str, url: str | None = None):
        self.url = url
        super().__init__(f"Connection failed{f' to {url}' if url else ''}: {message}")


class AdminAuthenticationError(AdminClientError):
    """Raised when the administrative session cannot be established."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(f"Authentication failed: {message}")


class AdminHTTPError(AdminClientError):
    """Raised when a remote API answers with an unexpected status."""

    def __init__(self, message: str, status_code: int, url: str | None = None):
        self.status_code = status_code
        self.url = url
        super().__init__(f"HTTP {status_code}{f' from {url}' if url else ''}: {message}")


class AdminNotFoundError(AdminHTTPError):
    """Raised when the requested resource does not exist."""

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message, status_code=404, url=url)


class AdminConflictError(AdminHTTPError):
    """Raised when creating a resource that already exists."""

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message, status_code=409, url=url)


class AdminProtocolError(AdminClientError):
    """Raised when a response body cannot be understood."""

    def __init__(self, message: str, url: str | None = None):
        self.url = url
        super().__init__(f"Protocol error{f' from {url}' if url else ''}: {message}")
