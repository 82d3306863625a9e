"""Unit tests for administrative client exceptions."""

from voice_admin.platform.clients.exceptions import (
    AdminAuthenticationError,
    AdminClientError,
    AdminConflictError,
    AdminConnectionError,
    AdminHTTPError,
    AdminNotFoundError,
    AdminProtocolError,
)


class TestAdminClientError:
    """Tests for AdminClientError base exception."""

    def test_stores_message(self):
        """Error stores the provided message."""
        error = AdminClientError("test error message")
        assert str(error) == "test error message"


class TestAdminConnectionError:
    """Tests for AdminConnectionError."""

    def test_inherits_from_base(self):
        assert isinstance(AdminConnectionError("refused"), AdminClientError)

    def test_message_without_url(self):
        """Error message formats without URL."""
        error = AdminConnectionError("timeout")
        assert str(error) == "Connection failed: timeout"

    def test_message_with_url(self):
        """Error message includes URL when provided."""
        error = AdminConnectionError("timeout", url="http://example.com")
        assert "http://example.com" in str(error)
        assert error.url == "http://example.com"


class TestAdminAuthenticationError:
    """Tests for AdminAuthenticationError."""

    def test_stores_status_code(self):
        error = AdminAuthenticationError("invalid_client", status_code=401)
        assert error.status_code == 401
        assert "Authentication failed" in str(error)


class TestAdminHTTPError:
    """Tests for the HTTP status errors."""

    def test_message_includes_status_and_url(self):
        error = AdminHTTPError("bad gateway", status_code=502, url="http://example.com/x")
        assert str(error) == "HTTP 502 from http://example.com/x: bad gateway"

    def test_not_found_is_http_error(self):
        error = AdminNotFoundError("missing")
        assert isinstance(error, AdminHTTPError)
        assert error.status_code == 404

    def test_conflict_is_http_error(self):
        error = AdminConflictError("exists")
        assert isinstance(error, AdminHTTPError)
        assert error.status_code == 409


class TestAdminProtocolError:
    """Tests for AdminProtocolError."""

    def test_inherits_from_base(self):
        error = AdminProtocolError("not json", url="http://example.com")
        assert isinstance(error, AdminClientError)
        assert "not json" in str(error)
