"""Errors raised by the tool itself rather than by a remote API."""


class ConfigurationError(ValueError):
    """Raised when a run is configured with invalid or missing input.

    Configuration errors fail the affected unit of work (a fetch, a CSV
    file) before any network call is made.
    """
