"""Bugsnag error reporting integration.

Reports ERROR-level log entries of a run (failed jurisdictions, failed
account creations, authentication failures) to Bugsnag when configured.
"""

import logging

import bugsnag
from bugsnag.handlers import BugsnagHandler


def initialize_bugsnag(api_key: str, release_stage: str) -> bool:
    """Initialize Bugsnag error reporting.

    Args:
        api_key: Bugsnag project API key
        release_stage: Environment identifier (e.g., "production", "development", "local")

    Returns:
        True if a handler was attached to the root logger.

    Note:
        No-op when release_stage is "local" to avoid reporting during local runs.
    """
    if release_stage == "local":
        return False
    logger = logging.getLogger()
    bugsnag.configure(
        api_key=api_key,
        release_stage=release_stage,
        auto_notify=True,
    )
    handler = BugsnagHandler()
    handler.setLevel(logging.ERROR)
    logger.addHandler(handler)
    return True
