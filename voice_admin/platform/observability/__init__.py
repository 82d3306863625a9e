"""Observability infrastructure module.

This module provides run logging and error tracking:
- Structured logging with a per-run ID
- Bugsnag error reporting
"""

from voice_admin.platform.observability.errors import initialize_bugsnag
from voice_admin.platform.observability.logging import (
    configure_logging,
    get_logger,
    new_run_id,
    run_id_ctx,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "initialize_bugsnag",
    "new_run_id",
    "run_id_ctx",
]
