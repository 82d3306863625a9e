"""Tool infrastructure module.

This module provides the plumbing shared by every workflow:
- Settings loaded from the environment
- The authenticated administrative session
- HTTP clients and their exception hierarchy
- Logging and error reporting
"""

from voice_admin.platform.session import AdminSession
from voice_admin.platform.settings import Settings

__all__ = [
    "AdminSession",
    "Settings",
]
