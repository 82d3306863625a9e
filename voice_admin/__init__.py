"""voice-admin - Administrative tooling for a cloud calling tenant: holiday schedules, resource accounts and contacts."""

from .platform.constants import __version__

__all__ = ["__version__"]
