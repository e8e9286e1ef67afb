# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - media.py: Public resolution and URL-building endpoints
# - admin.py: Asset registration, linking and placeholder maintenance
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import admin
from . import health
from . import media

__all__ = [
    "admin",
    "health",
    "media",
]
