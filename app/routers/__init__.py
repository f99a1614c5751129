# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers:
# - health.py: Health check endpoints
# - resources.py: Router factory for the resource collections
#   (organizations, projects, volunteers)
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import resources

__all__ = [
    "health",
    "resources",
]
