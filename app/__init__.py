# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: App entry point, middleware setup, error sink
# - config.py: Environment variable loading and settings
# - exceptions.py: Exception hierarchy and failure -> HTTP mapping
# - auth/: Bearer token authentication
# - routers/: API endpoint definitions
#
# The app layer is thin - it handles HTTP concerns and delegates
# decisions to the core/ package.
# =============================================================================

__version__ = "1.0.0"
