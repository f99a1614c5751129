# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains framework-agnostic business logic:
# - models/: Request schemas and resource collection definitions
# - access.py: Not-found, ownership and update-filtering decisions
#
# Nothing here performs I/O. Route handlers load documents and pass the
# values in.
# =============================================================================
