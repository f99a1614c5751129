# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Volunteer Match API:
# - test_access.py: Not-found, ownership and update-filter decisions
# - test_exceptions.py: Failure -> HTTP response mapping
# - test_document_store.py: Store validation and both backends
# - test_auth.py: Bearer token verification
# - test_routes.py: Resource endpoints end to end
# - test_models.py: Request schemas and resource definitions
# - test_health.py: Health endpoints and settings validation
#
# Run tests with: pytest
# =============================================================================
