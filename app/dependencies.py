# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from app.config import settings
from lib.document_store import DocumentStore, create_store


@lru_cache
def get_store() -> DocumentStore:
    """
    Get the process-wide document store.

    The backend is chosen by STORE_BACKEND. Tests replace this dependency
    through app.dependency_overrides.
    """
    return create_store(settings.STORE_BACKEND)


# Type alias for dependency injection
StoreDep = Annotated[DocumentStore, Depends(get_store)]
