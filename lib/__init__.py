# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains persistence utilities:
# - supabase_client.py: Shared Supabase client singleton
# - document_store.py: Document store interface and its backends
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.document_store import (
    DocumentStore,
    InMemoryDocumentStore,
    SupabaseDocumentStore,
    create_store,
)

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Store
    "DocumentStore",
    "InMemoryDocumentStore",
    "SupabaseDocumentStore",
    "create_store",
]
