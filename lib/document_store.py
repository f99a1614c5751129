# =============================================================================
# lib/document_store.py - Document Store
# =============================================================================
# Persistence for the resource collections (organizations, projects,
# volunteers). Documents are plain dicts keyed by a UUID string:
#
#   {"id": ..., "owner": ..., <domain fields>, "created_at": ..., "updated_at": ...}
#
# Two backends share one interface:
# - InMemoryDocumentStore: dicts guarded by a lock (development, tests)
# - SupabaseDocumentStore: one PostgREST table per collection
#
# Both parse identifiers before use (MalformedIdError -> 400) and validate
# documents against their ResourceDefinition (DocumentValidationError -> 422).
#
# Usage:
#   store = create_store("memory")
#   doc = store.create("volunteers", {"description": "help", "skills": "driving", "owner": user_id})
#   store.find_by_id("volunteers", doc["id"])
# =============================================================================

from __future__ import annotations

import copy
import logging
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Mapping
from uuid import UUID, uuid4

from app.exceptions import DocumentValidationError, MalformedIdError, NotFoundError
from core.models import RESOURCES, ResourceDefinition
from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


class DocumentStore(ABC):
    """
    Interface every store backend implements.

    Subclasses implement the five collection operations plus ping();
    identifier parsing and document validation are shared here.
    """

    def __init__(self, resources: Mapping[str, ResourceDefinition] | None = None):
        self.resources = dict(resources or RESOURCES)

    # -------------------------------------------------------------------------
    # Shared helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def parse_id(value: Any) -> str:
        """
        Normalize a document identifier.

        Raises:
            MalformedIdError: If the value is not a UUID
        """
        try:
            return str(UUID(str(value)))
        except (TypeError, ValueError):
            raise MalformedIdError(value)

    def definition(self, collection: str) -> ResourceDefinition:
        return self.resources[collection]

    def _field_errors(
        self,
        definition: ResourceDefinition,
        values: Mapping[str, Any],
        check_missing: bool,
    ) -> dict[str, str]:
        errors = {}
        for name in definition.required:
            if name not in values and not check_missing:
                continue
            if values.get(name) in (None, ""):
                errors[name] = f"Path `{name}` is required."
        for name, value in values.items():
            if value is not None and not isinstance(value, str):
                errors[name] = f"Path `{name}` must be a string."
        return errors

    def build_document(self, collection: str, fields: Mapping[str, Any]) -> dict[str, Any]:
        """
        Validate creation fields and assemble a new document.

        Unknown keys are dropped. `owner` must be present; when the owner
        points into another collection it must also be a valid identifier.

        Raises:
            DocumentValidationError: With one entry per offending field
        """
        definition = self.definition(collection)
        values = {
            name: fields[name]
            for name in definition.fields
            if fields.get(name) is not None
        }
        errors = self._field_errors(definition, values, check_missing=True)

        owner = fields.get("owner")
        if owner in (None, ""):
            errors["owner"] = "Path `owner` is required."
        elif definition.owner_collection:
            try:
                owner = self.parse_id(owner)
            except MalformedIdError:
                errors["owner"] = "Path `owner` must be a valid identifier."

        if errors:
            raise DocumentValidationError(collection, errors)

        now = _utcnow()
        return {
            "id": str(uuid4()),
            "owner": str(owner),
            **values,
            "created_at": now,
            "updated_at": now,
        }

    def build_changes(self, collection: str, patch: Mapping[str, Any]) -> dict[str, Any]:
        """
        Validate an update patch against the collection's fields.

        Only domain fields survive; `owner`, `id` and timestamps cannot be
        written through an update. A required field may be left out but
        not cleared.

        Raises:
            DocumentValidationError: If a value is cleared or not a string
        """
        definition = self.definition(collection)
        changes = {name: patch[name] for name in definition.fields if name in patch}
        errors = self._field_errors(definition, changes, check_missing=False)
        if errors:
            raise DocumentValidationError(collection, errors)

        changes["updated_at"] = _utcnow()
        return changes

    # -------------------------------------------------------------------------
    # Backend operations
    # -------------------------------------------------------------------------

    @abstractmethod
    def find_all(
        self,
        collection: str,
        filter: Mapping[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """Return every document matching all key/value pairs of `filter`."""

    @abstractmethod
    def find_by_id(self, collection: str, document_id: Any) -> dict[str, Any] | None:
        """Return the document with this id, or None."""

    @abstractmethod
    def create(self, collection: str, fields: Mapping[str, Any]) -> dict[str, Any]:
        """Validate and insert a new document; return it with id and timestamps."""

    @abstractmethod
    def apply_update(
        self,
        collection: str,
        document: Mapping[str, Any],
        patch: Mapping[str, Any],
    ) -> dict[str, Any]:
        """Merge `patch` into a stored document; return the updated document."""

    @abstractmethod
    def delete(self, collection: str, document: Mapping[str, Any]) -> None:
        """Remove a stored document."""

    @abstractmethod
    def ping(self) -> None:
        """Raise if the backend is unreachable."""


# =============================================================================
# In-memory backend
# =============================================================================

class InMemoryDocumentStore(DocumentStore):
    """
    Dict-backed store.

    Returns copies so callers can never mutate stored state by reference.
    """

    def __init__(self, resources: Mapping[str, ResourceDefinition] | None = None):
        super().__init__(resources)
        self._collections: dict[str, dict[str, dict[str, Any]]] = {
            name: {} for name in self.resources
        }
        self._lock = threading.Lock()

    def find_all(self, collection, filter=None):
        criteria = dict(filter or {})
        with self._lock:
            documents = list(self._collections[collection].values())
        return [
            copy.deepcopy(doc)
            for doc in documents
            if all(doc.get(key) == value for key, value in criteria.items())
        ]

    def find_by_id(self, collection, document_id):
        document_id = self.parse_id(document_id)
        with self._lock:
            document = self._collections[collection].get(document_id)
        return copy.deepcopy(document) if document is not None else None

    def create(self, collection, fields):
        document = self.build_document(collection, fields)
        with self._lock:
            self._collections[collection][document["id"]] = document
        logger.info(f"Created {collection} document: {document['id']}")
        return copy.deepcopy(document)

    def apply_update(self, collection, document, patch):
        document_id = self.parse_id(document["id"])
        changes = self.build_changes(collection, patch)
        with self._lock:
            stored = self._collections[collection].get(document_id)
            if stored is None:
                # Deleted between lookup and update
                raise NotFoundError()
            stored.update(changes)
            updated = copy.deepcopy(stored)
        logger.info(f"Updated {collection} document: {document_id}")
        return updated

    def delete(self, collection, document):
        document_id = self.parse_id(document["id"])
        with self._lock:
            self._collections[collection].pop(document_id, None)
        logger.info(f"Deleted {collection} document: {document_id}")

    def ping(self):
        return None


# =============================================================================
# Supabase backend
# =============================================================================

# PostgREST / Postgres error codes the store translates
INVALID_TEXT_REPRESENTATION = "22P02"
NOT_NULL_VIOLATION = "23502"


class SupabaseDocumentStore(DocumentStore):
    """
    One Supabase table per collection.

    Each table has `id uuid primary key`, `owner text`, one text column per
    domain field, and `created_at` / `updated_at` timestamptz columns.
    """

    @property
    def client(self):
        return SupabaseClient.get_client()

    def _execute(self, collection: str, query, action: str, details: dict[str, Any] | None = None):
        try:
            return query.execute()
        except Exception as e:
            code = str(getattr(e, "code", "") or "")
            if code == INVALID_TEXT_REPRESENTATION:
                raise MalformedIdError((details or {}).get("id", ""))
            if code == NOT_NULL_VIOLATION:
                raise DocumentValidationError(collection, {"document": str(e)})
            raise SupabaseClientError(
                message=f"Failed to {action} {collection}: {e}",
                code=f"{action.upper()}_FAILED",
                suggestion=f"Check that the {collection} table exists and is reachable",
                details={"collection": collection, **(details or {})},
            )

    def find_all(self, collection, filter=None):
        query = self.client.table(collection).select("*")
        for key, value in (filter or {}).items():
            query = query.eq(key, value)
        response = self._execute(collection, query.order("created_at"), "fetch")
        return response.data or []

    def find_by_id(self, collection, document_id):
        document_id = self.parse_id(document_id)
        query = (
            self.client.table(collection)
            .select("*")
            .eq("id", document_id)
            .limit(1)
        )
        response = self._execute(collection, query, "fetch", {"id": document_id})
        rows = response.data or []
        return rows[0] if rows else None

    def create(self, collection, fields):
        document = self.build_document(collection, fields)
        response = self._execute(
            collection,
            self.client.table(collection).insert(document),
            "insert",
        )
        if not response.data:
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA",
                details={"collection": collection},
            )
        created = response.data[0]
        logger.info(f"Created {collection} document: {created['id']}")
        return created

    def apply_update(self, collection, document, patch):
        document_id = self.parse_id(document["id"])
        changes = self.build_changes(collection, patch)
        query = self.client.table(collection).update(changes).eq("id", document_id)
        response = self._execute(collection, query, "update", {"id": document_id})
        if not response.data:
            raise NotFoundError()
        logger.info(f"Updated {collection} document: {document_id}")
        return response.data[0]

    def delete(self, collection, document):
        document_id = self.parse_id(document["id"])
        query = self.client.table(collection).delete().eq("id", document_id)
        self._execute(collection, query, "delete", {"id": document_id})
        logger.info(f"Deleted {collection} document: {document_id}")

    def ping(self):
        collection = next(iter(self.resources))
        query = self.client.table(collection).select("id").limit(1)
        self._execute(collection, query, "fetch")


def create_store(backend: str) -> DocumentStore:
    """
    Build the store named by STORE_BACKEND.

    Raises:
        ValueError: For an unknown backend name
    """
    if backend == "memory":
        return InMemoryDocumentStore()
    if backend == "supabase":
        return SupabaseDocumentStore()
    raise ValueError(f"Unknown store backend: {backend}")
