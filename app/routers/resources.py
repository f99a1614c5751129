# =============================================================================
# app/routers/resources.py - Resource CRUD Endpoints
# =============================================================================
# One router factory serves every resource collection. Each endpoint runs
# the same pipeline:
#
#   authenticate -> load by id -> handle_404 -> require_ownership
#                -> sanitize_update -> store mutation -> response
#
# (list skips the lookup and ownership steps; create checks ownership of
# the parent organization for projects). Any failure propagates unhandled
# to the error sink registered in main.py.
#
# Mounted in main.py as:
#   /api/v1/organizations   /api/v1/projects   /api/v1/volunteers
#   /api/v1/organizations/{id}/projects
# =============================================================================

import logging
from typing import Any

from fastapi import APIRouter, Depends, Path, Response, status

from app.auth import get_current_user, AuthUser
from app.dependencies import StoreDep
from app.exceptions import DocumentValidationError, MalformedIdError
from core.access import (
    OwnerAccessor,
    document_owner,
    handle_404,
    require_ownership,
    sanitize_update,
)
from core.models import RESOURCES, ResourceDefinition
from lib.document_store import DocumentStore

logger = logging.getLogger(__name__)


def _stamp_owner(definition: ResourceDefinition, user: AuthUser, fields: dict[str, Any]) -> Any:
    """Work out a new document's owner; client-sent `owner` is never used."""
    fields.pop("owner", None)
    if definition.owner_source == "caller":
        return user.id
    return fields.pop(definition.owner_source, None)


def _require_parent(
    store: DocumentStore,
    definition: ResourceDefinition,
    user: AuthUser,
    owner: Any,
) -> None:
    """
    Check that a new document's owner reference names a parent the caller
    controls.

    Raises:
        DocumentValidationError: If the parent does not exist
        ForbiddenError: If the parent belongs to another user
    """
    if definition.owner_collection is None or owner in (None, ""):
        return

    try:
        parent = store.find_by_id(definition.owner_collection, owner)
    except MalformedIdError:
        parent = None
    if parent is None:
        parent_key = RESOURCES[definition.owner_collection].key
        raise DocumentValidationError(
            definition.collection,
            {"owner": f"Path `owner` must reference an existing {parent_key}."},
        )
    require_ownership(user, parent)


def _owner_accessor(
    store: DocumentStore,
    definition: ResourceDefinition,
    document: dict[str, Any],
) -> OwnerAccessor:
    """
    Build the accessor that yields the user controlling `document`.

    When the owner reference points into another collection (projects ->
    organizations) the controlling user is that parent's owner. A missing
    parent leaves the document without a controlling user.
    """
    if definition.owner_collection is None:
        return document_owner

    parent = store.find_by_id(definition.owner_collection, document["owner"])
    parent_owner = parent.get("owner") if parent else None
    return lambda _document: parent_owner


def build_resource_router(definition: ResourceDefinition) -> APIRouter:
    """
    Create the list/show/create/update/delete endpoints for one resource.

    Args:
        definition: The collection to serve

    Returns:
        APIRouter: Routes relative to the collection prefix
    """
    router = APIRouter()
    collection = definition.collection
    key = definition.key
    Body = definition.payload_model

    @router.get("", name=f"list_{collection}")
    async def list_documents(
        store: StoreDep,
        user: AuthUser = Depends(get_current_user),
    ):
        """List documents; organizations are limited to the caller's own."""
        criteria = {"owner": user.id} if definition.list_own_only else None
        documents = store.find_all(collection, criteria)
        return {collection: documents}

    @router.get("/{document_id}", name=f"show_{key}")
    async def show_document(
        store: StoreDep,
        document_id: str = Path(description=f"{key} id"),
        user: AuthUser = Depends(get_current_user),
    ):
        document = handle_404(store.find_by_id(collection, document_id))
        return {key: document}

    @router.post("", status_code=status.HTTP_201_CREATED, name=f"create_{key}")
    async def create_document(
        body: Body,
        store: StoreDep,
        user: AuthUser = Depends(get_current_user),
    ):
        """
        Create a document owned by the caller, or by the given organization.

        Projects may only be filed under an existing organization the
        caller owns.
        """
        fields = getattr(body, key).model_dump(exclude_unset=True)
        fields["owner"] = _stamp_owner(definition, user, fields)
        _require_parent(store, definition, user, fields["owner"])
        document = store.create(collection, fields)
        return {key: document}

    @router.patch(
        "/{document_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        name=f"update_{key}",
    )
    async def update_document(
        body: Body,
        store: StoreDep,
        document_id: str = Path(description=f"{key} id"),
        user: AuthUser = Depends(get_current_user),
    ):
        """
        Apply a partial update.

        `owner` and empty-string values are dropped; an update that ends up
        empty still succeeds.
        """
        document = handle_404(store.find_by_id(collection, document_id))
        require_ownership(user, document, owner_of=_owner_accessor(store, definition, document))

        patch = sanitize_update(getattr(body, key).model_dump(exclude_unset=True))
        store.apply_update(collection, document, patch)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.delete(
        "/{document_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        name=f"delete_{key}",
    )
    async def delete_document(
        store: StoreDep,
        document_id: str = Path(description=f"{key} id"),
        user: AuthUser = Depends(get_current_user),
    ):
        document = handle_404(store.find_by_id(collection, document_id))
        require_ownership(user, document, owner_of=_owner_accessor(store, definition, document))

        store.delete(collection, document)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router


def build_owned_listing_router(definition: ResourceDefinition) -> APIRouter:
    """
    Create `GET /{owner_id}/<collection>` for a resource owned by another
    collection, e.g. the projects run by one organization.

    Mounted under the owner collection's prefix.
    """
    router = APIRouter()
    collection = definition.collection

    @router.get(f"/{{owner_id}}/{collection}", name=f"list_{collection}_by_owner")
    async def list_owned_documents(
        store: StoreDep,
        owner_id: str = Path(description="Owning document id"),
        user: AuthUser = Depends(get_current_user),
    ):
        owner_id = store.parse_id(owner_id)
        documents = store.find_all(collection, {"owner": owner_id})
        return {collection: documents}

    return router
