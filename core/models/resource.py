# =============================================================================
# core/models/resource.py - Resource Definitions
# =============================================================================
# A ResourceDefinition describes one document collection:
# - which domain fields it stores and which of them are required
# - the envelope key used in request/response bodies
# - where a new document's owner comes from
# - whether the owner reference points at another collection
#
# The store uses definitions to validate documents; the router factory uses
# them to build the five CRUD endpoints of each resource.
# =============================================================================

from dataclasses import dataclass

from pydantic import BaseModel


@dataclass(frozen=True)
class ResourceDefinition:
    """
    Static description of a resource collection.

    Attributes:
        collection: Collection (table) name, also the plural URL segment
        key: Singular envelope key, e.g. "organization"
        fields: Domain fields the collection stores
        required: Subset of `fields` that must be non-empty on create
        payload_model: Pydantic envelope accepted on create/update
        owner_source: "caller" stamps the authenticated user's id;
            otherwise the named payload field supplies the owner reference
        owner_collection: Collection the owner reference points into,
            or None when the owner is a user
        list_own_only: Listing returns only documents the caller owns
    """

    collection: str
    key: str
    fields: tuple[str, ...]
    required: tuple[str, ...]
    payload_model: type[BaseModel]
    owner_source: str = "caller"
    owner_collection: str | None = None
    list_own_only: bool = False