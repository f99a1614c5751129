# =============================================================================
# core/access.py - Lookup, Ownership and Update Filtering
# =============================================================================
# Pure decision functions every resource route runs through:
#
#   handle_404(document)                  -> document, or NotFoundError
#   require_ownership(caller, document)   -> None, or ForbiddenError
#   sanitize_update(payload)              -> payload minus owner / "" values
#
# No I/O happens here. Callers load documents from the store and hand the
# values in; failures propagate to the error sink in app/exceptions.py.
# =============================================================================

from typing import Any, Callable, Mapping, TypeVar

from app.auth.models import AuthUser
from app.exceptions import ForbiddenError, NotFoundError

T = TypeVar("T")

OwnerAccessor = Callable[[Mapping[str, Any]], Any]


def document_owner(document: Mapping[str, Any]) -> Any:
    """Default owner accessor: the document's own `owner` field."""
    return document.get("owner")


def handle_404(document: T | None) -> T:
    """
    Collapse an absent lookup result into NotFoundError.

    Args:
        document: Result of a lookup-by-id (None when nothing matched)

    Returns:
        The document, unchanged

    Raises:
        NotFoundError: If the lookup found nothing
    """
    if document is None:
        raise NotFoundError()
    return document


def require_ownership(
    caller: AuthUser,
    document: Mapping[str, Any],
    owner_of: OwnerAccessor = document_owner,
) -> None:
    """
    Check that the caller controls a document before it is mutated.

    Args:
        caller: The authenticated identity for this request
        document: A document already passed through handle_404()
        owner_of: Returns the identity that controls the document. Projects
            pass an accessor that resolves their organization's owner.

    Raises:
        ForbiddenError: If the controlling owner is missing or is not the caller
    """
    owner = owner_of(document)
    if owner is None or str(owner) != str(caller.id):
        raise ForbiddenError()


def sanitize_update(payload: Mapping[str, Any]) -> dict[str, Any]:
    """
    Filter a partial-update payload before it reaches the store.

    Drops `owner` unconditionally, and drops every key whose value is the
    empty string (clients send "" for fields they want left alone).
    Running it twice gives the same result as running it once.

    Example:
        sanitize_update({"name": "", "owner": "u2", "location": "Lyon"})
        # {"location": "Lyon"}
    """
    return {
        key: value
        for key, value in payload.items()
        if key != "owner" and value != ""
    }
