# =============================================================================
# core/models/organization.py - Organization Schemas
# =============================================================================
# An organization is created and controlled by a single user.
# Projects reference the organization that runs them.
# =============================================================================

from pydantic import BaseModel, Field

from .resource import ResourceDefinition


class OrganizationFields(BaseModel):
    """
    Organization fields accepted from clients.

    Every field is optional here: required-field checks belong to the
    store, and updates only send what changes. Unknown keys are dropped.

    Example:
        {
            "name": "Food Bank of Springfield",
            "description": "Weekly grocery distribution",
            "location": "Springfield"
        }
    """

    name: str | None = Field(default=None, description="Organization name")
    description: str | None = Field(default=None, description="What the organization does")
    location: str | None = Field(default=None, description="Where the organization operates")

    # Accepted so the ownership filter can discard it; never persisted from input
    owner: str | None = Field(default=None, description="Ignored; set by the server")

    model_config = {"extra": "ignore"}


class OrganizationBody(BaseModel):
    """Request envelope: {"organization": {...}}."""
    organization: OrganizationFields


ORGANIZATION = ResourceDefinition(
    collection="organizations",
    key="organization",
    fields=("name", "description", "location"),
    required=("name", "description"),
    payload_model=OrganizationBody,
    list_own_only=True,
)
