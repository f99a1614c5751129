# =============================================================================
# core/models/volunteer.py - Volunteer Schemas
# =============================================================================

from pydantic import BaseModel, Field

from .resource import ResourceDefinition


class VolunteerFields(BaseModel):
    """Volunteer profile fields accepted from clients."""

    description: str | None = Field(default=None, description="About the volunteer")
    skills: str | None = Field(default=None, description="Skills offered")

    owner: str | None = Field(default=None, description="Ignored; set by the server")

    model_config = {"extra": "ignore"}


class VolunteerBody(BaseModel):
    """Request envelope: {"volunteer": {...}}."""
    volunteer: VolunteerFields


VOLUNTEER = ResourceDefinition(
    collection="volunteers",
    key="volunteer",
    fields=("description", "skills"),
    required=("description", "skills"),
    payload_model=VolunteerBody,
)
