# =============================================================================
# core/models/project.py - Project Schemas
# =============================================================================
# A project belongs to an organization: its owner reference is the
# organization id supplied on create, not the user who sent the request.
# =============================================================================

from pydantic import BaseModel, Field

from .resource import ResourceDefinition


class ProjectFields(BaseModel):
    """
    Project fields accepted from clients.

    `organization_id` is only read on create, where it becomes the owner.

    Example:
        {
            "name": "Saturday pantry",
            "type": "recurring",
            "description": "Sort and hand out groceries",
            "desiredskills": "lifting, driving",
            "organization_id": "550e8400-e29b-41d4-a716-446655440000"
        }
    """

    name: str | None = Field(default=None, description="Project name")
    type: str | None = Field(default=None, description="Kind of engagement")
    description: str | None = Field(default=None, description="What volunteers will do")
    desiredskills: str | None = Field(default=None, description="Skills the project needs")
    organization_id: str | None = Field(
        default=None,
        description="Organization running the project (create only)"
    )

    owner: str | None = Field(default=None, description="Ignored; set by the server")

    model_config = {"extra": "ignore"}


class ProjectBody(BaseModel):
    """Request envelope: {"project": {...}}."""
    project: ProjectFields


PROJECT = ResourceDefinition(
    collection="projects",
    key="project",
    fields=("name", "type", "description", "desiredskills"),
    required=("name", "type", "description", "desiredskills"),
    payload_model=ProjectBody,
    owner_source="organization_id",
    owner_collection="organizations",
)
