# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains the request schemas and collection definitions:
# - resource.py: ResourceDefinition (what a collection stores and who owns it)
# - organization.py: Organization payloads
# - project.py: Project payloads (owned by an organization)
# - volunteer.py: Volunteer payloads
#
# RESOURCES maps collection name -> definition and is shared by the
# document store and the router factory.
# =============================================================================

from .resource import ResourceDefinition
from .organization import ORGANIZATION, OrganizationBody, OrganizationFields
from .project import PROJECT, ProjectBody, ProjectFields
from .volunteer import VOLUNTEER, VolunteerBody, VolunteerFields

RESOURCES: dict[str, ResourceDefinition] = {
    definition.collection: definition
    for definition in (ORGANIZATION, PROJECT, VOLUNTEER)
}

__all__ = [
    "ResourceDefinition",
    "RESOURCES",
    # Organizations
    "ORGANIZATION",
    "OrganizationBody",
    "OrganizationFields",
    # Projects
    "PROJECT",
    "ProjectBody",
    "ProjectFields",
    # Volunteers
    "VOLUNTEER",
    "VolunteerBody",
    "VolunteerFields",
]
