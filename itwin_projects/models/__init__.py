"""Public models for the projects sample."""

from itwin_projects.models.resources import (
    MEMBER_KEYS,
    PROJECT_KEYS,
    ROLE_KEYS,
    ContainerKeys,
    ErrorDetails,
    Member,
    MemberInvitation,
    Project,
    Role,
    WireModel,
)
from itwin_projects.models.responses import (
    CreateResponse,
    EndpointResponse,
    ListResponse,
    SingleResponse,
    UpdateResponse,
)

__all__ = [
    "MEMBER_KEYS",
    "PROJECT_KEYS",
    "ROLE_KEYS",
    "ContainerKeys",
    "CreateResponse",
    "EndpointResponse",
    "ErrorDetails",
    "ListResponse",
    "Member",
    "MemberInvitation",
    "Project",
    "Role",
    "SingleResponse",
    "UpdateResponse",
    "WireModel",
]
