"""Composite sample workflows.

Both workflows only sequence ProjectManager operations. Neither deletes what
it creates; that happens when the caller closes the manager.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from itwin_projects.models.resources import Member, Project, Role
from itwin_projects.services.project_manager import ProjectManager

logger = logging.getLogger(__name__)

ADMIN_PERMISSIONS = (
    "administration_invite_member",
    "administration_manage_roles",
    "administration_remove_member",
)


@dataclass
class ProjectWorkflowResult:
    created: Project
    retrieved: Project | None = None
    all_projects: list[Project] = field(default_factory=list)
    by_number: list[Project] = field(default_factory=list)
    by_search: list[Project] = field(default_factory=list)
    updated: Project | None = None
    favorites: list[Project] = field(default_factory=list)
    recents: list[Project] = field(default_factory=list)


@dataclass
class MembershipWorkflowResult:
    project: Project
    role: Role
    roles: list[Role] = field(default_factory=list)
    members: list[Member] = field(default_factory=list)


async def project_management_workflow(
    manager: ProjectManager, search_text: str = "iTwin Sample"
) -> ProjectWorkflowResult:
    """Create, query, rename, and mark a project as recent and favorite."""
    created = await manager.create_project()
    result = ProjectWorkflowResult(created=created)

    result.retrieved = await manager.get_project(created.id)
    result.all_projects = await manager.get_my_projects()
    result.by_number = await manager.get_my_projects(project_number=created.project_number)
    result.by_search = await manager.get_my_projects(search=search_text)
    result.updated = await manager.update_project(created, f"{created.display_name} Updated")

    await manager.add_project_to_my_recents(created.id)
    await manager.add_project_to_my_favorites(created.id)

    result.favorites = await manager.get_my_favorite_projects()
    result.recents = await manager.get_my_recent_projects()
    return result


async def project_membership_workflow(
    manager: ProjectManager, member_email: str
) -> MembershipWorkflowResult:
    """Create a project and an admin role, then invite a user under that role."""
    project = await manager.create_project()

    role = await manager.create_project_role(project.id)
    role.permissions = list(ADMIN_PERMISSIONS)
    role = await manager.update_role(project.id, role) or role

    result = MembershipWorkflowResult(project=project, role=role)
    result.roles = await manager.get_project_roles(project.id)

    await manager.add_project_member(project.id, member_email, role.display_name)
    result.members = await manager.get_project_members(project.id)
    return result
