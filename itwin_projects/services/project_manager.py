"""Project, role and member operations over the endpoint client.

Each operation issues one call, compares the returned status with the single
status it expects and raises ApiError otherwise. Every project created
through the manager is tracked; ``close()`` deletes them all in creation
order. Callers must call ``close()`` when done (typically in ``finally``),
otherwise the created projects are left on the server.
"""

from __future__ import annotations

import logging
from urllib.parse import quote, urlencode

import httpx

from itwin_projects.errors import ApiError, CleanupError
from itwin_projects.integration.endpoint_client import EndpointClient
from itwin_projects.models.resources import (
    MEMBER_KEYS,
    PROJECT_KEYS,
    ROLE_KEYS,
    Member,
    MemberInvitation,
    Project,
    Role,
)
from itwin_projects.models.responses import EndpointResponse

logger = logging.getLogger(__name__)

# Ask the API for every project property, not just the default subset
FULL_REPRESENTATION = {"Prefer": "return=representation"}


def _expect(response: EndpointResponse, expected: int) -> None:
    if response.status != expected:
        raise ApiError(response.status, response.error_details)


class ProjectManager:
    """Resource operations for one session, with cleanup of created projects.

    Parameters
    ----------
    endpoint_client:
        Client bound to the session's credential.
    """

    def __init__(self, endpoint_client: EndpointClient) -> None:
        self._client = endpoint_client
        # Projects deleted in close(), in creation order
        self._created_projects: list[Project] = []

    @property
    def tracked_projects(self) -> list[Project]:
        return list(self._created_projects)

    # ------------------------------------------------------------------
    # GET
    # ------------------------------------------------------------------

    async def get_my_projects(
        self, project_number: str | None = None, search: str | None = None
    ) -> list[Project]:
        """Projects the user can access (first page only).

        ``project_number`` is an exact match filter. ``search`` is a slower
        wildcard match on project number or display name, used only when no
        project number is given.
        """
        query = ""
        if project_number and project_number.strip():
            logger.info("Getting list of my projects with projectNumber=%s", project_number)
            query = "?" + urlencode({"projectNumber": project_number}, quote_via=quote)
        elif search and search.strip():
            logger.info("Getting list of my projects with $search=%s", search)
            query = "?" + urlencode({"$search": search}, safe="$", quote_via=quote)
        else:
            logger.info("Getting list of my projects")

        response = await self._client.get_list(
            f"/projects{query}", Project, PROJECT_KEYS, FULL_REPRESENTATION
        )
        _expect(response, httpx.codes.OK)
        return self._report_list("get_my_projects", "projects", response.instances)

    async def get_project(self, project_id: str) -> Project | None:
        logger.info("Getting project with id %s", project_id)

        response = await self._client.get_single(
            f"/projects/{project_id}", Project, PROJECT_KEYS, FULL_REPRESENTATION
        )
        _expect(response, httpx.codes.OK)

        logger.info("Got project %s", project_id, extra={"operation": "get_project"})
        return response.instance

    async def get_my_favorite_projects(self) -> list[Project]:
        logger.info("Getting list of my favorite projects")

        response = await self._client.get_list(
            "/projects/favorites", Project, PROJECT_KEYS, FULL_REPRESENTATION
        )
        _expect(response, httpx.codes.OK)
        return self._report_list("get_my_favorite_projects", "favorites", response.instances)

    async def get_my_recent_projects(self) -> list[Project]:
        logger.info("Getting list of my recent projects")

        response = await self._client.get_list(
            "/projects/recents", Project, PROJECT_KEYS, FULL_REPRESENTATION
        )
        _expect(response, httpx.codes.OK)
        return self._report_list("get_my_recent_projects", "recents", response.instances)

    async def get_project_roles(self, project_id: str) -> list[Role]:
        logger.info("Getting list of roles for project %s", project_id)

        response = await self._client.get_list(f"/projects/{project_id}/roles", Role, ROLE_KEYS)
        _expect(response, httpx.codes.OK)
        return self._report_list("get_project_roles", "roles", response.instances)

    async def get_project_members(self, project_id: str) -> list[Member]:
        logger.info("Getting list of members for project %s", project_id)

        response = await self._client.get_list(
            f"/projects/{project_id}/members", Member, MEMBER_KEYS
        )
        _expect(response, httpx.codes.OK)
        return self._report_list("get_project_members", "members", response.instances)

    # ------------------------------------------------------------------
    # POST
    # ------------------------------------------------------------------

    async def create_project(self, project: Project | None = None) -> Project:
        """Create a project (a sample one by default) and track it for cleanup."""
        if project is None:
            project = Project.sample()

        logger.info("Creating project %s", project.display_name)

        response = await self._client.post("/projects", project, Project, PROJECT_KEYS)
        _expect(response, httpx.codes.CREATED)

        created = response.new_instance
        if created.id:
            self._created_projects.append(created)
        else:
            # Acknowledged without a representation, nothing to delete by id
            logger.warning("Project %s was created without an id", created.display_name)
        logger.info("Created project %s", created.id, extra={"operation": "create_project"})
        return created

    async def add_project_to_my_recents(self, project_id: str) -> None:
        """Mark a project as recently used.

        The server keeps a bounded list of recents per user (currently 25);
        adding one more drops the oldest.
        """
        logger.info("Adding project %s to my recents", project_id)

        response = await self._client.post_without_body(f"/projects/recents/{project_id}")
        _expect(response, httpx.codes.OK)

    async def add_project_to_my_favorites(self, project_id: str) -> None:
        logger.info("Adding project %s to my favorites", project_id)

        response = await self._client.post_without_body(f"/projects/favorites/{project_id}")
        _expect(response, httpx.codes.OK)

    async def create_project_role(self, project_id: str, role: Role | None = None) -> Role:
        if role is None:
            role = Role.sample()

        logger.info("Creating role %s for project %s", role.display_name, project_id)

        response = await self._client.post(
            f"/projects/{project_id}/roles", role, Role, ROLE_KEYS
        )
        _expect(response, httpx.codes.CREATED)

        logger.info("Created role %s", response.new_instance.id, extra={"operation": "create_role"})
        return response.new_instance

    async def add_project_member(
        self, project_id: str, email: str, role_name: str
    ) -> Member | MemberInvitation:
        """Invite a user to a project under one role.

        Returns the member representation, or the invitation itself when the
        server acknowledges without a body.
        """
        logger.info("Adding user to project %s", project_id)

        invitation = MemberInvitation(email=email, role_names=[role_name])
        response = await self._client.post(
            f"/projects/{project_id}/members", invitation, Member, MEMBER_KEYS
        )
        _expect(response, httpx.codes.CREATED)
        return response.new_instance

    # ------------------------------------------------------------------
    # PATCH
    # ------------------------------------------------------------------

    async def update_project(self, project: Project, new_name: str) -> Project | None:
        """Rename a project. Only ``displayName`` is sent; other fields keep their values."""
        logger.info("Updating project name for %s", project.id)

        response = await self._client.patch(
            f"/projects/{project.id}", Project(display_name=new_name), Project, PROJECT_KEYS
        )
        _expect(response, httpx.codes.OK)
        return response.updated_instance

    async def update_role(self, project_id: str, role: Role) -> Role | None:
        """Update a role's display name, description or permissions."""
        logger.info("Updating role %s", role.id)

        response = await self._client.patch(
            f"/projects/{project_id}/roles/{role.id}", role, Role, ROLE_KEYS
        )
        _expect(response, httpx.codes.OK)
        return response.updated_instance

    # ------------------------------------------------------------------
    # DELETE
    # ------------------------------------------------------------------

    async def delete_project(self, project_id: str) -> None:
        """Delete a project. Tracked projects stay tracked; close() tolerates 404."""
        response = await self._client.delete(f"/projects/{project_id}")
        _expect(response, httpx.codes.NO_CONTENT)

    # ------------------------------------------------------------------
    # Session end
    # ------------------------------------------------------------------

    async def close(self) -> None:
        """Delete every tracked project, attempting all of them.

        A project that is already gone (404) counts as deleted. Raises
        CleanupError after the loop if any other deletion failed. The tracked
        set is cleared either way, so a second close() is a no-op.
        """
        if not self._created_projects:
            return

        logger.info("Deleting %d project(s) created in this session", len(self._created_projects))

        failures: list[tuple[str, Exception]] = []
        for project in self._created_projects:
            try:
                await self.delete_project(project.id)
            except ApiError as exc:
                if exc.status == httpx.codes.NOT_FOUND:
                    logger.info("Project %s already deleted", project.id)
                    continue
                logger.error("Failed to delete project %s: %s", project.id, exc)
                failures.append((str(project.id), exc))
            except httpx.TransportError as exc:
                logger.error("Failed to delete project %s: %s", project.id, exc)
                failures.append((str(project.id), exc))

        self._created_projects.clear()

        if failures:
            raise CleanupError(failures)
        logger.info("Deleted all created projects", extra={"operation": "close"})

    def _report_list(self, operation: str, noun: str, instances: list | None) -> list:
        """Log the retrieved count; an absent payload is an empty result."""
        instances = instances or []
        logger.info(
            "Retrieved %d %s",
            len(instances),
            noun,
            extra={"operation": operation, "record_count": len(instances)},
        )
        return instances
