"""Console entry point for the projects sample.

Runs the project lifecycle workflow and the membership workflow against the
live API with the caller's token, then deletes every project it created.
"""

from __future__ import annotations

import asyncio
import logging
import sys

from itwin_projects.auth.token import extract_email_claim
from itwin_projects.config.settings import ProjectsSampleSettings
from itwin_projects.errors import CleanupError, ProjectsSampleError
from itwin_projects.integration.endpoint_client import EndpointClient, SessionConfig
from itwin_projects.logging_config import configure_logging
from itwin_projects.services.project_manager import ProjectManager
from itwin_projects.services.workflows import (
    project_management_workflow,
    project_membership_workflow,
)

logger = logging.getLogger(__name__)

BANNER = "\n".join(
    [
        "*" * 89,
        "*           iTwin Platform Sample App" + " " * 51 + "*",
        "*" * 89,
    ]
)


def _read_authorization(settings: ProjectsSampleSettings) -> str:
    if settings.authorization:
        return settings.authorization
    print("Copy and paste the Authorization header from the 'Try It' sample in the API console:")
    return input().strip()


async def run(settings: ProjectsSampleSettings, authorization: str) -> None:
    """Run both workflows in one session and always close it.

    When a workflow fails, the failure is re-raised after cleanup; a cleanup
    failure on top of it is logged rather than replacing it.
    """
    member_email = settings.member_email or extract_email_claim(authorization)

    client = EndpointClient(SessionConfig.from_settings(settings, authorization))
    manager = ProjectManager(client)
    try:
        lifecycle = await project_management_workflow(manager, settings.search_text)
        logger.info(
            "Project workflow done: %d accessible, %d favorites, %d recents",
            len(lifecycle.all_projects),
            len(lifecycle.favorites),
            len(lifecycle.recents),
        )

        if member_email:
            membership = await project_membership_workflow(manager, member_email)
            logger.info(
                "Membership workflow done: %d roles, %d members",
                len(membership.roles),
                len(membership.members),
            )
        else:
            logger.warning("No email claim in token and ITWIN_MEMBER_EMAIL unset, skipping membership workflow")
    except Exception:
        try:
            await manager.close()
        except CleanupError as cleanup_exc:
            logger.error("Cleanup after failed workflow also failed: %s", cleanup_exc)
        raise

    await manager.close()


def main() -> int:
    settings = ProjectsSampleSettings()
    configure_logging(settings.log_level, json_format=settings.log_json)

    print(BANNER)
    authorization = _read_authorization(settings)

    try:
        asyncio.run(run(settings, authorization))
    except ProjectsSampleError as exc:
        logger.error("Sample failed: %s", exc)
        return 1

    logger.info("Sample completed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
