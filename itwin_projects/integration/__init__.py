"""Outbound HTTP integration with the iTwin Platform API."""

from itwin_projects.integration.endpoint_client import (
    JSON_CONTENT_TYPE,
    PATCH_CONTENT_TYPE,
    EndpointClient,
    SessionConfig,
)

__all__ = ["EndpointClient", "JSON_CONTENT_TYPE", "PATCH_CONTENT_TYPE", "SessionConfig"]
