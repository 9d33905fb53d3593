"""Pydantic Settings for the projects sample.

All environment variables use the ITWIN_ prefix.
Example: ITWIN_AUTHORIZATION="Bearer eyJ...", ITWIN_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class ProjectsSampleSettings(BaseSettings):
    """Sample configuration validated from environment variables."""

    # API
    api_base_url: str = "https://api.bentley.com"
    accept_header: str = "application/vnd.bentley.itwin-platform.v1+json"
    request_timeout_seconds: float = Field(default=30.0, gt=0)

    # Credential, prompted for on the console when unset
    authorization: str | None = None  # Full header value, "Bearer <jwt>"
    member_email: str | None = None  # Defaults to the token's email claim

    # Workflows
    search_text: str = "iTwin Sample"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    model_config = {"env_prefix": "ITWIN_"}
