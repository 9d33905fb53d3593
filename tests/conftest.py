"""Shared fixtures for the test suite."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from itwin_projects.config.settings import ProjectsSampleSettings
from itwin_projects.integration.endpoint_client import EndpointClient, SessionConfig
from itwin_projects.services.project_manager import ProjectManager
from tests.helpers import AUTHORIZATION, BASE_URL, FakeProjectsApi


# ---------------------------------------------------------------------------
# Component fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def settings() -> ProjectsSampleSettings:
    return ProjectsSampleSettings(api_base_url=BASE_URL, authorization=AUTHORIZATION)


@pytest.fixture
def session_config(settings: ProjectsSampleSettings) -> SessionConfig:
    return SessionConfig.from_settings(settings, AUTHORIZATION)


@pytest.fixture
def endpoint_client(session_config: SessionConfig) -> EndpointClient:
    return EndpointClient(session_config)


@pytest.fixture
def manager(endpoint_client: EndpointClient) -> ProjectManager:
    return ProjectManager(endpoint_client)


@pytest.fixture
def fake_api():
    """Route every httpx request to a fresh FakeProjectsApi."""
    api = FakeProjectsApi()
    with patch("httpx.AsyncClient.request", new_callable=AsyncMock, side_effect=api.handle):
        yield api
