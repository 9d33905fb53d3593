"""Configuration module — settings."""

from itwin_projects.config.settings import ProjectsSampleSettings

__all__ = ["ProjectsSampleSettings"]
