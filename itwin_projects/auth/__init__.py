"""Credential helpers."""

from itwin_projects.auth.token import extract_bearer_token, extract_email_claim

__all__ = ["extract_bearer_token", "extract_email_claim"]
