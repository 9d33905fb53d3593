"""Error hierarchy for the projects sample.

All sample-specific errors extend ProjectsSampleError. The endpoint client
never raises on an unexpected status; the project manager decides which
status each operation expects and raises ApiError otherwise.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from itwin_projects.models.resources import ErrorDetails


class ProjectsSampleError(Exception):
    """Base error for all sample-specific errors."""

    message: str = "Projects sample error"

    def __init__(self, message: str | None = None, **kwargs: object) -> None:
        self.message = message or self.__class__.message
        self.details = kwargs
        super().__init__(self.message)


def describe_status(status: int) -> str:
    """Render a status code with its reason phrase, e.g. ``404 Not Found``."""
    reason = httpx.codes.get_reason_phrase(status)
    return f"{status} {reason}" if reason else str(status)


class ApiError(ProjectsSampleError):
    """The API answered with a status other than the expected one."""

    message = "Unexpected API status"

    def __init__(self, status: int, error_details: ErrorDetails | None = None) -> None:
        self.status = status
        self.error_details = error_details
        if error_details is not None:
            text = f"{describe_status(status)}: {error_details.code} - {error_details.message}"
        else:
            text = f"{describe_status(status)}: no error detail"
        super().__init__(text, status=status)


class MalformedResponseError(ProjectsSampleError):
    """A success status carried a body that does not have the expected shape."""

    message = "Malformed response"

    def __init__(self, status: int, reason: str, content: str | None = None) -> None:
        self.status = status
        self.reason = reason
        self.content = content
        super().__init__(
            f"{describe_status(status)}: malformed response body ({reason})",
            status=status,
        )


class CleanupError(ProjectsSampleError):
    """One or more tracked resources could not be deleted at session close."""

    message = "Cleanup failed"

    def __init__(self, failures: list[tuple[str, Exception]]) -> None:
        self.failures = failures
        summary = "; ".join(f"{resource_id}: {exc}" for resource_id, exc in failures)
        super().__init__(
            f"Failed to delete {len(failures)} tracked resource(s): {summary}",
            failed=len(failures),
        )


class InvalidTokenError(ProjectsSampleError):
    """The authorization value is not a decodable bearer JWT."""

    message = (
        "The jwt token is incorrect. Ensure that 'Bearer ' precedes the token in the header."
    )
