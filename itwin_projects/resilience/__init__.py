"""Resilience seams for the endpoint client."""

from itwin_projects.resilience.retry_policy import (
    TRANSIENT_STATUSES,
    NoRetryPolicy,
    RetryPolicy,
)

__all__ = ["NoRetryPolicy", "RetryPolicy", "TRANSIENT_STATUSES"]
