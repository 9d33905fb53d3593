"""Pluggable retry seam for rate-limited and transient responses.

The endpoint client consults a RetryPolicy only when a response carries one
of TRANSIENT_STATUSES. The default NoRetryPolicy never retries, so a 429 is
handed back to the caller as-is. A backoff policy can be supplied without
changing the client.
"""

from __future__ import annotations

from typing import Protocol

import httpx

TRANSIENT_STATUSES = frozenset(
    {
        httpx.codes.TOO_MANY_REQUESTS,
        httpx.codes.SERVICE_UNAVAILABLE,
        httpx.codes.GATEWAY_TIMEOUT,
    }
)


class RetryPolicy(Protocol):
    def next_delay(self, status_code: int, attempt: int) -> float | None:
        """Seconds to wait before re-sending, or None to give up.

        ``attempt`` counts from 0 for the first response received.
        """
        ...


class NoRetryPolicy:
    """Never retries."""

    def next_delay(self, status_code: int, attempt: int) -> float | None:
        return None
