"""Bearer token helpers.

The Authorization value is pasted by the user (e.g. from an API "Try It"
console) and used verbatim as a header. Only the email claim is read from it,
without signature verification, to pick the user invited in the membership
workflow.
"""

from __future__ import annotations

import jwt

from itwin_projects.errors import InvalidTokenError


def extract_bearer_token(authorization: str | None) -> str:
    """Return the JWT part of a ``Bearer <jwt>`` header value."""
    if not authorization or not authorization.startswith("Bearer "):
        raise InvalidTokenError()
    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise InvalidTokenError()
    return token


def extract_email_claim(authorization: str | None) -> str | None:
    """Read the ``email`` claim (case-insensitive name) from a bearer token."""
    token = extract_bearer_token(authorization)
    try:
        claims = jwt.decode(token, options={"verify_signature": False})
    except jwt.InvalidTokenError as exc:
        raise InvalidTokenError() from exc

    for name, value in claims.items():
        if name.lower() == "email":
            return value
    return None
