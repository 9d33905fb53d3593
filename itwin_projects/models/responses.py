"""Typed outcomes of one HTTP call.

Every response carries the status and raw body text, plus at most one of
error detail or decoded payload: error detail only on a non-success status,
payload only on a success status.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, model_validator

from itwin_projects.models.resources import ErrorDetails

T = TypeVar("T")


class EndpointResponse(BaseModel):
    """Outcome of a call with no decoded payload (DELETE)."""

    status: int
    content: str | None = None
    error_details: ErrorDetails | None = None

    def payload(self) -> Any:
        return None

    @model_validator(mode="after")
    def check_error_xor_payload(self) -> EndpointResponse:
        if self.error_details is not None and self.payload() is not None:
            raise ValueError("error_details and payload are mutually exclusive")
        return self


class ListResponse(EndpointResponse, Generic[T]):
    instances: list[T] | None = None

    def payload(self) -> Any:
        return self.instances


class SingleResponse(EndpointResponse, Generic[T]):
    instance: T | None = None

    def payload(self) -> Any:
        return self.instance


class CreateResponse(EndpointResponse, Generic[T]):
    new_instance: T | None = None

    def payload(self) -> Any:
        return self.new_instance


class UpdateResponse(EndpointResponse, Generic[T]):
    updated_instance: T | None = None

    def payload(self) -> Any:
        return self.updated_instance
