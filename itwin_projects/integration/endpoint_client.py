"""HTTP endpoint client for the iTwin Platform REST API.

Translates (verb, relative path, optional body, optional extra headers) into
a typed response. Success payloads are unwrapped from the container key the
caller names (``{"project": {...}}`` or ``{"projects": [...]}``); failed
calls carry the decoded ``error`` object when the body has one.

The client never raises on an unexpected status. Callers compare the
returned status with what they expect. It raises MalformedResponseError
only when a success status carries a body it cannot decode, and lets
transport errors (``httpx.TransportError``) propagate.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from itwin_projects.config.settings import ProjectsSampleSettings
from itwin_projects.errors import MalformedResponseError
from itwin_projects.models.resources import ContainerKeys, ErrorDetails, WireModel
from itwin_projects.models.responses import (
    CreateResponse,
    EndpointResponse,
    ListResponse,
    SingleResponse,
    UpdateResponse,
)
from itwin_projects.resilience.retry_policy import (
    TRANSIENT_STATUSES,
    NoRetryPolicy,
    RetryPolicy,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

JSON_CONTENT_TYPE = "application/json"
PATCH_CONTENT_TYPE = "application/json-patch+json"


@dataclass(frozen=True)
class SessionConfig:
    """Per-session connection settings, fixed once the session opens."""

    base_url: str
    authorization: str
    accept: str = "application/vnd.bentley.itwin-platform.v1+json"
    timeout_seconds: float = 30.0

    @classmethod
    def from_settings(
        cls, settings: ProjectsSampleSettings, authorization: str
    ) -> SessionConfig:
        return cls(
            base_url=settings.api_base_url.rstrip("/"),
            authorization=authorization,
            accept=settings.accept_header,
            timeout_seconds=settings.request_timeout_seconds,
        )

    def headers(self, custom_headers: Mapping[str, str] | None = None) -> dict[str, str]:
        """Default headers merged with per-call extras, built fresh per call."""
        headers = {"Accept": self.accept, "Authorization": self.authorization}
        if custom_headers:
            headers.update(custom_headers)
        return headers


class EndpointClient:
    """Issues API calls and maps responses to typed results.

    Parameters
    ----------
    config:
        Base URL, credential and Accept header for the session.
    retry_policy:
        Consulted for 429/503/504 responses. Defaults to NoRetryPolicy.
    """

    def __init__(
        self,
        config: SessionConfig,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        self._config = config
        self._retry_policy = retry_policy or NoRetryPolicy()

    # ------------------------------------------------------------------
    # GET
    # ------------------------------------------------------------------

    async def get_list(
        self,
        relative_url: str,
        model: type[M],
        keys: ContainerKeys,
        custom_headers: Mapping[str, str] | None = None,
    ) -> ListResponse[M]:
        """GET a collection; 200 decodes the plural container."""
        response = await self._send("GET", relative_url, custom_headers)

        if response.status_code == httpx.codes.OK:
            instances = None
            if response.content:
                instances = self._decode_list(response, keys.plural, model)
            return ListResponse(
                status=response.status_code, content=response.text, instances=instances
            )

        return ListResponse(
            status=response.status_code,
            content=response.text,
            error_details=self._decode_error(response),
        )

    async def get_single(
        self,
        relative_url: str,
        model: type[M],
        keys: ContainerKeys,
        custom_headers: Mapping[str, str] | None = None,
    ) -> SingleResponse[M]:
        """GET one resource; 200 decodes the singular container."""
        response = await self._send("GET", relative_url, custom_headers)

        if response.status_code == httpx.codes.OK:
            instance = None
            if response.content:
                instance = self._decode_single(response, keys.singular, model)
            return SingleResponse(
                status=response.status_code, content=response.text, instance=instance
            )

        return SingleResponse(
            status=response.status_code,
            content=response.text,
            error_details=self._decode_error(response),
        )

    # ------------------------------------------------------------------
    # POST
    # ------------------------------------------------------------------

    async def post(
        self,
        relative_url: str,
        body: WireModel,
        model: type[M],
        keys: ContainerKeys,
        custom_headers: Mapping[str, str] | None = None,
    ) -> CreateResponse[M]:
        """POST a new resource; 201 decodes the singular container.

        A success status with an empty body is an acknowledgment without a
        representation: the request body is echoed back as the new instance,
        so its ``id`` is whatever the caller sent (normally unset).
        """
        response = await self._send(
            "POST",
            relative_url,
            custom_headers,
            content=self._serialize(body),
            content_type=JSON_CONTENT_TYPE,
        )

        if not response.content:
            if response.is_success:
                logger.debug(
                    "Empty %d response for POST %s, echoing request body",
                    response.status_code,
                    relative_url,
                )
                return CreateResponse(status=response.status_code, content="", new_instance=body)
            return CreateResponse(status=response.status_code, content="")

        if response.status_code == httpx.codes.CREATED:
            return CreateResponse(
                status=response.status_code,
                content=response.text,
                new_instance=self._decode_single(response, keys.singular, model),
            )

        return CreateResponse(
            status=response.status_code,
            content=response.text,
            error_details=self._decode_error(response),
        )

    async def post_without_body(
        self,
        relative_url: str,
        custom_headers: Mapping[str, str] | None = None,
    ) -> CreateResponse[Any]:
        """POST with no request body; 200 is a bare acknowledgment."""
        response = await self._send("POST", relative_url, custom_headers)

        if response.status_code == httpx.codes.OK:
            return CreateResponse(status=response.status_code, content=response.text)

        return CreateResponse(
            status=response.status_code,
            content=response.text,
            error_details=self._decode_error(response),
        )

    # ------------------------------------------------------------------
    # PATCH / DELETE
    # ------------------------------------------------------------------

    async def patch(
        self,
        relative_url: str,
        body: WireModel,
        model: type[M],
        keys: ContainerKeys,
        custom_headers: Mapping[str, str] | None = None,
    ) -> UpdateResponse[M]:
        """PATCH the fields set on ``body``; 200 decodes the updated resource."""
        response = await self._send(
            "PATCH",
            relative_url,
            custom_headers,
            content=self._serialize(body),
            content_type=PATCH_CONTENT_TYPE,
        )

        if response.status_code == httpx.codes.OK:
            updated = None
            if response.content:
                updated = self._decode_single(response, keys.singular, model)
            return UpdateResponse(
                status=response.status_code, content=response.text, updated_instance=updated
            )

        return UpdateResponse(
            status=response.status_code,
            content=response.text,
            error_details=self._decode_error(response),
        )

    async def delete(
        self,
        relative_url: str,
        custom_headers: Mapping[str, str] | None = None,
    ) -> EndpointResponse:
        """DELETE a resource; 204 carries no body."""
        response = await self._send("DELETE", relative_url, custom_headers)

        if response.status_code == httpx.codes.NO_CONTENT:
            return EndpointResponse(status=response.status_code)

        return EndpointResponse(
            status=response.status_code,
            content=response.text,
            error_details=self._decode_error(response),
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _send(
        self,
        method: str,
        relative_url: str,
        custom_headers: Mapping[str, str] | None,
        content: bytes | None = None,
        content_type: str | None = None,
    ) -> httpx.Response:
        """Send one request, re-sending only when the retry policy asks to."""
        url = f"{self._config.base_url}{relative_url}"
        headers = self._config.headers(custom_headers)
        if content_type is not None:
            headers["Content-Type"] = content_type

        attempt = 0
        while True:
            started = time.monotonic()
            async with httpx.AsyncClient(timeout=self._config.timeout_seconds) as client:
                response = await client.request(
                    method, url, headers=headers, content=content
                )
            duration_ms = round((time.monotonic() - started) * 1000, 1)

            logger.debug(
                "%s %s -> %d (%.1fms)",
                method,
                relative_url,
                response.status_code,
                duration_ms,
                extra={
                    "method": method,
                    "path": relative_url,
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                },
            )

            if response.status_code not in TRANSIENT_STATUSES:
                return response

            if response.status_code == httpx.codes.TOO_MANY_REQUESTS:
                logger.warning(
                    "Rate limited on %s %s (attempt %d)", method, relative_url, attempt + 1
                )

            delay = self._retry_policy.next_delay(response.status_code, attempt)
            if delay is None:
                return response

            logger.warning(
                "Retrying %s %s after status %d in %.1fs",
                method,
                relative_url,
                response.status_code,
                delay,
            )
            await asyncio.sleep(delay)
            attempt += 1

    @staticmethod
    def _serialize(body: WireModel) -> bytes:
        return json.dumps(body.to_wire()).encode("utf-8")

    @staticmethod
    def _parse_body(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise MalformedResponseError(
                response.status_code, "body is not valid JSON", response.text
            ) from exc

    def _container(self, response: httpx.Response, key: str) -> Any:
        payload = self._parse_body(response)
        if not isinstance(payload, dict) or key not in payload:
            raise MalformedResponseError(
                response.status_code, f"missing '{key}' container", response.text
            )
        return payload[key]

    def _decode_single(self, response: httpx.Response, key: str, model: type[M]) -> M:
        raw = self._container(response, key)
        try:
            return model.model_validate(raw)
        except PydanticValidationError as exc:
            raise MalformedResponseError(
                response.status_code, f"invalid '{key}': {exc.error_count()} error(s)", response.text
            ) from exc

    def _decode_list(self, response: httpx.Response, key: str, model: type[M]) -> list[M]:
        raw = self._container(response, key)
        if not isinstance(raw, list):
            raise MalformedResponseError(
                response.status_code, f"'{key}' is not a list", response.text
            )
        try:
            return [model.model_validate(item) for item in raw]
        except PydanticValidationError as exc:
            raise MalformedResponseError(
                response.status_code, f"invalid '{key}': {exc.error_count()} error(s)", response.text
            ) from exc

    @staticmethod
    def _decode_error(response: httpx.Response) -> ErrorDetails | None:
        """Decode the ``error`` object of a failed call, if there is one."""
        if not response.content:
            return None
        try:
            payload = response.json()
        except ValueError:
            logger.warning(
                "Undecodable error body for status %d", response.status_code
            )
            return None

        error = payload.get("error") if isinstance(payload, dict) else None
        if not isinstance(error, dict):
            return None
        try:
            return ErrorDetails.model_validate(error)
        except PydanticValidationError:
            logger.warning("Unexpected error object shape for status %d", response.status_code)
            return None
