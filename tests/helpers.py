"""Response builders, a fake in-memory Projects API, and hypothesis strategies."""

from __future__ import annotations

import json
import uuid

import httpx
from hypothesis import strategies as st

BASE_URL = "https://api.example.test"
AUTHORIZATION = "Bearer test-token"


# ---------------------------------------------------------------------------
# Response helpers
# ---------------------------------------------------------------------------

def make_response(
    status: int,
    body: object | None = None,
    text: str | None = None,
    method: str = "GET",
) -> httpx.Response:
    """Build an httpx.Response with a JSON body, raw text, or nothing."""
    request = httpx.Request(method, BASE_URL)
    if body is not None:
        return httpx.Response(status, json=body, request=request)
    if text is not None:
        return httpx.Response(status, text=text, request=request)
    return httpx.Response(status, request=request)


def error_body(code: str, message: str) -> dict:
    return {"error": {"code": code, "message": message}}


# ---------------------------------------------------------------------------
# Fake API
# ---------------------------------------------------------------------------

class FakeProjectsApi:
    """In-memory stand-in for the Projects API, used as a request side effect.

    ``overrides`` maps (method, path) to a canned response and
    ``method_overrides`` maps a method to one for every path; ``calls``
    records every request as (method, path, query, headers, body).
    """

    def __init__(self) -> None:
        self.projects: dict[str, dict] = {}
        self.roles: dict[str, dict[str, dict]] = {}
        self.members: dict[str, list[dict]] = {}
        self.favorites: list[str] = []
        self.recents: list[str] = []
        self.overrides: dict[tuple[str, str], httpx.Response] = {}
        self.method_overrides: dict[str, httpx.Response] = {}
        self.calls: list[tuple[str, str, dict, dict, dict | None]] = []

    async def handle(self, method, url, headers=None, content=None, **kwargs) -> httpx.Response:
        parsed = httpx.URL(url)
        path = parsed.path
        query = dict(parsed.params)
        body = json.loads(content) if content else None
        self.calls.append((method, path, query, dict(headers or {}), body))

        if (method, path) in self.overrides:
            return self.overrides[(method, path)]
        if method in self.method_overrides:
            return self.method_overrides[method]
        return self._route(method, path.strip("/").split("/"), query, body)

    def paths(self, method: str | None = None) -> list[str]:
        return [path for m, path, *_ in self.calls if method is None or m == method]

    def _route(self, method, parts, query, body) -> httpx.Response:
        # parts[0] == "projects"
        if len(parts) == 1:
            if method == "POST":
                return self._create_project(body)
            return self._list_projects(query)

        if parts[1] in ("favorites", "recents"):
            bucket = self.favorites if parts[1] == "favorites" else self.recents
            if len(parts) == 2:
                return make_response(
                    200, {"projects": [self.projects[p] for p in bucket if p in self.projects]}
                )
            if parts[2] not in self.projects:
                return self._not_found("ProjectNotFound")
            bucket.append(parts[2])
            return make_response(200, method="POST")

        project_id = parts[1]
        if project_id not in self.projects:
            return self._not_found("ProjectNotFound")

        if len(parts) == 2:
            if method == "GET":
                return make_response(200, {"project": self.projects[project_id]})
            if method == "PATCH":
                self.projects[project_id].update(body)
                return make_response(200, {"project": self.projects[project_id]})
            if method == "DELETE":
                del self.projects[project_id]
                return make_response(204, method="DELETE")

        if parts[2] == "roles":
            roles = self.roles.setdefault(project_id, {})
            if method == "POST":
                role = dict(body, id=str(uuid.uuid4()))
                roles[role["id"]] = role
                return make_response(201, {"role": role}, method="POST")
            if method == "GET":
                return make_response(200, {"roles": list(roles.values())})
            if method == "PATCH":
                role = roles.get(parts[3])
                if role is None:
                    return self._not_found("RoleNotFound")
                role.update({k: v for k, v in body.items() if k != "id"})
                return make_response(200, {"role": role})

        if parts[2] == "members":
            members = self.members.setdefault(project_id, [])
            if method == "POST":
                member = {"email": body["email"], "roles": body["roleNames"]}
                members.append(member)
                return make_response(201, {"member": member}, method="POST")
            return make_response(200, {"members": members})

        return self._not_found("NotFound")

    def _create_project(self, body: dict) -> httpx.Response:
        project = dict(body, id=str(uuid.uuid4()), status="active")
        self.projects[project["id"]] = project
        return make_response(201, {"project": project}, method="POST")

    def _list_projects(self, query: dict) -> httpx.Response:
        projects = list(self.projects.values())
        if "projectNumber" in query:
            projects = [p for p in projects if p.get("projectNumber") == query["projectNumber"]]
        elif "$search" in query:
            needle = query["$search"].lower()
            projects = [
                p
                for p in projects
                if needle in (p.get("projectNumber") or "").lower()
                or needle in (p.get("displayName") or "").lower()
            ]
        return make_response(200, {"projects": projects})

    @staticmethod
    def _not_found(code: str) -> httpx.Response:
        return make_response(404, error_body(code, "Requested resource is not available."))


# ---------------------------------------------------------------------------
# Hypothesis strategies (reusable across property tests)
# ---------------------------------------------------------------------------

identifiers = st.uuids().map(str)
short_text = st.text(
    alphabet="abcdefghijklmnopqrstuvwxyz ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-",
    min_size=1,
    max_size=30,
)

project_payloads = st.fixed_dictionaries(
    {"id": identifiers, "displayName": short_text, "projectNumber": short_text}
)

error_statuses = st.sampled_from([400, 401, 403, 404, 409, 422, 429, 500, 502, 503])
