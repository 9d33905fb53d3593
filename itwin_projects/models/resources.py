"""Resource records exchanged with the Projects API.

Field names are snake_case in Python and camelCase on the wire. Unset
(``None``) fields are omitted from outgoing bodies entirely, so a record with
a single field set doubles as a partial PATCH body.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


@dataclass(frozen=True)
class ContainerKeys:
    """JSON property names wrapping one resource, or a list of them."""

    singular: str
    plural: str


class WireModel(BaseModel):
    """Base for records serialized with camelCase names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        """Serialize for a request body, omitting unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ErrorDetails(WireModel):
    """The ``error`` object of a failed call."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    code: str | None = None
    message: str | None = None


class Project(WireModel):
    id: str | None = None
    display_name: str | None = None
    project_number: str | None = None
    registration_date_time: str | None = None
    geographic_location: str | None = None
    latitude: str | None = None
    longitude: str | None = None
    time_zone: str | None = None
    data_center_location: str | None = None
    billing_country: str | None = None
    status: str | None = None
    allow_external_team_members: bool | None = None

    @classmethod
    def sample(cls) -> Project:
        """A new project with unique name and number and fixed sample values."""
        return cls(
            display_name=f"iTwin Sample Name {uuid.uuid4()}",
            project_number=f"iTwin Sample Number {uuid.uuid4()}",
            geographic_location="Vilnius, Lithuania",
            latitude="54.687157",
            longitude="25.279652",
            time_zone="EEST",
            billing_country="LT",
            allow_external_team_members=True,
        )


class Role(WireModel):
    id: str | None = None
    display_name: str | None = None
    description: str | None = None
    permissions: list[str] | None = None

    @classmethod
    def sample(cls) -> Role:
        return cls(display_name="Project Administrator", description="Project Administrator")


class Member(WireModel):
    email: str | None = None
    roles: list[str] | None = None  # Role names


class MemberInvitation(WireModel):
    """Body for inviting a user to a project under one or more roles."""

    email: str
    role_names: list[str]


PROJECT_KEYS = ContainerKeys(singular="project", plural="projects")
ROLE_KEYS = ContainerKeys(singular="role", plural="roles")
MEMBER_KEYS = ContainerKeys(singular="member", plural="members")
