"""Owner references for repositories.

An owner is always known by its server and name. The organization and user
variants also carry the fetched entity; the named variant is used where the
entity may be stale (e.g. re-creating a mirror after deleting it) and only
the name is still trustworthy.

The discriminator field is `kind`, which uses Literal types for type
narrowing support.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from .entities import Organization, ServerConfig, User


class OrganizationOwner(BaseModel):
    """Repositories owned by an organization."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["organization"] = "organization"
    server: ServerConfig
    organization: Organization

    @property
    def owner_name(self) -> str:
        return self.organization.name


class UserOwner(BaseModel):
    """Repositories owned by the authenticated user."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["user"] = "user"
    server: ServerConfig
    user: User

    @property
    def owner_name(self) -> str:
        return self.user.login


class NamedOwner(BaseModel):
    """Owner referenced by name only, without a fetched entity."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["named"] = "named"
    server: ServerConfig
    name: str

    @property
    def owner_name(self) -> str:
        return self.name


Owner = Annotated[
    OrganizationOwner | UserOwner | NamedOwner,
    Field(discriminator="kind"),
]
