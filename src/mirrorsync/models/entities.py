"""Gitea entities as returned by the REST API.

Only the fields the mirror sync reads are declared; everything else in the
API payload is ignored. All entities are immutable.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ServerConfig(BaseModel):
    """One Gitea endpoint: base URL plus access token."""

    model_config = ConfigDict(frozen=True)

    base_url: str
    token: str = Field(repr=False)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize so that paths can be joined with a single slash."""
        return v.rstrip("/")

    @property
    def api_url(self) -> str:
        """Root of the v1 API on this server."""
        return f"{self.base_url}/api/v1"


class Organization(BaseModel):
    """A Gitea organization. `name` is the identity key across servers."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    name: str
    description: str = ""
    full_name: str = ""
    visibility: str = "public"
    website: str = ""
    email: str = ""

    def is_in_sync(self, other: "Organization") -> bool:
        """True when every mirrored field matches `other`."""
        return (
            self.name == other.name
            and self.description == other.description
            and self.full_name == other.full_name
            and self.visibility == other.visibility
            and self.website == other.website
            and self.email == other.email
        )


class Repository(BaseModel):
    """A Gitea repository.

    `name` identifies a repository within its owner, `full_name`
    ("owner/name") is what allow/deny lists match against. `original_url`
    is only populated for mirrors and holds the upstream being pulled.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    name: str
    full_name: str
    description: str | None = None
    default_branch: str = ""
    clone_url: str = ""
    html_url: str = ""
    original_url: str | None = None
    website: str = ""
    private: bool = False
    mirror: bool = False
    archived: bool = False
    has_actions: bool = False
    has_issues: bool = False
    has_packages: bool = False
    has_projects: bool = False
    has_pull_requests: bool = False
    has_releases: bool = False
    has_wiki: bool = False
    mirror_interval: str | None = None
    mirror_updated: datetime | None = None


class User(BaseModel):
    """The authenticated user behind a token (`GET /user`)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    login: str
    full_name: str = ""
    email: str = ""
    is_admin: bool = False
