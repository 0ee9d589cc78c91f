"""Request bodies sent to the target server.

Patches are not diffs: each one is built fresh from the source entity and
overwrites every field it carries, matching the API's replace semantics.
Field names follow Python conventions; `to_json()` produces the wire form.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from .entities import Organization, Repository

DEFAULT_MIRROR_INTERVAL = "8h0m0s"


class ApiPayload(BaseModel):
    """Base for request bodies."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_json(self) -> dict[str, Any]:
        """Serialize with API field names."""
        return self.model_dump(mode="json", by_alias=True)


class OrganizationCreate(ApiPayload):
    """Body of `POST /orgs`."""

    username: str
    description: str | None = None
    full_name: str | None = None
    visibility: str = "public"
    website: str | None = None
    email: str | None = None

    @classmethod
    def from_source(cls, source: Organization) -> "OrganizationCreate":
        return cls(
            username=source.name,
            description=source.description,
            full_name=source.full_name,
            visibility=source.visibility,
            website=source.website,
            email=source.email,
        )


class OrganizationPatch(ApiPayload):
    """Body of `PATCH /orgs/{org}`."""

    description: str | None = None
    full_name: str | None = None
    visibility: str = "public"
    website: str | None = None
    email: str | None = None

    @classmethod
    def from_source(cls, source: Organization) -> "OrganizationPatch":
        return cls(
            description=source.description,
            full_name=source.full_name,
            visibility=source.visibility,
            website=source.website,
            email=source.email,
        )


class RepositoryMigrate(ApiPayload):
    """Body of `POST /repos/migrate` creating a pull mirror of a source repo.

    `auth_token` is the SOURCE server's token: the target pulls from the
    source directly.
    """

    owner: str = Field(serialization_alias="repo_owner")
    name: str = Field(serialization_alias="repo_name")
    description: str | None = None
    clone_url: str = Field(serialization_alias="clone_addr")
    auth_token: str = Field(repr=False)
    mirror_interval: str = DEFAULT_MIRROR_INTERVAL
    private: bool = False
    releases: bool = True
    issues: bool = True
    wiki: bool = True
    mirror: Literal[True] = True
    service: Literal["gitea"] = "gitea"

    @classmethod
    def from_source(
        cls, owner_name: str, source: Repository, auth_token: str
    ) -> "RepositoryMigrate":
        return cls(
            owner=owner_name,
            name=source.name,
            description=source.description,
            clone_url=source.clone_url,
            auth_token=auth_token,
            private=source.private,
            releases=source.has_releases,
            issues=source.has_issues,
            wiki=source.has_wiki,
        )


class RepositoryPatch(ApiPayload):
    """Body of `PATCH /repos/{owner}/{repo}`.

    Mirrors cannot run actions and prune deleted refs on every update, so
    `has_actions` and `enable_prune` are fixed regardless of the source.
    """

    description: str | None = None
    default_branch: str
    website: str = ""
    private: bool
    archived: bool
    has_issues: bool
    has_packages: bool
    has_projects: bool
    has_pull_requests: bool
    has_releases: bool
    has_wiki: bool
    has_actions: Literal[False] = False
    enable_prune: Literal[True] = True

    @classmethod
    def from_source(cls, source: Repository) -> "RepositoryPatch":
        return cls(
            description=source.description,
            default_branch=source.default_branch,
            website=source.website,
            private=source.private,
            archived=source.archived,
            has_issues=source.has_issues,
            has_packages=source.has_packages,
            has_projects=source.has_projects,
            has_pull_requests=source.has_pull_requests,
            has_releases=source.has_releases,
            has_wiki=source.has_wiki,
        )
