"""Data models."""

from .entities import Organization, Repository, ServerConfig, User
from .owner import NamedOwner, OrganizationOwner, Owner, UserOwner
from .payloads import (
    DEFAULT_MIRROR_INTERVAL,
    OrganizationCreate,
    OrganizationPatch,
    RepositoryMigrate,
    RepositoryPatch,
)
from .sync import (
    OrgAction,
    OrgOutcome,
    OrgSync,
    RepoSync,
    SyncAction,
    SyncOutcome,
    SyncReport,
)

__all__ = [
    "DEFAULT_MIRROR_INTERVAL",
    "NamedOwner",
    "OrgAction",
    "OrgOutcome",
    "OrgSync",
    "Organization",
    "OrganizationCreate",
    "OrganizationOwner",
    "OrganizationPatch",
    "Owner",
    "RepoSync",
    "Repository",
    "RepositoryMigrate",
    "RepositoryPatch",
    "ServerConfig",
    "SyncAction",
    "SyncOutcome",
    "SyncReport",
    "User",
]
