"""Reconciliation units and their outcomes."""

from dataclasses import dataclass, field
from enum import Enum

from .entities import Organization, Repository
from .owner import Owner


class SyncAction(str, Enum):
    """What the engine decided for one repository pairing."""

    CREATE = "create"  # No target yet, create it as a mirror
    UPDATE = "update"  # Target mirror drifted, patch it
    RECREATE = "recreate"  # Target mirrors another upstream, delete + create
    SKIP_SOURCE_MIRROR = "skip-source-mirror"  # Source is itself a mirror
    SKIP_DETACHED = "skip-detached"  # Target is not a mirror, leave alone
    NOOP = "noop"  # Already in sync


class OrgAction(str, Enum):
    """What the engine decided for one organization pairing."""

    CREATE = "create"
    UPDATE = "update"
    NOOP = "noop"


@dataclass(frozen=True)
class OrgSync:
    """A source organization and its same-named target, if any."""

    source: Organization
    target: Organization | None = None

    @property
    def needs_update(self) -> bool:
        return self.target is not None and not self.source.is_in_sync(self.target)


@dataclass(frozen=True)
class RepoSync:
    """One source repository paired with its same-named target repository.

    `target_repository` is None exactly when the target owner had no
    repository of that name when it was listed.
    """

    source_owner: Owner
    source_repository: Repository
    target_owner: Owner
    target_repository: Repository | None = None

    @property
    def target_full_name(self) -> str:
        return f"{self.target_owner.owner_name}/{self.source_repository.name}"

    @property
    def is_detached(self) -> bool:
        """Target exists but is a regular repository, not a mirror."""
        return self.target_repository is not None and not self.target_repository.mirror

    @property
    def needs_update(self) -> bool:
        # Mirrors always report has_actions and has_pull_requests as false,
        # so those two are never compared.
        source = self.source_repository
        target = self.target_repository
        return target is not None and (
            source.description != target.description
            or source.default_branch != target.default_branch
            or source.private != target.private
            or source.archived != target.archived
            or source.has_issues != target.has_issues
            or source.has_packages != target.has_packages
            or source.has_projects != target.has_projects
            or source.has_releases != target.has_releases
            or source.has_wiki != target.has_wiki
        )

    @property
    def needs_recreate(self) -> bool:
        """Target mirror pulls from a different upstream than the source clone URL."""
        target = self.target_repository
        return (
            target is not None
            and target.mirror
            and self.source_repository.clone_url != target.original_url
        )


@dataclass(frozen=True)
class OrgOutcome:
    """Result of reconciling one organization."""

    sync: OrgSync
    action: OrgAction
    organization: Organization | None = None  # New target state, None if nothing happened


@dataclass(frozen=True)
class SyncOutcome:
    """Result of reconciling one repository pairing."""

    sync: RepoSync
    action: SyncAction
    repository: Repository | None = None  # New target state, None if nothing happened


@dataclass
class SyncReport:
    """Aggregated result of a run."""

    organizations: list[OrgOutcome] = field(default_factory=list)
    repositories: list[SyncOutcome] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    considered: int = 0  # Repository pairings that entered reconciliation
    dry_run: bool = False

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def count(self, action: SyncAction) -> int:
        """Number of repository pairings that ended in `action`."""
        return sum(1 for outcome in self.repositories if outcome.action == action)
