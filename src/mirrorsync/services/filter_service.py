"""Allow/deny list filtering of organizations and repositories."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from ..models import Organization, Repository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NameFilter:
    """Exact-match allow and deny lists.

    A name passes when it is not denied and either the allow list is empty or
    the name is on it. A name on both lists is excluded.
    """

    allow: frozenset[str] = frozenset()
    deny: frozenset[str] = frozenset()

    @classmethod
    def from_lists(cls, allow: Iterable[str] = (), deny: Iterable[str] = ()) -> "NameFilter":
        return cls(allow=frozenset(allow), deny=frozenset(deny))

    def matches(self, name: str) -> bool:
        if name in self.deny:
            return False
        return not self.allow or name in self.allow


class FilterService:
    """Applies the organization and repository filters.

    Organizations are matched on `name`, repositories on `full_name`
    ("owner/name").
    """

    def __init__(
        self,
        organizations: NameFilter | None = None,
        repositories: NameFilter | None = None,
    ) -> None:
        self.organizations = organizations or NameFilter()
        self.repositories = repositories or NameFilter()

    def apply_organizations(self, organizations: list[Organization]) -> list[Organization]:
        """Keep organizations whose name passes the organization filter."""
        result = [org for org in organizations if self.organizations.matches(org.name)]
        logger.debug("Filtered %d/%d organizations", len(result), len(organizations))
        return result

    def apply_repositories(self, repositories: list[Repository]) -> list[Repository]:
        """Keep repositories whose full name passes the repository filter."""
        result = [repo for repo in repositories if self.repositories.matches(repo.full_name)]
        logger.debug("Filtered %d/%d repositories", len(result), len(repositories))
        return result
