"""Remote gateway protocol used by the sync engine."""

from typing import Protocol

from ..models import (
    Organization,
    OrganizationCreate,
    OrganizationPatch,
    Owner,
    Repository,
    RepositoryMigrate,
    RepositoryPatch,
    ServerConfig,
    User,
)


class GatewayProtocol(Protocol):
    """Operations the sync engine needs from a Gitea server.

    Implementations never raise for remote failures. Reads return an empty
    list or None, mutations return None (or False for deletes), so callers
    handle "the server said no" the same way as "nothing was sent".
    """

    def list_organizations(self, server: ServerConfig) -> list[Organization]:
        """List organizations visible on `server`."""
        ...

    def list_repositories(self, owner: Owner) -> list[Repository]:
        """List repositories owned by `owner` on the owner's server."""
        ...

    def get_current_user(self, server: ServerConfig) -> User | None:
        """Resolve the user behind the server's token."""
        ...

    def create_organization(
        self, server: ServerConfig, payload: OrganizationCreate
    ) -> Organization | None:
        """Create an organization. Returns the created entity or None."""
        ...

    def update_organization(
        self, server: ServerConfig, owner_name: str, payload: OrganizationPatch
    ) -> Organization | None:
        """Overwrite an organization's metadata. Returns the new state or None."""
        ...

    def create_mirror_repository(
        self, server: ServerConfig, owner_name: str, payload: RepositoryMigrate
    ) -> Repository | None:
        """Create a pull mirror under `owner_name`. Returns it or None."""
        ...

    def update_repository(
        self, server: ServerConfig, owner_name: str, repo_name: str, payload: RepositoryPatch
    ) -> Repository | None:
        """Overwrite a repository's settings. Returns the new state or None."""
        ...

    def delete_repository(self, server: ServerConfig, owner_name: str, repo_name: str) -> bool:
        """Delete a repository. True only if the server confirmed the deletion."""
        ...
