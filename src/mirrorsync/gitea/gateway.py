"""Gitea implementation of the remote gateway."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from ..models import (
    Organization,
    OrganizationCreate,
    OrganizationPatch,
    OrganizationOwner,
    Owner,
    Repository,
    RepositoryMigrate,
    RepositoryPatch,
    ServerConfig,
    User,
)
from .client import GiteaClient, GiteaClientError

logger = logging.getLogger(__name__)

ClientFactory = Callable[[ServerConfig], GiteaClient]


def repository_path(owner_name: str, repo_name: str) -> str:
    return f"/repos/{owner_name}/{repo_name}"


def owner_repositories_path(owner: Owner) -> str:
    """Listing endpoint for an owner's repositories, by owner variant."""
    if isinstance(owner, OrganizationOwner):
        return f"/orgs/{owner.owner_name}/repos"
    return f"/users/{owner.owner_name}/repos"


class GiteaGateway:
    """Gateway over one GiteaClient per server.

    Every GiteaClientError is logged and converted to an empty result here;
    nothing above this layer sees transport failures.
    """

    def __init__(self, client_factory: ClientFactory | None = None, timeout: float = 30.0):
        """Initialize the gateway.

        Args:
            client_factory: Builds a client for a server (defaults to GiteaClient)
            timeout: Request timeout passed to the default factory
        """
        self._client_factory = client_factory or (
            lambda server: GiteaClient(server, timeout=timeout)
        )
        self._clients: dict[ServerConfig, GiteaClient] = {}

    def close(self) -> None:
        """Close all HTTP clients."""
        for client in self._clients.values():
            client.close()
        self._clients.clear()

    def __enter__(self) -> GiteaGateway:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _client(self, server: ServerConfig) -> GiteaClient:
        client = self._clients.get(server)
        if client is None:
            client = self._client_factory(server)
            self._clients[server] = client
        return client

    # --- Reads ---

    def list_organizations(self, server: ServerConfig) -> list[Organization]:
        try:
            items = self._client(server).get_paginated("/orgs")
            return [Organization.model_validate(item) for item in items]
        except (GiteaClientError, ValidationError) as e:
            logger.warning("Could not list organizations on %s: %s", server.base_url, e)
            return []

    def list_repositories(self, owner: Owner) -> list[Repository]:
        path = owner_repositories_path(owner)
        try:
            items = self._client(owner.server).get_paginated(path)
            return [Repository.model_validate(item) for item in items]
        except (GiteaClientError, ValidationError) as e:
            logger.warning(
                "Could not list repositories of %s on %s: %s",
                owner.owner_name,
                owner.server.base_url,
                e,
            )
            return []

    def get_current_user(self, server: ServerConfig) -> User | None:
        try:
            return User.model_validate(self._client(server).get_json("/user"))
        except (GiteaClientError, ValidationError) as e:
            logger.warning("Could not resolve current user on %s: %s", server.base_url, e)
            return None

    # --- Mutations ---

    def create_organization(
        self, server: ServerConfig, payload: OrganizationCreate
    ) -> Organization | None:
        try:
            data = self._client(server).post_json("/orgs", payload.to_json())
            return Organization.model_validate(data)
        except (GiteaClientError, ValidationError) as e:
            logger.warning("Creating organization %s failed: %s", payload.username, e)
            return None

    def update_organization(
        self, server: ServerConfig, owner_name: str, payload: OrganizationPatch
    ) -> Organization | None:
        try:
            data = self._client(server).patch_json(f"/orgs/{owner_name}", payload.to_json())
            return Organization.model_validate(data)
        except (GiteaClientError, ValidationError) as e:
            logger.warning("Updating organization %s failed: %s", owner_name, e)
            return None

    def create_mirror_repository(
        self, server: ServerConfig, owner_name: str, payload: RepositoryMigrate
    ) -> Repository | None:
        try:
            data = self._client(server).post_json("/repos/migrate", payload.to_json())
            return Repository.model_validate(data)
        except (GiteaClientError, ValidationError) as e:
            logger.warning("Creating mirror %s/%s failed: %s", owner_name, payload.name, e)
            return None

    def update_repository(
        self, server: ServerConfig, owner_name: str, repo_name: str, payload: RepositoryPatch
    ) -> Repository | None:
        try:
            data = self._client(server).patch_json(
                repository_path(owner_name, repo_name), payload.to_json()
            )
            return Repository.model_validate(data)
        except (GiteaClientError, ValidationError) as e:
            logger.warning("Updating repository %s/%s failed: %s", owner_name, repo_name, e)
            return None

    def delete_repository(self, server: ServerConfig, owner_name: str, repo_name: str) -> bool:
        try:
            deleted = self._client(server).delete(repository_path(owner_name, repo_name))
        except GiteaClientError as e:
            logger.warning("Deleting repository %s/%s failed: %s", owner_name, repo_name, e)
            return False
        if not deleted:
            logger.warning(
                "Deleting repository %s/%s was not confirmed with 204", owner_name, repo_name
            )
        return deleted
