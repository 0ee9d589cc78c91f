"""Tests for GiteaGateway."""

from unittest.mock import MagicMock

import pytest
from conftest import SOURCE, TARGET, build_organization, build_repository

from mirrorsync.gitea.client import GiteaClientError, GiteaConflictError, GiteaNotFoundError
from mirrorsync.gitea.gateway import GiteaGateway, owner_repositories_path
from mirrorsync.models import (
    NamedOwner,
    OrganizationCreate,
    OrganizationOwner,
    OrganizationPatch,
    RepositoryMigrate,
    RepositoryPatch,
    User,
    UserOwner,
)


@pytest.fixture
def clients():
    """One mock client per server."""
    return {SOURCE: MagicMock(name="source"), TARGET: MagicMock(name="target")}


@pytest.fixture
def gateway(clients):
    return GiteaGateway(client_factory=lambda server: clients[server])


def org_json(name: str) -> dict:
    return build_organization(name).model_dump()


def repo_json(name: str, owner: str = "org-a") -> dict:
    return build_repository(name, owner=owner).model_dump(mode="json")


class TestOwnerPaths:
    """Tests for picking the repository listing endpoint."""

    def test_organization(self):
        owner = OrganizationOwner(server=SOURCE, organization=build_organization("org-a"))
        assert owner_repositories_path(owner) == "/orgs/org-a/repos"

    def test_user(self):
        owner = UserOwner(server=SOURCE, user=User(id=1, login="alice"))
        assert owner_repositories_path(owner) == "/users/alice/repos"

    def test_named(self):
        assert owner_repositories_path(NamedOwner(server=SOURCE, name="bob")) == "/users/bob/repos"


class TestGatewayClients:
    """Tests for client caching."""

    def test_one_client_per_server(self):
        factory = MagicMock(side_effect=lambda server: MagicMock(name=server.base_url))
        gateway = GiteaGateway(client_factory=factory)
        gateway.list_organizations(SOURCE)
        gateway.list_organizations(SOURCE)
        gateway.list_organizations(TARGET)
        assert factory.call_count == 2

    def test_close_closes_clients(self, gateway, clients):
        clients[SOURCE].get_paginated.return_value = []
        with gateway:
            gateway.list_organizations(SOURCE)
        clients[SOURCE].close.assert_called_once()


class TestGatewayReads:
    """Tests for read operations."""

    def test_list_organizations(self, gateway, clients):
        clients[SOURCE].get_paginated.return_value = [org_json("org-a"), org_json("org-b")]
        orgs = gateway.list_organizations(SOURCE)
        assert [o.name for o in orgs] == ["org-a", "org-b"]
        clients[SOURCE].get_paginated.assert_called_once_with("/orgs")

    def test_list_organizations_failure_is_empty(self, gateway, clients):
        """A failed read yields an empty list instead of raising."""
        clients[SOURCE].get_paginated.side_effect = GiteaClientError("HTTP 500")
        assert gateway.list_organizations(SOURCE) == []

    def test_list_organizations_bad_payload_is_empty(self, gateway, clients):
        clients[SOURCE].get_paginated.return_value = [{"unexpected": True}]
        assert gateway.list_organizations(SOURCE) == []

    def test_list_repositories(self, gateway, clients):
        clients[TARGET].get_paginated.return_value = [repo_json("r1"), repo_json("r2")]
        owner = OrganizationOwner(server=TARGET, organization=build_organization("org-a"))
        repos = gateway.list_repositories(owner)
        assert [r.name for r in repos] == ["r1", "r2"]
        clients[TARGET].get_paginated.assert_called_once_with("/orgs/org-a/repos")

    def test_list_repositories_not_found(self, gateway, clients):
        clients[TARGET].get_paginated.side_effect = GiteaNotFoundError("gone", 404)
        owner = NamedOwner(server=TARGET, name="org-a")
        assert gateway.list_repositories(owner) == []

    def test_get_current_user(self, gateway, clients):
        clients[SOURCE].get_json.return_value = {"id": 1, "login": "alice", "email": "a@x"}
        user = gateway.get_current_user(SOURCE)
        assert user is not None
        assert user.login == "alice"
        clients[SOURCE].get_json.assert_called_once_with("/user")

    def test_get_current_user_failure(self, gateway, clients):
        clients[SOURCE].get_json.side_effect = GiteaClientError("401")
        assert gateway.get_current_user(SOURCE) is None


class TestGatewayMutations:
    """Tests for mutating operations."""

    def test_create_organization(self, gateway, clients):
        clients[TARGET].post_json.return_value = org_json("org-a")
        payload = OrganizationCreate.from_source(build_organization("org-a"))
        org = gateway.create_organization(TARGET, payload)
        assert org is not None and org.name == "org-a"
        clients[TARGET].post_json.assert_called_once_with("/orgs", payload.to_json())

    def test_create_organization_conflict(self, gateway, clients):
        clients[TARGET].post_json.side_effect = GiteaConflictError("exists", 422)
        payload = OrganizationCreate.from_source(build_organization("org-a"))
        assert gateway.create_organization(TARGET, payload) is None

    def test_update_organization(self, gateway, clients):
        clients[TARGET].patch_json.return_value = org_json("org-a")
        payload = OrganizationPatch.from_source(build_organization("org-a"))
        assert gateway.update_organization(TARGET, "org-a", payload) is not None
        clients[TARGET].patch_json.assert_called_once_with("/orgs/org-a", payload.to_json())

    def test_update_organization_failure(self, gateway, clients):
        clients[TARGET].patch_json.side_effect = GiteaClientError("HTTP 500")
        payload = OrganizationPatch.from_source(build_organization("org-a"))
        assert gateway.update_organization(TARGET, "org-a", payload) is None

    def test_create_mirror_repository(self, gateway, clients):
        clients[TARGET].post_json.return_value = repo_json("r1")
        payload = RepositoryMigrate.from_source("org-a", build_repository("r1"), "source-token")
        repo = gateway.create_mirror_repository(TARGET, "org-a", payload)
        assert repo is not None and repo.name == "r1"
        path, body = clients[TARGET].post_json.call_args.args
        assert path == "/repos/migrate"
        assert body["auth_token"] == "source-token"
        assert body["repo_owner"] == "org-a"

    def test_create_mirror_failure(self, gateway, clients):
        clients[TARGET].post_json.side_effect = GiteaClientError("HTTP 500")
        payload = RepositoryMigrate.from_source("org-a", build_repository("r1"), "t")
        assert gateway.create_mirror_repository(TARGET, "org-a", payload) is None

    def test_update_repository(self, gateway, clients):
        clients[TARGET].patch_json.return_value = repo_json("r1")
        payload = RepositoryPatch.from_source(build_repository("r1"))
        assert gateway.update_repository(TARGET, "org-a", "r1", payload) is not None
        clients[TARGET].patch_json.assert_called_once_with("/repos/org-a/r1", payload.to_json())

    def test_update_repository_failure(self, gateway, clients):
        clients[TARGET].patch_json.side_effect = GiteaClientError("HTTP 500")
        payload = RepositoryPatch.from_source(build_repository("r1"))
        assert gateway.update_repository(TARGET, "org-a", "r1", payload) is None

    def test_delete_repository(self, gateway, clients):
        clients[TARGET].delete.return_value = True
        assert gateway.delete_repository(TARGET, "org-a", "r1") is True
        clients[TARGET].delete.assert_called_once_with("/repos/org-a/r1")

    def test_delete_repository_unconfirmed(self, gateway, clients):
        clients[TARGET].delete.return_value = False
        assert gateway.delete_repository(TARGET, "org-a", "r1") is False

    def test_delete_repository_failure(self, gateway, clients):
        clients[TARGET].delete.side_effect = GiteaClientError("HTTP 403")
        assert gateway.delete_repository(TARGET, "org-a", "r1") is False
