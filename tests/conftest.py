"""Shared factories for Gitea entities."""

import pytest

from mirrorsync.models import Organization, Repository, ServerConfig

SOURCE = ServerConfig(base_url="https://source.example.com", token="source-token")
TARGET = ServerConfig(base_url="https://target.example.com", token="target-token")


def build_organization(name: str = "org-a", **overrides) -> Organization:
    data = {
        "id": 1,
        "name": name,
        "description": f"{name} description",
        "full_name": name.upper(),
        "visibility": "public",
        "website": f"https://{name}.example.com",
        "email": f"admin@{name}.example.com",
    }
    data.update(overrides)
    return Organization(**data)


def build_repository(name: str = "r1", owner: str = "org-a", **overrides) -> Repository:
    data = {
        "id": 10,
        "name": name,
        "full_name": f"{owner}/{name}",
        "description": "a repository",
        "default_branch": "main",
        "clone_url": f"https://source.example.com/{owner}/{name}.git",
        "original_url": "",
        "website": "",
        "private": False,
        "mirror": False,
        "archived": False,
        "has_actions": True,
        "has_issues": True,
        "has_packages": True,
        "has_projects": True,
        "has_pull_requests": True,
        "has_releases": True,
        "has_wiki": True,
    }
    data.update(overrides)
    return Repository(**data)


def build_mirror(source: Repository, **overrides) -> Repository:
    """Target-side mirror that is fully in sync with `source`."""
    data = source.model_dump()
    data.update(
        {
            "id": source.id + 1000,
            "mirror": True,
            "original_url": source.clone_url,
            "has_actions": False,
            "has_pull_requests": False,
        }
    )
    data.update(overrides)
    return Repository(**data)


@pytest.fixture
def source_server() -> ServerConfig:
    return SOURCE


@pytest.fixture
def target_server() -> ServerConfig:
    return TARGET
