"""Gitea API access."""

from .client import (
    GiteaAuthError,
    GiteaClient,
    GiteaClientError,
    GiteaConflictError,
    GiteaForbiddenError,
    GiteaNotFoundError,
)
from .gateway import GiteaGateway
from .protocol import GatewayProtocol

__all__ = [
    "GatewayProtocol",
    "GiteaAuthError",
    "GiteaClient",
    "GiteaClientError",
    "GiteaConflictError",
    "GiteaForbiddenError",
    "GiteaGateway",
    "GiteaNotFoundError",
]
