"""Gitea REST API client."""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from ..models import ServerConfig

logger = logging.getLogger(__name__)


class GiteaClientError(Exception):
    """Base exception for Gitea client errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GiteaAuthError(GiteaClientError):
    """Authentication failed."""

    pass


class GiteaForbiddenError(GiteaClientError):
    """Permission denied."""

    pass


class GiteaNotFoundError(GiteaClientError):
    """Resource not found."""

    pass


class GiteaConflictError(GiteaClientError):
    """Request rejected because of existing state (e.g. repository already exists)."""

    pass


class GiteaClient:
    """Gitea REST API v1 client for a single server.

    Provides a thin wrapper around httpx with:
    - Token authentication
    - Typed errors per HTTP failure class
    - Request timing in the logs
    """

    def __init__(self, server: ServerConfig, timeout: float = 30.0):
        """Initialize the Gitea client.

        Args:
            server: Server to talk to (base URL and token)
            timeout: Per-request timeout in seconds
        """
        self.server = server
        self._client = httpx.Client(
            base_url=server.api_url,
            headers={
                "Authorization": f"token {server.token}",
                "Accept": "application/json",
            },
            timeout=timeout,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> GiteaClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Send a request and return the successful response.

        Args:
            method: HTTP method
            path: Path below /api/v1, with leading slash
            json: Optional JSON body
            params: Optional query parameters

        Returns:
            The 2xx response

        Raises:
            GiteaAuthError: 401
            GiteaForbiddenError: 403
            GiteaNotFoundError: 404
            GiteaConflictError: 409 or 422
            GiteaClientError: Transport failures and other non-2xx statuses
        """
        label = f"{method} {self.server.base_url}{path}"
        if json is not None:
            logger.debug("%s: body keys=%s", label, sorted(json))

        start_time = time.monotonic()
        try:
            response = self._client.request(method, path, json=json, params=params)
        except httpx.RequestError as e:
            elapsed_ms = (time.monotonic() - start_time) * 1000
            logger.error("%s failed after %.0fms: %s", label, elapsed_ms, e)
            raise GiteaClientError(f"Request failed: {e}") from e

        elapsed_ms = (time.monotonic() - start_time) * 1000
        status = response.status_code

        if status == 401:
            logger.warning("%s: 401 Unauthorized (%.0fms)", label, elapsed_ms)
            raise GiteaAuthError("Authentication failed. Check the access token.", status)
        if status == 403:
            logger.warning("%s: 403 Forbidden (%.0fms)", label, elapsed_ms)
            raise GiteaForbiddenError(
                "Permission denied. The token needs organization and repository write scopes.",
                status,
            )
        if status == 404:
            logger.warning("%s: 404 Not Found (%.0fms)", label, elapsed_ms)
            raise GiteaNotFoundError(f"Not found: {path}", status)
        if status in (409, 422):
            logger.warning("%s: %d Conflict (%.0fms)", label, status, elapsed_ms)
            raise GiteaConflictError(f"HTTP {status}: {response.text}", status)
        if status < 200 or status >= 300:
            logger.warning("%s: HTTP %d (%.0fms)", label, status, elapsed_ms)
            raise GiteaClientError(f"HTTP {status}: {response.text}", status)

        logger.info("%s: %d (%.0fms)", label, status, elapsed_ms)
        return response

    def get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """GET a path and decode the JSON body."""
        return self._decode(self.request("GET", path, params=params))

    def get_paginated(self, path: str, limit: int = 50) -> list[Any]:
        """GET every page of a list endpoint.

        The server may cap page sizes below `limit`, so a short page is not
        the last one. Paging stops at the first empty page, or once the
        `X-Total-Count` header says every item has been read.
        """
        items: list[Any] = []
        page = 1
        while True:
            response = self.request("GET", path, params={"page": page, "limit": limit})
            batch = self._decode(response)
            if not isinstance(batch, list):
                raise GiteaClientError(f"Expected a list from {path}")
            logger.debug("%s page %d: fetched %d items", path, page, len(batch))
            if not batch:
                return items
            items.extend(batch)
            total = _total_count(response)
            if total is not None and len(items) >= total:
                return items
            page += 1

    def post_json(self, path: str, body: dict[str, Any]) -> Any:
        """POST a JSON body and decode the JSON response."""
        return self._decode(self.request("POST", path, json=body))

    def patch_json(self, path: str, body: dict[str, Any]) -> Any:
        """PATCH a JSON body and decode the JSON response."""
        return self._decode(self.request("PATCH", path, json=body))

    def delete(self, path: str) -> bool:
        """DELETE a path. Only 204 No Content counts as deleted."""
        return self.request("DELETE", path).status_code == 204

    def _decode(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise GiteaClientError(f"Invalid JSON response: {e}") from e


def _total_count(response: httpx.Response) -> int | None:
    """Item total advertised by a list response, if any."""
    value = response.headers.get("X-Total-Count")
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None
