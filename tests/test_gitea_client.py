"""Tests for the Gitea REST client."""

from unittest.mock import MagicMock, patch

import httpx
import pytest
from conftest import SOURCE

from mirrorsync.gitea.client import (
    GiteaAuthError,
    GiteaClient,
    GiteaClientError,
    GiteaConflictError,
    GiteaForbiddenError,
    GiteaNotFoundError,
)


def response(status_code: int, json_data=None, text: str = "", headers=None) -> MagicMock:
    mock_response = MagicMock()
    mock_response.status_code = status_code
    mock_response.text = text
    mock_response.headers = headers or {}
    mock_response.json.return_value = json_data
    return mock_response


class TestGiteaClientInit:
    """Tests for GiteaClient initialization."""

    def test_headers_and_base_url(self):
        """Client authenticates with a token header against /api/v1."""
        with GiteaClient(SOURCE) as client:
            assert str(client._client.base_url) == "https://source.example.com/api/v1/"
            assert client._client.headers["Authorization"] == "token source-token"
            assert client._client.headers["Accept"] == "application/json"

    def test_timeout(self):
        with GiteaClient(SOURCE, timeout=5.0) as client:
            assert client._client.timeout.read == 5.0


class TestGiteaClientRequest:
    """Tests for GiteaClient.request."""

    @pytest.fixture
    def client(self):
        client = GiteaClient(SOURCE)
        yield client
        client.close()

    def test_success(self, client):
        """2xx responses are returned."""
        with patch.object(client._client, "request", return_value=response(200, [])) as mock:
            result = client.request("GET", "/orgs")
        assert result.status_code == 200
        mock.assert_called_once_with("GET", "/orgs", json=None, params=None)

    @pytest.mark.parametrize(
        "status,error",
        [
            (401, GiteaAuthError),
            (403, GiteaForbiddenError),
            (404, GiteaNotFoundError),
            (409, GiteaConflictError),
            (422, GiteaConflictError),
            (500, GiteaClientError),
        ],
    )
    def test_error_statuses(self, client, status, error):
        """Each failure class maps to its own exception."""
        with (
            patch.object(client._client, "request", return_value=response(status, text="nope")),
            pytest.raises(error) as exc_info,
        ):
            client.request("GET", "/orgs")
        assert exc_info.value.status_code == status

    def test_transport_error(self, client):
        """Transport failures are wrapped."""
        with (
            patch.object(
                client._client, "request", side_effect=httpx.ConnectError("refused")
            ),
            pytest.raises(GiteaClientError) as exc_info,
        ):
            client.request("GET", "/orgs")
        assert "refused" in str(exc_info.value)

    def test_invalid_json(self, client):
        bad = response(200)
        bad.json.side_effect = ValueError("not json")
        with (
            patch.object(client._client, "request", return_value=bad),
            pytest.raises(GiteaClientError, match="Invalid JSON"),
        ):
            client.get_json("/user")


class TestGiteaClientHelpers:
    """Tests for JSON, pagination and delete helpers."""

    @pytest.fixture
    def client(self):
        client = GiteaClient(SOURCE)
        yield client
        client.close()

    def test_get_paginated_reads_past_short_pages(self, client):
        """A page shorter than the limit is not taken as the last one."""
        pages = [
            response(200, [{"id": i} for i in range(30)]),
            response(200, [{"id": i} for i in range(30, 45)]),
            response(200, []),
        ]
        with patch.object(client._client, "request", side_effect=pages) as mock:
            items = client.get_paginated("/orgs", limit=50)
        assert len(items) == 45
        assert items[-1] == {"id": 44}
        assert [call.kwargs["params"] for call in mock.call_args_list] == [
            {"page": 1, "limit": 50},
            {"page": 2, "limit": 50},
            {"page": 3, "limit": 50},
        ]

    def test_get_paginated_stops_at_total_count(self, client):
        """Paging stops once X-Total-Count items have been read."""
        headers = {"X-Total-Count": "45"}
        pages = [
            response(200, [{"id": i} for i in range(30)], headers=headers),
            response(200, [{"id": i} for i in range(30, 45)], headers=headers),
        ]
        with patch.object(client._client, "request", side_effect=pages) as mock:
            items = client.get_paginated("/orgs", limit=50)
        assert len(items) == 45
        assert mock.call_count == 2

    def test_get_paginated_ignores_bad_total_count(self, client):
        pages = [
            response(200, [{"id": 1}], headers={"X-Total-Count": "many"}),
            response(200, []),
        ]
        with patch.object(client._client, "request", side_effect=pages):
            assert client.get_paginated("/orgs") == [{"id": 1}]

    def test_get_paginated_empty(self, client):
        with patch.object(client._client, "request", return_value=response(200, [])) as mock:
            assert client.get_paginated("/orgs") == []
        assert mock.call_count == 1

    def test_get_paginated_rejects_non_list(self, client):
        with (
            patch.object(client._client, "request", return_value=response(200, {"a": 1})),
            pytest.raises(GiteaClientError),
        ):
            client.get_paginated("/orgs")

    def test_post_json(self, client):
        with patch.object(
            client._client, "request", return_value=response(201, {"id": 7})
        ) as mock:
            assert client.post_json("/orgs", {"username": "x"}) == {"id": 7}
        mock.assert_called_once_with("POST", "/orgs", json={"username": "x"}, params=None)

    def test_patch_json(self, client):
        with patch.object(
            client._client, "request", return_value=response(200, {"id": 7})
        ) as mock:
            client.patch_json("/orgs/x", {"email": "e"})
        assert mock.call_args.args[0] == "PATCH"

    def test_delete_requires_204(self, client):
        """Only 204 counts as a confirmed delete."""
        with patch.object(client._client, "request", return_value=response(204)):
            assert client.delete("/repos/o/r") is True
        with patch.object(client._client, "request", return_value=response(200)):
            assert client.delete("/repos/o/r") is False
