"""Pytest configuration and shared fixtures."""

import json
from typing import Any

import pytest

from graph_kit import GraphAPI, GraphConfig, RawResponse, TransportError


class MockTransport:
    """Transport double that records requests and replays queued responses."""

    def __init__(self) -> None:
        self.requests: list[tuple[str, str, dict[str, Any], dict[str, Any]]] = []
        self.responses: list[RawResponse | Exception] = []
        self.closed = False

    def queue(self, body: Any, status: int = 200, headers: dict[str, str] | None = None) -> None:
        """Queue a response; non-string bodies are JSON-encoded."""
        if not isinstance(body, str):
            body = json.dumps(body)
        self.responses.append(RawResponse(status=status, headers=headers or {}, body=body))

    def fail(self, error: Exception) -> None:
        self.responses.append(error)

    def request(
        self, verb: str, url: str, params: dict[str, Any], options: dict[str, Any]
    ) -> RawResponse:
        self.requests.append((verb, url, dict(params), dict(options)))
        if not self.responses:
            raise TransportError("No response queued")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def graph_config() -> GraphConfig:
    """Create a test configuration.

    Returns:
        Test configuration with mock values
    """
    return GraphConfig(
        base_url="https://graph.example.com",
        video_base_url="https://graph-video.example.com",
        access_token="test-token-12345678",
        _env_file=None,
    )


@pytest.fixture
def transport() -> MockTransport:
    return MockTransport()


@pytest.fixture
def api(graph_config: GraphConfig, transport: MockTransport) -> GraphAPI:
    """Client with a token, backed by the mock transport."""
    return GraphAPI(config=graph_config, transport=transport)


@pytest.fixture
def anonymous_api(transport: MockTransport) -> GraphAPI:
    """Client without an access token."""
    config = GraphConfig(base_url="https://graph.example.com", _env_file=None)
    return GraphAPI(config=config, transport=transport)


@pytest.fixture
def mock_friends_page() -> dict:
    """Create a mock connection page with cursor paging.

    Returns:
        Page body with two items and a next link
    """
    return {
        "data": [
            {"id": "1", "name": "Alice"},
            {"id": "2", "name": "Bob"},
        ],
        "paging": {
            "cursors": {"before": "QVFIUmFh", "after": "QVFIUmJi"},
            "next": "https://graph.example.com/123/friends?limit=2&after=QVFIUmJi"
            "&access_token=test-token-12345678",
        },
    }
