"""
Shared fixtures for the Dumpling MCP server tests.

The Dumpling API is replaced by StubUpstream, an httpx.MockTransport handler
that records every request and answers with a canned response.  Nothing in
the test suite touches the network.
"""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from dumpling.client import DumplingClient
from dumpling.config import Settings
from dumpling_mcp.server import create_server

from tests.helpers import TEST_API_KEY, TEST_BASE_URL


class StubUpstream:
    """Records outbound requests and replies with a configurable response."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.json_body: Any = {}
        self.text_body: str | None = None
        self.by_path: dict[str, Any] = {}
        self.error: Exception | None = None

    def respond(self, status_code: int = 200, json_body: Any = None, text: str | None = None) -> None:
        self.status_code = status_code
        self.json_body = {} if json_body is None else json_body
        self.text_body = text

    def respond_for(self, path: str, json_body: Any) -> None:
        """Give one endpoint its own 200 JSON response."""
        self.by_path[path] = json_body

    def fail_with(self, error: Exception) -> None:
        self.error = error

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if request.url.path in self.by_path:
            return httpx.Response(200, json=self.by_path[request.url.path])
        if self.text_body is not None:
            return httpx.Response(self.status_code, text=self.text_body)
        return httpx.Response(self.status_code, json=self.json_body)

    # --- convenience accessors -------------------------------------------
    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_body(self) -> dict:
        return json.loads(self.last_request.content)


@pytest.fixture
def api_key(monkeypatch):
    """Set the Dumpling credential for the duration of a test."""
    monkeypatch.setenv("DUMPLING_API_KEY", TEST_API_KEY)
    return TEST_API_KEY


@pytest.fixture
def no_api_key(monkeypatch):
    """Make sure the Dumpling credential is NOT set."""
    monkeypatch.delenv("DUMPLING_API_KEY", raising=False)


@pytest.fixture
def settings():
    return Settings(base_url=TEST_BASE_URL)


@pytest.fixture
def upstream():
    return StubUpstream()


@pytest.fixture
def client(settings, upstream):
    return DumplingClient(settings, transport=httpx.MockTransport(upstream.handler))


@pytest.fixture
def server(settings, client):
    """A FastMCP server wired to the stub upstream."""
    return create_server(settings, client)
