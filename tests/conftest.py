"""
Shared pytest fixtures.

Nothing here reaches the network: every FreispaceClient is built on an
httpx.MockTransport whose handler records the requests it receives and
answers with a canned JSON body.
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

import httpx
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import Settings  # noqa: E402
from utils.http_client import FreispaceClient  # noqa: E402

BASE_URL = "https://api.test"


def run(coro):
    return asyncio.run(coro)


def json_response(payload, status: int = 200) -> httpx.Response:
    """A response whose body is `payload` serialized as JSON (None becomes `null`)."""
    return httpx.Response(
        status,
        content=json.dumps(payload).encode("utf-8"),
        headers={"content-type": "application/json"},
    )


class Backend:
    """Mock analytics API: records requests and replays one response."""

    def __init__(self, payload=None, status: int = 200, response: httpx.Response | None = None):
        self.requests: list[httpx.Request] = []
        self._response = response if response is not None else json_response(payload, status)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture()
def settings():
    return Settings(base_url=BASE_URL, stage="production", api_key="secret-key")


@pytest.fixture()
def backend_client(settings):
    """
    Factory: backend_client(payload, status=200) -> (client, backend).

    `backend.requests` lists what the client sent.
    """

    def _make(payload=None, status: int = 200, response: httpx.Response | None = None):
        backend = Backend(payload, status, response)
        client = FreispaceClient(settings, transport=httpx.MockTransport(backend))
        return client, backend

    return _make
