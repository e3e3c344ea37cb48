"""Shared test fixtures for imsauth.

Provides credential and token fixtures, a controllable clock for cache
expiry, a factory for :class:`httpx.AsyncClient` instances backed by
:class:`httpx.MockTransport`, and isolation of the process-wide default
manager and deployment namespace.
"""

from __future__ import annotations

from typing import Any, AsyncIterator, Callable
from urllib.parse import parse_qsl

import httpx
import pytest
import pytest_asyncio

from imsauth.constants import NAMESPACE_ENV_VAR
from imsauth.manager import reset_manager


# ---------------------------------------------------------------------------
# Global state isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _isolate_global_state(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear the deployment namespace and the default manager around each test."""
    monkeypatch.delenv(NAMESPACE_ENV_VAR, raising=False)
    reset_manager()
    yield
    reset_manager()


# ---------------------------------------------------------------------------
# Data fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def valid_params() -> dict[str, Any]:
    """camelCase credential input with two scopes."""
    return {
        "clientId": "test-client-id",
        "clientSecret": "test-client-secret",
        "orgId": "test-org-id",
        "scopes": ["openid", "AdobeID"],
    }


@pytest.fixture
def token_response() -> dict[str, Any]:
    """A successful IMS token body."""
    return {
        "access_token": "test-access-token",
        "token_type": "bearer",
        "expires_in": 86399,
    }


# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# ---------------------------------------------------------------------------
# HTTP mocking
# ---------------------------------------------------------------------------


class RecordingHandler:
    """MockTransport handler that records requests and replays outcomes.

    Each outcome is an :class:`httpx.Response`, an exception instance to
    raise, or a callable taking the request.  The last outcome is reused
    once the list is exhausted.
    """

    def __init__(self, *outcomes: Any) -> None:
        self._outcomes = list(outcomes)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self._outcomes[min(len(self.requests), len(self._outcomes)) - 1]
        if isinstance(outcome, Exception):
            raise outcome
        if callable(outcome):
            return outcome(request)
        return outcome

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def form(self, index: int = -1) -> dict[str, str]:
        """Decode the form body of a recorded request."""
        return dict(parse_qsl(self.requests[index].content.decode()))


@pytest_asyncio.fixture
async def mock_ims() -> AsyncIterator[Callable[..., tuple[RecordingHandler, httpx.AsyncClient]]]:
    """Factory returning a recording handler and an AsyncClient routed through it.

    Every client it builds is closed when the test finishes.

    Example::

        handler, client = mock_ims(httpx.Response(200, json={...}))
    """
    clients: list[httpx.AsyncClient] = []

    def _make(*outcomes: Any) -> tuple[RecordingHandler, httpx.AsyncClient]:
        handler = RecordingHandler(*outcomes)
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        clients.append(client)
        return handler, client

    yield _make

    for client in clients:
        await client.aclose()
