"""
Shared pytest fixtures for the FruitLink test suite.

Provides:
  - ``FakeClock`` / ``clock``: a manually advanced time source for caches and
    the navigation scheduler.
  - ``make_client``: builds a ``CollaboratorClient`` whose HTTP traffic is
    answered by an ``httpx.MockTransport`` handler.
  - Seeded directory fixtures and a fresh ``AppState`` per test.
"""

from __future__ import annotations

from typing import Callable

import httpx
import pytest

from fruitlink.insights.client import CollaboratorClient
from fruitlink.models.entity import Buyer, Supplier
from fruitlink.store.seed import seed_buyers, seed_suppliers
from fruitlink.store.state import AppState

PROXY_URL = "http://proxy.test"


class FakeClock:
    """Callable clock; tests move time with ``advance()``."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# ── Collaborator ──────────────────────────────────────────────────────────────

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def make_client() -> Callable[[Handler], CollaboratorClient]:
    """Factory: ``make_client(handler)`` → client backed by ``MockTransport``."""
    clients: list[httpx.Client] = []

    def _make(handler: Handler) -> CollaboratorClient:
        http = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(http)
        return CollaboratorClient(base_url=PROXY_URL, http_client=http)

    yield _make
    for http in clients:
        http.close()


def unavailable(request: httpx.Request) -> httpx.Response:
    """Handler simulating a proxy that cannot be reached."""
    raise httpx.ConnectError("connection refused", request=request)


def chat_replies(*contents: str, calls: list | None = None) -> Handler:
    """Handler answering successive chat requests with ``contents`` in order.

    Requests past the end of ``contents`` get a 500. Each request body is
    appended to ``calls`` when given.
    """
    queue = list(contents)

    def _handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        if not queue:
            return httpx.Response(500, json={"error": "Text model error", "details": "exhausted"})
        return httpx.Response(200, json={"content": queue.pop(0)})

    return _handler


# ── Directory ─────────────────────────────────────────────────────────────────

@pytest.fixture
def suppliers() -> list[Supplier]:
    return seed_suppliers()


@pytest.fixture
def buyers() -> list[Buyer]:
    return seed_buyers()


@pytest.fixture
def state() -> AppState:
    return AppState()
