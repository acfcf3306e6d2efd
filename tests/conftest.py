"""Pytest fixtures for testing.

All tests are network-isolated - socket connections are blocked by default.
"""

from __future__ import annotations

import socket
from collections.abc import Iterator

import pytest

from dexpaprika_sdk.config import ClientConfig
from tests.fakes import FakeTransport, InMemoryCache, RecordingSleeper
from tests.support.errors import NetworkIsolationError

# =============================================================================
# Network Isolation - Block all socket connections in tests
# =============================================================================


def _blocked_socket_connect(self: socket.socket, *args: object, **kwargs: object) -> None:
    """Raise an error if any test tries to make a real network connection."""
    raise NetworkIsolationError(str(args))


@pytest.fixture(autouse=True)
def block_network_access(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Block all network access in tests.

    This fixture runs automatically for all tests and prevents any real
    network connections. Tests that need HTTP should use FakeTransport
    or MagicMock.

    If you need E2E tests with real network access, mark them with:
        @pytest.mark.e2e
    and run them separately with: pytest -m e2e
    """
    monkeypatch.setattr(socket.socket, "connect", _blocked_socket_connect)
    yield


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove DEXPAPRIKA_* variables so host settings never leak into tests."""
    for name in (
        "DEXPAPRIKA_BASE_URL",
        "DEXPAPRIKA_TIMEOUT_SECONDS",
        "DEXPAPRIKA_MAX_RETRIES",
        "DEXPAPRIKA_RETRY_DELAYS_MS",
        "DEXPAPRIKA_RETRY_JITTER_MS",
        "DEXPAPRIKA_CACHE_ENABLED",
        "DEXPAPRIKA_CACHE_TTL_SECONDS",
        "DEXPAPRIKA_CACHE_DIR",
        "DEXPAPRIKA_SHAPE_RESPONSES",
        "DEXPAPRIKA_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def in_memory_cache() -> InMemoryCache:
    """Provide an in-memory cache for tests."""
    return InMemoryCache()


@pytest.fixture
def fake_transport() -> FakeTransport:
    """Provide a scripted transport for tests."""
    return FakeTransport()


@pytest.fixture
def sleeper() -> RecordingSleeper:
    """Provide a sleeper that records delays without blocking."""
    return RecordingSleeper()


@pytest.fixture
def fast_config() -> ClientConfig:
    """Client config with jitter disabled so backoff delays are exact."""
    return ClientConfig(retry_jitter_ms=0)
