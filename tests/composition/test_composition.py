"""Tests for CLI composition root wiring."""

from __future__ import annotations

from pathlib import Path

from dexpaprika_sdk import composition
from dexpaprika_sdk.config import ClientConfig
from dexpaprika_sdk.infrastructure import DiskCache, RequestsTransport


def test_build_client_uses_requests_transport() -> None:
    config = ClientConfig(base_url="https://proxy.example.com", timeout_seconds=7.0)

    with composition.build_client(config=config) as client:
        assert isinstance(client.transport, RequestsTransport)
        assert client.transport.base_url == "https://proxy.example.com"
        assert client.transport.timeout_seconds == 7.0
        assert client.cache is None


def test_build_client_wires_disk_cache_when_enabled(tmp_path: Path) -> None:
    config = ClientConfig(cache_enabled=True, cache_dir=str(tmp_path))

    with composition.build_client(config=config) as client:
        assert isinstance(client.cache, DiskCache)
        assert client.cache.cache_dir == tmp_path
        assert client.executor.cache_enabled is True


def test_app_is_wired() -> None:
    assert composition.app.registered_commands
