"""Tests for the client facade."""

from __future__ import annotations

from pathlib import Path

from dexpaprika_sdk.client import DexPaprikaClient
from dexpaprika_sdk.config import ClientConfig
from dexpaprika_sdk.infrastructure import DiskCache, RequestsTransport
from tests.fakes import FakeTransport, InMemoryCache, RecordingSleeper, json_response


def _client(transport: FakeTransport, config: ClientConfig | None = None) -> DexPaprikaClient:
    return DexPaprikaClient(
        config or ClientConfig(retry_jitter_ms=0),
        transport=transport,
        sleep=RecordingSleeper(),
    )


class TestConstruction:
    """Tests for default wiring."""

    def test_defaults_build_requests_transport_without_cache(self) -> None:
        """A bare client talks to the public API and has no cache."""
        client = DexPaprikaClient()

        assert isinstance(client.transport, RequestsTransport)
        assert client.cache is None
        assert client.config.base_url == "https://api.dexpaprika.com"
        client.close()

    def test_cache_enabled_config_builds_disk_cache(self, tmp_path: Path) -> None:
        """Enabling the cache in config installs a DiskCache in the cache dir."""
        config = ClientConfig(cache_enabled=True, cache_dir=str(tmp_path), cache_ttl_seconds=60)

        client = _client(FakeTransport(), config)

        assert isinstance(client.cache, DiskCache)
        assert client.cache.cache_dir == tmp_path
        assert client.executor.cache_enabled is True

    def test_resources_share_one_executor(self) -> None:
        """Every resource wrapper uses the client's executor."""
        client = _client(FakeTransport())

        resources = (
            client.networks,
            client.dexes,
            client.pools,
            client.tokens,
            client.search,
            client.stats,
        )
        assert all(resource.executor is client.executor for resource in resources)


class TestCacheSetup:
    """Tests for setup_cache()."""

    def test_setup_cache_serves_repeat_requests_from_cache(self) -> None:
        """After setup_cache(), a repeated GET does not reach the transport."""
        transport = FakeTransport([json_response(200, {"chains": 15})])
        cache = InMemoryCache()
        client = _client(transport).setup_cache(cache, ttl_seconds=120)

        first = client.stats.get_stats()
        second = client.stats.get_stats()

        assert first == second == {"chains": 15}
        assert transport.call_count == 1
        assert cache.set_ttls == [120]
        assert client.config.cache_enabled is True
        assert client.config.cache_ttl_seconds == 120

    def test_setup_cache_defaults_to_disk_cache(self, tmp_path: Path) -> None:
        """Without an explicit cache, a DiskCache is created in the configured dir."""
        client = _client(FakeTransport(), ClientConfig(cache_dir=str(tmp_path)))

        client.setup_cache()

        assert isinstance(client.cache, DiskCache)
        assert client.cache.cache_dir == tmp_path

    def test_setup_cache_disabled_keeps_requests_live(self) -> None:
        """enabled=False installs the cache without using it."""
        transport = FakeTransport([json_response(200, {"a": 1}), json_response(200, {"a": 2})])
        cache = InMemoryCache()
        client = _client(transport).setup_cache(cache, enabled=False)

        assert client.stats.get_stats() == {"a": 1}
        assert client.stats.get_stats() == {"a": 2}
        assert cache.size == 0


class TestShaping:
    """Tests for set_shape_responses()."""

    def test_default_shaping_applies_to_every_resource(self) -> None:
        """Shaping can be switched on once and overridden per call."""
        transport = FakeTransport(
            [json_response(200, {"chains": 15}), json_response(200, {"chains": 16})]
        )
        client = _client(transport).set_shape_responses(True)

        assert client.stats.get_stats().chains == 15  # type: ignore[union-attr]
        assert client.stats.get_stats(shape=False) == {"chains": 16}
        assert client.config.shape_responses is True


class TestLifecycle:
    """Tests for paginate() and resource cleanup."""

    def test_context_manager_closes_transport(self) -> None:
        """Leaving the with-block closes the transport."""
        transport = FakeTransport()
        with _client(transport) as client:
            assert isinstance(client, DexPaprikaClient)
        assert transport.closed is True

    def test_paginate_walks_pages(self) -> None:
        """paginate() builds a Paginator over a resource call."""
        transport = FakeTransport(
            [
                json_response(200, {"pools": [{"id": "a"}, {"id": "b"}]}),
                json_response(200, {"pools": [{"id": "c"}]}),
            ]
        )
        client = _client(transport)

        paginator = client.paginate(
            lambda page: client.pools.list_network_pools("ethereum", page=page, limit=2),
            "pools",
            limit=2,
        )

        ids = [pool["id"] for pool in paginator.collect()]  # type: ignore[index]
        assert ids == ["a", "b", "c"]
        assert [call.params["page"] for call in transport.calls] == [0, 1]
