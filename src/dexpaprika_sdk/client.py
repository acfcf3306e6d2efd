"""Client facade wiring configuration, transport, cache, executor and resources.

Usage example:
    from dexpaprika_sdk.client import DexPaprikaClient

    with DexPaprikaClient() as client:
        client.setup_cache(ttl_seconds=600)
        stats = client.stats.get_stats(shape=True)
        print(stats.chains)
"""

from __future__ import annotations

import time
from types import TracebackType
from typing import Self

from .api import DexesApi, NetworksApi, PoolsApi, SearchApi, StatsApi, TokensApi
from .config import ClientConfig
from .infrastructure.cache import DiskCache
from .infrastructure.http import RequestExecutor
from .infrastructure.transport import RequestsTransport
from .observability import get_logger
from .pagination import PageFetcher, Paginator
from .protocols import Cache, HttpTransport, Sleeper

logger = get_logger("dexpaprika_sdk.client")


class DexPaprikaClient:
    """Entry point for the DexPaprika API.

    Every resource shares one request executor, so caching, retries and response
    shaping are configured in one place.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        transport: HttpTransport | None = None,
        cache: Cache | None = None,
        sleep: Sleeper | None = None,
    ) -> None:
        self.config = config or ClientConfig()
        if transport is None:
            transport = RequestsTransport(
                base_url=self.config.base_url,
                user_agent=self.config.user_agent,
                timeout_seconds=self.config.timeout_seconds,
            )
        self.transport = transport
        if cache is None and self.config.cache_enabled:
            cache = DiskCache(
                self.config.resolved_cache_dir(),
                default_ttl_seconds=self.config.cache_ttl_seconds,
            )
        self.executor = RequestExecutor(
            transport=self.transport,
            config=self.config,
            cache=cache,
            sleep=sleep or time.sleep,
        )
        self.networks = NetworksApi(self.executor)
        self.dexes = DexesApi(self.executor)
        self.pools = PoolsApi(self.executor)
        self.tokens = TokensApi(self.executor)
        self.search = SearchApi(self.executor)
        self.stats = StatsApi(self.executor)

    @property
    def cache(self) -> Cache | None:
        return self.executor.cache

    def setup_cache(
        self,
        cache: Cache | None = None,
        ttl_seconds: int | None = None,
        enabled: bool = True,
    ) -> Self:
        """Install a cache (a disk cache by default) and enable GET caching.

        Args:
            cache: Cache to use; None creates a DiskCache in the configured directory.
            ttl_seconds: Entry lifetime for stored responses; None keeps the current value.
            enabled: Pass False to install the cache without using it yet.
        """
        cache_impl = cache if cache is not None else DiskCache(self.config.resolved_cache_dir())
        self.executor.configure_cache(cache_impl, ttl_seconds=ttl_seconds, enabled=enabled)
        self.config = self.executor.config
        logger.debug(
            "Cache %s (ttl=%ds)",
            "enabled" if enabled else "installed but disabled",
            self.config.cache_ttl_seconds,
        )
        return self

    def set_shape_responses(self, enabled: bool) -> Self:
        """Set whether responses are shaped into named-field objects by default."""
        self.executor.set_shape_responses(enabled)
        self.config = self.executor.config
        return self

    def paginate(
        self,
        fetch_page: PageFetcher,
        items_key: str,
        *,
        limit: int = 0,
        max_pages: int = 0,
        start_page: int = 0,
    ) -> Paginator:
        return Paginator(
            fetch_page=fetch_page,
            items_key=items_key,
            limit=limit,
            max_pages=max_pages,
            start_page=start_page,
        )

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
