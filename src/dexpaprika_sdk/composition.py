"""Composition root for wiring CLI dependencies."""

from __future__ import annotations

from .cli import create_app
from .client import DexPaprikaClient
from .config import ClientConfig
from .infrastructure import DiskCache, RequestsTransport


def build_client(*, config: ClientConfig) -> DexPaprikaClient:
    """Build a client with the concrete requests transport and disk cache.

    Args:
        config: Client configuration (env, config file and CLI overrides applied).
    """
    transport = RequestsTransport(
        base_url=config.base_url,
        user_agent=config.user_agent,
        timeout_seconds=config.timeout_seconds,
    )
    cache = DiskCache(config.resolved_cache_dir()) if config.cache_enabled else None
    return DexPaprikaClient(config, transport=transport, cache=cache)


app = create_app(build_client)
