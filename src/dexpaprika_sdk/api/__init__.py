"""Resource API wrappers over the request executor."""

from .base import ResourceApi
from .dexes import DexesApi
from .networks import NetworksApi
from .pools import PoolsApi
from .search import SearchApi
from .stats import StatsApi
from .tokens import TokensApi

__all__ = [
    "DexesApi",
    "NetworksApi",
    "PoolsApi",
    "ResourceApi",
    "SearchApi",
    "StatsApi",
    "TokensApi",
]
