"""Concrete infrastructure implementations and shared helpers."""

from .cache import DiskCache
from .http import RateLimitInfo, RequestExecutor, parse_rate_limit_headers
from .resilience import RetryPolicy
from .transport import RequestsTransport

__all__ = [
    "DiskCache",
    "RateLimitInfo",
    "RequestExecutor",
    "RequestsTransport",
    "RetryPolicy",
    "parse_rate_limit_headers",
]
