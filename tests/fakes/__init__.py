"""Exports for test fakes."""

from .cache import InMemoryCache
from .http import FakeTransport, RecordedCall, json_response
from .resilience import RecordingSleeper

__all__ = [
    "FakeTransport",
    "InMemoryCache",
    "RecordedCall",
    "RecordingSleeper",
    "json_response",
]
