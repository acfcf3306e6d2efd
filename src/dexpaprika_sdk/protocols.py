"""Protocol definitions for dependency injection.

These protocols define the abstract interfaces that the request executor depends on,
enabling isolated unit testing with fake implementations.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .exceptions import DexPaprikaApiError

type QueryValue = str | int | float | bool | None
type ParamValue = QueryValue | list[QueryValue] | tuple[QueryValue, ...]
type Params = Mapping[str, ParamValue]


def _empty_headers() -> dict[str, str]:
    return {}


@dataclass(frozen=True)
class TransportResponse:
    """A response received from the HTTP transport."""

    status_code: int
    body: bytes = b""
    headers: Mapping[str, str] = field(default_factory=_empty_headers)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


@runtime_checkable
class HttpTransport(Protocol):
    """Abstract HTTP transport performing a single request."""

    def perform(self, method: str, endpoint: str, *, params: Params) -> TransportResponse:
        """Perform one HTTP request against the configured base URL.

        Args:
            method: HTTP method (GET, POST, ...).
            endpoint: Path relative to the base URL.
            params: Query parameters for GET, JSON body for other methods.

        Returns:
            The received response, whatever its status.

        Raises:
            TransportConnectionError: If no response was received (includes timeouts).
            TransportError: For other transport faults.
        """
        ...

    def close(self) -> None:
        """Release pooled connections."""
        ...


@runtime_checkable
class Cache(Protocol):
    """Abstract key-value cache with per-entry expiry."""

    def get(self, key: str) -> object | None:
        """Retrieve a live value by key, or None if absent or expired."""
        ...

    def set(self, key: str, value: object, ttl: int | None = None) -> bool:
        """Store value under key; ttl <= 0 never expires, None uses the default."""
        ...

    def has(self, key: str) -> bool:
        """Check if a live entry exists for key."""
        ...

    def delete(self, key: str) -> bool:
        """Remove the entry for key (succeeds when absent)."""
        ...

    def clear(self) -> bool:
        """Remove every entry."""
        ...


@runtime_checkable
class RetryPolicy(Protocol):
    """Abstract retry policy for classified failures."""

    max_retries: int

    def should_retry(self, error: DexPaprikaApiError) -> bool:
        """Return True if the classified error permits another attempt."""
        ...

    def compute_backoff(self, attempt: int) -> float:
        """Return the delay in seconds before retrying the 0-based attempt."""
        ...


class Sleeper(Protocol):
    """Callable that blocks for the given number of seconds."""

    def __call__(self, seconds: float, /) -> None: ...
