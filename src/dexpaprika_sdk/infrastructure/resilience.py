"""Retry policy for transient API failures.

Usage example:
    from dexpaprika_sdk.infrastructure.resilience import RetryPolicy

    policy = RetryPolicy(max_retries=3, retry_delays_ms=(100, 500, 1000))
    policy.compute_backoff(0)  # ~0.1 seconds, +/- jitter
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Self, override

from ..config import DEFAULT_RETRY_DELAYS_MS
from ..exceptions import DexPaprikaApiError, ErrorKind
from ..protocols import RetryPolicy as RetryPolicyProtocol

if TYPE_CHECKING:
    from ..config import ClientConfig

RETRYABLE_KINDS: frozenset[ErrorKind] = frozenset(
    {ErrorKind.NETWORK, ErrorKind.RATE_LIMIT, ErrorKind.SERVER_ERROR}
)


def should_retry(error: DexPaprikaApiError) -> bool:
    """Network faults, 429 and 5xx are retryable; everything else is final."""
    return error.kind in RETRYABLE_KINDS


def retry_delay_for_attempt(delays_ms: Sequence[int], attempt: int) -> int:
    """Look up the base delay for a 0-based attempt.

    Negative attempts wait nothing; attempts past the end reuse the last entry.
    """
    if attempt < 0 or not delays_ms:
        return 0
    if attempt >= len(delays_ms):
        return delays_ms[-1]
    return delays_ms[attempt]


def _system_random() -> random.Random:
    return random.Random()


@dataclass
class RetryPolicy(RetryPolicyProtocol):
    """Table-driven backoff with symmetric jitter."""

    max_retries: int = 5
    retry_delays_ms: tuple[int, ...] = DEFAULT_RETRY_DELAYS_MS
    jitter_ms: int = 50
    rng: random.Random = field(default_factory=_system_random, repr=False)

    @classmethod
    def from_config(cls, config: ClientConfig) -> Self:
        return cls(
            max_retries=config.max_retries,
            retry_delays_ms=config.retry_delays_ms,
            jitter_ms=config.retry_jitter_ms,
        )

    @override
    def should_retry(self, error: DexPaprikaApiError) -> bool:
        return should_retry(error)

    def delay_ms_for_attempt(self, attempt: int) -> int:
        return retry_delay_for_attempt(self.retry_delays_ms, attempt)

    @override
    def compute_backoff(self, attempt: int) -> float:
        """Return the wait in seconds before retrying attempt; never negative."""
        delay_ms = float(self.delay_ms_for_attempt(attempt))
        if self.jitter_ms > 0:
            delay_ms += self.rng.uniform(-self.jitter_ms, self.jitter_ms)
        return max(0.0, delay_ms) / 1000.0
