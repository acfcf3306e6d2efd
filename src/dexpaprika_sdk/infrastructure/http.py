"""Request execution: caching, retry with backoff, error classification, shaping.

Usage example:
    from pathlib import Path

    from dexpaprika_sdk.config import ClientConfig
    from dexpaprika_sdk.infrastructure.cache import DiskCache
    from dexpaprika_sdk.infrastructure.http import RequestExecutor
    from dexpaprika_sdk.infrastructure.transport import RequestsTransport

    config = ClientConfig(cache_enabled=True)
    executor = RequestExecutor(
        transport=RequestsTransport(base_url=config.base_url, user_agent=config.user_agent),
        config=config,
        cache=DiskCache(Path("data/cache")),
    )
    stats = executor.execute("GET", "/stats", shape=True)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal, cast, overload

from ..config import ClientConfig
from ..domain import shaping
from ..domain.error_classification import classify_error
from ..domain.request import RequestDescriptor
from ..domain.shaping import ApiResponse, JsonValue, ShapedValue
from ..exceptions import (
    DexPaprikaApiError,
    NetworkError,
    TransportConnectionError,
    TransportError,
)
from ..observability import get_logger
from ..protocols import Cache, HttpTransport, Params, RetryPolicy, Sleeper, TransportResponse
from .resilience import RetryPolicy as RetryPolicyImpl
from .validation import IncomingDataError, decode_error_body, decode_json

logger = get_logger("dexpaprika_sdk.infrastructure.http")

RATE_LIMIT_LIMIT_HEADER = "X-RateLimit-Limit"
RATE_LIMIT_REMAINING_HEADER = "X-RateLimit-Remaining"
RATE_LIMIT_RESET_HEADER = "X-RateLimit-Reset"


@dataclass(frozen=True)
class RateLimitInfo:
    """Rate-limit state reported by the API. Informational only."""

    limit: int | None = None
    remaining: int | None = None
    reset: int | None = None


def _header(headers: Mapping[str, str], name: str) -> str | None:
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def _optional_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def parse_rate_limit_headers(headers: Mapping[str, str] | None) -> RateLimitInfo | None:
    """Parse `X-RateLimit-*` headers; None when none of them is present."""
    if not headers:
        return None
    limit = _header(headers, RATE_LIMIT_LIMIT_HEADER)
    remaining = _header(headers, RATE_LIMIT_REMAINING_HEADER)
    reset = _header(headers, RATE_LIMIT_RESET_HEADER)
    if limit is None and remaining is None and reset is None:
        return None
    return RateLimitInfo(
        limit=_optional_int(limit),
        remaining=_optional_int(remaining),
        reset=_optional_int(reset),
    )


@dataclass(frozen=True)
class _AttemptOutcome:
    data: JsonValue = None
    error: DexPaprikaApiError | None = None
    cause: BaseException | None = None


class RequestExecutor:
    """Turns one logical API call into zero or more HTTP attempts.

    Behaviour:
    - GET requests are served from the cache when caching is enabled and a live
      entry exists; no transport call is made.
    - Network faults, 429 and 5xx responses are retried using the retry policy's
      backoff; other failures raise immediately.
    - Malformed JSON on a 2xx response is a generic error and is never retried.
    - Successful GET bodies are cached (except JSON null) with the configured TTL.
    - Results are shaped when requested per call or by the config default.
    """

    def __init__(
        self,
        *,
        transport: HttpTransport,
        config: ClientConfig | None = None,
        cache: Cache | None = None,
        retry_policy: RetryPolicy | None = None,
        sleep: Sleeper = time.sleep,
    ) -> None:
        self.transport = transport
        self.config = config or ClientConfig()
        self.cache = cache
        self.retry_policy = (
            retry_policy if retry_policy is not None else RetryPolicyImpl.from_config(self.config)
        )
        self.sleep = sleep
        self.last_rate_limit: RateLimitInfo | None = None

    @property
    def cache_enabled(self) -> bool:
        return self.config.cache_enabled and self.cache is not None

    def configure_cache(
        self,
        cache: Cache | None,
        *,
        ttl_seconds: int | None = None,
        enabled: bool = True,
    ) -> None:
        """Replace the cache and turn caching on (or off)."""
        self.cache = cache
        self.config = self.config.with_overrides(
            cache_enabled=enabled,
            cache_ttl_seconds=ttl_seconds,
        )

    def set_shape_responses(self, enabled: bool) -> None:
        self.config = self.config.with_overrides(shape_responses=enabled)

    @overload
    def execute(
        self,
        method: str,
        endpoint: str,
        params: Params | None = None,
        *,
        shape: Literal[True],
    ) -> ShapedValue: ...

    @overload
    def execute(
        self,
        method: str,
        endpoint: str,
        params: Params | None = None,
        *,
        shape: Literal[False],
    ) -> JsonValue: ...

    @overload
    def execute(
        self,
        method: str,
        endpoint: str,
        params: Params | None = None,
        *,
        shape: bool | None = None,
    ) -> ApiResponse: ...

    def execute(
        self,
        method: str,
        endpoint: str,
        params: Params | None = None,
        *,
        shape: bool | None = None,
    ) -> ApiResponse:
        """Execute one API call and return its decoded (optionally shaped) body.

        Raises:
            DexPaprikaApiError: The classified failure of the last attempt, with
                the earlier attempts' errors in `previous_errors`.
        """
        return self.fetch(RequestDescriptor.create(method, endpoint, params), shape=shape)

    def get(
        self,
        endpoint: str,
        params: Params | None = None,
        *,
        shape: bool | None = None,
    ) -> ApiResponse:
        return self.fetch(RequestDescriptor.create("GET", endpoint, params), shape=shape)

    def fetch(self, request: RequestDescriptor, *, shape: bool | None = None) -> ApiResponse:
        use_cache = request.is_cacheable and self.cache_enabled
        cache_key = request.cache_key() if use_cache else None

        if cache_key is not None and self.cache is not None:
            cached = self.cache.get(cache_key)
            if cached is not None:
                logger.debug("Cache hit for %s %s", request.method, request.endpoint)
                return self._finish(cached, shape)
            logger.debug("Cache miss for %s %s", request.method, request.endpoint)

        data = self._send_with_retries(request)

        if cache_key is not None and self.cache is not None and data is not None:
            if self.cache.set(cache_key, data, self.config.cache_ttl_seconds):
                logger.debug("Cached response for %s %s", request.method, request.endpoint)

        return self._finish(data, shape)

    def _finish(self, data: object, shape_override: bool | None) -> ApiResponse:
        enabled = self.config.shape_responses if shape_override is None else shape_override
        if enabled:
            return shaping.shape(data)
        return cast(JsonValue, data)

    def _send_with_retries(self, request: RequestDescriptor) -> JsonValue:
        errors: list[DexPaprikaApiError] = []
        attempt = 0
        while True:
            outcome = self._attempt(request)
            error = outcome.error
            if error is None:
                return outcome.data

            exhausted = attempt >= self.retry_policy.max_retries
            retrying = not exhausted and self.retry_policy.should_retry(error)
            logger.log(
                logging.WARNING if retrying else logging.ERROR,
                "API error (%s, status %s) for %s %s: %s",
                error.kind,
                error.status_code,
                request.method,
                request.endpoint,
                error.message,
            )
            if not retrying:
                error.with_history(errors)
                if outcome.cause is not None:
                    raise error from outcome.cause
                raise error

            errors.append(error)
            delay = self.retry_policy.compute_backoff(attempt)
            logger.info(
                "Retrying API request to %s (attempt %d of %d) after %.0f ms",
                request.endpoint,
                attempt + 1,
                self.retry_policy.max_retries,
                delay * 1000,
            )
            self.sleep(delay)
            attempt += 1

    def _attempt(self, request: RequestDescriptor) -> _AttemptOutcome:
        """Perform one attempt; faults that must never be retried are raised directly."""
        try:
            response = self.transport.perform(
                request.method, request.endpoint, params=request.params
            )
        except TransportConnectionError as exc:
            return _AttemptOutcome(error=NetworkError.for_transport_failure(exc), cause=exc)
        except TransportError as exc:
            raise DexPaprikaApiError.for_unexpected(exc) from exc

        self._record_rate_limit(response)

        if not response.is_success:
            error = classify_error(response.status_code, decode_error_body(response.body))
            return _AttemptOutcome(error=error)

        try:
            return _AttemptOutcome(data=decode_json(response.body))
        except IncomingDataError as exc:
            raise DexPaprikaApiError.for_invalid_json(str(exc)) from exc

    def _record_rate_limit(self, response: TransportResponse) -> None:
        info = parse_rate_limit_headers(response.headers)
        if info is None:
            return
        self.last_rate_limit = info
        logger.debug(
            "Rate limit: limit=%s remaining=%s reset=%s",
            info.limit,
            info.remaining,
            info.reset,
        )
