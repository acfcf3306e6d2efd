"""Centralised, injectable configuration for the DexPaprika SDK."""

from __future__ import annotations

import math
import os
import tempfile
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Self

from dotenv import load_dotenv

from . import __version__
from .config_file import ClientConfigFile

DEFAULT_BASE_URL = "https://api.dexpaprika.com"
DEFAULT_RETRY_DELAYS_MS: tuple[int, ...] = (100, 500, 1000, 2500, 5000)
DEFAULT_CACHE_DIR_NAME = "dexpaprika_cache"


class NonNegativeIntegerEnvVarError(ValueError):
    """Raised when an environment variable must be zero or a positive integer."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a non-negative integer.")


class BooleanEnvVarError(ValueError):
    """Raised when an environment variable must be a supported boolean."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a boolean value (true/false, 1/0, yes/no, on/off).")


class PositiveNumberEnvVarError(ValueError):
    """Raised when an environment variable must be a number greater than zero."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a number greater than zero.")


class IntegerEnvVarError(ValueError):
    """Raised when an environment variable must be a whole number."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be an integer.")


class RetryDelaysEnvVarError(ValueError):
    """Raised when the retry delay table is not a list of non-negative integers."""

    def __init__(self, env_name: str) -> None:
        super().__init__(
            f"{env_name} must be a comma-separated list of non-negative integers (milliseconds)."
        )


@dataclass(frozen=True)
class ClientConfig:
    """Immutable configuration object for the client and its request executor.

    Load from environment with `ClientConfig.from_env()` or construct directly for testing.
    """

    # Transport
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = 30.0

    # Retries
    max_retries: int = 5
    retry_delays_ms: tuple[int, ...] = DEFAULT_RETRY_DELAYS_MS
    retry_jitter_ms: int = 50

    # Caching (GET responses only)
    cache_enabled: bool = False
    cache_ttl_seconds: int = 3600  # <= 0 never expires
    cache_dir: str = ""

    # Response shaping
    shape_responses: bool = False

    @property
    def user_agent(self) -> str:
        return f"dexpaprika-sdk-python/{__version__}"

    def resolved_cache_dir(self) -> Path:
        """Return the configured cache directory, defaulting to the system temp dir."""
        if self.cache_dir:
            return Path(self.cache_dir)
        return Path(tempfile.gettempdir()) / DEFAULT_CACHE_DIR_NAME

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> Self:
        """Load configuration from environment variables.

        Args:
            dotenv_path: Optional path to .env file. If None, uses default .env discovery.

        Returns:
            ClientConfig instance populated from environment.
        """
        load_dotenv(dotenv_path)

        return cls(
            base_url=_parse_base_url(os.getenv("DEXPAPRIKA_BASE_URL", "")),
            timeout_seconds=_parse_positive_float(
                os.getenv("DEXPAPRIKA_TIMEOUT_SECONDS", "30"),
                env_name="DEXPAPRIKA_TIMEOUT_SECONDS",
            ),
            max_retries=_parse_non_negative_int(
                os.getenv("DEXPAPRIKA_MAX_RETRIES", "5"),
                env_name="DEXPAPRIKA_MAX_RETRIES",
            ),
            retry_delays_ms=_parse_retry_delays(
                os.getenv("DEXPAPRIKA_RETRY_DELAYS_MS", ""),
                env_name="DEXPAPRIKA_RETRY_DELAYS_MS",
            ),
            retry_jitter_ms=_parse_non_negative_int(
                os.getenv("DEXPAPRIKA_RETRY_JITTER_MS", "50"),
                env_name="DEXPAPRIKA_RETRY_JITTER_MS",
            ),
            cache_enabled=_parse_optional_bool(
                os.getenv("DEXPAPRIKA_CACHE_ENABLED", ""),
                env_name="DEXPAPRIKA_CACHE_ENABLED",
            )
            or False,
            cache_ttl_seconds=_parse_int(
                os.getenv("DEXPAPRIKA_CACHE_TTL_SECONDS", "3600"),
                env_name="DEXPAPRIKA_CACHE_TTL_SECONDS",
            ),
            cache_dir=os.getenv("DEXPAPRIKA_CACHE_DIR", "").strip(),
            shape_responses=_parse_optional_bool(
                os.getenv("DEXPAPRIKA_SHAPE_RESPONSES", ""),
                env_name="DEXPAPRIKA_SHAPE_RESPONSES",
            )
            or False,
        )

    def with_overrides(
        self,
        *,
        base_url: str | None = None,
        timeout_seconds: float | None = None,
        max_retries: int | None = None,
        retry_delays_ms: tuple[int, ...] | None = None,
        retry_jitter_ms: int | None = None,
        cache_enabled: bool | None = None,
        cache_ttl_seconds: int | None = None,
        cache_dir: str | None = None,
        shape_responses: bool | None = None,
    ) -> Self:
        """Return a new config with specified overrides (for CLI options and setup calls)."""
        return replace(
            self,
            base_url=self.base_url if base_url is None else _parse_base_url(base_url),
            timeout_seconds=self.timeout_seconds if timeout_seconds is None else timeout_seconds,
            max_retries=self.max_retries if max_retries is None else max_retries,
            retry_delays_ms=self.retry_delays_ms if retry_delays_ms is None else retry_delays_ms,
            retry_jitter_ms=self.retry_jitter_ms if retry_jitter_ms is None else retry_jitter_ms,
            cache_enabled=self.cache_enabled if cache_enabled is None else cache_enabled,
            cache_ttl_seconds=self.cache_ttl_seconds
            if cache_ttl_seconds is None
            else cache_ttl_seconds,
            cache_dir=self.cache_dir if cache_dir is None else cache_dir.strip(),
            shape_responses=self.shape_responses if shape_responses is None else shape_responses,
        )

    def with_file_overrides(self, file_config: ClientConfigFile) -> Self:
        """Return a new config with config-file values overriding env/default values."""
        return self.with_overrides(
            base_url=file_config.base_url,
            timeout_seconds=file_config.timeout_seconds,
            max_retries=file_config.max_retries,
            retry_delays_ms=file_config.retry_delays_ms,
            retry_jitter_ms=file_config.retry_jitter_ms,
            cache_enabled=file_config.cache_enabled,
            cache_ttl_seconds=file_config.cache_ttl_seconds,
            cache_dir=file_config.cache_dir,
            shape_responses=file_config.shape_responses,
        )


def _parse_base_url(value: str) -> str:
    """Strip whitespace and trailing slashes; empty means the public API."""
    text = value.strip().rstrip("/")
    return text or DEFAULT_BASE_URL


def _parse_non_negative_int(value: str, *, env_name: str) -> int:
    """Parse a non-negative integer from an environment variable."""
    try:
        parsed = int(value.strip())
    except ValueError as exc:
        raise NonNegativeIntegerEnvVarError(env_name) from exc
    if parsed < 0:
        raise NonNegativeIntegerEnvVarError(env_name)
    return parsed


def _parse_positive_float(value: str, *, env_name: str) -> float:
    """Parse a number greater than zero from an environment variable."""
    try:
        parsed = float(value.strip())
    except ValueError as exc:
        raise PositiveNumberEnvVarError(env_name) from exc
    if not math.isfinite(parsed) or parsed <= 0:
        raise PositiveNumberEnvVarError(env_name)
    return parsed


def _parse_int(value: str, *, env_name: str) -> int:
    """Parse an integer (negative values allowed) from an environment variable."""
    try:
        return int(value.strip())
    except ValueError as exc:
        raise IntegerEnvVarError(env_name) from exc


def _parse_retry_delays(value: str, *, env_name: str) -> tuple[int, ...]:
    """Parse a comma-separated delay table; empty means the default table."""
    items = [item.strip() for item in value.split(",") if item.strip()]
    if not items:
        return DEFAULT_RETRY_DELAYS_MS
    try:
        delays = tuple(int(item) for item in items)
    except ValueError as exc:
        raise RetryDelaysEnvVarError(env_name) from exc
    if any(delay < 0 for delay in delays):
        raise RetryDelaysEnvVarError(env_name)
    return delays


def _parse_optional_bool(value: str, *, env_name: str) -> bool | None:
    """Parse an optional boolean from an environment variable."""
    text = value.strip().lower()
    if not text:
        return None
    if text in {"1", "true", "yes", "y", "on"}:
        return True
    if text in {"0", "false", "no", "n", "off"}:
        return False
    raise BooleanEnvVarError(env_name)
