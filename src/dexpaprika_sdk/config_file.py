"""Typed parsing and validation for client config files.

Example file:

    schema_version = 1

    [client]
    base_url = "https://api.dexpaprika.com"
    max_retries = 3
    retry_delays_ms = [100, 500, 1000]
    cache_enabled = true
    cache_ttl_seconds = 600
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .exceptions import ConfigFileNotFoundError, ConfigFileParseError, ConfigFileValidationError

_SCHEMA_VERSION = 1


@dataclass(frozen=True)
class ClientConfigFile:
    """Validated client config values loaded from a TOML file."""

    base_url: str | None = None
    timeout_seconds: float | None = None
    max_retries: int | None = None
    retry_delays_ms: tuple[int, ...] | None = None
    retry_jitter_ms: int | None = None
    cache_enabled: bool | None = None
    cache_ttl_seconds: int | None = None
    cache_dir: str | None = None
    shape_responses: bool | None = None


class _ClientSectionModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: str | None = None
    timeout_seconds: float | None = None
    max_retries: int | None = None
    retry_delays_ms: tuple[int, ...] | None = None
    retry_jitter_ms: int | None = None
    cache_enabled: bool | None = None
    cache_ttl_seconds: int | None = None
    cache_dir: str | None = None
    shape_responses: bool | None = None

    @field_validator("base_url")
    @classmethod
    def _validate_base_url(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip().rstrip("/")
        if not text.startswith(("http://", "https://")):
            raise ValueError
        return text

    @field_validator("cache_dir")
    @classmethod
    def _validate_non_empty_text(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip()
        if not text:
            raise ValueError
        return text

    @field_validator("timeout_seconds")
    @classmethod
    def _validate_positive_float(cls, value: float | None) -> float | None:
        if value is None:
            return None
        if value <= 0:
            raise ValueError
        return value

    @field_validator("max_retries", "retry_jitter_ms")
    @classmethod
    def _validate_non_negative_int(cls, value: int | None) -> int | None:
        if value is None:
            return None
        if value < 0:
            raise ValueError
        return value

    @field_validator("retry_delays_ms")
    @classmethod
    def _validate_delay_table(cls, value: tuple[int, ...] | None) -> tuple[int, ...] | None:
        if value is None:
            return None
        if not value or any(delay < 0 for delay in value):
            raise ValueError
        return value


class _ConfigFileModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: int
    client: _ClientSectionModel

    @field_validator("schema_version")
    @classmethod
    def _validate_schema_version(cls, value: int) -> int:
        if value != _SCHEMA_VERSION:
            raise ValueError
        return value


def _format_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ("<root>",)))
    message = str(first.get("msg", "invalid value"))
    return f"{location}: {message}"


def load_client_config_file(path: Path) -> ClientConfigFile:
    """Load and validate a client TOML config file."""
    if not path.exists():
        raise ConfigFileNotFoundError(str(path))

    raw_payload = path.read_text(encoding="utf-8")
    try:
        payload: object = tomllib.loads(raw_payload)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigFileParseError(str(path), str(exc)) from exc

    try:
        model = _ConfigFileModel.model_validate(payload)
    except ValidationError as exc:
        raise ConfigFileValidationError(str(path), _format_validation_error(exc)) from exc

    section = model.client
    return ClientConfigFile(
        base_url=section.base_url,
        timeout_seconds=section.timeout_seconds,
        max_retries=section.max_retries,
        retry_delays_ms=section.retry_delays_ms,
        retry_jitter_ms=section.retry_jitter_ms,
        cache_enabled=section.cache_enabled,
        cache_ttl_seconds=section.cache_ttl_seconds,
        cache_dir=section.cache_dir,
        shape_responses=section.shape_responses,
    )
