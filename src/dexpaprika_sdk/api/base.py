"""Shared plumbing for the resource API wrappers."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from urllib.parse import quote

from ..domain.shaping import ApiResponse
from ..exceptions import InvalidArgumentError
from ..infrastructure.http import RequestExecutor
from ..protocols import ParamValue

SORT_ORDERS: tuple[str, ...] = ("asc", "desc")
OHLCV_INTERVALS: tuple[str, ...] = ("1m", "5m", "10m", "15m", "30m", "1h", "6h", "12h", "24h")


def build_query_params(
    options: Mapping[str, ParamValue],
    mapping: Mapping[str, str] | None = None,
) -> dict[str, ParamValue]:
    """Drop unset options and rename keys to their wire names."""
    renames = mapping or {}
    return {renames.get(key, key): value for key, value in options.items() if value is not None}


def require_non_empty(**values: str | None) -> None:
    """Raise InvalidArgumentError for the first missing or blank value."""
    for name, value in values.items():
        if value is None or not str(value).strip():
            raise InvalidArgumentError.missing(name)


def validate_allowed(value: object, allowed: Iterable[object], name: str) -> None:
    """Raise InvalidArgumentError unless value is unset or one of allowed."""
    options = tuple(allowed)
    if value is not None and value not in options:
        raise InvalidArgumentError.not_allowed(name, options)


def path_segment(value: str) -> str:
    return quote(value.strip(), safe="")


class ResourceApi:
    """Base class for one API resource; every call goes through the executor."""

    def __init__(self, executor: RequestExecutor) -> None:
        self.executor = executor

    def _get(
        self,
        endpoint: str,
        params: Mapping[str, ParamValue] | None = None,
        *,
        shape: bool | None = None,
    ) -> ApiResponse:
        return self.executor.get(endpoint, params, shape=shape)
