"""Request identity: immutable descriptors and deterministic cache keys."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from ..protocols import Params, ParamValue


def _empty_params() -> Mapping[str, ParamValue]:
    return MappingProxyType({})


def serialize_params(params: Params) -> str:
    """Serialize params with keys sorted, so insertion order never matters."""
    return json.dumps(
        {str(key): value for key, value in params.items()},
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )


def generate_cache_key(method: str, endpoint: str, params: Params) -> str:
    """Return the SHA-256 hex digest of `method|endpoint|sorted-params`."""
    raw = f"{method.upper()}|{endpoint}|{serialize_params(params)}"
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class RequestDescriptor:
    """One logical API call, consumed once by the request executor."""

    method: str
    endpoint: str
    params: Mapping[str, ParamValue] = field(default_factory=_empty_params)

    @classmethod
    def create(cls, method: str, endpoint: str, params: Params | None = None) -> RequestDescriptor:
        frozen = MappingProxyType(dict(params or {}))
        return cls(method=method.upper(), endpoint=endpoint, params=frozen)

    @property
    def is_cacheable(self) -> bool:
        return self.method == "GET"

    def cache_key(self) -> str:
        return generate_cache_key(self.method, self.endpoint, self.params)
