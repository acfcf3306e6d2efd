"""Pydantic-based validation helpers for inbound IO payloads."""

from __future__ import annotations

from typing import TypedDict

from pydantic import JsonValue, TypeAdapter, ValidationError

_JSON_ADAPTER: TypeAdapter[JsonValue] = TypeAdapter(JsonValue)


class IncomingDataError(ValueError):
    """Raised when inbound data fails validation."""


class CacheEntryInput(TypedDict):
    value: JsonValue
    expires_at: float | None


def validate_as[SchemaT](schema: type[SchemaT], payload: object) -> SchemaT:
    try:
        return TypeAdapter(schema).validate_python(payload)
    except ValidationError as exc:
        message = f"Invalid payload for {schema}."
        raise IncomingDataError(message) from exc


def validate_json_as[SchemaT](schema: type[SchemaT], payload: str | bytes | bytearray) -> SchemaT:
    try:
        return TypeAdapter(schema).validate_json(payload)
    except ValidationError as exc:
        message = f"Invalid JSON payload for {schema}."
        raise IncomingDataError(message) from exc


def decode_json(payload: str | bytes | bytearray) -> JsonValue:
    """Decode any JSON document (object, array or scalar)."""
    try:
        return _JSON_ADAPTER.validate_json(payload)
    except ValidationError as exc:
        first = exc.errors()[0]
        raise IncomingDataError(str(first.get("msg", "invalid JSON"))) from exc


def decode_error_body(payload: bytes) -> dict[str, object] | None:
    """Best-effort decode of an error response body.

    Returns None for empty, malformed or non-object bodies.
    """
    if not payload:
        return None
    try:
        decoded = decode_json(payload)
    except IncomingDataError:
        return None
    if not isinstance(decoded, dict):
        return None
    return dict(decoded)
