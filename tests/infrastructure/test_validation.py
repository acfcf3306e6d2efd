"""Tests for inbound JSON validation helpers."""

import pytest

from dexpaprika_sdk.infrastructure.validation import (
    IncomingDataError,
    decode_error_body,
    decode_json,
    validate_as,
    validate_json_as,
)


def test_decode_json_accepts_any_json_document() -> None:
    assert decode_json(b'{"chains": 15}') == {"chains": 15}
    assert decode_json("[1, 2]") == [1, 2]
    assert decode_json("null") is None
    assert decode_json("3.5") == 3.5


def test_decode_json_rejects_malformed_payload() -> None:
    with pytest.raises(IncomingDataError):
        decode_json(b"{broken")


@pytest.mark.parametrize("payload", [b"", b"<html>", b"[1]", b'"text"'])
def test_decode_error_body_returns_none_for_unusable_bodies(payload: bytes) -> None:
    assert decode_error_body(payload) is None


def test_decode_error_body_returns_objects() -> None:
    assert decode_error_body(b'{"error": "Resource not found"}') == {"error": "Resource not found"}


def test_validate_as_and_validate_json_as() -> None:
    assert validate_as(dict[str, int], {"a": 1}) == {"a": 1}
    assert validate_json_as(list[int], "[1, 2]") == [1, 2]
    with pytest.raises(IncomingDataError):
        validate_as(dict[str, int], ["not", "a", "dict"])
    with pytest.raises(IncomingDataError):
        validate_json_as(list[int], '{"a": 1}')
