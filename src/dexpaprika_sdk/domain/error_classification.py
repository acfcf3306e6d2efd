"""Map an HTTP status and decoded error body onto the SDK error taxonomy."""

from __future__ import annotations

from collections.abc import Mapping
from typing import cast

from ..exceptions import (
    UNKNOWN_ERROR_MESSAGE,
    AuthenticationError,
    ClientError,
    DexPaprikaApiError,
    NotFoundError,
    RateLimitError,
    ServerError,
)


def extract_error_message(error_data: Mapping[str, object] | None) -> str:
    """Return the body's `error` field, or the fixed unknown-error message."""
    if not error_data:
        return UNKNOWN_ERROR_MESSAGE
    value = error_data.get("error")
    if value is None:
        return UNKNOWN_ERROR_MESSAGE
    text = value.strip() if isinstance(value, str) else str(value)
    return text or UNKNOWN_ERROR_MESSAGE


def classify_error(status_code: int | None, error_data: object = None) -> DexPaprikaApiError:
    """Classify a failed response (first match wins).

    404 -> NotFoundError, 401 -> AuthenticationError, 429 -> RateLimitError,
    >= 500 -> ServerError, other 4xx -> ClientError, anything else -> generic.
    Absent or non-object bodies are treated as carrying no extra data.
    """
    data: dict[str, object] | None = None
    if isinstance(error_data, Mapping):
        data = {str(key): item for key, item in cast(Mapping[object, object], error_data).items()}
    message = extract_error_message(data)

    error_type: type[DexPaprikaApiError]
    match status_code:
        case 404:
            error_type = NotFoundError
        case 401:
            error_type = AuthenticationError
        case 429:
            error_type = RateLimitError
        case int() if status_code >= 500:
            error_type = ServerError
        case int() if status_code >= 400:
            error_type = ClientError
        case _:
            error_type = DexPaprikaApiError
    return error_type(message, status_code=status_code, error_data=data)
