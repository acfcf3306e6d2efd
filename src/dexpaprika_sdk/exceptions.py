"""Custom exceptions for the DexPaprika SDK.

API failures are classified once, next to the transport, into a fixed taxonomy
(see `ErrorKind`). Every API error carries the HTTP status (when one was
received) and the decoded error body, so callers can inspect provider detail.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum
from typing import ClassVar, Self


class ErrorKind(StrEnum):
    """Taxonomy of classified API failures."""

    NOT_FOUND = "not_found"
    AUTHENTICATION = "authentication"
    RATE_LIMIT = "rate_limit"
    SERVER_ERROR = "server_error"
    CLIENT_ERROR = "client_error"
    NETWORK = "network"
    GENERIC = "generic"


UNKNOWN_ERROR_MESSAGE = "Unknown error"


class DexPaprikaError(Exception):
    """Base exception for all SDK errors."""

    pass


class DexPaprikaApiError(DexPaprikaError):
    """Base exception for API request failures.

    Instances of this class (rather than a subclass) represent the generic kind:
    malformed JSON, unexpected transport faults, and anything unclassified.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.GENERIC

    def __init__(
        self,
        message: str = UNKNOWN_ERROR_MESSAGE,
        *,
        status_code: int | None = None,
        error_data: dict[str, object] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_data = error_data
        self.previous_errors: tuple[DexPaprikaApiError, ...] = ()

    def with_history(self, errors: Iterable[DexPaprikaApiError]) -> Self:
        """Attach the errors of earlier attempts (oldest first) and return self."""
        self.previous_errors = tuple(errors)
        return self

    @classmethod
    def for_invalid_json(cls, detail: str) -> Self:
        return cls(f"Invalid JSON response from API: {detail}")

    @classmethod
    def for_unexpected(cls, error: Exception) -> Self:
        return cls(f"Unexpected error: {error}")


class NotFoundError(DexPaprikaApiError):
    """HTTP 404 - the requested resource does not exist."""

    kind = ErrorKind.NOT_FOUND

    @classmethod
    def for_missing_resource(cls, resource: str, address: str, network: str) -> Self:
        return cls(f"{resource} with address {address} not found on network {network}")


class AuthenticationError(DexPaprikaApiError):
    """HTTP 401 - the API rejected the request credentials."""

    kind = ErrorKind.AUTHENTICATION


class RateLimitError(DexPaprikaApiError):
    """HTTP 429 - too many requests.

    Retried with the configured backoff table; a server-provided Retry-After
    value is not obeyed.
    """

    kind = ErrorKind.RATE_LIMIT


class ServerError(DexPaprikaApiError):
    """HTTP 5xx - the API failed to process a valid request."""

    kind = ErrorKind.SERVER_ERROR


class ClientError(DexPaprikaApiError):
    """HTTP 4xx other than 401, 404 and 429."""

    kind = ErrorKind.CLIENT_ERROR


class NetworkError(DexPaprikaApiError):
    """No response was received (connection failure or transport timeout)."""

    kind = ErrorKind.NETWORK

    @classmethod
    def for_transport_failure(cls, error: Exception) -> Self:
        return cls(f"API request failed: {error}")


class InvalidArgumentError(DexPaprikaApiError):
    """Raised before any request is made when call arguments are invalid."""

    @classmethod
    def missing(cls, name: str) -> Self:
        return cls(f"Required parameter '{name}' is missing or empty")

    @classmethod
    def not_allowed(cls, name: str, allowed: Iterable[object]) -> Self:
        options = ", ".join(str(option) for option in allowed)
        return cls(f"Invalid {name}. Must be one of: {options}")


class TransportError(DexPaprikaError):
    """Raised by a transport for faults other than connection failures."""

    pass


class TransportConnectionError(TransportError):
    """Raised by a transport when no response was received."""

    pass


class ConfigFileNotFoundError(DexPaprikaError):
    """Raised when a config file path does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Config file not found: {path}")


class ConfigFileParseError(DexPaprikaError):
    """Raised when a config file is not valid TOML."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Config file {path} is not valid TOML: {detail}")


class ConfigFileValidationError(DexPaprikaError):
    """Raised when a config file fails schema validation."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Config file {path} is invalid: {detail}")
