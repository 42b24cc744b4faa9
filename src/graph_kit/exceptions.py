"""Exception hierarchy for graph-kit.

All errors raised by the library derive from GraphError so callers can
catch everything with a single except clause, or target one kind of
failure (remote API error, transport failure, bad arguments).
"""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Classification of a failure, independent of the exception class."""

    MISSING_ACCESS_TOKEN = "missing_access_token"
    REMOTE_API_ERROR = "remote_api_error"
    TRANSPORT_ERROR = "transport_error"
    ARGUMENT_ERROR = "argument_error"
    CONFIGURATION_ERROR = "configuration_error"


class GraphError(Exception):
    """Base exception for all graph-kit errors.

    Attributes:
        message: Human-readable error message
        details: Additional error context
    """

    kind: ErrorKind = ErrorKind.REMOTE_API_ERROR

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class MissingAccessTokenError(GraphError):
    """Raised locally when a write or delete is attempted without a token.

    This never reaches the network.
    """

    kind = ErrorKind.MISSING_ACCESS_TOKEN


class GraphAPIError(GraphError):
    """Error payload returned by the remote API.

    The original ``error`` value of the response body is kept in
    ``raw_payload`` for diagnostics.
    """

    kind = ErrorKind.REMOTE_API_ERROR

    def __init__(self, raw_payload: Any) -> None:
        self.raw_payload = raw_payload

        if isinstance(raw_payload, dict):
            self.error_type: str | None = raw_payload.get("type")
            self.code: int | None = raw_payload.get("code")
            self.subcode: int | None = raw_payload.get("error_subcode")
            message = raw_payload.get("message") or "Unknown API error"
            details = raw_payload
        else:
            self.error_type = None
            self.code = None
            self.subcode = None
            message = str(raw_payload)
            details = {}

        if self.error_type:
            message = f"{self.error_type}: {message}"

        super().__init__(message, details=details)


# Alias matching the taxonomy used in the API documentation
RemoteAPIError = GraphAPIError


class TransportError(GraphError):
    """Network, transport, or response decoding failure."""

    kind = ErrorKind.TRANSPORT_ERROR

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=details)
        self.status_code = status_code


class ConnectionError(TransportError):  # noqa: A001
    """Raised when the API host cannot be reached."""


class TimeoutError(TransportError):  # noqa: A001
    """Raised when a request exceeds the transport timeout."""


class ArgumentError(GraphError):
    """Raised when a call is constructed with malformed arguments."""

    kind = ErrorKind.ARGUMENT_ERROR


class NoSuchPageError(ArgumentError):
    """Raised when paging past the first or last page of a collection."""


class BatchScopeError(ArgumentError):
    """Raised on misuse of a batch scope.

    Examples: opening a second batch while one is open, registering calls
    after execution, or exceeding the batch size limit.
    """


class ConfigurationError(GraphError):
    """Raised when client configuration is invalid."""

    kind = ErrorKind.CONFIGURATION_ERROR
