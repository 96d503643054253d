"""Error taxonomy for estimation calls."""

from enum import Enum


class TransportErrorKind(Enum):
    """Tagged cause of a failed remote call."""

    SERVICE_UNAVAILABLE = "service_unavailable"
    SERVER_ERROR = "server_error"
    RATE_LIMITED = "rate_limited"
    CONNECTION_RESET = "connection_reset"
    CONNECTION_TIMEOUT = "connection_timeout"
    AUTHENTICATION = "authentication"
    REJECTED = "rejected"


class FailureReason(Enum):
    """User-facing category of a failed estimation."""

    OVERLOADED = "overloaded"
    RATE_LIMITED = "rate_limited"
    INVALID_CREDENTIAL = "invalid_credential"
    GENERIC = "generic"


_STATUS_KINDS: dict[int, TransportErrorKind] = {
    401: TransportErrorKind.AUTHENTICATION,
    403: TransportErrorKind.AUTHENTICATION,
    429: TransportErrorKind.RATE_LIMITED,
    500: TransportErrorKind.SERVER_ERROR,
    502: TransportErrorKind.SERVER_ERROR,
    503: TransportErrorKind.SERVICE_UNAVAILABLE,
    504: TransportErrorKind.SERVER_ERROR,
}


class EstimationError(Exception):
    """Base class for all estimation failures."""


class ConfigurationError(EstimationError):
    """Raised when the client is missing required configuration."""


class TransportError(EstimationError):
    """Raised when the remote text-completion call fails."""

    def __init__(
        self,
        message: str,
        *,
        kind: TransportErrorKind,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code

    @classmethod
    def from_status(cls, status_code: int, message: str) -> "TransportError":
        """Tag an HTTP-like status code with its transport error kind."""
        kind = _STATUS_KINDS.get(status_code, TransportErrorKind.REJECTED)
        return cls(message, kind=kind, status_code=status_code)


class AttemptTimeoutError(EstimationError, TimeoutError):
    """Raised when a single attempt exceeds its deadline."""

    def __init__(self, label: str, timeout_ms: float) -> None:
        super().__init__(f"{label} timed out after {timeout_ms:g}ms")
        self.label = label
        self.timeout_ms = timeout_ms


class ParseError(EstimationError):
    """Raised when model output carries no usable structured payload."""


class EstimationFailedError(EstimationError):
    """Final, user-presentable failure of an estimation call."""

    def __init__(self, reason: FailureReason, message: str) -> None:
        super().__init__(message)
        self.reason = reason
        self.message = message
