"""Failure classification for retry and user-facing messages."""

from enum import Enum

from health_estimator.domain.errors import (
    FailureReason,
    TransportError,
    TransportErrorKind,
)


class ErrorClass(Enum):
    """Whether another attempt is worth making."""

    RETRYABLE = "retryable"
    FATAL = "fatal"


_RETRYABLE_KINDS = frozenset(
    {
        TransportErrorKind.SERVICE_UNAVAILABLE,
        TransportErrorKind.SERVER_ERROR,
        TransportErrorKind.RATE_LIMITED,
        TransportErrorKind.CONNECTION_RESET,
        TransportErrorKind.CONNECTION_TIMEOUT,
    }
)

_REASON_BY_KIND = {
    TransportErrorKind.SERVICE_UNAVAILABLE: FailureReason.OVERLOADED,
    TransportErrorKind.RATE_LIMITED: FailureReason.RATE_LIMITED,
    TransportErrorKind.AUTHENTICATION: FailureReason.INVALID_CREDENTIAL,
}

_MESSAGES = {
    FailureReason.OVERLOADED: (
        "The AI service is currently overloaded. Please try again in a few moments."
    ),
    FailureReason.RATE_LIMITED: (
        "Rate limit exceeded. Please wait a moment before trying again."
    ),
    FailureReason.INVALID_CREDENTIAL: (
        "Invalid API key. Please check your OpenAI API key in settings."
    ),
}


def classify(error: BaseException) -> ErrorClass:
    """Return RETRYABLE only for transient transport failures.

    Timeouts, parse failures and credential problems are deterministic enough
    that an immediate second attempt would only burn time and quota.
    """
    if isinstance(error, TransportError) and error.kind in _RETRYABLE_KINDS:
        return ErrorClass.RETRYABLE
    return ErrorClass.FATAL


def failure_reason(error: BaseException) -> FailureReason:
    """Map a final failure to a user-facing category."""
    if isinstance(error, TransportError):
        return _REASON_BY_KIND.get(error.kind, FailureReason.GENERIC)
    return FailureReason.GENERIC


def user_message(reason: FailureReason, subject: str) -> str:
    """Return the stable message shown for a failure reason."""
    if reason is FailureReason.GENERIC:
        return f"Failed to estimate {subject}. Please try again."
    return _MESSAGES[reason]
