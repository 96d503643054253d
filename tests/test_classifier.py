"""Tests for error classification."""

import pytest

from health_estimator.domain.errors import (
    AttemptTimeoutError,
    FailureReason,
    ParseError,
    TransportError,
    TransportErrorKind,
)
from health_estimator.services.classifier import (
    ErrorClass,
    classify,
    failure_reason,
    user_message,
)


@pytest.mark.parametrize("status_code", [500, 502, 503, 504, 429])
def test_transient_statuses_are_retryable(status_code: int) -> None:
    error = TransportError.from_status(status_code, f"HTTP {status_code}")

    assert classify(error) is ErrorClass.RETRYABLE


@pytest.mark.parametrize(
    "kind",
    [TransportErrorKind.CONNECTION_RESET, TransportErrorKind.CONNECTION_TIMEOUT],
)
def test_connection_failures_are_retryable(kind: TransportErrorKind) -> None:
    assert classify(TransportError("socket closed", kind=kind)) is ErrorClass.RETRYABLE


@pytest.mark.parametrize(
    "error",
    [
        AttemptTimeoutError(label="Meal estimation", timeout_ms=10_000),
        ParseError("no structured payload found"),
        TransportError.from_status(401, "Incorrect API key provided"),
        TransportError.from_status(400, "Bad request"),
        RuntimeError("unexpected"),
    ],
)
def test_everything_else_is_fatal(error: Exception) -> None:
    assert classify(error) is ErrorClass.FATAL


def test_from_status_tags_kinds() -> None:
    unavailable = TransportError.from_status(503, "x")
    forbidden = TransportError.from_status(403, "x")

    assert unavailable.kind is TransportErrorKind.SERVICE_UNAVAILABLE
    assert forbidden.kind is TransportErrorKind.AUTHENTICATION
    assert TransportError.from_status(418, "x").kind is TransportErrorKind.REJECTED
    assert TransportError.from_status(418, "x").status_code == 418


def test_failure_reason_mapping() -> None:
    overloaded = TransportError.from_status(503, "x")
    limited = TransportError.from_status(429, "x")

    assert failure_reason(overloaded) is FailureReason.OVERLOADED
    assert failure_reason(limited) is FailureReason.RATE_LIMITED
    assert (
        failure_reason(TransportError.from_status(401, "x"))
        is FailureReason.INVALID_CREDENTIAL
    )
    assert failure_reason(TransportError.from_status(500, "x")) is FailureReason.GENERIC
    assert failure_reason(ParseError("bad")) is FailureReason.GENERIC


def test_user_message_names_subject_for_generic_failures() -> None:
    assert user_message(FailureReason.GENERIC, "workout") == (
        "Failed to estimate workout. Please try again."
    )
    assert "overloaded" in user_message(FailureReason.OVERLOADED, "meal")
