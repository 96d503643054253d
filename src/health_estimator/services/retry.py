"""Retry with exponential backoff around timed attempts."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TypeVar

from health_estimator.domain.estimates import RetryAttempt
from health_estimator.services.classifier import ErrorClass, classify
from health_estimator.services.timeouts import DEFAULT_TIMEOUT_MS, with_timeout

T = TypeVar("T")

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """Retry limits and backoff shape for remote estimation calls."""

    max_retries: int = 2
    initial_delay_ms: float = 500
    max_delay_ms: float = 3000
    backoff_multiplier: float = 2
    attempt_timeout_ms: float = DEFAULT_TIMEOUT_MS

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.initial_delay_ms < 0:
            raise ValueError("initial_delay_ms must be >= 0")
        if self.max_delay_ms < self.initial_delay_ms:
            raise ValueError("max_delay_ms must be >= initial_delay_ms")
        if self.backoff_multiplier < 1:
            raise ValueError("backoff_multiplier must be >= 1")
        if self.attempt_timeout_ms <= 0:
            raise ValueError("attempt_timeout_ms must be > 0")

    @property
    def max_attempts(self) -> int:
        """Total number of attempts including the first one."""
        return self.max_retries + 1

    def delay_ms(self, attempt: int) -> float:
        """Backoff delay after the given zero-based failed attempt."""
        return min(
            self.initial_delay_ms * self.backoff_multiplier**attempt,
            self.max_delay_ms,
        )


@dataclass
class RetryScheduler:
    """Runs an operation through the timeout guard, retrying transient failures."""

    policy: RetryPolicy = field(default_factory=RetryPolicy)
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    on_retry: Callable[[RetryAttempt], None] | None = None

    async def execute(self, operation: Callable[[], Awaitable[T]], context: str) -> T:
        """Call ``operation`` until it succeeds, fails fatally, or runs out of attempts.

        Attempts are strictly sequential. The error of the last attempt is the
        one re-raised.
        """
        attempt = 0
        while True:
            try:
                return await with_timeout(
                    operation(),
                    self.policy.attempt_timeout_ms,
                    context,
                )
            except Exception as exc:
                if (
                    attempt >= self.policy.max_retries
                    or classify(exc) is ErrorClass.FATAL
                ):
                    raise
                delay_ms = self.policy.delay_ms(attempt)
                _logger.warning(
                    "%s failed (attempt %s/%s). Retrying in %sms: %s",
                    context,
                    attempt + 1,
                    self.policy.max_attempts,
                    f"{delay_ms:g}",
                    exc,
                )
                if self.on_retry is not None:
                    self.on_retry(
                        RetryAttempt(index=attempt, delay_ms=delay_ms, error=exc)
                    )
                await self.sleep(delay_ms / 1000)
                attempt += 1
