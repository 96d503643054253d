"""Per-attempt deadline enforcement."""

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from health_estimator.domain.errors import AttemptTimeoutError

DEFAULT_TIMEOUT_MS = 10_000

T = TypeVar("T")

_logger = logging.getLogger(__name__)

# Strong references to abandoned attempts until they settle.
_abandoned: set[asyncio.Future] = set()


async def with_timeout(
    operation: Awaitable[T],
    timeout_ms: float = DEFAULT_TIMEOUT_MS,
    label: str = "Operation",
) -> T:
    """Race an awaitable against a deadline.

    On expiry the operation is abandoned rather than cancelled: it may still
    complete in the background, but its outcome is discarded.
    """
    future = asyncio.ensure_future(operation)
    try:
        done, _ = await asyncio.wait({future}, timeout=timeout_ms / 1000)
    except asyncio.CancelledError:
        _abandon(future)
        raise
    if future in done:
        return future.result()

    _abandon(future)
    raise AttemptTimeoutError(label=label, timeout_ms=timeout_ms)


def _abandon(future: asyncio.Future) -> None:
    """Keep an unfinished attempt alive until it settles on its own."""
    _abandoned.add(future)
    future.add_done_callback(_discard_abandoned)


def _discard_abandoned(future: asyncio.Future) -> None:
    """Drop a settled abandoned attempt and retrieve its outcome."""
    _abandoned.discard(future)
    if future.cancelled():
        return
    error = future.exception()
    if error is not None:
        _logger.debug("Abandoned attempt finished with error: %s", error)
