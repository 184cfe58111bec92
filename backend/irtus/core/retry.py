"""
Bounded retry with pluggable backoff.

``with_retry`` knows nothing about HTTP or decks: it takes a zero-argument
coroutine factory and re-invokes it until it succeeds or the retry budget is
spent.  The orchestrator in ``irtus.core.deck_generator`` is the only caller
that wires it to the generation endpoint.

State transitions::

    Idle -> Attempting -> Success
                       -> Backoff -> Attempting
                       -> Exhausted
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, TypeVar

from irtus.core.config import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

Backoff = Callable[[int], float]
Sleep = Callable[[float], Awaitable[None]]


class RetryState(str, Enum):
    idle = "idle"
    attempting = "attempting"
    backoff = "backoff"
    success = "success"
    exhausted = "exhausted"


def exponential_backoff(base: float = 1.0) -> Backoff:
    """Return a backoff function giving ``2**k * base`` seconds before retry *k*.

    No jitter and no cap.  With the default base the schedule is
    1, 2, 4, 8, 16 seconds.
    """

    def _delay(retry_index: int) -> float:
        return (2 ** retry_index) * base

    return _delay


async def with_retry(
    op: Callable[[], Awaitable[T]],
    *,
    max_retries: int = 5,
    backoff: Backoff | None = None,
    sleep: Sleep = asyncio.sleep,
    retry_on: tuple[type[BaseException], ...] = (Exception,),
    label: str = "operation",
) -> T:
    """Run *op* up to ``max_retries + 1`` times.

    Parameters
    ----------
    op:
        Zero-argument callable returning a fresh awaitable for each attempt.
    max_retries:
        Number of retries after the initial attempt.
    backoff:
        Maps the 0-indexed retry number to a delay in seconds.  Defaults to
        ``exponential_backoff()``.
    sleep:
        Awaited with each delay.  Tests pass a recorder instead of
        ``asyncio.sleep``.
    retry_on:
        Exception types that trigger a retry.  Anything else propagates
        immediately.
    label:
        Name used in log records.

    The exception from the final attempt is re-raised unchanged.
    """
    if max_retries < 0:
        raise ValueError("max_retries must be >= 0")
    if backoff is None:
        backoff = exponential_backoff()

    state = RetryState.idle
    total_attempts = max_retries + 1

    for attempt in range(total_attempts):
        state = RetryState.attempting
        logger.debug("%s: %s (attempt %s/%s)", label, state.value, attempt + 1, total_attempts)
        try:
            result = await op()
        except retry_on as exc:
            if attempt == max_retries:
                state = RetryState.exhausted
                logger.error(
                    "%s: %s after %s attempts: %s",
                    label, state.value, total_attempts, exc,
                )
                raise

            delay = backoff(attempt)
            state = RetryState.backoff
            logger.warning(
                "%s: attempt %s/%s failed (%s); retrying in %ss",
                label, attempt + 1, total_attempts, exc, delay,
            )
            await sleep(delay)
            continue

        state = RetryState.success
        logger.info("%s: %s on attempt %s/%s", label, state.value, attempt + 1, total_attempts)
        return result

    # unreachable: the loop either returns or re-raises on the last attempt
    raise RuntimeError(f"{label}: retry loop ended in state {state.value}")


@dataclass
class RetryPolicy:
    """Bundle of ``with_retry`` parameters that can be passed around as one value."""

    max_retries: int = 5
    backoff: Backoff = field(default_factory=exponential_backoff)
    sleep: Sleep = asyncio.sleep
    retry_on: tuple[type[BaseException], ...] = (Exception,)

    @classmethod
    def from_settings(cls, settings: Settings, **overrides) -> "RetryPolicy":
        params = {
            "max_retries": settings.GENERATION_MAX_RETRIES,
            "backoff": exponential_backoff(settings.GENERATION_BACKOFF_BASE_SECONDS),
        }
        params.update(overrides)
        return cls(**params)

    async def __call__(self, op: Callable[[], Awaitable[T]], label: str = "operation") -> T:
        return await with_retry(
            op,
            max_retries=self.max_retries,
            backoff=self.backoff,
            sleep=self.sleep,
            retry_on=self.retry_on,
            label=label,
        )
