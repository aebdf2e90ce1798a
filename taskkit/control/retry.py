"""
Retry combinators
=================

Re-run a failing operation with exponential backoff.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from functools import wraps

from kungfu import Error, LazyCoroResult, Ok, Result

from .._types import LCR, Predicate

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RetryPolicy[E]:
    """
    Retry configuration.

    max_attempts counts retries *after* the first run, so an operation is
    run at most max_attempts + 1 times. Delays are deterministic:
    initial_delay * backoff_multiplier ** (n - 1) before retry n, capped
    at max_delay.
    """

    max_attempts: int = 3
    initial_delay: float = 1.0
    max_delay: float = 30.0
    backoff_multiplier: float = 2.0
    on_retry: Callable[[E, int], None] | None = None
    retry_on: Predicate[E] | None = None

    def __post_init__(self) -> None:
        if self.max_attempts < 0:
            raise ValueError("RetryPolicy.max_attempts must be >= 0")
        if self.initial_delay <= 0.0:
            raise ValueError("RetryPolicy.initial_delay must be > 0")
        if self.max_delay < self.initial_delay:
            raise ValueError("RetryPolicy.max_delay must be >= initial_delay")
        if self.backoff_multiplier < 1.0:
            raise ValueError("RetryPolicy.backoff_multiplier must be >= 1.0")

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait before retry number `attempt` (1-based)."""
        delay = self.initial_delay * (self.backoff_multiplier ** (attempt - 1))
        return min(delay, self.max_delay)

    def should_retry(self, error: E, attempt: int) -> bool:
        if attempt > self.max_attempts:
            return False
        if self.retry_on is not None and not self.retry_on(error):
            return False
        return True


def retry[T, E](
    interp: LCR[T, E],
    *,
    policy: RetryPolicy[E],
) -> LCR[T, E]:
    """
    Run interp until Ok, at most policy.max_attempts + 1 times.

    Returns the first Ok, or the Error of the *last* run. Earlier errors
    are only visible through policy.on_retry.
    """

    async def run() -> Result[T, E]:
        attempt = 0
        while True:
            result = await interp()
            match result:
                case Ok(_):
                    return result
                case Error(e):
                    pass

            attempt += 1
            if not policy.should_retry(e, attempt):
                if attempt > policy.max_attempts:
                    logger.error(f"All {attempt} attempts failed: {e!r}")
                else:
                    logger.warning(f"Non-retryable error on attempt {attempt}: {e!r}")
                return result

            delay = policy.delay_for(attempt)
            logger.warning(
                f"Attempt {attempt}/{policy.max_attempts + 1} failed: {e!r}. "
                f"Retrying in {delay:.2f}s"
            )
            await asyncio.sleep(delay)
            if policy.on_retry is not None:
                policy.on_retry(e, attempt)

    return LazyCoroResult(run)


def retrying[T, E, **P](
    policy: RetryPolicy[E],
) -> Callable[[Callable[P, LCR[T, E]]], Callable[P, LCR[T, E]]]:
    """
    Decorator: every call of the wrapped function is retried with policy.

    Usage:
        @retrying(RetryPolicy(max_attempts=5, initial_delay=0.5))
        def fetch_item(item_id: str) -> LCR[Item, Exception]:
            return L.attempt(lambda: api.item(item_id))
    """

    def decorator(func: Callable[P, LCR[T, E]]) -> Callable[P, LCR[T, E]]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> LCR[T, E]:
            return retry(func(*args, **kwargs), policy=policy)

        return wrapper

    return decorator


__all__ = (
    "RetryPolicy",
    "retry",
    "retrying",
)
