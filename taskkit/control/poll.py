"""Poll combinators

Run an operation at a fixed interval until its value satisfies a condition."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass

from kungfu import Error, LazyCoroResult, Ok, Result

from .._errors import PollTimeoutError
from .._types import LCR, Predicate

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PollPolicy[T]:
    """Configuration for poll_until. Seconds throughout."""

    interval: float = 1.0
    timeout: float = 30.0
    on_poll: Callable[[T, int], None] | None = None

    def __post_init__(self) -> None:
        if self.interval <= 0.0:
            raise ValueError("PollPolicy.interval must be > 0")
        if self.timeout <= 0.0:
            raise ValueError("PollPolicy.timeout must be > 0")


def poll_until[T, E](
    interp: LCR[T, E],
    *,
    condition: Predicate[T],
    policy: PollPolicy[T],
) -> LCR[T, E | PollTimeoutError]:
    """
    Run until the Ok value satisfies condition, or give up after policy.timeout.

    on_poll(value, attempt) sees every value, the final one included.
    Attempts start on a fixed grid (every `interval` seconds from the first
    one) so sleep overshoot does not accumulate. The deadline is checked
    after each attempt; an attempt in progress is never cut short. An Error
    from the operation stops polling and is returned as is.
    """

    async def run() -> Result[T, E | PollTimeoutError]:
        loop = asyncio.get_running_loop()
        started = loop.time()
        attempt = 0
        while True:
            result = await interp()
            match result:
                case Ok(value):
                    pass
                case Error(e):
                    return Error(e)

            attempt += 1
            if policy.on_poll is not None:
                policy.on_poll(value, attempt)
            if condition(value):
                return Ok(value)

            elapsed = loop.time() - started
            if elapsed >= policy.timeout:
                logger.warning(f"Polling gave up after {elapsed:.3f}s ({attempt} attempts)")
                return Error(PollTimeoutError(elapsed, attempt))

            # Fixed rate: attempt n+1 starts n intervals after the first one.
            next_at = started + attempt * policy.interval
            logger.debug(f"Poll attempt {attempt}: condition not met")
            await asyncio.sleep(max(0.0, next_at - loop.time()))

    return LazyCoroResult(run)


__all__ = ("PollPolicy", "poll_until")
