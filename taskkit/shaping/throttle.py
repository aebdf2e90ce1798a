"""
Throttle
========

Run at most once per window; calls inside the window are dropped.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from kungfu import LazyCoroResult, Ok, Result

from .._types import LCR, SKIPPED, Skipped

logger = logging.getLogger(__name__)


class Throttler[**P, T, E]:
    """
    Run the first call immediately, drop calls for `seconds` afterwards.

    A dropped call does not run fn, is not queued, and resolves at once to
    Ok(SKIPPED). The window starts when a call *starts* executing, and no
    call runs while a previous execution is still in progress.

    Usage:
        save = Throttler(save_profile, seconds=2.0)

        match await save(profile):
            case Ok(value) if value is SKIPPED: ...  # too soon, dropped
            case Ok(saved): ...
            case Error(err): ...
    """

    __slots__ = ("_fn", "_seconds", "_clock", "_last_invoked_at", "_executing")

    def __init__(
        self,
        fn: Callable[P, LCR[T, E]],
        *,
        seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if seconds <= 0.0:
            raise ValueError("Throttler.seconds must be > 0")
        self._fn = fn
        self._seconds = seconds
        self._clock = clock
        self._last_invoked_at: float | None = None
        self._executing = False

    @property
    def seconds(self) -> float:
        return self._seconds

    @property
    def last_invoked_at(self) -> float | None:
        return self._last_invoked_at

    def permits(self, now: float | None = None) -> bool:
        """Would a call at `now` (default: the clock) run?"""
        if self._executing:
            return False
        if self._last_invoked_at is None:
            return True
        if now is None:
            now = self._clock()
        return now - self._last_invoked_at >= self._seconds

    def reset(self) -> None:
        """Forget the current window; the next call runs."""
        self._last_invoked_at = None

    def __call__(self, *args: P.args, **kwargs: P.kwargs) -> LCR[T | Skipped, E]:
        async def run() -> Result[T | Skipped, E]:
            now = self._clock()
            if not self.permits(now):
                logger.debug("Throttled call skipped")
                return Ok(SKIPPED)

            self._last_invoked_at = now
            self._executing = True
            try:
                return await self._fn(*args, **kwargs)()
            finally:
                self._executing = False

        return LazyCoroResult(run)


def throttle[**P, T, E](
    seconds: float,
    *,
    clock: Callable[[], float] = time.monotonic,
) -> Callable[[Callable[P, LCR[T, E]]], Throttler[P, T, E]]:
    """Decorator building a Throttler."""

    def decorator(func: Callable[P, LCR[T, E]]) -> Throttler[P, T, E]:
        return Throttler(func, seconds=seconds, clock=clock)

    return decorator


__all__ = ("Throttler", "throttle")
