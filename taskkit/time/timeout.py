"""Timeout combinators

Race an operation against a deadline."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from functools import wraps

from kungfu import Error, LazyCoroResult, Result

from .._errors import TimeoutError
from .._helpers import detach
from .._types import LCR

logger = logging.getLogger(__name__)


def timeout[T, E](
    interp: LCR[T, E],
    *,
    seconds: float,
    message: str | None = None,
    cancel_pending: bool = True,
) -> LCR[T, E | TimeoutError]:
    """
    Fail with TimeoutError if interp has not finished within `seconds`.

    If the operation finishes first its own Ok/Error passes through.
    On timeout the result is Error(TimeoutError(message, seconds)).

    cancel_pending=True (default) cancels the operation at the deadline.
    cancel_pending=False only discards its result: the operation keeps
    running in the background until it completes on its own. Use this for
    work that must not be interrupted halfway (e.g. a save request).
    """
    if seconds <= 0:
        raise ValueError("timeout(): seconds must be > 0")

    async def run() -> Result[T, E | TimeoutError]:
        if cancel_pending:
            awaitable = interp()
        else:
            awaitable = asyncio.shield(detach(interp()))
        deadline = asyncio.timeout(seconds)
        try:
            async with deadline:
                return await awaitable
        except asyncio.TimeoutError:
            # Raised by the operation itself, not by the deadline.
            if not deadline.expired():
                raise
            logger.warning(f"Timeout after {seconds}s" + (f": {message}" if message else ""))
            return Error(TimeoutError(message, seconds))

    return LazyCoroResult(run)


def with_timeout[T, E, **P](
    seconds: float,
    message: str | None = None,
    *,
    cancel_pending: bool = True,
) -> Callable[[Callable[P, LCR[T, E]]], Callable[P, LCR[T, E | TimeoutError]]]:
    """
    Decorator form of timeout() for functions returning LazyCoroResult.

    Usage:
        @with_timeout(10.0, "Weather lookup took too long")
        def fetch_weather(city: str) -> LCR[Weather, Exception]:
            return L.attempt(lambda: api.weather(city))
    """
    if seconds <= 0:
        raise ValueError("with_timeout(): seconds must be > 0")

    def decorator(func: Callable[P, LCR[T, E]]) -> Callable[P, LCR[T, E | TimeoutError]]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> LCR[T, E | TimeoutError]:
            return timeout(
                func(*args, **kwargs),
                seconds=seconds,
                message=message,
                cancel_pending=cancel_pending,
            )

        return wrapper

    return decorator


__all__ = ("timeout", "with_timeout")
