"""
Lifting values and exception-raising code into LazyCoroResult.

`attempt` is the entry point for ordinary async code: whatever it raises
becomes an Error value instead of an exception.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import Never

from kungfu import Error, LazyCoroResult, Ok, Result

from .._types import LCR, Thunk


def pure[T](value: T) -> LCR[T, Never]:
    """
    Lift pure value into always-succeeding LazyCoroResult.

    Example:
        from taskkit import lift as L

        user = L.up.pure(User(id=42))
        result = await L.down.to_result(user)  # Ok(User(id=42))
    """
    return LazyCoroResult.pure(value)


def fail[E](error: E) -> LCR[Never, E]:
    """Create always-failing LazyCoroResult. Dual of pure()."""

    async def run() -> Result[Never, E]:
        return Error(error)

    return LazyCoroResult(run)


def from_result[T, E](value: Result[T, E]) -> LCR[T, E]:
    """
    Lift already-computed Result.

    NOTE: Not lazy, the result already exists. Every run returns it again.
    """

    async def run() -> Result[T, E]:
        return value

    return LazyCoroResult(run)


def attempt[T](op: Thunk[T] | Awaitable[T]) -> LCR[T, Exception]:
    """
    Run an operation and turn whatever it raises into Error.

    `op` is either a zero-arg async callable (re-invoked on every run, so the
    result can be retried or polled) or an awaitable already in flight.

    Example:
        from taskkit import lift as L

        result = await L.attempt(lambda: client.get_user(42))
        match result:
            case Ok(user): ...
            case Error(exc): ...

    NOTE: A bare coroutine can be awaited only once, so an LCR built from one
          cannot be re-run. Tasks and Futures can. Pass a thunk when you
          need retry.
    NOTE: Catches Exception only. asyncio.CancelledError and
          KeyboardInterrupt still propagate.
    """
    if inspect.isawaitable(op):
        in_flight = op

        def thunk() -> Awaitable[T]:
            return in_flight
    elif callable(op):
        thunk = op
    else:
        raise TypeError(f"attempt() expects an awaitable or async callable, got {op!r}")

    async def run() -> Result[T, Exception]:
        try:
            return Ok(await thunk())
        except Exception as exc:
            return Error(exc)

    return LazyCoroResult(run)


def attempt_sync[T](thunk: Callable[[], T]) -> LCR[T, Exception]:
    """Synchronous attempt(): run thunk, capture any Exception as Error."""

    async def run() -> Result[T, Exception]:
        try:
            return Ok(thunk())
        except Exception as exc:
            return Error(exc)

    return LazyCoroResult(run)


def catching_async[T, E](
    thunk: Thunk[T],
    *,
    on_error: Callable[[Exception], E],
) -> LCR[T, E]:
    """
    attempt() with an error mapper.

    Example:
        def fetch_weather(city: str) -> LCR[Weather, FetchError]:
            return L.up.catching_async(
                lambda: api.weather(city),
                on_error=lambda e: FetchError(str(e)),
            )
    """

    async def run() -> Result[T, E]:
        try:
            return Ok(await thunk())
        except Exception as exc:
            return Error(on_error(exc))

    return LazyCoroResult(run)


__all__ = (
    "attempt",
    "attempt_sync",
    "catching_async",
    "fail",
    "from_result",
    "pure",
)
