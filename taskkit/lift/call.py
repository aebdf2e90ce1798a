"""
Calling functions with automatic lifting.

For functions that already return Result (`call`, `lifted`, `wrap_async`)
and for plain exception-raising coroutine functions (`lifted_attempt`).
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from functools import wraps

from kungfu import LazyCoroResult, Result

from .._types import LCR
from .up import attempt


def wrap_async[T, E](
    thunk: Callable[[], Awaitable[Result[T, E]]],
) -> LCR[T, E]:
    """
    Wrap lazy async computation (thunk) into LazyCoroResult.

    NOTE: thunk must be a zero-arg callable for laziness.
          A coroutine object would already be created at wrap time.
    """

    async def run() -> Result[T, E]:
        return await thunk()

    return LazyCoroResult(run)


def lifted[T, E, **P](
    func: Callable[P, Awaitable[Result[T, E]]],
) -> Callable[P, LCR[T, E]]:
    """
    Decorator: async function returning Result -> function returning LCR.

    Example:
        @L.lifted
        async def fetch_sale(sale_id: int) -> Result[Sale, APIError]:
            ...

        result = await L.down.to_result(fetch_sale(42))
    """

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> LCR[T, E]:
        return wrap_async(lambda: func(*args, **kwargs))

    return wrapper


def lifted_attempt[T, **P](
    func: Callable[P, Awaitable[T]],
) -> Callable[P, LCR[T, Exception]]:
    """
    Decorator: exception-raising async function -> function returning LCR.

    Every call builds a fresh attempt(), so the result can be retried.

    Example:
        @L.lifted_attempt
        async def fetch_forecast(city: str) -> Forecast:
            resp = await http.get(f"/weather/{city}")
            resp.raise_for_status()
            return Forecast(**resp.json())

        forecast = retry(fetch_forecast("Yellowknife"), policy=RetryPolicy())
    """

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> LCR[T, Exception]:
        return attempt(lambda: func(*args, **kwargs))

    return wrapper


def call[T, E, **P](
    func: Callable[P, Awaitable[Result[T, E]]],
    *args: P.args,
    **kwargs: P.kwargs,
) -> LCR[T, E]:
    """
    Call async function returning Result and lift it at the call site.

    Example:
        result = await L.down.to_result(L.call(fetch_sale_impl, 42))
    """
    return wrap_async(lambda: func(*args, **kwargs))


__all__ = (
    "call",
    "lifted",
    "lifted_attempt",
    "wrap_async",
)
