"""
Settle combinators
==================

Wait for every operation, successful or not. Never fails.
"""

from __future__ import annotations

import asyncio
import typing
from collections.abc import Awaitable, Coroutine, Iterable

from kungfu import Error, LazyCoroResult, Ok, Result

from .._types import LCR, NoError
from ..lift.up import attempt


def _start[T, E](
    op: LCR[T, E] | Awaitable[T],
) -> Coroutine[typing.Any, typing.Any, Result[T, E | Exception]]:
    if isinstance(op, LazyCoroResult):
        return op()
    return attempt(op)()


def settle_all[T, E](
    ops: Iterable[LCR[T, E] | Awaitable[T]],
) -> LCR[list[Result[T, E | Exception]], NoError]:
    """
    Run all ops concurrently and collect one Result per op, in input order.

    An op is either a LazyCoroResult (its Result is kept as is) or a plain
    awaitable (its value becomes Ok, what it raises becomes Error). A
    LazyCoroResult that raises instead of returning Error is captured too.
    One op failing never affects another.

    NOTE: Plain coroutines can only be awaited once, so a settle_all() over
          coroutines can run once. Pass LazyCoroResults to re-run it.

    Example:
        results = await settle_all([fetch_user(), fetch_preferences(), fetch_activities()])
        for r in results.unwrap():
            match r:
                case Ok(data): ...
                case Error(err): ...
    """
    pending = list(ops)

    async def run() -> Result[list[Result[T, E | Exception]], NoError]:
        raws = await asyncio.gather(*(_start(op) for op in pending), return_exceptions=True)
        results: list[Result[T, E | Exception]] = []
        for raw in raws:
            if isinstance(raw, (KeyboardInterrupt, SystemExit)):
                raise raw
            if isinstance(raw, BaseException):
                results.append(Error(typing.cast(Exception, raw)))
            else:
                results.append(raw)
        return Ok(results)

    return LazyCoroResult(run)


def settle[T, E](
    *ops: LCR[T, E] | Awaitable[T],
) -> LCR[list[Result[T, E | Exception]], NoError]:
    """Variadic settle_all()."""
    return settle_all(ops)


__all__ = ("settle", "settle_all")
