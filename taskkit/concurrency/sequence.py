"""
Sequential combinators
======================

One item at a time: item i+1 does not start before item i has finished.
"""

from __future__ import annotations

from collections.abc import Sequence

from kungfu import Error, LazyCoroResult, Ok, Result

from .._types import LCR, ItemFn


def sequential[A, T, E](
    items: Sequence[A],
    fn: ItemFn[A, T, E],
) -> LCR[list[T], E]:
    """
    Run fn(item, index) strictly in order. Stop at the first Error.

    Same output as pool(..., limit=1); use it where the ordering of side
    effects is the point (e.g. staying under an upstream rate limit).
    """

    async def run() -> Result[list[T], E]:
        values: list[T] = []
        for index, item in enumerate(items):
            result = await fn(item, index)()
            match result:
                case Ok(v):
                    values.append(v)
                case Error(e):
                    return Error(e)
        return Ok(values)

    return LazyCoroResult(run)


__all__ = ("sequential",)
