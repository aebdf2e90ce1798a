"""Delay combinators"""

from __future__ import annotations

import asyncio

from kungfu import LazyCoroResult, Ok, Result

from .._types import LCR, NoError


def sleep(seconds: float) -> LCR[None, NoError]:
    """Wait `seconds`, then succeed with None."""

    async def run() -> Result[None, NoError]:
        if seconds > 0.0:
            await asyncio.sleep(seconds)
        return Ok(None)

    return LazyCoroResult(run)


def delay[T, E](
    interp: LCR[T, E],
    *,
    seconds: float,
) -> LCR[T, E]:
    """Sleep before running."""

    async def run() -> Result[T, E]:
        if seconds > 0.0:
            await asyncio.sleep(seconds)
        return await interp()

    return LazyCoroResult(run)


__all__ = ("delay", "sleep")
