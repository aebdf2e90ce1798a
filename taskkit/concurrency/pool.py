"""
Pool combinators
================

Bounded-concurrency map over a sequence. Results match input order.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from kungfu import Error, LazyCoroResult, Ok, Result

from .._helpers import cancel_all
from .._types import LCR, ItemFn, NoError

logger = logging.getLogger(__name__)


async def run_pooled[A, T, E](
    items: Sequence[A],
    fn: ItemFn[A, T, E],
    *,
    limit: int,
    fail_fast: bool,
    start: int = 0,
) -> Result[list[Result[T, E]], E]:
    """
    Drive fn over items with at most `limit` runs outstanding.

    A work cursor hands out the next item as soon as a slot frees up.
    Every result lands at its item's index, whatever order runs finish in.
    `start` offsets the index passed to fn (batches pass global indices).

    fail_fast=True: on the first Error (lowest index if several finish
    together) stop handing out work, cancel runs in flight, return that
    Error. Otherwise always Ok(list of per-item Results).
    """
    total = len(items)
    results: list[Result[T, E] | None] = [None] * total
    running: dict[asyncio.Task[Result[T, E]], int] = {}
    cursor = 0
    try:
        while cursor < total or running:
            while cursor < total and len(running) < limit:
                task = asyncio.ensure_future(fn(items[cursor], start + cursor)())
                running[task] = cursor
                cursor += 1

            done, _ = await asyncio.wait(running, return_when=asyncio.FIRST_COMPLETED)
            for task in sorted(done, key=running.__getitem__):
                index = running.pop(task)
                result = task.result()
                results[index] = result
                match result:
                    case Error(e) if fail_fast:
                        logger.debug(
                            f"Item {start + index} failed, cancelling {len(running)} in flight"
                        )
                        return Error(e)
                    case _:
                        pass
    finally:
        await cancel_all(running)

    finalized: list[Result[T, E]] = []
    for result in results:
        if result is None:
            raise RuntimeError("run_pooled(): internal error (missing result)")
        finalized.append(result)
    return Ok(finalized)


def _check_limit(limit: int) -> None:
    if limit < 1:
        raise ValueError("pool(): limit must be >= 1")


def pool[A, T, E](
    items: Sequence[A],
    fn: ItemFn[A, T, E],
    *,
    limit: int = 5,
) -> LCR[list[T], E]:
    """
    Run fn(item, index) for every item, at most `limit` at a time.

    Output order matches input order. Fail-fast: the first Error is
    returned and nothing else is started. Wrap items with L.attempt and
    use pool_all() to keep going past failures.

    Example:
        sales = await pool(sale_ids, lambda sale_id, _: fetch_sale(sale_id), limit=5)
    """
    _check_limit(limit)

    async def run() -> Result[list[T], E]:
        outcome = await run_pooled(items, fn, limit=limit, fail_fast=True)
        match outcome:
            case Ok(results):
                return Ok([r.unwrap() for r in results])
            case Error(e):
                return Error(e)

    return LazyCoroResult(run)


def pool_all[A, T, E](
    items: Sequence[A],
    fn: ItemFn[A, T, E],
    *,
    limit: int = 5,
) -> LCR[list[Result[T, E]], NoError]:
    """
    Like pool(), but never fails: one Result per item, in input order.
    """
    _check_limit(limit)

    async def run() -> Result[list[Result[T, E]], NoError]:
        return await run_pooled(items, fn, limit=limit, fail_fast=False)

    return LazyCoroResult(run)


__all__ = ("pool", "pool_all", "run_pooled")
