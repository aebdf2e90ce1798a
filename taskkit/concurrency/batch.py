"""
Batch combinators
=================

Fixed-size groups: parallel inside a group, sequential between groups.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from kungfu import Error, LazyCoroResult, Ok, Result

from .._types import LCR, ItemFn
from .pool import run_pooled

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BatchPolicy:
    """
    Batch configuration.

    size: items per group.
    delay_seconds: pause between groups (not after the last one).
    concurrency: cap on parallel runs inside a group; None runs the whole
    group at once.
    """

    size: int
    delay_seconds: float = 0.0
    concurrency: int | None = None

    def __post_init__(self) -> None:
        if self.size < 1:
            raise ValueError("BatchPolicy.size must be >= 1")
        if self.delay_seconds < 0.0:
            raise ValueError("BatchPolicy.delay_seconds must be >= 0")
        if self.concurrency is not None and self.concurrency < 1:
            raise ValueError("BatchPolicy.concurrency must be >= 1")


def chunked[A](items: Sequence[A], size: int) -> list[Sequence[A]]:
    """Split items into consecutive groups of `size` (the last may be shorter)."""
    if size < 1:
        raise ValueError("chunked(): size must be >= 1")
    return [items[i : i + size] for i in range(0, len(items), size)]


def batch[A, T, E](
    items: Sequence[A],
    fn: ItemFn[A, T, E],
    *,
    policy: BatchPolicy,
) -> LCR[list[T], E]:
    """
    Process items in groups of policy.size.

    Group k+1 starts only after every item of group k finished (and after
    policy.delay_seconds). fn receives the item's index in `items`.
    Results keep input order. Fail-fast: an Error in a group ends the run.

    Example:
        sent = await batch(
            subscribers,
            lambda user, _: send_digest(user),
            policy=BatchPolicy(size=10, delay_seconds=1.0),
        )
    """

    async def run() -> Result[list[T], E]:
        groups = chunked(items, policy.size)
        values: list[T] = []
        for number, group in enumerate(groups):
            limit = policy.concurrency or len(group)
            outcome = await run_pooled(
                group,
                fn,
                limit=limit,
                fail_fast=True,
                start=number * policy.size,
            )
            match outcome:
                case Ok(results):
                    values.extend(r.unwrap() for r in results)
                case Error(e):
                    logger.debug(f"Batch {number + 1}/{len(groups)} failed: {e!r}")
                    return Error(e)

            if policy.delay_seconds > 0.0 and number + 1 < len(groups):
                await asyncio.sleep(policy.delay_seconds)
        return Ok(values)

    return LazyCoroResult(run)


__all__ = ("BatchPolicy", "batch", "chunked")
