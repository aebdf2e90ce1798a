"""Internal helpers for taskkit.

Task bookkeeping shared by the concurrency and time modules.
Not part of the public API."""

from __future__ import annotations

import asyncio
import typing
from collections.abc import Coroutine, Iterable

# Strong references to tasks nobody awaits any more (shielded timeouts,
# debounced executions). The event loop only keeps weak ones.
_detached: set[asyncio.Task[typing.Any]] = set()


def detach[T](coro: Coroutine[typing.Any, typing.Any, T]) -> asyncio.Task[T]:
    """
    Start coro as a task that outlives its caller.

    The task is kept alive until it finishes; its result is whatever the
    caller decides to do with the returned handle.
    """
    task = asyncio.ensure_future(coro)
    _detached.add(task)
    task.add_done_callback(_detached.discard)
    return task


async def cancel_all(tasks: Iterable[asyncio.Future[typing.Any]]) -> None:
    """Cancel unfinished tasks and wait until they are really gone."""
    pending = [t for t in tasks if not t.done()]
    for task in pending:
        task.cancel()
    if pending:
        await asyncio.gather(*pending, return_exceptions=True)


__all__ = ("cancel_all", "detach")
