"""
Debounce
========

Only the last call of a burst runs; earlier ones are cancelled.
"""

from __future__ import annotations

import asyncio
import logging
import typing
from collections.abc import Callable
from dataclasses import dataclass

from kungfu import Error, LazyCoroResult, Result

from .._errors import CancelledError
from .._helpers import detach
from .._types import LCR

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _PendingCall[T, E]:
    waiter: asyncio.Future[Result[T, E | CancelledError]]
    timer: asyncio.TimerHandle | None = None
    task: asyncio.Task[None] | None = None

    def abort(self) -> None:
        if self.timer is not None:
            self.timer.cancel()
        if self.task is not None:
            self.task.cancel()


class Debouncer[**P, T, E]:
    """
    Delay calls until `seconds` pass without a new one.

    Each run of `debouncer(*args)` starts a fresh quiet window. If another
    call arrives before the window closes, the earlier caller immediately
    gets Error(CancelledError()) and only the newest arguments are kept.
    When the window closes, fn runs once and its Result goes to that last
    caller alone.

    At most one call is pending per instance; instances share nothing.

    Usage:
        search = Debouncer(search_sales, seconds=0.3)

        async def on_keystroke(text: str) -> None:
            match await search(text):
                case Ok(hits): render(hits)
                case Error(CancelledError()): pass  # a newer keystroke won
                case Error(err): show_error(err)
    """

    __slots__ = ("_fn", "_seconds", "_pending")

    def __init__(self, fn: Callable[P, LCR[T, E]], *, seconds: float) -> None:
        if seconds <= 0.0:
            raise ValueError("Debouncer.seconds must be > 0")
        self._fn = fn
        self._seconds = seconds
        self._pending: _PendingCall[T, E] | None = None

    @property
    def seconds(self) -> float:
        return self._seconds

    @property
    def pending(self) -> bool:
        """True while a call waits for its quiet window to close."""
        return self._pending is not None

    def __call__(self, *args: P.args, **kwargs: P.kwargs) -> LCR[T, E | CancelledError]:
        async def run() -> Result[T, E | CancelledError]:
            loop = asyncio.get_running_loop()
            self.cancel()

            call: _PendingCall[T, E] = _PendingCall(loop.create_future())
            call.timer = loop.call_later(self._seconds, self._fire, call, args, kwargs)
            self._pending = call
            try:
                return await call.waiter
            except asyncio.CancelledError:
                if self._pending is call:
                    self._pending = None
                call.abort()
                raise

        return LazyCoroResult(run)

    def cancel(self) -> bool:
        """Cancel the pending call, if any. Returns whether there was one."""
        call = self._pending
        if call is None:
            return False
        self._pending = None
        call.abort()
        if not call.waiter.done():
            call.waiter.set_result(Error(CancelledError()))
        logger.debug("Debounced call superseded")
        return True

    def _fire(
        self,
        call: _PendingCall[T, E],
        args: tuple[typing.Any, ...],
        kwargs: dict[str, typing.Any],
    ) -> None:
        if self._pending is call:
            self._pending = None
        call.timer = None
        call.task = detach(self._execute(call, args, kwargs))

    async def _execute(
        self,
        call: _PendingCall[T, E],
        args: tuple[typing.Any, ...],
        kwargs: dict[str, typing.Any],
    ) -> None:
        try:
            result = await self._fn(*args, **kwargs)()
        except Exception as exc:
            if not call.waiter.done():
                call.waiter.set_exception(exc)
            return
        if not call.waiter.done():
            call.waiter.set_result(result)


def debounce[**P, T, E](
    seconds: float,
) -> Callable[[Callable[P, LCR[T, E]]], Debouncer[P, T, E]]:
    """
    Decorator building a Debouncer.

    Usage:
        @debounce(0.5)
        def autosave(draft: Draft) -> LCR[None, Exception]:
            return L.attempt(lambda: api.save(draft))
    """

    def decorator(func: Callable[P, LCR[T, E]]) -> Debouncer[P, T, E]:
        return Debouncer(func, seconds=seconds)

    return decorator


__all__ = ("Debouncer", "debounce")
