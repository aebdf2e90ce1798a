"""
Fluent composition of taskkit combinators.

    from taskkit import flow, lift as L

    forecast = await (
        flow(L.attempt(lambda: api.weather("Yellowknife")))
        .timeout(seconds=5.0)
        .retry(max_attempts=3, initial_delay=0.5)
        .tap_err(lambda e: log.warning("weather unavailable: %s", e))
        .compile()
    )

Each step wraps the previous one, so order matters: above, every attempt
gets its own 5 s deadline. Put .timeout() after .retry() to bound the
whole retry loop instead.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from kungfu import Error, LazyCoroResult, Ok, Result

from ._errors import PollTimeoutError, TimeoutError
from ._types import LCR, Predicate
from .control.poll import PollPolicy, poll_until
from .control.retry import RetryPolicy, retry
from .time.delay import delay
from .time.timeout import timeout


def _tap[T, E](interp: LCR[T, E], effect: Callable[[T], None]) -> LCR[T, E]:
    async def run() -> Result[T, E]:
        result = await interp()
        match result:
            case Ok(v):
                effect(v)
            case _:
                pass
        return result

    return LazyCoroResult(run)


def _tap_err[T, E](interp: LCR[T, E], effect: Callable[[E], None]) -> LCR[T, E]:
    async def run() -> Result[T, E]:
        result = await interp()
        match result:
            case Error(e):
                effect(e)
            case _:
                pass
        return result

    return LazyCoroResult(run)


@dataclass(frozen=True, slots=True)
class Flow[T, E]:
    """
    Fluent builder for chaining combinators over a LazyCoroResult.

    Direct value-based: every method applies its combinator right away and
    returns a new Flow. Nothing runs until the compiled value is awaited.
    """

    value: LCR[T, E]

    def retry(
        self,
        *,
        policy: RetryPolicy[E] | None = None,
        max_attempts: int | None = None,
        initial_delay: float = 1.0,
        max_delay: float = 30.0,
        backoff_multiplier: float = 2.0,
        retry_on: Predicate[E] | None = None,
    ) -> Flow[T, E]:
        if policy is None:
            if max_attempts is None:
                raise ValueError("retry(): must provide either 'policy' or 'max_attempts'")
            policy = RetryPolicy(
                max_attempts=max_attempts,
                initial_delay=initial_delay,
                max_delay=max_delay,
                backoff_multiplier=backoff_multiplier,
                retry_on=retry_on,
            )
        return Flow(retry(self.value, policy=policy))

    def timeout(
        self,
        *,
        seconds: float,
        message: str | None = None,
        cancel_pending: bool = True,
    ) -> Flow[T, E | TimeoutError]:
        return Flow(
            timeout(self.value, seconds=seconds, message=message, cancel_pending=cancel_pending)
        )

    def poll_until(
        self,
        *,
        condition: Predicate[T],
        policy: PollPolicy[T] | None = None,
        interval: float | None = None,
        timeout: float = 30.0,
    ) -> Flow[T, E | PollTimeoutError]:
        if policy is None:
            if interval is None:
                raise ValueError("poll_until(): must provide either 'policy' or 'interval'")
            policy = PollPolicy(interval=interval, timeout=timeout)
        return Flow(poll_until(self.value, condition=condition, policy=policy))

    def delay(self, *, seconds: float) -> Flow[T, E]:
        return Flow(delay(self.value, seconds=seconds))

    def tap(self, effect: Callable[[T], None]) -> Flow[T, E]:
        return Flow(_tap(self.value, effect))

    def tap_err(self, effect: Callable[[E], None]) -> Flow[T, E]:
        return Flow(_tap_err(self.value, effect))

    def compile(self) -> LCR[T, E]:
        return self.value


def flow[T, E](interp: LCR[T, E]) -> Flow[T, E]:
    """Start a Flow for fluent combinator chaining."""
    return Flow(interp)


__all__ = ("Flow", "flow")
