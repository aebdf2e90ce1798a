"""
TTL cache
=========

Memoize a function's successful results per argument set, for a while.
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable
from dataclasses import dataclass

import cachetools
from kungfu import LazyCoroResult, Ok, Result

from .._types import LCR
from .keys import CacheKey, cache_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CacheEntry[T]:
    value: T
    expires_at: float


class TTLCache[**P, T, E]:
    """
    Cache Ok results of fn for `ttl_seconds`, keyed by arguments.

    A live entry is returned without running fn. Entries live in a
    cachetools.TTLCache with no size bound: expiry is checked against the
    clock on access, nothing sweeps in the background. Errors are
    returned but never stored, so the next call tries again.

    NOTE: Two concurrent misses for the same key both run fn; the later
          one to finish overwrites the entry.

    Usage:
        weather = TTLCache(fetch_weather, ttl_seconds=300)

        today = await weather("Yellowknife")   # runs fetch_weather
        again = await weather("Yellowknife")   # served from cache
    """

    __slots__ = ("_fn", "_ttl", "_clock", "_entries")

    def __init__(
        self,
        fn: Callable[P, LCR[T, E]],
        *,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0.0:
            raise ValueError("TTLCache.ttl_seconds must be > 0")
        self._fn = fn
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: cachetools.TTLCache[CacheKey, CacheEntry[T]] = cachetools.TTLCache(
            maxsize=math.inf,
            ttl=ttl_seconds,
            timer=clock,
        )

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def __len__(self) -> int:
        # Live entries only.
        return len(self._entries)

    def __call__(self, *args: P.args, **kwargs: P.kwargs) -> LCR[T, E]:
        async def run() -> Result[T, E]:
            key = cache_key(args, kwargs)
            entry = self._lookup(key)
            if entry is not None:
                logger.debug(f"Cache hit for {key!r}")
                return Ok(entry.value)

            logger.debug(f"Cache miss for {key!r}")
            result = await self._fn(*args, **kwargs)()
            match result:
                case Ok(value):
                    self._entries[key] = CacheEntry(value, self._clock() + self._ttl)
                case _:
                    pass
            return result

        return LazyCoroResult(run)

    def _lookup(self, key: CacheKey) -> CacheEntry[T] | None:
        return self._entries.get(key)

    def invalidate(self, *args: P.args, **kwargs: P.kwargs) -> bool:
        """Drop the entry for these arguments. Returns whether one existed."""
        key = cache_key(args, kwargs)
        if key not in self._entries:
            return False
        del self._entries[key]
        return True

    def clear(self) -> None:
        self._entries.clear()


def cached[**P, T, E](
    ttl_seconds: float,
    *,
    clock: Callable[[], float] = time.monotonic,
) -> Callable[[Callable[P, LCR[T, E]]], TTLCache[P, T, E]]:
    """
    Decorator building a TTLCache.

    Usage:
        @cached(ttl_seconds=5 * 60)
        def fetch_weather(city: str) -> LCR[Weather, Exception]:
            return L.attempt(lambda: api.weather(city))
    """

    def decorator(func: Callable[P, LCR[T, E]]) -> TTLCache[P, T, E]:
        return TTLCache(func, ttl_seconds=ttl_seconds, clock=clock)

    return decorator


__all__ = ("CacheEntry", "TTLCache", "cached")
