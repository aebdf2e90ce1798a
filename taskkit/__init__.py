"""
taskkit: asyncio helpers for making unreliable calls robust.

Every operation is a kungfu LazyCoroResult: a re-runnable async thunk that
resolves to Ok(value) or Error(error). Failures travel as values; use
lift.attempt to bring exception-raising code in and lift.down.unsafe to
raise again at the edge.

- lift:         attempt (exceptions -> Result), pure/fail, call, down.*
- time:         timeout, delay, sleep
- control:      retry with exponential backoff, poll_until
- concurrency:  pool (bounded), sequential, batch, settle
- shaping:      Debouncer, Throttler
- caching:      TTLCache
- flow:         fluent chaining of the above
"""

# Core types
from ._types import LCR, ItemFn, NoError, Predicate, SKIPPED, Skipped, Thunk

# Lift helpers
from . import lift
from .lift import (
    attempt,
    attempt_sync,
    call,
    catching_async,
    fail,
    from_result,
    lifted,
    lifted_attempt,
    pure,
    wrap_async,
)

# Fluent builder
from .flow import Flow, flow

# Control flow
from .control import PollPolicy, RetryPolicy, poll_until, retry, retrying

# Concurrency
from .concurrency import (
    BatchPolicy,
    batch,
    chunked,
    pool,
    pool_all,
    sequential,
    settle,
    settle_all,
)

# Time
from .time import delay, sleep, timeout, with_timeout

# Rate shaping
from .shaping import Debouncer, Throttler, debounce, throttle

# Caching
from .caching import CacheEntry, TTLCache, cache_key, cached

# Errors
from ._errors import CancelledError, PollTimeoutError, TimeoutError, UnwrapError

__all__ = (
    # Types
    "ItemFn",
    "LCR",
    "NoError",
    "Predicate",
    "SKIPPED",
    "Skipped",
    "Thunk",
    # Lift
    "lift",
    "attempt",
    "attempt_sync",
    "call",
    "catching_async",
    "fail",
    "from_result",
    "lifted",
    "lifted_attempt",
    "pure",
    "wrap_async",
    # Flow
    "Flow",
    "flow",
    # Control
    "PollPolicy",
    "RetryPolicy",
    "poll_until",
    "retry",
    "retrying",
    # Concurrency
    "BatchPolicy",
    "batch",
    "chunked",
    "pool",
    "pool_all",
    "sequential",
    "settle",
    "settle_all",
    # Time
    "delay",
    "sleep",
    "timeout",
    "with_timeout",
    # Shaping
    "Debouncer",
    "Throttler",
    "debounce",
    "throttle",
    # Caching
    "CacheEntry",
    "TTLCache",
    "cache_key",
    "cached",
    # Errors
    "CancelledError",
    "PollTimeoutError",
    "TimeoutError",
    "UnwrapError",
)
