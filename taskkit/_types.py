"""
Core type definitions for taskkit.

Aliases shared across the library, plus the throttle sentinel.
"""

from __future__ import annotations

import typing
from collections.abc import Awaitable, Callable

from kungfu import LazyCoroResult

# ============================================================================
# Type aliases
# ============================================================================

# Predicate = function that tests a value
type Predicate[T] = Callable[[T], bool]

# Thunk = zero-arg async callable (exception-raising world)
type Thunk[T] = Callable[[], Awaitable[T]]

# LCR = LazyCoroResult shortcut
type LCR[T, E] = LazyCoroResult[T, E]

# ItemFn = per-item work for pool/sequential/batch, receives (item, index)
type ItemFn[A, T, E] = Callable[[A, int], LazyCoroResult[T, E]]

# NoError = "never fails"
# NOTE: Never (bottom type), not None: the error value cannot exist.
type NoError = typing.Never


# ============================================================================
# Sentinels
# ============================================================================


@typing.final
class Skipped:
    """
    Marker returned by a throttled call that did not run.

    Falsy and a singleton, so `if value is SKIPPED` and `if not value`
    both work. Never equal to anything a wrapped function could return.
    """

    __slots__ = ()
    _instance: typing.ClassVar[Skipped | None] = None

    def __new__(cls) -> Skipped:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "SKIPPED"


SKIPPED: typing.Final = Skipped()


__all__ = (
    "ItemFn",
    "LCR",
    "NoError",
    "Predicate",
    "SKIPPED",
    "Skipped",
    "Thunk",
)
