"""
Running a LazyCoroResult and getting a plain value back.
"""

from __future__ import annotations

from kungfu import Error, Ok, Result

from .._errors import UnwrapError
from .._types import LCR


async def to_result[T, E](interp: LCR[T, E]) -> Result[T, E]:
    """
    Run interp and return Result.

    Example:
        result = await L.down.to_result(L.up.pure(1))  # Ok(1)
    """
    return await interp()


async def unsafe[T, E](interp: LCR[T, E]) -> T:
    """
    Run and return the value, raising on Error.

    This is the way back into exception-based code: an exception carried in
    the Error channel is re-raised as is, so callers see the same
    exception the wrapped operation raised. Any other error value is
    raised inside UnwrapError.
    """
    result = await interp()
    match result:
        case Ok(v):
            return v
        case Error(e):
            if isinstance(e, BaseException):
                raise e
            raise UnwrapError(e)


async def or_else[T, E](interp: LCR[T, E], default: T) -> T:
    """Run and return value or default."""
    result = await interp()
    match result:
        case Ok(v):
            return v
        case Error(_):
            return default


__all__ = (
    "or_else",
    "to_result",
    "unsafe",
)
