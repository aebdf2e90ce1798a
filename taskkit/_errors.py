from __future__ import annotations

import typing


class TimeoutError(Exception):
    """Operation did not finish before its deadline."""

    seconds: float

    def __init__(self, message: str | None = None, seconds: float = 0.0) -> None:
        self.seconds = seconds
        super().__init__(message or f"Operation timed out after {seconds}s")


class PollTimeoutError(Exception):
    """poll_until ran out of time before the condition held."""

    elapsed: float
    attempts: int

    def __init__(self, elapsed: float, attempts: int) -> None:
        self.elapsed = elapsed
        self.attempts = attempts
        super().__init__(f"Polling timed out after {elapsed:.3f}s ({attempts} attempts)")


class CancelledError(Exception):
    """A debounced call was superseded before it ran.

    Not to be confused with asyncio.CancelledError: this one is a value
    delivered in the Error channel, nothing is interrupted.
    """

    def __init__(self, message: str = "Debounced call cancelled") -> None:
        super().__init__(message)


class UnwrapError(Exception):
    """Unwrapped an Error whose payload is not an exception."""

    error: typing.Any

    def __init__(self, error: typing.Any) -> None:
        self.error = error
        super().__init__(f"Unwrapped an error value: {error!r}")


__all__ = ("CancelledError", "PollTimeoutError", "TimeoutError", "UnwrapError")
