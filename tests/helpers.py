"""Helpers shared by taskkit tests."""

import typing

import pytest
from kungfu import Error, Ok, Result


def ok_value(result: Result[typing.Any, typing.Any]) -> typing.Any:
    """Value of an Ok, failing the test on Error."""
    match result:
        case Ok(value):
            return value
        case Error(error):
            pytest.fail(f"expected Ok, got Error({error!r})")


def err_value(result: Result[typing.Any, typing.Any]) -> typing.Any:
    """Error payload of an Error, failing the test on Ok."""
    match result:
        case Error(error):
            return error
        case Ok(value):
            pytest.fail(f"expected Error, got Ok({value!r})")


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class Boom(Exception):
    """Error raised by test operations."""
