"""Tests for debouncing."""

import asyncio

import pytest
from kungfu import LazyCoroResult, Ok

from taskkit import CancelledError, Debouncer, debounce, lift as L
from tests.helpers import Boom, err_value, ok_value

WINDOW = 0.02


class Spy:
    """LCR-returning function that records the arguments of each run."""

    def __init__(self, raise_exc=None):
        self.calls = []
        self.raise_exc = raise_exc

    def __call__(self, value):
        async def run():
            self.calls.append(value)
            if self.raise_exc is not None:
                raise self.raise_exc
            return Ok(f"ran {value}")

        return LazyCoroResult(run)


class TestDebouncer:
    """Test Debouncer."""

    @pytest.mark.asyncio
    async def test_burst_runs_last_call_only(self):
        """Three quick calls: only the third runs, the first two are cancelled."""
        spy = Spy()
        debounced = Debouncer(spy, seconds=WINDOW)

        first, second, third = await asyncio.gather(
            debounced("call1")(), debounced("call2")(), debounced("call3")()
        )

        assert isinstance(err_value(first), CancelledError)
        assert isinstance(err_value(second), CancelledError)
        assert ok_value(third) == "ran call3"
        assert spy.calls == ["call3"]

    @pytest.mark.asyncio
    async def test_superseded_caller_resolves_immediately(self):
        """A replaced caller does not wait for the window to close."""
        spy = Spy()
        debounced = Debouncer(spy, seconds=1.0)

        first = asyncio.create_task(debounced("a")())
        await asyncio.sleep(0)
        second = asyncio.create_task(debounced("b")())
        await asyncio.sleep(0.01)

        assert first.done()
        assert isinstance(err_value(first.result()), CancelledError)
        assert not second.done()

        debounced.cancel()
        assert isinstance(err_value(await second), CancelledError)
        assert spy.calls == []

    @pytest.mark.asyncio
    async def test_separate_bursts_both_run(self):
        """Calls further apart than the window each run."""
        spy = Spy()
        debounced = Debouncer(spy, seconds=WINDOW)

        assert ok_value(await debounced(1)()) == "ran 1"
        assert ok_value(await debounced(2)()) == "ran 2"
        assert spy.calls == [1, 2]

    @pytest.mark.asyncio
    async def test_waits_for_quiet_window(self):
        """fn runs only after `seconds` of silence."""
        spy = Spy()
        debounced = Debouncer(spy, seconds=0.05)
        loop = asyncio.get_running_loop()

        started = loop.time()
        await debounced("x")()
        assert loop.time() - started >= 0.04

    @pytest.mark.asyncio
    async def test_error_reaches_caller(self):
        """An Error from fn is returned to the caller that triggered it."""
        err = Boom("failed")
        debounced = Debouncer(lambda value: L.fail(err), seconds=WINDOW)
        assert err_value(await debounced("x")()) is err

    @pytest.mark.asyncio
    async def test_raised_exception_reaches_caller(self):
        """An exception raised by fn propagates to the triggering caller."""
        debounced = Debouncer(Spy(raise_exc=Boom("raised")), seconds=WINDOW)
        with pytest.raises(Boom, match="raised"):
            await debounced("x")()

    @pytest.mark.asyncio
    async def test_cancel_and_pending(self):
        """cancel() drops the pending call; pending reflects the state."""
        spy = Spy()
        debounced = Debouncer(spy, seconds=WINDOW)
        assert not debounced.pending
        assert debounced.cancel() is False

        task = asyncio.create_task(debounced("x")())
        await asyncio.sleep(0)
        assert debounced.pending

        assert debounced.cancel() is True
        assert isinstance(err_value(await task), CancelledError)
        assert not debounced.pending

        await asyncio.sleep(WINDOW * 2)
        assert spy.calls == []

    @pytest.mark.asyncio
    async def test_caller_cancellation_stops_timer(self):
        """Cancelling the waiting task cancels the pending run."""
        spy = Spy()
        debounced = Debouncer(spy, seconds=WINDOW)

        task = asyncio.create_task(debounced("x")())
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert not debounced.pending
        await asyncio.sleep(WINDOW * 2)
        assert spy.calls == []

    @pytest.mark.asyncio
    async def test_instances_independent(self):
        """Two debouncers never cancel each other."""
        spy = Spy()
        left = Debouncer(spy, seconds=WINDOW)
        right = Debouncer(spy, seconds=WINDOW)

        a, b = await asyncio.gather(left("left")(), right("right")())

        assert ok_value(a) == "ran left"
        assert ok_value(b) == "ran right"
        assert sorted(spy.calls) == ["left", "right"]

    @pytest.mark.parametrize("seconds", [0.0, -1.0])
    def test_invalid_seconds(self, seconds):
        """The window must be positive."""
        with pytest.raises(ValueError):
            Debouncer(Spy(), seconds=seconds)


class TestDebounceDecorator:
    """Test the debounce() decorator."""

    @pytest.mark.asyncio
    async def test_decorator(self):
        """debounce() wraps a function in a Debouncer."""
        calls = []

        @debounce(WINDOW)
        def save(draft):
            calls.append(draft)
            return L.pure(draft.upper())

        assert isinstance(save, Debouncer)
        assert save.seconds == WINDOW

        results = await asyncio.gather(save("v1")(), save("v2")())
        assert isinstance(err_value(results[0]), CancelledError)
        assert ok_value(results[1]) == "V2"
        assert calls == ["v2"]
