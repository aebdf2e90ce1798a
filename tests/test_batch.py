"""Tests for batch processing."""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from taskkit import BatchPolicy, batch, chunked, lift as L
from tests.helpers import Boom, err_value, ok_value


class Recorder:
    """Item function that records how many items had finished when each started."""

    def __init__(self, fail_on=None):
        self.fail_on = fail_on
        self.calls = []
        self.done = 0
        self.active = 0
        self.peak = 0

    def __call__(self, item, index):
        async def run():
            self.calls.append((item, index, self.done))
            self.active += 1
            self.peak = max(self.peak, self.active)
            try:
                await asyncio.sleep(0.01)
                if item == self.fail_on:
                    raise Boom(f"item {item}")
                return item * 2
            finally:
                self.active -= 1
                self.done += 1

        return L.attempt(run)


class TestChunked:
    """Test chunked()."""

    def test_even_and_remainder(self):
        """Last group holds the remainder."""
        assert chunked([1, 2, 3, 4, 5, 6, 7], 3) == [[1, 2, 3], [4, 5, 6], [7]]

    def test_empty(self):
        """No items, no groups."""
        assert chunked([], 3) == []

    def test_invalid_size(self):
        """size below 1 is rejected."""
        with pytest.raises(ValueError):
            chunked([1], 0)


class TestBatchPolicy:
    """Test BatchPolicy validation."""

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"size": 0},
            {"size": 2, "delay_seconds": -1.0},
            {"size": 2, "concurrency": 0},
        ],
    )
    def test_invalid_values(self, kwargs):
        """Invalid configuration fails at construction."""
        with pytest.raises(ValueError):
            BatchPolicy(**kwargs)


class TestBatch:
    """Test batch()."""

    @pytest.mark.asyncio
    async def test_groups_of_three(self):
        """Seven items in groups of 3: results in order, groups run back to back."""
        fn = Recorder()
        result = await batch([1, 2, 3, 4, 5, 6, 7], fn, policy=BatchPolicy(size=3))()

        assert ok_value(result) == [2, 4, 6, 8, 10, 12, 14]
        assert len(fn.calls) == 7
        # each group starts only once the previous group has completed
        assert [done for _, _, done in fn.calls] == [0, 0, 0, 3, 3, 3, 6]

    @pytest.mark.asyncio
    async def test_global_indices(self):
        """fn receives the index in the whole input, not within the group."""
        fn = Recorder()
        await batch(["a", "b", "c", "d", "e"], fn, policy=BatchPolicy(size=2))()
        assert [index for _, index, _ in fn.calls] == [0, 1, 2, 3, 4]

    @pytest.mark.asyncio
    async def test_delay_between_groups_only(self):
        """delay_seconds is awaited between groups, not after the last one."""
        policy = BatchPolicy(size=2, delay_seconds=0.5)
        with patch("asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            result = await batch([1, 2, 3, 4, 5], lambda x, i: L.pure(x), policy=policy)()

        assert ok_value(result) == [1, 2, 3, 4, 5]
        assert [c.args[0] for c in mock_sleep.await_args_list] == [0.5, 0.5]

    @pytest.mark.asyncio
    async def test_concurrency_within_group(self):
        """concurrency caps parallel runs inside a group."""
        fn = Recorder()
        policy = BatchPolicy(size=4, concurrency=2)
        result = await batch([1, 2, 3, 4, 5, 6, 7, 8], fn, policy=policy)()

        assert ok_value(result) == [2, 4, 6, 8, 10, 12, 14, 16]
        assert fn.peak == 2

    @pytest.mark.asyncio
    async def test_whole_group_parallel_by_default(self):
        """Without concurrency every item of a group runs at once."""
        fn = Recorder()
        await batch([1, 2, 3, 4], fn, policy=BatchPolicy(size=4))()
        assert fn.peak == 4

    @pytest.mark.asyncio
    async def test_failure_skips_later_groups(self):
        """An Error ends the run before the next group starts."""
        fn = Recorder(fail_on=2)
        result = await batch([1, 2, 3, 4, 5], fn, policy=BatchPolicy(size=2))()

        assert str(err_value(result)) == "item 2"
        assert [item for item, _, _ in fn.calls] == [1, 2]

    @pytest.mark.asyncio
    async def test_empty(self):
        """Empty input gives an empty list."""
        result = await batch([], lambda x, i: L.pure(x), policy=BatchPolicy(size=3))()
        assert ok_value(result) == []
