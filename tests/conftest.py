"""Pytest configuration and fixtures for taskkit tests."""

import pytest

from tests.helpers import FakeClock


@pytest.fixture
def clock():
    """Fake monotonic clock for throttle and cache tests."""
    return FakeClock()
