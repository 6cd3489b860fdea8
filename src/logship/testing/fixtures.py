"""Pytest fixtures for testing code that ships logs through logship."""

from __future__ import annotations

import pytest

from ..core.throttle import RateLimiter
from .fakes import FakeClock, FakeLogService


@pytest.fixture
def fake_log_service() -> FakeLogService:
    """Empty in-memory log service."""
    return FakeLogService()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def instant_rate_limiter(fake_clock: FakeClock) -> RateLimiter:
    """Rate limiter on the fake clock; its waits return immediately."""
    return RateLimiter(clock=fake_clock, sleep=fake_clock.sleep)
