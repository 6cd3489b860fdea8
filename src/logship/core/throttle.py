"""
Per-second request throttle for PutLogEvents.

A coarse token bucket matching a provider limit expressed in whole-second
RPS. Windows are integer-second buckets of the limiter's clock: two calls
0.99s apart that straddle a second boundary fall in different windows.

The call that opens a window, either on a new second or after waiting out an
exhausted one, spends the first unit of that window's budget, so no window
admits more than ``limit`` calls.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from . import diagnostics
from .limits import RPS_LIMIT
from ..metrics.metrics import MetricsCollector


@dataclass
class RateWindow:
    """Remaining request budget for the second starting at ``window_start``."""

    window_start: float
    remaining: int = RPS_LIMIT


class RateLimiter:
    """Blocks the caller once ``limit`` acquisitions happened in one second.

    ``clock`` and ``sleep`` are injectable so tests can simulate time.
    """

    def __init__(
        self,
        *,
        limit: int = RPS_LIMIT,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        metrics: MetricsCollector | None = None,
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be >= 1")
        self._limit = limit
        self._clock = clock
        self._sleep = sleep
        self._metrics = metrics
        self._window = RateWindow(window_start=clock(), remaining=limit)

    @property
    def window(self) -> RateWindow:
        return self._window

    def _open_window(self) -> None:
        self._window.remaining = self._limit - 1
        self._window.window_start = self._clock()

    def acquire(self) -> None:
        now = self._clock()
        if int(now) != int(self._window.window_start):
            self._open_window()
            return

        if self._window.remaining > 0:
            self._window.remaining -= 1
            return

        diagnostics.debug(
            "throttle",
            "request budget exhausted, waiting for next window",
            limit=self._limit,
        )
        if self._metrics is not None:
            self._metrics.record_throttle_wait()
        self._sleep(1.0)
        self._open_window()
