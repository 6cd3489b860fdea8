"""
Shipping metrics for logship.

Implements minimal Prometheus-compatible counters for the flush path.

Design goals:
- Zero global state; instances are owned by one shipper
- In-memory counters always available for quick assertions in tests
- Safe no-op exporter behavior when metrics are disabled by settings
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any

from prometheus_client import CollectorRegistry, Counter


@dataclass
class ShipperMetrics:
    """Captured runtime counters for quick assertions in tests."""

    events_submitted: int = 0
    batches_submitted: int = 0
    cursor_retries: int = 0
    events_dropped: int = 0
    throttle_waits: int = 0


class MetricsCollector:
    """Shipper-scoped metrics collector.

    When disabled, exporters are never created but the in-memory
    ``ShipperMetrics`` counters are still maintained.
    """

    def __init__(self, *, enabled: bool = False) -> None:
        self._enabled = bool(enabled)
        self._lock = threading.Lock()
        self._state = ShipperMetrics()

        self._c_events: Any | None = None
        self._c_batches: Any | None = None
        self._c_retries: Any | None = None
        self._c_dropped: Any | None = None
        self._c_throttle: Any | None = None
        self._registry: CollectorRegistry | None = None

        if self._enabled:
            # Isolated registry to avoid global duplication in tests
            self._registry = CollectorRegistry()
            self._c_events = Counter(
                "logship_events_submitted_total",
                "Total number of log events accepted by the log service",
                registry=self._registry,
            )
            self._c_batches = Counter(
                "logship_batches_submitted_total",
                "Total number of successful batch submissions",
                registry=self._registry,
            )
            self._c_retries = Counter(
                "logship_cursor_retries_total",
                "Submissions retried after a sequence token was rejected",
                registry=self._registry,
            )
            self._c_dropped = Counter(
                "logship_events_dropped_total",
                "Buffered events discarded after a failed flush",
                registry=self._registry,
            )
            self._c_throttle = Counter(
                "logship_throttle_waits_total",
                "Times the rate limiter blocked the caller",
                registry=self._registry,
            )

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    @property
    def registry(self) -> CollectorRegistry | None:
        """Expose the isolated Prometheus registry when enabled."""
        return self._registry

    def record_batch_submitted(self, event_count: int) -> None:
        with self._lock:
            self._state.batches_submitted += 1
            self._state.events_submitted += event_count
        if self._c_batches is not None:
            self._c_batches.inc()
        if self._c_events is not None:
            self._c_events.inc(event_count)

    def record_cursor_retry(self) -> None:
        with self._lock:
            self._state.cursor_retries += 1
        if self._c_retries is not None:
            self._c_retries.inc()

    def record_events_dropped(self, count: int) -> None:
        with self._lock:
            self._state.events_dropped += count
        if self._c_dropped is not None:
            self._c_dropped.inc(count)

    def record_throttle_wait(self) -> None:
        with self._lock:
            self._state.throttle_waits += 1
        if self._c_throttle is not None:
            self._c_throttle.inc()

    def snapshot(self) -> ShipperMetrics:
        with self._lock:
            return ShipperMetrics(
                events_submitted=self._state.events_submitted,
                batches_submitted=self._state.batches_submitted,
                cursor_retries=self._state.cursor_retries,
                events_dropped=self._state.events_dropped,
                throttle_waits=self._state.throttle_waits,
            )
