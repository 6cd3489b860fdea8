from __future__ import annotations

from logship.metrics.metrics import MetricsCollector, ShipperMetrics


def test_disabled_collector_keeps_in_memory_counts() -> None:
    metrics = MetricsCollector()

    metrics.record_batch_submitted(3)
    metrics.record_cursor_retry()
    metrics.record_events_dropped(2)
    metrics.record_throttle_wait()

    assert metrics.registry is None
    assert metrics.snapshot() == ShipperMetrics(
        events_submitted=3,
        batches_submitted=1,
        cursor_retries=1,
        events_dropped=2,
        throttle_waits=1,
    )


def test_enabled_collector_exports_prometheus_counters() -> None:
    metrics = MetricsCollector(enabled=True)

    metrics.record_batch_submitted(4)
    metrics.record_batch_submitted(1)
    metrics.record_events_dropped(7)

    registry = metrics.registry
    assert registry is not None
    assert registry.get_sample_value("logship_events_submitted_total") == 5.0
    assert registry.get_sample_value("logship_batches_submitted_total") == 2.0
    assert registry.get_sample_value("logship_events_dropped_total") == 7.0
    assert registry.get_sample_value("logship_cursor_retries_total") == 0.0


def test_collectors_do_not_share_registries() -> None:
    first = MetricsCollector(enabled=True)
    second = MetricsCollector(enabled=True)

    first.record_cursor_retry()

    assert second.registry.get_sample_value("logship_cursor_retries_total") == 0.0
