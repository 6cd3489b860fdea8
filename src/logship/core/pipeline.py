"""Assembly of the shipping engine from validated configuration."""

from __future__ import annotations

from .accumulator import Accumulator
from .client import LogServiceClient
from .settings import HandlerConfig
from .streams import StreamInitializer, StreamState
from .submitter import BatchSubmitter
from .throttle import RateLimiter
from ..metrics.metrics import MetricsCollector


def build_accumulator(
    service: LogServiceClient,
    config: HandlerConfig,
    *,
    metrics: MetricsCollector | None = None,
    rate_limiter: RateLimiter | None = None,
) -> Accumulator:
    """Wire initializer, submitter and accumulator around one shared state."""
    state = StreamState()
    initializer = StreamInitializer(
        service,
        config.group,
        config.stream,
        state=state,
        retention_days=config.retention_days,
        tags=config.tags,
        create_group=config.create_group,
    )
    submitter = BatchSubmitter(
        service,
        config.group,
        config.stream,
        state=state,
        rate_limiter=rate_limiter or RateLimiter(metrics=metrics),
        metrics=metrics,
    )
    return Accumulator(
        submitter,
        initializer,
        batch_size=config.batch_size,
        metrics=metrics,
    )
