"""
Single batch submission: order, attach cursor, throttle, send.
"""

from __future__ import annotations

from operator import attrgetter
from typing import Sequence

from .client import LogServiceClient
from .events import LogEvent
from .streams import StreamState
from .throttle import RateLimiter
from ..metrics.metrics import MetricsCollector

_by_timestamp = attrgetter("timestamp")


class BatchSubmitter:
    """Issues one PutLogEvents call per batch.

    The service rejects batches that are not in chronological order, so
    events are sorted by timestamp; ``sorted`` is stable and keeps arrival
    order for equal timestamps. Errors from the client (``CursorInvalid``,
    ``ServiceError``) propagate untouched; retrying is the caller's decision.
    """

    def __init__(
        self,
        client: LogServiceClient,
        group: str,
        stream: str,
        *,
        state: StreamState,
        rate_limiter: RateLimiter | None = None,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self._client = client
        self._group = group
        self._stream = stream
        self._state = state
        self._rate_limiter = rate_limiter or RateLimiter(metrics=metrics)
        self._metrics = metrics

    @property
    def rate_limiter(self) -> RateLimiter:
        return self._rate_limiter

    def submit(self, events: Sequence[LogEvent]) -> str | None:
        if not events:
            raise ValueError("cannot submit an empty batch")
        ordered = sorted(events, key=_by_timestamp)

        self._rate_limiter.acquire()
        next_cursor = self._client.put_events(
            self._group,
            self._stream,
            ordered,
            self._state.cursor,
        )
        self._state.cursor = next_cursor

        if self._metrics is not None:
            self._metrics.record_batch_submitted(len(ordered))
        return next_cursor
