"""
Buffering and flush orchestration.

The accumulator turns a stream of formatted records into correctly sized
batch submissions:

- each record is split into events of at most ``EVENT_SIZE_LIMIT`` bytes;
- a flush runs before an event that would take the buffer's byte total to
  ``DATA_AMOUNT_LIMIT`` or beyond, and right after the buffer reaches
  ``batch_size`` events;
- a flush bootstraps the remote group/stream on first use, submits, and on a
  rejected sequence token re-resolves the token and retries exactly once;
- the buffer is cleared after every flush attempt, successful or not, which
  bounds memory under persistent remote failure at the cost of losing the
  failed batch.

Not thread-safe: callers serialize access (the logging handler does so with
its handler lock).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from . import diagnostics
from .errors import CursorInvalid
from .events import LogEvent, split_message
from .limits import DATA_AMOUNT_LIMIT, MAX_BATCH_SIZE
from .streams import StreamInitializer, StreamState
from .submitter import BatchSubmitter
from ..metrics.metrics import MetricsCollector


class AccumulatorState(str, Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"


@dataclass
class Buffer:
    """Pending events plus their accounted byte total."""

    events: list[LogEvent] = field(default_factory=list)
    byte_total: int = 0

    def append(self, event: LogEvent) -> None:
        self.events.append(event)
        self.byte_total += event.size

    def clear(self) -> None:
        self.events = []
        self.byte_total = 0

    def __len__(self) -> int:
        return len(self.events)


class Accumulator:
    def __init__(
        self,
        submitter: BatchSubmitter,
        initializer: StreamInitializer,
        *,
        batch_size: int = MAX_BATCH_SIZE,
        metrics: MetricsCollector | None = None,
    ) -> None:
        if not 1 <= batch_size <= MAX_BATCH_SIZE:
            raise ValueError(f"batch_size must be between 1 and {MAX_BATCH_SIZE}")
        self._submitter = submitter
        self._initializer = initializer
        self._batch_size = batch_size
        self._metrics = metrics
        self._buffer = Buffer()

    @property
    def state(self) -> AccumulatorState:
        if self._initializer.state.initialized:
            return AccumulatorState.READY
        return AccumulatorState.UNINITIALIZED

    @property
    def buffer(self) -> Buffer:
        return self._buffer

    @property
    def stream_state(self) -> StreamState:
        return self._initializer.state

    @property
    def batch_size(self) -> int:
        return self._batch_size

    def add(self, message: str | bytes, timestamp: int) -> None:
        """Accept one formatted record; empty messages are ignored."""
        self.add_events(split_message(message, timestamp))

    def add_events(self, events: Iterable[LogEvent]) -> None:
        for event in events:
            if self._buffer.byte_total + event.size >= DATA_AMOUNT_LIMIT:
                self.flush()

            self._buffer.append(event)

            if len(self._buffer) >= self._batch_size:
                self.flush()

    def flush(self) -> None:
        """Submit buffered events, if any.

        Remote errors propagate to the caller after the buffer is cleared.
        """
        if not self._buffer.events:
            return

        events = self._buffer.events
        try:
            self._initializer.initialize()
            self._send(events)
        except Exception as exc:
            if self._metrics is not None:
                self._metrics.record_events_dropped(len(events))
            diagnostics.warn(
                "accumulator",
                "flush failed, dropping buffered events",
                events=len(events),
                error=type(exc).__name__,
                detail=str(exc),
            )
            raise
        finally:
            self._buffer.clear()

    def _send(self, events: list[LogEvent]) -> None:
        try:
            self._submitter.submit(events)
        except CursorInvalid:
            if self._metrics is not None:
                self._metrics.record_cursor_retry()
            diagnostics.debug(
                "accumulator", "sequence token rejected, refreshing and retrying"
            )
            self._initializer.resolve_cursor()
            self._submitter.submit(events)
