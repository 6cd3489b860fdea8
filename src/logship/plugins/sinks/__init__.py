from __future__ import annotations

from typing import Protocol, runtime_checkable

from .cloudwatch import CloudWatchSink, CloudWatchSinkConfig


@runtime_checkable
class BaseSink(Protocol):
    """Base async sink interface.

    Sinks emit finalized log entries to an external destination. Errors must
    be contained and must not crash the calling pipeline.
    """

    async def start(self) -> None:  # Optional lifecycle hook
        ...

    async def stop(self) -> None:  # Optional lifecycle hook
        ...

    async def write(self, _entry: dict) -> None:  # noqa: ARG002, D401
        """Write a single structured log entry to the sink destination."""
        ...

    async def health_check(self) -> bool:
        """Return True while the sink can deliver entries."""
        ...


__all__ = [
    "BaseSink",
    "CloudWatchSink",
    "CloudWatchSinkConfig",
]
