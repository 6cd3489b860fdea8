"""
Wire events and record splitting.

The remote service rejects any single event larger than ``EVENT_SIZE_LIMIT``
bytes, so oversized formatted records are split into several events sharing
the record's timestamp rather than being dropped or truncated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

from .limits import EVENT_OVERHEAD, EVENT_SIZE_LIMIT


@dataclass(frozen=True)
class LogEvent:
    """One event as submitted to the log service.

    ``message`` holds UTF-8 bytes of at most ``EVENT_SIZE_LIMIT`` length;
    ``timestamp`` is milliseconds since the epoch.
    """

    message: bytes
    timestamp: int

    def __post_init__(self) -> None:
        if len(self.message) > EVENT_SIZE_LIMIT:
            raise ValueError(
                f"Event message exceeds {EVENT_SIZE_LIMIT} bytes: {len(self.message)}"
            )

    @property
    def size(self) -> int:
        """Bytes this event counts against the batch data limit."""
        return len(self.message) + EVENT_OVERHEAD

    def to_wire(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "message": self.message.decode("utf-8", errors="replace"),
        }


def _chunk_end(data: bytes, start: int, limit: int) -> int:
    end = start + limit
    if end >= len(data):
        return len(data)
    # Back off to the start of a UTF-8 sequence (continuation bytes are 10xxxxxx)
    cut = end
    while cut > start and (data[cut] & 0xC0) == 0x80:
        cut -= 1
    return cut if cut > start else end


class RecordChunks:
    """Lazy, restartable sequence of events split from one record."""

    __slots__ = ("_data", "_timestamp", "_limit")

    def __init__(
        self, data: bytes, timestamp: int, *, limit: int = EVENT_SIZE_LIMIT
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be >= 1")
        self._data = data
        self._timestamp = timestamp
        self._limit = limit

    def __iter__(self) -> Iterator[LogEvent]:
        data = self._data
        start = 0
        while start < len(data):
            end = _chunk_end(data, start, self._limit)
            yield LogEvent(message=data[start:end], timestamp=self._timestamp)
            start = end

    def __bool__(self) -> bool:
        return bool(self._data)

    def __repr__(self) -> str:
        return (
            f"RecordChunks(bytes={len(self._data)}, timestamp={self._timestamp})"
        )


def split_message(message: str | bytes, timestamp: int) -> RecordChunks:
    """Split a formatted message into events of at most ``EVENT_SIZE_LIMIT`` bytes.

    Every chunk carries ``timestamp``. Chunks keep the original byte order and
    never cut a multi-byte UTF-8 character in two. Code points UTF-8 cannot
    encode (lone surrogates) are written as backslash escapes. An empty
    message yields no events.
    """
    if isinstance(message, str):
        data = message.encode("utf-8", errors="backslashreplace")
    else:
        data = bytes(message)
    return RecordChunks(data, int(timestamp))


__all__ = ["LogEvent", "RecordChunks", "split_message"]
