from __future__ import annotations

import math

import pytest

from logship.core.events import LogEvent, RecordChunks, split_message
from logship.core.limits import EVENT_OVERHEAD, EVENT_SIZE_LIMIT


class TestSplitMessage:
    def test_oversized_ascii_message_is_split_into_limit_sized_chunks(self) -> None:
        message = "a" * EVENT_SIZE_LIMIT + "b" * EVENT_SIZE_LIMIT + "c" * 5

        chunks = list(split_message(message, 1234))

        assert len(chunks) == math.ceil(len(message) / EVENT_SIZE_LIMIT) == 3
        assert all(len(c.message) <= EVENT_SIZE_LIMIT for c in chunks)
        assert b"".join(c.message for c in chunks) == message.encode()
        assert {c.timestamp for c in chunks} == {1234}
        assert chunks[2].message == b"ccccc"

    def test_message_at_limit_is_single_event(self) -> None:
        chunks = list(split_message("x" * EVENT_SIZE_LIMIT, 1))

        assert len(chunks) == 1
        assert len(chunks[0].message) == EVENT_SIZE_LIMIT

    def test_empty_message_yields_nothing(self) -> None:
        chunks = split_message("", 1)

        assert list(chunks) == []
        assert not chunks

    def test_chunks_are_restartable(self) -> None:
        chunks = split_message("y" * (EVENT_SIZE_LIMIT + 1), 7)

        assert list(chunks) == list(chunks)

    def test_accepts_bytes(self) -> None:
        chunks = list(split_message(b"raw bytes", 5))

        assert chunks == [LogEvent(message=b"raw bytes", timestamp=5)]

    def test_never_cuts_multibyte_characters(self) -> None:
        data = "ééé".encode("utf-8")  # six bytes, two per character

        chunks = list(RecordChunks(data, 1, limit=5))

        assert [c.message.decode("utf-8") for c in chunks] == ["éé", "é"]
        assert b"".join(c.message for c in chunks) == data

    def test_lone_surrogates_are_escaped(self) -> None:
        # as produced by os.fsdecode for a non-UTF-8 filename
        chunks = list(split_message("file /tmp/\udcff.log", 1))

        assert [c.message for c in chunks] == [b"file /tmp/\\udcff.log"]
        assert chunks[0].to_wire()["message"] == "file /tmp/\\udcff.log"

    def test_invalid_limit_rejected(self) -> None:
        with pytest.raises(ValueError):
            RecordChunks(b"abc", 1, limit=0)


class TestLogEvent:
    def test_size_includes_per_event_overhead(self) -> None:
        event = LogEvent(message=b"hello", timestamp=1)

        assert event.size == 5 + EVENT_OVERHEAD

    def test_rejects_oversized_message(self) -> None:
        with pytest.raises(ValueError):
            LogEvent(message=b"z" * (EVENT_SIZE_LIMIT + 1), timestamp=1)

    def test_to_wire_decodes_message(self) -> None:
        event = LogEvent(message="héllo".encode("utf-8"), timestamp=99)

        assert event.to_wire() == {"timestamp": 99, "message": "héllo"}
