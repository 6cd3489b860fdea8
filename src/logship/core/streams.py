"""
Remote group/stream bootstrap and sequence token recovery.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from . import diagnostics
from .client import LogServiceClient


@dataclass
class StreamState:
    """Remote bootstrap progress plus the current sequence token.

    Shared by reference between ``StreamInitializer`` (which discovers the
    token) and ``BatchSubmitter`` (which advances it after each write).
    """

    group_exists: bool = False
    stream_exists: bool = False
    initialized: bool = False
    cursor: str | None = None


class StreamInitializer:
    """Makes sure the target group and stream exist and knows their cursor.

    Remote failures are not caught here; they propagate to the caller.
    """

    def __init__(
        self,
        client: LogServiceClient,
        group: str,
        stream: str,
        *,
        state: StreamState | None = None,
        retention_days: int = 0,
        tags: Mapping[str, str] | None = None,
        create_group: bool = True,
    ) -> None:
        self._client = client
        self._group = group
        self._stream = stream
        self._state = state if state is not None else StreamState()
        self._retention_days = retention_days
        self._tags = dict(tags or {})
        self._create_group = create_group

    @property
    def state(self) -> StreamState:
        return self._state

    def initialize(self) -> None:
        """Run the one-time bootstrap; a no-op once it has succeeded.

        ``initialized`` is only set after every remote call went through, so
        a failed bootstrap is attempted again on the next call.
        """
        if self._state.initialized:
            return
        if self._create_group:
            self.ensure_group()
        self.resolve_cursor()
        self._state.initialized = True

    def ensure_group(self) -> None:
        existing = self._client.describe_groups(self._group)
        if self._group in existing:
            self._state.group_exists = True
            return

        self._client.create_group(self._group, self._tags or None)
        self._state.group_exists = True
        diagnostics.debug("streams", "created log group", group=self._group)

        if self._retention_days > 0:
            self._client.put_retention_policy(self._group, self._retention_days)

    def resolve_cursor(self) -> str | None:
        """Refresh the sequence token from the stream's metadata.

        Creates the stream when it does not exist yet; a new stream has no
        token and the next write omits it.
        """
        streams = self._client.describe_streams(self._group, self._stream)
        match = next((s for s in streams if s.name == self._stream), None)
        if match is None:
            self._client.create_stream(self._group, self._stream)
            self._state.cursor = None
            diagnostics.debug(
                "streams",
                "created log stream",
                group=self._group,
                stream=self._stream,
            )
        else:
            self._state.cursor = match.upload_sequence_token
        self._state.stream_exists = True
        return self._state.cursor
