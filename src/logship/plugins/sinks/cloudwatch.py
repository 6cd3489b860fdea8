"""
Async CloudWatch Logs sink.

Wraps the same accumulate/flush engine as ``CloudWatchLogsHandler`` for async
pipelines that hand over structured entries instead of ``LogRecord`` objects.
Engine calls may block (rate limiting, network), so they run in a worker
thread, one at a time.
"""

from __future__ import annotations

import asyncio
import time
from datetime import datetime
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...core import diagnostics
from ...core.accumulator import Accumulator
from ...core.client import Boto3LogService, LogServiceClient, as_log_service
from ...core.errors import ConfigurationError
from ...core.limits import MAX_BATCH_SIZE
from ...core.pipeline import build_accumulator
from ...core.serialization import dumps_text
from ...core.settings import HandlerConfig, parse_handler_config
from ...core.throttle import RateLimiter
from ...metrics.metrics import MetricsCollector
from ..utils import parse_plugin_config

__all__ = ["CloudWatchSink", "CloudWatchSinkConfig"]


class CloudWatchSinkConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    log_group_name: str
    log_stream_name: str
    region: str | None = None
    retention_days: int | None = Field(default=14, ge=0)
    batch_size: int = Field(default=MAX_BATCH_SIZE, ge=1, le=MAX_BATCH_SIZE)
    tags: dict[str, str] = Field(default_factory=dict)
    create_log_group: bool = True

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value: Mapping[str, str] | None) -> dict[str, str]:
        if value is None:
            return {}
        return dict(value)

    def to_handler_config(self) -> HandlerConfig:
        return parse_handler_config(
            group=self.log_group_name,
            stream=self.log_stream_name,
            retention=self.retention_days,
            batch_size=self.batch_size,
            tags=self.tags,
            create_group=self.create_log_group,
        )


def _entry_timestamp_ms(entry: Mapping[str, Any]) -> int:
    value = entry.get("timestamp")
    if isinstance(value, bool):
        value = None
    if isinstance(value, (int, float)):
        return int(value * 1000)
    if isinstance(value, datetime):
        return int(value.timestamp() * 1000)
    if isinstance(value, str):
        try:
            return int(datetime.fromisoformat(value).timestamp() * 1000)
        except ValueError:
            pass
    return int(time.time() * 1000)


class CloudWatchSink:
    """Async sink that batches entries into CloudWatch Logs."""

    name = "cloudwatch"

    def __init__(
        self,
        config: CloudWatchSinkConfig | dict | None = None,
        *,
        client: Any = None,
        metrics: MetricsCollector | None = None,
        rate_limiter: RateLimiter | None = None,
        **kwargs: Any,
    ) -> None:
        cfg = parse_plugin_config(CloudWatchSinkConfig, config, **kwargs)
        self._config = cfg
        self._handler_config = cfg.to_handler_config()
        self._service: LogServiceClient | None = None
        if client is not None:
            try:
                self._service = as_log_service(client)
            except TypeError as exc:
                raise ConfigurationError(str(exc), cause=exc) from exc
        self._metrics = metrics or MetricsCollector()
        self._rate_limiter = rate_limiter
        self._accumulator: Accumulator | None = None
        self._lock = asyncio.Lock()
        self._last_error: str | None = None

    @property
    def accumulator(self) -> Accumulator | None:
        return self._accumulator

    async def start(self) -> None:
        if self._accumulator is not None:
            return
        if self._service is None:
            self._service = await asyncio.to_thread(
                Boto3LogService.create, region=self._config.region
            )
        self._accumulator = build_accumulator(
            self._service,
            self._handler_config,
            metrics=self._metrics,
            rate_limiter=self._rate_limiter,
        )

    async def stop(self) -> None:
        if self._accumulator is None:
            return
        async with self._lock:
            try:
                await asyncio.to_thread(self._accumulator.flush)
                self._last_error = None
            except Exception as exc:
                self._record_failure("final flush failed", exc)

    async def write(self, entry: dict[str, Any]) -> None:
        """Buffer one entry; a full buffer is flushed before returning."""
        if self._accumulator is None:
            self._record_failure("write before start", RuntimeError("not started"))
            return
        try:
            message = dumps_text(entry)
            timestamp = _entry_timestamp_ms(entry)
            async with self._lock:
                await asyncio.to_thread(self._accumulator.add, message, timestamp)
            self._last_error = None
        except Exception as exc:
            self._record_failure("failed to deliver log batch", exc)

    async def health_check(self) -> bool:
        return self._accumulator is not None and self._last_error is None

    def _record_failure(self, message: str, exc: BaseException) -> None:
        self._last_error = str(exc)
        diagnostics.warn(
            "cloudwatch-sink",
            message,
            group=self._config.log_group_name,
            stream=self._config.log_stream_name,
            error=type(exc).__name__,
            detail=str(exc),
        )
