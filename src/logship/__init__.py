"""
logship: ship Python log records to AWS CloudWatch Logs.

Records are buffered, split to the provider's per-event size limit, batched
under its per-request byte and count limits, throttled to its request rate,
and appended with the stream's sequence token, recovering once from a token
invalidated by another writer.

Entry points:
- ``CloudWatchLogsHandler``: a ``logging.Handler``
- ``CloudWatchSink``: an async sink for structured entries
"""

from __future__ import annotations

from ._version import __version__
from .core.accumulator import Accumulator, AccumulatorState, Buffer
from .core.client import Boto3LogService, LogServiceClient, StreamDescription
from .core.errors import (
    ConfigurationError,
    CursorInvalid,
    LogshipError,
    ServiceError,
)
from .core.events import LogEvent, split_message
from .core.limits import (
    DATA_AMOUNT_LIMIT,
    EVENT_OVERHEAD,
    EVENT_SIZE_LIMIT,
    MAX_BATCH_SIZE,
    RPS_LIMIT,
)
from .core.settings import Settings
from .core.throttle import RateLimiter
from .formatting import LineFormatter
from .handler import CloudWatchLogsHandler
from .metrics.metrics import MetricsCollector
from .plugins.sinks.cloudwatch import CloudWatchSink, CloudWatchSinkConfig

__all__ = [
    "Accumulator",
    "AccumulatorState",
    "Boto3LogService",
    "Buffer",
    "CloudWatchLogsHandler",
    "CloudWatchSink",
    "CloudWatchSinkConfig",
    "ConfigurationError",
    "CursorInvalid",
    "DATA_AMOUNT_LIMIT",
    "EVENT_OVERHEAD",
    "EVENT_SIZE_LIMIT",
    "LineFormatter",
    "LogEvent",
    "LogServiceClient",
    "LogshipError",
    "MAX_BATCH_SIZE",
    "MetricsCollector",
    "RPS_LIMIT",
    "RateLimiter",
    "ServiceError",
    "Settings",
    "StreamDescription",
    "VERSION",
    "__version__",
    "split_message",
]

VERSION = __version__
