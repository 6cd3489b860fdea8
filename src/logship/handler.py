"""
``logging.Handler`` front end for the shipping engine.

Example:
    import logging
    import boto3
    from logship import CloudWatchLogsHandler

    handler = CloudWatchLogsHandler(
        boto3.client("logs"),
        group="/myapp/prod",
        stream="web-1",
        retention=30,
        tags={"team": "platform"},
        level="INFO",
    )
    handler.attach(logging.getLogger("myapp"))
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from .core import diagnostics
from .core.accumulator import Accumulator
from .core.client import Boto3LogService, as_log_service
from .core.errors import ConfigurationError
from .core.limits import MAX_BATCH_SIZE
from .core.pipeline import build_accumulator
from .core.settings import HandlerConfig, Settings, parse_handler_config
from .core.throttle import RateLimiter
from .formatting import LineFormatter
from .metrics.metrics import MetricsCollector


class CloudWatchLogsHandler(logging.Handler):
    """Buffers records and ships them to CloudWatch Logs in batches.

    Arguments are validated before any remote call; invalid input raises
    ``ConfigurationError``. The remote group and stream are bootstrapped on
    the first flush, not at construction.

    ``emit`` follows the stdlib contract and never raises: delivery failures
    go through ``handleError``. ``flush`` and ``close`` drain the buffer and
    raise ``ServiceError`` when delivery fails. Buffered records are only
    shipped once a limit is reached or on ``flush``/``close``, so call
    ``close`` (or ``logging.shutdown``) at orderly shutdown.
    """

    def __init__(
        self,
        client: Any,
        group: str,
        stream: str,
        retention: int | None = 14,
        batch_size: int = MAX_BATCH_SIZE,
        tags: Mapping[str, str] | None = None,
        level: int | str = logging.DEBUG,
        bubble: bool = True,
        create_group: bool = True,
        *,
        metrics: MetricsCollector | None = None,
        rate_limiter: RateLimiter | None = None,
    ) -> None:
        config = parse_handler_config(
            group=group,
            stream=stream,
            retention=retention,
            batch_size=batch_size,
            tags=tags,
            level=level,
            bubble=bubble,
            create_group=create_group,
        )
        try:
            service = as_log_service(client)
        except TypeError as exc:
            raise ConfigurationError(str(exc), cause=exc) from exc

        super().__init__(config.level)
        self._config = config
        self._metrics = metrics or MetricsCollector()
        self._accumulator = build_accumulator(
            service,
            config,
            metrics=self._metrics,
            rate_limiter=rate_limiter,
        )
        self.setFormatter(LineFormatter())

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        client: Any = None,
        metrics: MetricsCollector | None = None,
    ) -> "CloudWatchLogsHandler":
        """Build a handler from ``LOGSHIP_*`` environment settings."""
        settings = settings or Settings()
        cw = settings.cloudwatch
        if client is None:
            client = Boto3LogService.create(region=cw.region)
        return cls(
            client,
            cw.group,
            cw.stream,
            retention=cw.retention_days,
            batch_size=cw.batch_size,
            tags=cw.tags,
            level=cw.level,
            bubble=cw.bubble,
            create_group=cw.create_group,
            metrics=metrics or MetricsCollector(enabled=settings.core.enable_metrics),
        )

    @property
    def config(self) -> HandlerConfig:
        return self._config

    @property
    def bubble(self) -> bool:
        return self._config.bubble

    @property
    def accumulator(self) -> Accumulator:
        return self._accumulator

    @property
    def metrics(self) -> MetricsCollector:
        return self._metrics

    def attach(self, logger: logging.Logger) -> logging.Logger:
        """Add this handler to ``logger`` and apply the bubble setting.

        With ``bubble=False`` records handled here do not propagate to the
        handlers of ancestor loggers.
        """
        logger.addHandler(self)
        logger.propagate = self._config.bubble
        return logger

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            self._accumulator.add(message, int(record.created * 1000))
        except RecursionError:  # See issue 36272 in CPython
            raise
        except Exception as exc:
            diagnostics.warn(
                "handler",
                "failed to ship log record",
                logger=record.name,
                error=type(exc).__name__,
                detail=str(exc),
            )
            self.handleError(record)

    def flush(self) -> None:
        with self.lock:
            self._accumulator.flush()

    def close(self) -> None:
        with self.lock:
            try:
                self._accumulator.flush()
            finally:
                super().close()

    def __repr__(self) -> str:
        level = logging.getLevelName(self.level)
        return (
            f"<{type(self).__name__} {self._config.group}:{self._config.stream} "
            f"({level})>"
        )
