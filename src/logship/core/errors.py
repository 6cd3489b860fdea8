"""
Error taxonomy for logship.

Three failure classes exist:

- ``ConfigurationError``: invalid construction arguments. Raised synchronously
  before any remote call; the shipper never enters its steady state.
- ``CursorInvalid``: the remote stream rejected the sequence token presented
  with a write (an interleaved writer advanced the stream). Expected and
  recovered automatically by one re-resolve-and-retry cycle.
- ``ServiceError``: any other remote failure, including a second failure
  after the retry. Never recovered locally; surfaces at the call that
  triggered the flush.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Coarse classification used in diagnostics and error context."""

    CONFIG = "config"
    SEQUENCE = "sequence"
    EXTERNAL = "external"


class ErrorSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def create_error_context(
    category: ErrorCategory,
    severity: ErrorSeverity,
    **fields: Any,
) -> dict[str, Any]:
    """Build a flat context mapping attached to raised errors."""
    context: dict[str, Any] = {
        "category": category.value,
        "severity": severity.value,
    }
    context.update({k: v for k, v in fields.items() if v is not None})
    return context


class LogshipError(Exception):
    """Base class for every error raised by logship."""

    default_category = ErrorCategory.EXTERNAL
    default_severity = ErrorSeverity.HIGH

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        severity: ErrorSeverity | None = None,
        error_context: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.severity = severity or self.default_severity
        self.context = error_context or create_error_context(
            self.category, self.severity
        )
        self.cause = cause

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "error": type(self).__name__,
            "message": self.message,
            **self.context,
        }
        if self.cause is not None:
            data["cause"] = type(self.cause).__name__
        return data


class ConfigurationError(LogshipError, ValueError):
    """Invalid construction arguments."""

    default_category = ErrorCategory.CONFIG


class ServiceError(LogshipError):
    """A remote log-service call failed."""

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        operation: str | None = None,
        **kwargs: Any,
    ) -> None:
        self.code = code
        self.operation = operation
        if "error_context" not in kwargs:
            category = kwargs.get("category") or self.default_category
            severity = kwargs.get("severity") or self.default_severity
            kwargs["error_context"] = create_error_context(
                category, severity, code=code, operation=operation
            )
        super().__init__(message, **kwargs)


class CursorInvalid(ServiceError):
    """The sequence token presented with a write is stale or invalid."""

    default_category = ErrorCategory.SEQUENCE
    default_severity = ErrorSeverity.MEDIUM

    def __init__(
        self,
        message: str = "sequence token rejected by log service",
        *,
        expected_token: str | None = None,
        **kwargs: Any,
    ) -> None:
        self.expected_token = expected_token
        super().__init__(message, **kwargs)


__all__ = [
    "ConfigurationError",
    "CursorInvalid",
    "ErrorCategory",
    "ErrorSeverity",
    "LogshipError",
    "ServiceError",
    "create_error_context",
]
