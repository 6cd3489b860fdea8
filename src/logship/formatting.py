"""
Default line formatter for shipped records.

Renders ``"<logger>: <LEVEL>: <message>"`` followed by the record's extra
attributes as compact JSON when any were passed through ``extra=``, then the
exception and stack text when present.
"""

from __future__ import annotations

import logging
from typing import Any

from .core.serialization import dumps_text

DEFAULT_FORMAT = "%(name)s: %(levelname)s: %(message)s"

# Attributes every LogRecord carries; anything else came in through ``extra``
_RESERVED_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys()
) | {"message", "asctime", "taskName"}


def record_extras(record: logging.LogRecord) -> dict[str, Any]:
    """Return the non-standard attributes attached to ``record``."""
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RESERVED_ATTRS and not key.startswith("_")
    }


class LineFormatter(logging.Formatter):
    """Single-line formatter appending ``extra`` fields as JSON."""

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        *,
        include_extras: bool = True,
    ) -> None:
        super().__init__(fmt or DEFAULT_FORMAT, datefmt)
        self._include_extras = include_extras

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        if self.usesTime():
            record.asctime = self.formatTime(record, self.datefmt)
        line = self.formatMessage(record)

        if self._include_extras:
            extras = record_extras(record)
            if extras:
                line = f"{line} {dumps_text(extras, sort_keys=True)}"

        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            line = f"{line}\n{record.exc_text}"
        if record.stack_info:
            line = f"{line}\n{self.formatStack(record.stack_info)}"
        return line
