"""
Structured internal diagnostics.

Internal warnings are written as single JSON lines to stderr and never routed
through :mod:`logging`: a handler that ships log records must not feed its own
diagnostics back into the logger tree it is attached to.

Diagnostics are off unless ``LOGSHIP_CORE__INTERNAL_LOGGING_ENABLED`` is set.
The setting is read once and cached in ``_internal_logging_enabled``; tests
reset the cache between cases.
"""

from __future__ import annotations

import sys
import threading
import time
from typing import Any

from .serialization import dumps_text

_internal_logging_enabled: bool | None = None

# Minimum seconds between two identical (component, message) warnings
_WARN_INTERVAL_SECONDS = 5.0

_last_emitted: dict[tuple[str, str], float] = {}
_lock = threading.Lock()


def _is_enabled() -> bool:
    global _internal_logging_enabled
    if _internal_logging_enabled is None:
        try:
            from .settings import Settings

            _internal_logging_enabled = bool(
                Settings().core.internal_logging_enabled
            )
        except Exception:
            _internal_logging_enabled = False
    return _internal_logging_enabled


def _allowed(component: str, message: str, now: float) -> bool:
    key = (component, message)
    with _lock:
        last = _last_emitted.get(key)
        if last is not None and now - last < _WARN_INTERVAL_SECONDS:
            return False
        _last_emitted[key] = now
    return True


def _emit(level: str, component: str, message: str, fields: dict[str, Any]) -> None:
    payload: dict[str, Any] = {
        "timestamp": time.time(),
        "level": level,
        "logger": "logship.diagnostics",
        "component": component,
        "message": message,
    }
    payload.update(fields)
    line = dumps_text(payload) + "\n"
    try:
        sys.stderr.write(line)
        sys.stderr.flush()
    except Exception:
        # stderr closed or replaced; nothing else to report to
        return


def warn(component: str, message: str, **fields: Any) -> None:
    """Emit a rate-limited WARN diagnostic when internal logging is enabled."""
    if not _is_enabled():
        return
    if not _allowed(component, message, time.monotonic()):
        return
    _emit("WARN", component, message, fields)


def debug(component: str, message: str, **fields: Any) -> None:
    """Emit a DEBUG diagnostic when internal logging is enabled."""
    if not _is_enabled():
        return
    _emit("DEBUG", component, message, fields)


def _reset_rate_limits() -> None:
    """Forget emitted-warning timestamps (tests only)."""
    with _lock:
        _last_emitted.clear()
