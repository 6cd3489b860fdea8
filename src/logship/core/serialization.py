"""
JSON rendering for shipped payloads and diagnostics.

orjson refuses strings that are not valid Unicode scalar sequences, such as
lone surrogates produced by ``surrogateescape`` decoding of filenames,
``sys.argv`` or environment values. Those payloads are rendered again with
every string escaped (``\\udcff``) instead of being lost.
"""

from __future__ import annotations

from typing import Any

import orjson


def safe_text(value: str) -> str:
    """Return ``value`` with unencodable code points backslash-escaped."""
    return value.encode("utf-8", errors="backslashreplace").decode("utf-8")


def _scrub(value: Any) -> Any:
    if isinstance(value, str):
        return safe_text(value)
    if isinstance(value, dict):
        return {safe_text(str(k)): _scrub(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_scrub(v) for v in value]
    return value


def _safe_default(obj: Any) -> str:
    return safe_text(str(obj))


def dumps_text(data: Any, *, sort_keys: bool = False) -> str:
    """Serialize ``data`` to a JSON string; unknown types render via ``str``."""
    option = orjson.OPT_SORT_KEYS if sort_keys else 0
    try:
        return orjson.dumps(data, default=str, option=option).decode("utf-8")
    except orjson.JSONEncodeError:
        return orjson.dumps(
            _scrub(data), default=_safe_default, option=option
        ).decode("utf-8")


__all__ = ["dumps_text", "safe_text"]
