"""Severity level resolution for the minimum-level handler setting.

Levels can be given either as stdlib numeric values or as names. Names are
matched case-insensitively against the standard table plus any level added
to :mod:`logging` with ``logging.addLevelName``.
"""

from __future__ import annotations

import logging
from typing import Final

_DEFAULT_LEVELS: Final[dict[str, int]] = {
    "NOTSET": logging.NOTSET,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,  # alias
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
    "FATAL": logging.CRITICAL,  # alias
}


def get_level_priority(level: int | str) -> int:
    """Resolve a level name or number to its numeric priority.

    Args:
        level: Level name (case-insensitive) or non-negative integer.

    Returns:
        Numeric priority usable with ``logging.Handler.setLevel``.

    Raises:
        ValueError: If the name is unknown or the number is negative.
    """
    if isinstance(level, bool):
        raise ValueError(f"Invalid log level: {level!r}")
    if isinstance(level, int):
        if level < 0:
            raise ValueError(f"Log level must be >= 0, got {level}")
        return level
    name = str(level).strip().upper()
    if name in _DEFAULT_LEVELS:
        return _DEFAULT_LEVELS[name]
    # Levels registered through logging.addLevelName
    registered = logging.getLevelName(name)
    if isinstance(registered, int):
        return registered
    raise ValueError(f"Unknown log level: {level!r}")
