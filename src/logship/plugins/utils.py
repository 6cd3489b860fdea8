"""
Plugin utilities for configuration parsing.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ..core.errors import ConfigurationError

ConfigT = TypeVar("ConfigT", bound=BaseModel)


def parse_plugin_config(
    model: type[ConfigT],
    config: ConfigT | dict[str, Any] | None = None,
    **kwargs: Any,
) -> ConfigT:
    """Build a plugin config model from an instance, a dict, or keyword args.

    A dict may wrap the values under a ``"config"`` key. Keyword arguments
    override dict values.

    Raises:
        ConfigurationError: If validation fails.
    """
    if isinstance(config, model):
        if kwargs:
            raw: dict[str, Any] = {**config.model_dump(), **kwargs}
        else:
            return config
    elif isinstance(config, dict):
        raw = {**config.get("config", config), **kwargs}
    elif config is None:
        raw = dict(kwargs.get("config", kwargs))
    else:
        raise ConfigurationError(
            f"Unsupported config type for {model.__name__}: {type(config).__name__}"
        )
    try:
        return model(**raw)
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid {model.__name__}: {exc}",
            cause=exc,
        ) from exc
