"""
Configuration models for logship using Pydantic v2 Settings.

``Settings`` loads from the environment (prefix ``LOGSHIP_``, nested
delimiter ``__``), e.g. ``LOGSHIP_CLOUDWATCH__GROUP=/app/prod``.
``HandlerConfig`` validates the arguments of a single shipper instance and is
what the handler and sink constructors run their input through.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import (  # type: ignore[import-not-found]
    BaseSettings,
    SettingsConfigDict,
)

from .errors import ConfigurationError
from .levels import get_level_priority
from .limits import MAX_BATCH_SIZE

# Keep explicit version to allow schema gating and forward migrations later
LATEST_CONFIG_SCHEMA_VERSION = "1.0"

_GROUP_NAME_RE = re.compile(r"^[A-Za-z0-9_\-/.#]{1,512}$")
_STREAM_FORBIDDEN = (":", "*")


def _check_group_name(value: str) -> str:
    if not _GROUP_NAME_RE.match(value):
        raise ValueError(
            "group name must be 1-512 characters of a-z, A-Z, 0-9, "
            "'_', '-', '/', '.', '#'"
        )
    return value


def _check_stream_name(value: str) -> str:
    if not 1 <= len(value) <= 512:
        raise ValueError("stream name must be 1-512 characters long")
    if any(ch in value for ch in _STREAM_FORBIDDEN):
        raise ValueError("stream name must not contain ':' or '*'")
    return value


class HandlerConfig(BaseModel):
    """Validated construction arguments for one shipper instance."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    group: str
    stream: str
    retention: int | None = Field(default=14, ge=0)
    batch_size: int = Field(default=MAX_BATCH_SIZE, ge=1)
    tags: dict[str, str] = Field(default_factory=dict)
    level: int = 10
    bubble: bool = True
    create_group: bool = True

    @field_validator("group")
    @classmethod
    def _validate_group(cls, value: str) -> str:
        return _check_group_name(value)

    @field_validator("stream")
    @classmethod
    def _validate_stream(cls, value: str) -> str:
        return _check_stream_name(value)

    @field_validator("batch_size")
    @classmethod
    def _validate_batch_size(cls, value: int) -> int:
        if value > MAX_BATCH_SIZE:
            raise ValueError(
                f"Batch size can not be greater than {MAX_BATCH_SIZE}"
            )
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value: object) -> object:
        if value is None:
            return {}
        return value

    @field_validator("level", mode="before")
    @classmethod
    def _resolve_level(cls, value: object) -> int:
        if not isinstance(value, (int, str)):
            raise ValueError(f"Invalid log level: {value!r}")
        return get_level_priority(value)

    @property
    def retention_days(self) -> int:
        """Retention policy in days; 0 means no policy is applied."""
        return self.retention or 0


def parse_handler_config(**kwargs: object) -> HandlerConfig:
    """Validate handler arguments, raising ``ConfigurationError`` on failure."""
    try:
        return HandlerConfig(**kwargs)  # type: ignore[arg-type]
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid handler configuration: {exc}",
            cause=exc,
        ) from exc


class CoreSettings(BaseModel):
    """Process-wide switches."""

    internal_logging_enabled: bool = Field(
        default=False,
        description="Emit DEBUG/WARN diagnostics for internal errors to stderr",
    )
    enable_metrics: bool = Field(
        default=False,
        description="Enable Prometheus-compatible metrics",
    )


class CloudWatchSettings(BaseModel):
    """Target group/stream and shipping limits."""

    group: str = Field(default="/logship/default", description="Log group name")
    stream: str = Field(default="default", description="Log stream name")
    region: str | None = Field(
        default=None,
        description="AWS region; falls back to the boto3 default chain",
    )
    retention_days: int | None = Field(
        default=14,
        ge=0,
        description="Retention policy applied on group creation; 0 disables",
    )
    batch_size: int = Field(
        default=MAX_BATCH_SIZE,
        ge=1,
        le=MAX_BATCH_SIZE,
        description="Events per submission before a flush is triggered",
    )
    tags: dict[str, str] = Field(
        default_factory=dict, description="Tags applied on group creation"
    )
    level: str = Field(default="DEBUG", description="Minimum record level")
    bubble: bool = Field(
        default=True,
        description="Let records propagate to ancestor loggers' handlers",
    )
    create_group: bool = Field(
        default=True, description="Create the log group when missing"
    )


class Settings(BaseSettings):
    """Top-level configuration model with versioning and grouped settings."""

    schema_version: str = Field(default=LATEST_CONFIG_SCHEMA_VERSION)

    core: CoreSettings = Field(default_factory=CoreSettings)
    cloudwatch: CloudWatchSettings = Field(default_factory=CloudWatchSettings)

    model_config = SettingsConfigDict(
        env_prefix="LOGSHIP_",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )


__all__ = [
    "CloudWatchSettings",
    "CoreSettings",
    "HandlerConfig",
    "MAX_BATCH_SIZE",
    "Settings",
    "parse_handler_config",
]
