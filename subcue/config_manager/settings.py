"""Pydantic models and helper utilities for engine configuration values."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from subcue import logging_manager

from .constants import (
    DEFAULT_DISTRIBUTOR_MARKERS,
    DEFAULT_FAILURE_CUE_DURATION_MS,
    DEFAULT_FAILURE_CUE_MESSAGE,
    DEFAULT_FALLBACK_SLOT_MS,
    DEFAULT_INDEXED_LOOKUP_THRESHOLD,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MIN_CUE_DURATION_MS,
    DEFAULT_SNIFF_LINE_LIMIT,
)

logger = logging_manager.get_logger().getChild("config")


class EngineSettings(BaseModel):
    """Typed representation of the subtitle engine configuration."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    min_cue_duration_ms: int = DEFAULT_MIN_CUE_DURATION_MS
    fallback_slot_ms: int = DEFAULT_FALLBACK_SLOT_MS
    failure_cue_duration_ms: int = DEFAULT_FAILURE_CUE_DURATION_MS
    failure_cue_message: str = DEFAULT_FAILURE_CUE_MESSAGE
    indexed_lookup_threshold: int = DEFAULT_INDEXED_LOOKUP_THRESHOLD
    sniff_line_limit: int = DEFAULT_SNIFF_LINE_LIMIT
    distributor_markers: tuple[str, ...] = DEFAULT_DISTRIBUTOR_MARKERS
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Optional[str] = None

    @field_validator(
        "fallback_slot_ms",
        "failure_cue_duration_ms",
        "sniff_line_limit",
    )
    @classmethod
    def _require_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be a positive integer")
        return value

    @field_validator("min_cue_duration_ms", "indexed_lookup_threshold")
    @classmethod
    def _require_non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("must not be negative")
        return value

    @field_validator("failure_cue_message")
    @classmethod
    def _require_message(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("failure_cue_message must not be blank")
        return stripped

    @field_validator("distributor_markers")
    @classmethod
    def _drop_blank_markers(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(marker for marker in value if marker and marker.strip())

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        normalized = (value or DEFAULT_LOG_LEVEL).strip().upper()
        if not isinstance(logging.getLevelName(normalized), int):
            raise ValueError(f"unknown log level {value!r}")
        return normalized


class EnvironmentOverrides(BaseSettings):
    """Configuration overrides sourced from environment variables."""

    model_config = SettingsConfigDict(env_prefix="", extra="ignore")

    min_cue_duration_ms: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("SUBCUE_MIN_CUE_DURATION_MS")
    )
    fallback_slot_ms: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("SUBCUE_FALLBACK_SLOT_MS")
    )
    failure_cue_duration_ms: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("SUBCUE_FAILURE_CUE_DURATION_MS")
    )
    failure_cue_message: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("SUBCUE_FAILURE_CUE_MESSAGE")
    )
    indexed_lookup_threshold: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices(
            "SUBCUE_INDEXED_LOOKUP_THRESHOLD", "SUBCUE_LOOKUP_THRESHOLD"
        ),
    )
    sniff_line_limit: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("SUBCUE_SNIFF_LINE_LIMIT")
    )
    distributor_markers: Optional[list[str]] = Field(
        default=None, validation_alias=AliasChoices("SUBCUE_DISTRIBUTOR_MARKERS")
    )
    log_level: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("SUBCUE_LOG_LEVEL", "LOG_LEVEL")
    )
    log_file: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("SUBCUE_LOG_FILE")
    )


def load_environment_overrides() -> Dict[str, Any]:
    """Return configuration overrides sourced from environment variables."""

    try:
        overrides = EnvironmentOverrides()
    except ValidationError as exc:
        logger.warning(
            "Invalid environment configuration detected; using defaults.",
            extra={"event": "config.env.validation_error", "error": str(exc)},
        )
        return {}
    return overrides.model_dump(exclude_none=True)


def apply_settings_updates(
    settings: EngineSettings, updates: Dict[str, Any]
) -> EngineSettings:
    """Return a validated copy of ``settings`` updated with ``updates``.

    ``model_copy`` skips validation, so the merged payload is re-validated and
    invalid updates are logged and ignored.
    """

    if not updates:
        return settings
    payload = settings.model_dump()
    payload.update(updates)
    try:
        return EngineSettings.model_validate(payload)
    except ValidationError as exc:
        logger.warning(
            "Ignoring invalid engine settings overrides.",
            extra={"event": "config.overrides.validation_error", "error": str(exc)},
        )
        return settings


__all__ = [
    "EngineSettings",
    "EnvironmentOverrides",
    "apply_settings_updates",
    "load_environment_overrides",
]
