"""Configuration management for the subtitle engine."""
from __future__ import annotations

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
from .loader import get_settings, reset_settings
from .settings import (
    EngineSettings,
    EnvironmentOverrides,
    apply_settings_updates,
    load_environment_overrides,
)

__all__ = [
    "DEFAULT_DISTRIBUTOR_MARKERS",
    "DEFAULT_FAILURE_CUE_DURATION_MS",
    "DEFAULT_FAILURE_CUE_MESSAGE",
    "DEFAULT_FALLBACK_SLOT_MS",
    "DEFAULT_INDEXED_LOOKUP_THRESHOLD",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_MIN_CUE_DURATION_MS",
    "DEFAULT_SNIFF_LINE_LIMIT",
    "EngineSettings",
    "EnvironmentOverrides",
    "apply_settings_updates",
    "get_settings",
    "load_environment_overrides",
    "reset_settings",
]
