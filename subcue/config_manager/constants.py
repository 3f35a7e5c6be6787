"""Shared constants for the configuration manager package."""
from __future__ import annotations

DEFAULT_MIN_CUE_DURATION_MS = 50
DEFAULT_FALLBACK_SLOT_MS = 5000
DEFAULT_FAILURE_CUE_DURATION_MS = 10000
DEFAULT_FAILURE_CUE_MESSAGE = (
    "⚠️ Subtitle parsing failed, but the file has content. "
    "Please check that the subtitle format is supported."
)
DEFAULT_INDEXED_LOOKUP_THRESHOLD = 100
DEFAULT_SNIFF_LINE_LIMIT = 50
DEFAULT_DISTRIBUTOR_MARKERS = ("-RARBG.ass", "RARBG", "Silicon.Valley.")
DEFAULT_LOG_LEVEL = "INFO"

__all__ = [
    "DEFAULT_MIN_CUE_DURATION_MS",
    "DEFAULT_FALLBACK_SLOT_MS",
    "DEFAULT_FAILURE_CUE_DURATION_MS",
    "DEFAULT_FAILURE_CUE_MESSAGE",
    "DEFAULT_INDEXED_LOOKUP_THRESHOLD",
    "DEFAULT_SNIFF_LINE_LIMIT",
    "DEFAULT_DISTRIBUTOR_MARKERS",
    "DEFAULT_LOG_LEVEL",
]
