"""Common subtitle processing exceptions."""

from __future__ import annotations


class SubtitleProcessingError(RuntimeError):
    """Base class for subtitle engine failures."""


class RecordMalformedError(SubtitleProcessingError, ValueError):
    """Raised when a single record fails timestamp or text extraction."""


class LoopUnavailableError(SubtitleProcessingError):
    """Raised when loop playback is requested without an active cue."""


__all__ = ["LoopUnavailableError", "RecordMalformedError", "SubtitleProcessingError"]
