"""Timestamp conversion between subtitle notations, milliseconds and seconds."""

from __future__ import annotations

import math
import re

from .errors import RecordMalformedError

_TIMESTAMP_PATTERN = re.compile(
    r"^\s*(?:(?P<hours>\d+):)?(?P<minutes>\d+):(?P<seconds>\d+)(?:[,.](?P<fraction>\d*))?\s*$"
)


def timestamp_to_ms(value: str) -> int:
    """Convert ``H:MM:SS[,.]fff`` (or ``MM:SS.fff``) into integer milliseconds.

    The fractional part is read as a decimal fraction of a second, so ASS
    centiseconds (``.50``) and SRT milliseconds (``,500``) both yield 500.
    Digits beyond the third are truncated and a missing fraction counts as 0.
    """

    if not isinstance(value, str):
        raise RecordMalformedError(f"Invalid timestamp: {value!r}")
    match = _TIMESTAMP_PATTERN.match(value)
    if not match:
        raise RecordMalformedError(f"Invalid timestamp: {value!r}")
    hours = int(match.group("hours") or 0)
    minutes = int(match.group("minutes"))
    seconds = int(match.group("seconds"))
    fraction = (match.group("fraction") or "")[:3].ljust(3, "0")
    return ((hours * 3600 + minutes * 60 + seconds) * 1000) + int(fraction)


def seconds_to_ms(value: float) -> int:
    """Convert a playback clock position in seconds into whole milliseconds."""

    if value is None or not math.isfinite(value) or value < 0:
        return 0
    return int(round(value * 1000))


def ms_to_seconds(value: int) -> float:
    return value / 1000.0


__all__ = ["ms_to_seconds", "seconds_to_ms", "timestamp_to_ms"]
