"""Format sniffing: classify an unlabeled subtitle document.

Structural markers are checked before timestamp shapes because ASS dialogue
lines also contain colons and commas that would otherwise look like SRT.
"""

from __future__ import annotations

import re
from typing import Callable, List, Optional, Sequence, Tuple

from subcue.config_manager import EngineSettings, get_settings

from .common import (
    ANY_TIMESTAMP_PATTERN,
    SRT_SNIFF_PATTERNS,
    TIME_RANGE_PATTERN,
    logger,
)
from .models import FormatTag
from .text import is_mixed_script_line, split_lines

SniffPredicate = Callable[[str, Sequence[str], EngineSettings], bool]

_ASS_MARKERS = ("[Script Info]", "Dialogue:", "[Events]", "Style:")
_LANGUAGE_FIELD_PATTERN = re.compile(r"^\s*Language:\s*\S", re.MULTILINE)


def looks_like_ass(text: str, lines: Sequence[str], settings: EngineSettings) -> bool:
    return any(marker in text for marker in _ASS_MARKERS)


def looks_like_bilingual_variant(
    text: str, lines: Sequence[str], settings: EngineSettings
) -> bool:
    if any(marker in text for marker in settings.distributor_markers):
        return True
    if "PlayResX:" in text:
        return True
    return bool(_LANGUAGE_FIELD_PATTERN.search(text))


def looks_like_srt(text: str, lines: Sequence[str], settings: EngineSettings) -> bool:
    for line in lines[: settings.sniff_line_limit]:
        stripped = line.strip()
        if any(pattern.search(stripped) for pattern in SRT_SNIFF_PATTERNS):
            return True
    return False


def looks_like_vtt(text: str, lines: Sequence[str], settings: EngineSettings) -> bool:
    return "WEBVTT" in text


def looks_like_time_range(text: str, lines: Sequence[str], settings: EngineSettings) -> bool:
    return bool(TIME_RANGE_PATTERN.search(text))


def looks_like_generic(text: str, lines: Sequence[str], settings: EngineSettings) -> bool:
    if ANY_TIMESTAMP_PATTERN.search(text):
        return False
    return any(is_mixed_script_line(line) for line in lines)


SNIFF_RULES: Tuple[Tuple[FormatTag, SniffPredicate], ...] = (
    (FormatTag.ASS, looks_like_ass),
    (FormatTag.BILINGUAL_VARIANT, looks_like_bilingual_variant),
    (FormatTag.SRT, looks_like_srt),
    (FormatTag.VTT, looks_like_vtt),
    (FormatTag.TIME_RANGE, looks_like_time_range),
    (FormatTag.GENERIC, looks_like_generic),
)


def sniff_format(text: str, settings: Optional[EngineSettings] = None) -> FormatTag:
    """Return the first :class:`FormatTag` whose predicate accepts ``text``."""

    if not text or not text.lstrip("\ufeff").strip():
        return FormatTag.UNKNOWN
    resolved = settings or get_settings()
    lines: List[str] = split_lines(text)
    for tag, predicate in SNIFF_RULES:
        if predicate(text, lines, resolved):
            logger.debug(
                "Sniffed subtitle format %s",
                tag.value,
                extra={"event": "subtitles.sniff.match", "format": tag.value},
            )
            return tag
    return FormatTag.UNKNOWN


__all__ = [
    "SNIFF_RULES",
    "SniffPredicate",
    "looks_like_ass",
    "looks_like_bilingual_variant",
    "looks_like_generic",
    "looks_like_srt",
    "looks_like_time_range",
    "looks_like_vtt",
    "sniff_format",
]
