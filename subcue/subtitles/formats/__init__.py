"""Format parsers and the order in which the engine falls back through them."""

from __future__ import annotations

from typing import Dict, Tuple

from ..models import FormatTag
from .ass import parse_ass
from .base import FormatParser, tolerant_parser
from .bilingual import parse_bilingual
from .generic import parse_generic
from .srt import parse_srt
from .time_range import parse_time_range
from .vtt import parse_vtt

PARSERS: Dict[FormatTag, FormatParser] = {
    FormatTag.ASS: parse_ass,
    FormatTag.SRT: parse_srt,
    FormatTag.VTT: parse_vtt,
    FormatTag.BILINGUAL_VARIANT: parse_bilingual,
    FormatTag.TIME_RANGE: parse_time_range,
    FormatTag.GENERIC: parse_generic,
}

FALLBACK_ORDER: Tuple[FormatTag, ...] = (
    FormatTag.BILINGUAL_VARIANT,
    FormatTag.ASS,
    FormatTag.SRT,
    FormatTag.VTT,
    FormatTag.GENERIC,
)

__all__ = [
    "FALLBACK_ORDER",
    "PARSERS",
    "FormatParser",
    "parse_ass",
    "parse_bilingual",
    "parse_generic",
    "parse_srt",
    "parse_time_range",
    "parse_vtt",
    "tolerant_parser",
]
