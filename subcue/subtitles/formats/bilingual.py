"""Distributor-style bilingual subtitles (CJK and Latin lines under one timing)."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from subcue.config_manager import EngineSettings

from ..common import BILINGUAL_TIME_PATTERNS, LINE_BREAK, LOOSE_TIME_PAIR_PATTERN, logger
from ..models import FormatTag, IntermediateRecord
from ..text import has_cjk, has_latin, join_lines, order_bilingual_pair, split_lines
from .base import slot_records, tolerant_parser

_HEADER_FRAGMENTS = ("Format:", "Style:", "PlayResX:")


def match_time_pair(line: str) -> Optional[Tuple[str, str]]:
    for pattern in BILINGUAL_TIME_PATTERNS:
        match = pattern.search(line)
        if match:
            return match.group(1), match.group(2)
    return None


def _collect_text_block(lines: Sequence[str], start: int) -> List[str]:
    block: List[str] = []
    for line in lines[start:]:
        if not line or match_time_pair(line):
            break
        block.append(line)
    return block


def _compose_text(block: Sequence[str]) -> str:
    if len(block) == 2:
        return order_bilingual_pair(block[0], block[1])
    return join_lines(block)


@tolerant_parser(FormatTag.BILINGUAL_VARIANT.value)
def parse_bilingual(text: str, settings: EngineSettings) -> List[IntermediateRecord]:
    """Return records for timing lines followed by one or two language lines.

    Documents without a single timing line are split into a CJK set and a
    Latin set and laid out on fixed slots as a last resort.
    """

    lines = [line.strip() for line in split_lines(text)]
    records: List[IntermediateRecord] = []
    pairs_found = 0
    for position, line in enumerate(lines):
        if not line:
            continue
        pair = match_time_pair(line)
        if pair is None:
            continue
        pairs_found += 1
        block = _collect_text_block(lines, position + 1)
        if block:
            records.append(IntermediateRecord(pair[0], pair[1], _compose_text(block)))

    if records:
        return records
    if pairs_found:
        return _parse_loose_pairs(lines)
    return _pair_language_lines(lines, settings)


def _parse_loose_pairs(lines: Sequence[str]) -> List[IntermediateRecord]:
    """Accept any two ``H:MM:SS`` tokens on a line, followed directly by text."""

    records: List[IntermediateRecord] = []
    for position, line in enumerate(lines):
        match = LOOSE_TIME_PAIR_PATTERN.search(line)
        if not match:
            continue
        block: List[str] = []
        for candidate in lines[position + 1 :]:
            if not candidate or LOOSE_TIME_PAIR_PATTERN.search(candidate):
                break
            block.append(candidate)
        if block:
            records.append(IntermediateRecord(match.group(1), match.group(2), join_lines(block)))
    logger.debug(
        "Loose bilingual pass produced %d records",
        len(records),
        extra={"event": "subtitles.bilingual.loose", "cue_count": len(records)},
    )
    return records


def _pair_language_lines(
    lines: Sequence[str], settings: EngineSettings
) -> List[IntermediateRecord]:
    cjk_lines: List[str] = []
    latin_lines: List[str] = []
    for line in lines:
        if not line or line.startswith("["):
            continue
        if any(fragment in line for fragment in _HEADER_FRAGMENTS):
            continue
        if any(marker in line for marker in settings.distributor_markers):
            continue
        if has_cjk(line):
            cjk_lines.append(line)
        elif has_latin(line):
            latin_lines.append(line)

    if cjk_lines and len(cjk_lines) == len(latin_lines):
        texts = [
            f"{cjk}{LINE_BREAK}{latin}" for cjk, latin in zip(cjk_lines, latin_lines)
        ]
    else:
        texts = cjk_lines or latin_lines
    return slot_records(texts, settings.fallback_slot_ms)


__all__ = ["match_time_pair", "parse_bilingual"]
