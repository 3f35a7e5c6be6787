"""``HH:MM:SS - HH:MM:SS`` time-range transcripts."""

from __future__ import annotations

from typing import List, Sequence

from subcue.config_manager import EngineSettings

from ..common import TIME_RANGE_PATTERN, logger
from ..models import FormatTag, IntermediateRecord
from ..text import join_lines, split_lines
from .base import tolerant_parser

_LEADING_SEPARATORS = ":-|, \t"


@tolerant_parser(FormatTag.TIME_RANGE.value)
def parse_time_range(text: str, settings: EngineSettings) -> List[IntermediateRecord]:
    """Return records for lines carrying a time range.

    Text on the same line wins; otherwise the following lines up to the next
    range or blank line are used. A document whose ranges never carry text is
    paired positionally with its remaining text lines.
    """

    lines = [line.strip() for line in split_lines(text)]
    records: List[IntermediateRecord] = []
    for position, line in enumerate(lines):
        if not line:
            continue
        match = TIME_RANGE_PATTERN.search(line)
        if not match:
            continue
        dialogue = line[match.end():].lstrip(_LEADING_SEPARATORS).strip()
        if not dialogue:
            block: List[str] = []
            for candidate in lines[position + 1 :]:
                if not candidate or TIME_RANGE_PATTERN.search(candidate):
                    break
                block.append(candidate)
            dialogue = join_lines(block)
        if dialogue:
            records.append(IntermediateRecord(match.group(1), match.group(2), dialogue))
        else:
            logger.debug(
                "Time range %s - %s has no text",
                match.group(1),
                match.group(2),
                extra={"event": "subtitles.record.empty", "format": FormatTag.TIME_RANGE.value},
            )

    if records:
        return records
    return _pair_ranges_with_text(lines, settings)


def _pair_ranges_with_text(
    lines: Sequence[str], settings: EngineSettings
) -> List[IntermediateRecord]:
    ranges: List[tuple[str, str]] = []
    texts: List[str] = []
    for line in lines:
        if not line:
            continue
        match = TIME_RANGE_PATTERN.search(line)
        if match:
            ranges.append((match.group(1), match.group(2)))
        elif line.startswith("[") or "Format:" in line:
            continue
        elif any(marker in line for marker in settings.distributor_markers):
            continue
        else:
            texts.append(line)
    return [
        IntermediateRecord(start, end, dialogue)
        for (start, end), dialogue in zip(ranges, texts)
    ]


__all__ = ["parse_time_range"]
