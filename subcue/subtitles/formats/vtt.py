"""WebVTT cue parsing."""

from __future__ import annotations

from typing import List

from subcue.config_manager import EngineSettings

from ..common import VTT_TIME_LINE_PATTERN, WEBVTT_HEADER
from ..models import FormatTag, IntermediateRecord
from ..text import split_lines
from .base import tolerant_parser
from .srt import collect_timed_blocks


@tolerant_parser(FormatTag.VTT.value)
def parse_vtt(text: str, settings: EngineSettings) -> List[IntermediateRecord]:
    """Return WebVTT records; cue identifiers and NOTE blocks never reach a time line."""

    lines = split_lines(text)
    for position, line in enumerate(lines):
        if WEBVTT_HEADER.match(line.strip()):
            lines = lines[position + 1 :]
            break
    return collect_timed_blocks(lines, VTT_TIME_LINE_PATTERN, allow_index=False)


__all__ = ["parse_vtt"]
