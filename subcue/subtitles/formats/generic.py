"""Last-resort readers for documents no other grammar accepts."""

from __future__ import annotations

from typing import List

from subcue.config_manager import EngineSettings

from ..common import WEBVTT_HEADER
from ..models import FormatTag, IntermediateRecord
from ..text import split_lines
from .ass import extract_dialogue_by_timestamps
from .base import slot_records, tolerant_parser


@tolerant_parser(FormatTag.GENERIC.value)
def parse_generic(text: str, settings: EngineSettings) -> List[IntermediateRecord]:
    """Salvage ``Dialogue:`` lines, or else give every text line a fixed slot.

    Any document with at least one line that is neither a ``[section]``
    header nor a ``WEBVTT`` header yields at least one record.
    """

    lines = [line.strip() for line in split_lines(text)]
    if "Dialogue:" in text:
        records = [
            record
            for record in (
                extract_dialogue_by_timestamps(line) for line in lines if "Dialogue:" in line
            )
            if record is not None
        ]
        if records:
            return records

    texts = [
        line
        for line in lines
        if line and not line.startswith("[") and not WEBVTT_HEADER.match(line)
    ]
    return slot_records(texts, settings.fallback_slot_ms)


__all__ = ["parse_generic"]
