"""ASS/SSA dialogue extraction."""

from __future__ import annotations

from typing import List, Optional, Sequence

from subcue.config_manager import EngineSettings

from ..common import ASS_TIMESTAMP_PAIR_PATTERN, ASS_TIMESTAMP_PATTERN, logger
from ..errors import RecordMalformedError
from ..models import FormatTag, IntermediateRecord
from ..text import split_lines, strip_ass_overrides
from .base import tolerant_parser

_DIALOGUE_PREFIX = "Dialogue:"
_FORMAT_PREFIX = "Format:"
_EVENTS_HEADER = "[events]"

# ASSv4+ positional layout:
# Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text
_POSITIONAL_START = 1
_POSITIONAL_END = 2
_POSITIONAL_TEXT = 9


@tolerant_parser(FormatTag.ASS.value)
def parse_ass(text: str, settings: EngineSettings) -> List[IntermediateRecord]:
    """Return dialogue records from an ASS/SSA document.

    Without an ``[Events]`` header the parser still reads any ``Dialogue:``
    lines it can find. When the column-based pass yields nothing, every
    dialogue line is retried by pulling out its first two timestamps.
    """

    lines = [line.strip() for line in split_lines(text)]
    has_events_section = any(line.lower() == _EVENTS_HEADER for line in lines)
    dialogue_lines = sum(1 for line in lines if line.startswith(_DIALOGUE_PREFIX))
    if not has_events_section and not dialogue_lines:
        return []

    records: List[IntermediateRecord] = []
    in_events = not has_events_section
    columns: Optional[List[str]] = None
    for number, line in enumerate(lines, start=1):
        if line.startswith("[") and line.endswith("]"):
            if has_events_section:
                in_events = line.lower() == _EVENTS_HEADER
            continue
        if not in_events:
            continue
        if line.startswith(_FORMAT_PREFIX):
            columns = [part.strip().lower() for part in line[len(_FORMAT_PREFIX):].split(",")]
            continue
        if not line.startswith(_DIALOGUE_PREFIX):
            continue
        payload = line[len(_DIALOGUE_PREFIX):]
        try:
            if columns:
                record = _record_from_columns(payload.split(","), columns)
            else:
                record = _record_from_positions(payload.split(","), line)
        except RecordMalformedError as exc:
            logger.debug(
                "Skipping malformed dialogue line %d: %s",
                number,
                exc,
                extra={"event": "subtitles.record.malformed", "format": FormatTag.ASS.value},
            )
            continue
        records.append(record)

    if records or not dialogue_lines:
        return records

    logger.info(
        "Column-based ASS pass found no dialogue; retrying with timestamp extraction",
        extra={"event": "subtitles.ass.relaxed", "format": FormatTag.ASS.value},
    )
    relaxed: List[IntermediateRecord] = []
    for line in lines:
        if line.startswith(_DIALOGUE_PREFIX):
            record = extract_dialogue_by_timestamps(line)
            if record is not None:
                relaxed.append(record)
    return relaxed


def _record_from_columns(parts: Sequence[str], columns: Sequence[str]) -> IntermediateRecord:
    start_index = _column_index(columns, "start", _POSITIONAL_START)
    end_index = _column_index(columns, "end", _POSITIONAL_END)
    if "text" in columns:
        text_index = columns.index("text")
    else:
        text_index = min(_POSITIONAL_TEXT, len(parts) - 1)
    if max(start_index, end_index, text_index) >= len(parts):
        raise RecordMalformedError(
            f"dialogue has {len(parts)} fields but the format expects {len(columns)}"
        )
    return _build_record(
        parts[start_index],
        parts[end_index],
        ",".join(parts[text_index:]),
    )


def _record_from_positions(parts: Sequence[str], line: str) -> IntermediateRecord:
    if len(parts) > _POSITIONAL_END:
        if len(parts) > _POSITIONAL_TEXT:
            dialogue = ",".join(parts[_POSITIONAL_TEXT:])
        else:
            dialogue = parts[-1]
        return _build_record(parts[_POSITIONAL_START], parts[_POSITIONAL_END], dialogue)

    match = ASS_TIMESTAMP_PAIR_PATTERN.search(line)
    if not match:
        raise RecordMalformedError("dialogue line carries no timestamp pair")
    return _build_record(match.group(1), match.group(2), line[match.end():].lstrip(", "))


def _column_index(columns: Sequence[str], name: str, default: int) -> int:
    if name in columns:
        return columns.index(name)
    return default


def _build_record(start: str, end: str, dialogue: str) -> IntermediateRecord:
    start, end = start.strip(), end.strip()
    if not ASS_TIMESTAMP_PATTERN.fullmatch(start) or not ASS_TIMESTAMP_PATTERN.fullmatch(end):
        raise RecordMalformedError(f"unexpected timing fields {start!r} / {end!r}")
    return IntermediateRecord(
        start_raw=start,
        end_raw=end,
        text_raw=strip_ass_overrides(dialogue.strip()),
    )


def extract_dialogue_by_timestamps(line: str) -> Optional[IntermediateRecord]:
    """Pull the first two ``H:MM:SS.cc`` tokens and the text after the second one."""

    tokens = list(ASS_TIMESTAMP_PATTERN.finditer(line))
    if len(tokens) < 2:
        return None
    dialogue = line[tokens[1].end():].lstrip(", ").strip()
    if not dialogue:
        return None
    return IntermediateRecord(
        start_raw=tokens[0].group(0),
        end_raw=tokens[1].group(0),
        text_raw=strip_ass_overrides(dialogue),
    )


__all__ = ["extract_dialogue_by_timestamps", "parse_ass"]
