"""SubRip block parsing, shared with the WebVTT reader."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from subcue.config_manager import EngineSettings

from ..common import BARE_INTEGER_PATTERN, SRT_TIME_LINE_PATTERN
from ..models import FormatTag, IntermediateRecord
from ..text import decode_entities, join_lines, split_lines
from .base import tolerant_parser


class _BlockState(enum.Enum):
    EXPECT_INDEX = "expect_index"
    EXPECT_TIME = "expect_time"
    COLLECT_TEXT = "collect_text"


@dataclass(slots=True)
class _PendingBlock:
    start: Optional[str] = None
    end: Optional[str] = None
    lines: List[str] = field(default_factory=list)

    def to_record(self) -> Optional[IntermediateRecord]:
        if self.start is None or self.end is None or not self.lines:
            return None
        return IntermediateRecord(
            start_raw=self.start,
            end_raw=self.end,
            text_raw=join_lines(self.lines),
        )


def collect_timed_blocks(
    lines: Iterable[str],
    time_pattern: re.Pattern[str],
    *,
    allow_index: bool = True,
) -> List[IntermediateRecord]:
    """Run the index -> time -> text state machine over ``lines``.

    A blank line commits the pending block. Index lines are optional, and a
    time line met while collecting text starts a new block.
    """

    records: List[IntermediateRecord] = []
    state = _BlockState.EXPECT_INDEX
    pending = _PendingBlock()

    def commit() -> None:
        record = pending.to_record()
        if record is not None:
            records.append(record)

    for raw_line in lines:
        line = raw_line.strip()
        if not line:
            commit()
            pending = _PendingBlock()
            state = _BlockState.EXPECT_INDEX
            continue

        match = time_pattern.match(line)
        if state is _BlockState.COLLECT_TEXT:
            if match and pending.lines:
                # Without a blank separator the next block's index sits on the
                # line just before its time line.
                if (
                    allow_index
                    and len(pending.lines) > 1
                    and BARE_INTEGER_PATTERN.match(pending.lines[-1])
                ):
                    pending.lines.pop()
                commit()
                pending = _PendingBlock(start=match.group("start"), end=match.group("end"))
                continue
            if not match:
                pending.lines.append(decode_entities(line))
            continue

        if match:
            pending.start = match.group("start")
            pending.end = match.group("end")
            state = _BlockState.COLLECT_TEXT
        elif state is _BlockState.EXPECT_INDEX and allow_index and BARE_INTEGER_PATTERN.match(line):
            state = _BlockState.EXPECT_TIME

    commit()
    return records


@tolerant_parser(FormatTag.SRT.value)
def parse_srt(text: str, settings: EngineSettings) -> List[IntermediateRecord]:
    """Return SubRip records, tolerating missing indices and a missing final blank line."""

    return collect_timed_blocks(split_lines(text), SRT_TIME_LINE_PATTERN)


__all__ = ["collect_timed_blocks", "parse_srt"]
