"""Typed containers for subtitle ingestion and lookup."""

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple, Union, overload

from .common import LINE_BREAK


class FormatTag(str, enum.Enum):
    """Subtitle grammars recognised by the sniffer."""

    ASS = "ass"
    SRT = "srt"
    VTT = "vtt"
    BILINGUAL_VARIANT = "bilingual_variant"
    TIME_RANGE = "time_range"
    GENERIC = "generic"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class IntermediateRecord:
    """Raw timing and text pulled out of a document by one of the format parsers."""

    start_raw: str
    end_raw: str
    text_raw: str


@dataclass(frozen=True, slots=True)
class Cue:
    """Normalized representation of a subtitle cue.

    ``synthetic`` marks the placeholder emitted when every parser failed; callers
    must check it instead of inspecting ``text``.
    """

    start_ms: int
    end_ms: int
    text: str
    synthetic: bool = False

    def __post_init__(self) -> None:
        if self.start_ms < 0:
            raise ValueError("start_ms must be non-negative")
        if self.end_ms <= self.start_ms:
            raise ValueError("end_ms must be greater than start_ms")

    @property
    def duration_ms(self) -> int:
        return self.end_ms - self.start_ms

    @property
    def start_seconds(self) -> float:
        return self.start_ms / 1000.0

    @property
    def end_seconds(self) -> float:
        return self.end_ms / 1000.0

    def contains(self, position_ms: float) -> bool:
        return self.start_ms <= position_ms <= self.end_ms

    def lines(self) -> List[str]:
        return self.text.split(LINE_BREAK)

    def to_dict(self) -> Dict[str, object]:
        payload: Dict[str, object] = {
            "start_ms": self.start_ms,
            "end_ms": self.end_ms,
            "text": self.text,
        }
        if self.synthetic:
            payload["synthetic"] = True
        return payload


@dataclass(frozen=True)
class CueList(Sequence):
    """Immutable, start-ordered sequence of cues built from one document.

    ``start_column`` and ``running_max_end`` are derived once so lookups can
    binary-search without touching the cue objects.
    """

    cues: Tuple[Cue, ...] = ()
    source_format: FormatTag = FormatTag.UNKNOWN
    parse_failed: bool = False
    start_column: Tuple[int, ...] = field(init=False, repr=False, compare=False)
    running_max_end: Tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        cues = tuple(self.cues)
        starts = tuple(cue.start_ms for cue in cues)
        if any(later < earlier for earlier, later in zip(starts, starts[1:])):
            raise ValueError("cues must be sorted by start_ms")
        running: List[int] = []
        highest = -1
        for cue in cues:
            highest = max(highest, cue.end_ms)
            running.append(highest)
        object.__setattr__(self, "cues", cues)
        object.__setattr__(self, "start_column", starts)
        object.__setattr__(self, "running_max_end", tuple(running))

    @classmethod
    def empty(cls) -> "CueList":
        return cls()

    @overload
    def __getitem__(self, index: int) -> Cue: ...

    @overload
    def __getitem__(self, index: slice) -> Tuple[Cue, ...]: ...

    def __getitem__(self, index: Union[int, slice]) -> Union[Cue, Tuple[Cue, ...]]:
        return self.cues[index]

    def __len__(self) -> int:
        return len(self.cues)

    def __iter__(self) -> Iterator[Cue]:
        return iter(self.cues)

    def to_dicts(self) -> List[Dict[str, object]]:
        return [cue.to_dict() for cue in self.cues]


__all__ = ["Cue", "CueList", "FormatTag", "IntermediateRecord"]
