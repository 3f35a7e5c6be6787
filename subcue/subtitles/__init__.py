"""Subtitle ingestion, normalization and cue lookup."""

from .common import LINE_BREAK, NO_CUE
from .errors import LoopUnavailableError, RecordMalformedError, SubtitleProcessingError
from .index import CueIndex
from .models import Cue, CueList, FormatTag, IntermediateRecord
from .normalize import normalize_records
from .processing import build_failure_cues, parse_subtitles
from .session import LoopJump, NavigationTarget, SubtitleSession
from .sniffing import sniff_format
from .timing import seconds_to_ms, timestamp_to_ms

__all__ = [
    "LINE_BREAK",
    "NO_CUE",
    "Cue",
    "CueIndex",
    "CueList",
    "FormatTag",
    "IntermediateRecord",
    "LoopJump",
    "LoopUnavailableError",
    "NavigationTarget",
    "RecordMalformedError",
    "SubtitleProcessingError",
    "SubtitleSession",
    "build_failure_cues",
    "normalize_records",
    "parse_subtitles",
    "seconds_to_ms",
    "sniff_format",
    "timestamp_to_ms",
]
