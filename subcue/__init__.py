"""Subtitle ingestion and cue lookup for the desktop player."""

from .subtitles import (
    NO_CUE,
    Cue,
    CueIndex,
    CueList,
    FormatTag,
    LoopJump,
    NavigationTarget,
    SubtitleSession,
    parse_subtitles,
    sniff_format,
)

__all__ = [
    "NO_CUE",
    "Cue",
    "CueIndex",
    "CueList",
    "FormatTag",
    "LoopJump",
    "NavigationTarget",
    "SubtitleSession",
    "parse_subtitles",
    "sniff_format",
]
