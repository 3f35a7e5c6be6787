"""Entry point that turns an unlabeled subtitle document into a :class:`CueList`."""

from __future__ import annotations

import time
from typing import Iterable, List, Optional, Tuple

from subcue import logging_manager as log_mgr
from subcue.config_manager import EngineSettings, get_settings

from .common import logger
from .formats import FALLBACK_ORDER, PARSERS
from .models import Cue, CueList, FormatTag
from .normalize import normalize_records
from .sniffing import sniff_format


def build_failure_cues(settings: Optional[EngineSettings] = None) -> CueList:
    """Return the one-cue list shown when a non-empty document could not be parsed."""

    resolved = settings or get_settings()
    cue = Cue(
        start_ms=0,
        end_ms=resolved.failure_cue_duration_ms,
        text=resolved.failure_cue_message,
        synthetic=True,
    )
    return CueList(cues=(cue,), source_format=FormatTag.UNKNOWN, parse_failed=True)


def run_parser(tag: FormatTag, content: str, settings: EngineSettings) -> Tuple[Cue, ...]:
    """Parse ``content`` with the parser registered for ``tag`` and normalize the result."""

    parser = PARSERS.get(tag)
    if parser is None:
        return ()
    records = parser(content, settings)
    cues = normalize_records(records, settings)
    logger.debug(
        "%s parser produced %d records and %d cues",
        tag.value,
        len(records),
        len(cues),
        extra={"event": "subtitles.parser.result", "format": tag.value, "cue_count": len(cues)},
    )
    return cues


def _fallback_candidates(tried: Iterable[FormatTag]) -> List[FormatTag]:
    skipped = set(tried)
    return [tag for tag in FALLBACK_ORDER if tag not in skipped]


def _parse(content: str, settings: EngineSettings) -> CueList:
    detected = sniff_format(content, settings)
    tried: List[FormatTag] = []
    if detected is FormatTag.UNKNOWN:
        logger.info(
            "Subtitle format not recognised; trying fallback parsers",
            extra={"event": "subtitles.sniff.unknown", "format": detected.value},
        )
    else:
        tried.append(detected)
        cues = run_parser(detected, content, settings)
        if cues:
            return CueList(cues=cues, source_format=detected)
        logger.info(
            "%s parser produced no cues; trying fallback parsers",
            detected.value,
            extra={"event": "subtitles.parser.empty", "format": detected.value},
        )

    for tag in _fallback_candidates(tried):
        cues = run_parser(tag, content, settings)
        if cues:
            logger.info(
                "Fallback parser %s recovered %d cues",
                tag.value,
                len(cues),
                extra={
                    "event": "subtitles.fallback.match",
                    "format": tag.value,
                    "cue_count": len(cues),
                },
            )
            return CueList(cues=cues, source_format=tag)

    logger.warning(
        "Every subtitle parser failed; emitting placeholder cue",
        extra={"event": "subtitles.parse.failed", "format": detected.value},
    )
    return build_failure_cues(settings)


def parse_subtitles(content: Optional[str], settings: Optional[EngineSettings] = None) -> CueList:
    """Sniff, parse and normalize ``content`` into an immutable :class:`CueList`.

    Empty, whitespace-only or BOM-only input yields an empty list. Any other
    input that no parser can read yields a single synthetic cue with
    ``parse_failed`` set.
    This function never raises for malformed input.
    """

    if not content or not content.lstrip("\ufeff").strip():
        logger.debug(
            "Empty subtitle document",
            extra={"event": "subtitles.parse.empty", "cue_count": 0},
        )
        return CueList.empty()

    resolved = settings or get_settings()
    started = time.perf_counter()
    with log_mgr.log_context(stage="subtitles.parse"):
        try:
            cue_list = _parse(content, resolved)
        except Exception:
            logger.error(
                "Unexpected failure while parsing subtitles",
                exc_info=True,
                extra={"event": "subtitles.parse.error"},
            )
            cue_list = build_failure_cues(resolved)
        duration_ms = round((time.perf_counter() - started) * 1000, 3)
        logger.info(
            "Parsed subtitles",
            extra={
                "event": "subtitles.parse.complete",
                "format": cue_list.source_format.value,
                "cue_count": len(cue_list),
                "duration_ms": duration_ms,
            },
        )
    return cue_list


__all__ = ["build_failure_cues", "parse_subtitles", "run_parser"]
