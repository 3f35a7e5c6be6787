"""Turn parser records into validated, start-ordered cues."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from subcue.config_manager import EngineSettings, get_settings

from .common import logger
from .models import Cue, IntermediateRecord
from .text import clean_markup
from .timing import timestamp_to_ms


def normalize_record(record: IntermediateRecord, settings: EngineSettings) -> Optional[Cue]:
    """Return a :class:`Cue` for ``record`` or ``None`` when it fails validation.

    Raises :class:`RecordMalformedError` when a timestamp cannot be read.
    """

    start_ms = timestamp_to_ms(record.start_raw)
    end_ms = timestamp_to_ms(record.end_raw)
    if start_ms >= end_ms:
        return None
    if end_ms - start_ms < settings.min_cue_duration_ms:
        return None
    text = clean_markup(record.text_raw)
    if not text:
        return None
    return Cue(start_ms=start_ms, end_ms=end_ms, text=text)


def normalize_records(
    records: Iterable[IntermediateRecord],
    settings: Optional[EngineSettings] = None,
) -> Tuple[Cue, ...]:
    """Convert, filter and stably sort ``records`` by start time."""

    resolved = settings or get_settings()
    cues: List[Cue] = []
    skipped = 0
    for record in records:
        try:
            cue = normalize_record(record, resolved)
        except Exception as exc:
            skipped += 1
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    "Skipping malformed record: %s",
                    exc,
                    extra={
                        "event": "subtitles.record.malformed",
                        "record": {
                            "start": record.start_raw,
                            "end": record.end_raw,
                            "text": str(record.text_raw)[:80],
                        },
                    },
                )
            continue
        if cue is None:
            skipped += 1
            continue
        cues.append(cue)

    if skipped:
        logger.debug(
            "Dropped %d invalid records during normalization",
            skipped,
            extra={"event": "subtitles.normalize.dropped", "cue_count": len(cues)},
        )
    # ``sorted`` is stable, so cues sharing a start keep their emission order.
    return tuple(sorted(cues, key=lambda cue: cue.start_ms))


__all__ = ["normalize_record", "normalize_records"]
