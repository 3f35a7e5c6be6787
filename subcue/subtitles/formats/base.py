"""Contract shared by every format parser."""

from __future__ import annotations

import functools
from typing import Callable, List, Optional, Sequence

from subcue.config_manager import EngineSettings, get_settings

from ..common import logger
from ..models import IntermediateRecord

FormatParser = Callable[..., List[IntermediateRecord]]


def tolerant_parser(name: str) -> Callable[[FormatParser], FormatParser]:
    """Wrap a parser so internal failures degrade to an empty result.

    The wrapped callable takes ``(text, settings=None)`` and resolves missing
    settings from the active configuration.
    """

    def decorator(func: FormatParser) -> FormatParser:
        @functools.wraps(func)
        def wrapper(
            text: str, settings: Optional[EngineSettings] = None
        ) -> List[IntermediateRecord]:
            if not text:
                return []
            try:
                return func(text, settings or get_settings())
            except Exception:
                logger.warning(
                    "%s parser failed; treating document as unparsed",
                    name,
                    exc_info=True,
                    extra={"event": "subtitles.parser.error", "format": name},
                )
                return []

        wrapper.parser_name = name  # type: ignore[attr-defined]
        return wrapper

    return decorator


def slot_records(texts: Sequence[str], slot_ms: int) -> List[IntermediateRecord]:
    """Lay ``texts`` out back to back on fixed slots starting at zero."""

    return [
        IntermediateRecord(
            start_raw=_format_slot(position * slot_ms),
            end_raw=_format_slot((position + 1) * slot_ms),
            text_raw=text,
        )
        for position, text in enumerate(texts)
    ]


def _format_slot(total_ms: int) -> str:
    hours, remainder = divmod(total_ms, 3_600_000)
    minutes, remainder = divmod(remainder, 60_000)
    seconds, milliseconds = divmod(remainder, 1000)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{milliseconds:03d}"


__all__ = ["FormatParser", "slot_records", "tolerant_parser"]
