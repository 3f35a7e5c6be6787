"""Structured JSON logging for the subtitle engine."""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, Iterator, Mapping, Optional, Union

LOGGER_NAME = "subcue"
DEFAULT_LOG_LEVEL = logging.INFO
_MAX_LOG_BYTES = 5 * 1024 * 1024
_LOG_BACKUPS = 5

_logger: Optional[logging.Logger] = None
_log_context: contextvars.ContextVar[Mapping[str, object]] = contextvars.ContextVar(
    "subcue_log_context", default={}
)

# Attributes every LogRecord carries; anything else arrived through ``extra``
# or the log context.
_RECORD_ATTRIBUTES = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JSONLogFormatter(logging.Formatter):
    """Render each record as one JSON object.

    Engine fields sit at the top level; any other ``extra`` value is nested
    under ``"extra"``.
    """

    STRUCTURED_FIELDS: tuple[str, ...] = (
        "event",
        "stage",
        "format",
        "cue_count",
        "duration_ms",
    )

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: Dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        extra: Dict[str, object] = {}
        for key, value in vars(record).items():
            if key in self.STRUCTURED_FIELDS:
                if value is not None:
                    payload[key] = value
            elif key not in _RECORD_ATTRIBUTES:
                extra[key] = value
        if extra:
            payload["extra"] = extra
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class LogContextFilter(logging.Filter):
    """Copy the active log context onto records without overriding explicit extras."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        for key, value in _log_context.get().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


def _attach_handler(logger: logging.Logger, handler: logging.Handler) -> None:
    handler.setFormatter(JSONLogFormatter())
    handler.addFilter(LogContextFilter())
    handler.setLevel(logger.level)
    logger.addHandler(handler)


def setup_logging(
    log_level: Union[int, str, None] = DEFAULT_LOG_LEVEL,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """Configure the ``subcue`` logger; safe to call again to change level or add a file."""
    global _logger

    if _logger is None:
        _logger = logging.getLogger(LOGGER_NAME)
        _logger.propagate = False
        _attach_handler(_logger, logging.StreamHandler())

    if log_file is not None and not any(
        isinstance(handler, RotatingFileHandler) for handler in _logger.handlers
    ):
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        _attach_handler(
            _logger,
            RotatingFileHandler(path, maxBytes=_MAX_LOG_BYTES, backupCount=_LOG_BACKUPS),
        )

    set_log_level(log_level)
    return _logger


def get_logger() -> logging.Logger:
    """Return the package logger, configuring it on first use."""
    if _logger is None:
        return setup_logging()
    return _logger


def resolve_log_level(value: Union[int, str, None]) -> int:
    """Translate a level name such as ``"debug"`` into its numeric value."""

    if isinstance(value, int):
        return value
    if not value:
        return DEFAULT_LOG_LEVEL
    resolved = logging.getLevelName(str(value).strip().upper())
    if isinstance(resolved, int):
        return resolved
    return DEFAULT_LOG_LEVEL


def set_log_level(level: Union[int, str, None]) -> int:
    """Apply ``level`` to the package logger and every handler it owns."""

    resolved = resolve_log_level(level)
    logger = get_logger()
    logger.setLevel(resolved)
    for handler in logger.handlers:
        handler.setLevel(resolved)
    return resolved


@contextlib.contextmanager
def log_context(**values: object) -> Iterator[None]:
    """Attach ``values`` to every record logged inside the block.

    ``None`` values are ignored and nested blocks merge over outer ones.
    """

    merged = dict(_log_context.get())
    merged.update({key: value for key, value in values.items() if value is not None})
    token = _log_context.set(merged)
    try:
        yield
    finally:
        _log_context.reset(token)


logger = get_logger()
