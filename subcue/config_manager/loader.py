"""Resolution of the active engine settings."""
from __future__ import annotations

from typing import Optional

from subcue import logging_manager

from .settings import EngineSettings, apply_settings_updates, load_environment_overrides

_ACTIVE_SETTINGS: Optional[EngineSettings] = None


def get_settings() -> EngineSettings:
    """Return the currently loaded :class:`EngineSettings` instance."""

    global _ACTIVE_SETTINGS
    if _ACTIVE_SETTINGS is None:
        settings = apply_settings_updates(EngineSettings(), load_environment_overrides())
        logging_manager.setup_logging(
            log_level=settings.log_level,
            log_file=settings.log_file,
        )
        _ACTIVE_SETTINGS = settings
    return _ACTIVE_SETTINGS


def reset_settings() -> None:
    """Forget the cached settings so the next lookup re-reads the environment."""

    global _ACTIVE_SETTINGS
    _ACTIVE_SETTINGS = None


__all__ = ["get_settings", "reset_settings"]
