from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from subcue import logging_manager
from subcue.config_manager import (
    DEFAULT_FAILURE_CUE_MESSAGE,
    EngineSettings,
    apply_settings_updates,
    load_environment_overrides,
)
from subcue.config_manager import loader as cfg_loader


@pytest.fixture(autouse=True)
def _restore_log_level():
    yield
    logging_manager.set_log_level(logging.INFO)


def test_settings_provide_engine_defaults(monkeypatch):
    monkeypatch.delenv("SUBCUE_MIN_CUE_DURATION_MS", raising=False)
    monkeypatch.delenv("SUBCUE_INDEXED_LOOKUP_THRESHOLD", raising=False)

    settings = cfg_loader.get_settings()

    assert settings.min_cue_duration_ms == 50
    assert settings.fallback_slot_ms == 5000
    assert settings.failure_cue_duration_ms == 10000
    assert settings.indexed_lookup_threshold == 100
    assert settings.failure_cue_message == DEFAULT_FAILURE_CUE_MESSAGE
    assert "RARBG" in settings.distributor_markers


def test_settings_respect_environment(monkeypatch):
    monkeypatch.setenv("SUBCUE_MIN_CUE_DURATION_MS", "120")
    monkeypatch.setenv("SUBCUE_LOOKUP_THRESHOLD", "10")
    monkeypatch.setenv("SUBCUE_DISTRIBUTOR_MARKERS", '["ACME", " "]')
    monkeypatch.setenv("SUBCUE_LOG_LEVEL", "debug")

    settings = cfg_loader.get_settings()

    assert settings.min_cue_duration_ms == 120
    assert settings.indexed_lookup_threshold == 10
    assert settings.distributor_markers == ("ACME",)
    assert settings.log_level == "DEBUG"
    assert logging_manager.get_logger().level == logging.DEBUG


def test_settings_are_cached_until_reset(monkeypatch):
    first = cfg_loader.get_settings()
    monkeypatch.setenv("SUBCUE_FALLBACK_SLOT_MS", "1000")

    assert cfg_loader.get_settings() is first

    cfg_loader.reset_settings()
    assert cfg_loader.get_settings().fallback_slot_ms == 1000


def test_invalid_environment_falls_back_to_defaults(monkeypatch):
    monkeypatch.setenv("SUBCUE_FALLBACK_SLOT_MS", "not-a-number")

    assert load_environment_overrides() == {}
    assert cfg_loader.get_settings().fallback_slot_ms == 5000


def test_apply_settings_updates_validates_payload():
    settings = EngineSettings()

    updated = apply_settings_updates(settings, {"fallback_slot_ms": 2500})
    rejected = apply_settings_updates(settings, {"fallback_slot_ms": -1})

    assert updated.fallback_slot_ms == 2500
    assert rejected is settings


@pytest.mark.parametrize(
    "payload",
    [
        {"fallback_slot_ms": 0},
        {"min_cue_duration_ms": -5},
        {"failure_cue_message": "   "},
        {"log_level": "chatty"},
    ],
)
def test_engine_settings_reject_invalid_values(payload):
    with pytest.raises(ValidationError):
        EngineSettings(**payload)


def test_engine_settings_are_immutable():
    settings = EngineSettings()

    with pytest.raises(ValidationError):
        settings.fallback_slot_ms = 10
