import textwrap

import pytest

from subcue.config_manager import EngineSettings
from subcue.config_manager import loader as cfg_loader


@pytest.fixture(autouse=True)
def _reset_engine_settings(monkeypatch):
    monkeypatch.setattr(cfg_loader, "_ACTIVE_SETTINGS", None)


@pytest.fixture
def settings() -> EngineSettings:
    return EngineSettings()


@pytest.fixture
def srt_document() -> str:
    return textwrap.dedent(
        """\
        1
        00:00:01,000 --> 00:00:02,500
        Hello

        2
        00:00:03,000 --> 00:00:04,000
        World
        """
    )


@pytest.fixture
def ass_document() -> str:
    return textwrap.dedent(
        """\
        [Script Info]
        Title: Sample

        [V4+ Styles]
        Format: Name, Fontname, Fontsize
        Style: Default,Arial,20

        [Events]
        Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text
        Dialogue: 0,0:00:01.00,0:00:02.50,Default,,0,0,0,,Hello World
        """
    )


@pytest.fixture
def vtt_document() -> str:
    return textwrap.dedent(
        """\
        WEBVTT

        intro
        00:00:01.000 --> 00:00:02.000 align:start
        First line

        NOTE this block is a comment

        00:03.500 --> 00:04.250
        <i>Second</i> line
        """
    )
