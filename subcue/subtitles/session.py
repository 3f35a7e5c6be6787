"""Player-facing owner of the loaded cues, the cursor and loop playback."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from subcue import logging_manager as log_mgr
from subcue.config_manager import EngineSettings, get_settings

from .common import NO_CUE
from .errors import LoopUnavailableError
from .index import CueIndex
from .models import Cue, CueList
from .processing import parse_subtitles
from .timing import seconds_to_ms

logger = log_mgr.get_logger().getChild("subtitles.session")

NORMAL_RATE = 1.0
# (minimum loop count, playback rate), highest threshold first.
LOOP_RATE_STEPS = ((10, 0.5), (5, 0.75))


def playback_rate_for(loop_count: int) -> float:
    for threshold, rate in LOOP_RATE_STEPS:
        if loop_count >= threshold:
            return rate
    return NORMAL_RATE


@dataclass(frozen=True)
class NavigationTarget:
    """Cue chosen by next/previous navigation and where the clock should seek."""

    index: int
    seek_seconds: Optional[float]


@dataclass(frozen=True)
class LoopJump:
    """Seek issued when playback leaves the locked cue."""

    seek_seconds: float
    playback_rate: float
    loop_count: int


class SubtitleSession:
    """Hold one :class:`CueList` and resolve it against a playback clock.

    Loading a new document replaces the index in a single assignment, so a
    reader never sees a half-built list.
    """

    def __init__(self, settings: Optional[EngineSettings] = None) -> None:
        self._settings = settings or get_settings()
        self._index = CueIndex(CueList.empty(), self._settings)
        self._loop_index = NO_CUE
        self._loop_count = 0

    @property
    def cue_list(self) -> CueList:
        return self._index.cue_list

    @property
    def index(self) -> CueIndex:
        return self._index

    @property
    def active_index(self) -> int:
        if self.is_looping:
            return self._loop_index
        return self._index.cursor

    @property
    def active_cue(self) -> Optional[Cue]:
        return self._index.cue_at(self.active_index)

    @property
    def active_text(self) -> str:
        cue = self.active_cue
        return cue.text if cue is not None else ""

    @property
    def is_looping(self) -> bool:
        return self._loop_index != NO_CUE

    @property
    def loop_index(self) -> int:
        return self._loop_index

    @property
    def loop_count(self) -> int:
        return self._loop_count

    def load(self, content: Optional[str]) -> CueList:
        """Parse ``content`` and make it the active subtitle track."""

        cue_list = parse_subtitles(content, self._settings)
        self._index = CueIndex(cue_list, self._settings)
        self._unlock()
        logger.info(
            "Loaded subtitle track",
            extra={
                "event": "subtitles.session.load",
                "format": cue_list.source_format.value,
                "cue_count": len(cue_list),
            },
        )
        return cue_list

    def clear(self) -> None:
        self._index = CueIndex(CueList.empty(), self._settings)
        self._unlock()

    def update(self, position_seconds: float) -> int:
        """Resolve the active cue for a clock tick; a locked loop pins the index."""

        if self.is_looping:
            return self._loop_index
        return self._index.active_cue_at(seconds_to_ms(position_seconds))

    def seek(self, position_seconds: float) -> int:
        """Re-resolve the active cue after the clock jumped to ``position_seconds``."""

        found = self._index.active_cue_at(seconds_to_ms(position_seconds))
        if self.is_looping and found != NO_CUE and found != self._loop_index:
            self._arm_loop(found)
        return self.active_index

    def go_next(self, position_seconds: float) -> NavigationTarget:
        return self._navigate(self._index.next_cue, position_seconds)

    def go_previous(self, position_seconds: float) -> NavigationTarget:
        return self._navigate(self._index.previous_cue, position_seconds)

    def _navigate(self, step, position_seconds: float) -> NavigationTarget:
        was_looping = self.is_looping
        origin = self.active_index
        self._unlock()
        target = step(origin, seconds_to_ms(position_seconds))
        if target == NO_CUE:
            return NavigationTarget(index=NO_CUE, seek_seconds=None)
        if was_looping:
            self._arm_loop(target)
        return NavigationTarget(index=target, seek_seconds=self._index.seek_seconds(target))

    def toggle_loop(self) -> bool:
        """Lock or unlock the active cue; return whether looping is now on.

        Raises :class:`LoopUnavailableError` when no cue is active.
        """

        if self.is_looping:
            self._unlock()
            logger.info("Subtitle loop disabled", extra={"event": "subtitles.loop.off"})
            return False
        active = self._index.cursor
        if not self._index.is_valid(active):
            raise LoopUnavailableError("no active cue to loop")
        self._arm_loop(active)
        logger.info(
            "Subtitle loop enabled on cue %d",
            active,
            extra={"event": "subtitles.loop.on"},
        )
        return True

    def check_loop(self, position_seconds: float) -> Optional[LoopJump]:
        """Return the jump back to the locked cue once playback leaves it."""

        cue = self._index.cue_at(self._loop_index) if self.is_looping else None
        if cue is None:
            return None
        if cue.contains(seconds_to_ms(position_seconds)):
            return None
        self._loop_count += 1
        rate = playback_rate_for(self._loop_count)
        logger.debug(
            "Loop %d on cue %d at %.2fx",
            self._loop_count,
            self._loop_index,
            rate,
            extra={"event": "subtitles.loop.jump"},
        )
        return LoopJump(
            seek_seconds=cue.start_seconds,
            playback_rate=rate,
            loop_count=self._loop_count,
        )

    def _arm_loop(self, index: int) -> None:
        self._loop_index = index
        self._loop_count = 0

    def _unlock(self) -> None:
        self._loop_index = NO_CUE
        self._loop_count = 0


__all__ = [
    "LOOP_RATE_STEPS",
    "LoopJump",
    "NavigationTarget",
    "SubtitleSession",
    "playback_rate_for",
]
