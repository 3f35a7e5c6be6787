"""Active-cue lookup and next/previous navigation over a :class:`CueList`."""

from __future__ import annotations

import logging
from bisect import bisect_left, bisect_right
from typing import Optional

from subcue import logging_manager as log_mgr
from subcue.config_manager import EngineSettings, get_settings

from .common import NO_CUE
from .models import Cue, CueList
from .timing import ms_to_seconds

logger = log_mgr.get_logger().getChild("subtitles.index")


class CueIndex:
    """Answer "which cue is active at this position" for a playback clock.

    Lists longer than ``indexed_lookup_threshold`` are binary-searched and
    first try the cursor and its successor; shorter lists are scanned. When
    cues overlap the lowest containing index wins under both strategies.
    """

    def __init__(
        self,
        cue_list: Optional[CueList] = None,
        settings: Optional[EngineSettings] = None,
    ) -> None:
        resolved = settings or get_settings()
        self._cues = cue_list if cue_list is not None else CueList.empty()
        self._threshold = resolved.indexed_lookup_threshold
        self._cursor = NO_CUE

    @property
    def cue_list(self) -> CueList:
        return self._cues

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def indexed(self) -> bool:
        return len(self._cues) > self._threshold

    def __len__(self) -> int:
        return len(self._cues)

    def reset(self) -> None:
        self._cursor = NO_CUE

    def is_valid(self, index: int) -> bool:
        return 0 <= index < len(self._cues)

    def cue_at(self, index: int) -> Optional[Cue]:
        if not self.is_valid(index):
            return None
        return self._cues[index]

    def seek_seconds(self, index: int) -> float:
        """Return the playback position, in seconds, at which cue ``index`` starts."""

        if not self.is_valid(index):
            raise IndexError(f"cue index {index} out of range")
        return ms_to_seconds(self._cues[index].start_ms)

    # Active lookup -------------------------------------------------------

    def active_cue_at(self, position_ms: float) -> int:
        """Return the index of the cue containing ``position_ms`` or ``NO_CUE``.

        Containment is inclusive at both ends. The result becomes the cursor.
        """

        if not self._cues:
            self._cursor = NO_CUE
            return NO_CUE
        if self.indexed:
            found = self._lookup_from_cursor(position_ms)
            if found == NO_CUE:
                found = self._bisect_active(position_ms)
        else:
            found = self._scan_active(position_ms)
        if found != self._cursor and logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Active cue changed from %d to %d at %sms",
                self._cursor,
                found,
                position_ms,
                extra={"event": "subtitles.index.active"},
            )
        self._cursor = found
        return found

    def _scan_active(self, position_ms: float) -> int:
        for position, cue in enumerate(self._cues):
            if cue.start_ms > position_ms:
                break
            if position_ms <= cue.end_ms:
                return position
        return NO_CUE

    def _is_lowest_containing(self, index: int, position_ms: float) -> bool:
        if not self.is_valid(index) or not self._cues[index].contains(position_ms):
            return False
        return index == 0 or self._cues.running_max_end[index - 1] < position_ms

    def _lookup_from_cursor(self, position_ms: float) -> int:
        cursor = self._cursor
        if cursor == NO_CUE:
            return NO_CUE
        for candidate in (cursor, cursor + 1):
            if self._is_lowest_containing(candidate, position_ms):
                return candidate
        return NO_CUE

    def _bisect_active(self, position_ms: float) -> int:
        last_started = bisect_right(self._cues.start_column, position_ms) - 1
        if last_started < 0:
            return NO_CUE
        # running_max_end first reaches position_ms at the lowest cue whose
        # own end does; every earlier cue has already ended.
        first_open = bisect_left(self._cues.running_max_end, position_ms)
        if first_open > last_started:
            return NO_CUE
        return first_open

    # Navigation ----------------------------------------------------------

    def next_cue(self, from_index: int, current_ms: float) -> int:
        """Return the cue after ``from_index``, wrapping to the first cue.

        From ``NO_CUE`` the first cue starting strictly after ``current_ms``
        is chosen, or the first cue when none does.
        """

        if not self._cues:
            return NO_CUE
        if self.is_valid(from_index):
            target = from_index + 1 if from_index + 1 < len(self._cues) else 0
        else:
            target = self._first_starting_after(current_ms)
            if target == NO_CUE:
                target = 0
        self._cursor = target
        return target

    def previous_cue(self, from_index: int, current_ms: float) -> int:
        """Return the cue before ``from_index``, clamped to the first cue."""

        if not self._cues:
            return NO_CUE
        if self.is_valid(from_index):
            target = max(from_index - 1, 0)
        else:
            target = self._last_starting_before(current_ms)
            if target == NO_CUE:
                target = 0
        self._cursor = target
        return target

    def _first_starting_after(self, position_ms: float) -> int:
        if self.indexed:
            position = bisect_right(self._cues.start_column, position_ms)
            return position if position < len(self._cues) else NO_CUE
        for position, start in enumerate(self._cues.start_column):
            if start > position_ms:
                return position
        return NO_CUE

    def _last_starting_before(self, position_ms: float) -> int:
        if self.indexed:
            return bisect_left(self._cues.start_column, position_ms) - 1
        found = NO_CUE
        for position, start in enumerate(self._cues.start_column):
            if start >= position_ms:
                break
            found = position
        return found


__all__ = ["CueIndex"]
