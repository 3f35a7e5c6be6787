import pytest

from subcue import NO_CUE, LoopJump, NavigationTarget, SubtitleSession
from subcue.subtitles.errors import LoopUnavailableError
from subcue.subtitles.session import playback_rate_for


@pytest.fixture
def session(srt_document: str) -> SubtitleSession:
    player = SubtitleSession()
    player.load(srt_document)
    return player


def test_load_replaces_track_and_resets_cursor(session: SubtitleSession) -> None:
    assert session.update(1.5) == 0
    assert session.active_text == "Hello"

    cue_list = session.load("1\n00:00:10,000 --> 00:00:11,000\nOther\n")

    assert len(cue_list) == 1
    assert session.cue_list is cue_list
    assert session.active_index == NO_CUE
    assert session.active_cue is None
    assert session.active_text == ""


def test_update_tracks_the_clock(session: SubtitleSession) -> None:
    assert session.update(1.2) == 0
    assert session.update(2.7) == NO_CUE
    assert session.update(3.5) == 1


def test_navigation_returns_seek_targets(session: SubtitleSession) -> None:
    session.update(2.7)

    assert session.go_next(2.7) == NavigationTarget(index=1, seek_seconds=3.0)
    assert session.go_next(3.0) == NavigationTarget(index=0, seek_seconds=1.0)
    assert session.go_previous(1.0) == NavigationTarget(index=0, seek_seconds=1.0)


def test_navigation_on_empty_session() -> None:
    player = SubtitleSession()

    assert player.go_next(0.0) == NavigationTarget(index=NO_CUE, seek_seconds=None)
    assert player.go_previous(0.0) == NavigationTarget(index=NO_CUE, seek_seconds=None)


def test_toggle_loop_requires_active_cue(session: SubtitleSession) -> None:
    session.update(2.7)

    with pytest.raises(LoopUnavailableError):
        session.toggle_loop()


def test_loop_lock_pins_active_index(session: SubtitleSession) -> None:
    session.update(1.5)

    assert session.toggle_loop() is True
    assert session.is_looping
    assert session.update(3.5) == 0
    assert session.active_text == "Hello"

    assert session.toggle_loop() is False
    assert session.update(3.5) == 1


def test_check_loop_slows_down_after_repeats(session: SubtitleSession) -> None:
    session.update(1.5)
    session.toggle_loop()

    assert session.check_loop(2.0) is None
    jumps = [session.check_loop(2.6) for _ in range(10)]

    assert jumps[0] == LoopJump(seek_seconds=1.0, playback_rate=1.0, loop_count=1)
    assert [jump.playback_rate for jump in jumps] == [1.0] * 4 + [0.75] * 5 + [0.5]


def test_check_loop_without_lock_is_noop(session: SubtitleSession) -> None:
    session.update(1.5)

    assert session.check_loop(5.0) is None


def test_navigation_rearms_loop_on_new_target(session: SubtitleSession) -> None:
    session.update(1.5)
    session.toggle_loop()
    session.check_loop(2.6)
    session.check_loop(2.6)
    assert session.loop_count == 2

    target = session.go_next(2.6)

    assert target.index == 1
    assert session.is_looping
    assert session.loop_index == 1
    assert session.loop_count == 0
    assert session.update(1.5) == 1


def test_seek_moves_loop_to_cue_under_new_position(session: SubtitleSession) -> None:
    session.update(1.5)
    session.toggle_loop()

    assert session.seek(3.2) == 1
    assert session.loop_index == 1
    assert session.seek(2.7) == 1


def test_clear_drops_track_and_loop(session: SubtitleSession) -> None:
    session.update(1.5)
    session.toggle_loop()

    session.clear()

    assert len(session.cue_list) == 0
    assert not session.is_looping
    assert session.update(1.5) == NO_CUE


@pytest.mark.parametrize(("count", "rate"), [(0, 1.0), (4, 1.0), (5, 0.75), (9, 0.75), (10, 0.5)])
def test_playback_rate_ladder(count: int, rate: float) -> None:
    assert playback_rate_for(count) == rate
