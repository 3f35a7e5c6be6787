import pytest

from subcue.subtitles.models import Cue, CueList, FormatTag
from subcue.subtitles.text import has_cjk, has_latin, is_mixed_script_line, order_bilingual_pair


def test_cue_rejects_inverted_or_negative_spans() -> None:
    with pytest.raises(ValueError):
        Cue(start_ms=1000, end_ms=1000, text="x")
    with pytest.raises(ValueError):
        Cue(start_ms=-1, end_ms=10, text="x")


def test_cue_helpers() -> None:
    cue = Cue(start_ms=1500, end_ms=4000, text="你好<br>Hello")

    assert cue.duration_ms == 2500
    assert cue.start_seconds == 1.5
    assert cue.end_seconds == 4.0
    assert cue.lines() == ["你好", "Hello"]
    assert cue.contains(1500) and cue.contains(4000)
    assert not cue.contains(4001)
    assert cue.to_dict() == {"start_ms": 1500, "end_ms": 4000, "text": "你好<br>Hello"}


def test_cue_list_requires_sorted_starts() -> None:
    with pytest.raises(ValueError):
        CueList(cues=(Cue(2000, 3000, "b"), Cue(1000, 1500, "a")))


def test_cue_list_precomputes_lookup_columns() -> None:
    cue_list = CueList(
        cues=(Cue(0, 5000, "a"), Cue(1000, 2000, "b"), Cue(6000, 7000, "c")),
        source_format=FormatTag.SRT,
    )

    assert cue_list.start_column == (0, 1000, 6000)
    assert cue_list.running_max_end == (5000, 5000, 7000)
    assert len(cue_list) == 3
    assert cue_list[1].text == "b"
    assert [cue.text for cue in cue_list[1:]] == ["b", "c"]
    assert CueList.empty() == CueList()


@pytest.mark.parametrize(
    ("first", "second", "expected"),
    [
        ("你好", "Hello", "你好<br>Hello"),
        ("Hello", "你好", "你好<br>Hello"),
        ("Hello", "World", "Hello<br>World"),
        ("你好 Hi", "Hello", "你好 Hi<br>Hello"),
    ],
)
def test_order_bilingual_pair(first: str, second: str, expected: str) -> None:
    assert order_bilingual_pair(first, second) == expected


def test_script_classification() -> None:
    assert has_cjk("こんにちは") and not has_latin("こんにちは")
    assert has_latin("café") and not has_cjk("café")
    assert is_mixed_script_line("说 hello")
    assert not is_mixed_script_line("hello there")
