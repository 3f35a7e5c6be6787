import textwrap

from subcue.config_manager import EngineSettings
from subcue.subtitles.formats import (
    FALLBACK_ORDER,
    PARSERS,
    parse_ass,
    parse_bilingual,
    parse_generic,
    parse_srt,
    parse_time_range,
    parse_vtt,
    tolerant_parser,
)
from subcue.subtitles.models import FormatTag, IntermediateRecord


def test_registry_covers_every_known_format() -> None:
    assert set(PARSERS) == set(FormatTag) - {FormatTag.UNKNOWN}
    assert FormatTag.TIME_RANGE not in FALLBACK_ORDER
    assert FALLBACK_ORDER[0] is FormatTag.BILINGUAL_VARIANT


def test_tolerant_parser_swallows_internal_errors() -> None:
    @tolerant_parser("broken")
    def parse_broken(text, settings):
        raise RuntimeError("boom")

    assert parse_broken("anything") == []
    assert parse_broken.parser_name == "broken"


def test_parse_srt_reads_blocks(srt_document: str) -> None:
    records = parse_srt(srt_document)

    assert records == [
        IntermediateRecord("00:00:01,000", "00:00:02,500", "Hello"),
        IntermediateRecord("00:00:03,000", "00:00:04,000", "World"),
    ]


def test_parse_srt_without_indices_or_trailing_blank() -> None:
    text = "00:00:01.000 --> 00:00:02.000\nfirst\nline\n00:00:03 --> 00:00:04\nsecond"

    records = parse_srt(text)

    assert [record.text_raw for record in records] == ["first<br>line", "second"]
    assert records[1].start_raw == "00:00:03"


def test_parse_srt_decodes_entities() -> None:
    records = parse_srt("1\n00:00:01,000 --> 00:00:02,000\nTom &amp; Jerry&nbsp;!\n")

    assert records[0].text_raw == "Tom & Jerry !"


def test_parse_vtt_skips_header_identifiers_and_notes(vtt_document: str) -> None:
    records = parse_vtt(vtt_document)

    assert records == [
        IntermediateRecord("00:00:01.000", "00:00:02.000", "First line"),
        IntermediateRecord("00:03.500", "00:04.250", "<i>Second</i> line"),
    ]


def test_parse_ass_uses_format_columns(ass_document: str) -> None:
    records = parse_ass(ass_document)

    assert records == [IntermediateRecord("0:00:01.00", "0:00:02.50", "Hello World")]


def test_parse_ass_keeps_commas_in_text_and_strips_overrides() -> None:
    text = textwrap.dedent(
        """\
        [Events]
        Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text
        Dialogue: 0,0:00:01.00,0:00:03.00,Default,,0,0,0,,{\\i1}Well,{\\i0} hello\\Nthere
        Comment: 0,0:00:04.00,0:00:05.00,Default,,0,0,0,,ignored
        """
    )

    records = parse_ass(text)

    assert len(records) == 1
    assert records[0].text_raw == "Well, hello<br>there"


def test_parse_ass_ignores_dialogue_outside_events() -> None:
    text = textwrap.dedent(
        """\
        [Script Info]
        Dialogue: 0,0:00:09.00,0:00:10.00,Default,,0,0,0,,not an event
        [Events]
        Dialogue: 0,0:00:01.00,0:00:02.00,Default,,0,0,0,,event
        """
    )

    assert [record.text_raw for record in parse_ass(text)] == ["event"]


def test_parse_ass_positional_without_format_line() -> None:
    text = "Dialogue: 0,0:00:01.00,0:00:02.00,Default,,0,0,0,,Hi, there\n"

    assert parse_ass(text) == [IntermediateRecord("0:00:01.00", "0:00:02.00", "Hi, there")]


def test_parse_ass_relaxed_pass_recovers_misaligned_columns() -> None:
    text = textwrap.dedent(
        """\
        [Events]
        Format: Start, End, Text
        Dialogue: Default,0:00:01.00,0:00:02.00,Hello
        """
    )

    assert parse_ass(text) == [IntermediateRecord("0:00:01.00", "0:00:02.00", "Hello")]


def test_parse_bilingual_orders_cjk_first() -> None:
    text = textwrap.dedent(
        """\
        0:00:01 - 0:00:03
        Hello
        你好

        0:00:04 --> 0:00:06
        再见
        Goodbye
        """
    )

    records = parse_bilingual(text)

    assert [record.text_raw for record in records] == ["你好<br>Hello", "再见<br>Goodbye"]
    assert records[0].start_raw == "0:00:01"
    assert records[1].end_raw == "0:00:06"


def test_parse_bilingual_pairs_language_sets_without_timing(settings: EngineSettings) -> None:
    text = "[Script]\n你好\n再见\nHello\nGoodbye\n"

    records = parse_bilingual(text, settings)

    assert records == [
        IntermediateRecord("00:00:00.000", "00:00:05.000", "你好<br>Hello"),
        IntermediateRecord("00:00:05.000", "00:00:10.000", "再见<br>Goodbye"),
    ]


def test_parse_bilingual_prefers_cjk_when_sets_differ() -> None:
    text = "你好\n再见\nHello\n"

    assert [record.text_raw for record in parse_bilingual(text)] == ["你好", "再见"]


def test_parse_time_range_same_line_and_following_lines() -> None:
    text = textwrap.dedent(
        """\
        00:00:01 - 00:00:03: Hello there
        00:00:04 - 00:00:06
        second line
        continued

        """
    )

    records = parse_time_range(text)

    assert records == [
        IntermediateRecord("00:00:01", "00:00:03", "Hello there"),
        IntermediateRecord("00:00:04", "00:00:06", "second line<br>continued"),
    ]


def test_parse_generic_slots_plain_lines() -> None:
    records = parse_generic("[Header]\nfirst\n\nsecond\n", EngineSettings(fallback_slot_ms=2000))

    assert records == [
        IntermediateRecord("00:00:00.000", "00:00:02.000", "first"),
        IntermediateRecord("00:00:02.000", "00:00:04.000", "second"),
    ]


def test_parse_generic_extracts_dialogue_timestamps() -> None:
    text = "garbage Dialogue: x 0:00:01.50 y 0:00:02.75, Spoken words\n"

    assert parse_generic(text) == [IntermediateRecord("0:00:01.50", "0:00:02.75", "Spoken words")]


def test_parsers_return_empty_for_empty_input() -> None:
    for parser in PARSERS.values():
        assert parser("") == []


def test_parse_srt_drops_next_index_when_blocks_are_not_separated() -> None:
    text = "1\n00:00:01,000 --> 00:00:02,000\nHello\n2\n00:00:03,000 --> 00:00:04,000\nWorld\n"

    records = parse_srt(text)

    assert [record.text_raw for record in records] == ["Hello", "World"]


def test_parse_srt_keeps_numeric_only_dialogue() -> None:
    text = "00:00:01,000 --> 00:00:02,000\n42\n00:00:03,000 --> 00:00:04,000\nanswer\n"

    assert [record.text_raw for record in parse_srt(text)] == ["42", "answer"]


def test_parse_time_range_pairs_bare_ranges_with_text_lines() -> None:
    text = "00:00:01 - 00:00:03\n\n00:00:04 - 00:00:06\n\n[Notes]\nHello\nWorld\n"

    records = parse_time_range(text)

    assert records == [
        IntermediateRecord("00:00:01", "00:00:03", "Hello"),
        IntermediateRecord("00:00:04", "00:00:06", "World"),
    ]


def test_parse_bilingual_loose_pass_reads_unusual_separators() -> None:
    text = textwrap.dedent(
        """\
        0:00:01 - 0:00:03

        0:00:04 to 0:00:06
        Hello
        你好
        """
    )

    records = parse_bilingual(text)

    assert records == [IntermediateRecord("0:00:04", "0:00:06", "Hello<br>你好")]


def test_parse_ass_short_dialogue_uses_timestamp_pair() -> None:
    records = parse_ass("Dialogue: 0:00:01.00,0:00:02.00 Hello")

    assert records == [IntermediateRecord("0:00:01.00", "0:00:02.00", "Hello")]
