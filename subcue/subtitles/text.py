"""Text normalization and script classification helpers."""

from __future__ import annotations

import html
import re
from typing import Iterable, List

import regex

from .common import LINE_BREAK

_ASS_TAG_PATTERN = re.compile(r"\{[^}]*\}")
_ASS_LINE_BREAKS = ("\\N", "\\n")
_BREAK_TAG_PATTERN = re.compile(r"<\s*br\s*/?\s*>", re.IGNORECASE)
_HTML_TAG_PATTERN = re.compile(r"<[^>]*>")
_CONTROL_CHAR_PATTERN = re.compile(r"[\x00-\x08\x0b-\x1f\x7f]")
_WHITESPACE_PATTERN = re.compile(r"[ \t\u00a0]+")
_BREAK_PLACEHOLDER = "\ufffe"

_CJK_PATTERN = regex.compile(
    r"[\p{Script=Han}\p{Script=Hiragana}\p{Script=Katakana}\p{Script=Hangul}\p{Script=Bopomofo}]"
)
_LATIN_PATTERN = regex.compile(r"\p{Script=Latin}")
_MIXED_SCRIPT_PATTERN = regex.compile(
    r"(?:[\p{Script=Han}\p{Script=Hiragana}\p{Script=Katakana}\p{Script=Hangul}].*\p{Script=Latin})"
    r"|(?:\p{Script=Latin}.*[\p{Script=Han}\p{Script=Hiragana}\p{Script=Katakana}\p{Script=Hangul}])"
)


def split_lines(text: str) -> List[str]:
    """Split on any newline convention and drop a leading byte-order mark."""

    return (text or "").lstrip("\ufeff").replace("\r\n", "\n").replace("\r", "\n").split("\n")


def strip_ass_overrides(value: str) -> str:
    """Remove ``{...}`` override blocks and turn ASS breaks into the canonical marker."""

    cleaned = _ASS_TAG_PATTERN.sub("", value or "")
    for marker in _ASS_LINE_BREAKS:
        cleaned = cleaned.replace(marker, LINE_BREAK)
    return cleaned.replace("\\h", " ")


def decode_entities(value: str) -> str:
    return html.unescape(value or "").replace("\u00a0", " ")


def join_lines(lines: Iterable[str]) -> str:
    return LINE_BREAK.join(line for line in lines if line)


def clean_markup(value: str) -> str:
    """Return ``value`` with every tag except the canonical line break removed.

    Residual override blocks, literal ``\\N`` markers and real newlines all
    collapse into ``<br>``; leading, trailing and repeated breaks are dropped.
    """

    if not value:
        return ""
    cleaned = strip_ass_overrides(value)
    cleaned = cleaned.replace("\r\n", "\n").replace("\r", "\n").replace("\n", LINE_BREAK)
    cleaned = _BREAK_TAG_PATTERN.sub(_BREAK_PLACEHOLDER, cleaned)
    cleaned = _CONTROL_CHAR_PATTERN.sub("", cleaned)
    cleaned = _HTML_TAG_PATTERN.sub("", cleaned).replace(_BREAK_PLACEHOLDER, LINE_BREAK)
    cleaned = _WHITESPACE_PATTERN.sub(" ", cleaned)
    parts: List[str] = [part.strip() for part in cleaned.split(LINE_BREAK)]
    return LINE_BREAK.join(part for part in parts if part)


def has_cjk(value: str) -> bool:
    return bool(_CJK_PATTERN.search(value or ""))


def has_latin(value: str) -> bool:
    return bool(_LATIN_PATTERN.search(value or ""))


def is_mixed_script_line(value: str) -> bool:
    """True when a single line carries both CJK and Latin letters."""

    return bool(_MIXED_SCRIPT_PATTERN.search(value or ""))


def order_bilingual_pair(first: str, second: str) -> str:
    """Place the CJK line above the Latin line when the split is unambiguous."""

    first_cjk, first_latin = has_cjk(first), has_latin(first)
    second_cjk, second_latin = has_cjk(second), has_latin(second)
    if first_cjk and not first_latin and second_latin and not second_cjk:
        return f"{first}{LINE_BREAK}{second}"
    if first_latin and not first_cjk and second_cjk and not second_latin:
        return f"{second}{LINE_BREAK}{first}"
    return f"{first}{LINE_BREAK}{second}"


__all__ = [
    "clean_markup",
    "decode_entities",
    "has_cjk",
    "has_latin",
    "is_mixed_script_line",
    "join_lines",
    "order_bilingual_pair",
    "split_lines",
    "strip_ass_overrides",
]
