"""Shared constants, patterns and logger used across subtitle modules."""

from __future__ import annotations

import re

from subcue import logging_manager as log_mgr

logger = log_mgr.get_logger().getChild("subtitles.parsing")

LINE_BREAK = "<br>"
NO_CUE = -1

# SRT time line: ``00:00:01,000 --> 00:00:02,500`` with ``.`` or no fraction.
SRT_TIME_LINE_PATTERN = re.compile(
    r"^\s*(?P<start>\d+:\d+:\d+(?:[,.]\d+)?)\s*-->\s*(?P<end>\d+:\d+:\d+(?:[,.]\d+)?)"
)
# Sniffing variants mirror the three accepted SRT shapes.
SRT_SNIFF_PATTERNS = (
    re.compile(r"\d+:\d+:\d+,\d+\s+-->\s+\d+:\d+:\d+,\d+"),
    re.compile(r"\d+:\d+:\d+\.\d+\s+-->\s+\d+:\d+:\d+\.\d+"),
    re.compile(r"\d+:\d+:\d+\s+-->\s+\d+:\d+:\d+"),
)

# WebVTT timestamps always carry a dot fraction; the hour field is optional.
VTT_TIME_LINE_PATTERN = re.compile(
    r"^\s*(?P<start>(?:\d+:)?\d{1,2}:\d{2}\.\d+)\s*-->\s*(?P<end>(?:\d+:)?\d{1,2}:\d{2}\.\d+)"
)
WEBVTT_HEADER = re.compile(r"^\ufeff?WEBVTT", re.IGNORECASE)

# ``H:MM:SS.cc`` tokens as found in ASS dialogue lines.
ASS_TIMESTAMP_PATTERN = re.compile(r"\d+:\d+:\d+\.\d+")
ASS_TIMESTAMP_PAIR_PATTERN = re.compile(r"(\d+:\d+:\d+\.\d+),\s*(\d+:\d+:\d+\.\d+)")

# Bare ``HH:MM:SS - HH:MM:SS`` ranges without fractional seconds.
TIME_RANGE_PATTERN = re.compile(r"(\d{2}:\d{2}:\d{2})\s*-\s*(\d{2}:\d{2}:\d{2})")

# Distributor-style pairs, tried in order.
BILINGUAL_TIME_PATTERNS = (
    re.compile(r"(\d+:\d+:\d+)\s*-\s*(\d+:\d+:\d+)"),
    re.compile(r"(\d+:\d+:\d+)\s*-->\s*(\d+:\d+:\d+)"),
    re.compile(r"(\d+:\d+:\d+)[\s.,]+(\d+:\d+:\d+)"),
)
LOOSE_TIME_PAIR_PATTERN = re.compile(r"(\d+:\d+:\d+).*?(\d+:\d+:\d+)")

ANY_TIMESTAMP_PATTERN = re.compile(r"\d+:\d+:\d+")
BARE_INTEGER_PATTERN = re.compile(r"^\d+$")

__all__ = [
    "ANY_TIMESTAMP_PATTERN",
    "ASS_TIMESTAMP_PAIR_PATTERN",
    "ASS_TIMESTAMP_PATTERN",
    "BARE_INTEGER_PATTERN",
    "BILINGUAL_TIME_PATTERNS",
    "LINE_BREAK",
    "LOOSE_TIME_PAIR_PATTERN",
    "NO_CUE",
    "SRT_SNIFF_PATTERNS",
    "SRT_TIME_LINE_PATTERN",
    "TIME_RANGE_PATTERN",
    "VTT_TIME_LINE_PATTERN",
    "WEBVTT_HEADER",
    "logger",
]
