"""Derived fields: plain text, reading time, and excerpts."""

from __future__ import annotations

import html
import math
import re

WORDS_PER_MINUTE = 200
EXCERPT_LENGTH = 160
ELLIPSIS = "..."

_TAG_RE = re.compile(r"<[^>]*>")
_MARKDOWN_CHARS_RE = re.compile(r"[#*`_~\[\]()]")
_WHITESPACE_RE = re.compile(r"\s+")


def strip_markup(text: str) -> str:
    """Reduce markdown or HTML to a single line of plain text."""
    plain = _TAG_RE.sub("", text)
    plain = html.unescape(plain)
    plain = _MARKDOWN_CHARS_RE.sub("", plain)
    return _WHITESPACE_RE.sub(" ", plain).strip()


def calculate_reading_time(text: str, words_per_minute: int = WORDS_PER_MINUTE) -> int:
    """Estimated minutes to read *text*, never less than 1."""
    words = len(strip_markup(text).split())
    return max(1, math.ceil(words / words_per_minute))


def generate_excerpt(text: str, max_length: int = EXCERPT_LENGTH) -> str:
    """Build a plain-text summary of at most *max_length* characters.

    Prefers ending on a sentence when one finishes past 80% of the
    budget, then on a word boundary, then a hard cut.  The latter two
    get an ellipsis appended.
    """
    plain = strip_markup(text)
    if len(plain) <= max_length:
        return plain

    truncated = plain[:max_length]
    last_period = truncated.rfind(".")
    last_space = truncated.rfind(" ")

    if last_period > max_length * 0.8:
        return truncated[: last_period + 1]
    if last_space > 0:
        return truncated[:last_space] + ELLIPSIS
    return truncated + ELLIPSIS
