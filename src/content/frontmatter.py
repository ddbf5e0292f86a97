"""Frontmatter parser for blog documents.

Splits a raw document into its leading ``---`` metadata block and the
markdown body, and coerces the recognized keys into a Frontmatter.

Simple line-oriented key-value parser: inline ``[a, b]`` lists and
scalar values only, without requiring a YAML dependency.  Parsing is
lenient: unknown keys are dropped and bad values fall back to defaults.
"""

from __future__ import annotations

import contextlib
import logging
import re
from datetime import UTC, datetime
from typing import Any

from folio.content.models import Frontmatter, ParsedDocument

logger = logging.getLogger(__name__)

_BLOCK_RE = re.compile(
    r"\A---[ \t]*\r?\n(?:(?P<meta>.*?)\r?\n)?---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL,
)

# frontmatter key -> Frontmatter field
_STRING_KEYS = {
    "title": "title",
    "date": "date",
    "category": "category",
    "excerpt": "excerpt",
    "coverImage": "cover_image",
    "author": "author",
    "seoTitle": "seo_title",
    "seoDescription": "seo_description",
}
_LIST_KEYS = {"tags": "tags", "keywords": "keywords"}
_BOOL_KEYS = {"featured": "featured", "draft": "draft"}


def default_frontmatter() -> Frontmatter:
    """Frontmatter used when a document has no metadata block."""
    return Frontmatter(date=datetime.now(tz=UTC).isoformat())


def strip_quotes(value: str) -> str:
    """Remove one layer of matching surrounding quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def parse_inline_list(value: str) -> list[str] | None:
    """Parse ``[a, "b", 'c']`` into a list; None if not bracketed."""
    if not (value.startswith("[") and value.endswith("]")):
        return None
    items = [strip_quotes(part.strip()).strip() for part in value[1:-1].split(",")]
    return [item for item in items if item]


def parse_metadata_block(block: str) -> dict[str, Any]:
    """Parse the lines of a metadata block into Frontmatter field values."""
    fields: dict[str, Any] = {}

    for line in block.splitlines():
        if not line.strip() or ":" not in line:
            continue

        key, _, raw = line.partition(":")
        key = key.strip()
        value = strip_quotes(raw.strip())

        if key in _STRING_KEYS:
            fields[_STRING_KEYS[key]] = value
        elif key in _LIST_KEYS:
            items = parse_inline_list(value)
            if items is not None:
                fields[_LIST_KEYS[key]] = items
        elif key in _BOOL_KEYS:
            fields[_BOOL_KEYS[key]] = value.lower() == "true"
        elif key == "readTime":
            with contextlib.suppress(ValueError):
                minutes = int(value)
                if minutes >= 1:
                    fields["read_time"] = minutes
        else:
            logger.debug("Ignoring unknown frontmatter key: %s", key)

    return fields


def parse_frontmatter(text: str) -> ParsedDocument:
    """Split *text* into frontmatter and body.

    Without a well-formed leading block the whole input is the body and
    default metadata is returned.
    """
    text = text.removeprefix("\ufeff")
    match = _BLOCK_RE.match(text)
    if match is None:
        return ParsedDocument(frontmatter=default_frontmatter(), body=text)

    fields = parse_metadata_block(match.group("meta") or "")
    frontmatter = default_frontmatter().model_copy(update=fields)
    return ParsedDocument(
        frontmatter=frontmatter,
        body=text[match.end():],
        has_frontmatter=True,
    )
