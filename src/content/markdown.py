"""Markdown to HTML transformer for blog bodies.

A line-oriented block parser feeds an inline tokenizer.  Blocks are
recognized in a fixed order (fenced code, headings, rules, quotes, list
items, paragraphs) and inline spans are tokenized before emphasis is
applied, so code and URLs are never rewritten by emphasis rules.

The transformer is total: every input produces output, and markers
that do not pair up are emitted as literal text.
"""

from __future__ import annotations

import html
import re
from urllib.parse import urlparse

_FENCE_RE = re.compile(r"^\s{0,3}```\s*([\w+#.-]*)\s*$")
_FENCE_CLOSE_RE = re.compile(r"^\s{0,3}```\s*$")
_HEADING_RE = re.compile(r"^(#{1,6})\s+(.*?)\s*$")
_RULE_RE = re.compile(r"^---\s*$")
_QUOTE_RE = re.compile(r"^>\s?(.*)$")
_BULLET_RE = re.compile(r"^[*+-]\s+(.*)$")
_ORDERED_RE = re.compile(r"^\d+\.\s+(.*)$")

_CODE_SPAN_RE = re.compile(r"`([^`\n]+)`")
_LINK_RE = re.compile(r"(!?)\[([^\]\n]*)\]\(([^)\s]+)\)")

# Longest marker first: *** before ** before *.
_EMPHASIS_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\*\*\*(?=\S)(.+?)(?<=\S)\*\*\*"), r"<strong><em>\1</em></strong>"),
    (re.compile(r"\*\*(?=\S)(.+?)(?<=\S)\*\*"), r"<strong>\1</strong>"),
    (re.compile(r"\*(?=\S)(.+?)(?<=\S)\*"), r"<em>\1</em>"),
    (re.compile(r"~~(?=\S)(.+?)(?<=\S)~~"), r"<del>\1</del>"),
)

BULLET = "ul"
ORDERED = "ol"


def _escape(text: str) -> str:
    return html.escape(text, quote=False)


def _attr(text: str) -> str:
    return html.escape(text, quote=True)


def _list_item(line: str) -> tuple[str, str] | None:
    """Return (list kind, item text) if *line* is a list item."""
    match = _BULLET_RE.match(line)
    if match:
        return BULLET, match.group(1)
    match = _ORDERED_RE.match(line)
    if match:
        return ORDERED, match.group(1)
    return None


def _starts_block(line: str) -> bool:
    """Whether *line* opens a block that interrupts a paragraph."""
    return bool(
        _FENCE_RE.match(line)
        or _HEADING_RE.match(line)
        or _RULE_RE.match(line)
        or _QUOTE_RE.match(line)
        or _list_item(line)
    )


class MarkdownRenderer:
    """Converts markdown bodies to HTML.

    Args:
        site_host: Hostname of the site.  Absolute http(s) links to any
            other host open in a new tab with ``rel="noopener noreferrer"``.
    """

    def __init__(self, site_host: str | None = None) -> None:
        self._site_host = (site_host or "").lower()

    # ── Blocks ───────────────────────────────────────────────────

    def render(self, text: str) -> str:
        """Render a markdown document to an HTML string."""
        lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
        blocks: list[str] = []
        i = 0

        while i < len(lines):
            line = lines[i]

            if not line.strip():
                i += 1
                continue

            fence = _FENCE_RE.match(line)
            if fence:
                i = self._code_block(lines, i + 1, fence.group(1), blocks)
                continue

            heading = _HEADING_RE.match(line)
            if heading:
                level = len(heading.group(1))
                blocks.append(f"<h{level}>{self.render_inline(heading.group(2))}</h{level}>")
                i += 1
                continue

            if _RULE_RE.match(line):
                blocks.append("<hr>")
                i += 1
                continue

            if _QUOTE_RE.match(line):
                i = self._blockquote(lines, i, blocks)
                continue

            if _list_item(line):
                i = self._list(lines, i, blocks)
                continue

            i = self._paragraph(lines, i, blocks)

        return "\n".join(blocks)

    def _code_block(self, lines: list[str], start: int, language: str, blocks: list[str]) -> int:
        """Capture a fenced block verbatim. An unclosed fence runs to EOF."""
        end = start
        while end < len(lines) and not _FENCE_CLOSE_RE.match(lines[end]):
            end += 1

        code = "\n".join(lines[start:end]).strip("\n")
        lang_attr = f' class="language-{_attr(language)}"' if language else ""
        blocks.append(f"<pre><code{lang_attr}>{_escape(code)}</code></pre>")
        return end + 1

    def _blockquote(self, lines: list[str], start: int, blocks: list[str]) -> int:
        paragraphs: list[list[str]] = [[]]
        i = start
        while i < len(lines):
            match = _QUOTE_RE.match(lines[i])
            if not match:
                break
            content = match.group(1).strip()
            if content:
                paragraphs[-1].append(self.render_inline(content))
            elif paragraphs[-1]:
                paragraphs.append([])
            i += 1

        inner = "".join(f"<p>{'<br>'.join(p)}</p>" for p in paragraphs if p)
        if inner:
            blocks.append(f"<blockquote>{inner}</blockquote>")
        return i

    def _list(self, lines: list[str], start: int, blocks: list[str]) -> int:
        """Wrap each item, then merge the run of same-kind items into one list."""
        kind, _ = _list_item(lines[start])  # type: ignore[misc]
        items: list[str] = []
        i = start

        while i < len(lines):
            item = _list_item(lines[i])
            if item is not None and item[0] == kind:
                items.append(f"<li>{self.render_inline(item[1].strip())}</li>")
                i += 1
                continue

            # Blank lines between items of the same list keep the list open
            j = i
            while j < len(lines) and not lines[j].strip():
                j += 1
            if j > i and j < len(lines):
                following = _list_item(lines[j])
                if following is not None and following[0] == kind:
                    i = j
                    continue
            break

        blocks.append(f"<{kind}>{''.join(items)}</{kind}>")
        return i

    def _paragraph(self, lines: list[str], start: int, blocks: list[str]) -> int:
        parts: list[str] = []
        i = start
        while i < len(lines) and lines[i].strip():
            if i > start and _starts_block(lines[i]):
                break
            parts.append(self.render_inline(lines[i].strip()))
            i += 1

        if any(parts):
            blocks.append(f"<p>{'<br>'.join(parts)}</p>")
        return i

    # ── Inline ───────────────────────────────────────────────────

    def render_inline(self, text: str) -> str:
        """Render inline markdown: code spans, images, links, emphasis."""
        out: list[str] = []
        pos = 0
        for match in _CODE_SPAN_RE.finditer(text):
            out.append(self._links(text[pos : match.start()]))
            out.append(f"<code>{_escape(match.group(1))}</code>")
            pos = match.end()
        out.append(self._links(text[pos:]))
        return "".join(out)

    def _links(self, text: str) -> str:
        out: list[str] = []
        pos = 0
        for match in _LINK_RE.finditer(text):
            bang, label, url = match.groups()
            if not bang and not label:
                continue
            out.append(self._emphasis(text[pos : match.start()]))
            if bang:
                out.append(f'<img src="{_attr(url)}" alt="{_attr(label)}" loading="lazy">')
            else:
                target = ' target="_blank" rel="noopener noreferrer"' if self.is_external(url) else ""
                out.append(f'<a href="{_attr(url)}"{target}>{self._emphasis(label)}</a>')
            pos = match.end()
        out.append(self._emphasis(text[pos:]))
        return "".join(out)

    def _emphasis(self, text: str) -> str:
        result = _escape(text)
        for pattern, replacement in _EMPHASIS_RULES:
            result = pattern.sub(replacement, result)
        return result

    def is_external(self, url: str) -> bool:
        """Absolute http(s) URL pointing at a host other than the site's."""
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            return False
        return parsed.hostname.lower() != self._site_host


def render_markdown(text: str, site_host: str | None = None) -> str:
    """Convenience wrapper around MarkdownRenderer.render."""
    return MarkdownRenderer(site_host=site_host).render(text)
