"""Full-text search over documents.

Matching is a case-insensitive substring test against title, excerpt,
plain-text body, tags, and category name.  Each hit is scored by which
fields matched, with a highlight snippet per matched field.
"""

from __future__ import annotations

import html
import time
from collections.abc import Iterable

from folio.content.derived import strip_markup
from folio.content.models import Document, SearchHit, SearchResponse

FIELD_WEIGHTS: dict[str, float] = {
    "title": 10.0,
    "tags": 5.0,
    "category": 3.0,
    "excerpt": 3.0,
    "body": 1.0,
}
SNIPPET_RADIUS = 40
MAX_SUGGESTIONS = 5


def _field_texts(document: Document) -> dict[str, str]:
    return {
        "title": document.title,
        "tags": ", ".join(document.tags),
        "category": document.category.name,
        "excerpt": document.excerpt,
        "body": strip_markup(document.body),
    }


def highlight(text: str, term: str, radius: int = SNIPPET_RADIUS) -> str:
    """Snippet of *text* around the first occurrence of *term*, wrapped in <mark>.

    Returns an empty string when *term* does not occur.
    """
    start = text.lower().find(term.lower())
    if start == -1:
        return ""
    end = start + len(term)
    lo = max(0, start - radius)
    hi = min(len(text), end + radius)
    prefix = "..." if lo > 0 else ""
    suffix = "..." if hi < len(text) else ""
    return (
        prefix
        + html.escape(text[lo:start])
        + "<mark>"
        + html.escape(text[start:end])
        + "</mark>"
        + html.escape(text[end:hi])
        + suffix
    )


def matches(document: Document, term: str) -> bool:
    """Whether *term* occurs in any searchable field of *document*."""
    needle = term.lower()
    return (
        needle in document.title.lower()
        or needle in document.excerpt.lower()
        or needle in strip_markup(document.body).lower()
        or any(needle in tag.lower() for tag in document.tags)
        or needle in document.category.name.lower()
    )


def score_document(document: Document, term: str) -> SearchHit | None:
    """Score *document* against *term*; None when nothing matches."""
    needle = term.lower()
    matched: list[str] = []
    highlights: dict[str, str] = {}
    score = 0.0

    for field, text in _field_texts(document).items():
        if field == "tags":
            hit = any(needle in tag.lower() for tag in document.tags)
        else:
            hit = needle in text.lower()
        if not hit:
            continue
        matched.append(field)
        score += FIELD_WEIGHTS[field]
        highlights[field] = highlight(text, term)

    if not matched:
        return None
    return SearchHit(
        document=document,
        score=score,
        matched_fields=matched,
        highlights=highlights,
    )


def suggest(term: str, vocabulary: Iterable[str], limit: int = MAX_SUGGESTIONS) -> list[str]:
    """Vocabulary entries containing *term*, in vocabulary order."""
    needle = term.strip().lower()
    if not needle:
        return []
    seen: set[str] = set()
    out: list[str] = []
    for word in vocabulary:
        key = word.lower()
        if needle in key and key not in seen:
            seen.add(key)
            out.append(word)
            if len(out) >= limit:
                break
    return out


def search_documents(
    documents: Iterable[Document],
    query: str,
    vocabulary: Iterable[str] = (),
) -> SearchResponse:
    """Search *documents* for *query*.

    A blank query is a no-op and returns an empty response.  Hits are
    ordered by score, then by publish date, newest first.
    """
    term = query.strip()
    if not term:
        return SearchResponse(query=query)

    started = time.perf_counter()
    hits = [hit for doc in documents if (hit := score_document(doc, term)) is not None]
    hits.sort(key=lambda h: (h.score, h.document.publish_date), reverse=True)
    elapsed_ms = (time.perf_counter() - started) * 1000

    return SearchResponse(
        query=query,
        results=hits,
        total_results=len(hits),
        search_time=round(elapsed_ms, 3),
        suggestions=suggest(term, vocabulary),
    )
