"""Ingestion: raw markdown documents → Document records.

Each raw document is parsed independently (frontmatter, markdown body,
derived fields), so batches are parsed on a thread pool.  Inserting the
results into a ContentStore is the only serialized step.
"""

from __future__ import annotations

import asyncio
import logging
import re
import uuid
from collections.abc import Awaitable, Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from folio.content.catalog import DEFAULT_AUTHOR, resolve_category
from folio.content.derived import calculate_reading_time, generate_excerpt
from folio.content.frontmatter import parse_frontmatter
from folio.content.markdown import MarkdownRenderer
from folio.content.models import Author, Document, SeoMeta
from pydantic import BaseModel

if TYPE_CHECKING:
    from folio.content.store import ContentStore

logger = logging.getLogger(__name__)

_SLUG_STRIP_RE = re.compile(r"[^a-z0-9]+")


class RawDocument(BaseModel):
    """A document as supplied by a loader, before parsing."""

    text: str
    slug: str | None = None
    path: str = ""


def slugify(value: str) -> str:
    """Lowercase, URL-safe slug for *value*."""
    slug = _SLUG_STRIP_RE.sub("-", value.lower()).strip("-")
    return slug or "untitled"


def document_id(slug: str) -> str:
    """Stable id derived from the slug."""
    return uuid.uuid5(uuid.NAMESPACE_URL, f"folio:{slug}").hex[:12]


def parse_publish_date(value: str) -> datetime:
    """Parse an ISO date or datetime; naive values are taken as UTC.

    Unparseable values fall back to the current time.
    """
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        if value:
            logger.warning("Unparseable date %r, using current time", value)
        return datetime.now(tz=UTC)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def build_document(
    text: str,
    *,
    slug: str | None = None,
    site_host: str | None = None,
    default_author: Author | None = None,
) -> Document:
    """Parse one raw document into a Document.

    Excerpt and reading time are derived from the body only when the
    frontmatter does not supply them.
    """
    parsed = parse_frontmatter(text)
    fm = parsed.frontmatter

    excerpt = fm.excerpt or generate_excerpt(parsed.body)
    read_time = fm.read_time or calculate_reading_time(parsed.body)
    doc_slug = slug or slugify(fm.title)

    if fm.author:
        author = Author(name=fm.author)
    else:
        author = (default_author or DEFAULT_AUTHOR).model_copy(deep=True)

    return Document(
        id=document_id(doc_slug),
        slug=doc_slug,
        title=fm.title,
        excerpt=excerpt,
        body=MarkdownRenderer(site_host=site_host).render(parsed.body),
        source=parsed.body,
        author=author,
        category=resolve_category(fm.category),
        tags=list(fm.tags),
        publish_date=parse_publish_date(fm.date),
        read_time=read_time,
        cover_image=fm.cover_image,
        featured=fm.featured,
        draft=fm.draft,
        seo=SeoMeta(
            title=fm.seo_title or fm.title,
            description=fm.seo_description or excerpt,
            keywords=list(fm.keywords) if fm.keywords is not None else list(fm.tags),
            og_image=fm.cover_image,
        ),
    )


def _dedupe_slugs(raw_documents: list[RawDocument], documents: list[Document]) -> list[Document]:
    """Suffix derived slugs (``-2``, ``-3`` ...) that collide within a batch.

    Explicit slugs are kept as given and still upsert.
    """
    taken = {raw.slug for raw in raw_documents if raw.slug}
    result: list[Document] = []
    for raw, doc in zip(raw_documents, documents, strict=True):
        if raw.slug:
            result.append(doc)
            continue
        slug, n = doc.slug, 2
        while slug in taken:
            slug = f"{doc.slug}-{n}"
            n += 1
        taken.add(slug)
        if slug != doc.slug:
            logger.info("Slug %s already used in batch, using %s", doc.slug, slug)
            doc = doc.model_copy(update={"slug": slug, "id": document_id(slug)})
        result.append(doc)
    return result


def build_documents(
    raw_documents: Iterable[RawDocument],
    *,
    site_host: str | None = None,
    default_author: Author | None = None,
    max_workers: int | None = None,
) -> list[Document]:
    """Parse a batch of raw documents in parallel, preserving input order.

    Documents without an explicit slug get one derived from the title;
    collisions within the batch are suffixed so no document is dropped.
    """
    raw_documents = list(raw_documents)

    def _build(raw: RawDocument) -> Document:
        return build_document(
            raw.text,
            slug=raw.slug,
            site_host=site_host,
            default_author=default_author,
        )

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        documents = list(pool.map(_build, raw_documents))
    return _dedupe_slugs(raw_documents, documents)


def ingest(
    store: ContentStore,
    raw_documents: Iterable[RawDocument],
    *,
    site_host: str | None = None,
    default_author: Author | None = None,
    max_workers: int | None = None,
) -> int:
    """Parse *raw_documents* and insert them into *store*.

    Returns:
        Number of documents inserted.
    """
    documents = build_documents(
        raw_documents,
        site_host=site_host,
        default_author=default_author,
        max_workers=max_workers,
    )
    store.add_many(documents)
    logger.info("Ingested %d documents", len(documents))
    return len(documents)


async def fetch_and_ingest(
    store: ContentStore,
    fetch: Callable[[], Awaitable[Iterable[RawDocument]]],
    *,
    site_host: str | None = None,
    default_author: Author | None = None,
    max_workers: int | None = None,
) -> int:
    """Await an external loader, then ingest what it returned.

    Parsing runs off the event loop; the store is only touched once the
    whole batch is parsed.
    """
    raw_documents = list(await fetch())
    documents = await asyncio.to_thread(
        build_documents,
        raw_documents,
        site_host=site_host,
        default_author=default_author,
        max_workers=max_workers,
    )
    store.add_many(documents)
    logger.info("Ingested %d fetched documents", len(documents))
    return len(documents)


def load_directory(content_dir: Path) -> list[RawDocument]:
    """Read every ``*.md`` file in *content_dir*; the file stem is the slug.

    Unreadable files are logged and skipped.
    """
    if not content_dir.exists():
        return []

    raw_documents: list[RawDocument] = []
    for md_file in sorted(content_dir.glob("*.md")):
        try:
            text = md_file.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError):
            logger.warning("Could not read content file: %s", md_file)
            continue
        raw_documents.append(RawDocument(text=text, slug=slugify(md_file.stem), path=str(md_file)))

    return raw_documents
