"""In-memory content store and query engine.

Holds every ingested Document keyed by slug and answers listing,
lookup, search, and recommendation queries.  A single store-wide lock
serializes writes; reads snapshot under the lock and compute outside
it.  Every document handed to a caller is a deep copy, so mutating a
result never touches the store.
"""

from __future__ import annotations

import logging
import math
import threading
from collections.abc import Iterable

from folio.content.catalog import BLOG_CATEGORIES, POPULAR_TAGS, sorted_categories
from folio.content.config import BlogConfig
from folio.content.feed import build_feed
from folio.content.models import (
    BlogFilter,
    BlogStatistics,
    Category,
    Document,
    Feed,
    ListResponse,
    RelatedDocument,
    SearchResponse,
)
from folio.content.ranking import rank_related
from folio.content.search import matches, search_documents
from folio.content.stats import compute_statistics, tag_counts

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 12

# Alias to avoid shadowing by ContentStore.list method
_list = list


def _copy(document: Document) -> Document:
    return document.model_copy(deep=True)


def _passes(document: Document, criteria: BlogFilter) -> bool:
    """Conjunctive filter check."""
    if criteria.category and document.category.slug != criteria.category:
        return False
    if criteria.tag:
        needle = criteria.tag.lower()
        if not any(needle in tag.lower() for tag in document.tags):
            return False
    if criteria.author and criteria.author.lower() not in document.author.name.lower():
        return False
    if criteria.featured is not None and document.featured != criteria.featured:
        return False
    if criteria.date_from is not None and document.publish_date < criteria.date_from:
        return False
    if criteria.date_to is not None and document.publish_date > criteria.date_to:
        return False
    if criteria.search_term and criteria.search_term.strip():
        return matches(document, criteria.search_term.strip())
    return True


class ContentStore:
    """Thread-safe in-memory store of blog documents."""

    def __init__(self, documents: Iterable[Document] = ()) -> None:
        self._lock = threading.RLock()
        self._by_slug: dict[str, Document] = {}
        self._slug_by_id: dict[str, str] = {}
        self.add_many(documents)

    # ── Private helpers ──────────────────────────────────────────

    def _snapshot(self) -> _list[Document]:
        with self._lock:
            return _list(self._by_slug.values())

    def _published(self) -> _list[Document]:
        return [d for d in self._snapshot() if not d.draft]

    def _find_by_id(self, document_id: str) -> Document | None:
        slug = self._slug_by_id.get(document_id)
        return self._by_slug.get(slug) if slug is not None else None

    def _replace(self, updated: Document) -> None:
        # Documents are swapped whole so readers never see a half-applied change
        self._by_slug[updated.slug] = updated

    # ── Write operations ─────────────────────────────────────────

    def add(self, document: Document) -> None:
        """Insert or replace a document by slug."""
        with self._lock:
            previous = self._by_slug.get(document.slug)
            if previous is not None:
                logger.info("Replacing document with slug %s", document.slug)
                self._slug_by_id.pop(previous.id, None)
            self._by_slug[document.slug] = _copy(document)
            self._slug_by_id[document.id] = document.slug

    def add_many(self, documents: Iterable[Document]) -> None:
        """Insert a batch of documents under one lock acquisition."""
        with self._lock:
            for document in documents:
                self.add(document)

    def record_view(self, document_id: str) -> bool:
        """Increment the view counter. Returns False if the id is unknown."""
        with self._lock:
            document = self._find_by_id(document_id)
            if document is None:
                return False
            self._replace(document.model_copy(update={"views": document.views + 1}))
            return True

    def toggle_like(self, document_id: str) -> bool:
        """Increment the like counter. Returns False if the id is unknown."""
        with self._lock:
            document = self._find_by_id(document_id)
            if document is None:
                return False
            self._replace(document.model_copy(update={"likes": document.likes + 1}))
            return True

    def publish(self, slug: str) -> bool:
        """Promote a draft to published. Returns False if the slug is unknown."""
        with self._lock:
            document = self._by_slug.get(slug)
            if document is None:
                return False
            if document.draft:
                self._replace(document.model_copy(update={"draft": False}))
            return True

    # ── Read operations ──────────────────────────────────────────

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_slug)

    def get_by_slug(self, slug: str) -> Document | None:
        """Return a document by slug, drafts included, or None if not found."""
        with self._lock:
            document = self._by_slug.get(slug)
        return _copy(document) if document is not None else None

    def get(self, document_id: str) -> Document | None:
        """Return a document by id, or None if not found."""
        with self._lock:
            document = self._find_by_id(document_id)
        return _copy(document) if document is not None else None

    def exists(self, slug: str) -> bool:
        """Check whether a document with this slug exists."""
        with self._lock:
            return slug in self._by_slug

    def list(
        self,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        filter: BlogFilter | None = None,
    ) -> ListResponse:
        """Return one page of published documents, newest first.

        ``page`` and ``page_size`` below 1 are clamped to 1.  A page past
        the end is empty but still carries the real totals.
        """
        page = max(1, page)
        page_size = max(1, page_size)
        criteria = filter or BlogFilter()

        matched = [d for d in self._published() if _passes(d, criteria)]
        matched.sort(key=lambda d: d.publish_date, reverse=True)

        total = len(matched)
        start = (page - 1) * page_size
        return ListResponse(
            items=[_copy(d) for d in matched[start : start + page_size]],
            page=page,
            page_size=page_size,
            total=total,
            total_pages=math.ceil(total / page_size),
            categories=self.categories(),
            popular_tags=self.popular_tags(),
        )

    def search(self, term: str) -> SearchResponse:
        """Full-text search over published documents; blank terms match nothing."""
        response = search_documents(
            self._published(),
            term,
            vocabulary=[*POPULAR_TAGS, *self.tag_counts()],
        )
        for hit in response.results:
            hit.document = _copy(hit.document)
        return response

    def featured(self, limit: int = 3) -> _list[Document]:
        """Featured published documents, newest first."""
        docs = [d for d in self._published() if d.featured]
        docs.sort(key=lambda d: d.publish_date, reverse=True)
        return [_copy(d) for d in docs[: max(0, limit)]]

    def recent(self, limit: int = 5) -> _list[Document]:
        """Most recently published documents."""
        docs = self._published()
        docs.sort(key=lambda d: d.publish_date, reverse=True)
        return [_copy(d) for d in docs[: max(0, limit)]]

    def related(
        self,
        document_id: str,
        limit: int = 3,
        *,
        include_drafts: bool = False,
    ) -> _list[RelatedDocument]:
        """Documents related to ``document_id``; empty if the id is unknown."""
        with self._lock:
            reference = self._find_by_id(document_id)
            candidates = _list(self._by_slug.values())
        if reference is None:
            return []
        return rank_related(reference, candidates, limit, include_drafts=include_drafts)

    # ── Reference data and aggregates ────────────────────────────

    def categories(self) -> _list[Category]:
        """Catalog categories plus any ad-hoc ones in use, sorted by order then name."""
        pool = {c.id: c for c in BLOG_CATEGORIES.values()}
        for doc in self._published():
            pool.setdefault(doc.category.id, doc.category)
        return sorted_categories(_list(pool.values()))

    def popular_tags(self) -> _list[str]:
        """The curated popular-tag list."""
        return _list(POPULAR_TAGS)

    def tag_counts(self) -> dict[str, int]:
        """Tag usage across published documents, most used first."""
        return dict(tag_counts(self._snapshot()).most_common())

    def statistics(self) -> BlogStatistics:
        """Aggregate statistics over published documents."""
        stats = compute_statistics(self._snapshot())
        stats.most_popular_posts = [_copy(d) for d in stats.most_popular_posts]
        stats.recent_posts = [_copy(d) for d in stats.recent_posts]
        return stats

    def feed(self, config: BlogConfig) -> Feed:
        """RSS feed model for the newest published documents."""
        return build_feed(self._snapshot(), config)
