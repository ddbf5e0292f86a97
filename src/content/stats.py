"""Aggregate statistics over published documents."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from folio.content.models import BlogStatistics, Document

TOP_POSTS = 5


def tag_counts(documents: Iterable[Document]) -> Counter[str]:
    """Count tag usage across published documents."""
    counts: Counter[str] = Counter()
    for doc in documents:
        if not doc.draft:
            counts.update(doc.tags)
    return counts


def compute_statistics(documents: Iterable[Document], top_n: int = TOP_POSTS) -> BlogStatistics:
    """Totals, per-category and per-tag counts, most viewed and most recent posts."""
    published = [d for d in documents if not d.draft]

    categories: Counter[str] = Counter(d.category.id for d in published)
    by_views = sorted(published, key=lambda d: d.views, reverse=True)
    by_date = sorted(published, key=lambda d: d.publish_date, reverse=True)

    return BlogStatistics(
        total_posts=len(published),
        total_views=sum(d.views for d in published),
        total_likes=sum(d.likes for d in published),
        categories_count=dict(categories),
        tags_count=dict(tag_counts(published)),
        most_popular_posts=by_views[:top_n],
        recent_posts=by_date[:top_n],
    )
