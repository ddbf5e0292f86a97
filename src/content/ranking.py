"""Related-content ranking by shared category and tags."""

from __future__ import annotations

from collections.abc import Iterable

from folio.content.models import Document, RelatedDocument

CATEGORY_SCORE = 10
TAG_SCORE = 2


def similarity_score(reference: Document, candidate: Document) -> int:
    """+10 for the same category, +2 per candidate tag found in the reference's tags."""
    score = 0
    if candidate.category.id == reference.category.id:
        score += CATEGORY_SCORE
    reference_tags = set(reference.tags)
    score += TAG_SCORE * sum(1 for tag in candidate.tags if tag in reference_tags)
    return score


def rank_related(
    reference: Document,
    candidates: Iterable[Document],
    limit: int,
    *,
    include_drafts: bool = False,
) -> list[RelatedDocument]:
    """Rank *candidates* by similarity to *reference*.

    The reference itself and zero-score candidates never appear; drafts
    only appear with ``include_drafts`` (author preview).  Ties go to the
    more recently published document.
    """
    if limit < 1:
        return []

    scored: list[tuple[int, Document]] = []
    for candidate in candidates:
        if candidate.id == reference.id:
            continue
        if candidate.draft and not include_drafts:
            continue
        score = similarity_score(reference, candidate)
        if score > 0:
            scored.append((score, candidate))

    scored.sort(key=lambda pair: (pair[0], pair[1].publish_date), reverse=True)

    return [
        RelatedDocument(
            id=doc.id,
            slug=doc.slug,
            title=doc.title,
            excerpt=doc.excerpt,
            cover_image=doc.cover_image,
            category=doc.category.model_copy(),
            publish_date=doc.publish_date,
            read_time=doc.read_time,
            score=score,
        )
        for score, doc in scored[:limit]
    ]
