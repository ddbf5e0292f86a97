"""Content domain: blog document models, parsing, and the query store.

Raw markdown documents flow through the frontmatter parser, markdown
renderer, and derived-field calculator into Document records held by
an in-memory ContentStore, which answers listing, search, and
related-content queries.
"""

from folio.content.config import BlogConfig
from folio.content.derived import calculate_reading_time, generate_excerpt, strip_markup
from folio.content.frontmatter import parse_frontmatter
from folio.content.ingest import (
    RawDocument,
    build_document,
    build_documents,
    fetch_and_ingest,
    ingest,
    load_directory,
)
from folio.content.markdown import MarkdownRenderer, render_markdown
from folio.content.models import (
    Author,
    BlogFilter,
    BlogStatistics,
    Category,
    Document,
    Feed,
    Frontmatter,
    ListResponse,
    ParsedDocument,
    RelatedDocument,
    SearchHit,
    SearchResponse,
    SeoMeta,
)
from folio.content.ranking import rank_related, similarity_score
from folio.content.store import ContentStore

__all__ = [
    "Author",
    "BlogConfig",
    "BlogFilter",
    "BlogStatistics",
    "Category",
    "ContentStore",
    "Document",
    "Feed",
    "Frontmatter",
    "ListResponse",
    "MarkdownRenderer",
    "ParsedDocument",
    "RawDocument",
    "RelatedDocument",
    "SearchHit",
    "SearchResponse",
    "SeoMeta",
    "build_document",
    "build_documents",
    "calculate_reading_time",
    "fetch_and_ingest",
    "generate_excerpt",
    "ingest",
    "load_directory",
    "parse_frontmatter",
    "rank_related",
    "render_markdown",
    "similarity_score",
    "strip_markup",
]
