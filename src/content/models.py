"""Content domain models: pure Pydantic v2 data types.

These models represent a blog post from ingestion through query time:
the parsed frontmatter, the canonical Document held by the store, and
the response envelopes returned to callers (listings, search results,
related posts, statistics, feeds).  No I/O lives here.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field, field_validator


def _as_utc(value: datetime | None) -> datetime | None:
    """Naive datetimes are taken as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


# ---------------------------------------------------------------------------
# Reference data
# ---------------------------------------------------------------------------


class SocialLinks(BaseModel):
    """Optional social profile links for an author."""

    github: str | None = None
    linkedin: str | None = None
    twitter: str | None = None
    website: str | None = None


class Author(BaseModel):
    """Author of a document."""

    name: str
    email: str = ""
    avatar: str | None = None
    bio: str | None = None
    social_links: SocialLinks | None = None


class Category(BaseModel):
    """A blog category. Sorted by ``order``, ties broken by name."""

    id: str
    name: str
    slug: str
    description: str | None = None
    color: str | None = None
    icon: str | None = None
    order: int = 0


class SeoMeta(BaseModel):
    """Search-engine and social-card metadata."""

    title: str
    description: str = ""
    keywords: list[str] = Field(default_factory=list)
    og_image: str | None = None
    canonical: str | None = None


# ---------------------------------------------------------------------------
# Ingestion
# ---------------------------------------------------------------------------


class Frontmatter(BaseModel):
    """Metadata parsed from a document's leading ``---`` block.

    Optional fields stay ``None`` when the key was absent or could not
    be coerced, so the ingestion step knows which derived values to fill.
    """

    title: str = "Untitled Post"
    date: str = ""
    category: str = "general"
    tags: list[str] = Field(default_factory=list)
    excerpt: str = ""
    cover_image: str | None = None
    author: str | None = None
    seo_title: str | None = None
    seo_description: str | None = None
    keywords: list[str] | None = None
    featured: bool = False
    draft: bool = False
    read_time: int | None = None


class ParsedDocument(BaseModel):
    """Result of splitting a raw document into metadata and body."""

    frontmatter: Frontmatter
    body: str
    has_frontmatter: bool = False


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


class Document(BaseModel):
    """Canonical blog post record held by the content store."""

    id: str
    slug: str
    title: str
    excerpt: str = ""
    body: str = ""
    source: str = ""
    author: Author
    category: Category
    tags: list[str] = Field(default_factory=list)
    publish_date: datetime
    updated_date: datetime | None = None
    read_time: int = Field(default=1, ge=1)
    cover_image: str | None = None
    featured: bool = False
    draft: bool = False
    views: int = Field(default=0, ge=0)
    likes: int = Field(default=0, ge=0)
    seo: SeoMeta

    @field_validator("publish_date", "updated_date")
    @classmethod
    def dates_as_utc(cls, v: datetime | None) -> datetime | None:
        return _as_utc(v)


class RelatedDocument(BaseModel):
    """Summary of a recommended document with its similarity score."""

    id: str
    slug: str
    title: str
    excerpt: str
    cover_image: str | None = None
    category: Category
    publish_date: datetime
    read_time: int
    score: int


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


class BlogFilter(BaseModel):
    """Conjunctive query criteria for listing documents."""

    category: str | None = None
    tag: str | None = None
    author: str | None = None
    featured: bool | None = None
    date_from: datetime | None = None
    date_to: datetime | None = None
    search_term: str | None = None

    @field_validator("date_from", "date_to")
    @classmethod
    def bounds_as_utc(cls, v: datetime | None) -> datetime | None:
        return _as_utc(v)


class ListResponse(BaseModel):
    """One page of a filtered, sorted listing."""

    items: list[Document] = Field(default_factory=list)
    page: int = 1
    page_size: int = 12
    total: int = 0
    total_pages: int = 0
    categories: list[Category] = Field(default_factory=list)
    popular_tags: list[str] = Field(default_factory=list)


class SearchHit(BaseModel):
    """A search match with its relevance indicator."""

    document: Document
    score: float
    matched_fields: list[str] = Field(default_factory=list)
    highlights: dict[str, str] = Field(default_factory=dict)


class SearchResponse(BaseModel):
    """Full-text search results."""

    query: str = ""
    results: list[SearchHit] = Field(default_factory=list)
    total_results: int = 0
    search_time: float = 0.0
    suggestions: list[str] = Field(default_factory=list)


class BlogStatistics(BaseModel):
    """Aggregate numbers over published documents."""

    total_posts: int = 0
    total_views: int = 0
    total_likes: int = 0
    categories_count: dict[str, int] = Field(default_factory=dict)
    tags_count: dict[str, int] = Field(default_factory=dict)
    most_popular_posts: list[Document] = Field(default_factory=list)
    recent_posts: list[Document] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Feed
# ---------------------------------------------------------------------------


class FeedItem(BaseModel):
    """A single RSS item."""

    title: str
    description: str
    link: str
    pub_date: datetime
    guid: str
    author: str
    category: str | None = None


class Feed(BaseModel):
    """An RSS channel."""

    title: str
    description: str
    link: str
    items: list[FeedItem] = Field(default_factory=list)
    last_build_date: datetime
