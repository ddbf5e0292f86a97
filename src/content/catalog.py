"""Read-only reference data shared by every store in the process.

Categories, popular tags, and the default author are loaded once at
import time and exposed through read-only mappings and tuples.  Callers
that need a mutable value get a copy.
"""

from __future__ import annotations

from types import MappingProxyType

from folio.content.models import Author, Category

DEFAULT_CATEGORY_SLUG = "general"
UNKNOWN_CATEGORY_ORDER = 999

BLOG_CATEGORIES: MappingProxyType[str, Category] = MappingProxyType(
    {
        "technical": Category(
            id="technical",
            name="Technical Deep Dives",
            slug="technical",
            description="In-depth technical articles and tutorials",
            color="#3B82F6",
            icon="💻",
            order=1,
        ),
        "angular": Category(
            id="angular",
            name="Angular",
            slug="angular",
            description="Angular framework insights and best practices",
            color="#DC2626",
            icon="⚡",
            order=2,
        ),
        "leadership": Category(
            id="leadership",
            name="Leadership & Management",
            slug="leadership",
            description="Leadership insights and team management",
            color="#7C3AED",
            icon="👥",
            order=3,
        ),
        "best-practices": Category(
            id="practices",
            name="Best Practices",
            slug="best-practices",
            description="Development best practices and patterns",
            color="#059669",
            icon="📋",
            order=4,
        ),
        "performance": Category(
            id="performance",
            name="Performance Optimization",
            slug="performance",
            description="Performance optimization techniques",
            color="#EA580C",
            icon="🚀",
            order=5,
        ),
        "architecture": Category(
            id="architecture",
            name="Software Architecture",
            slug="architecture",
            description="System design and architecture patterns",
            color="#8B5CF6",
            icon="🏗️",
            order=6,
        ),
        "general": Category(
            id="general",
            name="General",
            slug="general",
            description="Everything else",
            order=7,
        ),
    }
)

POPULAR_TAGS: tuple[str, ...] = (
    "Angular",
    "TypeScript",
    "JavaScript",
    "RxJS",
    "NgRx",
    "Signals",
    "Performance",
    "Testing",
    "Architecture",
    "Best Practices",
    "Leadership",
    "Team Management",
    "Code Review",
    "Design Systems",
    "Monorepo",
    "Nx",
    "Web Components",
    "Accessibility",
    "SEO",
    "PWA",
)

DEFAULT_AUTHOR = Author(name="Site Author")


def resolve_category(slug: str) -> Category:
    """Return the catalog category for *slug*.

    Unknown slugs get an ad-hoc category sorted after the catalog ones,
    so a typo in frontmatter never drops a post.
    """
    key = slug.strip().lower() or DEFAULT_CATEGORY_SLUG
    known = BLOG_CATEGORIES.get(key)
    if known is not None:
        return known.model_copy()
    for category in BLOG_CATEGORIES.values():
        if category.id == key:
            return category.model_copy()
    return Category(
        id=key,
        name=key.replace("-", " ").title(),
        slug=key,
        order=UNKNOWN_CATEGORY_ORDER,
    )


def sorted_categories(categories: list[Category] | None = None) -> list[Category]:
    """Sort categories by explicit order, then by name."""
    pool = categories if categories is not None else list(BLOG_CATEGORIES.values())
    return [c.model_copy() for c in sorted(pool, key=lambda c: (c.order, c.name))]
