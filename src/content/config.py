"""Configuration models consumed by the content engine.

The engine treats these as read-only input: callers build a BlogConfig
(usually through ``folio.config.FolioConfig.to_blog_config``) and pass it
to the operations that need it.
"""

from urllib.parse import urlparse

from pydantic import BaseModel, Field


class SocialSharingConfig(BaseModel):
    """Which share buttons the host UI should offer."""

    enabled: bool = True
    platforms: list[str] = Field(
        default_factory=lambda: ["twitter", "linkedin", "facebook", "reddit", "hackernews"]
    )


class BlogSeoConfig(BaseModel):
    """Site-wide SEO defaults."""

    site_name: str = "Folio"
    twitter_handle: str | None = None
    default_image: str = "/assets/images/blog-default.jpg"
    enable_structured_data: bool = True
    enable_open_graph: bool = True
    enable_twitter_cards: bool = True


class BlogConfig(BaseModel):
    """Configuration for the blog content engine."""

    title: str = "Technical Blog"
    description: str = ""
    author: str = ""
    base_url: str = "http://localhost"
    posts_per_page: int = Field(default=12, ge=1)
    featured_posts_count: int = Field(default=3, ge=0)
    recent_posts_count: int = Field(default=5, ge=0)
    related_posts_count: int = Field(default=3, ge=0)
    enable_comments: bool = True
    enable_search: bool = True
    enable_rss: bool = True
    enable_analytics: bool = True
    social_sharing: SocialSharingConfig = Field(default_factory=SocialSharingConfig)
    seo: BlogSeoConfig = Field(default_factory=BlogSeoConfig)

    @property
    def site_host(self) -> str:
        """Hostname used to tell internal links from external ones."""
        return urlparse(self.base_url).hostname or ""
