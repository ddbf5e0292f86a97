"""Unified configuration loaded from .folio.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from folio.content.config import BlogConfig, BlogSeoConfig
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".folio.toml"
# Directories searched for .folio.toml, before the per-user config file
CONFIG_SEARCH_PATHS = [Path(".")]


class ContentSectionConfig(BaseModel):
    """[content] section."""

    directory: str = "./content"
    site_host: str = ""
    max_workers: int | None = None


class SeoSectionConfig(BaseModel):
    """[blog.seo] section."""

    site_name: str = "Folio"
    twitter_handle: str | None = None
    default_image: str = "/assets/images/blog-default.jpg"


class BlogSectionConfig(BaseModel):
    """[blog] section."""

    title: str = "Technical Blog"
    description: str = ""
    author: str = ""
    base_url: str = "http://localhost"
    posts_per_page: int = 12
    featured_posts_count: int = 3
    recent_posts_count: int = 5
    related_posts_count: int = 3
    enable_search: bool = True
    enable_rss: bool = True
    enable_comments: bool = True
    enable_analytics: bool = True
    seo: SeoSectionConfig = Field(default_factory=SeoSectionConfig)


class FolioConfig(BaseModel):
    """Top-level configuration model."""

    content: ContentSectionConfig = Field(default_factory=ContentSectionConfig)
    blog: BlogSectionConfig = Field(default_factory=BlogSectionConfig)

    @property
    def content_dir(self) -> Path:
        return Path(self.content.directory)

    def to_blog_config(self) -> BlogConfig:
        """Convert to the BlogConfig consumed by the content engine."""
        return BlogConfig(
            title=self.blog.title,
            description=self.blog.description,
            author=self.blog.author,
            base_url=self.blog.base_url,
            posts_per_page=max(1, self.blog.posts_per_page),
            featured_posts_count=max(0, self.blog.featured_posts_count),
            recent_posts_count=max(0, self.blog.recent_posts_count),
            related_posts_count=max(0, self.blog.related_posts_count),
            enable_search=self.blog.enable_search,
            enable_rss=self.blog.enable_rss,
            enable_comments=self.blog.enable_comments,
            enable_analytics=self.blog.enable_analytics,
            seo=BlogSeoConfig(
                site_name=self.blog.seo.site_name,
                twitter_handle=self.blog.seo.twitter_handle,
                default_image=self.blog.seo.default_image,
            ),
        )

    def site_host(self) -> str:
        """Explicit [content].site_host, else the host of blog.base_url."""
        return self.content.site_host or self.to_blog_config().site_host


def global_config_path() -> Path:
    """Per-user config file, resolved against the current home directory."""
    return Path.home() / ".config" / "folio" / "config.toml"


def _candidate_files() -> list[Path]:
    """Project-local ``.folio.toml`` files first, then the per-user file."""
    return [d / CONFIG_FILENAME for d in CONFIG_SEARCH_PATHS] + [global_config_path()]


def load_config(path: str | Path | None = None) -> FolioConfig:
    """Build the effective configuration.

    An explicit *path* is used alone.  Otherwise the first existing file
    among ``./.folio.toml`` and ``~/.config/folio/config.toml`` is read.
    Environment variables are applied on top; values that fail
    validation fall back to defaults with a warning.
    """
    data: dict[str, object] = {}

    if path is not None:
        source: Path | None = Path(path)
        if not source.exists():
            logger.warning("Config file not found: %s", source)
            source = None
    else:
        source = next((p for p in _candidate_files() if p.exists()), None)

    if source is not None:
        data = _load_toml(source)
        logger.info("Loaded config from %s", source)

    try:
        config = FolioConfig.model_validate(data)
    except ValidationError as exc:
        logger.warning("Invalid configuration in %s, using defaults: %s", source, exc)
        config = FolioConfig()

    return _apply_env_vars(config)


def merge_cli_overrides(config: FolioConfig, **cli_kwargs: object) -> FolioConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "content_dir": ("content", "directory"),
        "site_host": ("content", "site_host"),
        "base_url": ("blog", "base_url"),
        "page_size": ("blog", "posts_per_page"),
        "related_count": ("blog", "related_posts_count"),
    }

    for key, value in cli_kwargs.items():
        if value is None or key not in mapping:
            continue
        section, field = mapping[key]
        data[section][field] = value

    return FolioConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: FolioConfig) -> FolioConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "FOLIO_CONTENT_DIR": ("content", "directory"),
        "FOLIO_SITE_HOST": ("content", "site_host"),
        "FOLIO_BASE_URL": ("blog", "base_url"),
        "FOLIO_BLOG_TITLE": ("blog", "title"),
        "FOLIO_AUTHOR": ("blog", "author"),
    }

    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[section][field] = value

    per_page_raw = os.environ.get("FOLIO_POSTS_PER_PAGE")
    if per_page_raw is not None:
        try:
            data["blog"]["posts_per_page"] = int(per_page_raw)
        except ValueError:
            logger.warning("Ignoring non-integer FOLIO_POSTS_PER_PAGE=%r", per_page_raw)

    search_raw = os.environ.get("FOLIO_ENABLE_SEARCH")
    if search_raw is not None:
        data["blog"]["enable_search"] = search_raw.lower() in ("true", "1", "yes")

    return FolioConfig.model_validate(data)
