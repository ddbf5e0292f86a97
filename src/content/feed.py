"""RSS 2.0 feed for published documents."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Iterable
from datetime import UTC, datetime
from email.utils import format_datetime

from folio.content.config import BlogConfig
from folio.content.models import Document, Feed, FeedItem

FEED_LIMIT = 20


def post_url(config: BlogConfig, slug: str) -> str:
    """Absolute URL of a post page."""
    return f"{config.base_url.rstrip('/')}/blog/{slug}"


def build_feed(
    documents: Iterable[Document],
    config: BlogConfig,
    limit: int = FEED_LIMIT,
) -> Feed:
    """Newest published documents as a Feed."""
    published = sorted(
        (d for d in documents if not d.draft),
        key=lambda d: d.publish_date,
        reverse=True,
    )[:limit]

    items = [
        FeedItem(
            title=doc.title,
            description=doc.excerpt,
            link=post_url(config, doc.slug),
            pub_date=doc.publish_date,
            guid=doc.id,
            author=doc.author.name,
            category=doc.category.name,
        )
        for doc in published
    ]
    last_build = items[0].pub_date if items else datetime.now(tz=UTC)

    return Feed(
        title=config.title,
        description=config.description,
        link=f"{config.base_url.rstrip('/')}/blog",
        items=items,
        last_build_date=last_build,
    )


def render_feed(feed: Feed) -> str:
    """Serialize a Feed to an RSS 2.0 XML document."""
    rss = ET.Element("rss", version="2.0")
    channel = ET.SubElement(rss, "channel")
    ET.SubElement(channel, "title").text = feed.title
    ET.SubElement(channel, "description").text = feed.description
    ET.SubElement(channel, "link").text = feed.link
    ET.SubElement(channel, "lastBuildDate").text = format_datetime(feed.last_build_date)

    for item in feed.items:
        node = ET.SubElement(channel, "item")
        ET.SubElement(node, "title").text = item.title
        ET.SubElement(node, "description").text = item.description
        ET.SubElement(node, "link").text = item.link
        ET.SubElement(node, "guid", isPermaLink="false").text = item.guid
        ET.SubElement(node, "pubDate").text = format_datetime(item.pub_date)
        ET.SubElement(node, "author").text = item.author
        if item.category:
            ET.SubElement(node, "category").text = item.category

    return ET.tostring(rss, encoding="unicode", xml_declaration=True)
