from __future__ import annotations

from dataclasses import asdict
from datetime import date
import logging
import re
from typing import Callable, List, Optional

from .config import ToolkitConfig
from .exceptions import FeedError
from .formatting import format_long_date, format_post_date
from .models import BlogPost, FeedItem
from .rss_parser import DEFAULT_AUTHOR, DEFAULT_CATEGORY, parse_feed
from .sources import BaseFeedSource, HttpFeedSource, StaticFeedSource

DEFAULT_CATEGORY_SLUG = "market-insights"
FALLBACK_TITLE = "Understanding Today's Real Estate Market"
FALLBACK_DESCRIPTION = "Expert analysis and trends to help you make informed real estate decisions"
FALLBACK_CATEGORY = "Real Estate News"

logger = logging.getLogger(__name__)


def slugify_category(category: str) -> str:
    slug = re.sub(r"\s+", "-", (category or "").lower())
    slug = re.sub(r"[^a-z0-9-]", "", slug)
    return slug or DEFAULT_CATEGORY_SLUG


class BlogService:
    """Turns the syndicated market-insights feed into blog post cards."""

    def __init__(
        self,
        config: Optional[ToolkitConfig] = None,
        source: Optional[BaseFeedSource] = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.config = config or ToolkitConfig.from_env()
        self.source = source if source is not None else self._build_source()
        self._today = today

    def _build_source(self) -> BaseFeedSource:
        if self.config.feed_source == "static":
            return StaticFeedSource()
        if self.config.feed_source != "http":
            raise ValueError(f"Unknown feed source: {self.config.feed_source!r}")
        return HttpFeedSource(
            self.config.feed_url,
            user_agent=self.config.user_agent,
            timeout=self.config.request_timeout,
            revalidate_seconds=self.config.revalidate_seconds,
        )

    def clamp_limit(self, limit: Optional[object]) -> int:
        try:
            value = int(limit) if limit is not None else self.config.default_limit
        except (TypeError, ValueError):
            value = self.config.default_limit
        return min(max(value, 1), self.config.max_limit)

    def recent_posts(self, limit: Optional[object] = None) -> List[BlogPost]:
        count = self.clamp_limit(limit)
        try:
            feed = parse_feed(self.source.fetch())
        except FeedError as exc:
            logger.warning("Blog feed unavailable, serving fallback post: %s", exc)
            return [self.fallback_post()]
        return [self._to_post(item) for item in feed.items[:count]]

    def _to_post(self, item: FeedItem) -> BlogPost:
        category = item.categories[0] if item.categories else DEFAULT_CATEGORY
        return BlogPost(
            title=item.title,
            post_link=item.link,
            description=item.description,
            category=category,
            category_link=self.config.category_url_template.format(slug=slugify_category(category)),
            author=item.author,
            date=format_post_date(item.published_at),
            image_url=item.image_url or self.config.placeholder_image,
        )

    def fallback_post(self) -> BlogPost:
        return BlogPost(
            title=FALLBACK_TITLE,
            post_link=self.config.fallback_link,
            description=FALLBACK_DESCRIPTION,
            category=FALLBACK_CATEGORY,
            category_link=self.config.fallback_link,
            author=DEFAULT_AUTHOR,
            date=format_long_date(self._today()),
            image_url=self.config.placeholder_image,
        )

    def to_dict(self, post: BlogPost) -> dict:
        data = asdict(post)
        return {
            "title": data["title"],
            "postLink": data["post_link"],
            "description": data["description"],
            "category": data["category"],
            "categoryLink": data["category_link"],
            "author": data["author"],
            "date": data["date"],
            "imageUrl": data["image_url"],
        }
