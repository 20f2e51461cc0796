from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

AFFILIATE_QUERY = "a=956758-ef2edda2f940e018328655620ea05f18"
DEFAULT_FEED_URL = f"https://www.simplifyingthemarket.com/en/feed?{AFFILIATE_QUERY}"
DEFAULT_CATEGORY_URL_TEMPLATE = (
    "https://www.simplifyingthemarket.com/en/category/{slug}/?" + AFFILIATE_QUERY
)
DEFAULT_HOME_URL = f"https://www.simplifyingthemarket.com/?{AFFILIATE_QUERY}"


@dataclass(slots=True)
class ToolkitConfig:
    """Runtime configuration for the blog feed and calculators."""

    feed_url: str = DEFAULT_FEED_URL
    feed_source: str = "http"
    default_limit: int = 3
    max_limit: int = 20
    request_timeout: float = 10.0
    revalidate_seconds: int = 3600
    user_agent: str = "Mozilla/5.0 (compatible; RSS Reader)"
    category_url_template: str = DEFAULT_CATEGORY_URL_TEMPLATE
    fallback_link: str = DEFAULT_HOME_URL
    placeholder_image: str = "/placeholder-blog.jpg"

    @classmethod
    def from_env(cls) -> "ToolkitConfig":
        import os

        defaults = cls()
        return cls(
            feed_url=os.getenv("REALTY_FEED_URL") or defaults.feed_url,
            feed_source=(os.getenv("REALTY_FEED_SOURCE") or defaults.feed_source).strip().lower(),
            default_limit=_parse_int("REALTY_BLOG_DEFAULT_LIMIT", os.getenv("REALTY_BLOG_DEFAULT_LIMIT"), defaults.default_limit),
            max_limit=_parse_int("REALTY_BLOG_MAX_LIMIT", os.getenv("REALTY_BLOG_MAX_LIMIT"), defaults.max_limit),
            request_timeout=float(os.getenv("REALTY_FEED_TIMEOUT", str(defaults.request_timeout))),
            revalidate_seconds=_parse_int(
                "REALTY_FEED_REVALIDATE_SECONDS",
                os.getenv("REALTY_FEED_REVALIDATE_SECONDS"),
                defaults.revalidate_seconds,
            ),
            user_agent=os.getenv("REALTY_FEED_USER_AGENT") or defaults.user_agent,
            category_url_template=os.getenv("REALTY_CATEGORY_URL_TEMPLATE") or defaults.category_url_template,
            fallback_link=os.getenv("REALTY_FALLBACK_LINK") or defaults.fallback_link,
            placeholder_image=os.getenv("REALTY_PLACEHOLDER_IMAGE") or defaults.placeholder_image,
        )


def _parse_int(name: str, value: Optional[str], default: int) -> int:
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer if set") from None
