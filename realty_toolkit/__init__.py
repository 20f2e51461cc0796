"""Blog feed extraction and investment calculators for the agent site."""

from .blog import BlogService
from .config import ToolkitConfig
from .exceptions import FeedFetchError, MalformedFeedError
from .rss_parser import parse_feed

__all__ = ["BlogService", "ToolkitConfig", "FeedFetchError", "MalformedFeedError", "parse_feed"]
