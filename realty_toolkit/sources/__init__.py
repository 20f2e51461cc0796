from .base import BaseFeedSource
from .http_source import HttpFeedSource
from .static_source import SAMPLE_FEED, StaticFeedSource

__all__ = ["BaseFeedSource", "HttpFeedSource", "StaticFeedSource", "SAMPLE_FEED"]
