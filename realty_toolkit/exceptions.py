class FeedError(Exception):
    """Base class for blog feed failures."""


class MalformedFeedError(FeedError):
    """Raised when the supplied text contains no RSS channel."""


class FeedFetchError(FeedError):
    """Raised when a feed body cannot be retrieved from its source."""
