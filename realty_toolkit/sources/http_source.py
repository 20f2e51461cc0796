from __future__ import annotations

import logging
import time
from typing import Callable, Optional

import requests

from ..exceptions import FeedFetchError
from .base import BaseFeedSource

logger = logging.getLogger(__name__)


class HttpFeedSource(BaseFeedSource):
    """Fetches a feed over HTTP and reuses the body until it goes stale."""

    def __init__(
        self,
        url: str,
        *,
        user_agent: str = "Mozilla/5.0 (compatible; RSS Reader)",
        timeout: float = 10.0,
        revalidate_seconds: int = 3600,
        session: Optional[requests.Session] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if not url:
            raise ValueError("Feed URL must be provided")
        self.url = url
        self._timeout = timeout
        self._revalidate_seconds = revalidate_seconds
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": user_agent})
        self._clock = clock
        self._cached_body: Optional[str] = None
        self._fetched_at: Optional[float] = None

    def fetch(self) -> str:
        if self._is_fresh():
            return self._cached_body  # type: ignore[return-value]
        try:
            response = self._session.get(self.url, timeout=self._timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise FeedFetchError(f"Failed to fetch RSS feed: {self.url} ({exc})") from exc
        body = response.text
        logger.debug("Fetched %d characters from %s", len(body), self.url)
        if self._revalidate_seconds > 0:
            self._cached_body = body
            self._fetched_at = self._clock()
        return body

    def _is_fresh(self) -> bool:
        if self._cached_body is None or self._fetched_at is None:
            return False
        return self._clock() - self._fetched_at < self._revalidate_seconds
