from __future__ import annotations

from abc import ABC, abstractmethod


class BaseFeedSource(ABC):
    """Abstract base class for raw RSS text suppliers."""

    @abstractmethod
    def fetch(self) -> str:
        """Return the raw feed body, raising ``FeedFetchError`` on failure."""
