"""Sources package."""

from rsspoll.sources.base import FeedReader
from rsspoll.sources.http import HttpFeedReader

__all__ = [
    "FeedReader",
    "HttpFeedReader",
]
