"""Parsers package."""

from rsspoll.parsers.base import FeedParser
from rsspoll.parsers.rss_parser import RssParser

__all__ = [
    "FeedParser",
    "RssParser",
]
