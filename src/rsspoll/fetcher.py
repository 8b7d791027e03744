"""Concurrent multi-source feed fetching.

A snapshot is all-or-nothing: every source is fetched in its own task and
the first failure cancels the siblings and fails the whole fetch.
"""

import asyncio
from collections.abc import Sequence

import structlog

from rsspoll.exceptions import SourceFetchError
from rsspoll.models.feed import Feed, Snapshot
from rsspoll.parsers.base import FeedParser
from rsspoll.sources.base import FeedReader

logger = structlog.get_logger()


class FeedFetcher:
    """Fetches and parses a list of feed sources into a Snapshot."""

    def __init__(self, reader: FeedReader, parser: FeedParser):
        """Initialize feed fetcher.

        Args:
            reader: Reader used to download raw feed documents.
            parser: Parser turning raw documents into Feeds.
        """
        self._reader = reader
        self._parser = parser

    async def fetch_one(self, source: str) -> Feed:
        """Fetch and parse a single feed source."""
        raw_content = await self._reader.fetch_raw(source)
        feed = self._parser.parse(raw_content, source)
        logger.debug("Source fetched", source=source, item_count=len(feed.items))
        return feed

    async def fetch_all(self, sources: Sequence[str]) -> Snapshot:
        """Fetch every source concurrently.

        Args:
            sources: Feed URLs, in configuration order. Duplicates are
                fetched independently.

        Returns:
            Snapshot whose feed i was fetched from sources[i].

        Raises:
            SourceFetchError: The first source that failed. Remaining
                in-flight fetches are cancelled and nothing is returned.
        """
        if not sources:
            return Snapshot()

        try:
            async with asyncio.TaskGroup() as group:
                tasks = [group.create_task(self.fetch_one(source)) for source in sources]
        except ExceptionGroup as eg:
            # Siblings are cancelled on first failure, so this is usually the only one
            first = eg.exceptions[0]
            if not isinstance(first, SourceFetchError):
                raise
            logger.warning(
                "Feed fetch failed",
                source=first.source,
                error=str(first),
                failed=len(eg.exceptions),
                expected=len(sources),
            )
            raise first from None

        snapshot = Snapshot(feeds=tuple(task.result() for task in tasks))
        logger.info(
            "Feeds fetched",
            feed_count=len(snapshot.feeds),
            item_count=snapshot.item_count,
        )
        return snapshot
