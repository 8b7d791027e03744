"""Poll cycle service - main orchestration layer.

Coordinates fetching, change detection, notification and cache publishing.
"""

import asyncio
from collections.abc import Sequence

import structlog

from rsspoll.cache import FeedCache
from rsspoll.diff import diff_snapshots
from rsspoll.exceptions import DispatchError, SourceFetchError
from rsspoll.fetcher import FeedFetcher
from rsspoll.notifiers.base import Dispatcher

logger = structlog.get_logger()


class PollService:
    """Runs poll cycles against the configured feed sources.

    A cycle goes fetch -> diff -> notify (optional) -> publish. Only this
    service writes to the cache. Cycles never overlap: a cycle that starts
    while another one is running waits for it to publish first.
    """

    def __init__(
        self,
        fetcher: FeedFetcher,
        cache: FeedCache,
        dispatcher: Dispatcher | None = None,
        destination: str | None = None,
        sources: Sequence[str] = (),
    ):
        """Initialize poll service.

        Args:
            fetcher: Fetcher producing snapshots.
            cache: Shared cache holding the last published snapshot.
            dispatcher: Notification dispatcher, None when no sender is set.
            destination: Webhook the notifications are meant for.
            sources: Initial feed URLs.
        """
        self._fetcher = fetcher
        self._cache = cache
        self._dispatcher = dispatcher
        self._destination = destination
        self._sources: tuple[str, ...] = tuple(sources)
        self._cycle_lock = asyncio.Lock()
        self._cycle_count = 0

    @property
    def sources(self) -> tuple[str, ...]:
        return self._sources

    @property
    def cache(self) -> FeedCache:
        return self._cache

    @property
    def notification_enabled(self) -> bool:
        return self._dispatcher is not None and bool(self._destination)

    def set_sources(self, sources: Sequence[str]) -> None:
        """Replace the feed sources.

        A cycle already in progress keeps the list it started with.
        """
        self._sources = tuple(sources)
        logger.info("Feed sources updated", source_count=len(self._sources))

    async def run_cycle(self) -> dict:
        """Execute one poll cycle.

        Returns:
            dict: Cycle statistics. ``published`` tells whether the cache
            advanced; ``new_links`` lists the items found new.
        """
        async with self._cycle_lock:
            self._cycle_count += 1
            return await self._run_cycle(self._cycle_count)

    async def wait_idle(self) -> None:
        """Return once no cycle is running."""
        async with self._cycle_lock:
            pass

    async def _run_cycle(self, cycle: int) -> dict:
        sources = self._sources
        log = logger.bind(cycle=cycle, source_count=len(sources))
        log.info("Starting poll cycle")

        stats = {
            "cycle": cycle,
            "sources": len(sources),
            "items_fetched": 0,
            "new_links": [],
            "notification_status": None,
            "published": False,
            "errors": [],
        }

        # Step 1: Fetch every source; any failure aborts the cycle
        try:
            snapshot = await self._fetcher.fetch_all(sources)
        except SourceFetchError as e:
            log.error("Poll cycle aborted, cache left unchanged", source=e.source, error=str(e))
            stats["errors"].append(str(e))
            return stats
        stats["items_fetched"] = snapshot.item_count

        # Step 2: Diff against what readers currently see
        new_links = diff_snapshots(self._cache.get(), snapshot)
        stats["new_links"] = new_links

        # Step 3: Notify, best effort
        if new_links:
            stats["notification_status"] = await self._notify(new_links, stats, log)
        else:
            log.info("No new items")

        # Step 4: Publish regardless of the notification outcome
        self._cache.replace(snapshot)
        stats["published"] = True

        log.info(
            "Poll cycle completed",
            fetched=stats["items_fetched"],
            new=len(new_links),
            notification_status=stats["notification_status"],
        )
        return stats

    async def _notify(self, new_links: list[str], stats: dict, log) -> int | None:
        """Dispatch new links, returning the remote status if a request was made."""
        if not self.notification_enabled:
            log.warning(
                "Notification service is misconfigured, skipping notification",
                new=len(new_links),
            )
            return None

        try:
            return await self._dispatcher.send(self._destination, new_links)
        except DispatchError as e:
            log.error("Failed to send notification", error=str(e))
            stats["errors"].append(str(e))
            return None
