"""Change detection between two snapshots."""

import structlog

from rsspoll.models.feed import Snapshot

logger = structlog.get_logger()


def diff_snapshots(base: Snapshot | None, candidate: Snapshot) -> list[str]:
    """Return the links present in ``candidate`` but absent from ``base``.

    Links are reported in feed-then-item order. A missing base counts as
    empty, so on the first poll every candidate link is new. Duplicate links
    inside ``candidate`` are each reported; the result is not deduplicated.

    Args:
        base: Previously installed snapshot, or None if there is none yet.
        candidate: Freshly fetched snapshot.

    Returns:
        New item links.
    """
    seen = set(base.links()) if base is not None else set()
    new_links = [link for link in candidate.links() if link not in seen]

    logger.debug(
        "Snapshots compared",
        base_links=len(seen),
        candidate_items=candidate.item_count,
        new_items=len(new_links),
    )
    return new_links
