"""Models package."""

from rsspoll.models.feed import Feed, FeedImage, FeedItem, Snapshot
from rsspoll.models.payloads import (
    FeedRecord,
    NotificationPayload,
    PollerConfig,
    snapshot_to_records,
)

__all__ = [
    "Feed",
    "FeedImage",
    "FeedItem",
    "Snapshot",
    "FeedRecord",
    "NotificationPayload",
    "PollerConfig",
    "snapshot_to_records",
]
