"""Wire payloads exchanged over HTTP."""

from pydantic import BaseModel, Field

from rsspoll.models.feed import FeedImage, FeedItem, Snapshot


class PollerConfig(BaseModel):
    """Configuration accepted by the /config endpoint."""

    rss_feeds: list[str] = Field(..., min_length=1, description="Feed URLs to poll, in order")


class NotificationPayload(BaseModel):
    """Body posted to the notification sender.

    Field names follow the notify service contract: ``feed_url`` carries the
    new item links and ``webhook_url`` the final destination.
    """

    feed_url: list[str] = Field(..., description="Links of the new items")
    webhook_url: str = Field(..., description="Destination webhook")


class FeedRecord(BaseModel):
    """Flat item record served by the /rss endpoint."""

    title: str | None = None
    description: str | None = None
    content: str | None = None
    link: str | None = None
    image: FeedImage | None = None

    @classmethod
    def from_item(cls, item: FeedItem) -> "FeedRecord":
        # Empty strings become None so they can be dropped on serialization
        return cls(
            title=item.title or None,
            description=item.description or None,
            content=item.content or None,
            link=item.link or None,
            image=item.image,
        )


def snapshot_to_records(snapshot: Snapshot) -> list[FeedRecord]:
    """Flatten a snapshot into records, feed by feed."""
    return [FeedRecord.from_item(item) for item in snapshot.items()]
