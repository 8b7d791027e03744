"""Feed data models.

A Snapshot is what one successful poll produces: one Feed per configured
source, in configuration order.
"""

from collections.abc import Iterator

from pydantic import BaseModel, Field


class FeedImage(BaseModel):
    """Image attached to a feed item."""

    url: str = Field(..., description="Image URL")
    title: str | None = Field(default=None)

    model_config = {"frozen": True}


class FeedItem(BaseModel):
    """Single entry of a feed.

    Identity for change detection is the link alone.
    """

    link: str = Field(..., description="Stable item URL, used as identity key")
    title: str = Field(default="")
    description: str = Field(default="")
    content: str = Field(default="")
    image: FeedImage | None = Field(default=None)

    model_config = {"frozen": True}


class Feed(BaseModel):
    """Result of fetching one feed source."""

    source: str = Field(..., description="URL the feed was fetched from")
    title: str = Field(default="")
    items: tuple[FeedItem, ...] = Field(default_factory=tuple)

    model_config = {"frozen": True}


class Snapshot(BaseModel):
    """Ordered feeds from one poll, position i matching source i."""

    feeds: tuple[Feed, ...] = Field(default_factory=tuple)

    model_config = {"frozen": True}

    def links(self) -> Iterator[str]:
        """Yield every item link, feed by feed, in item order."""
        for feed in self.feeds:
            for item in feed.items:
                yield item.link

    def items(self) -> Iterator[FeedItem]:
        """Yield every item, feed by feed."""
        for feed in self.feeds:
            yield from feed.items

    @property
    def item_count(self) -> int:
        return sum(len(feed.items) for feed in self.feeds)
