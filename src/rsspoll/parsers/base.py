"""Abstract feed parser interface using Protocol."""

from typing import Protocol

from rsspoll.models.feed import Feed


class FeedParser(Protocol):
    """Feed document parser abstraction protocol."""

    def parse(self, raw_content: str, source: str) -> Feed:
        """Parse feed content into a Feed.

        Args:
            raw_content: Raw XML string fetched from the source.
            source: Source URL, recorded on the resulting Feed.

        Returns:
            Parsed Feed.

        Raises:
            FeedParseError: When parsing fails.
        """
        ...
