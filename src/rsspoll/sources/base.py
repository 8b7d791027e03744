"""Abstract feed reader interface using Protocol."""

from typing import Protocol


class FeedReader(Protocol):
    """Retrieves the raw document behind a feed URL."""

    async def fetch_raw(self, url: str) -> str:
        """Fetch raw feed XML content.

        Args:
            url: Feed URL.

        Returns:
            str: Raw XML string.

        Raises:
            SourceFetchError: When the network request fails.
        """
        ...
