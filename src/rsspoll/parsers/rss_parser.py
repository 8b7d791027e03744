"""RSS/Atom feed parser implementation."""

import re

import feedparser

from rsspoll.exceptions import FeedParseError
from rsspoll.models.feed import Feed, FeedImage, FeedItem


class RssParser:
    """Parser for RSS and Atom feeds backed by feedparser.

    Entries without a link (or a permalink-style id to fall back on) are
    dropped, since the link is what identifies an item between polls.
    """

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
        try:
            parsed = feedparser.parse(raw_content)

            if parsed.bozo and not parsed.entries:
                # feedparser sets bozo=1 for any parse issues
                raise FeedParseError(source, f"Feed parse error: {parsed.bozo_exception}")

            items: list[FeedItem] = []
            for entry in parsed.entries:
                item = self._parse_entry(entry)
                if item:
                    items.append(item)

            return Feed(
                source=source,
                title=self._clean_text(parsed.feed.get("title", "")),
                items=tuple(items),
            )

        except FeedParseError:
            raise
        except Exception as e:
            raise FeedParseError(source, f"Unexpected parse error: {e}") from e

    def _parse_entry(self, entry: feedparser.FeedParserDict) -> FeedItem | None:
        """Parse a single feed entry into a FeedItem.

        Returns:
            FeedItem or None if the entry cannot be identified.
        """
        link = entry.get("link") or ""
        if not link:
            guid = entry.get("id", "")
            if guid.startswith(("http://", "https://")):
                link = guid
        if not link:
            return None

        return FeedItem(
            link=link,
            title=self._clean_text(entry.get("title", "")),
            description=entry.get("summary", entry.get("description", "")) or "",
            content=self._extract_content(entry),
            image=self._extract_image(entry),
        )

    def _extract_content(self, entry: feedparser.FeedParserDict) -> str:
        # content:encoded and atom:content both land in entry.content
        for content in entry.get("content", []):
            value = content.get("value")
            if value:
                return value
        return ""

    def _extract_image(self, entry: feedparser.FeedParserDict) -> FeedImage | None:
        """Pick the first image reference an entry carries.

        Checks, in order: itunes/entry image, media:thumbnail, media:content
        and image enclosures.
        """
        image = entry.get("image")
        if isinstance(image, dict) and image.get("href"):
            return FeedImage(url=image["href"], title=image.get("title"))

        for thumb in entry.get("media_thumbnail", []):
            if thumb.get("url"):
                return FeedImage(url=thumb["url"])

        for media in entry.get("media_content", []):
            if media.get("url") and media.get("medium", "image") == "image":
                return FeedImage(url=media["url"])

        for enclosure in entry.get("enclosures", []):
            if enclosure.get("type", "").startswith("image/") and enclosure.get("href"):
                return FeedImage(url=enclosure["href"])

        return None

    def _clean_text(self, text: str) -> str:
        """Collapse whitespace and strip."""
        return re.sub(r"\s+", " ", text).strip()
