"""Test configuration and fixtures."""

import json
from xml.sax.saxutils import escape

import httpx
import pytest

from rsspoll.cache import FeedCache
from rsspoll.fetcher import FeedFetcher
from rsspoll.models.feed import Feed, FeedItem, Snapshot
from rsspoll.parsers.rss_parser import RssParser
from rsspoll.services.poll_service import PollService
from rsspoll.sources.http import HttpFeedReader


def build_rss(title: str, links: list[str]) -> str:
    """Build a minimal RSS 2.0 document with one item per link."""
    items = "\n".join(
        f"""    <item>
      <title>Post {escape(link.rsplit("/", 1)[-1])}</title>
      <link>{escape(link)}</link>
      <description>About {escape(link)}</description>
    </item>"""
        for link in links
    )
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>{escape(title)}</title>
    <link>https://example.com/</link>
    <description>Test feed</description>
{items}
  </channel>
</rss>"""


def make_snapshot(*feeds: list[str]) -> Snapshot:
    """Build a snapshot from lists of item links, one list per feed."""
    return Snapshot(
        feeds=tuple(
            Feed(
                source=f"https://feeds.example.com/{i}",
                items=tuple(FeedItem(link=link) for link in links),
            )
            for i, links in enumerate(feeds)
        )
    )


class FeedServer:
    """In-memory stand-in for feed hosts and the notify service.

    Feed URLs answer with the RSS built from their current link list; every
    POST is recorded as a notification.
    """

    def __init__(self):
        self.feeds: dict[str, list[str]] = {}
        self.failing: dict[str, int] = {}
        self.notify_status = 200
        self.notifications: list[dict] = []
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)

        if request.method == "POST":
            self.notifications.append(json.loads(request.content))
            return httpx.Response(self.notify_status)

        if url in self.failing:
            return httpx.Response(self.failing[url], text="upstream error")
        if url in self.feeds:
            return httpx.Response(
                200,
                text=build_rss(url, self.feeds[url]),
                headers={"Content-Type": "application/rss+xml"},
            )
        return httpx.Response(404, text="not found")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


class RecordingDispatcher:
    """Dispatcher double recording every send call."""

    def __init__(self, status: int = 200, error: Exception | None = None):
        self.calls: list[tuple[str, list[str]]] = []
        self._status = status
        self._error = error

    async def send(self, destination, items):
        self.calls.append((destination, list(items)))
        if self._error is not None:
            raise self._error
        return self._status


@pytest.fixture
def feed_server():
    """Fake feed hosts backed by httpx.MockTransport."""
    return FeedServer()


@pytest.fixture
def fetcher(feed_server):
    """Feed fetcher wired to the fake feed server."""
    return FeedFetcher(
        reader=HttpFeedReader(timeout=5, transport=feed_server.transport),
        parser=RssParser(),
    )


@pytest.fixture
def dispatcher():
    return RecordingDispatcher()


@pytest.fixture
def poll_service(fetcher, dispatcher):
    """Poll service with notification configured."""
    return PollService(
        fetcher=fetcher,
        cache=FeedCache(),
        dispatcher=dispatcher,
        destination="https://discord.example.com/webhook",
    )


@pytest.fixture
def sample_rss_content():
    """Sample RSS content exercising content, image and guid fallbacks."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"
     xmlns:content="http://purl.org/rss/1.0/modules/content/"
     xmlns:media="http://search.yahoo.com/mrss/">
  <channel>
    <title>  Example
      News </title>
    <link>https://news.example.com/</link>
    <description>Example feed</description>
    <item>
      <title>First story</title>
      <link>https://news.example.com/first</link>
      <description>Short summary</description>
      <content:encoded><![CDATA[<p>Full body</p>]]></content:encoded>
      <media:thumbnail url="https://news.example.com/first.jpg"/>
    </item>
    <item>
      <title>Second story</title>
      <guid isPermaLink="true">https://news.example.com/second</guid>
      <description>Guid only</description>
      <enclosure url="https://news.example.com/second.png" type="image/png" length="10"/>
    </item>
    <item>
      <title>Unidentifiable story</title>
      <description>No link, no guid</description>
    </item>
  </channel>
</rss>"""
