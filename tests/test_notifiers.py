"""Tests for the webhook dispatcher and the Discord relay notifier."""

import json

import httpx
import pytest

from rsspoll.exceptions import DispatchError
from rsspoll.notifiers.discord import MAX_MESSAGE_LENGTH, DiscordNotifier
from rsspoll.notifiers.webhook import WebhookDispatcher

SENDER = "http://notify.test/push"
DESTINATION = "https://discord.example.com/api/webhooks/1/abc"


class Recorder:
    def __init__(self, status: int = 200):
        self.status = status
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status, text="ok")


async def test_send_posts_payload_once():
    recorder = Recorder()
    dispatcher = WebhookDispatcher(SENDER, transport=httpx.MockTransport(recorder))

    status = await dispatcher.send(DESTINATION, ["https://a.test/1", "https://a.test/2"])

    assert status == 200
    assert len(recorder.requests) == 1
    request = recorder.requests[0]
    assert request.method == "POST"
    assert str(request.url) == SENDER
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.content) == {
        "feed_url": ["https://a.test/1", "https://a.test/2"],
        "webhook_url": DESTINATION,
    }


async def test_send_without_items_skips_request():
    recorder = Recorder()
    dispatcher = WebhookDispatcher(SENDER, transport=httpx.MockTransport(recorder))

    status = await dispatcher.send(DESTINATION, [])

    assert status == 204
    assert recorder.requests == []


@pytest.mark.parametrize("remote_status", [302, 307, 400, 404, 500, 503])
async def test_non_success_status_is_returned_not_raised(remote_status):
    recorder = Recorder(status=remote_status)
    dispatcher = WebhookDispatcher(SENDER, transport=httpx.MockTransport(recorder))

    status = await dispatcher.send(DESTINATION, ["https://a.test/1"])

    assert status == remote_status
    assert len(recorder.requests) == 1  # no retry


async def test_redirect_is_returned_without_second_post():
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(307, headers={"Location": "http://elsewhere.test/x"})

    dispatcher = WebhookDispatcher(SENDER, transport=httpx.MockTransport(handler))

    status = await dispatcher.send(DESTINATION, ["https://a.test/1"])

    assert status == 307
    assert [str(r.url) for r in requests] == [SENDER]


async def test_connection_failure_raises_dispatch_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    dispatcher = WebhookDispatcher(SENDER, transport=httpx.MockTransport(handler))

    with pytest.raises(DispatchError) as exc_info:
        await dispatcher.send(DESTINATION, ["https://a.test/1"])

    assert exc_info.value.destination == DESTINATION


async def test_timeout_raises_dispatch_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("too slow", request=request)

    dispatcher = WebhookDispatcher(SENDER, timeout=0.1, transport=httpx.MockTransport(handler))

    with pytest.raises(DispatchError, match="timed out"):
        await dispatcher.send(DESTINATION, ["https://a.test/1"])


async def test_discord_posts_links_as_one_message():
    recorder = Recorder(status=204)
    notifier = DiscordNotifier(transport=httpx.MockTransport(recorder))

    status = await notifier.send_links(DESTINATION, ["https://a.test/1", "https://a.test/2"])

    assert status == 204
    assert len(recorder.requests) == 1
    assert json.loads(recorder.requests[0].content) == {
        "content": "https://a.test/1\nhttps://a.test/2"
    }


async def test_discord_splits_long_link_lists():
    recorder = Recorder(status=204)
    notifier = DiscordNotifier(transport=httpx.MockTransport(recorder))
    links = [f"https://a.test/{i:04d}/" + "x" * 80 for i in range(60)]

    await notifier.send_links(DESTINATION, links)

    contents = [json.loads(r.content)["content"] for r in recorder.requests]
    assert len(contents) > 1
    assert all(len(c) <= MAX_MESSAGE_LENGTH for c in contents)
    assert "\n".join(contents).split("\n") == links


async def test_discord_stops_at_first_rejection():
    recorder = Recorder(status=429)
    notifier = DiscordNotifier(transport=httpx.MockTransport(recorder))
    links = [f"https://a.test/{i}/" + "x" * 500 for i in range(10)]

    status = await notifier.send_links(DESTINATION, links)

    assert status == 429
    assert len(recorder.requests) == 1


async def test_discord_without_links_raises():
    notifier = DiscordNotifier(transport=httpx.MockTransport(Recorder()))

    with pytest.raises(DispatchError, match="no messages to send"):
        await notifier.send_links(DESTINATION, [])


async def test_discord_skips_links_over_message_limit():
    recorder = Recorder(status=204)
    notifier = DiscordNotifier(transport=httpx.MockTransport(recorder))
    too_long = "https://a.test/" + "x" * MAX_MESSAGE_LENGTH

    await notifier.send_links(DESTINATION, [too_long, "https://a.test/1"])

    assert [json.loads(r.content)["content"] for r in recorder.requests] == ["https://a.test/1"]


async def test_discord_with_only_oversized_links_raises():
    recorder = Recorder()
    notifier = DiscordNotifier(transport=httpx.MockTransport(recorder))

    with pytest.raises(DispatchError, match="no messages to send"):
        await notifier.send_links(DESTINATION, ["https://a.test/" + "x" * MAX_MESSAGE_LENGTH])

    assert recorder.requests == []
