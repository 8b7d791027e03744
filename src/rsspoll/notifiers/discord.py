"""Discord webhook notification implementation.

Relays new item links received from the poller to a Discord channel.
"""

from collections.abc import Sequence

import httpx
import structlog

from rsspoll.exceptions import DispatchError
from rsspoll.utils.http_client import create_http_client

logger = structlog.get_logger()

# Discord rejects message content longer than this
MAX_MESSAGE_LENGTH = 2000


class DiscordNotifier:
    """Discord webhook notifier.

    Links are posted one per line, packed into as few messages as the
    Discord length limit allows.
    """

    def __init__(
        self,
        timeout: float = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._timeout = timeout
        self._transport = transport

    async def send_links(self, webhook_url: str, links: Sequence[str]) -> int:
        """Post links to a Discord webhook.

        Stops at the first message Discord does not accept.

        Args:
            webhook_url: Discord webhook URL.
            links: Item links to announce.

        Returns:
            HTTP status of the last request made.

        Raises:
            DispatchError: When there is nothing to send or a request fails.
        """
        messages = self._build_messages(links)
        if not messages:
            raise DispatchError(webhook_url, "no messages to send")

        log = logger.bind(message_count=len(messages), link_count=len(links))
        status = 0
        try:
            async with create_http_client(
                timeout=self._timeout, transport=self._transport
            ) as client:
                for message in messages:
                    response = await client.post(webhook_url, json={"content": message})
                    status = response.status_code
                    if not response.is_success:
                        log.warning(
                            "Discord rejected message",
                            status=status,
                            body=response.text[:200],
                        )
                        return status
        except httpx.TimeoutException as e:
            raise DispatchError(webhook_url, f"Request timed out: {e}") from e
        except httpx.RequestError as e:
            raise DispatchError(webhook_url, f"Request failed: {e}") from e
        except httpx.InvalidURL as e:
            raise DispatchError(webhook_url, f"Invalid webhook URL: {e}") from e

        log.info("Discord notification sent", status=status)
        return status

    def _build_messages(self, links: Sequence[str]) -> list[str]:
        """Pack links into messages within the Discord length limit."""
        messages: list[str] = []
        current = ""
        for link in links:
            if not link:
                continue
            if len(link) > MAX_MESSAGE_LENGTH:
                logger.warning("Link too long for a Discord message, skipped", length=len(link))
                continue
            candidate = f"{current}\n{link}" if current else link
            if len(candidate) > MAX_MESSAGE_LENGTH:
                messages.append(current)
                current = link
            else:
                current = candidate
        if current:
            messages.append(current)
        return messages
