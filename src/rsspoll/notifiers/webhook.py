"""Webhook notification dispatcher.

Posts the links of new items to the notify service, which forwards them to
the final destination named in the payload.
"""

from collections.abc import Sequence

import httpx
import structlog
from pydantic import ValidationError

from rsspoll.exceptions import DispatchError
from rsspoll.models.payloads import NotificationPayload
from rsspoll.utils.http_client import create_http_client

logger = structlog.get_logger()

NO_CONTENT = 204


class WebhookDispatcher:
    """Single-shot JSON webhook dispatcher.

    Every call makes at most one POST; nothing is retried. A remote error
    status is returned to the caller as-is, only local failures raise.
    """

    def __init__(
        self,
        sender_url: str,
        timeout: float = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize webhook dispatcher.

        Args:
            sender_url: URL of the notify service the payload is posted to.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport, mostly for tests.
        """
        self._sender_url = sender_url
        self._timeout = timeout
        self._transport = transport

    async def send(self, destination: str, items: Sequence[str]) -> int:
        """Send the new item links.

        Args:
            destination: Webhook the notification is meant for.
            items: Links of the new items.

        Returns:
            HTTP status of the response, or 204 without any request when
            there is nothing to send.

        Raises:
            DispatchError: On serialization, connection or timeout failure.
        """
        log = logger.bind(destination=destination, sender=self._sender_url)

        if not items:
            log.debug("No new items, notification skipped")
            return NO_CONTENT

        try:
            payload = NotificationPayload(feed_url=list(items), webhook_url=destination)
            body = payload.model_dump_json()
        except ValidationError as e:
            raise DispatchError(destination, f"Invalid payload: {e}") from e

        log.info("Sending notification", item_count=len(items))

        try:
            # A redirect would mean a second POST
            async with create_http_client(
                timeout=self._timeout,
                follow_redirects=False,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    self._sender_url,
                    content=body,
                    headers={"Content-Type": "application/json"},
                )
        except httpx.TimeoutException as e:
            raise DispatchError(destination, f"Request timed out: {e}") from e
        except httpx.RequestError as e:
            raise DispatchError(destination, f"Request failed: {e}") from e
        except httpx.InvalidURL as e:
            raise DispatchError(destination, f"Invalid sender URL: {e}") from e

        if response.is_success:
            log.info("Notification delivered", status=response.status_code)
        else:
            log.warning(
                "Notification rejected by remote",
                status=response.status_code,
                body=response.text[:200],
            )
        return response.status_code
