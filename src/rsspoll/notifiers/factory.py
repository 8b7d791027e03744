"""Dispatcher factory for creating the dispatcher from configuration."""

import httpx
import structlog

from rsspoll.config.settings import Settings
from rsspoll.notifiers.webhook import WebhookDispatcher

logger = structlog.get_logger()


def create_dispatcher(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> WebhookDispatcher | None:
    """Create the notification dispatcher if notification is configured.

    Args:
        settings: Application settings.
        transport: Optional httpx transport for the outbound client.

    Returns:
        WebhookDispatcher, or None when the destination or the sender is
        missing. Polling still runs without one.
    """
    if not settings.notification_enabled:
        logger.warning(
            "Notification disabled, destination or sender not configured",
            endpoint_set=bool(settings.notification_endpoint),
            sender_set=bool(settings.notification_sender),
        )
        return None

    logger.info("Webhook dispatcher configured", sender=settings.notification_sender)
    return WebhookDispatcher(
        sender_url=settings.notification_sender,
        timeout=settings.notification_timeout,
        transport=transport,
    )
