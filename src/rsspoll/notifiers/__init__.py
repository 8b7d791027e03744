"""Notifiers package."""

from rsspoll.notifiers.base import Dispatcher
from rsspoll.notifiers.discord import DiscordNotifier
from rsspoll.notifiers.factory import create_dispatcher
from rsspoll.notifiers.webhook import WebhookDispatcher

__all__ = [
    "Dispatcher",
    "DiscordNotifier",
    "WebhookDispatcher",
    "create_dispatcher",
]
