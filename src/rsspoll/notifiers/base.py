"""Abstract notifier interface using Protocol."""

from collections.abc import Sequence
from typing import Protocol


class Dispatcher(Protocol):
    """Delivers the links of new items to a notification destination."""

    async def send(self, destination: str, items: Sequence[str]) -> int:
        """Send a notification for new items.

        Args:
            destination: Webhook the notification is meant for.
            items: Links of the new items.

        Returns:
            int: HTTP status of the round trip, including error statuses.

        Raises:
            DispatchError: When the request could not be completed.
        """
        ...
