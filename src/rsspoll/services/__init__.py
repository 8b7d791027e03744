"""Services package."""

from rsspoll.services.poll_service import PollService

__all__ = [
    "PollService",
]
