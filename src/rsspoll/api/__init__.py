"""API package."""

from rsspoll.api.routes import router

__all__ = [
    "router",
]
