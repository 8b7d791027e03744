"""Utils package."""

from rsspoll.utils.http_client import create_http_client
from rsspoll.utils.logger import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
    "create_http_client",
]
