"""rsspoll - poll RSS feeds and notify a webhook about new items."""

__version__ = "0.1.0"
