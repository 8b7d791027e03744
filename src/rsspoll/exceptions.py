"""Custom exceptions for rsspoll.

Provides a structured exception hierarchy for the poll/diff/notify cycle.
"""


class RssPollError(Exception):
    """Base exception class for all rsspoll errors."""

    pass


class SourceFetchError(RssPollError):
    """Raised when a feed source cannot be fetched.

    A single failing source fails the whole snapshot for the cycle.

    Attributes:
        source: The feed URL that failed.
    """

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"Failed to fetch {source}: {message}")


class FeedParseError(SourceFetchError):
    """Raised when fetched content is not a usable feed."""

    def __init__(self, source: str, message: str):
        self.source = source
        RssPollError.__init__(self, f"Failed to parse {source}: {message}")


class DispatchError(RssPollError):
    """Raised when a notification could not be delivered locally.

    Connection errors, timeouts and serialization failures end up here.
    A remote endpoint answering with an error status is not a DispatchError.

    Attributes:
        destination: The webhook destination the notification was meant for.
    """

    def __init__(self, destination: str, message: str):
        self.destination = destination
        super().__init__(f"Notification to {destination} failed: {message}")


class ConfigurationError(RssPollError):
    """Raised when a configuration payload is malformed or incomplete."""

    pass
