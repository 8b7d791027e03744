"""Shared feed cache.

Holds the last successfully fetched snapshot. HTTP handlers read it
concurrently; only the poll service replaces it.
"""

import threading

from rsspoll.models.feed import Snapshot


class FeedCache:
    """Lock-guarded cell holding the current snapshot.

    The lock is held only for the reference read or swap, never across I/O.
    Snapshots are immutable, so handing out the reference is safe.
    """

    def __init__(self, snapshot: Snapshot | None = None):
        self._lock = threading.Lock()
        self._snapshot = snapshot

    def get(self) -> Snapshot | None:
        """Return the current snapshot, or None if nothing was installed yet."""
        with self._lock:
            return self._snapshot

    def replace(self, snapshot: Snapshot) -> Snapshot | None:
        """Install a new snapshot, returning the one it replaced."""
        with self._lock:
            previous, self._snapshot = self._snapshot, snapshot
            return previous

    @property
    def is_populated(self) -> bool:
        return self.get() is not None
