"""Per-month mutation locks.

Generation, approval and manual edits of a month read and then rewrite that
month's shifts, so they must not interleave. Different months never share a
lock and can proceed in parallel.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

logger = logging.getLogger(__name__)


class MonthLocks:
    """One lock per month key, created on first use."""

    def __init__(self):
        self._locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def lock_for(self, month: str) -> threading.Lock:
        with self._registry_lock:
            if month not in self._locks:
                self._locks[month] = threading.Lock()
            return self._locks[month]

    def is_locked(self, month: str) -> bool:
        return self.lock_for(month).locked()

    @contextmanager
    def hold(self, month: str) -> Iterator[None]:
        """Hold the month's lock for the duration of the block."""
        lock = self.lock_for(month)
        if lock.locked():
            logger.debug(f"Waiting for lock on {month}")
        with lock:
            yield
