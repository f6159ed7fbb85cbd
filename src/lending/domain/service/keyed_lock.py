"""Per-key mutual exclusion.

Operations on the same key (an item, a loan) run one at a time;
operations on different keys never wait on each other.  The table lock
only guards creation of the per-key locks.  Per-key locks are
reentrant, so a caller already holding a key may call code that takes
it again.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterator
from contextlib import contextmanager
from threading import Lock, RLock


class KeyedLock:

    def __init__(self) -> None:
        self._locks: dict[Hashable, RLock] = {}
        self._table_lock = Lock()

    def _lock_for(self, key: Hashable) -> RLock:
        with self._table_lock:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = RLock()
            return lock

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        lock = self._lock_for(key)
        with lock:
            yield
