"""
Per-key critical sections for check-then-insert sequences
"""
import threading
from contextlib import contextmanager
from typing import Dict, Hashable, List


class KeyedLocks:
    """
    One lock per key (room id, staff+date, ...)

    Engine decisions are made against a snapshot; the snapshot read, the
    decision and the insert must all run under the key's lock so two
    requests cannot both pass the same check. In-process only: multi-worker
    deployments need a database-level guard as well.

    A key's lock exists only while some caller holds or waits for it.
    """

    def __init__(self):
        # key -> [lock, number of holders and waiters]
        self._locks: Dict[Hashable, List] = {}
        self._guard = threading.Lock()

    def _acquire_entry(self, key: Hashable) -> threading.Lock:
        with self._guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = self._locks[key] = [threading.Lock(), 0]
            entry[1] += 1
            return entry[0]

    def _release_entry(self, key: Hashable):
        with self._guard:
            entry = self._locks[key]
            entry[1] -= 1
            if entry[1] == 0:
                del self._locks[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    @contextmanager
    def hold(self, key: Hashable):
        lock = self._acquire_entry(key)
        try:
            with lock:
                yield
        finally:
            self._release_entry(key)


booking_locks = KeyedLocks()
appointment_locks = KeyedLocks()
