# carsdb/db.py
"""Process-wide holder of the active cars snapshot.

The refresh job is the only writer; it swaps the reference to a fully built
snapshot. Readers take the reference once per operation and never see a
partially built dataset.
"""
import threading

from .models import Snapshot
from .queries import QueryEngine


class SnapshotStore:
    def __init__(self, snapshot: Snapshot = None):
        self._snapshot = snapshot if snapshot is not None else Snapshot.empty()
        self._write_lock = threading.Lock()
        self.version = 0

    @property
    def current(self) -> Snapshot:
        return self._snapshot

    def publish(self, snapshot: Snapshot) -> Snapshot:
        """Make `snapshot` the active one and return the one it replaced."""
        with self._write_lock:
            previous, self._snapshot = self._snapshot, snapshot
            self.version += 1
        return previous


store = SnapshotStore()


def get_db():
    return QueryEngine(store)
