"""In-memory implementation of the SnapshotStore.

Holds the encoded document rather than live objects, so a load never
hands back records the service still mutates.
"""

from rsvps.domain import Snapshot
from rsvps.stores.codec import decode_snapshot, encode_snapshot
from rsvps.stores.interfaces import SnapshotStore


class InMemorySnapshotStore(SnapshotStore):
    """Process-local store for tests and throwaway runs."""

    def __init__(self) -> None:
        self._document: dict | None = None

    def load(self) -> Snapshot:
        if self._document is None:
            return Snapshot()
        return decode_snapshot(self._document)

    def save(self, snapshot: Snapshot) -> None:
        self._document = encode_snapshot(snapshot)
