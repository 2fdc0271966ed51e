"""Store interfaces (repository pattern).

Stores must be swappable and deal in whole snapshots, never in
individual entities.
"""

from abc import ABC, abstractmethod

from rsvps.domain import Snapshot


class SnapshotStore(ABC):
    """Interface for snapshot persistence operations."""

    @abstractmethod
    def load(self) -> Snapshot:
        """Return the stored snapshot, or an empty one if nothing was saved.

        Raises:
            StorageError: If the stored data cannot be read or decoded.
        """
        ...

    @abstractmethod
    def save(self, snapshot: Snapshot) -> None:
        """Replace the stored snapshot with ``snapshot``.

        Raises:
            StorageError: If the snapshot cannot be written.
        """
        ...
