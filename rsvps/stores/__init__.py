from rsvps.stores.interfaces import SnapshotStore
from rsvps.stores.json_store import JsonFileSnapshotStore
from rsvps.stores.memory_store import InMemorySnapshotStore

__all__ = ["SnapshotStore", "JsonFileSnapshotStore", "InMemorySnapshotStore"]
