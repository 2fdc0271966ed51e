from rsvps.domain.models import (
    BatchRsvpUpdate,
    CleanupOptions,
    CleanupResult,
    Event,
    EventReminder,
    EventStats,
    Player,
    RsvpEntry,
    RsvpStats,
    SearchOptions,
    Snapshot,
    WaitlistEntry,
)
from rsvps.domain.value_objects import RsvpKey, RsvpStatus

__all__ = [
    "Player",
    "Event",
    "RsvpEntry",
    "WaitlistEntry",
    "EventReminder",
    "RsvpStats",
    "EventStats",
    "SearchOptions",
    "BatchRsvpUpdate",
    "CleanupOptions",
    "CleanupResult",
    "Snapshot",
    "RsvpKey",
    "RsvpStatus",
]
