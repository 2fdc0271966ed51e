"""Domain models representing persisted state.

These are pure domain objects with no persistence concerns.
The snapshot codec lives in rsvps/stores/serializers.py.
"""

from dataclasses import dataclass, field
from datetime import datetime

from rsvps.domain.value_objects import RsvpKey, RsvpStatus


@dataclass(frozen=True)
class Player:
    """Domain representation of a Player."""

    id: str
    name: str
    email: str


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event."""

    id: str
    name: str
    description: str
    date: datetime
    location: str
    max_players: int
    archived: bool = False


@dataclass(frozen=True)
class RsvpEntry:
    """A player's response to one event.

    The player is embedded as a snapshot; profile changes are written back
    to every entry explicitly.
    """

    event_id: str
    player: Player
    status: RsvpStatus
    updated_at: datetime
    notes: str | None = None

    @property
    def key(self) -> RsvpKey:
        return RsvpKey(event_id=self.event_id, player_id=self.player.id)


@dataclass(frozen=True)
class WaitlistEntry:
    """Domain representation of a waitlisted player."""

    event_id: str
    player: Player
    joined_at: datetime
    notified_at: datetime | None = None


@dataclass(frozen=True)
class EventReminder:
    """Reminder schedule for an event. Interval is in days."""

    event_id: str
    last_sent_at: datetime
    next_send_at: datetime
    reminder_interval: int


@dataclass(frozen=True)
class RsvpStats:
    """Aggregate response counts. Rates are percentages."""

    total: int
    confirmed: int
    declined: int
    maybe: int
    attendance_rate: float
    response_rate: float


@dataclass(frozen=True)
class EventStats(RsvpStats):
    """RsvpStats enriched with one event's schedule and capacity."""

    event: Event
    days_until_event: int
    max_players: int
    current_players: int


@dataclass(frozen=True)
class SearchOptions:
    """Filters for RSVP search. Every filter is optional."""

    event_id: str | None = None
    player_name: str | None = None
    status: RsvpStatus | None = None
    start_date: datetime | None = None


@dataclass(frozen=True)
class BatchRsvpUpdate:
    """One item of a batch RSVP update, addressed by player id."""

    event_id: str
    player_id: str
    status: RsvpStatus
    notes: str | None = None


@dataclass(frozen=True)
class CleanupOptions:
    """Options for purging old events. max_age is in days; None means 30."""

    max_age: int | None = None
    archive: bool = False
    include_rsvps: bool = False


@dataclass(frozen=True)
class CleanupResult:
    events: int
    rsvps: int


@dataclass
class Snapshot:
    """All four collections, as loaded from or written to a store."""

    events: dict[str, Event] = field(default_factory=dict)
    rsvp_entries: dict[RsvpKey, RsvpEntry] = field(default_factory=dict)
    waitlist: dict[str, list[WaitlistEntry]] = field(default_factory=dict)
    reminders: dict[str, EventReminder] = field(default_factory=dict)
