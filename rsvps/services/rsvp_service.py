"""RSVP service - all business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors

The service loads the whole snapshot once, mutates it in memory and writes
it back in full after every change.
"""

import functools
import logging
import math
import threading
from collections.abc import Callable, Iterable
from dataclasses import asdict, replace
from datetime import datetime, timedelta
from typing import Self

from django.conf import settings
from django.utils import timezone

from rsvps.domain import (
    BatchRsvpUpdate,
    CleanupOptions,
    CleanupResult,
    Event,
    EventReminder,
    EventStats,
    Player,
    RsvpEntry,
    RsvpKey,
    RsvpStats,
    RsvpStatus,
    SearchOptions,
    Snapshot,
    WaitlistEntry,
)
from rsvps.domain.errors import (
    AlreadyRespondedError,
    CapacityExceededError,
    EventNotFoundError,
    PlayerNotFoundError,
    RsvpError,
    RsvpNotFoundError,
    StorageError,
    ValidationError,
)
from rsvps.domain.validators import (
    validate_aware_datetime,
    validate_changes,
    validate_event,
    validate_notes,
    validate_player,
    validate_reminder_interval,
    validate_rsvp_status,
)
from rsvps.stores import JsonFileSnapshotStore, SnapshotStore

EVENT_FIELDS = ("name", "description", "date", "location", "max_players")
PLAYER_FIELDS = ("name", "email")
DEFAULT_MAX_AGE_DAYS = 30


def _operation(action: str):
    """Run a public call under the lock, after loading, with error mapping.

    Validation errors and RsvpError pass through unchanged. Anything else
    is logged and re-raised as RsvpError("Failed to <action>").
    """

    def decorator(method):
        @functools.wraps(method)
        def wrapper(self, *args, **kwargs):
            with self._lock:
                try:
                    self._ensure_initialized()
                    return method(self, *args, **kwargs)
                except ValidationError as exc:
                    self._logger.error("Validation error: %s", exc.message)
                    raise
                except RsvpError:
                    raise
                except Exception as exc:
                    self._logger.error("Failed to %s: %s", action, exc)
                    raise RsvpError(f"Failed to {action}") from exc

        return wrapper

    return decorator


def _by_updated_at(entries: Iterable[RsvpEntry]) -> list[RsvpEntry]:
    return sorted(entries, key=lambda entry: entry.updated_at)


class RsvpService:
    """Service for events, RSVPs, waitlists and reminders."""

    def __init__(
        self,
        store: SnapshotStore | None = None,
        logger: logging.Logger | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
        system_wide_capacity: bool | None = None,
    ) -> None:
        self._store = store if store is not None else JsonFileSnapshotStore()
        self._logger = logger or logging.getLogger(__name__)
        self._now = clock or timezone.now
        if system_wide_capacity is None:
            system_wide_capacity = getattr(settings, "RSVP_SYSTEM_WIDE_CAPACITY", False)
        self._system_wide_capacity = system_wide_capacity
        self._lock = threading.RLock()
        self._data = Snapshot()
        self._initialized = False

    @classmethod
    def open(cls, store: SnapshotStore | None = None, **kwargs) -> Self:
        """Build a service and load its snapshot immediately.

        Raises:
            RsvpError: If the snapshot cannot be loaded.
        """
        service = cls(store, **kwargs)
        with service._lock:
            service._ensure_initialized()
        return service

    # -- internals -----------------------------------------------------

    def _ensure_initialized(self) -> None:
        if self._initialized:
            return
        try:
            self._data = self._store.load()
        except Exception as exc:
            self._logger.error("Failed to load RSVP data: %s", exc)
            raise RsvpError("Failed to initialize RSVP service") from exc
        self._initialized = True
        self._logger.info("Successfully loaded RSVP data from storage")

    def _save(self) -> None:
        try:
            self._store.save(self._data)
        except StorageError as exc:
            self._logger.error("Failed to save data: %s", exc)
            raise RsvpError("Failed to save RSVP data") from exc

    def _require_event(self, event_id: str) -> Event:
        event = self._data.events.get(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def _find_player(self, player_id: str) -> Player | None:
        for entry in self._data.rsvp_entries.values():
            if entry.player.id == player_id:
                return entry.player
        return None

    def _require_player(self, player_id: str) -> Player:
        player = self._find_player(player_id)
        if player is None:
            raise PlayerNotFoundError(player_id)
        return player

    def _confirmed_entries(self, event_id: str | None = None) -> list[RsvpEntry]:
        return _by_updated_at(
            entry
            for entry in self._data.rsvp_entries.values()
            if entry.status == RsvpStatus.YES
            and (event_id is None or entry.event_id == event_id)
        )

    def _confirmed_count(self, event_id: str, exclude: RsvpKey | None = None) -> int:
        """Yes responses counted against ``event_id``'s capacity.

        With RSVP_SYSTEM_WIDE_CAPACITY every event's Yes responses count.
        """
        scope = None if self._system_wide_capacity else event_id
        return sum(1 for entry in self._confirmed_entries(scope) if entry.key != exclude)

    def _stats(self) -> RsvpStats:
        entries = list(self._data.rsvp_entries.values())
        total = len(entries)
        confirmed = sum(1 for e in entries if e.status == RsvpStatus.YES)
        declined = sum(1 for e in entries if e.status == RsvpStatus.NO)
        maybe = sum(1 for e in entries if e.status == RsvpStatus.MAYBE)
        return RsvpStats(
            total=total,
            confirmed=confirmed,
            declined=declined,
            maybe=maybe,
            attendance_rate=confirmed / total * 100 if total else 0,
            response_rate=(confirmed + declined + maybe) / total * 100 if total else 0,
        )

    def _write_rsvp(
        self,
        event_id: str,
        player: Player,
        status: RsvpStatus | str,
        notes: str | None,
    ) -> RsvpEntry:
        event = self._require_event(event_id)
        validate_player(player)
        status = validate_rsvp_status(status)
        validate_notes(notes)

        key = RsvpKey(event_id=event_id, player_id=player.id)
        if status == RsvpStatus.YES:
            if self._confirmed_count(event_id, exclude=key) >= event.max_players:
                raise CapacityExceededError(event_id, event.max_players)

        entry = RsvpEntry(
            event_id=event_id,
            player=player,
            status=status,
            updated_at=self._now(),
            notes=notes,
        )
        self._data.rsvp_entries[key] = entry
        self._save()
        self._logger.info("Updated RSVP for player %s to %s", player.name, status)
        return entry

    # -- events ----------------------------------------------------------

    @_operation("create event")
    def create_event(self, event: Event) -> Event:
        """Store a new event. An existing event with the same id is replaced.

        Raises:
            ValidationError: If the event is invalid.
        """
        validate_event(event, self._now())
        if event.max_players <= 0:
            raise ValidationError("max_players must be a positive number")

        self._data.events[event.id] = event
        self._save()
        self._logger.info(
            "Created event: %s with max_players: %s", event.name, event.max_players
        )
        return event

    @_operation("get event")
    def get_event(self, event_id: str) -> Event | None:
        return self._data.events.get(event_id)

    @_operation("list events")
    def list_events(self) -> list[Event]:
        """Return all events, earliest first."""
        return sorted(self._data.events.values(), key=lambda event: event.date)

    @_operation("update event")
    def update_event(self, event_id: str, **changes) -> Event:
        """Merge ``changes`` into an event and re-validate the result.

        Raises:
            EventNotFoundError: If the event does not exist.
            ValidationError: If a field is not updatable or the merged
                event is invalid (including a date now in the past).
        """
        event = self._require_event(event_id)
        validate_changes(changes, EVENT_FIELDS)
        updated = replace(event, **changes)
        validate_event(updated, self._now())

        self._data.events[event_id] = updated
        self._save()
        self._logger.info("Updated event: %s", event.name)
        return updated

    @_operation("delete event")
    def delete_event(self, event_id: str) -> None:
        """Delete an event and every RSVP for it.

        Waitlist entries and reminders for the event are left in place.

        Raises:
            EventNotFoundError: If the event does not exist.
        """
        self._require_event(event_id)
        for key in [k for k in self._data.rsvp_entries if k.event_id == event_id]:
            del self._data.rsvp_entries[key]
        del self._data.events[event_id]
        self._save()
        self._logger.info("Deleted event: %s", event_id)

    # -- RSVPs -----------------------------------------------------------

    @_operation("update RSVP")
    def update_rsvp(
        self,
        event_id: str,
        player: Player,
        status: RsvpStatus | str,
        notes: str | None = None,
    ) -> RsvpEntry:
        """Create or overwrite a player's RSVP for an event.

        Only answers that become Yes are checked against capacity; a
        confirmed player may always step down to No or Maybe.

        Raises:
            EventNotFoundError: If the event does not exist.
            CapacityExceededError: If the event is already full.
            ValidationError: If the player, status or notes are invalid.
        """
        return self._write_rsvp(event_id, player, status, notes)

    @_operation("batch update RSVPs")
    def batch_update_rsvps(self, updates: Iterable[BatchRsvpUpdate]) -> list[RsvpEntry]:
        """Apply updates in order, stopping at the first failure.

        Updates applied before the failure are kept.

        Raises:
            EventNotFoundError: If an update names an unknown event.
            PlayerNotFoundError: If a player has never responded to anything.
        """
        results = []
        for update in updates:
            self._require_event(update.event_id)
            player = self._require_player(update.player_id)
            results.append(
                self._write_rsvp(update.event_id, player, update.status, update.notes)
            )
        return results

    @_operation("cancel RSVP")
    def cancel_rsvp(self, event_id: str, player_id: str) -> None:
        """Raises RsvpNotFoundError if the player has no RSVP for the event."""
        key = RsvpKey(event_id=event_id, player_id=player_id)
        if key not in self._data.rsvp_entries:
            raise RsvpNotFoundError(event_id, player_id)

        del self._data.rsvp_entries[key]
        self._save()
        self._logger.info("Cancelled RSVP for player %s in event %s", player_id, event_id)

    @_operation("get event RSVPs")
    def get_event_rsvps(self, event_id: str) -> list[RsvpEntry]:
        self._require_event(event_id)
        return _by_updated_at(
            entry for entry in self._data.rsvp_entries.values() if entry.event_id == event_id
        )

    @_operation("get confirmed attendees")
    def get_confirmed_attendees(self, event_id: str | None = None) -> list[RsvpEntry]:
        """Return Yes responses, oldest first, optionally for a single event."""
        return self._confirmed_entries(event_id)

    @_operation("search RSVPs")
    def search_rsvps(self, options: SearchOptions | None = None) -> list[RsvpEntry]:
        """Filter all RSVPs. Results are sorted by updated_at.

        ``start_date`` compares against the event's date and only applies
        together with ``event_id``.
        """
        options = options or SearchOptions()
        if options.start_date is not None:
            validate_aware_datetime(options.start_date, "start_date")
        results: Iterable[RsvpEntry] = self._data.rsvp_entries.values()

        if options.event_id:
            results = [e for e in results if e.event_id == options.event_id]
        if options.player_name:
            needle = options.player_name.lower()
            results = [e for e in results if needle in e.player.name.lower()]
        if options.status:
            results = [e for e in results if e.status == options.status]
        if options.start_date and options.event_id:
            event = self._data.events.get(options.event_id)
            if event is not None and event.date < options.start_date:
                results = []

        return _by_updated_at(results)

    # -- statistics ------------------------------------------------------

    @_operation("get RSVP stats")
    def get_rsvp_stats(self) -> RsvpStats:
        """Counts and rates across every event in the store."""
        return self._stats()

    @_operation("get event stats")
    def get_event_stats(self, event_id: str) -> EventStats:
        """Store-wide stats plus the event's countdown and attendance.

        Raises:
            EventNotFoundError: If the event does not exist.
        """
        event = self._require_event(event_id)
        remaining = event.date - self._now()
        return EventStats(
            **asdict(self._stats()),
            event=event,
            days_until_event=math.ceil(remaining / timedelta(days=1)),
            max_players=event.max_players,
            current_players=self._confirmed_count(event_id),
        )

    # -- players ---------------------------------------------------------

    @_operation("update player")
    def update_player(self, player_id: str, **changes) -> Player:
        """Change a player's name or email on every RSVP they hold.

        Raises:
            PlayerNotFoundError: If the player has no RSVPs.
            ValidationError: If the updated player is invalid.
        """
        player = self._require_player(player_id)
        validate_changes(changes, PLAYER_FIELDS)
        updated = replace(player, **changes)
        validate_player(updated)

        for key, entry in self._data.rsvp_entries.items():
            if entry.player.id == player_id:
                self._data.rsvp_entries[key] = replace(entry, player=updated)
        self._save()
        self._logger.info("Updated player: %s", player.name)
        return updated

    @_operation("remove player")
    def remove_player(self, player_id: str) -> None:
        """Raises PlayerNotFoundError if the player has no RSVPs."""
        self._require_player(player_id)
        for key in [k for k in self._data.rsvp_entries if k.player_id == player_id]:
            del self._data.rsvp_entries[key]
        self._save()
        self._logger.info("Removed player: %s", player_id)

    # -- waitlist --------------------------------------------------------

    @_operation("add to waitlist")
    def add_to_waitlist(self, event_id: str, player: Player) -> WaitlistEntry:
        """Queue a player who has not responded to the event yet.

        Raises:
            EventNotFoundError: If the event does not exist.
            AlreadyRespondedError: If the player holds an RSVP for it.
        """
        self._require_event(event_id)
        validate_player(player)
        if RsvpKey(event_id=event_id, player_id=player.id) in self._data.rsvp_entries:
            raise AlreadyRespondedError(event_id, player.id)

        entry = WaitlistEntry(event_id=event_id, player=player, joined_at=self._now())
        self._data.waitlist.setdefault(event_id, []).append(entry)
        self._save()
        self._logger.info("Added player %s to waitlist for event %s", player.name, event_id)
        return entry

    @_operation("get waitlist")
    def get_waitlist(self, event_id: str) -> list[WaitlistEntry]:
        self._require_event(event_id)
        return list(self._data.waitlist.get(event_id, []))

    @_operation("notify waitlist")
    def notify_waitlist(self, event_id: str) -> list[Player]:
        """Stamp the first waitlisted players who fit in the free spots.

        Notification is advisory: nobody leaves the waitlist and no RSVP is
        created.

        Raises:
            EventNotFoundError: If the event does not exist.
        """
        event = self._require_event(event_id)
        available = event.max_players - self._confirmed_count(event_id)
        if available <= 0:
            return []

        now = self._now()
        waitlist = self._data.waitlist.get(event_id, [])
        notified = []
        for position, entry in enumerate(waitlist[:available]):
            waitlist[position] = replace(entry, notified_at=now)
            notified.append(entry.player)

        self._save()
        self._logger.info(
            "Notified %d waitlisted players for event %s", len(notified), event_id
        )
        return notified

    # -- reminders -------------------------------------------------------

    @_operation("setup reminders")
    def setup_reminders(self, event_id: str, interval_days: int) -> EventReminder:
        """Replace the event's reminder schedule, starting now.

        Raises:
            EventNotFoundError: If the event does not exist.
            ValidationError: If the interval is not a positive integer.
        """
        self._require_event(event_id)
        validate_reminder_interval(interval_days)

        now = self._now()
        reminder = EventReminder(
            event_id=event_id,
            last_sent_at=now,
            next_send_at=now + timedelta(days=interval_days),
            reminder_interval=interval_days,
        )
        self._data.reminders[event_id] = reminder
        self._save()
        self._logger.info(
            "Set up reminders for event %s with %s day interval", event_id, interval_days
        )
        return reminder

    @_operation("get reminder")
    def get_reminder(self, event_id: str) -> EventReminder | None:
        return self._data.reminders.get(event_id)

    @_operation("send reminders")
    def send_reminders(self) -> list[Event]:
        """Return events whose reminder is due and reschedule them.

        Reminders for deleted events are skipped without being rescheduled.
        """
        now = self._now()
        due = []
        for event_id, reminder in self._data.reminders.items():
            if reminder.next_send_at > now:
                continue
            event = self._data.events.get(event_id)
            if event is None:
                continue
            due.append(event)
            self._data.reminders[event_id] = replace(
                reminder,
                last_sent_at=now,
                next_send_at=now + timedelta(days=reminder.reminder_interval),
            )

        self._save()
        self._logger.info("Sent reminders for %d events", len(due))
        return due

    # -- maintenance -----------------------------------------------------

    @_operation("cleanup data")
    def cleanup_data(self, options: CleanupOptions | None = None) -> CleanupResult:
        """Archive or delete events older than ``max_age`` days.

        Archived events are not counted. With ``include_rsvps`` the RSVPs of
        every old event are deleted and counted, archived or not.
        """
        options = options or CleanupOptions()
        max_age = options.max_age
        if max_age is None:
            max_age = getattr(settings, "RSVP_CLEANUP_MAX_AGE_DAYS", DEFAULT_MAX_AGE_DAYS)
        cutoff = self._now() - timedelta(days=max_age)
        events_removed = rsvps_removed = 0

        for event_id, event in list(self._data.events.items()):
            if event.date >= cutoff:
                continue
            if options.archive:
                self._data.events[event_id] = replace(event, archived=True)
            else:
                del self._data.events[event_id]
                events_removed += 1

            if options.include_rsvps:
                stale = [k for k in self._data.rsvp_entries if k.event_id == event_id]
                for key in stale:
                    del self._data.rsvp_entries[key]
                rsvps_removed += len(stale)

        self._save()
        self._logger.info(
            "Cleaned up %d events and %d RSVPs", events_removed, rsvps_removed
        )
        return CleanupResult(events=events_removed, rsvps=rsvps_removed)
