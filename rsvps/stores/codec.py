"""Conversion between a Snapshot and its JSON-ready document.

Each collection becomes an ordered list of ``[key, value]`` pairs so the
document can be expanded back into the same mappings.
"""

from typing import Any

from rest_framework import serializers

from rsvps.domain.errors import StorageError
from rsvps.domain.models import Snapshot
from rsvps.domain.value_objects import RsvpKey
from rsvps.stores.serializers import (
    EventReminderSerializer,
    EventSerializer,
    RsvpEntrySerializer,
    WaitlistEntrySerializer,
)

SECTIONS = ("events", "rsvp_entries", "waitlist", "reminders")


def encode_snapshot(snapshot: Snapshot) -> dict[str, list]:
    return {
        "events": [
            [event_id, EventSerializer(event).data]
            for event_id, event in snapshot.events.items()
        ],
        "rsvp_entries": [
            [key.as_pair(), RsvpEntrySerializer(entry).data]
            for key, entry in snapshot.rsvp_entries.items()
        ],
        "waitlist": [
            [event_id, WaitlistEntrySerializer(entries, many=True).data]
            for event_id, entries in snapshot.waitlist.items()
        ],
        "reminders": [
            [event_id, EventReminderSerializer(reminder).data]
            for event_id, reminder in snapshot.reminders.items()
        ],
    }


def _restore(serializer: serializers.BaseSerializer, section: str):
    if not serializer.is_valid():
        raise StorageError(f"Invalid {section} record: {serializer.errors}")
    return serializer.save()


def _check_key(section: str, key, record_key) -> None:
    if key != record_key:
        raise StorageError(
            f"Key {key} in {section} does not match its record ({record_key})"
        )


def decode_snapshot(document: Any) -> Snapshot:
    """Rebuild a Snapshot, raising StorageError on any malformed section.

    Every pair's key must agree with the record it holds.
    """
    if not isinstance(document, dict):
        raise StorageError("Snapshot must be a JSON object")

    snapshot = Snapshot()
    try:
        for event_id, data in document.get("events", []):
            event = _restore(EventSerializer(data=data), "events")
            _check_key("events", event_id, event.id)
            snapshot.events[event_id] = event
        for pair, data in document.get("rsvp_entries", []):
            key = RsvpKey.from_pair(pair)
            entry = _restore(RsvpEntrySerializer(data=data), "rsvp_entries")
            _check_key("rsvp_entries", key, entry.key)
            snapshot.rsvp_entries[key] = entry
        for event_id, data in document.get("waitlist", []):
            entries = _restore(WaitlistEntrySerializer(data=data, many=True), "waitlist")
            for entry in entries:
                _check_key("waitlist", event_id, entry.event_id)
            snapshot.waitlist[event_id] = entries
        for event_id, data in document.get("reminders", []):
            reminder = _restore(EventReminderSerializer(data=data), "reminders")
            _check_key("reminders", event_id, reminder.event_id)
            snapshot.reminders[event_id] = reminder
    except (TypeError, ValueError) as exc:
        raise StorageError(f"Malformed snapshot: {exc}") from exc
    return snapshot
