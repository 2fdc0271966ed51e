"""Serializers for transforming domain models to snapshot records and back.

Reading a record only checks its shape. Business rules such as future
event dates are enforced when records are written by the service, not
when they are reloaded.
"""

from rest_framework import serializers

from rsvps.domain.models import Event, EventReminder, Player, RsvpEntry, WaitlistEntry
from rsvps.domain.value_objects import RsvpStatus


def _text(**kwargs) -> serializers.CharField:
    return serializers.CharField(trim_whitespace=False, **kwargs)


class PlayerSerializer(serializers.Serializer):
    """Serializer for Player domain model."""

    id = _text()
    name = _text()
    email = _text()

    def create(self, validated_data) -> Player:
        return Player(**validated_data)


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = _text()
    name = _text()
    description = _text()
    date = serializers.DateTimeField()
    location = _text()
    max_players = serializers.IntegerField(min_value=1)
    archived = serializers.BooleanField(default=False)

    def create(self, validated_data) -> Event:
        return Event(**validated_data)


class RsvpEntrySerializer(serializers.Serializer):
    """Serializer for RsvpEntry domain model."""

    event_id = _text()
    player = PlayerSerializer()
    status = serializers.ChoiceField(choices=RsvpStatus.choices())
    updated_at = serializers.DateTimeField()
    notes = _text(required=False, allow_null=True, allow_blank=True, default=None)

    def create(self, validated_data) -> RsvpEntry:
        return RsvpEntry(
            event_id=validated_data["event_id"],
            player=Player(**validated_data["player"]),
            status=RsvpStatus(validated_data["status"]),
            updated_at=validated_data["updated_at"],
            notes=validated_data.get("notes"),
        )


class WaitlistEntrySerializer(serializers.Serializer):
    """Serializer for WaitlistEntry domain model."""

    event_id = _text()
    player = PlayerSerializer()
    joined_at = serializers.DateTimeField()
    notified_at = serializers.DateTimeField(required=False, allow_null=True, default=None)

    def create(self, validated_data) -> WaitlistEntry:
        return WaitlistEntry(
            event_id=validated_data["event_id"],
            player=Player(**validated_data["player"]),
            joined_at=validated_data["joined_at"],
            notified_at=validated_data.get("notified_at"),
        )


class EventReminderSerializer(serializers.Serializer):
    """Serializer for EventReminder domain model."""

    event_id = _text()
    last_sent_at = serializers.DateTimeField()
    next_send_at = serializers.DateTimeField()
    reminder_interval = serializers.IntegerField(min_value=1)

    def create(self, validated_data) -> EventReminder:
        return EventReminder(**validated_data)
