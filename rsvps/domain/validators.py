"""Validation rules for players, events and RSVP statuses.

Every function is pure and raises ValidationError on the first rule that
fails. Nothing is aggregated. Text fields are also held to the character
rules the snapshot serializers apply when reading, so anything accepted
here can be loaded back.
"""

import re
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import ProhibitNullCharactersValidator
from django.utils import timezone
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.validators import ProhibitSurrogateCharactersValidator

from rsvps.domain.errors import ValidationError
from rsvps.domain.models import Event, Player
from rsvps.domain.value_objects import RsvpStatus

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

STORABLE_TEXT_VALIDATORS = (
    ProhibitNullCharactersValidator(),
    ProhibitSurrogateCharactersValidator(),
)


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _check_storable(value: str, label: str) -> None:
    for validator in STORABLE_TEXT_VALIDATORS:
        try:
            validator(value)
        except (DjangoValidationError, DRFValidationError) as exc:
            raise ValidationError(f"{label} contains characters that cannot be stored") from exc


def validate_player(player: Player) -> None:
    if not isinstance(player.id, str) or not player.id:
        raise ValidationError("Player ID is required and must be a string")
    if _is_blank(player.name):
        raise ValidationError(
            "Player name is required and must be a non-empty string"
        )
    if not isinstance(player.email, str) or not EMAIL_PATTERN.match(player.email):
        raise ValidationError("Valid email is required")
    _check_storable(player.id, "Player ID")
    _check_storable(player.name, "Player name")
    _check_storable(player.email, "Player email")


def validate_rsvp_status(status: Any) -> RsvpStatus:
    """Return the matching RsvpStatus. Matching is case-sensitive."""
    if isinstance(status, str) and status in RsvpStatus.choices():
        return RsvpStatus(status)
    raise ValidationError(
        "Invalid RSVP status. Must be one of: " + ", ".join(RsvpStatus.choices())
    )


def validate_notes(notes: Any) -> None:
    if notes is None:
        return
    if not isinstance(notes, str):
        raise ValidationError("Notes must be a string")
    _check_storable(notes, "Notes")


def validate_aware_datetime(value: Any, label: str) -> None:
    if not isinstance(value, datetime) or timezone.is_naive(value):
        raise ValidationError(f"{label} must be a timezone-aware datetime")


def validate_event(event: Event, now: datetime | None = None) -> None:
    """Check an event as a whole.

    The date must be timezone-aware and not earlier than ``now``, so an
    event that has already started cannot be created or edited.
    """
    if not isinstance(event.id, str) or not event.id:
        raise ValidationError("Event ID is required and must be a string")
    if _is_blank(event.name):
        raise ValidationError("Event name is required and must be a non-empty string")
    if _is_blank(event.description):
        raise ValidationError(
            "Event description is required and must be a non-empty string"
        )
    if not isinstance(event.date, datetime) or timezone.is_naive(event.date):
        raise ValidationError("Valid timezone-aware event date is required")
    if event.date < (now or timezone.now()):
        raise ValidationError("Event date cannot be in the past")
    if _is_blank(event.location):
        raise ValidationError(
            "Event location is required and must be a non-empty string"
        )
    if (
        isinstance(event.max_players, bool)
        or not isinstance(event.max_players, int)
        or event.max_players < 1
    ):
        raise ValidationError("max_players must be a positive integer")
    _check_storable(event.id, "Event ID")
    _check_storable(event.name, "Event name")
    _check_storable(event.description, "Event description")
    _check_storable(event.location, "Event location")


def validate_reminder_interval(days: Any) -> None:
    if isinstance(days, bool) or not isinstance(days, int) or days < 1:
        raise ValidationError("Reminder interval must be a positive number of days")


def validate_changes(changes: Mapping[str, Any], allowed: Iterable[str]) -> None:
    unknown = sorted(set(changes) - set(allowed))
    if unknown:
        raise ValidationError(f"Cannot update field(s): {', '.join(unknown)}")
