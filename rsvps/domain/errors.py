"""Domain error codes for the rsvps module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    PLAYER_NOT_FOUND = "PLAYER_NOT_FOUND"
    RSVP_NOT_FOUND = "RSVP_NOT_FOUND"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    ALREADY_RESPONDED = "ALREADY_RESPONDED"
    OPERATION_FAILED = "OPERATION_FAILED"
    STORAGE_FAILED = "STORAGE_FAILED"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(DomainError):
    """Raised when input or a referenced entity is invalid."""

    def __init__(
        self, message: str, code: ErrorCode = ErrorCode.VALIDATION_FAILED
    ) -> None:
        super().__init__(code=code, message=message)


class EventNotFoundError(ValidationError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__("Event not found", code=ErrorCode.EVENT_NOT_FOUND)
        self.event_id = event_id


class PlayerNotFoundError(ValidationError):
    """Raised when no RSVP entry references the player."""

    def __init__(self, player_id: str) -> None:
        super().__init__("Player not found", code=ErrorCode.PLAYER_NOT_FOUND)
        self.player_id = player_id


class RsvpNotFoundError(ValidationError):
    """Raised when a player has no RSVP for an event."""

    def __init__(self, event_id: str, player_id: str) -> None:
        super().__init__("RSVP not found", code=ErrorCode.RSVP_NOT_FOUND)
        self.event_id = event_id
        self.player_id = player_id


class CapacityExceededError(ValidationError):
    """Raised when a Yes response would push an event over max_players."""

    def __init__(self, event_id: str, max_players: int) -> None:
        super().__init__(
            "Event is at maximum capacity", code=ErrorCode.CAPACITY_EXCEEDED
        )
        self.event_id = event_id
        self.max_players = max_players


class AlreadyRespondedError(ValidationError):
    """Raised when a waitlist join collides with an existing RSVP."""

    def __init__(self, event_id: str, player_id: str) -> None:
        super().__init__(
            "Player already has an RSVP for this event",
            code=ErrorCode.ALREADY_RESPONDED,
        )
        self.event_id = event_id
        self.player_id = player_id


class RsvpError(DomainError):
    """Generic operational failure of a service call."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.OPERATION_FAILED, message=message)


class StorageError(DomainError):
    """Raised by snapshot stores when reading or writing fails."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.STORAGE_FAILED, message=message)
