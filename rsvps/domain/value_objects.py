"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Self


class RsvpStatus(StrEnum):
    """A player's answer to an event invitation."""

    YES = "Yes"
    NO = "No"
    MAYBE = "Maybe"

    @classmethod
    def choices(cls) -> list[str]:
        return [status.value for status in cls]


@dataclass(frozen=True)
class RsvpKey:
    """Composite identifier of an RSVP entry: one per player per event."""

    event_id: str
    player_id: str

    def __post_init__(self) -> None:
        if not self.event_id or not self.player_id:
            raise ValueError("RsvpKey needs both an event id and a player id")

    @classmethod
    def from_pair(cls, pair: list[str] | tuple[str, str]) -> Self:
        event_id, player_id = pair
        return cls(event_id=event_id, player_id=player_id)

    def as_pair(self) -> list[str]:
        return [self.event_id, self.player_id]

    def __str__(self) -> str:
        return f"{self.event_id}-{self.player_id}"
