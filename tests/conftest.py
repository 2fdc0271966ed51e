"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone as dt_timezone

import pytest

from rsvps.domain import Event, Player
from rsvps.services import RsvpService
from rsvps.stores import JsonFileSnapshotStore


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2030, 1, 1, 12, 0, tzinfo=dt_timezone.utc))


@pytest.fixture
def storage_dir(tmp_path):
    return tmp_path / "data"


@pytest.fixture
def store(storage_dir) -> JsonFileSnapshotStore:
    return JsonFileSnapshotStore(storage_dir)


@pytest.fixture
def service(store, clock) -> RsvpService:
    return RsvpService(store, clock=clock)


@pytest.fixture
def player() -> Player:
    return Player(id="1", name="Test Player", email="test@example.com")


@pytest.fixture
def make_player():
    def factory(player_id: str, name: str | None = None) -> Player:
        return Player(
            id=player_id,
            name=name or f"Player {player_id}",
            email=f"player{player_id}@example.com",
        )

    return factory


@pytest.fixture
def event(clock) -> Event:
    return Event(
        id="1",
        name="Test Event",
        description="Test Description",
        date=clock.now + timedelta(days=1),
        location="Test Location",
        max_players=2,
    )
