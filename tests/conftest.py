"""Shared test fixtures: fixed clock, default race, generated schedule, live session."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from fuel_engine.models.enums import EventStatus, ItemKind, SymptomKey, Unit
from fuel_engine.models.event import ScheduledEvent
from fuel_engine.models.item import Item
from fuel_engine.models.race import RaceConfig, default_race
from fuel_engine.schedule.generator import generate
from fuel_engine.session import RaceSession

CEST = timezone(timedelta(hours=2))


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def race_start() -> datetime:
    """Saturday 10:00 CEST."""
    return datetime(2025, 8, 23, 10, 0, tzinfo=CEST)


@pytest.fixture
def clock(race_start) -> FakeClock:
    """One hour before the gun."""
    return FakeClock(race_start - timedelta(hours=1))


@pytest.fixture
def race_config(race_start) -> RaceConfig:
    return default_race(race_start)


@pytest.fixture
def events(race_config) -> list[ScheduledEvent]:
    return generate(race_config)


@pytest.fixture
def session(clock, race_start) -> RaceSession:
    """Session with a 24 h default race, nothing logged yet."""
    s = RaceSession(clock=clock)
    assert s.initialize_race(race_start)
    return s


@pytest.fixture
def logged_events(race_start) -> list[ScheduledEvent]:
    """One event in every status, with all optional fields populated where legal."""
    gel = Item(ItemKind.GEL100, 1, Unit.PIECE)
    drink = Item(ItemKind.M320, 150, Unit.ML)
    return [
        ScheduledEvent(
            id="race-2025-08-23-0-10",
            race_id="race-2025-08-23",
            planned_time=race_start + timedelta(minutes=10),
            minute=10,
            items=(gel,),
            status=EventStatus.DONE,
            actual_items=(gel,),
            note="Took it walking",
            completed_at=race_start + timedelta(minutes=12, seconds=30),
        ),
        ScheduledEvent(
            id="race-2025-08-23-0-30",
            race_id="race-2025-08-23",
            planned_time=race_start + timedelta(minutes=30),
            minute=30,
            items=(Item(ItemKind.GEL160, 1, Unit.PIECE),),
            status=EventStatus.SKIPPED,
            note="Nausea",
            completed_at=race_start + timedelta(minutes=31),
        ),
        ScheduledEvent(
            id="race-2025-08-23-0-50",
            race_id="race-2025-08-23",
            planned_time=race_start + timedelta(minutes=50),
            minute=50,
            items=(drink,),
            status=EventStatus.REPLACED,
            actual_items=(Item(ItemKind.YT, 300, Unit.ML),),
            note="M320 → YT",
            completed_at=race_start + timedelta(minutes=55),
        ),
        ScheduledEvent(
            id="race-2025-08-23-1-10",
            race_id="race-2025-08-23",
            planned_time=race_start + timedelta(hours=1, minutes=10),
            minute=10,
            items=(gel, drink),
        ),
    ]


@pytest.fixture
def dehydrated_symptoms() -> frozenset[SymptomKey]:
    return frozenset({SymptomKey.THIRST, SymptomKey.DARK_URINE})
