"""Race configuration — the repeating intake pattern and race-wide toggles."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from fuel_engine.models.enums import (
    DEFAULT_RACE_HOURS,
    MAX_RACE_HOURS,
    MIN_RACE_HOURS,
    ItemKind,
    Unit,
    YTMode,
)
from fuel_engine.models.item import Item


@dataclass(frozen=True)
class PatternSlot:
    """A recurring feeding slot fired once per hour at ``minute``."""

    minute: int  # 0-59
    items: tuple[Item, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class RaceToggles:
    ph_powder: bool = False
    yt_mode: YTMode = YTMode.OFF


@dataclass(frozen=True)
class ProteinSlot:
    """A clock-time protein reminder, e.g. '13:00'."""

    time: str
    completed: bool = False
    completed_at: datetime | None = None
    amount_g: float | None = None


@dataclass(frozen=True)
class RaceConfig:
    """Frozen race configuration.

    Settings updates replace the whole object (``dataclasses.replace``) and
    regenerate the schedule from scratch.
    """

    id: str
    start_time: datetime
    duration_hours: int = DEFAULT_RACE_HOURS
    pattern: tuple[PatternSlot, ...] = field(default_factory=tuple)
    toggles: RaceToggles = field(default_factory=RaceToggles)
    protein_slots: tuple[ProteinSlot, ...] = field(default_factory=tuple)
    timezone: str = "Europe/Oslo"  # display label only; offsets come from start_time


# :10 electrolyte + small gel, :30 strong electrolyte + large gel, :50 drink mix
DEFAULT_PATTERN: tuple[PatternSlot, ...] = (
    PatternSlot(
        minute=10,
        items=(
            Item(ItemKind.PH1000, 150, Unit.ML),
            Item(ItemKind.GEL100, 1, Unit.PIECE),
        ),
    ),
    PatternSlot(
        minute=30,
        items=(
            Item(ItemKind.PH1500, 150, Unit.ML),
            Item(ItemKind.GEL160, 1, Unit.PIECE),
        ),
    ),
    PatternSlot(
        minute=50,
        items=(Item(ItemKind.M320, 150, Unit.ML),),
    ),
)

DEFAULT_PROTEIN_SLOTS = ("13:00", "17:00", "21:00", "01:00", "05:00", "09:00")


def is_valid_duration(duration_hours: int) -> bool:
    """True if *duration_hours* is an integer in [MIN_RACE_HOURS, MAX_RACE_HOURS]."""
    return (
        isinstance(duration_hours, int)
        and not isinstance(duration_hours, bool)
        and MIN_RACE_HOURS <= duration_hours <= MAX_RACE_HOURS
    )


def default_race(
    start_time: datetime,
    duration_hours: int = DEFAULT_RACE_HOURS,
    toggles: RaceToggles | None = None,
) -> RaceConfig:
    """Build a race with the default pattern and protein slots."""
    return RaceConfig(
        id=f"race-{start_time.date().isoformat()}",
        start_time=start_time,
        duration_hours=duration_hours,
        pattern=DEFAULT_PATTERN,
        toggles=toggles or RaceToggles(),
        protein_slots=tuple(ProteinSlot(time=t) for t in DEFAULT_PROTEIN_SLOTS),
    )
