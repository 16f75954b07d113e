"""Data models for the fuel engine."""

from fuel_engine.models.enums import (
    EventStatus,
    ItemKind,
    Severity,
    SymptomKey,
    Unit,
    YTMode,
)
from fuel_engine.models.event import ScheduledEvent, make_event_id
from fuel_engine.models.health import HealthData, HealthFlags, HealthRecommendation
from fuel_engine.models.inventory import INITIAL_INVENTORY, Inventory
from fuel_engine.models.item import Item, NutrientProfile
from fuel_engine.models.race import (
    DEFAULT_PATTERN,
    PatternSlot,
    ProteinSlot,
    RaceConfig,
    RaceToggles,
    default_race,
)

__all__ = [
    "DEFAULT_PATTERN",
    "EventStatus",
    "HealthData",
    "HealthFlags",
    "HealthRecommendation",
    "INITIAL_INVENTORY",
    "Inventory",
    "Item",
    "ItemKind",
    "NutrientProfile",
    "PatternSlot",
    "ProteinSlot",
    "RaceConfig",
    "RaceToggles",
    "ScheduledEvent",
    "Severity",
    "SymptomKey",
    "Unit",
    "YTMode",
    "default_race",
    "make_event_id",
]
