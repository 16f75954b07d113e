"""JSON-compatible codec for the persisted application state.

Wire keys are camelCase, enums travel by value and timestamps as ISO-8601
strings with their UTC offset. Optional fields are omitted when absent.
All functions are pure (no I/O).
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from fuel_engine.models.enums import EventStatus, ItemKind, SymptomKey, Unit, YTMode
from fuel_engine.models.event import ScheduledEvent
from fuel_engine.models.health import HealthData, HealthFlags
from fuel_engine.models.inventory import Inventory
from fuel_engine.models.item import Item
from fuel_engine.models.race import PatternSlot, ProteinSlot, RaceConfig, RaceToggles


@dataclass
class AppState:
    """Everything the persistence and backup collaborators store."""

    race: RaceConfig | None
    events: list[ScheduledEvent]
    inventory: Inventory
    health: HealthData
    consecutive_skips: int = 0
    last_saved: datetime | None = None


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def _ts(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def item_to_dict(item: Item) -> dict:
    return {"type": item.kind.value, "quantity": item.quantity, "unit": item.unit.value}


def _items_to_list(items: tuple[Item, ...]) -> list[dict]:
    return [item_to_dict(i) for i in items]


def race_to_dict(race: RaceConfig) -> dict:
    return {
        "id": race.id,
        "startTime": _ts(race.start_time),
        "durationHours": race.duration_hours,
        "timezone": race.timezone,
        "pattern": [
            {"minute": slot.minute, "items": _items_to_list(slot.items)}
            for slot in race.pattern
        ],
        "proteinSlots": [_protein_slot_to_dict(s) for s in race.protein_slots],
        "toggles": {
            "phPowder": race.toggles.ph_powder,
            "ytMode": race.toggles.yt_mode.value,
        },
    }


def _protein_slot_to_dict(slot: ProteinSlot) -> dict:
    result: dict[str, Any] = {"time": slot.time, "completed": slot.completed}
    if slot.completed_at is not None:
        result["completedAt"] = _ts(slot.completed_at)
    if slot.amount_g is not None:
        result["amount"] = slot.amount_g
    return result


def event_to_dict(event: ScheduledEvent) -> dict:
    result: dict[str, Any] = {
        "id": event.id,
        "raceId": event.race_id,
        "plannedTime": _ts(event.planned_time),
        "minute": event.minute,
        "items": _items_to_list(event.items),
        "status": event.status.value,
    }
    if event.actual_items is not None:
        result["actualItems"] = _items_to_list(event.actual_items)
    if event.note is not None:
        result["note"] = event.note
    if event.completed_at is not None:
        result["completedAt"] = _ts(event.completed_at)
    return result


def health_to_dict(health: HealthData) -> dict:
    result: dict[str, Any] = {
        "symptoms": {key.value: active for key, active in health.symptoms.items()},
        "flags": {
            "hypoRisk": health.flags.hypo_risk,
            "hyperRisk": health.flags.hyper_risk,
            "giRisk": health.flags.gi_risk,
        },
        "actions": list(health.actions),
        "lastUpdated": _ts(health.last_updated),
    }
    if health.weight_kg is not None:
        result["weightKg"] = health.weight_kg
    if health.urine_color is not None:
        result["urineColor"] = health.urine_color
    return result


def app_state_to_dict(state: AppState, include_last_saved: bool = True) -> dict:
    """Convert an AppState to a JSON-compatible dict."""
    result: dict[str, Any] = {
        "race": race_to_dict(state.race) if state.race is not None else None,
        "events": [event_to_dict(e) for e in state.events],
        "inventory": state.inventory.to_dict(),
        "health": health_to_dict(state.health),
        "consecutiveSkips": state.consecutive_skips,
    }
    if include_last_saved:
        result["lastSaved"] = _ts(state.last_saved)
    return result


def to_json_string(state: AppState, indent: int | None = None) -> str:
    return json.dumps(app_state_to_dict(state), indent=indent, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def _parse_ts(value: str | None) -> datetime | None:
    """ISO-8601 to datetime. Accepts the JavaScript ``...Z`` UTC suffix."""
    if not value:
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def item_from_dict(data: dict) -> Item:
    return Item(kind=ItemKind(data["type"]), quantity=data["quantity"], unit=Unit(data["unit"]))


def _items_from_list(data: list[dict]) -> tuple[Item, ...]:
    return tuple(item_from_dict(d) for d in data)


def race_from_dict(data: dict) -> RaceConfig:
    toggles = data.get("toggles") or {}
    return RaceConfig(
        id=data["id"],
        start_time=_parse_ts(data["startTime"]),
        duration_hours=int(data["durationHours"]),
        timezone=data.get("timezone", "Europe/Oslo"),
        pattern=tuple(
            PatternSlot(minute=int(s["minute"]), items=_items_from_list(s["items"]))
            for s in data.get("pattern", [])
        ),
        protein_slots=tuple(
            ProteinSlot(
                time=s["time"],
                completed=bool(s.get("completed", False)),
                completed_at=_parse_ts(s.get("completedAt")),
                amount_g=s.get("amount"),
            )
            for s in data.get("proteinSlots", [])
        ),
        toggles=RaceToggles(
            ph_powder=bool(toggles.get("phPowder", False)),
            yt_mode=YTMode(toggles.get("ytMode", "OFF")),
        ),
    )


def event_from_dict(data: dict) -> ScheduledEvent:
    actual = data.get("actualItems")
    return ScheduledEvent(
        id=data["id"],
        race_id=data["raceId"],
        planned_time=_parse_ts(data["plannedTime"]),
        minute=int(data["minute"]),
        items=_items_from_list(data["items"]),
        status=EventStatus(data["status"]),
        actual_items=_items_from_list(actual) if actual is not None else None,
        note=data.get("note"),
        completed_at=_parse_ts(data.get("completedAt")),
    )


def health_from_dict(data: dict) -> HealthData:
    symptoms = {key: False for key in SymptomKey}
    for name, active in (data.get("symptoms") or {}).items():
        symptoms[SymptomKey(name)] = bool(active)
    flags = data.get("flags") or {}
    return HealthData(
        last_updated=_parse_ts(data["lastUpdated"]),
        symptoms=symptoms,
        flags=HealthFlags(
            hypo_risk=bool(flags.get("hypoRisk", False)),
            hyper_risk=bool(flags.get("hyperRisk", False)),
            gi_risk=bool(flags.get("giRisk", False)),
        ),
        actions=list(data.get("actions", [])),
        weight_kg=data.get("weightKg"),
        urine_color=data.get("urineColor"),
    )


def app_state_from_dict(data: dict) -> AppState:
    """Rebuild an AppState from its dict form.

    Raises:
        KeyError / ValueError: if required fields are missing or an enum
        value is unknown.
    """
    race = data.get("race")
    return AppState(
        race=race_from_dict(race) if race is not None else None,
        events=[event_from_dict(e) for e in data.get("events", [])],
        inventory=Inventory(counts=dict(data["inventory"])) if "inventory" in data else Inventory(),
        health=health_from_dict(data["health"]),
        consecutive_skips=int(data.get("consecutiveSkips", 0)),
        last_saved=_parse_ts(data.get("lastSaved")),
    )


def from_json_string(text: str) -> AppState:
    return app_state_from_dict(json.loads(text))
