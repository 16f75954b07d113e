"""Tests for the AppState JSON codec."""

from __future__ import annotations

import dataclasses
import json
from datetime import timedelta

import pytest

from fuel_engine.models.enums import EventStatus, SymptomKey, YTMode
from fuel_engine.models.health import HealthData, HealthFlags
from fuel_engine.models.inventory import Inventory
from fuel_engine.models.race import RaceToggles
from fuel_engine.serialization import (
    AppState,
    app_state_from_dict,
    app_state_to_dict,
    from_json_string,
    to_json_string,
)


@pytest.fixture
def app_state(race_config, logged_events, race_start) -> AppState:
    slots = list(race_config.protein_slots)
    slots[0] = dataclasses.replace(
        slots[0], completed=True, completed_at=race_start + timedelta(hours=3), amount_g=25.0
    )
    race = dataclasses.replace(
        race_config,
        toggles=RaceToggles(ph_powder=True, yt_mode=YTMode.C),
        protein_slots=tuple(slots),
    )
    symptoms = {key: False for key in SymptomKey}
    symptoms[SymptomKey.THIRST] = True
    symptoms[SymptomKey.DARK_URINE] = True
    health = HealthData(
        last_updated=race_start + timedelta(hours=2, seconds=5),
        symptoms=symptoms,
        flags=HealthFlags(hyper_risk=True),
        actions=["Find shade"],
        weight_kg=71.4,
        urine_color=6,
    )
    inventory = Inventory()
    inventory.decrement("GEL100", 1)
    return AppState(
        race=race,
        events=logged_events,
        inventory=inventory,
        health=health,
        consecutive_skips=1,
        last_saved=race_start + timedelta(hours=3, minutes=1),
    )


class TestRoundTrip:
    def test_json_round_trip_is_lossless(self, app_state) -> None:
        assert from_json_string(to_json_string(app_state)) == app_state

    def test_every_status_survives(self, app_state) -> None:
        restored = from_json_string(to_json_string(app_state))
        assert [e.status for e in restored.events] == [
            EventStatus.DONE,
            EventStatus.SKIPPED,
            EventStatus.REPLACED,
            EventStatus.DUE,
        ]

    def test_timestamps_keep_offset(self, app_state) -> None:
        restored = from_json_string(to_json_string(app_state))
        assert restored.events[0].completed_at == app_state.events[0].completed_at
        assert restored.events[0].completed_at.utcoffset() == timedelta(hours=2)

    def test_empty_race(self, race_start) -> None:
        state = AppState(
            race=None, events=[], inventory=Inventory(), health=HealthData(last_updated=race_start)
        )
        assert app_state_from_dict(app_state_to_dict(state)) == state


class TestWireFormat:
    def test_camel_case_keys(self, app_state) -> None:
        data = app_state_to_dict(app_state)
        assert set(data) == {"race", "events", "inventory", "health", "consecutiveSkips", "lastSaved"}
        assert data["race"]["toggles"] == {"phPowder": True, "ytMode": "C"}
        assert data["race"]["durationHours"] == 24
        assert data["health"]["flags"] == {"hypoRisk": False, "hyperRisk": True, "giRisk": False}

    def test_enums_by_value(self, app_state) -> None:
        event = app_state_to_dict(app_state)["events"][2]
        assert event["status"] == "replaced"
        assert event["actualItems"] == [{"type": "YT", "quantity": 300, "unit": "ml"}]

    def test_optional_fields_omitted(self, app_state) -> None:
        due = app_state_to_dict(app_state)["events"][3]
        assert "actualItems" not in due
        assert "note" not in due
        assert "completedAt" not in due

    def test_iso_timestamps(self, app_state) -> None:
        data = json.loads(to_json_string(app_state))
        assert data["race"]["startTime"] == "2025-08-23T10:00:00+02:00"

    def test_last_saved_can_be_left_out(self, app_state) -> None:
        assert "lastSaved" not in app_state_to_dict(app_state, include_last_saved=False)

    def test_utc_z_suffix_accepted(self, app_state, race_start) -> None:
        data = app_state_to_dict(app_state)
        data["race"]["startTime"] = "2025-08-23T08:00:00.000Z"
        data["events"][0]["plannedTime"] = "2025-08-23T08:10:00Z"
        decoded = app_state_from_dict(data)
        assert decoded.race.start_time == race_start
        assert decoded.race.start_time.utcoffset() == timedelta(0)
        assert decoded.events[0].planned_time == race_start + timedelta(minutes=10)


class TestDecodeErrors:
    def test_unknown_status_raises(self, app_state) -> None:
        data = app_state_to_dict(app_state)
        data["events"][0]["status"] = "eaten"
        with pytest.raises(ValueError):
            app_state_from_dict(data)

    def test_missing_health_raises(self, app_state) -> None:
        data = app_state_to_dict(app_state)
        del data["health"]
        with pytest.raises(KeyError):
            app_state_from_dict(data)

    def test_missing_inventory_falls_back_to_initial(self, app_state) -> None:
        data = app_state_to_dict(app_state)
        del data["inventory"]
        assert app_state_from_dict(data).inventory == Inventory()
