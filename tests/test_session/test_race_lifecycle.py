"""Tests for race setup, settings regeneration, edits and health on the session."""

from __future__ import annotations

from datetime import timedelta

import pytest

from fuel_engine.models.enums import EventStatus, ItemKind, SymptomKey, Unit, YTMode
from fuel_engine.models.health import HealthFlags
from fuel_engine.models.item import Item
from fuel_engine.models.race import RaceToggles
from fuel_engine.session import RaceSession


class TestInitializeRace:
    def test_defaults(self, session, race_start) -> None:
        assert session.race.id == "race-2025-08-23"
        assert session.race.duration_hours == 24
        assert session.race.toggles == RaceToggles()
        assert len(session.events) == 72
        assert [s.time for s in session.race.protein_slots][:2] == ["13:00", "17:00"]

    def test_with_toggles(self, clock, race_start) -> None:
        session = RaceSession(clock=clock)
        assert session.initialize_race(race_start, 6, RaceToggles(yt_mode=YTMode.A))
        assert len(session.events) == 18
        assert session.events[0].items[-1].kind == ItemKind.YT

    @pytest.mark.parametrize("hours", [0, 49, -1, True])
    def test_rejects_bad_duration(self, clock, race_start, hours) -> None:
        session = RaceSession(clock=clock)
        assert not session.initialize_race(race_start, hours)
        assert session.race is None

    def test_rejects_past_start(self, clock, race_start) -> None:
        clock.now = race_start + timedelta(minutes=1)
        session = RaceSession(clock=clock)
        assert not session.initialize_race(race_start)
        assert session.events == ()

    def test_default_start_is_now(self, clock) -> None:
        session = RaceSession(clock=clock)
        assert session.initialize_race()
        assert session.race.start_time == clock.now


class TestUpdateSettings:
    def test_regenerates_and_discards_adherence(self, session) -> None:
        session.complete(session.events[0].id)
        assert session.update_settings(duration_hours=12)
        assert len(session.events) == 36
        assert all(e.status == EventStatus.DUE for e in session.events)

    def test_keeps_unspecified_fields(self, session, race_start) -> None:
        session.update_settings(ph_powder=True)
        assert session.race.toggles.ph_powder
        assert session.race.start_time == race_start
        assert session.race.duration_hours == 24

    def test_past_start_allowed(self, session, race_start) -> None:
        assert session.update_settings(start_time=race_start - timedelta(hours=5))

    def test_rejects_bad_duration(self, session) -> None:
        assert not session.update_settings(duration_hours=72)
        assert session.race.duration_hours == 24

    def test_without_race(self, clock) -> None:
        assert not RaceSession(clock=clock).update_settings(duration_hours=10)

    def test_powder_changes_targets(self, session) -> None:
        assert session.baseline_targets().carbs == 89
        session.update_settings(ph_powder=True)
        assert session.baseline_targets().carbs == 98


class TestReset:
    def test_back_to_initial_state(self, session) -> None:
        for event in session.events[:4]:
            session.skip(event.id, "Nausea")
        session.toggle_symptom(SymptomKey.THIRST)
        session.reset()
        assert session.race is None
        assert session.events == ()
        assert session.consecutive_skips == 0
        assert not session.skip_alarm_active
        assert session.health.active_symptoms() == frozenset()
        assert session.inventory.get("GEL100") == 30


class TestUpdateEventDetails:
    def test_move_planned_time(self, session) -> None:
        event = session.events[0]
        later = event.planned_time + timedelta(minutes=7)
        assert session.update_event_details(event.id, planned_time=later)
        assert session.get_event(event.id).planned_time == later

    def test_skipped_note_must_stay_valid(self, session) -> None:
        event_id = session.events[0].id
        session.skip(event_id, "Nausea")
        assert not session.update_event_details(event_id, note="")
        assert not session.update_event_details(event_id, note=None)
        assert session.update_event_details(event_id, note="Vomited")
        assert session.get_event(event_id).note == "Vomited"

    def test_actual_items_only_when_eaten(self, session) -> None:
        event_id = session.events[0].id
        gel = (Item(ItemKind.GEL160, 1, Unit.PIECE),)
        assert not session.update_event_details(event_id, actual_items=gel)
        session.complete(event_id)
        assert session.update_event_details(event_id, actual_items=gel)
        assert session.get_event(event_id).actual_items == gel

    def test_clear_note(self, session) -> None:
        event_id = session.events[0].id
        session.complete(event_id, note="ok")
        assert session.update_event_details(event_id, note=None)
        assert session.get_event(event_id).note is None

    def test_unknown_id(self, session) -> None:
        assert not session.update_event_details("missing", note="x")


class TestInventoryUpdate:
    def test_partial_apply(self, session) -> None:
        rejected = session.update_inventory(GEL100=10, Bogus=3)
        assert rejected == ["Bogus"]
        assert session.inventory.get("GEL100") == 10


class TestHealth:
    def test_toggle_symptom_updates_flags(self, session, clock) -> None:
        clock.advance(hours=3)
        session.toggle_symptom(SymptomKey.THIRST)
        assert session.health.flags == HealthFlags()
        matched = session.toggle_symptom(SymptomKey.DARK_URINE)
        assert [r.condition for r in matched] == ["Dehydration"]
        assert session.health.flags == HealthFlags(hyper_risk=True)
        assert session.health.last_updated == clock.now

    def test_toggle_off_clears_flags(self, session) -> None:
        session.toggle_symptom(SymptomKey.VOMITING)
        session.toggle_symptom(SymptomKey.DIARRHEA)
        assert session.health.flags.gi_risk
        session.toggle_symptom(SymptomKey.DIARRHEA)
        assert session.health.flags == HealthFlags()
        assert session.recommendations() == []

    def test_toggle_action(self, session) -> None:
        assert session.toggle_action("Find shade")
        assert session.health.actions == ["Find shade"]
        assert session.toggle_action("Find shade")
        assert session.health.actions == []
        assert not session.toggle_action("")
        assert not session.toggle_action("x" * 201)

    def test_record_measurements(self, session) -> None:
        assert session.record_measurements(weight_kg=70.2, urine_color=4)
        assert session.health.weight_kg == 70.2
        assert session.health.urine_color == 4

    @pytest.mark.parametrize("color", [0, 9])
    def test_urine_color_out_of_chart(self, session, color) -> None:
        assert not session.record_measurements(urine_color=color)
        assert session.health.urine_color is None


class TestProteinSlots:
    def test_complete_slot(self, session, clock) -> None:
        assert session.complete_protein_slot("13:00", amount_g=20)
        slot = session.race.protein_slots[0]
        assert slot.completed
        assert slot.completed_at == clock.now
        assert slot.amount_g == 20

    def test_unknown_or_done_slot(self, session) -> None:
        assert not session.complete_protein_slot("14:00")
        session.complete_protein_slot("13:00")
        assert not session.complete_protein_slot("13:00")


class TestSelectorsOnSession:
    def test_uses_session_clock(self, session, clock, race_start) -> None:
        clock.now = race_start + timedelta(minutes=20)
        assert session.previous_loggable_event().minute == 10
        assert [e.minute for e in session.next_events(2)] == [30, 50]
        assert session.overdue()[0].minute == 10
        assert len(session.current_hour_events()) == 3

    def test_race_clock(self, session, clock, race_start) -> None:
        clock.now = race_start + timedelta(hours=1)
        elapsed, remaining, finished, _ = session.race_clock()
        assert elapsed == 3600
        assert remaining == 23 * 3600
        assert not finished

    def test_race_clock_without_race(self, clock) -> None:
        assert RaceSession(clock=clock).race_clock() is None

    def test_hourly_stats(self, session) -> None:
        session.complete(session.events[0].id)
        stats = session.hourly_stats(0)
        assert stats.actual.carbs == 25


class TestAppStateBridge:
    def test_round_trip_through_app_state(self, session, clock) -> None:
        session.skip(session.events[0].id, "Nausea")
        session.complete(session.events[1].id)
        session.toggle_symptom(SymptomKey.CONFUSION)
        restored = RaceSession.from_app_state(session.to_app_state(), clock=clock)
        assert restored.events == session.events
        assert restored.race == session.race
        assert restored.inventory.to_dict() == session.inventory.to_dict()
        assert restored.health.active_symptoms() == {SymptomKey.CONFUSION}

    def test_alarm_not_persisted(self, session, clock) -> None:
        for event in session.events[:4]:
            session.skip(event.id, "Nausea")
        restored = RaceSession.from_app_state(session.to_app_state(), clock=clock)
        assert restored.consecutive_skips == 4
        assert not restored.skip_alarm_active

    def test_snapshot_is_detached(self, session) -> None:
        state = session.to_app_state()
        session.complete(session.events[0].id)
        assert state.events[0].status == EventStatus.DUE
        assert state.inventory.get("GEL100") == 30
