"""Tests for schedule generation and YT-mode transforms."""

from __future__ import annotations

import dataclasses
from datetime import timedelta

import pytest

from fuel_engine.models.enums import EventStatus, ItemKind, YTMode
from fuel_engine.models.race import DEFAULT_PATTERN, RaceToggles, default_race
from fuel_engine.schedule.generator import PROTEIN_DRINK, apply_yt_mode, generate


def _with_mode(race_config, mode: YTMode):
    return dataclasses.replace(race_config, toggles=RaceToggles(yt_mode=mode))


def _at(events, hour: int, minute: int):
    return next(e for e in events if e.id.endswith(f"-{hour}-{minute}"))


class TestGenerate:
    def test_deterministic(self, race_config) -> None:
        assert generate(race_config) == generate(race_config)

    def test_ids_unique(self, race_config) -> None:
        for mode in YTMode:
            events = generate(_with_mode(race_config, mode))
            assert len({e.id for e in events}) == len(events)

    def test_default_24h_has_72_events(self, events) -> None:
        assert len(events) == 72

    def test_three_events_per_hour(self, events, race_start) -> None:
        for hour in range(24):
            bucket = [
                e for e in events
                if race_start + timedelta(hours=hour)
                <= e.planned_time
                < race_start + timedelta(hours=hour + 1)
            ]
            assert [e.minute for e in bucket] == [10, 30, 50]

    def test_all_events_start_due(self, events) -> None:
        assert all(e.status == EventStatus.DUE for e in events)
        assert all(e.actual_items is None and e.completed_at is None for e in events)

    def test_planned_times(self, events, race_start) -> None:
        assert events[0].planned_time == race_start + timedelta(minutes=10)
        assert events[-1].planned_time == race_start + timedelta(hours=23, minutes=50)

    def test_id_format(self, events, race_config) -> None:
        assert events[0].id == f"{race_config.id}-0-10"
        assert events[4].id == f"{race_config.id}-1-30"

    def test_one_hour_race(self, race_start) -> None:
        assert len(generate(default_race(race_start, duration_hours=1))) == 3

    def test_empty_pattern_gives_empty_schedule(self, race_config) -> None:
        assert generate(dataclasses.replace(race_config, pattern=())) == []


class TestYTModes:
    def test_mode_a_appends_at_first_slot_every_third_hour(self, race_config) -> None:
        events = generate(_with_mode(race_config, YTMode.A))
        original = DEFAULT_PATTERN[0].items
        assert _at(events, 0, 10).items == original + (PROTEIN_DRINK,)
        assert _at(events, 3, 10).items == original + (PROTEIN_DRINK,)
        assert _at(events, 1, 10).items == original
        assert _at(events, 2, 10).items == original
        assert _at(events, 0, 30).items == DEFAULT_PATTERN[1].items

    def test_mode_b_replaces_last_slot(self, race_config) -> None:
        events = generate(_with_mode(race_config, YTMode.B))
        assert _at(events, 0, 50).items == (PROTEIN_DRINK,)
        assert _at(events, 1, 50).items == DEFAULT_PATTERN[2].items

    def test_mode_c_swaps_small_gel(self, race_config) -> None:
        events = generate(_with_mode(race_config, YTMode.C))
        kinds = [i.kind for i in _at(events, 6, 10).items]
        assert kinds == [ItemKind.PH1000, ItemKind.YT]

    def test_mode_d_swaps_large_gel(self, race_config) -> None:
        events = generate(_with_mode(race_config, YTMode.D))
        kinds = [i.kind for i in _at(events, 9, 30).items]
        assert kinds == [ItemKind.PH1500, ItemKind.YT]
        assert _at(events, 9, 10).items == DEFAULT_PATTERN[0].items

    def test_off_leaves_pattern_untouched(self, events) -> None:
        assert all(i.kind != ItemKind.YT for e in events for i in e.items)

    def test_apply_off_is_identity(self) -> None:
        slot = DEFAULT_PATTERN[0]
        items = list(slot.items)
        assert apply_yt_mode(YTMode.OFF, DEFAULT_PATTERN, slot, items) == items

    def test_unknown_mode_raises(self) -> None:
        with pytest.raises(ValueError, match="Unhandled YT mode"):
            apply_yt_mode("Z", DEFAULT_PATTERN, DEFAULT_PATTERN[0], [])
