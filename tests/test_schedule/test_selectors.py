"""Tests for time-based schedule selectors."""

from __future__ import annotations

from datetime import timedelta, timezone

from fuel_engine.models.enums import EventStatus
from fuel_engine.schedule.selectors import (
    current_hour_events,
    elapsed_and_remaining,
    is_event_overdue,
    next_events,
    overdue,
    previous_loggable_event,
)


class TestNextEvents:
    def test_before_start_returns_first_three(self, events, race_start) -> None:
        upcoming = next_events(events, race_start)
        assert [e.id for e in upcoming] == [e.id for e in events[:3]]

    def test_skips_resolved_events(self, events, race_start) -> None:
        events[0].status = EventStatus.DONE
        upcoming = next_events(events, race_start, count=2)
        assert [e.minute for e in upcoming] == [30, 50]

    def test_event_at_now_is_included(self, events) -> None:
        now = events[1].planned_time
        assert next_events(events, now, 1)[0] is events[1]

    def test_after_finish_is_empty(self, events, race_start) -> None:
        assert next_events(events, race_start + timedelta(hours=25)) == []


class TestPreviousLoggableEvent:
    def test_within_grace(self, events) -> None:
        now = events[0].planned_time + timedelta(minutes=15)
        assert previous_loggable_event(events, now) is events[0]

    def test_outside_grace(self, events) -> None:
        # Resolve the :30 event so only the :10 event can be picked up
        events[1].status = EventStatus.DONE
        first = events[0].planned_time
        assert previous_loggable_event(events, first + timedelta(minutes=20)) is events[0]
        later = first + timedelta(minutes=20, seconds=1)
        assert previous_loggable_event(events, later) is None

    def test_later_due_event_wins(self, events) -> None:
        now = events[1].planned_time + timedelta(seconds=1)
        assert previous_loggable_event(events, now) is events[1]

    def test_resolved_event_not_returned(self, events) -> None:
        events[0].status = EventStatus.SKIPPED
        now = events[0].planned_time + timedelta(minutes=5)
        assert previous_loggable_event(events, now) is None

    def test_before_any_event(self, events, race_start) -> None:
        assert previous_loggable_event(events, race_start) is None


class TestCurrentHourEvents:
    def test_same_clock_hour(self, events, race_start) -> None:
        now = race_start + timedelta(hours=2, minutes=40)
        assert [e.minute for e in current_hour_events(events, now)] == [10, 30, 50]

    def test_compares_in_nows_offset(self, events, race_start) -> None:
        now = (race_start + timedelta(minutes=40)).astimezone(timezone.utc)
        assert len(current_hour_events(events, now)) == 3

    def test_next_day_same_hour_excluded(self, events, race_start) -> None:
        now = race_start + timedelta(days=1, minutes=5)
        assert current_hour_events(events, now) == []


class TestOverdue:
    def test_threshold_is_exclusive(self, events) -> None:
        event = events[0]
        assert not is_event_overdue(event, event.planned_time + timedelta(minutes=5))
        assert is_event_overdue(event, event.planned_time + timedelta(minutes=5, seconds=1))

    def test_resolved_never_overdue(self, events) -> None:
        events[0].status = EventStatus.DONE
        assert not is_event_overdue(events[0], events[0].planned_time + timedelta(hours=1))

    def test_overdue_list(self, events, race_start) -> None:
        now = race_start + timedelta(minutes=40)
        assert [e.minute for e in overdue(events, now)] == [10, 30]


class TestElapsedAndRemaining:
    def test_before_start(self, race_start) -> None:
        elapsed, remaining, finished, end = elapsed_and_remaining(
            race_start, 24, race_start - timedelta(minutes=30)
        )
        assert elapsed == 0
        assert remaining == 24 * 3600 + 1800
        assert not finished
        assert end == race_start + timedelta(hours=24)

    def test_mid_race(self, race_start) -> None:
        elapsed, remaining, finished, _ = elapsed_and_remaining(
            race_start, 24, race_start + timedelta(hours=6)
        )
        assert elapsed == 6 * 3600
        assert remaining == 18 * 3600
        assert not finished

    def test_after_finish(self, race_start) -> None:
        _, remaining, finished, _ = elapsed_and_remaining(
            race_start, 1, race_start + timedelta(hours=2)
        )
        assert remaining == 0
        assert finished
