"""Read-only views over the event list at a given instant.

All functions are pure: they take the event list and ``now`` explicitly.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from fuel_engine.models.enums import (
    NEXT_EVENTS_COUNT,
    OVERDUE_THRESHOLD_MIN,
    PREVIOUS_EVENT_GRACE_MIN,
)
from fuel_engine.models.event import ScheduledEvent


def next_events(
    events: list[ScheduledEvent], now: datetime, count: int = NEXT_EVENTS_COUNT
) -> list[ScheduledEvent]:
    """First *count* DUE events planned at or after *now*, earliest first."""
    upcoming = [e for e in events if e.is_due and e.planned_time >= now]
    upcoming.sort(key=lambda e: e.planned_time)
    return upcoming[:count]


def previous_loggable_event(
    events: list[ScheduledEvent],
    now: datetime,
    grace_minutes: float = PREVIOUS_EVENT_GRACE_MIN,
) -> ScheduledEvent | None:
    """Most recent DUE event at or before *now*, if still within the grace window."""
    past_due = [e for e in events if e.is_due and e.planned_time <= now]
    if not past_due:
        return None
    latest = max(past_due, key=lambda e: e.planned_time)
    if now - latest.planned_time <= timedelta(minutes=grace_minutes):
        return latest
    return None


def current_hour_events(
    events: list[ScheduledEvent], now: datetime
) -> list[ScheduledEvent]:
    """Events in the same calendar day and hour as *now* (in *now*'s offset)."""
    def _key(moment: datetime) -> tuple:
        if now.tzinfo is not None and moment.tzinfo is not None:
            moment = moment.astimezone(now.tzinfo)
        return (moment.date(), moment.hour)

    target = _key(now)
    return [e for e in events if _key(e.planned_time) == target]


def is_event_overdue(
    event: ScheduledEvent,
    now: datetime,
    minutes_threshold: float = OVERDUE_THRESHOLD_MIN,
) -> bool:
    """True while *event* is DUE and more than *minutes_threshold* late."""
    return event.is_due and now > event.planned_time + timedelta(minutes=minutes_threshold)


def overdue(
    events: list[ScheduledEvent],
    now: datetime,
    minutes_threshold: float = OVERDUE_THRESHOLD_MIN,
) -> list[ScheduledEvent]:
    """All DUE events more than *minutes_threshold* minutes past their time."""
    return [e for e in events if is_event_overdue(e, now, minutes_threshold)]


def elapsed_and_remaining(
    start: datetime, duration_hours: float, now: datetime
) -> tuple[int, int, bool, datetime]:
    """Race clock: (elapsed_s, remaining_s, is_finished, end).

    Both counters are floored at zero, so they read 0 before the start and
    after the finish respectively.
    """
    end = start + timedelta(hours=duration_hours)
    elapsed = max(0, int((now - start).total_seconds()))
    remaining = max(0, int((end - now).total_seconds()))
    return elapsed, remaining, now >= end, end
