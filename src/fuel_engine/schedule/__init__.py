"""Schedule generation, selectors and replacement helpers."""

from fuel_engine.schedule.generator import generate
from fuel_engine.schedule.selectors import (
    current_hour_events,
    elapsed_and_remaining,
    is_event_overdue,
    next_events,
    overdue,
    previous_loggable_event,
)

__all__ = [
    "current_hour_events",
    "elapsed_and_remaining",
    "generate",
    "is_event_overdue",
    "next_events",
    "overdue",
    "previous_loggable_event",
]
