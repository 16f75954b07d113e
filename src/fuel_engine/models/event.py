"""Scheduled events — the mutable entity governed by the adherence state machine."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from fuel_engine.models.enums import EventStatus
from fuel_engine.models.item import Item


def make_event_id(race_id: str, hour_index: int, minute: int) -> str:
    """Deterministic event id; unique because a slot fires once per hour."""
    return f"{race_id}-{hour_index}-{minute}"


@dataclass
class ScheduledEvent:
    """One timed intake opportunity.

    Invariants (kept by ``RaceSession``):
        DUE       → actual_items and completed_at are None
        SKIPPED   → note is 1-100 chars, actual_items is None
        DONE/REPLACED → completed_at and actual_items are set
    """

    id: str
    race_id: str
    planned_time: datetime
    minute: int
    items: tuple[Item, ...]
    status: EventStatus = EventStatus.DUE
    actual_items: tuple[Item, ...] | None = None
    note: str | None = None
    completed_at: datetime | None = None

    @property
    def is_due(self) -> bool:
        return self.status == EventStatus.DUE

    @property
    def is_resolved_with_intake(self) -> bool:
        """True for DONE and REPLACED — the statuses that count as eaten."""
        return self.status in (EventStatus.DONE, EventStatus.REPLACED)
