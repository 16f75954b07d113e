"""Planned vs. actual nutrition per elapsed race hour.

Hour indices are relative to the first event in the schedule, not to the
wall-clock hour of day.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta

import numpy as np
import pandas as pd

from fuel_engine.models.event import ScheduledEvent
from fuel_engine.models.item import NutrientProfile
from fuel_engine.models.race import DEFAULT_PATTERN
from fuel_engine.nutrition.aggregator import aggregate

_ONE_HOUR = timedelta(hours=1)


@dataclass(frozen=True)
class HourlyStats:
    """Nutrition summary for one race hour."""

    hour: int
    planned: NutrientProfile = field(default_factory=NutrientProfile)
    actual: NutrientProfile = field(default_factory=NutrientProfile)
    events: tuple[ScheduledEvent, ...] = field(default_factory=tuple)


def hour_index(event: ScheduledEvent, first_event_time) -> int:
    """Whole hours elapsed between the schedule start and *event*."""
    return (event.planned_time - first_event_time) // _ONE_HOUR


def hourly_stats(
    events: list[ScheduledEvent],
    hour: int,
    ph_powder_active: bool = False,
) -> HourlyStats:
    """Planned and actual nutrition for race hour *hour*.

    Planned totals every bucketed event's planned items. Actual counts only
    DONE/REPLACED events; skipped and still-due events contribute nothing.
    """
    if not events:
        return HourlyStats(hour=hour)

    first_event_time = events[0].planned_time
    bucket = tuple(e for e in events if hour_index(e, first_event_time) == hour)

    planned_items = [item for e in bucket for item in e.items]
    actual_items = [
        item
        for e in bucket
        if e.is_resolved_with_intake
        for item in (e.actual_items if e.actual_items is not None else e.items)
    ]

    return HourlyStats(
        hour=hour,
        planned=aggregate(planned_items, ph_powder_active),
        actual=aggregate(actual_items, ph_powder_active),
        events=bucket,
    )


def baseline_hourly_targets(ph_powder_active: bool = False) -> NutrientProfile:
    """The 100 % reference for one hour of the unmodified default pattern.

    89 g carbs (98 g with powder), 499 mg sodium, 450 ml fluid, 0 g protein.
    Independent of YT mode.
    """
    items = [item for slot in DEFAULT_PATTERN for item in slot.items]
    return aggregate(items, ph_powder_active)


def _pct(actual: float, target: float) -> float:
    if target <= 0:
        return np.nan
    return round(100.0 * actual / target, 1)


def hourly_table(
    events: list[ScheduledEvent], ph_powder_active: bool = False
) -> pd.DataFrame:
    """One row per race hour with planned/actual nutrients and adherence %.

    Adherence percentages use ``baseline_hourly_targets`` as denominator.
    Returns an empty frame with the expected columns if there are no events.
    """
    columns = [
        "hour",
        "planned_carbs", "planned_sodium", "planned_fluid", "planned_protein",
        "actual_carbs", "actual_sodium", "actual_fluid", "actual_protein",
        "carbs_pct", "sodium_pct", "fluid_pct",
    ]
    if not events:
        return pd.DataFrame(columns=columns)

    baseline = baseline_hourly_targets(ph_powder_active)
    first_event_time = events[0].planned_time
    hours = sorted({hour_index(e, first_event_time) for e in events})

    rows = []
    for hour in hours:
        stats = hourly_stats(events, hour, ph_powder_active)
        rows.append([
            hour,
            stats.planned.carbs, stats.planned.sodium,
            stats.planned.fluid, stats.planned.protein,
            stats.actual.carbs, stats.actual.sodium,
            stats.actual.fluid, stats.actual.protein,
            _pct(stats.actual.carbs, baseline.carbs),
            _pct(stats.actual.sodium, baseline.sodium),
            _pct(stats.actual.fluid, baseline.fluid),
        ])

    frame = pd.DataFrame(rows, columns=columns)
    frame = frame.astype({c: np.float64 for c in columns[1:]})
    frame["hour"] = frame["hour"].astype(int)
    return frame
