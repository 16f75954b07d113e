"""Utility helpers bridging the Streamlit crew dashboard and the fuel engine.

Pure functions for formatting, time-zone handling and default values.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from fuel_engine.models.enums import EventStatus, Severity, SymptomKey
from fuel_engine.models.event import ScheduledEvent
from fuel_engine.models.item import describe_items

# ---------------------------------------------------------------------------
# Display constants
# ---------------------------------------------------------------------------

STATUS_ICONS: dict[EventStatus, str] = {
    EventStatus.DUE: "⏳",
    EventStatus.DONE: "✅",
    EventStatus.SKIPPED: "⏭️",
    EventStatus.REPLACED: "🔄",
}

SEVERITY_COLORS: dict[Severity, str] = {
    Severity.HIGH: "#F8D7DA",
    Severity.MEDIUM: "#FFF3CD",
    Severity.LOW: "#D1ECF1",
}

# Quick-pick skip reasons shown above the free-text field
SKIP_REASONS = (
    "Nausea",
    "Not hungry",
    "Stomach issues",
    "Missed aid station",
    "Athlete refused",
)

# Hydration chart, 1 = well hydrated, 8 = severely dehydrated
URINE_COLOR_LABELS: dict[int, str] = {
    1: "1 — pale",
    2: "2 — pale straw",
    3: "3 — straw",
    4: "4 — light yellow",
    5: "5 — yellow",
    6: "6 — dark yellow",
    7: "7 — amber",
    8: "8 — brown",
}


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def fixed_offset(hours: float) -> timezone:
    """Fixed UTC offset, e.g. 2 -> UTC+02:00. No DST handling."""
    return timezone(timedelta(hours=hours))


def format_hms(total_seconds: float) -> str:
    """Seconds to 'H:MM:SS'. e.g. 3725 -> '1:02:05'. Negative values read 0."""
    seconds = max(0, int(total_seconds))
    hours, rem = divmod(seconds, 3600)
    mins, secs = divmod(rem, 60)
    return f"{hours}:{mins:02d}:{secs:02d}"


def format_clock(moment: datetime | None, tz: timezone | None = None) -> str:
    """'HH:MM' in *tz* (default: the moment's own offset)."""
    if moment is None:
        return "--"
    if tz is not None:
        moment = moment.astimezone(tz)
    return moment.strftime("%H:%M")


def event_label(event: ScheduledEvent, tz: timezone | None = None) -> str:
    """One-line label, e.g. '⏳ 10:10 — PH1000 150ml, GEL100 1piece'."""
    icon = STATUS_ICONS[event.status]
    items = event.actual_items if event.actual_items is not None else event.items
    text = f"{icon} {format_clock(event.planned_time, tz)} — {describe_items(items) or 'nothing'}"
    if event.note:
        text += f" ({event.note})"
    return text


def minutes_until(event: ScheduledEvent, now: datetime) -> int:
    """Whole minutes until the event (negative when late)."""
    return int((event.planned_time - now).total_seconds() // 60)


def symptom_label(key: SymptomKey, labels: dict[SymptomKey, str]) -> str:
    return labels.get(key, key.value)


def default_start_time(now: datetime, tz: timezone) -> datetime:
    """Next full hour in *tz*."""
    local = now.astimezone(tz).replace(minute=0, second=0, microsecond=0)
    return local + timedelta(hours=1)


def storage_size_label(size_bytes: int) -> str:
    """Human-readable size. e.g. 2048 -> '2.0 KB'."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    return f"{size_bytes / 1024:.1f} KB"
