"""Schedule generation — expand the hourly pattern over the race duration.

Generation is destructive: each call produces a fresh list of DUE events and
any adherence recorded against a previous schedule is discarded by the caller.
The output depends only on the RaceConfig, never on wall-clock time.
"""

from __future__ import annotations

from datetime import timedelta

from fuel_engine.models.enums import (
    PROTEIN_DRINK_SERVING_ML,
    YT_MODE_HOUR_INTERVAL,
    ItemKind,
    Unit,
    YTMode,
)
from fuel_engine.models.event import ScheduledEvent, make_event_id
from fuel_engine.models.item import Item
from fuel_engine.models.race import PatternSlot, RaceConfig

PROTEIN_DRINK = Item(ItemKind.YT, PROTEIN_DRINK_SERVING_ML, Unit.ML)


def _slot_minute(pattern: tuple[PatternSlot, ...], position: int) -> int | None:
    """Minute of the slot at *position* (negative indexes allowed), or None."""
    try:
        return pattern[position].minute
    except IndexError:
        return None


def _without(items: list[Item], kind: ItemKind) -> list[Item]:
    return [item for item in items if item.kind != kind]


def apply_yt_mode(
    mode: YTMode,
    pattern: tuple[PatternSlot, ...],
    slot: PatternSlot,
    items: list[Item],
) -> list[Item]:
    """Apply the protein-drink transform for *mode* to one slot's items.

    Each mode touches exactly one designated slot; every other slot is
    returned unchanged. Callers only invoke this on every third hour.

    Args:
        mode: The race's YT mode.
        pattern: The full ordered pattern, used to locate first/second/last slot.
        slot: The slot being emitted.
        items: A copy of the slot's items.

    Returns:
        The (possibly) transformed item list.
    """
    if mode == YTMode.OFF:
        return items
    if mode == YTMode.A:
        if slot.minute == _slot_minute(pattern, 0):
            return items + [PROTEIN_DRINK]
        return items
    if mode == YTMode.B:
        if slot.minute == _slot_minute(pattern, -1):
            return [PROTEIN_DRINK]
        return items
    if mode == YTMode.C:
        if slot.minute == _slot_minute(pattern, 0):
            return _without(items, ItemKind.GEL100) + [PROTEIN_DRINK]
        return items
    if mode == YTMode.D:
        if slot.minute == _slot_minute(pattern, 1):
            return _without(items, ItemKind.GEL160) + [PROTEIN_DRINK]
        return items
    raise ValueError(f"Unhandled YT mode: {mode!r}")


def generate(config: RaceConfig) -> list[ScheduledEvent]:
    """Expand *config* into concrete timed events.

    For each hour ``h`` in ``[0, duration_hours)`` and each pattern slot, emit
    one DUE event at ``start_time + h hours + slot.minute minutes``. On hours
    divisible by 3 the YT mode transform is applied. An empty pattern yields
    an empty schedule.

    Args:
        config: Race configuration. Duration is validated upstream.

    Returns:
        Events ordered by hour, then pattern order.
    """
    events: list[ScheduledEvent] = []
    yt_mode = config.toggles.yt_mode

    for hour in range(config.duration_hours):
        hour_start = config.start_time + timedelta(hours=hour)
        for slot in config.pattern:
            items = list(slot.items)
            if yt_mode != YTMode.OFF and hour % YT_MODE_HOUR_INTERVAL == 0:
                items = apply_yt_mode(yt_mode, config.pattern, slot, items)

            events.append(
                ScheduledEvent(
                    id=make_event_id(config.id, hour, slot.minute),
                    race_id=config.id,
                    planned_time=hour_start + timedelta(minutes=slot.minute),
                    minute=slot.minute,
                    items=tuple(items),
                )
            )

    return events
