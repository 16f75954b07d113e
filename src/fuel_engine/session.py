"""RaceSession — the race aggregate that owns events, inventory, health and alarms."""

from __future__ import annotations

import dataclasses
import logging
from datetime import datetime, timezone
from typing import Callable

from fuel_engine.health.matcher import derive_flags, match_recommendations
from fuel_engine.models.enums import (
    ACTION_TEXT_MAX_CHARS,
    DEFAULT_RACE_HOURS,
    NEXT_EVENTS_COUNT,
    OVERDUE_THRESHOLD_MIN,
    PREVIOUS_EVENT_GRACE_MIN,
    SKIP_ALARM_THRESHOLD,
    SKIP_REASON_MAX_CHARS,
    URINE_COLOR_MAX,
    URINE_COLOR_MIN,
    EventStatus,
    SymptomKey,
    YTMode,
)
from fuel_engine.models.event import ScheduledEvent
from fuel_engine.models.health import HealthData, HealthRecommendation
from fuel_engine.models.inventory import Inventory
from fuel_engine.models.item import Item, NutrientProfile
from fuel_engine.models.race import RaceConfig, RaceToggles, default_race, is_valid_duration
from fuel_engine.nutrition.hourly_stats import (
    HourlyStats,
    baseline_hourly_targets,
    hourly_stats,
    hourly_table,
)
from fuel_engine.schedule import selectors
from fuel_engine.schedule.generator import generate
from fuel_engine.serialization.app_state import AppState

logger = logging.getLogger(__name__)

_UNSET = object()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _valid_note(text: str | None) -> str | None:
    """Trimmed note if it is 1..SKIP_REASON_MAX_CHARS chars, else None."""
    if text is None:
        return None
    trimmed = text.strip()
    if not trimmed or len(trimmed) > SKIP_REASON_MAX_CHARS:
        return None
    return trimmed


class RaceSession:
    """Single-writer aggregate for one race.

    Owns the consecutive-skip counter and the sticky skip alarm; both can
    only change through ``complete``, ``skip``, ``replace`` and
    ``dismiss_alarm``. Every mutation is synchronous and total: invalid input
    or an unknown event id leaves state untouched and returns False.

    Usage:
        session = RaceSession(on_change=lambda s: saver.schedule(s.to_app_state()))
        session.initialize_race(start_time=start)
        session.complete(session.next_events(1)[0].id)
    """

    def __init__(
        self,
        clock: Callable[[], datetime] | None = None,
        on_alarm_raised: Callable[[int], None] | None = None,
        on_alarm_dismissed: Callable[[], None] | None = None,
        on_change: Callable[[RaceSession], None] | None = None,
    ) -> None:
        self._clock = clock or _utc_now
        self._on_alarm_raised = on_alarm_raised
        self._on_alarm_dismissed = on_alarm_dismissed
        self._on_change = on_change

        self._race: RaceConfig | None = None
        self._events: list[ScheduledEvent] = []
        self._inventory = Inventory()
        self._health = HealthData(last_updated=self._clock())
        self._consecutive_skips = 0
        self._skip_alarm_active = False

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def race(self) -> RaceConfig | None:
        return self._race

    @property
    def events(self) -> tuple[ScheduledEvent, ...]:
        return tuple(self._events)

    @property
    def inventory(self) -> Inventory:
        return self._inventory

    @property
    def health(self) -> HealthData:
        return self._health

    @property
    def consecutive_skips(self) -> int:
        return self._consecutive_skips

    @property
    def skip_alarm_active(self) -> bool:
        return self._skip_alarm_active

    def now(self) -> datetime:
        return self._clock()

    def get_event(self, event_id: str) -> ScheduledEvent | None:
        for event in self._events:
            if event.id == event_id:
                return event
        return None

    # ------------------------------------------------------------------
    # Race configuration (destructive regeneration)
    # ------------------------------------------------------------------

    def initialize_race(
        self,
        start_time: datetime | None = None,
        duration_hours: int | None = None,
        toggles: RaceToggles | None = None,
    ) -> bool:
        """Create the race with the default pattern and generate its schedule.

        Rejects durations outside 1-48 h and start times in the past.
        """
        now = self._clock()
        start_time = start_time or now
        if duration_hours is None:
            duration_hours = DEFAULT_RACE_HOURS
        if not is_valid_duration(duration_hours):
            logger.debug("Rejected race duration %r", duration_hours)
            return False
        if start_time < now:
            logger.debug("Rejected start time %s in the past", start_time.isoformat())
            return False

        self._race = default_race(start_time, duration_hours, toggles)
        self._regenerate()
        return True

    def update_settings(
        self,
        start_time: datetime | None = None,
        duration_hours: int | None = None,
        ph_powder: bool | None = None,
        yt_mode: YTMode | None = None,
    ) -> bool:
        """Replace race settings and regenerate the schedule.

        Every event's adherence is discarded, including manual edits.
        """
        if self._race is None:
            return False
        if duration_hours is not None and not is_valid_duration(duration_hours):
            logger.debug("Rejected race duration %r", duration_hours)
            return False

        toggles = self._race.toggles
        if ph_powder is not None:
            toggles = dataclasses.replace(toggles, ph_powder=ph_powder)
        if yt_mode is not None:
            toggles = dataclasses.replace(toggles, yt_mode=yt_mode)

        self._race = dataclasses.replace(
            self._race,
            start_time=start_time or self._race.start_time,
            duration_hours=duration_hours or self._race.duration_hours,
            toggles=toggles,
        )
        self._regenerate()
        return True

    def _regenerate(self) -> None:
        assert self._race is not None
        self._events = generate(self._race)
        logger.info(
            "Generated %d events for %s (%dh, YT mode %s)",
            len(self._events),
            self._race.id,
            self._race.duration_hours,
            self._race.toggles.yt_mode.value,
        )
        self._changed()

    def reset(self) -> None:
        """Drop the race and return every entity to its initial state."""
        alarm_was_active = self._skip_alarm_active
        self._race = None
        self._events = []
        self._inventory = Inventory()
        self._health = HealthData(last_updated=self._clock())
        self._consecutive_skips = 0
        self._skip_alarm_active = False
        if alarm_was_active:
            self._emit_alarm_dismissed()
        self._changed()

    # ------------------------------------------------------------------
    # Adherence state machine
    # ------------------------------------------------------------------

    def complete(
        self,
        event_id: str,
        actual_items: tuple[Item, ...] | list[Item] | None = None,
        note: str | None = None,
    ) -> bool:
        """DUE → DONE. Resets the skip counter and decrements inventory."""
        event = self.get_event(event_id)
        if event is None or not event.is_due:
            return False

        event.status = EventStatus.DONE
        event.actual_items = tuple(actual_items) if actual_items is not None else event.items
        event.note = note
        event.completed_at = self._clock()

        self._inventory.consume(event.actual_items)
        self._reset_skips()
        self._changed()
        return True

    def skip(self, event_id: str, reason: str) -> bool:
        """DUE → SKIPPED with a 1-100 char reason. May latch the skip alarm."""
        reason = _valid_note(reason)
        if reason is None:
            logger.debug("Rejected skip reason for %s", event_id)
            return False
        event = self.get_event(event_id)
        if event is None or not event.is_due:
            return False

        event.status = EventStatus.SKIPPED
        event.note = reason
        event.completed_at = self._clock()

        self._consecutive_skips += 1
        if self._consecutive_skips >= SKIP_ALARM_THRESHOLD:
            self._raise_alarm()
        self._changed()
        return True

    def replace(
        self,
        event_id: str,
        new_items: tuple[Item, ...] | list[Item],
        note: str | None = None,
    ) -> bool:
        """DUE → REPLACED. Counts as adherence for the skip alarm."""
        event = self.get_event(event_id)
        if event is None or not event.is_due:
            return False

        event.status = EventStatus.REPLACED
        event.actual_items = tuple(new_items)
        event.note = note
        event.completed_at = self._clock()

        self._reset_skips()
        self._changed()
        return True

    def undo(self, event_id: str) -> bool:
        """Reopen a resolved event.

        Display-level correction only: inventory and the skip counter are
        left as they are.
        """
        event = self.get_event(event_id)
        if event is None or event.is_due:
            return False

        event.status = EventStatus.DUE
        event.actual_items = None
        event.note = None
        event.completed_at = None
        self._changed()
        return True

    def dismiss_alarm(self) -> bool:
        """Clear the sticky alarm. The skip counter is not touched."""
        if not self._skip_alarm_active:
            return False
        self._skip_alarm_active = False
        logger.info("Skip alarm dismissed at %d consecutive skips", self._consecutive_skips)
        self._emit_alarm_dismissed()
        self._changed()
        return True

    def _reset_skips(self) -> None:
        self._consecutive_skips = 0
        if self._skip_alarm_active:
            self._skip_alarm_active = False
            self._emit_alarm_dismissed()

    def _raise_alarm(self) -> None:
        self._skip_alarm_active = True
        logger.warning(
            "Skip alarm: %d consecutive feedings skipped", self._consecutive_skips
        )
        if self._on_alarm_raised is not None:
            self._on_alarm_raised(self._consecutive_skips)

    def _emit_alarm_dismissed(self) -> None:
        if self._on_alarm_dismissed is not None:
            self._on_alarm_dismissed()

    # ------------------------------------------------------------------
    # Log-review edits
    # ------------------------------------------------------------------

    def update_event_details(
        self,
        event_id: str,
        planned_time: datetime | None = None,
        items: tuple[Item, ...] | list[Item] | None = None,
        actual_items: tuple[Item, ...] | list[Item] | None = None,
        note: str | None | object = _UNSET,
    ) -> bool:
        """Edit an event's time, planned items, actual items or note.

        A skipped event must keep a valid reason; ``actual_items`` only
        applies to DONE/REPLACED events. Passing ``note=None`` clears it.
        """
        event = self.get_event(event_id)
        if event is None:
            return False

        if note is not _UNSET:
            if event.status == EventStatus.SKIPPED:
                note = _valid_note(note)  # type: ignore[arg-type]
                if note is None:
                    return False
            elif note is not None:
                note = note.strip() or None  # type: ignore[union-attr]
        if actual_items is not None and not event.is_resolved_with_intake:
            return False

        if planned_time is not None:
            event.planned_time = planned_time
        if items is not None:
            event.items = tuple(items)
        if actual_items is not None:
            event.actual_items = tuple(actual_items)
        if note is not _UNSET:
            event.note = note  # type: ignore[assignment]
        self._changed()
        return True

    # ------------------------------------------------------------------
    # Inventory
    # ------------------------------------------------------------------

    def update_inventory(self, **counts: float) -> list[str]:
        """Set inventory counts manually. Returns rejected SKUs."""
        rejected = self._inventory.update(**counts)
        if len(rejected) < len(counts):
            self._changed()
        return rejected

    # ------------------------------------------------------------------
    # Health
    # ------------------------------------------------------------------

    def toggle_symptom(self, key: SymptomKey) -> list[HealthRecommendation]:
        """Flip one symptom and recompute flags. Returns current recommendations."""
        self._health.symptoms[key] = not self._health.symptoms.get(key, False)
        self._health.last_updated = self._clock()

        matched = match_recommendations(self._health.active_symptoms())
        flags = derive_flags(matched)
        if flags != self._health.flags:
            self._health.flags = flags
        self._changed()
        return matched

    def recommendations(self) -> list[HealthRecommendation]:
        return match_recommendations(self._health.active_symptoms())

    def toggle_action(self, action: str) -> bool:
        """Tick or untick a recommended action (1-200 chars)."""
        if not action or not action.strip() or len(action) > ACTION_TEXT_MAX_CHARS:
            return False
        action = action.strip()
        if action in self._health.actions:
            self._health.actions.remove(action)
        else:
            self._health.actions.append(action)
        self._health.last_updated = self._clock()
        self._changed()
        return True

    def record_measurements(
        self, weight_kg: float | None = None, urine_color: int | None = None
    ) -> bool:
        """Record body weight and/or urine colour (1-8 chart)."""
        if weight_kg is None and urine_color is None:
            return False
        if weight_kg is not None and weight_kg <= 0:
            return False
        if urine_color is not None and not URINE_COLOR_MIN <= urine_color <= URINE_COLOR_MAX:
            return False

        if weight_kg is not None:
            self._health.weight_kg = weight_kg
        if urine_color is not None:
            self._health.urine_color = urine_color
        self._health.last_updated = self._clock()
        self._changed()
        return True

    # ------------------------------------------------------------------
    # Protein slots
    # ------------------------------------------------------------------

    def complete_protein_slot(self, time: str, amount_g: float | None = None) -> bool:
        if self._race is None:
            return False
        slots = list(self._race.protein_slots)
        for i, slot in enumerate(slots):
            if slot.time == time and not slot.completed:
                slots[i] = dataclasses.replace(
                    slot, completed=True, completed_at=self._clock(), amount_g=amount_g
                )
                self._race = dataclasses.replace(self._race, protein_slots=tuple(slots))
                self._changed()
                return True
        return False

    # ------------------------------------------------------------------
    # Selectors (bound to the session clock)
    # ------------------------------------------------------------------

    def next_events(self, count: int = NEXT_EVENTS_COUNT) -> list[ScheduledEvent]:
        return selectors.next_events(self._events, self._clock(), count)

    def previous_loggable_event(
        self, grace_minutes: float = PREVIOUS_EVENT_GRACE_MIN
    ) -> ScheduledEvent | None:
        return selectors.previous_loggable_event(self._events, self._clock(), grace_minutes)

    def current_hour_events(self) -> list[ScheduledEvent]:
        return selectors.current_hour_events(self._events, self._clock())

    def overdue(self, minutes_threshold: float = OVERDUE_THRESHOLD_MIN) -> list[ScheduledEvent]:
        return selectors.overdue(self._events, self._clock(), minutes_threshold)

    def is_event_overdue(
        self, event: ScheduledEvent, minutes_threshold: float = OVERDUE_THRESHOLD_MIN
    ) -> bool:
        return selectors.is_event_overdue(event, self._clock(), minutes_threshold)

    @property
    def ph_powder_active(self) -> bool:
        return self._race is not None and self._race.toggles.ph_powder

    def hourly_stats(self, hour: int) -> HourlyStats:
        return hourly_stats(self._events, hour, self.ph_powder_active)

    def hourly_table(self):
        return hourly_table(self._events, self.ph_powder_active)

    def baseline_targets(self) -> NutrientProfile:
        return baseline_hourly_targets(self.ph_powder_active)

    def race_clock(self) -> tuple[int, int, bool, datetime] | None:
        """(elapsed_s, remaining_s, is_finished, end) or None before a race exists."""
        if self._race is None:
            return None
        return selectors.elapsed_and_remaining(
            self._race.start_time, self._race.duration_hours, self._clock()
        )

    # ------------------------------------------------------------------
    # Persistence bridge
    # ------------------------------------------------------------------

    def to_app_state(self) -> AppState:
        """Snapshot of the persisted fields. The alarm flag is not persisted."""
        return AppState(
            race=self._race,
            events=[dataclasses.replace(e) for e in self._events],
            inventory=Inventory(counts=self._inventory.to_dict()),
            health=dataclasses.replace(
                self._health,
                symptoms=dict(self._health.symptoms),
                actions=list(self._health.actions),
            ),
            consecutive_skips=self._consecutive_skips,
        )

    @classmethod
    def from_app_state(cls, state: AppState, **kwargs) -> RaceSession:
        """Rehydrate a session from persisted state.

        ``kwargs`` are passed to the constructor (clock, listeners).
        """
        session = cls(**kwargs)
        session._race = state.race
        session._events = list(state.events)
        session._inventory = state.inventory
        session._health = state.health
        session._consecutive_skips = state.consecutive_skips
        return session

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change(self)
