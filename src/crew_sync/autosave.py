"""Debounced autosave — coalesces bursts of state changes into one write."""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta, timezone

from apscheduler.schedulers.background import BackgroundScheduler
from fuel_engine.models.enums import AUTOSAVE_DEBOUNCE_S
from fuel_engine.serialization import AppState

from crew_sync.exceptions import PersistenceError
from crew_sync.store import JsonFileStore

logger = logging.getLogger(__name__)

_JOB_ID = "crew_autosave"


class DebouncedSaver:
    """Saves the most recent snapshot ``delay_s`` after the last change.

    Each ``schedule()`` bumps a generation counter and re-arms a one-shot
    APScheduler job under a fixed id, so an older pending snapshot can never
    overwrite a newer one. Save failures are logged and kept in
    ``last_error``; in-memory state is never touched.
    """

    def __init__(
        self,
        store: JsonFileStore,
        scheduler: BackgroundScheduler | None = None,
        delay_s: float = AUTOSAVE_DEBOUNCE_S,
    ) -> None:
        self._store = store
        self._owns_scheduler = scheduler is None
        self._scheduler = scheduler or BackgroundScheduler()
        self._delay = timedelta(seconds=delay_s)
        self._lock = threading.Lock()
        self._generation = 0
        self._pending: AppState | None = None
        self.last_error: PersistenceError | None = None
        self.last_saved: datetime | None = None

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def schedule(self, state: AppState) -> int:
        """Queue *state* for saving. Returns its generation number."""
        with self._lock:
            self._generation += 1
            generation = self._generation
            self._pending = state
        if self._owns_scheduler and not self._scheduler.running:
            self._scheduler.start()
        self._scheduler.add_job(
            self._run,
            "date",
            run_date=datetime.now(timezone.utc) + self._delay,
            args=[generation],
            id=_JOB_ID,
            replace_existing=True,
        )
        return generation

    def flush(self) -> bool:
        """Save any pending snapshot immediately. Returns True if a save happened."""
        with self._lock:
            generation = self._generation
        return self._run(generation)

    def shutdown(self) -> None:
        self.flush()
        if self._owns_scheduler and self._scheduler.running:
            self._scheduler.shutdown(wait=False)

    def _run(self, generation: int) -> bool:
        with self._lock:
            if generation != self._generation or self._pending is None:
                logger.debug("Autosave generation %d superseded", generation)
                return False
            state = self._pending
            self._pending = None
            try:
                self.last_saved = self._store.save(state)
            except PersistenceError as exc:
                logger.error("Autosave failed: %s", exc)
                self.last_error = exc
                return False
            self.last_error = None
        logger.debug("Autosaved generation %d", generation)
        return True
