"""Periodic backup service — snapshot history plus webhook and CSV sinks."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

from apscheduler.schedulers.background import BackgroundScheduler
from fuel_engine.models.enums import (
    BACKUP_INTERVAL_DEFAULT_MIN,
    BACKUP_INTERVAL_MAX_MIN,
    BACKUP_INTERVAL_MIN_MIN,
    BACKUP_MAX_SNAPSHOTS,
)
from fuel_engine.serialization import AppState, app_state_from_dict, app_state_to_dict

from crew_sync.exceptions import CrewSyncError
from crew_sync.export import write_csv
from crew_sync.snapshot import BackupSnapshot
from crew_sync.store import JsonFileStore
from crew_sync.webhook import WebhookClient

logger = logging.getLogger(__name__)

_JOB_ID = "crew_backup"


@dataclass(frozen=True)
class BackupConfig:
    enabled: bool = True
    interval_minutes: int = BACKUP_INTERVAL_DEFAULT_MIN
    max_backups: int = BACKUP_MAX_SNAPSHOTS
    auto_export: bool = True
    export_dir: Path = Path("backups")
    webhook_url: str | None = None

    def is_valid(self) -> bool:
        return (
            isinstance(self.interval_minutes, int)
            and BACKUP_INTERVAL_MIN_MIN <= self.interval_minutes <= BACKUP_INTERVAL_MAX_MIN
            and isinstance(self.max_backups, int)
            and self.max_backups > 0
        )


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BackupService:
    """Takes snapshots of the live state on an interval and fans them out.

    ``get_state`` is called at backup time to read the current AppState.
    Sinks (local store, webhook, CSV export) run independently; a failing
    sink is logged and recorded in ``last_errors`` but never aborts the
    backup or affects the other sinks.

    Usage:
        service = BackupService(session.to_app_state, store=JsonFileStore(path))
        service.start()
    """

    def __init__(
        self,
        get_state: Callable[[], AppState],
        store: JsonFileStore | None = None,
        webhook: WebhookClient | None = None,
        scheduler: BackgroundScheduler | None = None,
        clock: Callable[[], datetime] | None = None,
        config: BackupConfig | None = None,
    ) -> None:
        self._get_state = get_state
        self._store = store
        self._webhook = webhook
        self._url_webhook: WebhookClient | None = None
        self._owns_scheduler = scheduler is None
        self._scheduler = scheduler or BackgroundScheduler()
        self._clock = clock or _utc_now
        self._config = config or BackupConfig()
        self._history: list[BackupSnapshot] = []
        self._running = False
        self.last_errors: dict[str, str] = {}

    @property
    def config(self) -> BackupConfig:
        return self._config

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> bool:
        """Register the interval job. Returns False when backups are disabled."""
        if not self._config.enabled:
            logger.info("Backups disabled, not starting")
            return False
        self._scheduler.add_job(
            self.create_backup,
            "interval",
            minutes=self._config.interval_minutes,
            id=_JOB_ID,
            replace_existing=True,
        )
        if self._owns_scheduler and not self._scheduler.running:
            self._scheduler.start()
        self._running = True
        logger.info("Backup service started, every %d min", self._config.interval_minutes)
        return True

    def stop(self) -> None:
        if not self._running:
            return
        self._scheduler.remove_job(_JOB_ID)
        if self._owns_scheduler and self._scheduler.running:
            self._scheduler.shutdown(wait=False)
        self._running = False
        logger.info("Backup service stopped")

    def is_running(self) -> bool:
        return self._running

    def update_config(self, **changes: Any) -> bool:
        """Apply config changes. Invalid values keep the old config."""
        try:
            candidate = dataclasses.replace(self._config, **changes)
        except TypeError:
            logger.debug("Rejected unknown backup config fields %s", sorted(changes))
            return False
        if not candidate.is_valid():
            logger.debug("Rejected backup config %s", changes)
            return False

        self._config = candidate
        del self._history[candidate.max_backups:]
        if self._running:
            if not candidate.enabled:
                self.stop()
            else:
                self._scheduler.reschedule_job(
                    _JOB_ID, trigger="interval", minutes=candidate.interval_minutes
                )
        return True

    # ------------------------------------------------------------------
    # Backups
    # ------------------------------------------------------------------

    def manual_backup(self) -> BackupSnapshot:
        logger.info("Manual backup requested")
        return self.create_backup()

    def create_backup(self, state: AppState | None = None) -> BackupSnapshot:
        """Snapshot *state* (default: the live state), record it and push it to every sink."""
        if state is None:
            state = self._get_state()
        snapshot = BackupSnapshot(
            timestamp=self._clock(),
            state=app_state_to_dict(state, include_last_saved=False),
        )
        self._history.insert(0, snapshot)
        del self._history[self._config.max_backups:]

        errors: dict[str, str] = {}
        if self._store is not None:
            self._run_sink("store", errors, self._store.save, state)
        webhook = self._webhook_client()
        if webhook is not None:
            self._run_sink("webhook", errors, webhook.send, snapshot.to_dict())
        if self._config.auto_export:
            self._run_sink("export", errors, write_csv, snapshot, self._config.export_dir)
        self.last_errors = errors

        logger.info(
            "Backup created at %s (%d in history, %d sink errors)",
            snapshot.timestamp.isoformat(),
            len(self._history),
            len(errors),
        )
        return snapshot

    def _run_sink(
        self, name: str, errors: dict[str, str], fn: Callable, *args: Any
    ) -> None:
        try:
            fn(*args)
        except CrewSyncError as exc:
            logger.error("Backup sink %s failed: %s", name, exc)
            errors[name] = str(exc)

    def _webhook_client(self) -> WebhookClient | None:
        if self._webhook is not None:
            return self._webhook
        url = self._config.webhook_url
        if not url:
            return None
        if self._url_webhook is None or self._url_webhook.url != url:
            self._url_webhook = WebhookClient(url)
        return self._url_webhook

    def history(self) -> list[BackupSnapshot]:
        """Snapshots, newest first."""
        return list(self._history)

    def last_backup_time(self) -> datetime | None:
        return self._history[0].timestamp if self._history else None

    def status(self) -> dict[str, Any]:
        next_backup = None
        if self._running:
            job = self._scheduler.get_job(_JOB_ID)
            next_backup = getattr(job, "next_run_time", None) if job else None
        return {
            "running": self._running,
            "last_backup": self.last_backup_time(),
            "next_backup": next_backup,
            "total_backups": len(self._history),
            "config": self._config,
            "last_errors": dict(self.last_errors),
        }

    def restore(self, snapshot: BackupSnapshot) -> AppState:
        """Decode a snapshot back into an AppState (the caller rehydrates)."""
        logger.info("Restoring backup from %s", snapshot.timestamp.isoformat())
        return app_state_from_dict(snapshot.state)
