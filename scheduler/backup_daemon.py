"""Backup daemon — snapshots the saved race state, pushes to webhook and CSV.

Usage:
    python -m scheduler.backup_daemon --once      # single run (for cron)
    python -m scheduler.backup_daemon --daemon    # APScheduler loop
"""

from __future__ import annotations

import argparse
import logging

from crew_sync import BackupConfig, BackupService, JsonFileStore, PersistenceError

from scheduler.config import (
    BACKUP_INTERVAL_MINUTES,
    BACKUP_RETENTION,
    EXPORT_DIR,
    STATE_PATH,
    WEBHOOK_URL,
)

logger = logging.getLogger(__name__)


def build_config() -> BackupConfig:
    return BackupConfig(
        interval_minutes=BACKUP_INTERVAL_MINUTES,
        max_backups=BACKUP_RETENTION,
        export_dir=EXPORT_DIR,
        webhook_url=WEBHOOK_URL,
    )


def backup_job(store: JsonFileStore | None = None, service: BackupService | None = None) -> bool:
    """Execute one backup cycle: load the saved state and run one backup.

    Returns True if a snapshot was taken.
    """
    logger.info("Starting backup job")
    store = store or JsonFileStore(STATE_PATH)

    # 1. Load the saved race state
    try:
        state = store.load()
    except PersistenceError as exc:
        logger.error("Failed to load state: %s", exc)
        return False
    if state is None:
        logger.info("No saved state at %s, nothing to back up", store.path)
        return False

    # 2. Snapshot and fan out to the sinks (webhook, CSV)
    service = service or BackupService(store.load, config=build_config())
    snapshot = service.create_backup(state)
    if service.last_errors:
        logger.warning("Backup sinks failed: %s", service.last_errors)

    logger.info("Backup job complete (%s)", snapshot.timestamp.isoformat())
    return True


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    parser = argparse.ArgumentParser(description="Ultra crew backup daemon")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--once", action="store_true", help="Run once and exit")
    group.add_argument("--daemon", action="store_true", help="Run as APScheduler daemon")
    args = parser.parse_args()

    if args.once:
        backup_job()
    else:
        from apscheduler.schedulers.blocking import BlockingScheduler

        store = JsonFileStore(STATE_PATH)
        service = BackupService(store.load, config=build_config())
        scheduler = BlockingScheduler()
        scheduler.add_job(
            backup_job,
            "interval",
            minutes=BACKUP_INTERVAL_MINUTES,
            kwargs={"store": store, "service": service},
            id="backup_job",
        )
        logger.info("Scheduler started — backup every %d min", BACKUP_INTERVAL_MINUTES)
        try:
            scheduler.start()
        except (KeyboardInterrupt, SystemExit):
            logger.info("Scheduler stopped")


if __name__ == "__main__":
    main()
