"""Crew sync — local persistence, autosave, backups, webhook and CSV export.

All file, network and timer I/O lives here; fuel_engine stays pure.
"""

from crew_sync.autosave import DebouncedSaver
from crew_sync.backup import BackupConfig, BackupService
from crew_sync.exceptions import (
    CrewSyncError,
    ExportError,
    PersistenceError,
    WebhookError,
    WebhookRateLimitError,
)
from crew_sync.export import flatten_snapshot, write_csv
from crew_sync.snapshot import BackupSnapshot
from crew_sync.store import JsonFileStore
from crew_sync.webhook import WebhookClient

__all__ = [
    "BackupConfig",
    "BackupService",
    "BackupSnapshot",
    "CrewSyncError",
    "DebouncedSaver",
    "ExportError",
    "JsonFileStore",
    "PersistenceError",
    "WebhookClient",
    "WebhookError",
    "WebhookRateLimitError",
    "flatten_snapshot",
    "write_csv",
]
