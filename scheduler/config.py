"""Environment-variable-based configuration for the backup daemon."""

from __future__ import annotations

import os
from pathlib import Path

STATE_PATH: Path = Path(
    os.environ.get("CREW_STATE_PATH", "~/.ultra_crew/state.json")
).expanduser()
EXPORT_DIR: Path = Path(os.environ.get("CREW_EXPORT_DIR", "~/.ultra_crew/backups")).expanduser()
BACKUP_INTERVAL_MINUTES: int = int(os.environ.get("CREW_BACKUP_INTERVAL", "30"))
BACKUP_RETENTION: int = int(os.environ.get("CREW_BACKUP_RETENTION", "48"))
WEBHOOK_URL: str | None = os.environ.get("CREW_WEBHOOK_URL") or None
UTC_OFFSET_HOURS: float = float(os.environ.get("CREW_UTC_OFFSET_HOURS", "2"))
