"""Backup snapshot record."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from fuel_engine.models.enums import BACKUP_VERSION


@dataclass(frozen=True)
class BackupSnapshot:
    """A point-in-time copy of the persisted state (codec dict, no ``lastSaved``).

    On the wire the codec keys sit at the top level next to the timestamp:
    ``{timestamp, race, events, inventory, health, consecutiveSkips, version}``.
    """

    timestamp: datetime
    state: dict[str, Any]
    version: str = BACKUP_VERSION

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            **self.state,
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BackupSnapshot:
        state = {k: v for k, v in data.items() if k not in ("timestamp", "version")}
        return cls(
            timestamp=datetime.fromisoformat(data["timestamp"]),
            state=state,
            version=data.get("version", BACKUP_VERSION),
        )
