"""CSV export of backup snapshots (pandas)."""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
from fuel_engine.models.item import describe_items
from fuel_engine.serialization.app_state import item_from_dict

from crew_sync.exceptions import ExportError
from crew_sync.snapshot import BackupSnapshot

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    "timestamp",
    "kind",
    "status",
    "planned_time",
    "completed_at",
    "items",
    "note",
]


def _describe(raw_items: list[dict]) -> str:
    return describe_items([item_from_dict(d) for d in raw_items])


def flatten_snapshot(snapshot: BackupSnapshot) -> pd.DataFrame:
    """One row per event, per inventory line and per active symptom.

    Event rows show the actual items when present, otherwise the planned ones.
    """
    stamp = snapshot.timestamp.isoformat()
    state = snapshot.state
    rows: list[dict] = []

    for ev in state.get("events", []):
        rows.append({
            "timestamp": stamp,
            "kind": "event",
            "status": ev["status"],
            "planned_time": ev["plannedTime"],
            "completed_at": ev.get("completedAt"),
            "items": _describe(ev.get("actualItems") or ev["items"]),
            "note": ev.get("note"),
        })

    for sku, count in (state.get("inventory") or {}).items():
        rows.append({
            "timestamp": stamp,
            "kind": "inventory",
            "status": None,
            "planned_time": None,
            "completed_at": None,
            "items": f"{sku}: {count:g}",
            "note": None,
        })

    health = state.get("health") or {}
    for name, active in (health.get("symptoms") or {}).items():
        if active:
            rows.append({
                "timestamp": stamp,
                "kind": "symptom",
                "status": "active",
                "planned_time": None,
                "completed_at": None,
                "items": name,
                "note": None,
            })

    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def export_filename(snapshot: BackupSnapshot) -> str:
    return f"ultra_crew_backup_{snapshot.timestamp.strftime('%Y%m%dT%H%M%S')}.csv"


def write_csv(snapshot: BackupSnapshot, directory: Path | str) -> Path:
    """Write the flattened snapshot to *directory*. Returns the file path.

    Raises:
        ExportError: if the directory or file cannot be written.
    """
    out_dir = Path(directory).expanduser()
    path = out_dir / export_filename(snapshot)
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
        flatten_snapshot(snapshot).to_csv(path, index=False)
    except OSError as exc:
        raise ExportError(f"Failed to write {path}: {exc}") from exc
    logger.info("Exported backup CSV to %s", path)
    return path
