"""Local JSON file store for the race state."""

from __future__ import annotations

import dataclasses
import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

from fuel_engine.serialization import (
    AppState,
    app_state_from_dict,
    app_state_to_dict,
)

from crew_sync.exceptions import PersistenceError

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class JsonFileStore:
    """Persists a single AppState as one JSON document.

    Writes go to a temp file in the same directory and are moved into place
    with ``os.replace``, so a crash mid-write leaves the old file intact.
    """

    def __init__(
        self,
        path: Path | str,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._path = Path(path).expanduser()
        self._clock = clock or _utc_now

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> AppState | None:
        """Return the stored state, or None when nothing has been saved yet.

        Raises:
            PersistenceError: if the file exists but cannot be read or decoded.
        """
        if not self._path.exists():
            return None
        try:
            with open(self._path, encoding="utf-8") as f:
                data = json.load(f)
            state = app_state_from_dict(data)
        except (OSError, ValueError, KeyError, TypeError) as exc:
            raise PersistenceError(f"Failed to load {self._path}: {exc}") from exc
        logger.debug("Loaded state from %s", self._path)
        return state

    def save(self, state: AppState) -> datetime:
        """Write *state* atomically. Returns the ``lastSaved`` stamp written."""
        saved_at = self._clock()
        payload = app_state_to_dict(dataclasses.replace(state, last_saved=saved_at))
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=self._path.name, suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(payload, f, ensure_ascii=False)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise PersistenceError(f"Failed to save {self._path}: {exc}") from exc
        logger.debug("Saved state to %s", self._path)
        return saved_at

    def clear(self) -> None:
        try:
            self._path.unlink(missing_ok=True)
        except OSError as exc:
            raise PersistenceError(f"Failed to clear {self._path}: {exc}") from exc
        logger.info("Cleared saved state at %s", self._path)

    def has_saved_data(self) -> bool:
        return self._path.exists()

    def storage_info(self) -> dict[str, Any]:
        """Size of the state file in bytes and its ``lastSaved`` stamp."""
        if not self._path.exists():
            return {"size": 0, "last_saved": None}
        try:
            raw = self._path.read_text(encoding="utf-8")
            last_saved = json.loads(raw).get("lastSaved")
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"Failed to inspect {self._path}: {exc}") from exc
        return {
            "size": len(raw.encode("utf-8")),
            "last_saved": datetime.fromisoformat(last_saved) if last_saved else None,
        }
