"""Tests for scheduler.backup_daemon.backup_job."""

from __future__ import annotations

from unittest.mock import MagicMock

from crew_sync.exceptions import PersistenceError
from scheduler.backup_daemon import backup_job, build_config


class TestBackupJob:
    def test_backs_up_loaded_state(self, session) -> None:
        state = session.to_app_state()
        store = MagicMock()
        store.load.return_value = state
        service = MagicMock()
        service.last_errors = {}
        assert backup_job(store=store, service=service)
        service.create_backup.assert_called_once_with(state)

    def test_nothing_saved(self) -> None:
        store = MagicMock()
        store.load.return_value = None
        service = MagicMock()
        assert not backup_job(store=store, service=service)
        service.create_backup.assert_not_called()

    def test_corrupt_state(self) -> None:
        store = MagicMock()
        store.load.side_effect = PersistenceError("bad json")
        service = MagicMock()
        assert not backup_job(store=store, service=service)
        service.create_backup.assert_not_called()


class TestBuildConfig:
    def test_uses_environment_defaults(self) -> None:
        config = build_config()
        assert config.is_valid()
        assert config.auto_export
