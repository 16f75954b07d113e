"""Custom exception hierarchy for the crew sync collaborators."""

from __future__ import annotations


class CrewSyncError(Exception):
    """Base exception for all crew_sync errors."""


class PersistenceError(CrewSyncError):
    """Reading or writing the local state file failed."""


class ExportError(CrewSyncError):
    """Writing a CSV backup export failed."""


class WebhookError(CrewSyncError):
    """The backup webhook returned an error response or was unreachable."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class WebhookRateLimitError(WebhookError):
    """HTTP 429 — too many requests."""

    def __init__(self, message: str = "Rate limited by backup webhook") -> None:
        super().__init__(message, status_code=429)
