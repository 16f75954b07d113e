"""Backup webhook client — pushes backup snapshots to a crew-configured URL.

All calls retry with exponential backoff on HTTP 429.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

import httpx

from crew_sync.exceptions import WebhookError, WebhookRateLimitError

logger = logging.getLogger(__name__)

_MAX_RETRIES = 3
_BASE_BACKOFF_S = 2
PAYLOAD_TYPE = "ultra_crew_backup"


class WebhookClient:
    """POSTs ``{"type": "ultra_crew_backup", "data": snapshot}`` to *url*."""

    def __init__(
        self,
        url: str,
        client: httpx.Client | None = None,
        timeout: float = 10,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._url = url
        self._client = client or httpx.Client(timeout=timeout)
        self._sleep = sleep

    @property
    def url(self) -> str:
        return self._url

    def send(self, snapshot: dict[str, Any]) -> int:
        """Deliver one snapshot. Returns the HTTP status code on success."""
        payload = {"type": PAYLOAD_TYPE, "data": snapshot}
        resp = self._safe_post(payload)
        logger.info("Webhook backup delivered (HTTP %d)", resp.status_code)
        return resp.status_code

    def close(self) -> None:
        self._client.close()

    def _safe_post(self, payload: dict[str, Any]) -> httpx.Response:
        """POST with retry + exponential backoff on 429."""
        for attempt in range(_MAX_RETRIES):
            try:
                resp = self._client.post(self._url, json=payload)
            except httpx.HTTPError as exc:
                raise WebhookError(f"Webhook request failed: {exc}") from exc

            if resp.status_code == 429:
                wait = _BASE_BACKOFF_S * (2 ** attempt)
                logger.warning(
                    "Webhook rate limited (attempt %d/%d), retrying in %ds",
                    attempt + 1,
                    _MAX_RETRIES,
                    wait,
                )
                self._sleep(wait)
                continue
            if resp.is_error:
                raise WebhookError(
                    f"Webhook returned HTTP {resp.status_code}: {resp.text[:200]}",
                    status_code=resp.status_code,
                )
            return resp

        raise WebhookRateLimitError(f"Rate limited after {_MAX_RETRIES} retries")
