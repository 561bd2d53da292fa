"""HTTP client for the "latest" and "history" JSON feeds."""

from __future__ import annotations

import logging
import time
from typing import Any, List, Optional

import httpx

from models.records import FeedRecord

logger = logging.getLogger(__name__)


class SourceUnavailable(RuntimeError):
    """The feed could not be fetched or did not contain the expected shape."""


def _record_from(payload: Any) -> FeedRecord:
    if not isinstance(payload, dict):
        raise SourceUnavailable("Feed entry is not a JSON object.")
    return FeedRecord(
        timestamp=payload.get("timestamp"),
        temperature=payload.get("temperature"),
    )


class FeedClient:
    """Minimal async client for the temperature feeds."""

    def __init__(
        self,
        latest_url: str,
        history_url: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.latest_url = latest_url
        self.history_url = history_url
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_latest(self) -> FeedRecord:
        return _record_from(await self._get_json(self.latest_url))

    async def fetch_history(self) -> List[FeedRecord]:
        payload = await self._get_json(self.history_url)
        if not isinstance(payload, list):
            raise SourceUnavailable("History feed is not a JSON array.")
        records: List[FeedRecord] = []
        for position, item in enumerate(payload):
            if not isinstance(item, dict):
                logger.warning(
                    "Skipped history entry %d",
                    position,
                    extra={"url": self.history_url, "reason": "entry is not a JSON object"},
                )
                continue
            records.append(_record_from(item))
        return records

    async def _get_json(self, url: str) -> Any:
        # Cache-busting parameter; the gist CDN otherwise serves stale copies.
        params = {"t": int(time.time() * 1000)}
        try:
            response = await self._client.get(
                url, params=params, headers={"Cache-Control": "no-store"}
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "Feed request failed",
                extra={"url": url, "status_code": exc.response.status_code},
            )
            raise SourceUnavailable(
                f"HTTP {exc.response.status_code} for {url}"
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("Feed request failed", extra={"url": url, "reason": str(exc)})
            raise SourceUnavailable(f"Could not reach {url}: {exc}") from exc

        try:
            return response.json()
        except ValueError as exc:
            raise SourceUnavailable(f"Invalid JSON from {url}") from exc
