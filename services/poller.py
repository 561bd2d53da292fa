"""Periodic polling of the feeds into a dashboard controller."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from models.records import Reading
from services.controller import DashboardController
from services.feed import FeedClient, SourceUnavailable

logger = logging.getLogger(__name__)


class DashboardPoller:
    """Loads history once, then polls the latest reading at a fixed interval.

    Each fetched reading is handed to the controller before the next fetch
    starts, so updates are applied one at a time.
    """

    def __init__(
        self,
        controller: DashboardController,
        client: FeedClient,
        interval: float = 10.0,
    ) -> None:
        self.controller = controller
        self.client = client
        self.interval = interval

    async def load_history(self) -> int:
        try:
            records = await self.client.fetch_history()
        except SourceUnavailable as exc:
            logger.warning("No history yet, will start from latest: %s", exc)
            self.controller.mark_live(False)
            return 0
        accepted = self.controller.load_history(records)
        self.controller.mark_live(True)
        return accepted

    async def poll_once(self) -> Optional[Reading]:
        try:
            record = await self.client.fetch_latest()
        except SourceUnavailable as exc:
            logger.warning("Latest fetch error: %s", exc)
            self.controller.mark_live(False)
            return None
        reading = self.controller.ingest_latest(record.timestamp, record.temperature)  # type: ignore[arg-type]
        self.controller.mark_live(True)
        return reading

    async def run(
        self,
        stop: Optional[asyncio.Event] = None,
        max_polls: Optional[int] = None,
    ) -> None:
        """Poll until ``stop`` is set or ``max_polls`` polls have completed."""
        stop = stop or asyncio.Event()
        await self.load_history()
        polls = 0
        while not stop.is_set():
            await self.poll_once()
            polls += 1
            if max_polls is not None and polls >= max_polls:
                break
            try:
                await asyncio.wait_for(stop.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                continue
