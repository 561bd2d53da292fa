from __future__ import annotations

import asyncio
import contextlib
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.api import router
from app.web import router as web_router
from logging_config import configure_logging
from services.controller import build_default_controller
from services.feed import FeedClient
from services.poller import DashboardPoller
from settings import get_settings


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    controller = build_default_controller()
    if not settings.poller_enabled:
        try:
            yield
        finally:
            build_default_controller.cache_clear()
        return

    client = FeedClient(
        latest_url=settings.latest_url,
        history_url=settings.history_url,
        timeout=settings.request_timeout,
    )
    poller = DashboardPoller(controller, client, interval=settings.poll_interval)
    stop = asyncio.Event()
    task = asyncio.create_task(poller.run(stop))
    try:
        yield
    finally:
        stop.set()
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        await client.aclose()
        build_default_controller.cache_clear()


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="Temperature Dashboard",
        description="Live temperature readings with recent and full-history chart views.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(router)
    app.include_router(web_router)
    return app

app = create_app()
