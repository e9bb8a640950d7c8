from __future__ import annotations

import asyncio
import contextlib
import logging
import time

import httpx
from fastapi import FastAPI, Request

from ognbeacon.api import api_router
from ognbeacon.config import settings
from ognbeacon.ingestors import FeedIngestor, build_feed_config
from ognbeacon.services import get_device_registry

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger("ognbeacon")


def _start_feed(app: FastAPI) -> None:
    if not settings.feed_callsign:
        logger.warning("FEED_ENABLED is set without FEED_CALLSIGN; not connecting to APRS-IS")
        return

    app.state.feed_client = httpx.AsyncClient(base_url=settings.api_base_url, timeout=15)
    ingestor = FeedIngestor(
        config=build_feed_config(
            host=settings.feed_host,
            port=settings.feed_port,
            callsign=settings.feed_callsign,
            passcode=settings.feed_passcode,
            aprs_filter=settings.feed_filter,
            filter_center_lat=settings.feed_filter_center_lat,
            filter_center_lon=settings.feed_filter_center_lon,
            filter_radius_km=settings.feed_filter_radius_km,
            process_aircraft=settings.process_aircraft_beacons,
            process_receiver=settings.process_receiver_beacons,
        ),
        http_client=app.state.feed_client,
    )
    app.state.feed_task = asyncio.create_task(ingestor.run())
    logger.info("Feed ingestor started for %s:%s", settings.feed_host, settings.feed_port)


async def _stop_feed(app: FastAPI) -> None:
    task: asyncio.Task | None = getattr(app.state, "feed_task", None)
    if task is not None:
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    client: httpx.AsyncClient | None = getattr(app.state, "feed_client", None)
    if client is not None:
        await client.aclose()


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the device registry and start the APRS-IS feed when configured."""

    if settings.registry_reload_on_startup:
        loaded = await asyncio.to_thread(get_device_registry().reload)
        logger.info("Device registry loaded %s entries on startup", loaded)

    if settings.feed_enabled:
        _start_feed(app)

    try:
        yield
    finally:
        await _stop_feed(app)


app = FastAPI(title="OGN Beacon Service", lifespan=lifespan)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    logger.info(
        "%s %s -> %s in %.1f ms",
        request.method,
        request.url.path,
        response.status_code,
        (time.perf_counter() - started) * 1000,
    )
    return response


app.include_router(api_router)


@app.get("/", summary="Root")
def read_root() -> dict[str, str]:
    """Basic root endpoint for quick verification."""

    return {"message": "OGN beacon service is running"}
