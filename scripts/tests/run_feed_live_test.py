#!/usr/bin/env python
"""
Run this to exercise the live APRS-IS feed ingestor against a real OGN server.

This script will:
  * Connect to the APRS-IS server configured in your environment
  * Stream OGN beacons for a fixed amount of time
  * Post each decoded beacon to the /api/v1/beacons or /api/v1/receivers endpoint
  * Log a summary line for each post so you can see activity in the terminal

Usage (from repo root):

    # Ensure your local API server is running, e.g.
    #   uvicorn ognbeacon.main:app
    #
    # Ensure these env vars are set (or in your .env.dev):
    #   FEED_CALLSIGN=YOURCALL
    #   FEED_HOST=aprs.glidernet.org    # default
    #   FEED_FILTER=r/45.5/6.0/50        # optional, or use center/radius vars
    #
    # Then run:
    #
    #   python scripts/tests/run_feed_live_test.py
"""

from __future__ import annotations

import asyncio
import contextlib
from datetime import datetime, timezone
import logging
import os
from typing import Any

import httpx


def load_env_file(path: str) -> None:
    """Load KEY=VALUE pairs from a .env-style file without third-party packages."""
    if not os.path.exists(path):
        return
    with open(path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue
            key, value = line.split("=", 1)
            os.environ.setdefault(key.strip(), value.strip())


load_env_file(".env.dev")

from ognbeacon.config import settings  # noqa: E402
from ognbeacon.ingestors import FeedIngestor, build_feed_config  # noqa: E402


logger = logging.getLogger("ognbeacon.scripts.feed_live_test")


class LoggingAsyncClient(httpx.AsyncClient):
    """httpx.AsyncClient that logs each beacon POST."""

    async def post(self, url: str, *args: Any, **kwargs: Any) -> httpx.Response:  # type: ignore[override]
        started = datetime.now(timezone.utc)
        body = kwargs.get("json") or {}
        source = body.get("tracker_id") or body.get("receiver_name")
        logger.info("POST %s source=%r", url, source)
        resp = await super().post(url, *args, **kwargs)
        duration_ms = (datetime.now(timezone.utc) - started).total_seconds() * 1000.0
        logger.info(" -> %s in %.1f ms", resp.status_code, duration_ms)
        return resp


async def main() -> None:
    # How long to run the live feed test.
    duration_seconds = 60

    if not settings.feed_callsign:
        print("FEED_CALLSIGN is not set; aborting live test.")
        return

    feed_config = build_feed_config(
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
    )

    print(
        f"\nStarting feed live test for {duration_seconds} seconds "
        f"against {feed_config.host}:{feed_config.port} "
        f"with callsign {feed_config.callsign!r}"
    )
    print(f"Posting beacons to {settings.api_base_url}/api/v1\n")

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    async with LoggingAsyncClient(base_url=settings.api_base_url, timeout=15) as client:
        ingestor = FeedIngestor(config=feed_config, http_client=client)
        task = asyncio.create_task(ingestor.run())

        try:
            await asyncio.sleep(duration_seconds)
        finally:
            print("\nStopping feed live test, cancelling ingestor task...")
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

    print("Feed live test complete. Query /api/v1/beacons/<tracker> to inspect state.\n")


if __name__ == "__main__":
    asyncio.run(main())
