"""APRS-IS ingestor streaming OGN aircraft and receiver beacons."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
from typing import AsyncIterator, Callable

import httpx

from ognbeacon import __version__
from ognbeacon.models.beacon import AircraftBeacon, ReceiverBeacon
from ognbeacon.parsers.classifier import classify

logger = logging.getLogger("ognbeacon.ingestors.feed")

# "# logresp CALL unverified, server GLIDERN2"
LOGIN_RESPONSE_PREFIX = "# logresp "


@dataclass
class FeedConfig:
    """Runtime configuration for the APRS-IS feed ingestor."""

    host: str
    port: int
    callsign: str
    passcode: str = "-1"
    aprs_filter: str | None = None
    filter_center_lat: float | None = None
    filter_center_lon: float | None = None
    filter_radius_km: float | None = None
    process_aircraft: bool = True
    process_receiver: bool = True


class FeedIngestor:
    """Maintain a long-running APRS-IS TCP connection and forward decoded beacons."""

    def __init__(
        self,
        *,
        config: FeedConfig,
        http_client: httpx.AsyncClient,
        beacons_path: str = "/api/v1/beacons",
        receivers_path: str = "/api/v1/receivers",
        line_source: Callable[[], AsyncIterator[str]] | None = None,
        stop_on_source: bool = False,
    ) -> None:
        self.config = config
        self.http_client = http_client
        self.beacons_path = beacons_path
        self.receivers_path = receivers_path
        self.line_source = line_source
        self.stop_on_source = stop_on_source

    async def run(self) -> None:
        """Stream beacons until cancelled, reconnecting with exponential backoff."""

        delay = 1
        while True:
            try:
                if self.line_source is not None:
                    await self._consume_lines(self.line_source())
                    if self.stop_on_source:
                        return
                else:
                    await self._stream_from_server()
                    delay = 1
            except asyncio.CancelledError:
                logger.info("Feed ingestor cancelled")
                raise
            except Exception as exc:
                logger.warning(
                    "Feed from %s:%s interrupted: %s", self.config.host, self.config.port, exc
                )

            logger.info("Reconnecting to APRS-IS in %ss", delay)
            await asyncio.sleep(delay)
            delay = min(delay * 2, 60)

    async def _consume_lines(self, lines: AsyncIterator[str]) -> None:
        async for line in lines:
            await self._handle_line(line)

    async def _stream_from_server(self) -> None:
        reader, writer = await asyncio.open_connection(self.config.host, self.config.port)
        logger.info(
            "Connected to APRS-IS at %s:%s as %s",
            self.config.host,
            self.config.port,
            self.config.callsign,
        )
        try:
            writer.write(self.login_line().encode("ascii"))
            await writer.drain()
            while True:
                raw = await reader.readline()
                if not raw:
                    break
                await self._handle_line(raw.decode("latin-1"))
        finally:
            writer.close()
            await writer.wait_closed()
            logger.info("APRS-IS connection to %s closed", self.config.host)

    def login_line(self) -> str:
        login = (
            f"user {self.config.callsign} pass {self.config.passcode} "
            f"vers ognbeacon {__version__}"
        )
        filter_clause = self._build_filter()
        if filter_clause:
            login += f" filter {filter_clause}"
        return login + "\n"

    def _build_filter(self) -> str | None:
        if self.config.aprs_filter:
            return self.config.aprs_filter
        if (
            self.config.filter_center_lat is not None
            and self.config.filter_center_lon is not None
            and self.config.filter_radius_km is not None
        ):
            return "r/{lat}/{lon}/{radius}".format(
                lat=self.config.filter_center_lat,
                lon=self.config.filter_center_lon,
                radius=self.config.filter_radius_km,
            )
        return None

    async def _handle_line(self, line: str) -> None:
        line = line.rstrip("\r\n")
        if line.startswith(LOGIN_RESPONSE_PREFIX):
            logger.info("APRS-IS login response: %s", line[len(LOGIN_RESPONSE_PREFIX):])
            return

        beacon = classify(
            line,
            process_aircraft=self.config.process_aircraft,
            process_receiver=self.config.process_receiver,
        )
        if isinstance(beacon, AircraftBeacon):
            path = self.beacons_path
        elif isinstance(beacon, ReceiverBeacon):
            path = self.receivers_path
        else:
            return

        try:
            response = await self.http_client.post(path, json=beacon.model_dump(mode="json"))
            if response.status_code >= 400:
                logger.warning(
                    "Failed to post beacon: status=%s body=%s",
                    response.status_code,
                    response.text,
                )
        except httpx.RequestError as exc:
            logger.warning("Beacon post failed: %s", exc)


def build_feed_config(
    *,
    host: str,
    port: int,
    callsign: str,
    passcode: str = "-1",
    aprs_filter: str | None = None,
    filter_center_lat: float | None = None,
    filter_center_lon: float | None = None,
    filter_radius_km: float | None = None,
    process_aircraft: bool = True,
    process_receiver: bool = True,
) -> FeedConfig:
    return FeedConfig(
        host=host,
        port=port,
        callsign=callsign,
        passcode=passcode,
        aprs_filter=aprs_filter,
        filter_center_lat=filter_center_lat,
        filter_center_lon=filter_center_lon,
        filter_radius_km=filter_radius_km,
        process_aircraft=process_aircraft,
        process_receiver=process_receiver,
    )


__all__ = [
    "FeedConfig",
    "FeedIngestor",
    "build_feed_config",
]
