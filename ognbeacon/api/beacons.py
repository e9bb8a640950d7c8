"""Beacon decoding and latest-state endpoints."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from ognbeacon.models import AircraftBeacon, AircraftDescriptor, ReceiverBeacon
from ognbeacon.parsers import decode
from ognbeacon.services import DeviceRegistry, aircraft_store, get_device_registry, receiver_store

router = APIRouter(prefix="/api/v1", tags=["beacons"])

logger = logging.getLogger("ognbeacon.beacons")
aircraft_beacons = aircraft_store()
receiver_beacons = receiver_store()


class LineRequest(BaseModel):
    """A single raw feed line."""

    line: str = Field(..., description="APRS line without the trailing newline")


class TrackedAircraft(BaseModel):
    """Latest merged state of a tracker, enriched with its registry entry."""

    beacon: AircraftBeacon
    descriptor: Optional[AircraftDescriptor] = Field(
        default=None, description="FlarmNet entry for the tracker's device, if known"
    )


def _find_descriptor(
    beacon: AircraftBeacon, registry: DeviceRegistry
) -> AircraftDescriptor | None:
    for device_id in (beacon.address, beacon.original_address, beacon.tracker_id):
        if not device_id:
            continue
        descriptor = registry.lookup(device_id)
        if descriptor is not None:
            return descriptor
    return None


@router.post(
    "/beacons/decode",
    response_model=AircraftBeacon,
    summary="Decode an aircraft beacon line",
)
def decode_beacon(request: LineRequest) -> AircraftBeacon:
    """Decode one aircraft line without storing it."""

    beacon = decode(request.line.rstrip("\r\n"))
    if beacon is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Line is not a decodable aircraft beacon",
        )
    return beacon


@router.post("/beacons", response_model=AircraftBeacon, summary="Submit a decoded beacon")
def submit_beacon(beacon: AircraftBeacon) -> AircraftBeacon:
    """Merge a decoded beacon into the tracker's latest state."""

    merged = aircraft_beacons.upsert(beacon)
    logger.debug("Updated tracker %s", beacon.tracker_id)
    return merged


@router.get(
    "/beacons/{tracker_id}",
    response_model=TrackedAircraft,
    summary="Latest state of a tracker",
)
def get_beacon(
    tracker_id: str, registry: DeviceRegistry = Depends(get_device_registry)
) -> TrackedAircraft:
    beacon = aircraft_beacons.get(tracker_id)
    if beacon is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown tracker")
    return TrackedAircraft(beacon=beacon, descriptor=_find_descriptor(beacon, registry))


@router.post(
    "/receivers", response_model=ReceiverBeacon, summary="Submit a receiver beacon"
)
def submit_receiver(beacon: ReceiverBeacon) -> ReceiverBeacon:
    return receiver_beacons.upsert(beacon)


@router.get(
    "/receivers/{receiver_name}",
    response_model=ReceiverBeacon,
    summary="Latest beacon of a receiver",
)
def get_receiver(receiver_name: str) -> ReceiverBeacon:
    beacon = receiver_beacons.get(receiver_name)
    if beacon is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown receiver")
    return beacon
