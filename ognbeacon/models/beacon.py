"""Beacon records decoded from OGN APRS feed lines."""

from __future__ import annotations

from datetime import time
from enum import IntEnum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class AddressType(IntEnum):
    """How a tracker's 24-bit address was assigned (low two bits of the identity byte)."""

    UNRECOGNIZED = 0
    ICAO = 1
    FLARM = 2
    OGN = 3


class AircraftType(IntEnum):
    """Aircraft categories assigned to the 5-bit type code.

    Codes 16-31 fit in the identity byte but have no assigned category.
    """

    UNKNOWN = 0
    GLIDER = 1
    TOW_PLANE = 2
    HELICOPTER_ROTORCRAFT = 3
    PARACHUTE = 4
    DROP_PLANE = 5
    HANG_GLIDER = 6
    PARA_GLIDER = 7
    POWERED_AIRCRAFT = 8
    JET_AIRCRAFT = 9
    UFO = 10
    BALLOON = 11
    AIRSHIP = 12
    UAV = 13
    GROUND_SUPPORT = 14
    STATIC_OBJECT = 15


class AircraftBeacon(BaseModel):
    """Position, identity and reception diagnostics decoded from one aircraft line.

    Optional fields are ``None`` when the line did not carry the matching
    token. ``to_legacy_dict`` renders the feed's historical sentinel values.
    """

    model_config = ConfigDict(frozen=True)

    tracker_id: str = Field(..., description="Callsign from the head token")
    receiver_name: str = Field(..., description="Receiver that heard the beacon")
    timestamp: time = Field(..., description="UTC time of day the beacon was sent")
    latitude: float = Field(..., ge=-90, le=90, description="Decimal degrees, south negative")
    longitude: float = Field(..., ge=-180, le=180, description="Decimal degrees, west negative")
    altitude_m: float = Field(..., description="Altitude in metres")
    track: Optional[int] = Field(
        default=None, ge=0, le=359, description="Course over ground in degrees"
    )
    ground_speed_kmh: Optional[float] = Field(
        default=None, description="Ground speed in km/h"
    )

    address: Optional[str] = Field(default=None, description="6-hex tracker address")
    original_address: Optional[str] = Field(
        default=None, description="Device id before any address override"
    )
    address_type: Optional[AddressType] = Field(default=None)
    aircraft_type: Optional[int] = Field(default=None, ge=0, le=31)
    stealth: Optional[bool] = Field(default=None)

    climb_rate_ms: Optional[float] = Field(default=None, description="Climb rate in m/s")
    turn_rate_deg_s: Optional[float] = Field(default=None, description="Turn rate in deg/s")
    signal_strength_db: Optional[float] = Field(default=None)
    error_count: Optional[int] = Field(default=None)
    frequency_offset_khz: Optional[float] = Field(default=None)
    gps_status: Optional[str] = Field(
        default=None, description="Horizontal x vertical GPS accuracy in metres"
    )
    firmware_version: Optional[float] = Field(default=None)
    hardware_version: Optional[int] = Field(default=None, ge=0, le=255)
    erp_dbm: Optional[float] = Field(
        default=None, description="Effective radiated power of the transmitter"
    )
    heard_aircraft_ids: frozenset[str] = Field(default_factory=frozenset)

    raw_line: str = Field(..., description="Line exactly as received")
    unmatched_tokens: tuple[str, ...] = Field(default=())

    @model_validator(mode="after")
    def _track_and_speed_together(self) -> "AircraftBeacon":
        if (self.track is None) != (self.ground_speed_kmh is None):
            raise ValueError("track and ground_speed_kmh must be set together")
        return self

    @property
    def aircraft_category(self) -> AircraftType | None:
        if self.aircraft_type is None:
            return None
        try:
            return AircraftType(self.aircraft_type)
        except ValueError:
            return None

    def to_legacy_dict(self) -> dict[str, Any]:
        """Return the record with absent values replaced by the feed's sentinels."""

        nan = float("nan")
        data = self.model_dump()
        data.update(
            track=self.track or 0,
            ground_speed_kmh=self.ground_speed_kmh or 0.0,
            original_address=self.original_address or "",
            address_type=self.address_type or AddressType.UNRECOGNIZED,
            stealth=bool(self.stealth),
            climb_rate_ms=self.climb_rate_ms or 0.0,
            turn_rate_deg_s=self.turn_rate_deg_s or 0.0,
            signal_strength_db=self.signal_strength_db or 0.0,
            error_count=self.error_count or 0,
            frequency_offset_khz=self.frequency_offset_khz or 0.0,
            gps_status=self.gps_status or "",
            firmware_version=nan if self.firmware_version is None else self.firmware_version,
            hardware_version=self.hardware_version or 0,
            erp_dbm=nan if self.erp_dbm is None else self.erp_dbm,
            unmatched_tokens=list(self.unmatched_tokens),
        )
        return data


class ReceiverBeacon(BaseModel):
    """Head-level fields of a receiver status line."""

    model_config = ConfigDict(frozen=True)

    receiver_name: str = Field(..., description="Callsign of the receiving station")
    server_name: str = Field(..., description="APRS server that relayed the line")
    timestamp: time
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    altitude_m: float
    raw_line: str


def merge(old: AircraftBeacon, fresh: AircraftBeacon) -> AircraftBeacon:
    """Fold a newer capture of the same tracker into an existing record.

    Every field the fresh line decoded replaces the old value. Fields the
    fresh line did not carry keep their old value. A non-empty heard-id set
    replaces the old set.
    """

    if old.tracker_id != fresh.tracker_id:
        raise ValueError(
            f"cannot merge beacons of {fresh.tracker_id!r} into {old.tracker_id!r}"
        )

    updates: dict[str, Any] = {}
    for name in AircraftBeacon.model_fields:
        value = getattr(fresh, name)
        if name == "heard_aircraft_ids":
            if value:
                updates[name] = value
        elif value is not None:
            updates[name] = value
    return old.model_copy(update=updates)


__all__ = [
    "AddressType",
    "AircraftBeacon",
    "AircraftType",
    "ReceiverBeacon",
    "merge",
]
