"""Decoders for the optional tokens that follow the head of an aircraft line.

Each decoder owns one fully-anchored pattern and turns a match into a dict of
``AircraftBeacon`` field updates. Tokens are tried against ``FIELD_DECODERS``
in order and the first match wins. New extensions of the feed format are
added by appending a decoder; tokens nobody recognises are left to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
import re
from typing import Any, Callable

from ognbeacon.parsers.identity import parse_identity_byte
from ognbeacon.parsers.units import feet_to_metres, round_half_up

HEARD_IDS = "heard_aircraft_ids"
COORDINATE_CORRECTION = "coordinate_correction"


@dataclass(frozen=True)
class FieldDecoder:
    """A named token pattern paired with the function that decodes it."""

    name: str
    pattern: re.Pattern[str]
    decode: Callable[[re.Match[str]], dict[str, Any]]

    def __call__(self, token: str) -> dict[str, Any] | None:
        match = self.pattern.fullmatch(token)
        if match is None:
            return None
        return self.decode(match)


def _signed(sign: str, magnitude: float) -> float:
    return -magnitude if sign == "-" else magnitude


def _address(match: re.Match[str]) -> dict[str, Any]:
    identity = parse_identity_byte(match.group("flags"))
    return {
        "address": match.group("address"),
        "address_type": identity.address_type,
        "aircraft_type": identity.aircraft_type,
        "stealth": identity.stealth,
    }


def _climb_rate(match: re.Match[str]) -> dict[str, Any]:
    # ft/min to m/s
    climb = _signed(match.group("sign"), feet_to_metres(float(match.group("value"))) / 60)
    return {"climb_rate_ms": round_half_up(climb, 2)}


def _turn_rate(match: re.Match[str]) -> dict[str, Any]:
    return {"turn_rate_deg_s": _signed(match.group("sign"), float(match.group("value")))}


def _signal_strength(match: re.Match[str]) -> dict[str, Any]:
    return {"signal_strength_db": float(match.group("value"))}


def _error_count(match: re.Match[str]) -> dict[str, Any]:
    return {"error_count": int(match.group("value"))}


def _heard_id(match: re.Match[str]) -> dict[str, Any]:
    return {HEARD_IDS: {match.group("id")}}


def _frequency_offset(match: re.Match[str]) -> dict[str, Any]:
    return {
        "frequency_offset_khz": _signed(match.group("sign"), float(match.group("value")))
    }


def _gps_status(match: re.Match[str]) -> dict[str, Any]:
    return {"gps_status": match.group("value")}


def _firmware_version(match: re.Match[str]) -> dict[str, Any]:
    return {"firmware_version": float(match.group("value"))}


def _hardware_version(match: re.Match[str]) -> dict[str, Any]:
    return {"hardware_version": int(match.group("value"), 16)}


def _original_address(match: re.Match[str]) -> dict[str, Any]:
    return {"original_address": match.group("value")}


def _coordinate_correction(match: re.Match[str]) -> dict[str, Any]:
    return {COORDINATE_CORRECTION: (int(match.group("lat")), int(match.group("lon")))}


def _transmitter_power(match: re.Match[str]) -> dict[str, Any]:
    return {"erp_dbm": _signed(match.group("sign"), float(match.group("value")))}


FIELD_DECODERS: tuple[FieldDecoder, ...] = (
    FieldDecoder(
        "address",
        re.compile(r"id(?P<flags>[0-9A-Fa-f]{2})(?P<address>[0-9A-Fa-f]{6})"),
        _address,
    ),
    FieldDecoder(
        "climb_rate", re.compile(r"(?P<sign>[+-])(?P<value>\d+)fpm"), _climb_rate
    ),
    FieldDecoder(
        "turn_rate", re.compile(r"(?P<sign>[+-])(?P<value>\d+\.\d+)rot"), _turn_rate
    ),
    FieldDecoder(
        "signal_strength", re.compile(r"(?P<value>\d+\.\d+)dB"), _signal_strength
    ),
    FieldDecoder("error_count", re.compile(r"(?P<value>\d+)e"), _error_count),
    FieldDecoder("heard_id", re.compile(r"hear(?P<id>[0-9A-Fa-f]{4})"), _heard_id),
    FieldDecoder(
        "frequency_offset",
        re.compile(r"(?P<sign>[+-])(?P<value>\d+\.\d+)kHz"),
        _frequency_offset,
    ),
    FieldDecoder("gps_status", re.compile(r"gps(?P<value>\d+x\d+)"), _gps_status),
    FieldDecoder(
        "firmware_version", re.compile(r"s(?P<value>\d+\.\d+)"), _firmware_version
    ),
    FieldDecoder(
        "hardware_version", re.compile(r"h(?P<value>[0-9A-Fa-f]{2})"), _hardware_version
    ),
    FieldDecoder(
        "original_address", re.compile(r"r(?P<value>\S{6})"), _original_address
    ),
    FieldDecoder(
        "coordinate_correction",
        re.compile(r"!W(?P<lat>\d)(?P<lon>\d)!"),
        _coordinate_correction,
    ),
    FieldDecoder(
        "transmitter_power",
        re.compile(r"(?P<sign>[+-])(?P<value>\d+\.\d+)dBm"),
        _transmitter_power,
    ),
)


def decode_field(
    token: str, decoders: tuple[FieldDecoder, ...] = FIELD_DECODERS
) -> tuple[str, dict[str, Any]] | None:
    """Return ``(decoder name, field updates)`` for the first decoder matching ``token``."""

    for decoder in decoders:
        updates = decoder(token)
        if updates is not None:
            return decoder.name, updates
    return None


def apply_coordinate_correction(
    latitude: float, longitude: float, lat_digit: int, lon_digit: int
) -> tuple[float, float]:
    """Add the ``!Wab!`` thousandths of a minute, away from zero on each axis."""

    dlat = lat_digit / 1000 / 60
    dlon = lon_digit / 1000 / 60
    corrected_lat = latitude + math.copysign(dlat, latitude)
    corrected_lon = longitude + math.copysign(dlon, longitude)
    return (
        max(-90.0, min(90.0, corrected_lat)),
        max(-180.0, min(180.0, corrected_lon)),
    )


__all__ = [
    "COORDINATE_CORRECTION",
    "FIELD_DECODERS",
    "FieldDecoder",
    "HEARD_IDS",
    "apply_coordinate_correction",
    "decode_field",
]
