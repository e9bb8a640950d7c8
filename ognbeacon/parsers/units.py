"""Unit conversions used by the APRS beacon decoders."""

from __future__ import annotations

from datetime import time, timezone
import math

FEET_TO_METRES = 0.3048
KNOTS_TO_KMH = 1.852


def feet_to_metres(value_ft: float) -> float:
    return value_ft * FEET_TO_METRES


def metres_to_feet(value_m: float) -> float:
    return value_m / FEET_TO_METRES


def knots_to_kmh(value_kt: float) -> float:
    return value_kt * KNOTS_TO_KMH


def kmh_to_knots(value_kmh: float) -> float:
    return value_kmh / KNOTS_TO_KMH


def dms_to_degrees(value: float) -> float:
    """Convert a DD.MMmm value (degrees, then minutes after the point) to decimal degrees.

    ``45.3312`` is 45 degrees 33.12 minutes, i.e. ``45.552``.
    """

    degrees = math.floor(value)
    return degrees + (value - degrees) * 100 / 60


def round_half_up(value: float, digits: int = 2) -> float:
    """Round half away from negative infinity, the way the feed's reference decoders do."""

    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def parse_utc_time(hhmmss: str) -> time:
    """Parse an HHMMSS string into a UTC time of day.

    Raises ValueError for impossible clock values such as ``256199``.
    """

    return time(
        int(hhmmss[0:2]), int(hhmmss[2:4]), int(hhmmss[4:6]), tzinfo=timezone.utc
    )


__all__ = [
    "dms_to_degrees",
    "feet_to_metres",
    "kmh_to_knots",
    "knots_to_kmh",
    "metres_to_feet",
    "parse_utc_time",
    "round_half_up",
]
