"""Decode the head token of an APRS line: identity, receiver, time and position."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time
import logging
import re

from ognbeacon.parsers.units import (
    dms_to_degrees,
    feet_to_metres,
    knots_to_kmh,
    parse_utc_time,
)

logger = logging.getLogger("ognbeacon.parsers.position")

# F-GEKY>APRS,qAS,CHALLES:/145914h4533.12N/00559.93E'140/045/A=003316
HEAD_RE = re.compile(
    r"(?P<id>.+?)>APRS,.+,(?P<receiver>.+?):/(?P<time>\d{6})h"
    r"(?P<lat>\d{4}\.\d{2})(?P<lat_dir>[NS])."
    r"(?P<lon>\d{5}\.\d{2})(?P<lon_dir>[EW])."
    r"(?:(?P<track>\d{3})/(?P<speed>\d{3}))?"
    r"/A=(?P<alt>\d{6}).*?"
)


@dataclass(frozen=True)
class HeadPosition:
    """Fields carried by the mandatory head token."""

    tracker_id: str
    receiver_name: str
    timestamp: time
    latitude: float
    longitude: float
    altitude_m: float
    track: int | None = None
    ground_speed_kmh: float | None = None


def decode_head(token: str) -> HeadPosition | None:
    """Decode a head token, or return None when it is not a valid position report."""

    match = HEAD_RE.fullmatch(token)
    if match is None:
        return None

    try:
        timestamp = parse_utc_time(match.group("time"))
    except ValueError:
        logger.debug("Invalid beacon time in head token: %s", token)
        return None

    latitude = dms_to_degrees(float(match.group("lat")) / 100)
    if match.group("lat_dir") == "S":
        latitude *= -1
    longitude = dms_to_degrees(float(match.group("lon")) / 100)
    if match.group("lon_dir") == "W":
        longitude *= -1
    if not (-90 <= latitude <= 90 and -180 <= longitude <= 180):
        logger.debug("Head token position out of range: %s", token)
        return None

    track = ground_speed = None
    if match.group("track") is not None:
        track = int(match.group("track"))
        if track > 360:
            logger.debug("Head token course out of range: %s", token)
            return None
        # APRS may send due north as 360
        track %= 360
        ground_speed = knots_to_kmh(float(match.group("speed")))

    return HeadPosition(
        tracker_id=match.group("id"),
        receiver_name=match.group("receiver"),
        timestamp=timestamp,
        latitude=latitude,
        longitude=longitude,
        altitude_m=feet_to_metres(float(match.group("alt"))),
        track=track,
        ground_speed_kmh=ground_speed,
    )


__all__ = ["HEAD_RE", "HeadPosition", "decode_head"]
