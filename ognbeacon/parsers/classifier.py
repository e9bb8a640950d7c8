"""Route APRS feed lines to the aircraft or receiver beacon decoders."""

from __future__ import annotations

import logging
import re

from ognbeacon.models.beacon import AircraftBeacon, ReceiverBeacon
from ognbeacon.parsers.aircraft import decode
from ognbeacon.parsers.position import decode_head

logger = logging.getLogger("ognbeacon.parsers.classifier")

POSITION_LINE_RE = re.compile(
    r"(?P<id>.+)>.+:/\d+h\d{4}\.\d{2}[NS].\d{5}\.\d{2}[EW].(?:\d{3}/\d{3})?/A=\d{6}.*"
)

# APRS servers send banners, login responses and heartbeats prefixed with '#':
#   # aprsc 2.0.14-g28c5a6a
#   # logresp PCBE13-1 unverified, server GLIDERN2
SERVER_MESSAGE_PREFIX = "#"
RECEIVER_TOKENS = ("RF:", "CPU:")


def decode_receiver(line: str) -> ReceiverBeacon | None:
    """Decode the head of a receiver status line; receiver statistics are not decoded."""

    tokens = line.split()
    if not tokens:
        return None
    head = decode_head(tokens[0])
    if head is None:
        return None
    return ReceiverBeacon(
        receiver_name=head.tracker_id,
        server_name=head.receiver_name,
        timestamp=head.timestamp,
        latitude=head.latitude,
        longitude=head.longitude,
        altitude_m=head.altitude_m,
        raw_line=line,
    )


def classify(
    line: str, process_aircraft: bool = True, process_receiver: bool = True
) -> AircraftBeacon | ReceiverBeacon | None:
    """Decode ``line`` as whichever beacon kind it carries.

    Server messages, lines that are not position reports, and beacons of a
    disabled kind all yield None.
    """

    if line.startswith(SERVER_MESSAGE_PREFIX):
        return None
    if POSITION_LINE_RE.fullmatch(line) is None:
        return None

    if any(token in line for token in RECEIVER_TOKENS):
        if not process_receiver:
            return None
        logger.debug("Receiver beacon: %s", line)
        return decode_receiver(line)

    if not process_aircraft:
        return None
    logger.debug("Aircraft beacon: %s", line)
    return decode(line)


__all__ = ["POSITION_LINE_RE", "classify", "decode_receiver"]
