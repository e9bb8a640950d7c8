"""Decode a full aircraft beacon line into an ``AircraftBeacon``."""

from __future__ import annotations

import dataclasses
import logging
from typing import Any

from ognbeacon.models.beacon import AircraftBeacon
from ognbeacon.parsers.fields import (
    COORDINATE_CORRECTION,
    FIELD_DECODERS,
    HEARD_IDS,
    FieldDecoder,
    apply_coordinate_correction,
    decode_field,
)
from ognbeacon.parsers.position import decode_head

logger = logging.getLogger("ognbeacon.parsers.aircraft")


def decode(
    line: str, decoders: tuple[FieldDecoder, ...] = FIELD_DECODERS
) -> AircraftBeacon | None:
    """Decode one newline-stripped aircraft line.

    Returns None when the head token is not a valid position report. Tokens
    after the head that no decoder recognises are kept in ``unmatched_tokens``
    and never prevent the rest of the line from being decoded.
    """

    tokens = line.split()
    if not tokens:
        return None

    head = decode_head(tokens[0])
    if head is None:
        logger.debug("Not an aircraft position report: %s", line)
        return None

    fields: dict[str, Any] = dataclasses.asdict(head)
    heard_ids: set[str] = set()
    correction: tuple[int, int] | None = None
    unmatched: list[str] = []

    for token in tokens[1:]:
        decoded = decode_field(token, decoders)
        if decoded is None:
            unmatched.append(token)
            continue
        _, updates = decoded
        heard_ids.update(updates.pop(HEARD_IDS, ()))
        correction = updates.pop(COORDINATE_CORRECTION, correction)
        fields.update(updates)

    if correction is not None:
        fields["latitude"], fields["longitude"] = apply_coordinate_correction(
            fields["latitude"], fields["longitude"], *correction
        )

    if unmatched:
        logger.debug("Unmatched tokens in %r: %s", line, unmatched)

    return AircraftBeacon(
        **fields,
        heard_aircraft_ids=frozenset(heard_ids),
        raw_line=line,
        unmatched_tokens=tuple(unmatched),
    )


__all__ = ["decode"]
