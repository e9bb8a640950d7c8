"""Decode the packed identity byte of an ``id`` token.

Layout of the byte, most significant bit first: ``PTTTTTII``

* ``P`` stealth mode
* ``TTTTT`` aircraft type
* ``II`` address type (0 random, 1 ICAO, 2 FLARM, 3 OGN)
"""

from __future__ import annotations

from dataclasses import dataclass

from ognbeacon.models.beacon import AddressType

ADDRESS_TYPE_MASK = 0b00000011
AIRCRAFT_TYPE_MASK = 0b01111100
STEALTH_MASK = 0b10000000


@dataclass(frozen=True)
class IdentityByte:
    address_type: AddressType
    aircraft_type: int
    stealth: bool


def decode_identity_byte(value: int) -> IdentityByte:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"identity byte out of range: {value}")
    return IdentityByte(
        address_type=AddressType(value & ADDRESS_TYPE_MASK),
        aircraft_type=(value & AIRCRAFT_TYPE_MASK) >> 2,
        stealth=(value & STEALTH_MASK) != 0,
    )


def parse_identity_byte(hex_digits: str) -> IdentityByte:
    return decode_identity_byte(int(hex_digits, 16))


__all__ = ["IdentityByte", "decode_identity_byte", "parse_identity_byte"]
