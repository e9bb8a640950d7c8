import pytest

from ognbeacon.models import AddressType, AircraftType
from ognbeacon.parsers.identity import decode_identity_byte, parse_identity_byte


def test_identity_byte_bit_layout():
    identity = decode_identity_byte(0b10010101)

    assert identity.stealth is True
    assert identity.aircraft_type == 5
    assert identity.address_type is AddressType.ICAO


@pytest.mark.parametrize(
    "hex_digits, address_type, aircraft_type, stealth",
    [
        ("05", AddressType.ICAO, AircraftType.GLIDER, False),
        ("06", AddressType.FLARM, AircraftType.GLIDER, False),
        ("07", AddressType.OGN, AircraftType.GLIDER, False),
        ("20", AddressType.UNRECOGNIZED, AircraftType.POWERED_AIRCRAFT, False),
        ("FF", AddressType.OGN, 31, True),
        ("00", AddressType.UNRECOGNIZED, AircraftType.UNKNOWN, False),
    ],
)
def test_parse_identity_byte(hex_digits, address_type, aircraft_type, stealth):
    identity = parse_identity_byte(hex_digits)

    assert identity.address_type == address_type
    assert identity.aircraft_type == aircraft_type
    assert identity.stealth is stealth


def test_identity_byte_rejects_values_outside_a_byte():
    with pytest.raises(ValueError):
        decode_identity_byte(256)
    with pytest.raises(ValueError):
        decode_identity_byte(-1)
