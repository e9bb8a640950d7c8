from datetime import time, timezone

import pytest

from ognbeacon.parsers.units import (
    dms_to_degrees,
    feet_to_metres,
    kmh_to_knots,
    knots_to_kmh,
    metres_to_feet,
    parse_utc_time,
    round_half_up,
)


def test_dms_to_degrees_converts_minutes_to_decimal():
    assert dms_to_degrees(45.3312) == pytest.approx(45.552)
    assert dms_to_degrees(5.5993) == pytest.approx(5.998833, rel=1e-6)
    assert dms_to_degrees(0.30) == pytest.approx(0.5)


def test_speed_and_altitude_conversions():
    assert knots_to_kmh(45) == pytest.approx(83.34)
    assert kmh_to_knots(83.34) == pytest.approx(45)
    assert feet_to_metres(3316) == pytest.approx(1010.7168)
    assert metres_to_feet(0.3048) == pytest.approx(1.0)


def test_round_half_up_rounds_ties_upwards():
    assert round_half_up(2.5146) == 2.51
    assert round_half_up(0.125) == 0.13
    assert round_half_up(-2.0066) == -2.01
    assert round_half_up(-0.125) == -0.12


def test_parse_utc_time():
    assert parse_utc_time("145914") == time(14, 59, 14, tzinfo=timezone.utc)
    with pytest.raises(ValueError):
        parse_utc_time("256199")
