"""Tests for unit conversions."""

import math

import pytest

from nmeakit.info.types import NavigationInfo
from nmeakit.info.units import (
    convert_dop_to_meters,
    degrees_to_nmea,
    degrees_to_radians,
    dop_to_meters,
    gsv_pack_count,
    knots_to_kph,
    kph_to_knots,
    kph_to_mps,
    meters_to_dop,
    mps_to_kph,
    nmea_to_degrees,
    radians_to_degrees,
)
from nmeakit.nmea.types import Field


class TestSpeed:
    """Tests for speed conversions."""

    def test_knots_to_kph(self):
        assert knots_to_kph(22.4) == pytest.approx(41.4848)

    def test_kph_to_knots(self):
        assert kph_to_knots(1.852) == pytest.approx(1.0)

    def test_kph_to_mps(self):
        assert kph_to_mps(36.0) == pytest.approx(10.0)

    def test_mps_to_kph(self):
        assert mps_to_kph(2.14) == pytest.approx(7.704)


class TestAngles:
    """Tests for angle conversions."""

    def test_nmea_to_degrees(self):
        assert nmea_to_degrees(4807.038) == pytest.approx(48.1173)
        assert nmea_to_degrees(1131.0) == pytest.approx(11.516667, rel=1e-6)

    def test_nmea_to_degrees_keeps_sign(self):
        assert nmea_to_degrees(-4807.038) == pytest.approx(-48.1173)

    def test_degrees_to_nmea(self):
        assert degrees_to_nmea(48.1173) == pytest.approx(4807.038)
        assert degrees_to_nmea(-36.5) == pytest.approx(-3630.0)

    def test_nmea_round_trip(self):
        for value in (0.0, 12.3456, 89.99999, 179.5):
            assert nmea_to_degrees(degrees_to_nmea(value)) == pytest.approx(value)

    def test_radians(self):
        assert degrees_to_radians(180.0) == pytest.approx(math.pi)
        assert radians_to_degrees(math.pi / 2) == pytest.approx(90.0)


class TestDilution:
    """Tests for DOP conversions."""

    def test_dop_meters(self):
        assert dop_to_meters(1.2) == pytest.approx(6.0)
        assert meters_to_dop(6.0) == pytest.approx(1.2)

    def test_convert_present_dops_only(self):
        info = NavigationInfo(present=Field.HDOP, hdop=2.0, pdop=3.0)
        convert_dop_to_meters(info)
        assert info.hdop == pytest.approx(10.0)
        assert info.pdop == pytest.approx(3.0)


class TestGSVPackCount:
    """Tests for gsv_pack_count function."""

    @pytest.mark.parametrize(
        ("satellites", "packs"), [(0, 1), (1, 1), (4, 1), (5, 2), (8, 2), (9, 3), (12, 3)]
    )
    def test_pack_count(self, satellites, packs):
        assert gsv_pack_count(satellites) == packs
