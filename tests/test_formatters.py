"""Tests for JSON formatting of navigation data."""

import json

import pytest

from nmeakit.formatters import format_gnss_message, format_info
from nmeakit.gnss.types import GNSSData
from nmeakit.info.types import NavigationInfo
from nmeakit.nmea.types import Field, Fix, Satellite, SentenceKind, Signal, UTCDate, UTCTime


@pytest.fixture
def info():
    info = NavigationInfo(
        present=Field.UTC_DATE
        | Field.UTC_TIME
        | Field.SIGNAL
        | Field.FIX
        | Field.LATITUDE
        | Field.LONGITUDE
        | Field.SPEED
        | Field.SATELLITES_IN_VIEW
        | Field.SATELLITES_IN_USE,
        date=UTCDate(1994, 3, 23),
        time=UTCTime(12, 35, 19, 5),
        signal=Signal.RTK,
        fix=Fix.FIX_3D,
        latitude=48.1173,
        longitude=11.5167,
        speed=36.0,
        hdop=9.9,
    )
    info.satellites.in_view[0] = Satellite(id=7, elevation=79, azimuth=48, snr=42, in_use=True)
    info.satellites.in_use[0] = 7
    return info


class TestFormatInfo:
    """Tests for format_info function."""

    def test_present_fields(self, info):
        message = json.loads(format_info(info))
        assert message["date"] == "1994-03-23"
        assert message["utc_time"] == "12:35:19.05"
        assert message["signal"] == "RTK"
        assert message["fix"] == "FIX_3D"
        assert message["lat"] == pytest.approx(48.1173)
        assert message["lon"] == pytest.approx(11.5167)
        assert message["speed_kmh"] == pytest.approx(36.0)
        assert message["speed_ms"] == pytest.approx(10.0)

    def test_absent_fields_are_null(self, info):
        message = json.loads(format_info(info))
        assert message["hdop"] is None
        assert message["alt"] is None
        assert message["track_degrees"] is None

    def test_satellites(self, info):
        message = json.loads(format_info(info))
        assert message["satellites_in_use"] == [7]
        assert message["satellites_in_view"] == [
            {"id": 7, "elevation": 79, "azimuth": 48, "snr": 42, "in_use": True}
        ]

    def test_no_speed(self):
        message = json.loads(format_info(NavigationInfo()))
        assert message["speed_kmh"] is None
        assert message["speed_ms"] is None


class TestFormatGNSSMessage:
    """Tests for format_gnss_message function."""

    def test_tagged_with_type_and_kind(self, info):
        message = json.loads(format_gnss_message(GNSSData(kind=SentenceKind.RMC, info=info)))
        assert message["type"] == "gnss"
        assert message["kind"] == "RMC"
        assert message["lat"] == pytest.approx(48.1173)
