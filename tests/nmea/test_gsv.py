"""Tests for GSV sentence parsing and formatting."""

import pytest

from nmeakit.nmea.gsv import format_gsv, parse_gsv
from nmeakit.nmea.types import Field, GSVData, Satellite

GSV_PACKS = [
    "$GPGSV,3,1,09,01,40,083,46,02,17,308,41,12,07,344,39,14,22,228,45*75",
    "$GPGSV,3,2,09,15,10,100,30,17,55,200,35,19,30,010,,22,05,300,20*7A",
    "$GPGSV,3,3,09,24,70,150,48*49",
]


class TestParseGSV:
    """Tests for parse_gsv function."""

    def test_full_pack(self):
        result = parse_gsv(GSV_PACKS[0])
        assert result is not None
        assert result.present == Field.SATELLITES_IN_VIEW
        assert (result.pack_count, result.pack_index, result.sat_count) == (3, 1, 9)
        assert [s.id for s in result.satellites] == [1, 2, 12, 14]
        assert result.satellites[0] == Satellite(id=1, elevation=40, azimuth=83, snr=46)

    def test_missing_snr_reads_as_zero(self):
        result = parse_gsv(GSV_PACKS[1])
        assert result is not None
        assert result.satellites[2] == Satellite(id=19, elevation=30, azimuth=10, snr=0)

    def test_short_last_pack_padded(self):
        result = parse_gsv(GSV_PACKS[2])
        assert result is not None
        assert len(result.satellites) == 4
        assert result.satellites[0].id == 24
        assert result.satellites[1:] == [Satellite()] * 3

    def test_trailing_empty_field(self):
        result = parse_gsv("$GPGSV,1,1,01,07,79,048,*4D")
        assert result is not None
        assert result.satellites[0].snr == 0

    def test_no_satellites(self):
        result = parse_gsv("$GPGSV,1,1,00*79")
        assert result is not None
        assert result.sat_count == 0
        assert all(s.id == 0 for s in result.satellites)

    def test_negative_elevation_allowed(self):
        result = parse_gsv("$GPGSV,1,1,01,07,-5,048,42*5D")
        assert result is not None
        assert result.satellites[0].elevation == -5

    @pytest.mark.parametrize(
        "sentence",
        [
            # pack index 0
            "$GPGSV,3,0,09*73",
            # pack index above pack count
            "$GPGSV,2,3,08*70",
            # 4 packs
            "$GPGSV,4,1,13*7E",
            # 13 satellites
            "$GPGSV,1,1,13*7B",
            # azimuth 360
            "$GPGSV,1,1,01,07,79,360,42*42",
            # elevation 200
            "$GPGSV,1,1,01,07,200,048,42*77",
            # SNR 100
            "$GPGSV,1,1,01,07,79,048,100*7C",
            # second satellite cut short
            "$GPGSV,1,1,02,07,79,048,42,08,10*41",
            # empty pack index
            "$GPGSV,1,,00*48",
        ],
    )
    def test_rejected(self, sentence):
        assert parse_gsv(sentence) is None

    def test_rejection_logs_warning(self, caplog):
        parse_gsv("$GPGSV,2,3,08*70")
        assert "invalid pack index (3 of 2)" in caplog.text


class TestFormatGSV:
    """Tests for format_gsv function."""

    def test_empty_round(self):
        data = GSVData(pack_count=1, pack_index=1, sat_count=0, satellites=[Satellite()] * 4)
        assert format_gsv(data) == "$GPGSV,1,1,00,,,,,,,,,,,,,,,,*79\r\n"

    def test_renders_parsed_sentence(self):
        data = parse_gsv("$GPGSV,1,1,01,07,79,048,42*4B")
        assert data is not None
        assert format_gsv(data) == "$GPGSV,1,1,01,07,79,048,42,,,,,,,,,,,,*4B\r\n"

    def test_short_satellite_list_padded(self):
        data = GSVData(
            present=Field.SATELLITES_IN_VIEW,
            pack_count=1,
            pack_index=1,
            sat_count=1,
            satellites=[Satellite(id=7, elevation=79, azimuth=48, snr=42)],
        )
        assert format_gsv(data) == "$GPGSV,1,1,01,07,79,048,42,,,,,,,,,,,,*4B\r\n"

    def test_satellites_absent_render_empty(self):
        data = GSVData(
            pack_count=1,
            pack_index=1,
            sat_count=1,
            satellites=[Satellite(id=7, elevation=79, azimuth=48, snr=42)],
        )
        assert format_gsv(data) == "$GPGSV,1,1,01,,,,,,,,,,,,,,,,*78\r\n"

    def test_formatted_packs_parse_back(self):
        for sentence in GSV_PACKS:
            data = parse_gsv(sentence)
            assert data is not None
            assert parse_gsv(format_gsv(data, talker="GL")) == data
