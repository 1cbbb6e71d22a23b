"""Tests for merging decoded sentences into a NavigationInfo."""

import copy
import logging

import pytest

from nmeakit.info.merge import merge, merge_gga, merge_gsa, merge_gsv, merge_rmc, merge_vtg
from nmeakit.info.types import INITIAL_PRESENT, NavigationInfo
from nmeakit.nmea.gga import parse_gga
from nmeakit.nmea.gsa import parse_gsa
from nmeakit.nmea.gsv import parse_gsv
from nmeakit.nmea.rmc import parse_rmc
from nmeakit.nmea.types import (
    Field,
    Fix,
    GGAData,
    GSAData,
    GSVData,
    RMCData,
    Satellite,
    SentenceKind,
    Signal,
    UTCDate,
    UTCTime,
    VTGData,
)
from nmeakit.nmea.vtg import parse_vtg
from nmeakit.nmea_parser import parse_sentence

GGA_FIX = "$GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*47"
GSA_3D = "$GPGSA,A,3,04,05,,09,12,,,24,,,,,2.5,1.3,2.1*39"
RMC_LEGACY = "$GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W*6A"
RMC_VOID = "$GPRMC,123519,V,,,,,,,230394,,*33"
VTG_VALID = "$GNVTG,054.7,T,034.4,M,005.5,N,010.2,K,A*3B"
GSV_PACKS = [
    "$GPGSV,3,1,09,01,40,083,46,02,17,308,41,12,07,344,39,14,22,228,45*75",
    "$GPGSV,3,2,09,15,10,100,30,17,55,200,35,19,30,010,,22,05,300,20*7A",
    "$GPGSV,3,3,09,24,70,150,48*49",
]


def _parsed(parser, sentence):
    data = parser(sentence)
    assert data is not None
    return data


@pytest.fixture
def info():
    """A fresh record with a fixed clock."""
    return NavigationInfo(date=UTCDate(2024, 1, 1), time=UTCTime(0, 0, 0, 0))


class TestMergeGGA:
    """Tests for merge_gga function."""

    def test_position_and_fix(self, info):
        merge_gga(_parsed(parse_gga, GGA_FIX), info)
        assert info.latitude == pytest.approx(48.1173)
        assert info.longitude == pytest.approx(11.516667, rel=1e-6)
        assert info.signal == Signal.FIX
        assert info.hdop == pytest.approx(0.9)
        assert info.elevation == pytest.approx(545.4)
        assert info.time == UTCTime(12, 35, 19, 0)
        assert info.source_mask == SentenceKind.GGA
        assert info.has(Field.LATITUDE | Field.LONGITUDE | Field.HDOP | Field.ELEVATION)

    def test_satellite_count_not_merged(self, info):
        merge_gga(_parsed(parse_gga, GGA_FIX), info)
        assert info.satellites.in_use_count == 0
        assert Field.SATELLITES_IN_USE_COUNT not in info.present

    def test_southern_western_negative(self, info):
        data = GGAData(
            present=Field.LATITUDE | Field.LONGITUDE,
            latitude=3356.123,
            north_south="S",
            longitude=15112.456,
            east_west="W",
        )
        merge_gga(data, info)
        assert info.latitude == pytest.approx(-33.935383, rel=1e-6)
        assert info.longitude == pytest.approx(-151.207600, rel=1e-6)

    def test_empty_hdop_absent(self, info):
        merge_gga(
            _parsed(parse_gga, "$GPGGA,123519,4807.038,N,01131.000,E,1,08,,545.4,M,46.9,M,,*60"),
            info,
        )
        assert Field.HDOP not in info.present
        assert info.hdop == 0.0


class TestMergeGSA:
    """Tests for merge_gsa function."""

    def test_without_satellites_in_view_drops_prns(self, info):
        merge_gsa(_parsed(parse_gsa, GSA_3D), info)
        assert info.fix == Fix.FIX_3D
        assert info.pdop == pytest.approx(2.5)
        assert info.vdop == pytest.approx(2.1)
        assert info.satellites.in_use == [0] * 12
        assert info.satellites.in_use_count == 0

    def test_keeps_prns_in_view(self, info):
        in_view = info.satellites.in_view
        in_view[0] = Satellite(id=4, elevation=10, azimuth=20, snr=30)
        in_view[1] = Satellite(id=12, elevation=10, azimuth=20, snr=30)
        in_view[2] = Satellite(id=30, elevation=10, azimuth=20, snr=30)
        merge_gsa(_parsed(parse_gsa, GSA_3D), info)

        assert info.satellites.in_use == [4, 0, 0, 0, 12, 0, 0, 0, 0, 0, 0, 0]
        assert info.satellites.in_use_count == 2
        assert [s.in_use for s in in_view[:3]] == [True, True, False]
        assert info.has(Field.SATELLITES_IN_USE | Field.SATELLITES_IN_USE_COUNT)


class TestMergeGSV:
    """Tests for merge_gsv function."""

    def _merge_all(self, info, order):
        for index in order:
            assert merge_gsv(_parsed(parse_gsv, GSV_PACKS[index]), info) is True

    def test_full_round(self, info):
        self._merge_all(info, [0, 1, 2])
        satellites = info.satellites
        assert satellites.in_view_count == 9
        assert [s.id for s in satellites.in_view] == [1, 2, 12, 14, 15, 17, 19, 22, 24, 0, 0, 0]
        assert Field.SATELLITES_IN_VIEW in info.present

    @pytest.mark.parametrize("order", [[2, 0, 1], [1, 2, 0], [2, 1, 0]])
    def test_any_order(self, info, order):
        expected = NavigationInfo()
        self._merge_all(expected, [0, 1, 2])
        self._merge_all(info, order)
        assert info.satellites == expected.satellites

    def test_smaller_round_clears_old_slots(self, info):
        self._merge_all(info, [0, 1, 2])
        merge_gsv(_parsed(parse_gsv, "$GPGSV,1,1,01,07,79,048,42*4B"), info)
        assert info.satellites.in_view_count == 1
        assert [s.id for s in info.satellites.in_view] == [7] + [0] * 11

    def test_in_use_marked_from_gsa(self, info):
        info.satellites.in_use[0] = 12
        self._merge_all(info, [0])
        assert info.satellites.in_view[2].in_use is True
        assert info.satellites.in_view[0].in_use is False

    def test_invalid_pack_index_dropped(self, info, caplog):
        data = GSVData(present=Field.SATELLITES_IN_VIEW, pack_count=2, pack_index=0, sat_count=5)
        with caplog.at_level(logging.WARNING):
            assert merge_gsv(data, info) is False
        assert "dropped" in caplog.text
        assert info.source_mask == SentenceKind.NONE
        assert Field.SATELLITES_IN_VIEW not in info.present


class TestMergeRMC:
    """Tests for merge_rmc function."""

    def test_rmc_example(self, info):
        merge_rmc(_parsed(parse_rmc, RMC_LEGACY), info)
        assert info.latitude == pytest.approx(48.1173)
        assert info.longitude == pytest.approx(11.5167, abs=1e-4)
        assert info.speed == pytest.approx(41.48, abs=0.01)
        assert info.track == pytest.approx(84.4)
        assert info.date == UTCDate(1994, 3, 23)
        assert info.time == UTCTime(12, 35, 19, 0)
        assert info.magnetic_variation == pytest.approx(-3.1)

    def test_active_status_promotes_bad_fix(self, info):
        merge_rmc(_parsed(parse_rmc, RMC_LEGACY), info)
        assert info.signal == Signal.FIX
        assert info.fix == Fix.FIX_2D

    def test_active_status_keeps_better_fix(self, info):
        info.signal = Signal.RTK
        info.fix = Fix.FIX_3D
        merge_rmc(_parsed(parse_rmc, RMC_LEGACY), info)
        assert info.signal == Signal.RTK
        assert info.fix == Fix.FIX_3D

    def test_void_status_forces_bad(self, info):
        info.signal = Signal.RTK
        info.fix = Fix.FIX_3D
        merge_rmc(_parsed(parse_rmc, RMC_VOID), info)
        assert info.signal == Signal.BAD
        assert info.fix == Fix.BAD

    def test_east_variation_positive(self, info):
        data = RMCData(
            present=Field.MAGNETIC_VARIATION,
            status="A",
            magnetic_variation=3.1,
            magnetic_variation_direction="E",
        )
        merge_rmc(data, info)
        assert info.magnetic_variation == pytest.approx(3.1)


class TestMergeVTG:
    """Tests for merge_vtg function."""

    def test_speed_and_tracks(self, info):
        merge_vtg(_parsed(parse_vtg, VTG_VALID), info)
        assert info.speed == pytest.approx(10.2)
        assert info.track == pytest.approx(54.7)
        assert info.magnetic_track == pytest.approx(34.4)
        assert info.source_mask == SentenceKind.VTG


class TestMerge:
    """Tests for the merge dispatcher."""

    def test_dispatch(self, info):
        assert merge(_parsed(parse_gga, GGA_FIX), info) == SentenceKind.GGA
        assert merge(_parsed(parse_gsa, GSA_3D), info) == SentenceKind.GSA
        assert merge(_parsed(parse_gsv, GSV_PACKS[0]), info) == SentenceKind.GSV
        assert merge(_parsed(parse_rmc, RMC_LEGACY), info) == SentenceKind.RMC
        assert merge(_parsed(parse_vtg, VTG_VALID), info) == SentenceKind.VTG
        assert info.source_mask == SentenceKind.ALL

    def test_dropped_gsv_returns_none_kind(self, info):
        data = GSVData(present=Field.SATELLITES_IN_VIEW, pack_count=1, pack_index=2)
        assert merge(data, info) == SentenceKind.NONE

    def test_unknown_type(self, info):
        with pytest.raises(TypeError):
            merge("not a sentence", info)

    def test_later_sentence_does_not_clobber(self, info):
        merge(_parsed(parse_gga, GGA_FIX), info)
        merge(_parsed(parse_vtg, VTG_VALID), info)
        merge(_parsed(parse_rmc, RMC_VOID), info)

        # Position and elevation from GGA survive a VTG and a void RMC
        assert info.latitude == pytest.approx(48.1173)
        assert info.elevation == pytest.approx(545.4)
        assert info.hdop == pytest.approx(0.9)
        assert info.speed == pytest.approx(10.2)

    @pytest.mark.parametrize(
        "data",
        [
            GGAData(),
            GSAData(),
            GSVData(pack_count=1, pack_index=1),
            RMCData(),
            VTGData(),
        ],
        ids=["gga", "gsa", "gsv", "rmc", "vtg"],
    )
    def test_empty_record_leaves_info_unchanged(self, data):
        info = NavigationInfo()
        for sentence in (GGA_FIX, GSA_3D, RMC_LEGACY, VTG_VALID, *GSV_PACKS):
            assert parse_sentence(sentence, info) != SentenceKind.NONE
        before = copy.deepcopy(info)

        merge(data, info)

        before.source_mask = info.source_mask
        assert info == before

    def test_fresh_record_flags(self):
        assert NavigationInfo().present == INITIAL_PRESENT
