"""Tests for GSA sentence parsing and formatting."""

import pytest

from nmeakit.nmea.gsa import format_gsa, parse_gsa
from nmeakit.nmea.types import Field, Fix, GSAData

GSA_3D = "$GPGSA,A,3,04,05,,09,12,,,24,,,,,2.5,1.3,2.1*39"


class TestParseGSA:
    """Tests for parse_gsa function."""

    def test_3d_fix(self):
        result = parse_gsa(GSA_3D)
        assert result is not None
        assert result.fix_mode == "A"
        assert result.fix_type == Fix.FIX_3D
        assert result.satellite_prns == [4, 5, 0, 9, 12, 0, 0, 24, 0, 0, 0, 0]
        assert result.pdop == pytest.approx(2.5)
        assert result.hdop == pytest.approx(1.3)
        assert result.vdop == pytest.approx(2.1)
        assert result.present == (
            Field.FIX | Field.SATELLITES_IN_USE | Field.PDOP | Field.HDOP | Field.VDOP
        )

    def test_lowercase_mode(self):
        result = parse_gsa("$GPGSA,a,2,04,05,,09,12,,,24,,,,,2.5,1.3,2.1*18")
        assert result is not None
        assert result.fix_mode == "A"
        assert result.fix_type == Fix.FIX_2D

    def test_no_fix_without_satellites(self):
        result = parse_gsa("$GPGSA,A,1,,,,,,,,,,,,,,,*1E")
        assert result is not None
        assert result.fix_type == Fix.BAD
        assert result.satellite_prns == [0] * 12
        assert result.present == Field.FIX

    def test_all_empty(self):
        result = parse_gsa("$GPGSA,,,,,,,,,,,,,,,,,*6E")
        assert result is not None
        assert result.present == Field.NONE
        assert result.fix_mode is None

    @pytest.mark.parametrize(
        "sentence",
        [
            # mode x
            "$GPGSA,x,3,04,05,,09,12,,,24,,,,,2.5,1.3,2.1*00",
            # fix type 4
            "$GPGSA,A,4,04,05,,09,12,,,24,,,,,2.5,1.3,2.1*3E",
            # missing VDOP
            "$GPGSA,A,3,04,05,,09,12,,,24,,,,,2.5,1.3*38",
            # negative PRN
            "$GPGSA,A,3,-4,05,,09,12,,,24,,,,,2.5,1.3,2.1*24",
        ],
    )
    def test_rejected(self, sentence):
        assert parse_gsa(sentence) is None

    def test_invalid_mode_logged(self, caplog):
        assert parse_gsa("$GPGSA,x,3,04,05,,09,12,,,24,,,,,2.5,1.3,2.1*00") is None
        assert "invalid fix mode (X)" in caplog.text


class TestFormatGSA:
    """Tests for format_gsa function."""

    def test_renders_parsed_sentence(self):
        data = parse_gsa(GSA_3D)
        assert data is not None
        assert format_gsa(data) == "$GPGSA,A,3,4,5,,9,12,,,24,,,,,2.5,1.3,2.1*09\r\n"

    def test_empty_record(self):
        assert format_gsa(GSAData()) == "$GPGSA,,,,,,,,,,,,,,,,,*6E\r\n"

    def test_satellites_hidden_without_flag(self):
        data = GSAData(present=Field.FIX, fix_mode="M", fix_type=Fix.FIX_2D)
        data.satellite_prns[0] = 7
        sentence = format_gsa(data)
        assert sentence.startswith("$GPGSA,M,2,,")
        assert ",7," not in sentence

    def test_formatted_sentence_parses_back(self):
        data = parse_gsa(GSA_3D)
        assert data is not None
        again = parse_gsa(format_gsa(data))
        assert again == data
