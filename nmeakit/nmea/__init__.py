"""NMEA 0183 sentence codec for GGA, GSA, GSV, RMC and VTG sentences."""

from nmeakit.nmea.checksum import (
    calculate_checksum,
    find_tail,
    format_sentence,
    validate_checksum,
)
from nmeakit.nmea.framer import MAX_SENTENCE_LENGTH, SentenceFramer
from nmeakit.nmea.gga import format_gga, parse_gga
from nmeakit.nmea.gsa import format_gsa, parse_gsa
from nmeakit.nmea.gsv import format_gsv, parse_gsv
from nmeakit.nmea.rmc import format_rmc, parse_rmc
from nmeakit.nmea.sentence import DEFAULT_TALKER, VALID_TALKER_IDS, classify
from nmeakit.nmea.types import (
    MAX_SATELLITES,
    SATELLITES_PER_PACK,
    Field,
    Fix,
    GGAData,
    GSAData,
    GSVData,
    RMCData,
    Satellite,
    SentenceData,
    SentenceKind,
    Signal,
    UTCDate,
    UTCTime,
    VTGData,
)
from nmeakit.nmea.vtg import format_vtg, parse_vtg

__all__ = [
    "DEFAULT_TALKER",
    "MAX_SATELLITES",
    "MAX_SENTENCE_LENGTH",
    "SATELLITES_PER_PACK",
    "VALID_TALKER_IDS",
    "Field",
    "Fix",
    "GGAData",
    "GSAData",
    "GSVData",
    "RMCData",
    "Satellite",
    "SentenceData",
    "SentenceFramer",
    "SentenceKind",
    "Signal",
    "UTCDate",
    "UTCTime",
    "VTGData",
    "calculate_checksum",
    "classify",
    "find_tail",
    "format_gga",
    "format_gsa",
    "format_gsv",
    "format_rmc",
    "format_sentence",
    "format_vtg",
    "parse_gga",
    "parse_gsa",
    "parse_gsv",
    "parse_rmc",
    "parse_vtg",
    "validate_checksum",
]
