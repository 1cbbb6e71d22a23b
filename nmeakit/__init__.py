"""nmeakit: NMEA 0183 parsing, aggregation and generation.

Decode GGA, GSA, GSV, RMC and VTG sentences, merge them into one
``NavigationInfo``, and render a record back into sentences.
"""

import logging

from nmeakit.gnss import GNSSData, NMEAReader
from nmeakit.info import NavigationInfo, SatelliteInfo, generate, merge, sanitize
from nmeakit.nmea_parser import NMEAParser, parse_sentence

__all__ = [
    "GNSSData",
    "NMEAParser",
    "NMEAReader",
    "NavigationInfo",
    "SatelliteInfo",
    "generate",
    "merge",
    "parse_sentence",
    "sanitize",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
