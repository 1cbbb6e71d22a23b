"""GNSS module for reading NMEA 0183 data from a serial port or a stream."""

from nmeakit.gnss.reader import NMEAReader
from nmeakit.gnss.types import GNSSData

__all__ = ["GNSSData", "NMEAReader"]
