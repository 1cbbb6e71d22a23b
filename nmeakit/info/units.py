"""Unit conversions between NMEA wire units and the aggregate record.

NMEA position fields use "NMEA degrees": ``ddmm.mmmm`` read as one number,
i.e. whole degrees times 100 plus decimal minutes. 4807.038 is 48 degrees
7.038 minutes, or 48.1173 decimal degrees.
"""

import math

from nmeakit.info.types import NavigationInfo
from nmeakit.nmea.types import SATELLITES_PER_PACK, Field
from nmeakit.nmea.vtg import KILOMETERS_PER_HOUR_PER_KNOT

# 1 km/h = 1000 m / 3600 s
KILOMETERS_PER_HOUR_PER_METER_PER_SECOND = 3.6

# Nominal user equivalent range error: 1 unit of DOP ~ 5 m of position error
DOP_FACTOR = 5.0


def knots_to_kph(knots: float) -> float:
    return knots * KILOMETERS_PER_HOUR_PER_KNOT


def kph_to_knots(kph: float) -> float:
    return kph / KILOMETERS_PER_HOUR_PER_KNOT


def kph_to_mps(kph: float) -> float:
    """Convert km/h to m/s for consumers that expect SI units.

    Example:
        >>> kph_to_mps(36.0)
        10.0
    """
    return kph / KILOMETERS_PER_HOUR_PER_METER_PER_SECOND


def mps_to_kph(mps: float) -> float:
    return mps * KILOMETERS_PER_HOUR_PER_METER_PER_SECOND


def nmea_to_degrees(value: float) -> float:
    """Convert NMEA degrees (DDDMM.MMMM) to decimal degrees.

    The sign is kept, so the hemisphere can be applied before or after.

    Example:
        >>> round(nmea_to_degrees(4807.038), 4)
        48.1173
    """
    sign = -1.0 if value < 0 else 1.0
    value = abs(value)
    degrees = math.floor(value / 100)
    minutes = value - degrees * 100
    return sign * (degrees + minutes / 60.0)


def degrees_to_nmea(value: float) -> float:
    """Convert decimal degrees to NMEA degrees (DDDMM.MMMM), keeping the sign.

    Example:
        >>> round(degrees_to_nmea(48.1173), 3)
        4807.038
    """
    sign = -1.0 if value < 0 else 1.0
    value = abs(value)
    degrees = math.floor(value)
    return sign * (degrees * 100 + (value - degrees) * 60.0)


def dop_to_meters(dop: float) -> float:
    return dop * DOP_FACTOR


def meters_to_dop(meters: float) -> float:
    return meters / DOP_FACTOR


def degrees_to_radians(value: float) -> float:
    return math.radians(value)


def radians_to_degrees(value: float) -> float:
    return math.degrees(value)


def gsv_pack_count(satellites: int) -> int:
    """Number of GSV sentences needed to describe ``satellites`` satellites.

    A round always has at least one sentence, even with nothing in view.

    Example:
        >>> gsv_pack_count(5)
        2
        >>> gsv_pack_count(0)
        1
    """
    return max(1, math.ceil(satellites / SATELLITES_PER_PACK))


def convert_dop_to_meters(info: NavigationInfo) -> None:
    """Replace the present DOP values of ``info`` with meters, in place."""
    for flag, name in (
        (Field.PDOP, "pdop"),
        (Field.HDOP, "hdop"),
        (Field.VDOP, "vdop"),
    ):
        if flag in info.present:
            setattr(info, name, dop_to_meters(getattr(info, name)))
