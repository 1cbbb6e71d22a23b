"""Range normalization of a ``NavigationInfo``.

``sanitize`` turns whatever the merge layer left behind into a record a
consumer can use without further checks:

    latitude            [-90, 90]    beyond a pole: reflected, longitude + 180
    longitude           [-180, 180]
    speed               >= 0         negative: negated, tracks + 180
    track, mag. track   [0, 360)
    magnetic variation  [0, 360)
    PDOP, HDOP, VDOP    >= 0
    satellite elevation [0, 90]      past the zenith: reflected, azimuth + 180
    satellite azimuth   [0, 360)
    satellite SNR       [0, 99]

Fields that are not present are reset to their defaults, except the date and
time which are set to the current time and then flagged present. Sanitizing
a sanitized record changes nothing. Values already in range are left
untouched, so repeated passes do not accumulate floating point drift.
"""

import datetime
import math

from nmeakit.info.types import NavigationInfo, utc_now
from nmeakit.nmea.types import MAX_SATELLITES, Field, Fix, Satellite, Signal

_MAX_SNR = 99

_DEFAULTS = (
    (Field.PDOP, "pdop"),
    (Field.HDOP, "hdop"),
    (Field.VDOP, "vdop"),
    (Field.LATITUDE, "latitude"),
    (Field.LONGITUDE, "longitude"),
    (Field.ELEVATION, "elevation"),
    (Field.SPEED, "speed"),
    (Field.TRACK, "track"),
    (Field.MAGNETIC_TRACK, "magnetic_track"),
    (Field.MAGNETIC_VARIATION, "magnetic_variation"),
)


def _wrap(value: float, low: float, span: float) -> float:
    """Reduce ``value`` into ``[low, low + span]`` by whole turns."""
    if low <= value <= low + span:
        return value
    return (value - low) % span + low


def _heading(value: float) -> float:
    """Reduce an angle into [0, 360)."""
    if 0.0 <= value < 360.0:
        return value
    value %= 360.0
    # -1e-20 % 360 rounds to 360.0
    return 0.0 if value >= 360.0 else value


def _sanitize_position(info: NavigationInfo) -> None:
    latitude = _wrap(info.latitude, -180.0, 360.0)
    longitude = info.longitude

    if latitude > 90.0:
        latitude = 180.0 - latitude
        longitude += 180.0
    elif latitude < -90.0:
        latitude = -180.0 - latitude
        longitude += 180.0

    info.latitude = latitude
    info.longitude = _wrap(longitude, -180.0, 360.0)


def _sanitize_motion(info: NavigationInfo) -> None:
    if info.speed < 0.0:
        info.speed = -info.speed
        info.track += 180.0
        info.magnetic_track += 180.0

    info.track = _heading(info.track)
    info.magnetic_track = _heading(info.magnetic_track)
    info.magnetic_variation = _heading(info.magnetic_variation)


def _sanitize_satellite(satellite: Satellite) -> None:
    elevation = int(_wrap(satellite.elevation, -180, 360))
    azimuth = satellite.azimuth

    if elevation > 90:
        elevation = 180 - elevation
        azimuth += 180
    elif elevation < -90:
        elevation = -180 - elevation
        azimuth += 180

    satellite.elevation = abs(elevation)
    satellite.azimuth = azimuth % 360
    satellite.snr = min(max(satellite.snr, 0), _MAX_SNR)


def _sanitize_satellites(info: NavigationInfo) -> None:
    satellites = info.satellites

    if Field.SATELLITES_IN_VIEW not in info.present:
        satellites.in_view = [Satellite() for _ in range(MAX_SATELLITES)]
    if Field.SATELLITES_IN_USE not in info.present:
        satellites.in_use = [0] * MAX_SATELLITES

    for satellite in satellites.in_view:
        if satellite.id:
            _sanitize_satellite(satellite)
        else:
            satellite.elevation = satellite.azimuth = satellite.snr = 0
            satellite.in_use = False

    in_view = satellites.in_view_ids()
    satellites.in_use = [prn if prn in in_view else 0 for prn in satellites.in_use]
    used = {prn for prn in satellites.in_use if prn}
    for satellite in satellites.in_view:
        satellite.in_use = bool(satellite.id) and satellite.id in used

    satellites.in_view_count = len([s for s in satellites.in_view if s.id])
    satellites.in_use_count = len([prn for prn in satellites.in_use if prn])


def sanitize(info: NavigationInfo, now: datetime.datetime | None = None) -> None:
    """Normalize ``info`` in place; never fails.

    Args:
        info: The record to normalize
        now: Time used for a missing date or time (default: current UTC time)

    Example:
        >>> info = NavigationInfo(present=Field.LATITUDE, latitude=100.0)
        >>> sanitize(info)
        >>> info.latitude, info.longitude
        (80.0, 180.0)
    """
    info.present &= Field.ALL

    missing_clock = ~info.present & (Field.UTC_DATE | Field.UTC_TIME)
    if missing_clock:
        date, time = utc_now(now)
        if Field.UTC_DATE in missing_clock:
            info.date = date
        if Field.UTC_TIME in missing_clock:
            info.time = time
        info.present |= Field.UTC_DATE | Field.UTC_TIME

    if Field.SIGNAL not in info.present:
        info.signal = Signal.BAD
    if Field.FIX not in info.present:
        info.fix = Fix.BAD

    for flag, name in _DEFAULTS:
        value = getattr(info, name)
        if flag not in info.present or not math.isfinite(value):
            setattr(info, name, 0.0)

    info.pdop = abs(info.pdop)
    info.hdop = abs(info.hdop)
    info.vdop = abs(info.vdop)

    _sanitize_position(info)
    _sanitize_motion(info)
    _sanitize_satellites(info)
