"""JSON formatting utilities for navigation data."""

import json
from typing import Any

from nmeakit.gnss.types import GNSSData
from nmeakit.info.types import NavigationInfo
from nmeakit.info.units import kph_to_mps
from nmeakit.nmea.types import Field

__all__ = ["format_gnss_message", "format_info"]


def _present(info: NavigationInfo, flag: Field, value: Any) -> Any:
    return value if flag in info.present else None


def _info_to_dict(info: NavigationInfo) -> dict[str, Any]:
    date, time = info.date, info.time
    satellites = info.satellites
    speed = _present(info, Field.SPEED, info.speed)

    return {
        "date": _present(
            info, Field.UTC_DATE, f"{date.year:04d}-{date.month:02d}-{date.day:02d}"
        ),
        "utc_time": _present(
            info,
            Field.UTC_TIME,
            f"{time.hour:02d}:{time.minute:02d}:{time.second:02d}.{time.hundredths:02d}",
        ),
        "signal": _present(info, Field.SIGNAL, info.signal.name),
        "fix": _present(info, Field.FIX, info.fix.name),
        "lat": _present(info, Field.LATITUDE, info.latitude),
        "lon": _present(info, Field.LONGITUDE, info.longitude),
        "alt": _present(info, Field.ELEVATION, info.elevation),
        "pdop": _present(info, Field.PDOP, info.pdop),
        "hdop": _present(info, Field.HDOP, info.hdop),
        "vdop": _present(info, Field.VDOP, info.vdop),
        "speed_kmh": speed,
        "speed_ms": kph_to_mps(speed) if speed is not None else None,
        "track_degrees": _present(info, Field.TRACK, info.track),
        "magnetic_track_degrees": _present(
            info, Field.MAGNETIC_TRACK, info.magnetic_track
        ),
        "magnetic_variation_degrees": _present(
            info, Field.MAGNETIC_VARIATION, info.magnetic_variation
        ),
        "satellites_in_use": [prn for prn in satellites.in_use if prn],
        "satellites_in_view": [
            {
                "id": satellite.id,
                "elevation": satellite.elevation,
                "azimuth": satellite.azimuth,
                "snr": satellite.snr,
                "in_use": satellite.in_use,
            }
            for satellite in satellites.in_view
            if satellite.id
        ],
    }


def format_info(info: NavigationInfo) -> str:
    """Serialize a navigation record into a JSON string.

    Fields that are not present serialize as ``null``.
    """
    return json.dumps(_info_to_dict(info))


def format_gnss_message(data: GNSSData) -> str:
    """Serialize a reader snapshot, tagged with the sentence kind it came from."""
    return json.dumps({"type": "gnss", "kind": data.kind.name, **_info_to_dict(data.info)})
