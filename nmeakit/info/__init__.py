"""Aggregate navigation record: merge, sanitize and generate."""

from nmeakit.info.generate import (
    generate,
    generate_gga,
    generate_gsa,
    generate_gsv,
    generate_rmc,
    generate_vtg,
)
from nmeakit.info.merge import (
    merge,
    merge_gga,
    merge_gsa,
    merge_gsv,
    merge_rmc,
    merge_vtg,
)
from nmeakit.info.sanitize import sanitize
from nmeakit.info.types import NavigationInfo, SatelliteInfo

__all__ = [
    "NavigationInfo",
    "SatelliteInfo",
    "generate",
    "generate_gga",
    "generate_gsa",
    "generate_gsv",
    "generate_rmc",
    "generate_vtg",
    "merge",
    "merge_gga",
    "merge_gsa",
    "merge_gsv",
    "merge_rmc",
    "merge_vtg",
    "sanitize",
]
