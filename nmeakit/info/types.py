"""Aggregate navigation record built from a stream of sentences.

Design Decisions:
    1. One long-lived mutable record: the merge functions update a
       ``NavigationInfo`` in place, one sentence at a time. The record is owned
       by the caller; nothing in this package shares it between threads.

    2. Plain values with presence flags: unlike the decoded sentence records,
       the aggregate holds concrete values (0, ``Signal.BAD``...) in every
       field. ``present`` says which of them were actually reported.

    3. Normalized units: latitude and longitude are signed decimal degrees,
       speed is km/h. Sentence wire units stay in ``nmeakit.nmea``.
"""

import datetime
from dataclasses import dataclass, field, fields

from nmeakit.nmea.types import (
    MAX_SATELLITES,
    Field,
    Fix,
    Satellite,
    SentenceKind,
    Signal,
    UTCDate,
    UTCTime,
)

# Fields a fresh record reports: the clock and a (bad) fix state
INITIAL_PRESENT = Field.UTC_DATE | Field.UTC_TIME | Field.SIGNAL | Field.FIX


def utc_now(
    now: datetime.datetime | None = None,
) -> tuple[UTCDate, UTCTime]:
    """Split ``now`` (default: the current UTC time) into a date and a time."""
    if now is None:
        now = datetime.datetime.now(datetime.timezone.utc)
    return (
        UTCDate(year=now.year, month=now.month, day=now.day),
        UTCTime(
            hour=now.hour,
            minute=now.minute,
            second=now.second,
            hundredths=now.microsecond // 10000,
        ),
    )


def _empty_in_view() -> list[Satellite]:
    return [Satellite() for _ in range(MAX_SATELLITES)]


@dataclass
class SatelliteInfo:
    """Satellites used in the fix (GSA) and in view of the receiver (GSV).

    Attributes:
        in_use_count: Number of non-zero ids in ``in_use``.
        in_use: 12 PRN slots of satellites used in the fix, 0 for empty.
        in_view_count: Number of satellites in view, as reported by GSV.
        in_view: 12 satellite slots, ``id == 0`` for empty.
    """

    in_use_count: int = 0
    in_use: list[int] = field(default_factory=lambda: [0] * MAX_SATELLITES)
    in_view_count: int = 0
    in_view: list[Satellite] = field(default_factory=_empty_in_view)

    def in_view_ids(self) -> set[int]:
        """Ids of the occupied in-view slots."""
        return {satellite.id for satellite in self.in_view if satellite.id}


@dataclass
class NavigationInfo:
    """Navigation state aggregated from GGA, GSA, GSV, RMC and VTG sentences.

    Attributes:
        present: Fields that hold reported (or sanitized) data.
        source_mask: Sentence kinds merged since the last reset.
        date: UTC date. Defaults to the current date.
        time: UTC time of day. Defaults to the current time.
        signal: Fix quality.
        fix: Fix type.
        latitude: Decimal degrees, positive north.
        longitude: Decimal degrees, positive east.
        pdop: Position dilution of precision.
        hdop: Horizontal dilution of precision.
        vdop: Vertical dilution of precision.
        elevation: Meters above mean sea level.
        speed: Speed over ground in km/h.
        track: Course over ground, degrees true.
        magnetic_track: Course over ground, degrees magnetic.
        magnetic_variation: Degrees, positive east.
        satellites: Satellites in use and in view.

    Example:
        >>> info = NavigationInfo()
        >>> info.signal
        <Signal.BAD: 0>
        >>> Field.UTC_TIME in info.present
        True
    """

    present: Field = INITIAL_PRESENT
    source_mask: SentenceKind = SentenceKind.NONE
    date: UTCDate | None = None
    time: UTCTime | None = None
    signal: Signal = Signal.BAD
    fix: Fix = Fix.BAD
    latitude: float = 0.0
    longitude: float = 0.0
    pdop: float = 0.0
    hdop: float = 0.0
    vdop: float = 0.0
    elevation: float = 0.0
    speed: float = 0.0
    track: float = 0.0
    magnetic_track: float = 0.0
    magnetic_variation: float = 0.0
    satellites: SatelliteInfo = field(default_factory=SatelliteInfo)

    def __post_init__(self) -> None:
        # Both from one clock reading
        date, time = utc_now()
        if self.date is None:
            self.date = date
        if self.time is None:
            self.time = time

    def has(self, flags: Field) -> bool:
        """Return True when every flag in ``flags`` is present."""
        return flags in self.present

    def reset(self) -> None:
        """Return to the freshly created state, with the current time."""
        fresh = NavigationInfo()
        for item in fields(self):
            setattr(self, item.name, getattr(fresh, item.name))
