"""NMEA data types for parsed sentences.

This module defines the vocabulary shared by the sentence codec and the
aggregate navigation record: sentence kinds, field presence flags, signal and
fix enumerations, and one dataclass per supported sentence kind.

Design Decisions:
    1. Optional fields (X | None): NMEA fields may be empty, indicated by
       consecutive commas. Using None distinguishes "no data received" from
       "measured zero". Parsers never use NaN or -1 sentinels.

    2. Presence flags: every decoded record carries a ``present`` set of
       ``Field`` flags. A value is trustworthy only when its flag is set; the
       merge layer reads nothing else. A numeric value can be present while its
       flag is not (e.g. the ignored differential GPS fields).

    3. Wire units: decoded records keep the units of the sentence text.
       Latitude and longitude are NMEA degrees (``ddmm.mmmm`` read as a float,
       i.e. degrees * 100 + minutes) with a separate hemisphere letter, speeds
       are knots or km/h as sent. Conversion to decimal degrees and km/h
       happens when a record is merged into a ``NavigationInfo``.
"""

import enum
from dataclasses import dataclass, field

# Satellite slots in the aggregate record, and satellites carried by one GSV
# sentence. Three GSV sentences describe a full round.
MAX_SATELLITES = 12
SATELLITES_PER_PACK = 4
MAX_PACKS = MAX_SATELLITES // SATELLITES_PER_PACK


class SentenceKind(enum.Flag):
    """Supported sentence kinds.

    A flag so that a set of kinds can be expressed directly, both for the
    aggregate's ``source_mask`` and for selecting what to generate.
    """

    NONE = 0
    GGA = 1
    GSA = 2
    GSV = 4
    RMC = 8
    VTG = 16
    ALL = GGA | GSA | GSV | RMC | VTG


class Field(enum.Flag):
    """Presence flags for decoded records and the aggregate record."""

    NONE = 0
    UTC_DATE = 1 << 0
    UTC_TIME = 1 << 1
    SIGNAL = 1 << 2
    FIX = 1 << 3
    PDOP = 1 << 4
    HDOP = 1 << 5
    VDOP = 1 << 6
    LATITUDE = 1 << 7
    LONGITUDE = 1 << 8
    ELEVATION = 1 << 9
    SPEED = 1 << 10
    TRACK = 1 << 11
    MAGNETIC_TRACK = 1 << 12
    MAGNETIC_VARIATION = 1 << 13
    SATELLITES_IN_USE_COUNT = 1 << 14
    SATELLITES_IN_USE = 1 << 15
    SATELLITES_IN_VIEW = 1 << 16
    ALL = (1 << 17) - 1


class Signal(enum.IntEnum):
    """GGA fix quality indicator.

    0 = Invalid (no fix)
    1 = GPS fix (SPS)
    2 = DGPS fix
    3 = PPS fix (sensitive)
    4 = RTK Fixed
    5 = RTK Float
    6 = Dead reckoning (estimated)
    7 = Manual input
    8 = Simulation
    """

    BAD = 0
    FIX = 1
    DIFFERENTIAL = 2
    SENSITIVE = 3
    RTK = 4
    FLOAT_RTK = 5
    ESTIMATED = 6
    MANUAL = 7
    SIMULATION = 8


class Fix(enum.IntEnum):
    """GSA fix type."""

    BAD = 1
    FIX_2D = 2
    FIX_3D = 3


@dataclass
class UTCDate:
    """Calendar date as reported by RMC (full four-digit year)."""

    year: int
    month: int
    day: int


@dataclass
class UTCTime:
    """Time of day with hundredths of a second."""

    hour: int
    minute: int
    second: int
    hundredths: int = 0


@dataclass
class Satellite:
    """One satellite as described by GSV.

    Attributes:
        id: PRN number. 0 marks an empty slot.
        elevation: Elevation in degrees (0 = horizon, 90 = zenith).
        azimuth: Azimuth in degrees from true north, [0, 360).
        snr: Signal-to-noise ratio in dB-Hz, [0, 99]. 0 when not tracked.
        in_use: True when the satellite is used in the fix (from GSA).
    """

    id: int = 0
    elevation: int = 0
    azimuth: int = 0
    snr: int = 0
    in_use: bool = False


@dataclass
class GGAData:
    """Parsed GGA (Global Positioning System Fix Data) sentence.

    Attributes:
        present: Fields that were present and valid.
        time: UTC time of the fix.
        latitude: Latitude in NMEA degrees (DDMM.MMMM), always non-negative.
        north_south: Hemisphere letter, ``"N"`` or ``"S"``.
        longitude: Longitude in NMEA degrees (DDDMM.MMMM).
        east_west: Hemisphere letter, ``"E"`` or ``"W"``.
        signal: Fix quality indicator.
        num_satellites: Number of satellites used in the solution.
        hdop: Horizontal dilution of precision.
        elevation: Antenna altitude above mean sea level.
        elevation_units: Always ``"M"`` when elevation is present.
        geoid_separation: Height of the geoid above the WGS84 ellipsoid.
            Parsed but never merged.
        geoid_separation_units: Units letter for ``geoid_separation``.
        dgps_age: Age of differential corrections in seconds. Never merged.
        dgps_station_id: Differential reference station. Never merged.
    """

    present: Field = Field.NONE
    time: UTCTime | None = None
    latitude: float | None = None
    north_south: str | None = None
    longitude: float | None = None
    east_west: str | None = None
    signal: Signal | None = None
    num_satellites: int | None = None
    hdop: float | None = None
    elevation: float | None = None
    elevation_units: str | None = None
    geoid_separation: float | None = None
    geoid_separation_units: str | None = None
    dgps_age: float | None = None
    dgps_station_id: int | None = None

    @property
    def valid(self) -> bool:
        """Navigation validity: a fix quality above BAD was reported."""
        return self.signal is not None and self.signal > Signal.BAD


@dataclass
class GSAData:
    """Parsed GSA (DOP and Active Satellites) sentence.

    Attributes:
        present: Fields that were present and valid.
        fix_mode: ``"A"`` (automatic 2D/3D) or ``"M"`` (manual).
        fix_type: Fix type.
        satellite_prns: 12 PRN slots of satellites used in the fix, 0 for an
            empty slot.
        pdop: Position dilution of precision.
        hdop: Horizontal dilution of precision.
        vdop: Vertical dilution of precision.
    """

    present: Field = Field.NONE
    fix_mode: str | None = None
    fix_type: Fix | None = None
    satellite_prns: list[int] = field(default_factory=lambda: [0] * MAX_SATELLITES)
    pdop: float | None = None
    hdop: float | None = None
    vdop: float | None = None


@dataclass
class GSVData:
    """Parsed GSV (Satellites in View) sentence, one pack of a round.

    Attributes:
        present: ``Field.SATELLITES_IN_VIEW`` once parsed.
        pack_count: Number of GSV sentences in this round.
        pack_index: 1-based index of this sentence within the round.
        sat_count: Total satellites in view across the round.
        satellites: Up to 4 satellite slots, in sentence order. Empty slots
            have ``id == 0``.
    """

    present: Field = Field.NONE
    pack_count: int = 0
    pack_index: int = 0
    sat_count: int = 0
    satellites: list[Satellite] = field(default_factory=list)


@dataclass
class RMCData:
    """Parsed RMC (Recommended Minimum Specific GNSS Data) sentence.

    Attributes:
        present: Fields that were present and valid.
        time: UTC time of the fix.
        date: UTC date of the fix.
        status: ``"A"`` (active) or ``"V"`` (void).
        latitude: Latitude in NMEA degrees.
        north_south: ``"N"`` or ``"S"``.
        longitude: Longitude in NMEA degrees.
        east_west: ``"E"`` or ``"W"``.
        speed_knots: Speed over ground in knots.
        track: Course over ground, degrees true.
        magnetic_variation: Magnetic variation in degrees, non-negative.
        magnetic_variation_direction: ``"E"`` or ``"W"``.
        mode: FAA mode indicator (A/D/E/F/M/N/P/R/S).
    """

    present: Field = Field.NONE
    time: UTCTime | None = None
    date: UTCDate | None = None
    status: str | None = None
    latitude: float | None = None
    north_south: str | None = None
    longitude: float | None = None
    east_west: str | None = None
    speed_knots: float | None = None
    track: float | None = None
    magnetic_variation: float | None = None
    magnetic_variation_direction: str | None = None
    mode: str | None = None

    @property
    def valid(self) -> bool:
        """Return ``True`` when the fix is active."""
        return self.status == "A"


@dataclass
class VTGData:
    """Parsed VTG (Track Made Good and Ground Speed) sentence.

    When only one of the two speeds was sent, the parser derives the other,
    so both are present together or not at all.

    Attributes:
        present: Fields that were present and valid.
        track: Track relative to true north, degrees.
        magnetic_track: Track relative to magnetic north, degrees.
        speed_knots: Ground speed in knots.
        speed_kilometers_per_hour: Ground speed in km/h.
        mode: FAA mode indicator (NMEA 2.3+), None on older receivers.
    """

    present: Field = Field.NONE
    track: float | None = None
    magnetic_track: float | None = None
    speed_knots: float | None = None
    speed_kilometers_per_hour: float | None = None
    mode: str | None = None

    @property
    def valid(self) -> bool:
        """Navigation validity: mode must exist and not be 'N' (not valid)."""
        return self.mode is not None and self.mode != "N"


SentenceData = GGAData | GSAData | GSVData | RMCData | VTGData
