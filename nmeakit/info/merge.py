"""Fold decoded sentences into a ``NavigationInfo``.

Every merge function updates the record in place and copies only the fields
the decoded sentence flags as present: a field the sentence did not report
keeps whatever an earlier sentence put there. The sentence kind is added to
``info.source_mask``.

Two merges depend on the state already in the record:

- GSV: one sentence describes one slice of the satellite table. The slice
  position comes from the pack index, so the packs of a round can arrive in
  any order.
- RMC: status A promotes a BAD signal and fix to the weakest valid values;
  status V forces both back to BAD.
"""

import logging

from nmeakit.info.types import NavigationInfo
from nmeakit.info.units import knots_to_kph, nmea_to_degrees
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
    VTGData,
)

logger = logging.getLogger(__name__)


def _signed(value: float, letter: str | None, negative: str) -> float:
    return -value if letter == negative else value


def merge_gga(data: GGAData, info: NavigationInfo) -> None:
    """Merge time, signal, position, HDOP and elevation from GGA.

    The satellite count and the geoid/DGPS fields are not merged.
    """
    info.source_mask |= SentenceKind.GGA
    present = data.present

    if Field.UTC_TIME in present:
        info.time = data.time
        info.present |= Field.UTC_TIME
    if Field.SIGNAL in present:
        info.signal = data.signal
        info.present |= Field.SIGNAL
    if Field.LATITUDE in present:
        info.latitude = _signed(nmea_to_degrees(data.latitude), data.north_south, "S")
        info.present |= Field.LATITUDE
    if Field.LONGITUDE in present:
        info.longitude = _signed(nmea_to_degrees(data.longitude), data.east_west, "W")
        info.present |= Field.LONGITUDE
    if Field.HDOP in present:
        info.hdop = data.hdop
        info.present |= Field.HDOP
    if Field.ELEVATION in present:
        info.elevation = data.elevation
        info.present |= Field.ELEVATION


def merge_gsa(data: GSAData, info: NavigationInfo) -> None:
    """Merge fix type, satellites in use and DOPs from GSA.

    Only PRNs that match a satellite in view are kept; each keeps its GSA
    slot. Matching in-view satellites get ``in_use`` set, the others cleared.
    """
    info.source_mask |= SentenceKind.GSA
    present = data.present

    if Field.FIX in present:
        info.fix = data.fix_type
        info.present |= Field.FIX

    if Field.SATELLITES_IN_USE in present:
        satellites = info.satellites
        in_view = satellites.in_view_ids()
        in_use = [prn if prn in in_view else 0 for prn in data.satellite_prns]
        in_use = (in_use + [0] * MAX_SATELLITES)[:MAX_SATELLITES]

        used = set(in_use)
        for satellite in satellites.in_view:
            satellite.in_use = bool(satellite.id) and satellite.id in used

        satellites.in_use = in_use
        satellites.in_use_count = sum(1 for prn in in_use if prn)
        info.present |= Field.SATELLITES_IN_USE | Field.SATELLITES_IN_USE_COUNT

    for flag, name in (
        (Field.PDOP, "pdop"),
        (Field.HDOP, "hdop"),
        (Field.VDOP, "vdop"),
    ):
        if flag in present:
            setattr(info, name, getattr(data, name))
            info.present |= flag


def merge_gsv(
    data: GSVData, info: NavigationInfo, logger: logging.Logger = logger
) -> bool:
    """Merge one GSV pack into its slice of the satellite table.

    A pack whose index does not fit the round (or the table) is dropped
    without touching ``info``.

    Returns:
        False when the pack was dropped.
    """
    if not 1 <= data.pack_index <= data.pack_count:
        logger.warning(
            "GSV pack %d of %d dropped", data.pack_index, data.pack_count
        )
        return False
    if data.pack_index * SATELLITES_PER_PACK > MAX_SATELLITES:
        logger.warning("GSV pack %d exceeds the satellite table", data.pack_index)
        return False

    info.source_mask |= SentenceKind.GSV
    if Field.SATELLITES_IN_VIEW not in data.present:
        return True

    satellites = info.satellites
    sat_count = min(data.sat_count, MAX_SATELLITES)
    offset = (data.pack_index - 1) * SATELLITES_PER_PACK
    count = min(SATELLITES_PER_PACK, sat_count - offset)

    used = {prn for prn in satellites.in_use if prn}
    for index in range(max(count, 0)):
        source = data.satellites[index] if index < len(data.satellites) else Satellite()
        satellites.in_view[offset + index] = Satellite(
            id=source.id,
            elevation=source.elevation,
            azimuth=source.azimuth,
            snr=source.snr,
            in_use=bool(source.id) and source.id in used,
        )

    # Slots beyond the reported count belong to an older round
    for index in range(sat_count, MAX_SATELLITES):
        satellites.in_view[index] = Satellite()

    satellites.in_view_count = sat_count
    info.present |= Field.SATELLITES_IN_VIEW
    return True


def merge_rmc(data: RMCData, info: NavigationInfo) -> None:
    """Merge date, time, status, position, speed, track and variation from RMC."""
    info.source_mask |= SentenceKind.RMC
    present = data.present

    if Field.UTC_DATE in present:
        info.date = data.date
        info.present |= Field.UTC_DATE
    if Field.UTC_TIME in present:
        info.time = data.time
        info.present |= Field.UTC_TIME

    if data.status == "A":
        if info.signal == Signal.BAD:
            info.signal = Signal.FIX
        if info.fix == Fix.BAD:
            info.fix = Fix.FIX_2D
        info.present |= Field.SIGNAL | Field.FIX
    elif data.status == "V":
        info.signal = Signal.BAD
        info.fix = Fix.BAD
        info.present |= Field.SIGNAL | Field.FIX

    if Field.LATITUDE in present:
        info.latitude = _signed(nmea_to_degrees(data.latitude), data.north_south, "S")
        info.present |= Field.LATITUDE
    if Field.LONGITUDE in present:
        info.longitude = _signed(nmea_to_degrees(data.longitude), data.east_west, "W")
        info.present |= Field.LONGITUDE
    if Field.SPEED in present:
        info.speed = knots_to_kph(data.speed_knots)
        info.present |= Field.SPEED
    if Field.TRACK in present:
        info.track = data.track
        info.present |= Field.TRACK
    if Field.MAGNETIC_VARIATION in present:
        info.magnetic_variation = _signed(
            data.magnetic_variation, data.magnetic_variation_direction, "W"
        )
        info.present |= Field.MAGNETIC_VARIATION


def merge_vtg(data: VTGData, info: NavigationInfo) -> None:
    """Merge speed (km/h), track and magnetic track from VTG."""
    info.source_mask |= SentenceKind.VTG
    present = data.present

    if Field.SPEED in present:
        info.speed = data.speed_kilometers_per_hour
        info.present |= Field.SPEED
    if Field.TRACK in present:
        info.track = data.track
        info.present |= Field.TRACK
    if Field.MAGNETIC_TRACK in present:
        info.magnetic_track = data.magnetic_track
        info.present |= Field.MAGNETIC_TRACK


def merge(
    data: SentenceData, info: NavigationInfo, logger: logging.Logger = logger
) -> SentenceKind:
    """Merge any decoded sentence into ``info``.

    Returns:
        The kind that was merged, or ``SentenceKind.NONE`` when a GSV pack
        was dropped.
    """
    if isinstance(data, GGAData):
        merge_gga(data, info)
        return SentenceKind.GGA
    if isinstance(data, GSAData):
        merge_gsa(data, info)
        return SentenceKind.GSA
    if isinstance(data, GSVData):
        merged = merge_gsv(data, info, logger=logger)
        return SentenceKind.GSV if merged else SentenceKind.NONE
    if isinstance(data, RMCData):
        merge_rmc(data, info)
        return SentenceKind.RMC
    if isinstance(data, VTGData):
        merge_vtg(data, info)
        return SentenceKind.VTG
    raise TypeError(f"cannot merge {type(data).__name__}")
