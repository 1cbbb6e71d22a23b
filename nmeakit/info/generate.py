"""Project a ``NavigationInfo`` back into NMEA sentences.

Generation is the reverse of parse-and-merge and keeps no state: each
``info_to_*`` function builds the decoded sentence record a receiver would
have sent for the current state, and the matching ``format_*`` function in
``nmeakit.nmea`` renders it. Only fields present in the record are written.

Sentence order for a full epoch is GGA, GSA, GSV (all packs), RMC, VTG.
"""

import logging

from nmeakit.info.types import NavigationInfo
from nmeakit.info.units import degrees_to_nmea, gsv_pack_count, kph_to_knots
from nmeakit.nmea.gga import format_gga
from nmeakit.nmea.gsa import format_gsa
from nmeakit.nmea.gsv import format_gsv
from nmeakit.nmea.rmc import format_rmc
from nmeakit.nmea.sentence import DEFAULT_TALKER
from nmeakit.nmea.types import (
    MAX_SATELLITES,
    SATELLITES_PER_PACK,
    Field,
    GGAData,
    GSAData,
    GSVData,
    RMCData,
    Satellite,
    SentenceKind,
    Signal,
    VTGData,
)
from nmeakit.nmea.vtg import format_vtg

logger = logging.getLogger(__name__)

# Fields each sentence kind can carry
_GGA_FIELDS = (
    Field.UTC_TIME
    | Field.LATITUDE
    | Field.LONGITUDE
    | Field.SIGNAL
    | Field.SATELLITES_IN_USE_COUNT
    | Field.HDOP
    | Field.ELEVATION
)
_GSA_FIELDS = Field.FIX | Field.SATELLITES_IN_USE | Field.PDOP | Field.HDOP | Field.VDOP
_RMC_FIELDS = (
    Field.UTC_DATE
    | Field.UTC_TIME
    | Field.LATITUDE
    | Field.LONGITUDE
    | Field.SPEED
    | Field.TRACK
    | Field.MAGNETIC_VARIATION
)
_VTG_FIELDS = Field.TRACK | Field.MAGNETIC_TRACK | Field.SPEED


def _hemisphere(value: float, positive: str, negative: str) -> tuple[float, str]:
    """Split a signed decimal angle into NMEA degrees and a hemisphere letter."""
    return degrees_to_nmea(abs(value)), positive if value >= 0 else negative


def info_to_gga(info: NavigationInfo) -> GGAData:
    latitude, north_south = _hemisphere(info.latitude, "N", "S")
    longitude, east_west = _hemisphere(info.longitude, "E", "W")
    return GGAData(
        present=info.present & _GGA_FIELDS,
        time=info.time,
        latitude=latitude,
        north_south=north_south,
        longitude=longitude,
        east_west=east_west,
        signal=info.signal,
        num_satellites=info.satellites.in_use_count,
        hdop=info.hdop,
        elevation=info.elevation,
        elevation_units="M",
    )


def info_to_gsa(info: NavigationInfo) -> GSAData:
    # The record does not keep the fix mode; receivers report automatic
    return GSAData(
        present=info.present & _GSA_FIELDS,
        fix_mode="A",
        fix_type=info.fix,
        satellite_prns=list(info.satellites.in_use),
        pdop=info.pdop,
        hdop=info.hdop,
        vdop=info.vdop,
    )


def info_to_gsv(info: NavigationInfo, pack_index: int) -> GSVData:
    """Build pack ``pack_index`` (1-based) of the satellites in view.

    An index past the last pack wraps around.
    """
    sat_count = min(info.satellites.in_view_count, MAX_SATELLITES)
    pack_count = gsv_pack_count(sat_count)
    pack_index = (pack_index - 1) % pack_count + 1

    offset = (pack_index - 1) * SATELLITES_PER_PACK
    satellites = [
        Satellite(
            id=satellite.id,
            elevation=satellite.elevation,
            azimuth=satellite.azimuth,
            snr=satellite.snr,
        )
        for satellite in info.satellites.in_view[offset : offset + SATELLITES_PER_PACK]
    ]

    return GSVData(
        present=info.present & Field.SATELLITES_IN_VIEW,
        pack_count=pack_count,
        pack_index=pack_index,
        sat_count=sat_count,
        satellites=satellites,
    )


def info_to_rmc(info: NavigationInfo) -> RMCData:
    latitude, north_south = _hemisphere(info.latitude, "N", "S")
    longitude, east_west = _hemisphere(info.longitude, "E", "W")

    # Sanitized variation is in [0, 360); above 180 it points west
    variation = info.magnetic_variation
    if variation > 180.0:
        variation -= 360.0

    valid = info.signal > Signal.BAD
    mode = None
    if Field.SIGNAL in info.present:
        mode = "A" if valid else "N"

    return RMCData(
        present=info.present & _RMC_FIELDS,
        time=info.time,
        date=info.date,
        status="A" if valid else "V",
        latitude=latitude,
        north_south=north_south,
        longitude=longitude,
        east_west=east_west,
        speed_knots=kph_to_knots(info.speed),
        track=info.track,
        magnetic_variation=abs(variation),
        magnetic_variation_direction="E" if variation >= 0 else "W",
        mode=mode,
    )


def info_to_vtg(info: NavigationInfo) -> VTGData:
    return VTGData(
        present=info.present & _VTG_FIELDS,
        track=info.track,
        magnetic_track=info.magnetic_track,
        speed_knots=kph_to_knots(info.speed),
        speed_kilometers_per_hour=info.speed,
    )


def generate_gga(info: NavigationInfo, talker: str = DEFAULT_TALKER) -> str:
    return format_gga(info_to_gga(info), talker)


def generate_gsa(info: NavigationInfo, talker: str = DEFAULT_TALKER) -> str:
    return format_gsa(info_to_gsa(info), talker)


def generate_gsv(info: NavigationInfo, talker: str = DEFAULT_TALKER) -> list[str]:
    """Render every GSV pack needed for the satellites in view.

    Example:
        >>> generate_gsv(NavigationInfo(present=Field.SATELLITES_IN_VIEW))
        ['$GPGSV,1,1,00,,,,,,,,,,,,,,,,*79\\r\\n']
    """
    pack_count = gsv_pack_count(min(info.satellites.in_view_count, MAX_SATELLITES))
    return [
        format_gsv(info_to_gsv(info, pack_index), talker)
        for pack_index in range(1, pack_count + 1)
    ]


def generate_rmc(info: NavigationInfo, talker: str = DEFAULT_TALKER) -> str:
    return format_rmc(info_to_rmc(info), talker)


def generate_vtg(info: NavigationInfo, talker: str = DEFAULT_TALKER) -> str:
    return format_vtg(info_to_vtg(info), talker)


def generate(
    info: NavigationInfo,
    kinds: SentenceKind = SentenceKind.ALL,
    size: int | None = None,
    talker: str = DEFAULT_TALKER,
    logger: logging.Logger = logger,
) -> str:
    """Render the requested sentence kinds for ``info`` as one string.

    Args:
        info: The record to render
        kinds: Sentence kinds to write, in GGA, GSA, GSV, RMC, VTG order
        size: Maximum length of the result. Generation stops before the
            first sentence that would not fit.
        talker: Talker ID for every sentence
        logger: Receives a DEBUG line when output is cut short

    Returns:
        Concatenated sentences, each ending with ``\\r\\n``.
    """
    sentences: list[str] = []
    if SentenceKind.GGA in kinds:
        sentences.append(generate_gga(info, talker))
    if SentenceKind.GSA in kinds:
        sentences.append(generate_gsa(info, talker))
    if SentenceKind.GSV in kinds:
        sentences.extend(generate_gsv(info, talker))
    if SentenceKind.RMC in kinds:
        sentences.append(generate_rmc(info, talker))
    if SentenceKind.VTG in kinds:
        sentences.append(generate_vtg(info, talker))

    output = ""
    for sentence in sentences:
        if size is not None and len(output) + len(sentence) > size:
            logger.debug("Output limited to %d characters", size)
            break
        output += sentence
    return output
