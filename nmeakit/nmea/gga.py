"""GGA sentence parser and formatter.

GGA (Global Positioning System Fix Data) is one of the most important NMEA
sentences, providing position fix information including coordinates, altitude,
fix quality, and satellite/accuracy metrics.

GGA Sentence Format:
    $GNGGA,123519.00,4807.038,N,01131.000,E,1,08,0.9,545.4,M,47.0,M,,*7F
           |         |        | |         | | |  |   |     | |     | ||
           |         |        | |         | | |  |   |     | |     | |+-- DGPS station
           |         |        | |         | | |  |   |     | |     | +-- DGPS age
           |         |        | |         | | |  |   |     | +-----+-- Geoid height
           |         |        | |         | | |  |   +-----+-- Altitude above MSL
           |         |        | |         | | |  +-- HDOP (horizontal dilution)
           |         |        | |         | | +-- Number of satellites
           |         |        | |         | +-- Fix quality (0-8)
           |         |        | +---------+-- Longitude + E/W
           |         +--------+-- Latitude + N/S
           +-- UTC time (HHMMSS.ss)

The geoid and DGPS fields are parsed for completeness but carry no presence
flag; nothing downstream uses them.
"""

import logging

from nmeakit.nmea.fields import (
    FieldError,
    Token,
    format_time,
    parse_time,
    pick,
    render,
    require_token_count,
    scan,
    validate_hemisphere,
    validate_unit,
)
from nmeakit.nmea.sentence import DEFAULT_TALKER, build_sentence, extract_body
from nmeakit.nmea.types import Field, GGAData, SentenceKind, Signal

logger = logging.getLogger(__name__)

_TEMPLATE = (
    Token.STRING,  # time
    Token.FLOAT,  # latitude
    Token.CHAR,  # N/S
    Token.FLOAT,  # longitude
    Token.CHAR,  # E/W
    Token.INT,  # fix quality
    Token.INT,  # satellites in use
    Token.FLOAT,  # HDOP
    Token.FLOAT,  # elevation
    Token.CHAR,  # elevation units
    Token.FLOAT,  # geoid separation
    Token.CHAR,  # geoid separation units
    Token.FLOAT,  # DGPS age
    Token.INT,  # DGPS station
)


def _build_gga_data(values: list) -> GGAData:
    """Validate scanned values and collect them with their presence flags."""
    require_token_count(len(values), (len(_TEMPLATE),), "GGA")
    (
        time,
        latitude,
        north_south,
        longitude,
        east_west,
        signal,
        num_satellites,
        hdop,
        elevation,
        elevation_units,
        geoid_separation,
        geoid_separation_units,
        dgps_age,
        dgps_station_id,
    ) = values

    data = GGAData(
        geoid_separation=geoid_separation,
        geoid_separation_units=geoid_separation_units,
        dgps_age=dgps_age,
        dgps_station_id=dgps_station_id,
    )

    if time is not None:
        data.time = parse_time(time)
        data.present |= Field.UTC_TIME

    if latitude is not None:
        data.latitude = latitude
        data.north_south = validate_hemisphere(north_south, True, "N")
        data.present |= Field.LATITUDE

    if longitude is not None:
        data.longitude = longitude
        data.east_west = validate_hemisphere(east_west, False, "E")
        data.present |= Field.LONGITUDE

    if signal is not None:
        try:
            data.signal = Signal(signal)
        except ValueError:
            raise FieldError(f"invalid signal ({signal})") from None
        data.present |= Field.SIGNAL

    if num_satellites is not None:
        data.num_satellites = num_satellites
        data.present |= Field.SATELLITES_IN_USE_COUNT

    if hdop is not None:
        data.hdop = hdop
        data.present |= Field.HDOP

    if elevation is not None:
        data.elevation = elevation
        data.elevation_units = validate_unit(elevation_units, "M", "elevation")
        data.present |= Field.ELEVATION

    return data


def parse_gga(sentence: str, logger: logging.Logger = logger) -> GGAData | None:
    """Parse a GGA sentence into structured data.

    Args:
        sentence: Raw NMEA GGA sentence, ``$...*hh`` with optional line ending
        logger: Receives one WARNING when the sentence is rejected

    Returns:
        GGAData object if parsing succeeds, or None if:
        - The checksum is missing or invalid
        - The sentence does not have exactly 14 fields
        - Message type is not GGA
        - Any field fails validation

    Note:
        A returned GGAData with valid=False indicates a successfully parsed
        sentence that has no GPS fix (signal 0). This is different from
        returning None, which indicates a malformed sentence.

    Example:
        >>> result = parse_gga("$GNGGA,123519.00,4807.038,N,01131.000,E,1,08,0.9,545.4,M,47.0,M,,*7F")
        >>> result.latitude
        4807.038
        >>> result.valid
        True
    """
    logger.debug("GGA: %s", sentence.strip())
    try:
        body = extract_body(sentence, SentenceKind.GGA)
        return _build_gga_data(scan(body, _TEMPLATE))
    except FieldError as e:
        logger.warning("GGA rejected: %s", e)
        return None


def format_gga(data: GGAData, talker: str = DEFAULT_TALKER) -> str:
    """Render a GGA sentence; fields without a presence flag are left empty.

    Example:
        >>> format_gga(GGAData())
        '$GPGGA,,,,,,,,,,,,,,*56\\r\\n'
    """
    present = data.present
    latitude = pick(present, Field.LATITUDE, data.latitude)
    longitude = pick(present, Field.LONGITUDE, data.longitude)
    elevation = pick(present, Field.ELEVATION, data.elevation)
    signal = pick(present, Field.SIGNAL, data.signal)

    tokens = [
        format_time(pick(present, Field.UTC_TIME, data.time)),
        render(latitude, "09.4f"),
        render(data.north_south if latitude is not None else None),
        render(longitude, "010.4f"),
        render(data.east_west if longitude is not None else None),
        render(None if signal is None else int(signal), "d"),
        render(pick(present, Field.SATELLITES_IN_USE_COUNT, data.num_satellites), "02d"),
        render(pick(present, Field.HDOP, data.hdop), "03.1f"),
        render(elevation, "03.1f"),
        "M" if elevation is not None else "",
        "",
        "",
        "",
        "",
    ]
    return build_sentence(talker, SentenceKind.GGA, tokens)
