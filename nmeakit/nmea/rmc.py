"""RMC sentence parser and formatter.

RMC (Recommended Minimum Specific GNSS Data) is the minimum data set a GNSS
receiver reports: time, date, position, speed and course, with a status that
says whether the fix can be trusted.

RMC Sentence Format:
    $GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W*6A
           |      | |        | |         | |     |     |      |     | +-- Mode (NMEA 2.3+)
           |      | |        | |         | |     |     |      +-----+-- Magnetic variation + E/W
           |      | |        | |         | |     |     +-- Date (DDMMYY)
           |      | |        | |         | |     +-- Course over ground (degrees true)
           |      | |        | |         | +-- Speed over ground (knots)
           |      | |        | +---------+-- Longitude + E/W
           |      | +--------+-- Latitude + N/S
           |      +-- Status (A = active, V = void)
           +-- UTC time (HHMMSS.ss)

Receivers older than NMEA 2.3 send 11 fields and no mode; such a sentence is
read as mode A (autonomous). A 12-field sentence with an empty mode reads as
mode N (not valid).
"""

import logging

from nmeakit.nmea.fields import (
    FieldError,
    Token,
    format_date,
    format_time,
    parse_date,
    parse_time,
    pick,
    render,
    require_token_count,
    scan,
    validate_hemisphere,
    validate_mode,
)
from nmeakit.nmea.sentence import DEFAULT_TALKER, build_sentence, extract_body
from nmeakit.nmea.types import Field, RMCData, SentenceKind

logger = logging.getLogger(__name__)

_TEMPLATE = (
    Token.STRING,  # time
    Token.CHAR,  # status
    Token.FLOAT,  # latitude
    Token.CHAR,  # N/S
    Token.FLOAT,  # longitude
    Token.CHAR,  # E/W
    Token.FLOAT,  # speed (knots)
    Token.FLOAT,  # track
    Token.INT,  # date
    Token.FLOAT,  # magnetic variation
    Token.CHAR,  # magnetic variation E/W
    Token.CHAR,  # mode
)

# Without the mode indicator
_LEGACY_TOKEN_COUNT = len(_TEMPLATE) - 1

_STATUSES = ("A", "V")


def _build_rmc_data(values: list) -> RMCData:
    count = len(values)
    require_token_count(count, (_LEGACY_TOKEN_COUNT, len(_TEMPLATE)), "RMC")
    values = values + [None] * (len(_TEMPLATE) - count)
    (
        time,
        status,
        latitude,
        north_south,
        longitude,
        east_west,
        speed_knots,
        track,
        date,
        magnetic_variation,
        magnetic_variation_direction,
        mode,
    ) = values

    data = RMCData()

    if date is not None:
        data.date = parse_date(date)
        data.present |= Field.UTC_DATE

    if time is not None:
        data.time = parse_time(time)
        data.present |= Field.UTC_TIME

    data.status = "V" if status is None else status.upper()
    if data.status not in _STATUSES:
        raise FieldError(f"invalid status ({data.status})")

    if latitude is not None:
        data.latitude = latitude
        data.north_south = validate_hemisphere(north_south, True, "N")
        data.present |= Field.LATITUDE

    if longitude is not None:
        data.longitude = longitude
        data.east_west = validate_hemisphere(east_west, False, "E")
        data.present |= Field.LONGITUDE

    if speed_knots is not None:
        data.speed_knots = speed_knots
        data.present |= Field.SPEED

    if track is not None:
        data.track = track
        data.present |= Field.TRACK

    if magnetic_variation is not None:
        data.magnetic_variation = magnetic_variation
        data.magnetic_variation_direction = validate_hemisphere(
            magnetic_variation_direction, False, "E"
        )
        data.present |= Field.MAGNETIC_VARIATION

    if mode is not None:
        data.mode = validate_mode(mode)
    else:
        data.mode = "A" if count == _LEGACY_TOKEN_COUNT else "N"

    return data


def parse_rmc(sentence: str, logger: logging.Logger = logger) -> RMCData | None:
    """Parse an RMC sentence into structured data.

    Args:
        sentence: Raw NMEA RMC sentence
        logger: Receives one WARNING when the sentence is rejected

    Returns:
        RMCData object if parsing succeeds, or None if:
        - The checksum is missing or invalid
        - The sentence has neither 11 nor 12 fields
        - The time, date, status, a hemisphere or the mode is invalid

    Note:
        A returned RMCData with valid=False is a well-formed sentence with
        status V (void); its position must not be trusted.

    Example:
        >>> result = parse_rmc("$GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W*6A")
        >>> result.date
        UTCDate(year=1994, month=3, day=23)
        >>> result.mode
        'A'
    """
    logger.debug("RMC: %s", sentence.strip())
    try:
        body = extract_body(sentence, SentenceKind.RMC)
        return _build_rmc_data(scan(body, _TEMPLATE))
    except FieldError as e:
        logger.warning("RMC rejected: %s", e)
        return None


def format_rmc(data: RMCData, talker: str = DEFAULT_TALKER) -> str:
    """Render an RMC sentence with all 12 fields.

    The mode is written as given; pass ``mode=None`` to leave it empty.
    """
    present = data.present
    latitude = pick(present, Field.LATITUDE, data.latitude)
    longitude = pick(present, Field.LONGITUDE, data.longitude)
    magnetic_variation = pick(present, Field.MAGNETIC_VARIATION, data.magnetic_variation)

    tokens = [
        format_time(pick(present, Field.UTC_TIME, data.time)),
        render(data.status or "V"),
        render(latitude, "09.4f"),
        render(data.north_south if latitude is not None else None),
        render(longitude, "010.4f"),
        render(data.east_west if longitude is not None else None),
        render(pick(present, Field.SPEED, data.speed_knots), "03.1f"),
        render(pick(present, Field.TRACK, data.track), "03.1f"),
        format_date(pick(present, Field.UTC_DATE, data.date)),
        render(magnetic_variation, "03.1f"),
        render(
            data.magnetic_variation_direction
            if magnetic_variation is not None
            else None
        ),
        render(data.mode),
    ]
    return build_sentence(talker, SentenceKind.RMC, tokens)
