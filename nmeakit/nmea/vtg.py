"""VTG sentence parser and formatter.

VTG (Track Made Good and Ground Speed) provides velocity information from GNSS.
This is essential for navigation and sensor fusion applications that need
ground speed and heading data.

VTG Sentence Format:
    $GNVTG,054.7,T,034.4,M,005.5,N,010.2,K,A*3B
           |     | |     | |     | |     | |
           |     | |     | |     | |     | +-- Mode indicator (NMEA 2.3+)
           |     | |     | |     | +-----+-- Speed in km/h
           |     | |     | +-----+-- Speed in knots
           |     | +-----+-- Track (magnetic north, degrees)
           +-----+-- Track (true north, degrees)

Note: When stationary, the track angle may be empty (no heading when not moving).
"""

import logging

from nmeakit.nmea.fields import (
    FieldError,
    Token,
    pick,
    render,
    require_token_count,
    scan,
    validate_mode,
    validate_unit,
)
from nmeakit.nmea.sentence import DEFAULT_TALKER, build_sentence, extract_body
from nmeakit.nmea.types import Field, SentenceKind, VTGData

logger = logging.getLogger(__name__)

# 1 knot = 1.852 km/h (exact, by definition of the nautical mile)
KILOMETERS_PER_HOUR_PER_KNOT = 1.852

_TEMPLATE = (
    Token.FLOAT,  # track
    Token.CHAR,  # T
    Token.FLOAT,  # magnetic track
    Token.CHAR,  # M
    Token.FLOAT,  # speed (knots)
    Token.CHAR,  # N
    Token.FLOAT,  # speed (km/h)
    Token.CHAR,  # K
    Token.CHAR,  # mode
)


def _build_vtg_data(values: list) -> VTGData:
    count = len(values)
    require_token_count(count, (len(_TEMPLATE) - 1, len(_TEMPLATE)), "VTG")
    values = values + [None] * (len(_TEMPLATE) - count)
    (
        track,
        track_unit,
        magnetic_track,
        magnetic_track_unit,
        speed_knots,
        knots_unit,
        speed_kilometers_per_hour,
        kilometers_per_hour_unit,
        mode,
    ) = values

    data = VTGData()

    if track is not None:
        validate_unit(track_unit, "T", "track")
        data.track = track
        data.present |= Field.TRACK

    if magnetic_track is not None:
        validate_unit(magnetic_track_unit, "M", "magnetic track")
        data.magnetic_track = magnetic_track
        data.present |= Field.MAGNETIC_TRACK

    if speed_knots is not None:
        validate_unit(knots_unit, "N", "knots speed")
    if speed_kilometers_per_hour is not None:
        validate_unit(kilometers_per_hour_unit, "K", "kph speed")

    # Either speed is enough; derive the missing one
    if speed_knots is not None and speed_kilometers_per_hour is None:
        speed_kilometers_per_hour = speed_knots * KILOMETERS_PER_HOUR_PER_KNOT
    elif speed_kilometers_per_hour is not None and speed_knots is None:
        speed_knots = speed_kilometers_per_hour / KILOMETERS_PER_HOUR_PER_KNOT

    if speed_knots is not None:
        data.speed_knots = speed_knots
        data.speed_kilometers_per_hour = speed_kilometers_per_hour
        data.present |= Field.SPEED

    if mode is not None:
        data.mode = validate_mode(mode)

    return data


def parse_vtg(sentence: str, logger: logging.Logger = logger) -> VTGData | None:
    """Parse a VTG sentence into structured data.

    Args:
        sentence: Raw NMEA VTG sentence
        logger: Receives one WARNING when the sentence is rejected

    Returns:
        VTGData object if parsing succeeds, or None if:
        - The checksum is missing or invalid
        - The sentence has neither 8 nor 9 fields
        - A unit letter next to a value is wrong
        - The mode indicator is not a known FAA mode

    Note:
        A returned VTGData with valid=False indicates a successfully parsed
        sentence where the mode is 'N' (not valid) or missing. This is
        different from returning None, which indicates a malformed sentence.

    Example:
        >>> result = parse_vtg("$GNVTG,054.7,T,034.4,M,005.5,N,010.2,K,A*3B")
        >>> result.speed_kilometers_per_hour
        10.2
        >>> result.valid
        True
    """
    logger.debug("VTG: %s", sentence.strip())
    try:
        body = extract_body(sentence, SentenceKind.VTG)
        return _build_vtg_data(scan(body, _TEMPLATE))
    except FieldError as e:
        logger.warning("VTG rejected: %s", e)
        return None


def format_vtg(data: VTGData, talker: str = DEFAULT_TALKER) -> str:
    """Render a VTG sentence; the mode field is only written when set.

    Example:
        >>> format_vtg(VTGData(present=Field.TRACK, track=54.7))
        '$GPVTG,54.7,T,,,,,,*1E\\r\\n'
    """
    present = data.present
    track = pick(present, Field.TRACK, data.track)
    magnetic_track = pick(present, Field.MAGNETIC_TRACK, data.magnetic_track)
    has_speed = Field.SPEED in present

    tokens = [
        render(track, "03.1f"),
        "T" if track is not None else "",
        render(magnetic_track, "03.1f"),
        "M" if magnetic_track is not None else "",
        render(data.speed_knots if has_speed else None, "03.1f"),
        "N" if has_speed else "",
        render(data.speed_kilometers_per_hour if has_speed else None, "03.1f"),
        "K" if has_speed else "",
    ]
    if data.mode is not None:
        tokens.append(data.mode)
    return build_sentence(talker, SentenceKind.VTG, tokens)
