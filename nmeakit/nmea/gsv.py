"""GSV sentence parser and formatter.

GSV (GNSS Satellites in View) describes up to 4 satellites per sentence. A
receiver sends a round of 1 to 3 sentences ("packs") to describe all the
satellites it can see; each one repeats the round size and total count.

GSV Sentence Format:
    $GPGSV,2,1,08,01,40,083,46,02,17,308,41,12,07,344,39,14,22,228,45*75
           | | |  |  |  |   |  +-- ... three more satellites
           | | |  |  |  |   +-- SNR (dB-Hz, empty when not tracked)
           | | |  |  |  +-- Azimuth (degrees true)
           | | |  |  +-- Elevation (degrees)
           | | |  +-- Satellite PRN
           | | +-- Total satellites in view
           | +-- Index of this sentence (1-based)
           +-- Number of sentences in the round

Each pack is parsed on its own; reassembling a round into one satellite table
happens when the packs are merged into a ``NavigationInfo``.
"""

import logging

from nmeakit.nmea.fields import (
    FieldError,
    Token,
    render,
    scan,
)
from nmeakit.nmea.sentence import DEFAULT_TALKER, build_sentence, extract_body
from nmeakit.nmea.types import (
    MAX_PACKS,
    MAX_SATELLITES,
    SATELLITES_PER_PACK,
    Field,
    GSVData,
    Satellite,
    SentenceKind,
)

logger = logging.getLogger(__name__)

_HEADER_TOKENS = 3
_SATELLITE_TOKENS = 4

_TEMPLATE = (Token.INT,) * (_HEADER_TOKENS + _SATELLITE_TOKENS * SATELLITES_PER_PACK)


def _build_satellite(values: list) -> Satellite:
    """Validate the 4 values of one satellite slot.

    Missing elevation, azimuth or SNR read as 0. A slot whose id is missing or
    0 is an empty slot.
    """
    values = values + [None] * (_SATELLITE_TOKENS - len(values))
    prn, elevation, azimuth, snr = (value or 0 for value in values)

    if prn < 0:
        raise FieldError(f"invalid satellite id ({prn})")
    if prn == 0:
        return Satellite()

    if not -180 <= elevation <= 180:
        raise FieldError(f"invalid satellite elevation ({elevation})")
    if not 0 <= azimuth < 360:
        raise FieldError(f"invalid satellite azimuth ({azimuth})")
    if not 0 <= snr <= 99:
        raise FieldError(f"invalid satellite signal ({snr})")

    return Satellite(id=prn, elevation=elevation, azimuth=azimuth, snr=snr)


def _build_gsv_data(values: list) -> GSVData:
    count = len(values)
    if count < _HEADER_TOKENS or None in values[:_HEADER_TOKENS]:
        raise FieldError(f"GSV parse error, incomplete header ({count} tokens)")

    pack_count, pack_index, sat_count = values[:_HEADER_TOKENS]
    if not 1 <= pack_count <= MAX_PACKS:
        raise FieldError(f"invalid pack count ({pack_count})")
    if not 1 <= pack_index <= pack_count:
        raise FieldError(f"invalid pack index ({pack_index} of {pack_count})")
    if not 0 <= sat_count <= MAX_SATELLITES:
        raise FieldError(f"invalid satellite count ({sat_count})")

    satellites = []
    for slot in range(SATELLITES_PER_PACK):
        start = _HEADER_TOKENS + slot * _SATELLITE_TOKENS
        satellites.append(_build_satellite(values[start : start + _SATELLITE_TOKENS]))

    # Every described satellite must have all 4 of its fields
    described = sum(1 for satellite in satellites if satellite.id)
    if count < _HEADER_TOKENS + _SATELLITE_TOKENS * described:
        raise FieldError(
            f"GSV parse error, {described} satellites need "
            f"{_HEADER_TOKENS + _SATELLITE_TOKENS * described} tokens, got {count}"
        )

    return GSVData(
        present=Field.SATELLITES_IN_VIEW,
        pack_count=pack_count,
        pack_index=pack_index,
        sat_count=sat_count,
        satellites=satellites,
    )


def parse_gsv(sentence: str, logger: logging.Logger = logger) -> GSVData | None:
    """Parse one GSV sentence into structured data.

    Args:
        sentence: Raw NMEA GSV sentence
        logger: Receives one WARNING when the sentence is rejected

    Returns:
        GSVData with exactly 4 satellite slots, or None when the checksum is
        bad, the header numbers are inconsistent, a satellite value is out of
        range or a described satellite is missing fields.

    Example:
        >>> data = parse_gsv("$GPGSV,1,1,01,07,79,048,42*4B")
        >>> data.satellites[0]
        Satellite(id=7, elevation=79, azimuth=48, snr=42, in_use=False)
    """
    logger.debug("GSV: %s", sentence.strip())
    try:
        body = extract_body(sentence, SentenceKind.GSV)
        return _build_gsv_data(scan(body, _TEMPLATE))
    except FieldError as e:
        logger.warning("GSV rejected: %s", e)
        return None


def format_gsv(data: GSVData, talker: str = DEFAULT_TALKER) -> str:
    """Render one GSV sentence.

    The header numbers are always written, followed by 4 satellite slots.
    Satellites with an id are written as ``id,elevation,azimuth,snr``; empty
    slots, and every slot when ``SATELLITES_IN_VIEW`` is absent, become 4
    empty fields.
    """
    tokens = [
        render(data.pack_count, "d"),
        render(data.pack_index, "d"),
        render(data.sat_count, "02d"),
    ]
    satellites = []
    if Field.SATELLITES_IN_VIEW in data.present:
        satellites = data.satellites[:SATELLITES_PER_PACK]
    satellites = satellites + [Satellite()] * (SATELLITES_PER_PACK - len(satellites))

    for satellite in satellites:
        if satellite.id:
            tokens += [
                render(satellite.id, "02d"),
                render(satellite.elevation, "02d"),
                render(satellite.azimuth, "03d"),
                render(satellite.snr, "02d"),
            ]
        else:
            tokens += [""] * _SATELLITE_TOKENS
    return build_sentence(talker, SentenceKind.GSV, tokens)
