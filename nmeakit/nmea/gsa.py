"""GSA sentence parser and formatter.

GSA (GNSS DOP and Active Satellites) reports the fix type, the satellites used
in the navigation solution and the dilution of precision values.

GSA Sentence Format:
    $GPGSA,A,3,04,05,,09,12,,,24,,,,,2.5,1.3,2.1*39
           | | |                       | |   |
           | | |                       | |   +-- VDOP
           | | |                       | +-- HDOP
           | | |                       +-- PDOP
           | | +-- 12 PRN slots of satellites used in the fix
           | +-- Fix type (1 = none, 2 = 2D, 3 = 3D)
           +-- Mode (A = automatic 2D/3D, M = manual)
"""

import logging

from nmeakit.nmea.fields import (
    FieldError,
    Token,
    pick,
    render,
    require_token_count,
    scan,
)
from nmeakit.nmea.sentence import DEFAULT_TALKER, build_sentence, extract_body
from nmeakit.nmea.types import MAX_SATELLITES, Field, Fix, GSAData, SentenceKind

logger = logging.getLogger(__name__)

_TEMPLATE = (
    (Token.CHAR, Token.INT)
    + (Token.INT,) * MAX_SATELLITES
    + (Token.FLOAT, Token.FLOAT, Token.FLOAT)
)

_FIX_MODES = ("A", "M")


def _build_gsa_data(values: list) -> GSAData:
    require_token_count(len(values), (len(_TEMPLATE),), "GSA")
    fix_mode, fix_type = values[0], values[1]
    prns = values[2 : 2 + MAX_SATELLITES]
    pdop, hdop, vdop = values[2 + MAX_SATELLITES :]

    data = GSAData()

    if fix_mode is not None:
        fix_mode = fix_mode.upper()
        if fix_mode not in _FIX_MODES:
            raise FieldError(f"invalid fix mode ({fix_mode})")
        data.fix_mode = fix_mode

    if fix_type is not None:
        try:
            data.fix_type = Fix(fix_type)
        except ValueError:
            raise FieldError(f"invalid fix type ({fix_type})") from None
        data.present |= Field.FIX

    for index, prn in enumerate(prns):
        if prn is None:
            continue
        if prn < 0:
            raise FieldError(f"invalid satellite PRN ({prn})")
        data.satellite_prns[index] = prn
    if any(data.satellite_prns):
        data.present |= Field.SATELLITES_IN_USE

    for flag, name, value in (
        (Field.PDOP, "pdop", pdop),
        (Field.HDOP, "hdop", hdop),
        (Field.VDOP, "vdop", vdop),
    ):
        if value is not None:
            setattr(data, name, value)
            data.present |= flag

    return data


def parse_gsa(sentence: str, logger: logging.Logger = logger) -> GSAData | None:
    """Parse a GSA sentence into structured data.

    Args:
        sentence: Raw NMEA GSA sentence
        logger: Receives one WARNING when the sentence is rejected

    Returns:
        GSAData, or None when the checksum is bad, the sentence does not have
        exactly 17 fields, the fix mode is not A/M or the fix type is not 1-3.
    """
    logger.debug("GSA: %s", sentence.strip())
    try:
        body = extract_body(sentence, SentenceKind.GSA)
        return _build_gsa_data(scan(body, _TEMPLATE))
    except FieldError as e:
        logger.warning("GSA rejected: %s", e)
        return None


def format_gsa(data: GSAData, talker: str = DEFAULT_TALKER) -> str:
    """Render a GSA sentence.

    The mode and fix type are written together when the fix is present. PRN
    slots are written only when satellites in use are present; empty slots
    stay empty.
    """
    present = data.present
    fix_type = pick(present, Field.FIX, data.fix_type)
    in_use = Field.SATELLITES_IN_USE in present

    tokens = [
        render(data.fix_mode if fix_type is not None else None),
        render(None if fix_type is None else int(fix_type), "d"),
    ]
    tokens += [render(prn if in_use and prn else None, "d") for prn in data.satellite_prns]
    tokens += [
        render(pick(present, Field.PDOP, data.pdop), "03.1f"),
        render(pick(present, Field.HDOP, data.hdop), "03.1f"),
        render(pick(present, Field.VDOP, data.vdop), "03.1f"),
    ]
    return build_sentence(talker, SentenceKind.GSA, tokens)
