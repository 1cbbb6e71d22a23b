"""NMEA field scanning utilities.

NMEA fields are comma-separated and may be empty (consecutive commas indicate
missing data). ``scan`` converts the fields of a sentence body according to a
template of token types, one entry per field:

    >>> scan("123519,A,,N", (Token.STRING, Token.CHAR, Token.FLOAT, Token.CHAR))
    ['123519', 'A', None, 'N']

An empty field is not an error; it converts to None so that callers can
distinguish "no data" from "zero value". Scanning stops at the first malformed
field (or when either the body or the template runs out), so the length of the
result is the number of fields converted. Each sentence parser compares that
count with the count its sentence kind requires.

The helpers below the scanner validate the composite values that several
sentence kinds share (times, dates, hemisphere letters, mode letters) and
raise ``FieldError`` on invalid data. The rendering helpers at the end go the
other way, turning values back into field text for the sentence formatters.
"""

import enum
import re
from collections.abc import Sequence
from typing import TypeVar

from nmeakit.nmea.types import Field, UTCDate, UTCTime

_T = TypeVar("_T")

_INTEGER_PATTERN = re.compile(r"[+-]?\d+")
_FLOAT_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)")

# hhmmss, hhmmss.s, hhmmss.ss or hhmmss.sss
_TIME_PATTERN = re.compile(r"(\d{2})(\d{2})(\d{2})(?:\.(\d{1,3}))?")

# DDMMYY: years before this pivot belong to the 2000s
_CENTURY_PIVOT = 90

# FAA mode indicators (NMEA 2.3+, extended in 4.x)
#   A = Autonomous          D = Differential      E = Estimated (dead reckoning)
#   F = Float RTK           M = Manual input      N = Not valid
#   P = Precise             R = RTK fixed         S = Simulator
VALID_MODES = frozenset("ADEFMNPRS")


class FieldError(ValueError):
    """A sentence failed structural or domain validation."""


class Token(enum.Enum):
    """Token types understood by ``scan``."""

    INT = "d"
    FLOAT = "f"
    CHAR = "c"
    STRING = "s"


def _to_int(value: str) -> int:
    if not _INTEGER_PATTERN.fullmatch(value):
        raise ValueError(value)
    return int(value)


def _to_float(value: str) -> float:
    if not _FLOAT_PATTERN.fullmatch(value):
        raise ValueError(value)
    return float(value)


def _to_char(value: str) -> str:
    if len(value) != 1:
        raise ValueError(value)
    return value


_CONVERTERS = {
    Token.INT: _to_int,
    Token.FLOAT: _to_float,
    Token.CHAR: _to_char,
    Token.STRING: str,
}


def scan(body: str, template: Sequence[Token]) -> list[int | float | str | None]:
    """Convert the comma-separated fields of ``body`` following ``template``.

    Args:
        body: Sentence fields after the header, without the checksum
            (e.g. ``"123519,A,4807.038,N"``)
        template: Expected token type of each field, in order

    Returns:
        Converted values, None for empty fields. Shorter than ``template``
        when the body has fewer fields or a field is malformed.

    Raises:
        FieldError: The body has more fields than ``template``.
    """
    fields = body.split(",")
    if len(fields) > len(template):
        raise FieldError(f"{len(fields)} fields, expected at most {len(template)}")

    values: list[int | float | str | None] = []
    for token, raw in zip(template, fields):
        if not raw:
            values.append(None)
            continue
        try:
            values.append(_CONVERTERS[token](raw))
        except ValueError:
            break
    return values


def parse_time(value: str) -> UTCTime:
    """Parse a UTC time field into a validated ``UTCTime``.

    The format is chosen by the length of the field. Fractions are scaled to
    hundredths: one digit is multiplied by 10, three digits are truncated.

    Raises:
        FieldError: Unknown format, or a component out of range.

    Example:
        >>> parse_time("123519.5")
        UTCTime(hour=12, minute=35, second=19, hundredths=50)
    """
    match = _TIME_PATTERN.fullmatch(value)
    if match is None:
        raise FieldError(f"invalid time format in {value!r}")

    hour, minute, second = (int(group) for group in match.group(1, 2, 3))
    fraction = match.group(4) or ""
    hundredths = int((fraction + "00")[:2])

    # Leap seconds are reported as second 60
    if not (0 <= hour < 24 and 0 <= minute < 60 and 0 <= second <= 60):
        raise FieldError(f"invalid time ({value})")

    return UTCTime(hour=hour, minute=minute, second=second, hundredths=hundredths)


def parse_date(value: int) -> UTCDate:
    """Split a DDMMYY integer into a validated ``UTCDate``.

    Raises:
        FieldError: Month or day out of range.

    Example:
        >>> parse_date(230394)
        UTCDate(year=1994, month=3, day=23)
    """
    day, month, year = value // 10000, value // 100 % 100, value % 100
    year += 2000 if year < _CENTURY_PIVOT else 1900

    if not (0 <= value <= 999999 and 1 <= month <= 12 and 1 <= day <= 31):
        raise FieldError(f"invalid date ({value:06d})")

    return UTCDate(year=year, month=month, day=day)


def validate_hemisphere(letter: str | None, north_south: bool, default: str) -> str:
    """Upper-case and validate a hemisphere letter.

    A missing letter is replaced by ``default``; the value next to it was
    present, so the only legal reading is the default hemisphere.

    Args:
        letter: The scanned letter, or None if the field was empty
        north_south: True to expect N/S, False to expect E/W
        default: Letter to use when ``letter`` is None

    Raises:
        FieldError: The letter is not a valid hemisphere.
    """
    if letter is None:
        return default

    letter = letter.upper()
    allowed = "NS" if north_south else "EW"
    if letter not in allowed:
        kind = "north/south" if north_south else "east/west"
        raise FieldError(f"invalid {kind} ({letter})")
    return letter


def validate_mode(letter: str) -> str:
    """Upper-case and validate an FAA mode indicator."""
    letter = letter.upper()
    if letter not in VALID_MODES:
        raise FieldError(f"invalid mode ({letter})")
    return letter


def validate_unit(letter: str | None, expected: str, name: str) -> str:
    """Upper-case and validate a unit letter, defaulting it when missing."""
    if letter is None:
        return expected

    letter = letter.upper()
    if letter != expected:
        raise FieldError(f"invalid {name} unit, got {letter}, expected {expected}")
    return letter


def require_token_count(count: int, expected: Sequence[int], kind: str) -> None:
    """Raise ``FieldError`` unless ``count`` is one of ``expected``."""
    if count not in expected:
        need = " or ".join(str(value) for value in expected)
        raise FieldError(f"{kind} parse error, need {need} tokens, got {count}")


def pick(present: Field, flag: Field, value: _T) -> _T | None:
    """Return ``value`` when ``flag`` is in ``present``, otherwise None."""
    return value if flag in present else None


def render(value: int | float | str | None, spec: str = "") -> str:
    """Render a field value, or an empty field for None.

    Example:
        >>> render(4807.038, "09.4f")
        '4807.0380'
        >>> render(None, "03.1f")
        ''
    """
    if value is None:
        return ""
    return format(value, spec)


def format_time(time: UTCTime | None) -> str:
    """Render a time as ``hhmmss.hh``, or an empty field."""
    if time is None:
        return ""
    return f"{time.hour:02d}{time.minute:02d}{time.second:02d}.{time.hundredths:02d}"


def format_date(date: UTCDate | None) -> str:
    """Render a date as ``DDMMYY``, or an empty field."""
    if date is None:
        return ""
    return f"{date.day:02d}{date.month:02d}{date.year % 100:02d}"
