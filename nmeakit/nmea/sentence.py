"""Sentence header classification and body extraction.

Every sentence starts with a 5-character header: a 2-character talker ID that
identifies the satellite system, followed by the 3-character sentence type.

    $GPRMC,123519,A,...*6A
     ^^^^^
     |  +-- sentence type (RMC)
     +-- talker ID (GP)
"""

from nmeakit.nmea.checksum import calculate_checksum, format_sentence, split_checksum
from nmeakit.nmea.fields import FieldError
from nmeakit.nmea.types import SentenceKind

# Supported NMEA talker IDs for multi-constellation GNSS receivers.
# Each 2-character prefix identifies the satellite system:
#   GP = GPS (USA)
#   GN = Multi-GNSS (combined solution)
#   GL = GLONASS (Russia)
#   GA = Galileo (Europe)
#   GB = BeiDou (China)
#   GQ = QZSS (Japan)
VALID_TALKER_IDS = ("GP", "GN", "GL", "GA", "GB", "GQ")

DEFAULT_TALKER = "GP"

HEADER_LENGTH = 5

_SENTENCE_TYPES = {
    "GGA": SentenceKind.GGA,
    "GSA": SentenceKind.GSA,
    "GSV": SentenceKind.GSV,
    "RMC": SentenceKind.RMC,
    "VTG": SentenceKind.VTG,
}


def classify(header: str) -> SentenceKind:
    """Identify the sentence kind from the start of a sentence.

    Only the first 5 characters are compared, case-sensitively. A leading
    ``$`` is skipped so that both ``"GPGGA"`` and a full sentence work.

    Returns:
        The sentence kind, or ``SentenceKind.NONE`` for unknown headers.

    Example:
        >>> classify("GNGGA")
        <SentenceKind.GGA: 1>
        >>> classify("GPZDA")
        <SentenceKind.NONE: 0>
    """
    if header.startswith("$"):
        header = header[1:]

    if len(header) < HEADER_LENGTH:
        return SentenceKind.NONE

    talker_id = header[:2]
    if talker_id not in VALID_TALKER_IDS:
        return SentenceKind.NONE

    return _SENTENCE_TYPES.get(header[2:HEADER_LENGTH], SentenceKind.NONE)


def extract_body(sentence: str, kind: SentenceKind) -> str:
    """Validate a full sentence and return the fields after its header.

    Args:
        sentence: ``$...*hh`` with optional surrounding whitespace
        kind: The sentence kind the caller expects

    Returns:
        Comma-separated fields after the header, e.g. ``"123519,A,..."``.

    Raises:
        FieldError: Missing or wrong checksum, or a header of another kind.
    """
    parts = split_checksum(sentence.strip())
    if parts is None:
        raise FieldError("missing checksum")

    content, declared = parts
    computed = calculate_checksum(content)
    if computed != declared:
        raise FieldError(
            f"checksum mismatch, got {declared:02X}, expected {computed:02X}"
        )

    separator = content[HEADER_LENGTH : HEADER_LENGTH + 1]
    if classify(content) != kind or separator not in ("", ","):
        raise FieldError(f"not a {kind.name} sentence ({content[:HEADER_LENGTH]})")

    # "GPRMC" alone has no fields, "GPRMC,..." does
    return content[HEADER_LENGTH + 1 :]


def build_sentence(talker: str, kind: SentenceKind, tokens: list[str]) -> str:
    """Join rendered tokens into a complete sentence with checksum and tail.

    Example:
        >>> build_sentence("GP", SentenceKind.GSV, ["1", "1", "00"])
        '$GPGSV,1,1,00*79\\r\\n'
    """
    content = ",".join([f"{talker}{kind.name}", *tokens])
    return format_sentence(content)
