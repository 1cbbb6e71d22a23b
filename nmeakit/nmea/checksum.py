"""NMEA checksum validation and sentence framing.

NMEA 0183 sentences use a simple XOR checksum for data integrity verification.
The checksum is calculated over all characters between '$' and '*' (exclusive),
then represented as a two-digit uppercase hexadecimal number after the '*'.

Example sentence structure:
    $GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W*6A\\r\\n
    ^                        checksum content                        ^^ ^^^^
    start                                          checksum (0x6A)     tail
"""

import string

# "*hh\r\n"
_TAIL_LENGTH = 5
_HEX_DIGITS = frozenset(string.hexdigits)

INVALID_CHECKSUM = -1


def calculate_checksum(content: str) -> int:
    """Calculate the XOR checksum of a content string.

    Args:
        content: The string between '$' and '*' (exclusive)

    Returns:
        Integer checksum value (0-255)

    Example:
        >>> calculate_checksum("GPGSV,1,1,00")
        121
    """
    result = 0
    for character in content:
        result ^= ord(character)
    return result


def _read_hex(digits: str) -> int | None:
    if len(digits) != 2 or not set(digits) <= _HEX_DIGITS:
        return None
    return int(digits, 16)


def find_tail(buffer: str) -> tuple[int, int]:
    """Find the end of the sentence starting at ``buffer[0]`` and check it.

    ``buffer[0]`` is expected to be the ``$`` start marker; it is not part of
    the checksum. Every following character up to ``*`` is XOR-ed, the two hex
    digits after ``*`` are the declared checksum and must be followed by
    ``\\r\\n``.

    Args:
        buffer: Text that starts at a ``$`` and may extend past the sentence.

    Returns:
        ``(length, checksum)`` where ``length`` counts every character of the
        sentence including ``\\r\\n``. ``(0, INVALID_CHECKSUM)`` when:
        - another ``$`` appears before ``*`` (truncated sentence)
        - the tail is missing or incomplete
        - the declared checksum does not match the computed one

    Example:
        >>> find_tail("$GPGSV,1,1,00*79\\r\\n$GPGGA")
        (18, 121)
    """
    computed = 0
    for index in range(1, len(buffer)):
        character = buffer[index]
        if character == "$":
            return 0, INVALID_CHECKSUM
        if character == "*":
            tail = buffer[index + 1 : index + _TAIL_LENGTH]
            if len(tail) < _TAIL_LENGTH - 1 or tail[2:] != "\r\n":
                return 0, INVALID_CHECKSUM
            declared = _read_hex(tail[:2])
            if declared is None or declared != computed:
                return 0, INVALID_CHECKSUM
            return index + _TAIL_LENGTH, declared
        computed ^= ord(character)
    return 0, INVALID_CHECKSUM


def split_checksum(sentence: str) -> tuple[str, int] | None:
    """Split a stripped sentence into its content and declared checksum.

    Returns:
        ``(content, checksum)`` or None if:
        - Missing '$' start delimiter
        - Missing '*' checksum delimiter
        - Checksum is not exactly 2 hex digits (truncated sentence)

    Example:
        >>> split_checksum("$GPGSV,1,1,00*79")
        ('GPGSV,1,1,00', 121)
    """
    if not sentence.startswith("$") or "*" not in sentence:
        return None

    end = sentence.index("*")
    declared = _read_hex(sentence[end + 1 :])
    if declared is None:
        return None

    return sentence[1:end], declared


def validate_checksum(sentence: str) -> bool:
    """Validate the checksum of an NMEA sentence.

    A sentence without a checksum is never valid.

    Args:
        sentence: Complete NMEA sentence including '$', '*', and checksum.
                  May include trailing whitespace/newlines (will be stripped).

    Returns:
        True if the checksum is present and matches the content.

    Example:
        >>> validate_checksum("$GPGSV,1,1,00*79\\r\\n")
        True
        >>> validate_checksum("$GPGSV,1,1,00*FF")
        False
    """
    parts = split_checksum(sentence.strip())
    if parts is None:
        return False

    content, declared = parts
    return calculate_checksum(content) == declared


def format_sentence(content: str) -> str:
    """Wrap sentence content with the start marker, checksum and tail.

    Example:
        >>> format_sentence("GPGSV,1,1,00")
        '$GPGSV,1,1,00*79\\r\\n'
    """
    return f"${content}*{calculate_checksum(content):02X}\r\n"
