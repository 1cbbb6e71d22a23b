"""Byte stream framing for NMEA receivers.

Serial reads return arbitrary chunks: half a sentence, several sentences, or
line noise picked up while the receiver was powering up. ``SentenceFramer``
accumulates those chunks and hands out complete sentences whose checksum
matches, one list per ``feed`` call.

Reading strategy:
    A sentence starts at ``$`` and ends at ``\\r\\n``. Bytes before the first
    ``$`` are dropped. A second ``$`` before the line ending means the first
    sentence was cut short; the framer resynchronizes on the second one. A
    buffer that grows past ``MAX_SENTENCE_LENGTH`` without a line ending is
    discarded.
"""

import logging

from nmeakit.nmea.checksum import find_tail

__all__ = ["MAX_SENTENCE_LENGTH", "SentenceFramer"]

logger = logging.getLogger(__name__)

# NMEA 0183 limits a sentence to 82 characters; some receivers exceed it
MAX_SENTENCE_LENGTH = 128

_START = ord("$")
_END = b"\r\n"


class SentenceFramer:
    """Split a byte stream into checksum-valid NMEA sentences.

    Example:
        >>> framer = SentenceFramer()
        >>> framer.feed(b"noise$GPGSV,1,1,0")
        []
        >>> framer.feed(b"0*79\\r\\n")
        ['$GPGSV,1,1,00*79\\r\\n']

    Args:
        logger: Receives a WARNING for every frame that is dropped.
    """

    def __init__(self, logger: logging.Logger = logger) -> None:
        self._buffer = bytearray()
        self._logger = logger

    def reset(self) -> None:
        """Drop any partial sentence."""
        self._buffer.clear()

    def feed(self, data: bytes) -> list[str]:
        """Append ``data`` and return every sentence it completes."""
        self._buffer += data
        sentences: list[str] = []

        while True:
            start = self._buffer.find(_START)
            if start < 0:
                self._buffer.clear()
                break
            if start > 0:
                del self._buffer[:start]

            end = self._buffer.find(_END)
            restart = self._buffer.find(_START, 1)

            # Truncated sentence: another one starts before this one ends
            if restart > 0 and (end < 0 or restart < end):
                self._logger.warning(
                    "Dropped truncated sentence: %r", bytes(self._buffer[:restart])
                )
                del self._buffer[:restart]
                continue

            if end < 0:
                if len(self._buffer) > MAX_SENTENCE_LENGTH:
                    self._logger.warning(
                        "Dropped %d bytes without a line ending", len(self._buffer)
                    )
                    self._buffer.clear()
                break

            frame = bytes(self._buffer[: end + len(_END)])
            del self._buffer[: end + len(_END)]

            if len(frame) > MAX_SENTENCE_LENGTH:
                self._logger.warning("Dropped %d byte sentence", len(frame))
                continue

            sentence = frame.decode("ascii", errors="replace")
            length, _ = find_tail(sentence)
            if length != len(sentence):
                self._logger.warning("Dropped invalid sentence: %r", frame)
                continue

            sentences.append(sentence)

        return sentences
