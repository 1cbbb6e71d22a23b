"""NMEA 0183 stream parser feeding a ``NavigationInfo``.

``parse_sentence`` handles one complete sentence: classify, parse, merge.
``NMEAParser`` adds framing on top so that raw receiver bytes can be fed in
chunks of any size.
"""

import logging
from collections.abc import Callable

from nmeakit.info.merge import merge
from nmeakit.info.types import NavigationInfo
from nmeakit.nmea.framer import SentenceFramer
from nmeakit.nmea.gga import parse_gga
from nmeakit.nmea.gsa import parse_gsa
from nmeakit.nmea.gsv import parse_gsv
from nmeakit.nmea.rmc import parse_rmc
from nmeakit.nmea.sentence import classify
from nmeakit.nmea.types import SentenceData, SentenceKind
from nmeakit.nmea.vtg import parse_vtg

__all__ = ["NMEAParser", "parse_sentence"]

logger = logging.getLogger(__name__)

_PARSERS: dict[SentenceKind, Callable[..., SentenceData | None]] = {
    SentenceKind.GGA: parse_gga,
    SentenceKind.GSA: parse_gsa,
    SentenceKind.GSV: parse_gsv,
    SentenceKind.RMC: parse_rmc,
    SentenceKind.VTG: parse_vtg,
}


def parse_sentence(
    sentence: str, info: NavigationInfo, logger: logging.Logger = logger
) -> SentenceKind:
    """Parse one sentence and merge it into ``info``.

    Args:
        sentence: Complete sentence, ``$...*hh`` with optional line ending
        info: Record to update in place
        logger: Receives the parse and merge diagnostics

    Returns:
        The kind that was merged, or ``SentenceKind.NONE`` when the sentence
        is of an unsupported kind or was rejected. ``info`` is untouched in
        that case.

    Example:
        >>> info = NavigationInfo()
        >>> parse_sentence("$GNVTG,054.7,T,034.4,M,005.5,N,010.2,K,A*3B", info)
        <SentenceKind.VTG: 16>
        >>> info.speed
        10.2
    """
    kind = classify(sentence.lstrip())
    parser = _PARSERS.get(kind)
    if parser is None:
        logger.debug("Skipped unsupported sentence: %s", sentence.strip())
        return SentenceKind.NONE

    data = parser(sentence, logger=logger)
    if data is None:
        return SentenceKind.NONE

    return merge(data, info, logger=logger)


class NMEAParser:
    """Incremental parser from receiver bytes to a ``NavigationInfo``.

    Example:
        >>> parser = NMEAParser()
        >>> info = NavigationInfo()
        >>> parser.parse(b"$GNVTG,054.7,T,034.4,M,005.5,N,010.2,K,A*3B\\r\\n", info)
        1

    Args:
        logger: Receives framing, parse and merge diagnostics.
    """

    def __init__(self, logger: logging.Logger = logger) -> None:
        self._logger = logger
        self._framer = SentenceFramer(logger=logger)

    def reset(self) -> None:
        """Drop any buffered partial sentence."""
        self._framer.reset()

    def feed(self, data: bytes) -> list[str]:
        """Frame ``data`` and return the complete, checksum-valid sentences."""
        return self._framer.feed(data)

    def parse_sentence(self, sentence: str, info: NavigationInfo) -> SentenceKind:
        """Parse and merge one complete sentence; see ``parse_sentence``."""
        return parse_sentence(sentence, info, logger=self._logger)

    def parse(self, data: bytes, info: NavigationInfo) -> int:
        """Feed ``data`` and merge every sentence it completes into ``info``.

        Returns:
            Number of sentences merged.
        """
        merged = 0
        for sentence in self.feed(data):
            if self.parse_sentence(sentence, info) != SentenceKind.NONE:
                merged += 1
        return merged
