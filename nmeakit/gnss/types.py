"""GNSS data types emitted by the reader."""

from dataclasses import dataclass

from nmeakit.info.types import NavigationInfo
from nmeakit.nmea.types import SentenceKind


@dataclass
class GNSSData:
    """A snapshot of the navigation state after one merged sentence.

    ``NMEAReader`` emits one ``GNSSData`` per sentence it merges. The ``info``
    is a sanitized copy, so it stays unchanged while the reader keeps merging
    into its own record.

    Attributes:
        kind: The sentence kind that was just merged.
        info: Sanitized copy of the aggregate record after the merge.

    Example:
        >>> with NMEAReader() as gnss:
        ...     data = gnss.read()
        >>> data.kind
        <SentenceKind.GGA: 1>
        >>> data.info.latitude  # decimal degrees
        48.1173
    """

    kind: SentenceKind
    info: NavigationInfo
