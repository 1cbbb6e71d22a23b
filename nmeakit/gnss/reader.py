"""NMEAReader: NMEA 0183 reader for serial GNSS receivers and capture files.

Opens the receiver's serial port with pyserial, or wraps any binary stream
(an open capture file, a pipe), and folds every sentence it reads into one
``NavigationInfo``.

Reading strategy:
    Lines are read with ``readline()``. On a serial port an empty read is a
    timeout and the read is retried; on any other stream it is the end of the
    stream. Bytes go through a ``NMEAParser``, so partial lines and line noise
    are handled by its framer. Every sentence that merges produces one
    ``GNSSData`` holding a sanitized copy of the record.
"""

import collections
import contextlib
import copy
import logging
from collections.abc import Iterator
from types import TracebackType
from typing import IO

import serial

from nmeakit.gnss.types import GNSSData
from nmeakit.info.sanitize import sanitize
from nmeakit.info.types import NavigationInfo
from nmeakit.nmea.types import SentenceKind
from nmeakit.nmea_parser import NMEAParser

__all__ = ["NMEAReader"]

logger = logging.getLogger(__name__)

# --- serial port defaults -----------------------------------------------------

DEFAULT_PORT = "/dev/ttyACM0"
DEFAULT_BAUDRATE = 9600
DEFAULT_TIMEOUT = 2.0  # serial read timeout; determines maximum cancel() latency


class NMEAReader:
    """Context manager for reading navigation state from an NMEA stream.

    Two consumption patterns are supported:

    Continuous iteration (recommended for long-running consumers)::

        with NMEAReader("/dev/ttyUSB0", baudrate=115200) as gnss:
            for data in gnss:
                process(data)

    Single read (useful for one-shot or polling scenarios)::

        with NMEAReader(stream=open("capture.nmea", "rb")) as gnss:
            data = gnss.read()

    Args:
        port: Serial device (default: ``"/dev/ttyACM0"``). Ignored when
            ``stream`` is given.
        baudrate: Serial baud rate (default: ``9600``).
        timeout: Serial read timeout in seconds (default: ``2.0``).
        stream: Binary stream to read instead of a serial port. The caller
            keeps ownership; it is not closed on exit.
        logger: Receives framing, parse and merge diagnostics.
    """

    def __init__(
        self,
        port: str = DEFAULT_PORT,
        baudrate: int = DEFAULT_BAUDRATE,
        timeout: float = DEFAULT_TIMEOUT,
        stream: IO[bytes] | None = None,
        logger: logging.Logger = logger,
    ) -> None:
        """Store connection parameters; the port is opened in ``__enter__``."""
        self._port = port
        self._baudrate = baudrate
        self._timeout = timeout
        self._external_stream = stream
        self._logger = logger
        self._serial: serial.Serial | None = None
        self._stream: IO[bytes] | None = None
        self._cancelled = False
        self._parser = NMEAParser(logger=logger)
        self._info = NavigationInfo()
        self._pending: collections.deque[GNSSData] = collections.deque()

    @property
    def info(self) -> NavigationInfo:
        """The live aggregate record; mutated by every ``read()``."""
        return self._info

    def __enter__(self) -> "NMEAReader":
        """Open the serial port (unless a stream was given) and reset state."""
        if self._external_stream is None:
            self._serial = serial.Serial(
                port=self._port, baudrate=self._baudrate, timeout=self._timeout
            )
            self._stream = self._serial
        else:
            self._stream = self._external_stream
        self._cancelled = False
        self._parser.reset()
        self._info.reset()
        self._pending.clear()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Close the serial port if this reader opened it."""
        if self._serial is not None:
            self._serial.close()
            self._serial = None
        self._stream = None

    def cancel(self) -> None:
        """Cancel pending blocking reads gracefully.

        Sets the cancellation flag and interrupts an in-progress serial read,
        so that the next ``read()`` raises ``EOFError`` instead of waiting for
        the next timeout cycle.
        """
        self._cancelled = True
        if self._serial is not None:
            with contextlib.suppress(serial.SerialException, OSError):
                self._serial.cancel_read()

    def _read_line(self, stream: IO[bytes]) -> bytes | None:
        """Read one raw line; returns ``None`` on a serial timeout.

        Raises:
            EOFError: If cancelled, or the stream ended or failed.
        """
        try:
            raw: bytes = stream.readline()
        except (serial.SerialException, OSError) as e:
            raise EOFError("NMEA stream closed.") from e

        if self._cancelled:
            raise EOFError("NMEA read cancelled.")
        if raw:
            return raw
        if self._serial is not None:
            return None
        raise EOFError("NMEA stream ended.")

    def _process(self, raw: bytes) -> None:
        """Merge every sentence completed by ``raw`` and queue snapshots."""
        for sentence in self._parser.feed(raw):
            kind = self._parser.parse_sentence(sentence, self._info)
            if kind == SentenceKind.NONE:
                continue
            snapshot = copy.deepcopy(self._info)
            sanitize(snapshot)
            self._pending.append(GNSSData(kind=kind, info=snapshot))

    def read(self) -> GNSSData:
        """Block until the next sentence merges and return a snapshot.

        Raises:
            RuntimeError: If called outside a ``with`` block.
            EOFError: If the read is cancelled or the stream ends.
        """
        if self._stream is None:
            raise RuntimeError("NMEAReader must be used as a context manager.")
        while not self._pending:
            if self._cancelled:
                raise EOFError("NMEA read cancelled.")
            raw = self._read_line(self._stream)
            if raw is not None:
                self._process(raw)
        return self._pending.popleft()

    def __iter__(self) -> Iterator[GNSSData]:
        """Yield snapshots indefinitely, one per merged sentence.

        Iteration continues until the caller breaks the loop or an exception
        propagates out (e.g. ``EOFError`` at the end of a capture file or on
        cancellation). ``StopIteration`` is never raised.

        Yields:
            ``GNSSData`` for each merged sentence.
        """
        while True:
            yield self.read()
