"""Command line tools for reading and generating NMEA streams.

Usage::

    python -m nmeakit read --port /dev/ttyUSB0 --baud 115200
    python -m nmeakit read --file capture.nmea
    python -m nmeakit generate --count 5

``read`` prints one JSON object per merged sentence. ``generate`` prints a
full epoch of sentences for a simulated receiver that slowly speeds up.
"""

import argparse
import logging
import sys
import time
from collections.abc import Sequence

from serial.tools import list_ports

from nmeakit.formatters import format_gnss_message
from nmeakit.gnss.reader import DEFAULT_BAUDRATE, DEFAULT_PORT, NMEAReader
from nmeakit.info.generate import generate
from nmeakit.info.types import NavigationInfo
from nmeakit.info.units import mps_to_kph
from nmeakit.nmea.types import Field, Fix, Satellite, Signal

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_RECEIVER_KEYWORDS = ("gnss", "gps", "rtk", "ublox", "receiver")
_SERIAL_KEYWORDS = ("usb", "uart", "serial")
_HWID_KEYWORDS = ("usb", "uart", "acm", "cp210", "ch340", "ftdi")


def find_default_serial_port() -> str | None:
    """Guess the serial port of an attached GNSS receiver.

    A port whose description names a receiver wins. Otherwise the usual
    USB serial adapters are considered, preferring ``/dev/ttyACM0`` and
    ``/dev/ttyUSB0``.

    Returns:
        The device path, or ``None`` when no candidate port exists.
    """
    candidates = []
    for port in list_ports.comports():
        description = (port.description or "").lower()
        hwid = (port.hwid or "").lower()
        if any(keyword in description for keyword in _RECEIVER_KEYWORDS):
            return port.device
        if any(keyword in description for keyword in _SERIAL_KEYWORDS) or any(
            keyword in hwid for keyword in _HWID_KEYWORDS
        ):
            candidates.append(port.device)
    for preferred in ("/dev/ttyACM0", "/dev/ttyUSB0"):
        if preferred in candidates:
            return preferred
    return candidates[0] if candidates else None


def simulated_info() -> NavigationInfo:
    """A plausible 3D fix with a handful of satellites, for ``generate``."""
    info = NavigationInfo(
        signal=Signal.SENSITIVE,
        fix=Fix.FIX_3D,
        latitude=50.0,
        longitude=36.0,
        pdop=2.594,
        hdop=2.3,
        vdop=1.2,
        elevation=10.86,
        speed=mps_to_kph(2.14),
        track=45.0,
        magnetic_variation=55.0,
    )
    info.present |= (
        Field.LATITUDE
        | Field.LONGITUDE
        | Field.PDOP
        | Field.HDOP
        | Field.VDOP
        | Field.ELEVATION
        | Field.SPEED
        | Field.TRACK
        | Field.MAGNETIC_VARIATION
        | Field.SATELLITES_IN_USE_COUNT
        | Field.SATELLITES_IN_USE
        | Field.SATELLITES_IN_VIEW
    )

    in_view = [
        Satellite(id=1, elevation=60, azimuth=120, snr=45, in_use=True),
        Satellite(id=7, elevation=35, azimuth=200, snr=40, in_use=True),
        Satellite(id=12, elevation=15, azimuth=310, snr=32, in_use=True),
        Satellite(id=19, elevation=8, azimuth=45, snr=0),
        Satellite(id=24, elevation=72, azimuth=10, snr=48, in_use=True),
    ]
    satellites = info.satellites
    satellites.in_view[: len(in_view)] = in_view
    satellites.in_view_count = len(in_view)
    in_use = [satellite.id for satellite in in_view if satellite.in_use]
    satellites.in_use[: len(in_use)] = in_use
    satellites.in_use_count = len(in_use)
    return info


def run_read(args: argparse.Namespace) -> int:
    """Print every merged sentence from a serial port or capture file as JSON."""
    if args.file is not None:
        with open(args.file, "rb") as stream, NMEAReader(stream=stream) as gnss:
            return _print_snapshots(gnss)

    port = args.port or find_default_serial_port() or DEFAULT_PORT
    logger.info("Reading NMEA from %s at %d baud", port, args.baud)
    with NMEAReader(port=port, baudrate=args.baud) as gnss:
        return _print_snapshots(gnss)


def _print_snapshots(gnss: NMEAReader) -> int:
    try:
        for data in gnss:
            print(format_gnss_message(data), flush=True)
    except EOFError:
        pass
    except KeyboardInterrupt:
        gnss.cancel()
        print("\nStopped.", file=sys.stderr)
    return 0


def run_generate(args: argparse.Namespace) -> int:
    """Print ``--count`` epochs of sentences for a simulated receiver."""
    info = simulated_info()
    try:
        for iteration in range(args.count):
            if iteration:
                time.sleep(args.interval)
                info.speed += mps_to_kph(0.1)
            sys.stdout.write(generate(info))
            sys.stdout.flush()
    except KeyboardInterrupt:
        print("\nStopped.", file=sys.stderr)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nmeakit", description="NMEA 0183 reader and generator"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="log rejected sentences in detail"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    read = subparsers.add_parser("read", help="decode NMEA into JSON lines")
    source = read.add_mutually_exclusive_group()
    source.add_argument("--port", help="serial port (default: auto-detect)")
    source.add_argument("--file", help="read a capture file instead of a port")
    read.add_argument(
        "--baud",
        type=int,
        default=DEFAULT_BAUDRATE,
        help=f"serial baud rate (default: {DEFAULT_BAUDRATE})",
    )
    read.set_defaults(handler=run_read)

    gen = subparsers.add_parser("generate", help="print simulated NMEA sentences")
    gen.add_argument(
        "--count", type=int, default=10, help="number of epochs (default: 10)"
    )
    gen.add_argument(
        "--interval",
        type=float,
        default=0.5,
        help="seconds between epochs (default: 0.5)",
    )
    gen.set_defaults(handler=run_generate)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO, format=_LOG_FORMAT
    )
    return args.handler(args)
