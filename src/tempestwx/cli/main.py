"""Main CLI entry point for tempestwx."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .. import __version__
from ..cli.describe import describe_types
from ..codec import decode, encode
from ..exceptions import DecodeError
from ..listener import DEFAULT_PORT, ListenerConfig, UdpListener
from ..models.base import BaseRecord

LISTEN_MODES = ("record", "raw", "parsed")


class _TextListener(UdpListener):
    """Listener that prints datagrams without decoding them into records.

    ``parse=False`` prints the datagram text as received; ``parse=True`` prints
    it as a generic JSON value, so packets of unknown types still show up.
    """

    def __init__(self, config: ListenerConfig, parse: bool) -> None:
        super().__init__(config)
        self.parse = parse

    def handle_datagram(self, data: bytes, source: tuple[str, int]) -> None:
        self.packets += 1
        text = data.decode("utf-8", errors="replace")
        if not self.parse:
            print(text, flush=True)
            return
        try:
            value = json.loads(text)
        except ValueError as e:
            self.errors += 1
            print(f"Invalid JSON from {source[0]}: {e}", file=sys.stderr)
            return
        print(json.dumps(value), flush=True)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the tempestwx CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="tempestwx: WeatherFlow Tempest packet codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  tempestwx --decode packet.json         Decode one packet from a file
  echo '{...}' | tempestwx --decode -    Decode one packet from stdin
  tempestwx --schema obs_sky             Show the slot layout of a record type
  tempestwx --listen --count 10          Print the next 10 hub broadcasts
  tempestwx --listen --mode raw          Print datagrams without decoding
  tempestwx --version                    Show version
        """,
    )

    parser.add_argument(
        "--decode",
        metavar="FILE",
        type=str,
        help="Decode one JSON packet from FILE ('-' for stdin)",
    )
    parser.add_argument(
        "--schema",
        metavar="TYPE",
        type=str,
        help="Show the schema of a record type (e.g. obs_st), or 'all'",
    )
    parser.add_argument(
        "--listen",
        action="store_true",
        help="Listen for hub broadcasts and print each decoded packet",
    )
    parser.add_argument("--host", default="0.0.0.0", help="Address to bind (default: 0.0.0.0)")
    parser.add_argument(
        "--port", type=int, default=DEFAULT_PORT, help=f"UDP port (default: {DEFAULT_PORT})"
    )
    parser.add_argument(
        "--count", type=int, default=None, help="Stop after this many datagrams"
    )
    parser.add_argument(
        "--buffer-size", type=int, default=1024, help="Receive buffer in bytes (default: 1024)"
    )
    parser.add_argument(
        "--mode",
        choices=LISTEN_MODES,
        default="record",
        help="What --listen prints: decoded record, raw datagram text or parsed JSON "
        "(default: record)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--version",
        action="version",
        version=f"tempestwx {__version__}",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.decode:
        return _decode_command(args.decode)

    if args.schema:
        try:
            describe_types(args.schema)
            return 0
        except DecodeError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    if args.listen:
        return _listen_command(args)

    # If no command specified, show help
    parser.print_help()
    return 0


def _decode_command(source: str) -> int:
    if source == "-":
        data = sys.stdin.buffer.read()
    else:
        file_path = Path(source)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1
        data = file_path.read_bytes()

    try:
        record = decode(data)
    except DecodeError as e:
        print(f"Error decoding packet: {type(e).__name__}: {e}", file=sys.stderr)
        return 1

    print(repr(record))
    print(encode(record, indent=2))
    return 0


def _listen_command(args: argparse.Namespace) -> int:
    try:
        config = ListenerConfig(host=args.host, port=args.port, buffer_size=args.buffer_size)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    def on_record(record: BaseRecord) -> None:
        print(f"{record.record_type}: {encode(record)}", flush=True)

    if args.mode == "record":
        listener: UdpListener = UdpListener(config, on_record)
    else:
        listener = _TextListener(config, parse=args.mode == "parsed")
    try:
        listener.run(max_packets=args.count)
    except KeyboardInterrupt:
        pass
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"{listener.packets} packets, {listener.errors} rejected", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
