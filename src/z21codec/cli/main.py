"""Main CLI entry point for z21codec."""

from __future__ import annotations

import argparse
import enum
import logging
import sys
from typing import Any

from .. import __version__
from ..client import ProtocolClient
from ..codec.encoder import COMMANDS
from ..exceptions import EncodeError
from ..models.address import LocoAddress
from ..models.base import Z21Model
from ..models.events import DecodedEvent
from ..models.info import Direction, FirmwareVersion, LocoInfo
from ..utils.hexdump import format_bytes, parse_hex


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the z21codec CLI.

    Returns:
        Exit code (0 for success, 1 for invalid input, 2 for a framing fault)
    """
    parser = argparse.ArgumentParser(
        prog="z21codec",
        description="z21codec: Z21 LAN protocol telegram codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  z21codec decode 07 00 40 00 61 01 60            Decode a captured datagram
  z21codec encode set-track-power-on               Print a command telegram
  z21codec encode get-loco-info --address 3
  z21codec encode set-loco-drive --address 3 --speed 40 --direction backward
  z21codec commands                                List command names
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"z21codec {__version__}")

    subparsers = parser.add_subparsers(dest="action")

    decode_parser = subparsers.add_parser("decode", help="Decode a datagram given as hex")
    decode_parser.add_argument("hex", nargs="+", help="Datagram bytes, e.g. 07 00 40 00 61 01 60")

    encode_parser = subparsers.add_parser("encode", help="Print the telegram for a command")
    encode_parser.add_argument("command", choices=sorted(COMMANDS), metavar="COMMAND")
    encode_parser.add_argument("--address", type=int, help="Locomotive address (1-9999)")
    encode_parser.add_argument("--speed", type=int, default=0, help="Speed step (0-127)")
    encode_parser.add_argument(
        "--direction",
        choices=[d.value for d in Direction],
        default=Direction.FORWARD.value,
        help="Driving direction",
    )
    encode_parser.add_argument(
        "--flags",
        type=lambda text: int(text, 0),
        help="Broadcast flags for set-broadcast-flags, e.g. 0x101",
    )

    subparsers.add_parser("commands", help="List command names")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.action == "decode":
        return _decode(" ".join(args.hex))
    if args.action == "encode":
        return _encode(args)
    if args.action == "commands":
        for name in sorted(COMMANDS):
            print(name)
        return 0

    # If no command specified, show help
    parser.print_help()
    return 0


def _decode(text: str) -> int:
    try:
        datagram = parse_hex(text)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    result = ProtocolClient().decode_datagram(datagram)
    for event in result.events:
        print(format_event(event))

    if result.framing_error is not None:
        print(f"Framing error: {result.framing_error}", file=sys.stderr)
        return 2
    return 0


def _encode(args: argparse.Namespace) -> int:
    builder = COMMANDS[args.command]
    try:
        if args.command == "get-loco-info":
            telegram = builder(_address(args))
        elif args.command == "set-loco-drive":
            info = LocoInfo(
                address=_address(args),
                direction=Direction(args.direction),
                speed_step=args.speed,
            )
            telegram = builder(info)
        elif args.command == "set-broadcast-flags" and args.flags is not None:
            telegram = builder(args.flags)
        else:
            telegram = builder()
    except (EncodeError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(format_bytes(telegram))
    return 0


def _address(args: argparse.Namespace) -> LocoAddress | None:
    if args.address is None:
        return None
    return LocoAddress(args.address)


def format_event(event: DecodedEvent) -> str:
    """One-line human readable rendering of an event."""
    fields = [
        f"{name}={_describe(getattr(event, name))}"
        for name in type(event).model_fields
        if name != "kind"
    ]
    return f"{event.kind}: {', '.join(fields)}" if fields else event.kind


def _describe(value: Any) -> str:
    if isinstance(value, (LocoAddress, FirmwareVersion)):
        return str(value)
    if isinstance(value, Z21Model):
        inner = ", ".join(
            f"{name}={_describe(getattr(value, name))}" for name in type(value).model_fields
        )
        return f"{type(value).__name__}({inner})"
    if isinstance(value, bytes):
        return format_bytes(value)
    if isinstance(value, enum.Enum):
        return value.name
    return repr(value)


if __name__ == "__main__":
    sys.exit(main())
