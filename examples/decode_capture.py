#!/usr/bin/env python3
"""Decode datagrams captured from a Z21 command station.

The captures below are what a station typically sends right after a client
subscribes to broadcasts: a batched datagram with a power broadcast, a system
state snapshot and a locomotive update, followed by a corrupt datagram whose
second length byte is broken.

Run this example:
    python examples/decode_capture.py
"""

from __future__ import annotations

from z21codec import (
    LocoInfoEvent,
    ProtocolClient,
    SystemStateChangedEvent,
    TrackPowerOnEvent,
    UnrecognizedEvent,
    parse_hex,
)

CAPTURES = [
    # track power on + system state + loco 3 driving forward at step 5
    "07 00 40 00 61 01 60 "
    "14 00 84 00 E8 03 0A 00 E0 03 23 00 30 4B 10 40 00 00 00 00 "
    "0A 00 40 00 EF 00 03 08 85 61",
    # serial number reply, then a truncated telegram
    "08 00 10 00 4A 30 01 00 0A 00 40 00 EF",
    # a telegram nobody decodes
    "05 00 77 00 01",
]


def main() -> None:
    client = ProtocolClient()

    for number, capture in enumerate(CAPTURES, start=1):
        print("=" * 70)
        print(f"Datagram {number}: {capture}")
        print("-" * 70)

        result = client.decode_datagram(parse_hex(capture))
        for event in result.events:
            match event:
                case TrackPowerOnEvent():
                    print("  Track power is ON")
                case SystemStateChangedEvent(data=data):
                    print(
                        f"  Main track {data.main_current} mA, {data.temperature} C, "
                        f"supply {data.supply_voltage / 1000:.1f} V"
                    )
                case LocoInfoEvent(info=info):
                    print(
                        f"  Loco #{info.address}: step {info.speed_step} "
                        f"{info.direction.value}{' (occupied)' if info.occupied else ''}"
                    )
                case UnrecognizedEvent(raw=raw):
                    print(f"  Unrecognized telegram {raw.hex(' ')}")
                case _:
                    print(f"  {event!r}")

        if not result.ok:
            print(f"  Framing error: {result.framing_error}")
        print()


if __name__ == "__main__":
    main()
