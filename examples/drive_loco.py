#!/usr/bin/env python3
"""Drive a locomotive through a Z21Station.

Without arguments the station is simulated with MockTransport, which answers
drive commands with the loco info broadcast a real station would send. Pass a
host to talk to real hardware over UDP:

    python examples/drive_loco.py                 # simulated
    python examples/drive_loco.py 192.168.0.111   # real station

Z21_HOST / Z21_PORT / Z21_LOCAL_PORT are honoured as well.
"""

from __future__ import annotations

import logging
import os
import sys
import time

from z21codec import Direction, LocoInfo, LocoInfoEvent, Z21Station
from z21codec.codec import encoder
from z21codec.transport import MockTransport, Transport, UdpTransport, UdpTransportConfig
from z21codec.utils import xor_checksum

ADDRESS = 3


def simulated_transport() -> MockTransport:
    """MockTransport that echoes every drive command as a loco info broadcast."""
    transport = MockTransport()

    for step in range(0, 128, 20):
        for direction in Direction:
            info = LocoInfo(address=ADDRESS, speed_step=step, direction=direction)
            xbus = bytes([0xEF]) + info.address.to_bytes() + bytes([0x00, info.speed_byte])
            reply = bytes([len(xbus) + 5, 0x00, 0x40, 0x00]) + xbus + bytes([xor_checksum(xbus)])
            transport.add_response(encoder.set_loco_drive(info), reply)

    transport.add_response(encoder.set_track_power_on(), bytes.fromhex("07 00 40 00 61 01 60"))
    return transport


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    transport: Transport
    if len(sys.argv) > 1:
        transport = UdpTransport(UdpTransportConfig(host=sys.argv[1]))
    elif "Z21_HOST" in os.environ:
        transport = UdpTransport(UdpTransportConfig.from_env())
    else:
        transport = simulated_transport()

    station = Z21Station(transport)
    station.subscribe_track_power(lambda on: print(f"Track power {'ON' if on else 'OFF'}"))
    station.subscribe(
        LocoInfoEvent,
        lambda event: print(
            f"Loco #{event.info.address}: step {event.info.speed_step} {event.info.direction.value}"
        ),
    )

    with station:
        station.request("set-track-power-on")

        for step in (20, 40, 60, 40, 20, 0):
            station.request("set-loco-drive", LocoInfo(address=ADDRESS, speed_step=step))
            time.sleep(0.2)

        station.request(
            "set-loco-drive",
            LocoInfo(address=ADDRESS, speed_step=20, direction=Direction.BACKWARD),
        )
        time.sleep(0.2)
        station.request("set-loco-drive", LocoInfo(address=ADDRESS, speed_step=0))


if __name__ == "__main__":
    main()
