"""End-to-end integration tests: a simulated station session over a transport."""

from __future__ import annotations

import socket
import threading

from z21codec import Z21Station
from z21codec.codec import encoder
from z21codec.models import (
    FirmwareVersionEvent,
    HardwareInfoEvent,
    HardwareType,
    LocoInfo,
    LocoInfoEvent,
    SerialNumberEvent,
    SystemStateChangedEvent,
)
from z21codec.transport import MockTransport, UdpTransport, UdpTransportConfig
from z21codec.utils import xor_checksum


def loco_info_reply(info: LocoInfo) -> bytes:
    """Build the LAN_X_LOCO_INFO a station would broadcast for ``info``."""
    xbus = (
        bytes([0xEF])
        + info.address.to_bytes()
        + bytes([0x08 if info.occupied else 0x00, info.speed_byte])
    )
    return bytes([len(xbus) + 5, 0x00, 0x40, 0x00]) + xbus + bytes([xor_checksum(xbus)])


def add_station_replies(transport: MockTransport) -> None:
    """Register the replies a Z21 XL with firmware 1.43 gives to identification requests."""
    transport.add_response(encoder.get_serial_number(), bytes.fromhex("08 00 10 00 4A 30 01 00"))
    transport.add_response(
        encoder.get_hardware_info(), bytes.fromhex("0C 00 1A 00 11 02 00 00 43 01 00 00")
    )
    transport.add_response(
        encoder.get_firmware_version(), bytes.fromhex("09 00 40 00 F3 0A 01 43 BB")
    )


def test_station_session() -> None:
    """Test a full session: identify the station, then drive a locomotive."""
    transport = MockTransport()
    add_station_replies(transport)
    events: list[object] = []

    with Z21Station(transport) as station:
        station.subscribe(None, events.append)

        station.request("get-serial-number")
        station.request("get-hardware-info")
        station.request("get-firmware-version")

        command = LocoInfo(address=1234, speed_step=40)
        station.request("set-loco-drive", command)
        transport.inject(loco_info_reply(command))

    serial, hardware, firmware, loco = events
    assert isinstance(serial, SerialNumberEvent)
    assert serial.serial_number == 77898

    assert isinstance(hardware, HardwareInfoEvent)
    assert hardware.info.hardware_type is HardwareType.Z21_XL
    assert str(hardware.info.firmware) == "1.43"

    assert isinstance(firmware, FirmwareVersionEvent)
    assert str(firmware.version) == "1.43"

    assert isinstance(loco, LocoInfoEvent)
    assert loco.info == command

    assert transport.sent[0] == encoder.set_broadcast_flags()
    assert transport.sent[-1] == encoder.logoff()


def test_batched_broadcast_datagram(system_state_telegram: bytes) -> None:
    """Test one datagram carrying several broadcasts reaches subscribers in order."""
    transport = MockTransport()
    kinds: list[str] = []
    power: list[bool] = []

    station = Z21Station(transport, subscribe_broadcasts=False)
    station.subscribe(None, lambda event: kinds.append(event.kind))
    station.subscribe_track_power(power.append)
    station.connect()

    transport.inject(
        bytes.fromhex("07 00 40 00 61 00 61")
        + system_state_telegram
        + loco_info_reply(LocoInfo(address=3, speed_step=5))
        + bytes.fromhex("07 00 40 00 61 01 60")
    )
    station.close()

    assert kinds == ["track_power_off", "system_state_changed", "loco_info", "track_power_on"]
    assert power == [False, True]


def test_udp_round_trip() -> None:
    """Test a station session over real loopback UDP sockets."""
    station_sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    station_sock.bind(("127.0.0.1", 0))
    station_sock.settimeout(2.0)

    config = UdpTransportConfig(
        host="127.0.0.1",
        port=station_sock.getsockname()[1],
        local_port=0,
        receive_timeout=0.05,
    )
    received = threading.Event()
    states: list[SystemStateChangedEvent] = []

    def on_state(event: SystemStateChangedEvent) -> None:
        states.append(event)
        received.set()

    station = Z21Station(UdpTransport(config))
    station.subscribe(SystemStateChangedEvent, on_state)
    try:
        station.connect()
        request, client_address = station_sock.recvfrom(1024)
        assert request == encoder.set_broadcast_flags()

        station.request("get-system-state")
        request, _ = station_sock.recvfrom(1024)
        assert request == encoder.get_system_state()

        station_sock.sendto(
            bytes.fromhex("14 00 84 00 E8 03 00 00 E8 03 1E 00 30 4B 10 40 00 00 00 00"),
            client_address,
        )
        assert received.wait(2.0)
    finally:
        station.close()
        station_sock.close()

    assert states[0].data.main_current == 1000
    assert states[0].data.temperature == 30
