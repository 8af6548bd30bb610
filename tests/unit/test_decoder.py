"""Unit tests for the telegram decoder."""

from __future__ import annotations

import logging

import pytest

from z21codec.codec import decode_telegram
from z21codec.exceptions import DecodeError
from z21codec.models import (
    Direction,
    FirmwareVersionEvent,
    HardwareInfoEvent,
    HardwareType,
    LocoAddress,
    LocoInfoEvent,
    ProgrammingModeEvent,
    SerialNumberEvent,
    ShortCircuitEvent,
    StatusChangedEvent,
    StoppedEvent,
    SystemStateChangedEvent,
    TrackPowerOffEvent,
    TrackPowerOnEvent,
    UnrecognizedEvent,
    VersionEvent,
    VersionFamily,
)


def telegram(text: str) -> bytes:
    return bytes.fromhex(text)


class TestLanTelegrams:
    """Test telegrams dispatched on the LAN header."""

    def test_serial_number(self) -> None:
        event = decode_telegram(telegram("08 00 10 00 4A 30 01 00"))

        assert isinstance(event, SerialNumberEvent)
        assert event.kind == "serial_number"
        assert event.serial_number == 0x0001304A

    def test_hardware_info(self) -> None:
        """Test hardware type and firmware (byte 9 major, byte 8 minor)."""
        event = decode_telegram(telegram("0C 00 1A 00 01 02 00 00 20 01 00 00"))

        assert isinstance(event, HardwareInfoEvent)
        assert event.info.hardware_type is HardwareType.Z21_NEW
        assert event.info.firmware.major == 0x01
        assert event.info.firmware.minor == 0x20
        assert str(event.info.firmware) == "1.20"

    def test_hardware_info_unknown_type(self) -> None:
        event = decode_telegram(telegram("0C 00 1A 00 99 09 00 00 20 01 00 00"))

        assert isinstance(event, HardwareInfoEvent)
        assert event.info.hardware_type is HardwareType.UNKNOWN

    def test_system_state(self, system_state_telegram: bytes) -> None:
        event = decode_telegram(system_state_telegram)

        assert isinstance(event, SystemStateChangedEvent)
        data = event.data
        assert data.main_current == 1000
        assert data.prog_current == 10
        assert data.filtered_main_current == 992
        assert data.temperature == 35
        assert data.supply_voltage == 19248
        assert data.vcc_voltage == 16400

        assert data.central_state.track_voltage_off
        assert data.central_state.programming_mode
        assert not data.central_state.emergency_stop
        assert not data.central_state.short_circuit

        assert data.central_state_ex.high_temperature
        assert data.central_state_ex.short_circuit_external
        assert not data.central_state_ex.power_lost
        assert not data.central_state_ex.short_circuit_internal

    def test_system_state_signed_readings(self) -> None:
        """Test currents and temperature are signed 16-bit values."""
        event = decode_telegram(
            telegram("14 00 84 00 FF FF 00 00 00 00 F6 FF 30 4B 10 40 00 00 00 00")
        )

        assert isinstance(event, SystemStateChangedEvent)
        assert event.data.main_current == -1
        assert event.data.temperature == -10
        assert event.data.supply_voltage == 19248

    def test_unknown_lan_header(self) -> None:
        raw = telegram("04 00 99 00")
        event = decode_telegram(raw)

        assert isinstance(event, UnrecognizedEvent)
        assert event.raw == raw


class TestXBusBroadcasts:
    """Test X-Bus header 0x61 broadcasts."""

    @pytest.mark.parametrize(
        "text,event_class",
        [
            ("07 00 40 00 61 00 61", TrackPowerOffEvent),
            ("07 00 40 00 61 01 60", TrackPowerOnEvent),
            ("07 00 40 00 61 02 63", ProgrammingModeEvent),
            ("07 00 40 00 61 08 69", ShortCircuitEvent),
        ],
    )
    def test_broadcast(self, text: str, event_class: type) -> None:
        assert isinstance(decode_telegram(telegram(text)), event_class)

    def test_track_power_property(self) -> None:
        assert decode_telegram(telegram("07 00 40 00 61 01 60")).track_power_on is True
        assert decode_telegram(telegram("07 00 40 00 61 00 61")).track_power_on is False

    def test_unknown_broadcast(self) -> None:
        raw = telegram("07 00 40 00 61 05 64")
        event = decode_telegram(raw)

        assert isinstance(event, UnrecognizedEvent)
        assert event.raw == raw

    def test_stopped(self) -> None:
        assert isinstance(decode_telegram(telegram("07 00 40 00 81 00 81")), StoppedEvent)


class TestXBusReplies:
    """Test X-Bus replies to requests."""

    def test_status_changed(self) -> None:
        event = decode_telegram(telegram("08 00 40 00 62 22 01 41"))

        assert isinstance(event, StatusChangedEvent)
        assert event.state.emergency_stop
        assert not event.state.track_voltage_off

    def test_version(self) -> None:
        event = decode_telegram(telegram("09 00 40 00 63 21 30 12 60"))

        assert isinstance(event, VersionEvent)
        assert event.info.xbus_version == 0x30
        assert event.info.family is VersionFamily.FAMILY_A
        assert event.info.raw_version_byte == 0x12

    @pytest.mark.parametrize(
        "station_byte,family",
        [
            (0x00, VersionFamily.UNKNOWN),
            (0x12, VersionFamily.FAMILY_A),
            (0x13, VersionFamily.FAMILY_B),
            (0x42, VersionFamily.OTHER),
        ],
    )
    def test_version_family(self, station_byte: int, family: VersionFamily) -> None:
        data = bytes([0x09, 0x00, 0x40, 0x00, 0x63, 0x21, 0x30, station_byte, 0x00])
        event = decode_telegram(data)

        assert isinstance(event, VersionEvent)
        assert event.info.family is family

    def test_version_wrong_db0(self) -> None:
        """Test a 0x63 telegram with DB0 other than 0x21 is unrecognized."""
        event = decode_telegram(telegram("09 00 40 00 63 22 30 12 63"))
        assert isinstance(event, UnrecognizedEvent)

    def test_firmware_version(self) -> None:
        event = decode_telegram(telegram("09 00 40 00 F3 0A 01 23 DB"))

        assert isinstance(event, FirmwareVersionEvent)
        assert event.version.major == 1
        assert event.version.minor == 0x23
        assert str(event.version) == "1.23"

    def test_firmware_version_wrong_db0(self) -> None:
        event = decode_telegram(telegram("09 00 40 00 F3 0B 01 23 DA"))
        assert isinstance(event, UnrecognizedEvent)

    def test_loco_info(self, loco_info_telegram: bytes) -> None:
        event = decode_telegram(loco_info_telegram)

        assert isinstance(event, LocoInfoEvent)
        assert event.info.address == LocoAddress(3)
        assert event.info.occupied is True
        assert event.info.direction is Direction.FORWARD
        assert event.info.speed_step == 5

    def test_loco_info_long_address_backward(self) -> None:
        event = decode_telegram(telegram("0A 00 40 00 EF C4 D2 00 28 D1"))

        assert isinstance(event, LocoInfoEvent)
        assert event.info.address.value == 1234
        assert event.info.occupied is False
        assert event.info.direction is Direction.BACKWARD
        assert event.info.speed_step == 40

    def test_loco_info_extra_function_bytes_ignored(self) -> None:
        """Test trailing function bytes of longer loco info telegrams."""
        data = telegram("0E 00 40 00 EF 00 03 04 FF 10 00 00 00 00")
        event = decode_telegram(data)

        assert isinstance(event, LocoInfoEvent)
        assert event.info.speed_step == 127
        assert event.info.direction is Direction.FORWARD

    def test_unknown_xbus_header(self) -> None:
        raw = telegram("06 00 40 00 42 42")
        event = decode_telegram(raw)

        assert isinstance(event, UnrecognizedEvent)
        assert event.raw == raw

    def test_unrecognized_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="z21codec.codec.decoder"):
            decode_telegram(telegram("06 00 40 00 42 42"))

        assert "Unrecognized telegram 06 00 40 00 42 42" in caplog.text


class TestTruncatedTelegrams:
    """Test telegrams too short for their opcode."""

    @pytest.mark.parametrize(
        "text",
        [
            "03 00 10",  # below minimum telegram length
            "04 00 40 00",  # X-Bus without X-Bus header
            "05 00 40 00 61",  # broadcast without DB0
            "08 00 40 00 EF 00 03 08",  # loco info without speed byte
            "06 00 10 00 01 02",  # serial number short
            "08 00 1A 00 01 02 00 00",  # hardware info without firmware
            "08 00 84 00 00 00 00 00",  # system state short
            "06 00 40 00 62 22",  # status changed without state
            "07 00 40 00 F3 0A 01",  # firmware version without minor
        ],
    )
    def test_raises_decode_error(self, text: str) -> None:
        with pytest.raises(DecodeError, match="Truncated"):
            decode_telegram(telegram(text))
