"""Telegram decoder.

This module maps one framed telegram to one typed event. Dispatch follows the
protocol's own header layering:

1. LAN header (byte 2) selects serial number, hardware info, system state or
   an X-Bus telegram.
2. For X-Bus telegrams the X-Bus header (byte 4), and for some headers DB0
   (byte 5), select the event.

Anything without a matching branch becomes an :class:`UnrecognizedEvent`.
"""

from __future__ import annotations

import logging
import struct
from typing import Callable

from ..exceptions import DecodeError
from ..framing import MIN_TELEGRAM_LENGTH
from ..models.address import LocoAddress
from ..models.events import (
    DecodedEvent,
    FirmwareVersionEvent,
    HardwareInfoEvent,
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
)
from ..models.info import (
    DIRECTION_FORWARD_BIT,
    SPEED_STEP_MASK,
    Direction,
    FirmwareVersion,
    HardwareInfo,
    HardwareType,
    LocoInfo,
    VersionFamily,
    VersionInfo,
)
from ..models.state import CentralState, CentralStateEx, SystemStateData
from ..utils.hexdump import format_bytes
from .constants import FIRMWARE_VERSION_DB0, OCCUPIED_BIT, VERSION_DB0, LanHeader, XBroadcast, XHeader

logger = logging.getLogger(__name__)

XBUS_HEADER_OFFSET = 4
XBUS_DB0_OFFSET = 5

_SYSTEM_STATE_FORMAT = "<hhhhHHBB"  # six readings, central state, central state ex

_BROADCAST_EVENTS = {
    XBroadcast.TRACK_POWER_OFF: TrackPowerOffEvent,
    XBroadcast.TRACK_POWER_ON: TrackPowerOnEvent,
    XBroadcast.PROGRAMMING_MODE: ProgrammingModeEvent,
    XBroadcast.TRACK_SHORT_CIRCUIT: ShortCircuitEvent,
}


def decode_telegram(telegram: bytes) -> DecodedEvent:
    """Decode a single framed telegram.

    Args:
        telegram: One telegram as produced by the framer

    Returns:
        The event for this telegram; :class:`UnrecognizedEvent` carrying the
        raw bytes when no decoder matches

    Raises:
        DecodeError: If the telegram is shorter than the minimum telegram
            length or than its opcode needs

    Example:
        >>> decode_telegram(bytes.fromhex("07 00 40 00 61 01 60"))
        TrackPowerOnEvent(kind='track_power_on')
    """
    data = bytes(telegram)
    _require(data, MIN_TELEGRAM_LENGTH, "telegram")

    decoder = _LAN_DECODERS.get(data[2])
    if decoder is None:
        return _unrecognized(data)

    event = decoder(data)
    if not isinstance(event, UnrecognizedEvent):
        logger.debug("> %s %s", event.kind, format_bytes(data))
    return event


def _require(data: bytes, length: int, what: str) -> None:
    if len(data) < length:
        raise DecodeError(
            f"Truncated {what}: need {length} bytes, got {len(data)} ({format_bytes(data)})"
        )


def _unrecognized(data: bytes) -> UnrecognizedEvent:
    logger.info("> Unrecognized telegram %s", format_bytes(data))
    return UnrecognizedEvent(raw=data)


def _decode_serial_number(data: bytes) -> DecodedEvent:
    _require(data, 8, "serial number telegram")
    (serial_number,) = struct.unpack_from("<I", data, 4)
    return SerialNumberEvent(serial_number=serial_number)


def _decode_hardware_info(data: bytes) -> DecodedEvent:
    _require(data, 10, "hardware info telegram")
    (type_code,) = struct.unpack_from("<I", data, 4)
    # firmware is BCD-like: byte 8 minor, byte 9 major
    firmware = FirmwareVersion(major=data[9], minor=data[8])
    return HardwareInfoEvent(
        info=HardwareInfo(hardware_type=HardwareType.from_code(type_code), firmware=firmware)
    )


def _decode_system_state(data: bytes) -> DecodedEvent:
    _require(data, 18, "system state telegram")
    (
        main_current,
        prog_current,
        filtered_main_current,
        temperature,
        supply_voltage,
        vcc_voltage,
        central_state,
        central_state_ex,
    ) = struct.unpack_from(_SYSTEM_STATE_FORMAT, data, 4)

    return SystemStateChangedEvent(
        data=SystemStateData(
            main_current=main_current,
            prog_current=prog_current,
            filtered_main_current=filtered_main_current,
            temperature=temperature,
            supply_voltage=supply_voltage,
            vcc_voltage=vcc_voltage,
            central_state=CentralState.from_byte(central_state),
            central_state_ex=CentralStateEx.from_byte(central_state_ex),
        )
    )


def _decode_xbus(data: bytes) -> DecodedEvent:
    _require(data, XBUS_HEADER_OFFSET + 1, "X-Bus telegram")
    decoder = _XBUS_DECODERS.get(data[XBUS_HEADER_OFFSET])
    if decoder is None:
        return _unrecognized(data)
    return decoder(data)


def _decode_broadcast(data: bytes) -> DecodedEvent:
    _require(data, XBUS_DB0_OFFSET + 1, "X-Bus broadcast")
    event_class = _BROADCAST_EVENTS.get(data[XBUS_DB0_OFFSET])
    if event_class is None:
        return _unrecognized(data)
    return event_class()


def _decode_status_changed(data: bytes) -> DecodedEvent:
    _require(data, 7, "status changed telegram")
    return StatusChangedEvent(state=CentralState.from_byte(data[6]))


def _decode_version(data: bytes) -> DecodedEvent:
    _require(data, XBUS_DB0_OFFSET + 1, "version telegram")
    if data[XBUS_DB0_OFFSET] != VERSION_DB0:
        return _unrecognized(data)
    _require(data, 8, "version telegram")
    return VersionEvent(
        info=VersionInfo(
            xbus_version=data[6],
            family=VersionFamily.from_byte(data[7]),
            raw_version_byte=data[7],
        )
    )


def _decode_stopped(data: bytes) -> DecodedEvent:
    return StoppedEvent()


def _decode_loco_info(data: bytes) -> DecodedEvent:
    _require(data, 9, "loco info telegram")
    speed = data[8]
    info = LocoInfo(
        address=LocoAddress.from_bytes(data[5], data[6]),
        occupied=bool(data[7] & OCCUPIED_BIT),
        direction=Direction.FORWARD if speed & DIRECTION_FORWARD_BIT else Direction.BACKWARD,
        speed_step=speed & SPEED_STEP_MASK,
    )
    return LocoInfoEvent(info=info)


def _decode_firmware_version(data: bytes) -> DecodedEvent:
    _require(data, XBUS_DB0_OFFSET + 1, "firmware version telegram")
    if data[XBUS_DB0_OFFSET] != FIRMWARE_VERSION_DB0:
        return _unrecognized(data)
    _require(data, 8, "firmware version telegram")
    return FirmwareVersionEvent(version=FirmwareVersion(major=data[6], minor=data[7]))


_LAN_DECODERS: dict[int, Callable[[bytes], DecodedEvent]] = {
    LanHeader.GET_SERIAL_NUMBER: _decode_serial_number,
    LanHeader.GET_HWINFO: _decode_hardware_info,
    LanHeader.SYSTEMSTATE_DATACHANGED: _decode_system_state,
    LanHeader.XBUS: _decode_xbus,
}

_XBUS_DECODERS: dict[int, Callable[[bytes], DecodedEvent]] = {
    XHeader.BROADCAST: _decode_broadcast,
    XHeader.STATUS_CHANGED: _decode_status_changed,
    XHeader.VERSION: _decode_version,
    XHeader.BC_STOPPED: _decode_stopped,
    XHeader.LOCO_INFO: _decode_loco_info,
    XHeader.FIRMWARE_VERSION: _decode_firmware_version,
}
