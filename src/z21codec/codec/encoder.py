"""Telegram encoder: one builder per outbound command.

Every outbound telegram has the layout::

    [length:2 LE][LAN header:2 LE][payload][checksum?]

X-Bus telegrams (LAN header 0x40) end with the XOR checksum of the X-Bus
header and data bytes. Plain LAN commands carry no checksum.

All builders are pure functions returning ``bytes`` ready for the transport.
"""

from __future__ import annotations

import logging
import struct
from typing import Callable

from ..exceptions import EncodeError, InvalidAddressError
from ..models.address import LocoAddress
from ..models.info import LocoInfo
from ..utils.checksum import xor_checksum
from ..utils.hexdump import format_bytes
from .constants import (
    DEFAULT_BROADCAST_FLAGS,
    FIRMWARE_VERSION_DB0,
    LOCO_DRIVE_128_STEPS,
    LOCO_INFO_DB0,
    BroadcastFlag,
    LanHeader,
    XGet,
    XHeader,
)

logger = logging.getLogger(__name__)

MAX_TELEGRAM_LENGTH = 0xFF


def build_telegram(header: int, payload: bytes = b"") -> bytes:
    """Build a LAN telegram with length and header prefix.

    Args:
        header: LAN header (see :class:`~z21codec.codec.constants.LanHeader`)
        payload: Data bytes following the header

    Returns:
        Telegram bytes

    Raises:
        EncodeError: If the telegram would not fit the one-byte length

    Example:
        >>> build_telegram(0x10).hex(" ")
        '04 00 10 00'
    """
    length = 4 + len(payload)
    if length > MAX_TELEGRAM_LENGTH:
        raise EncodeError(f"Telegram too long: {length} bytes (max {MAX_TELEGRAM_LENGTH})")
    return struct.pack("<HH", length, header) + payload


def build_xbus_telegram(xbus: bytes) -> bytes:
    """Build an X-Bus telegram, appending the XOR checksum.

    Args:
        xbus: X-Bus header followed by its data bytes

    Returns:
        Telegram bytes

    Example:
        >>> build_xbus_telegram(b"\\x21\\x81").hex(" ")
        '07 00 40 00 21 81 a0'
    """
    if not xbus:
        raise EncodeError("X-Bus telegram needs at least an X-Bus header byte")
    return build_telegram(LanHeader.XBUS, xbus + bytes([xor_checksum(xbus)]))


def _logged(name: str, telegram: bytes) -> bytes:
    logger.debug("< %s %s", name, format_bytes(telegram))
    return telegram


# ============================================================================
# Fixed commands
# ============================================================================


def get_serial_number() -> bytes:
    """LAN_GET_SERIAL_NUMBER: ``04 00 10 00``."""
    return _logged("get_serial_number", build_telegram(LanHeader.GET_SERIAL_NUMBER))


def logoff() -> bytes:
    """LAN_LOGOFF: ``04 00 30 00``. Ends the client session on the station."""
    return _logged("logoff", build_telegram(LanHeader.LOGOFF))


def get_version() -> bytes:
    """LAN_X_GET_VERSION: ``07 00 40 00 21 21 00``."""
    return _logged("get_version", build_xbus_telegram(bytes([XHeader.GET, XGet.VERSION])))


def get_status() -> bytes:
    """LAN_X_GET_STATUS: ``07 00 40 00 21 24 05``."""
    return _logged("get_status", build_xbus_telegram(bytes([XHeader.GET, XGet.STATUS])))


def set_track_power_off() -> bytes:
    """LAN_X_SET_TRACK_POWER_OFF: ``07 00 40 00 21 80 A1``."""
    return _logged(
        "set_track_power_off", build_xbus_telegram(bytes([XHeader.GET, XGet.TRACK_POWER_OFF]))
    )


def set_track_power_on() -> bytes:
    """LAN_X_SET_TRACK_POWER_ON: ``07 00 40 00 21 81 A0``."""
    return _logged(
        "set_track_power_on", build_xbus_telegram(bytes([XHeader.GET, XGet.TRACK_POWER_ON]))
    )


def set_stop() -> bytes:
    """LAN_X_SET_STOP: ``06 00 40 00 80 80``.

    Halts all locomotives (emergency stop) while keeping track power on.
    """
    return _logged("set_stop", build_xbus_telegram(bytes([XHeader.SET_STOP])))


def get_firmware_version() -> bytes:
    """LAN_X_GET_FIRMWARE_VERSION: ``07 00 40 00 F1 0A FB``."""
    return _logged(
        "get_firmware_version",
        build_xbus_telegram(bytes([XHeader.GET_FIRMWARE_VERSION, FIRMWARE_VERSION_DB0])),
    )


def set_broadcast_flags(flags: BroadcastFlag | int = DEFAULT_BROADCAST_FLAGS) -> bytes:
    """LAN_SET_BROADCASTFLAGS.

    With the default flags (driving/switching and system state broadcasts)
    this is ``08 00 50 00 01 01 00 00``.

    Args:
        flags: Broadcast classes to subscribe to, as a 32-bit flag word
    """
    if not 0 <= int(flags) <= 0xFFFFFFFF:
        raise EncodeError(f"Broadcast flags must fit in 32 bits, got {flags:#x}")
    return _logged(
        "set_broadcast_flags",
        build_telegram(LanHeader.SET_BROADCASTFLAGS, struct.pack("<I", int(flags))),
    )


def get_system_state() -> bytes:
    """LAN_SYSTEMSTATE_GETDATA: ``04 00 85 00``."""
    return _logged("get_system_state", build_telegram(LanHeader.SYSTEMSTATE_GETDATA))


def get_hardware_info() -> bytes:
    """LAN_GET_HWINFO: ``04 00 1A 00``.

    No checksum byte, like every non X-Bus command. Real stations answer this
    layout.
    """
    return _logged("get_hardware_info", build_telegram(LanHeader.GET_HWINFO))


# ============================================================================
# Parameterized commands
# ============================================================================


def _as_address(address: LocoAddress | int | None) -> LocoAddress:
    if address is None:
        raise InvalidAddressError("Locomotive address is missing")
    if not isinstance(address, LocoAddress):
        address = LocoAddress(address)
    if not address.is_valid:
        raise InvalidAddressError("Locomotive address out of range (must be 1-9999)")
    return address


def get_loco_info(address: LocoAddress | int | None) -> bytes:
    """LAN_X_GET_LOCO_INFO: ``09 00 40 00 E3 F0 MSB LSB XOR``.

    Args:
        address: Locomotive address; plain ints are clamped like LocoAddress

    Raises:
        InvalidAddressError: If the address is None or the 0 sentinel
    """
    address = _as_address(address)
    telegram = build_xbus_telegram(bytes([XHeader.GET_LOCO_INFO, LOCO_INFO_DB0]) + address.to_bytes())
    logger.debug("< get_loco_info %s (#%s)", format_bytes(telegram), address)
    return telegram


def set_loco_drive(info: LocoInfo) -> bytes:
    """LAN_X_SET_LOCO_DRIVE in 128 speed step mode.

    Layout ``0A 00 40 00 E4 13 MSB LSB SPEED XOR`` where SPEED is the speed
    step with bit 7 set for forward travel.

    Args:
        info: Target address, direction and speed step; ``occupied`` is ignored

    Raises:
        InvalidAddressError: If ``info`` is None or its address is the 0 sentinel
    """
    if info is None:
        raise InvalidAddressError("Locomotive info is missing")
    address = _as_address(info.address)
    telegram = build_xbus_telegram(
        bytes([XHeader.SET_LOCO_DRIVE, LOCO_DRIVE_128_STEPS])
        + address.to_bytes()
        + bytes([info.speed_byte])
    )
    logger.debug(
        "< set_loco_drive %s (#%s %s %d)",
        format_bytes(telegram),
        address,
        info.direction.value,
        info.speed_step,
    )
    return telegram


# Command name -> builder, for name-based dispatch (CLI, Z21Station.request)
COMMANDS: dict[str, Callable[..., bytes]] = {
    "get-serial-number": get_serial_number,
    "get-version": get_version,
    "get-status": get_status,
    "set-track-power-off": set_track_power_off,
    "set-track-power-on": set_track_power_on,
    "set-stop": set_stop,
    "get-firmware-version": get_firmware_version,
    "set-broadcast-flags": set_broadcast_flags,
    "get-system-state": get_system_state,
    "get-hardware-info": get_hardware_info,
    "logoff": logoff,
    "get-loco-info": get_loco_info,
    "set-loco-drive": set_loco_drive,
}
