"""Locomotive, hardware and version information types."""

from __future__ import annotations

import enum
from typing import Any

from pydantic import Field, field_validator

from .address import LocoAddress
from .base import Z21Model

SPEED_STEP_MASK = 0x7F
DIRECTION_FORWARD_BIT = 0x80


class Direction(str, enum.Enum):
    """Driving direction of a locomotive."""

    FORWARD = "forward"
    BACKWARD = "backward"


class LocoInfo(Z21Model):
    """Locomotive state as reported by the station or requested by the caller.

    Attributes:
        address: Locomotive address (ints are accepted and clamped)
        occupied: True if another controller is driving this locomotive
        direction: Driving direction
        speed_step: Speed step 0-127 (128 speed step mode)
    """

    address: LocoAddress
    occupied: bool = False
    direction: Direction = Direction.FORWARD
    speed_step: int = Field(default=0, ge=0, le=127)

    @field_validator("address", mode="before")
    @classmethod
    def _coerce_address(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return LocoAddress(value)
        return value

    @property
    def speed_byte(self) -> int:
        """Speed step with the direction folded into bit 7 (1 = forward)."""
        if self.direction is Direction.FORWARD:
            return self.speed_step | DIRECTION_FORWARD_BIT
        return self.speed_step


class HardwareType(enum.IntEnum):
    """Command station hardware variants, keyed by their hardware type code."""

    UNKNOWN = 0
    Z21_OLD = 0x00000200  # black Z21, hardware variant from 2012
    Z21_NEW = 0x00000201  # black Z21, hardware variant from 2013
    SMARTRAIL = 0x00000202
    Z21_SMALL = 0x00000203  # white z21 starter set variant
    Z21_START = 0x00000204  # z21 start, locked until unlocked by code
    SINGLE_BOOSTER = 0x00000205
    DUAL_BOOSTER = 0x00000206
    Z21_XL = 0x00000211
    XL_BOOSTER = 0x00000212
    SWITCH_DECODER = 0x00000301
    SIGNAL_DECODER = 0x00000302

    @classmethod
    def from_code(cls, code: int) -> HardwareType:
        """Map a hardware type code to a variant, UNKNOWN if not listed."""
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN


class FirmwareVersion(Z21Model):
    """Firmware version of the command station.

    The station transmits the minor version as hex digits: firmware 1.23
    arrives as ``minor=0x23`` (decimal 35), not ``minor=23``. The raw byte is
    kept unchanged in ``minor`` and ``str()`` renders it as hex digits,
    which reproduces the version number the vendor prints on its own
    tools. Do not convert ``minor`` to decimal before display.

    The minor part is always padded to two hex digits, so firmware 1.05
    renders as ``1.05``. Z21 clients that format it as plain ``X`` print
    ``1.5`` for the same byte; the padding here departs from that
    rendering on purpose, since ``1.5`` reads as minor 0x50.

    Example:
        >>> str(FirmwareVersion(major=1, minor=0x23))
        '1.23'
        >>> str(FirmwareVersion(major=1, minor=0x05))
        '1.05'
    """

    major: int = Field(ge=0, le=0xFF)
    minor: int = Field(ge=0, le=0xFF)

    def __str__(self) -> str:
        return f"{self.major:X}.{self.minor:02X}"


class HardwareInfo(Z21Model):
    """Hardware type and firmware version (LAN_GET_HWINFO reply)."""

    hardware_type: HardwareType
    firmware: FirmwareVersion


class VersionFamily(str, enum.Enum):
    """Command station family, from the version reply's station id byte."""

    UNKNOWN = "unknown"  # 0x00
    FAMILY_A = "family_a"  # 0x12, black Z21
    FAMILY_B = "family_b"  # 0x13, white z21 (observed on real hardware, undocumented)
    OTHER = "other"

    @classmethod
    def from_byte(cls, value: int) -> VersionFamily:
        return _VERSION_FAMILIES.get(value, cls.OTHER)


_VERSION_FAMILIES = {
    0x00: VersionFamily.UNKNOWN,
    0x12: VersionFamily.FAMILY_A,
    0x13: VersionFamily.FAMILY_B,
}


class VersionInfo(Z21Model):
    """X-Bus version reply.

    Attributes:
        xbus_version: X-Bus protocol version (0x30 means 3.0)
        family: Station family derived from ``raw_version_byte``
        raw_version_byte: Command station id byte as received
    """

    xbus_version: int
    family: VersionFamily
    raw_version_byte: int
