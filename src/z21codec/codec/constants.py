"""Header and command byte constants of the Z21 LAN protocol.

Comments give the LAN protocol message name for each value.
"""

from __future__ import annotations

import enum


class LanHeader(enum.IntEnum):
    """LAN header (telegram bytes 2-3, little-endian; the high byte is always 0)."""

    GET_SERIAL_NUMBER = 0x10  # LAN_GET_SERIAL_NUMBER
    GET_HWINFO = 0x1A  # LAN_GET_HWINFO
    LOGOFF = 0x30  # LAN_LOGOFF
    XBUS = 0x40  # LAN_X_*, X-Bus telegram tunnelled over LAN
    SET_BROADCASTFLAGS = 0x50  # LAN_SET_BROADCASTFLAGS
    SYSTEMSTATE_DATACHANGED = 0x84  # LAN_SYSTEMSTATE_DATACHANGED
    SYSTEMSTATE_GETDATA = 0x85  # LAN_SYSTEMSTATE_GETDATA


class XHeader(enum.IntEnum):
    """X-Bus header (telegram byte 4)."""

    GET = 0x21  # LAN_X_GET_VERSION, LAN_X_GET_STATUS, LAN_X_SET_TRACK_POWER_*
    BROADCAST = 0x61  # LAN_X_BC_*
    STATUS_CHANGED = 0x62  # LAN_X_STATUS_CHANGED
    VERSION = 0x63  # LAN_X_GET_VERSION reply
    SET_STOP = 0x80  # LAN_X_SET_STOP
    BC_STOPPED = 0x81  # LAN_X_BC_STOPPED
    GET_LOCO_INFO = 0xE3  # LAN_X_GET_LOCO_INFO
    SET_LOCO_DRIVE = 0xE4  # LAN_X_SET_LOCO_DRIVE
    LOCO_INFO = 0xEF  # LAN_X_LOCO_INFO
    GET_FIRMWARE_VERSION = 0xF1  # LAN_X_GET_FIRMWARE_VERSION
    FIRMWARE_VERSION = 0xF3  # LAN_X_GET_FIRMWARE_VERSION reply


class XGet(enum.IntEnum):
    """DB0 values for X-Bus header 0x21."""

    VERSION = 0x21
    STATUS = 0x24
    TRACK_POWER_OFF = 0x80
    TRACK_POWER_ON = 0x81


class XBroadcast(enum.IntEnum):
    """DB0 values for X-Bus header 0x61."""

    TRACK_POWER_OFF = 0x00
    TRACK_POWER_ON = 0x01
    PROGRAMMING_MODE = 0x02
    TRACK_SHORT_CIRCUIT = 0x08


class BroadcastFlag(enum.IntFlag):
    """Broadcast classes a client subscribes to with LAN_SET_BROADCASTFLAGS."""

    DRIVING_SWITCHING = 0x00000001  # loco and turnout info broadcasts
    SYSTEM_STATE = 0x00000100  # LAN_SYSTEMSTATE_DATACHANGED


DEFAULT_BROADCAST_FLAGS = BroadcastFlag.DRIVING_SWITCHING | BroadcastFlag.SYSTEM_STATE

VERSION_DB0 = 0x21  # DB0 of a version reply
FIRMWARE_VERSION_DB0 = 0x0A  # DB0 of firmware version request and reply
LOCO_INFO_DB0 = 0xF0  # DB0 of a loco info request
LOCO_DRIVE_128_STEPS = 0x13  # DB0 of a loco drive command in 128 speed step mode

OCCUPIED_BIT = 0x08  # loco info DB2: loco driven by another controller
