"""Pydantic value types for z21codec.

This module provides the immutable domain model: locomotive addresses and
state, station state and hardware information, and the decoded event union.
"""

from __future__ import annotations

from .address import LocoAddress
from .base import Z21Model
from .events import (
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
    TrackPowerEvent,
    TrackPowerOffEvent,
    TrackPowerOnEvent,
    UnrecognizedEvent,
    VersionEvent,
)
from .info import Direction, FirmwareVersion, HardwareInfo, HardwareType, LocoInfo, VersionFamily, VersionInfo
from .state import CentralState, CentralStateEx, CentralStateExFlag, CentralStateFlag, SystemStateData

__all__ = [
    "Z21Model",
    # Values
    "LocoAddress",
    "LocoInfo",
    "Direction",
    "CentralState",
    "CentralStateEx",
    "CentralStateFlag",
    "CentralStateExFlag",
    "SystemStateData",
    "HardwareType",
    "HardwareInfo",
    "FirmwareVersion",
    "VersionFamily",
    "VersionInfo",
    # Events
    "DecodedEvent",
    "TrackPowerEvent",
    "SerialNumberEvent",
    "VersionEvent",
    "TrackPowerOffEvent",
    "TrackPowerOnEvent",
    "ProgrammingModeEvent",
    "ShortCircuitEvent",
    "StatusChangedEvent",
    "StoppedEvent",
    "FirmwareVersionEvent",
    "SystemStateChangedEvent",
    "HardwareInfoEvent",
    "LocoInfoEvent",
    "UnrecognizedEvent",
]
