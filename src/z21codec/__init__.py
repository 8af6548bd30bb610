"""z21codec: Z21 LAN protocol telegram codec

A Python library for the binary UDP protocol spoken by Roco/Fleischmann Z21
digital model-railway command stations.

Key Features:
- Datagram framing into length-prefixed telegrams
- Decoding into immutable, Pydantic-validated events (a tagged union)
- Byte-exact command builders with X-Bus XOR checksums
- Stateless codec; optional UDP transport and subscriber-based station facade

Quick Start:
    >>> from z21codec import LocoAddress, ProtocolClient
    >>> client = ProtocolClient()
    >>> client.set_track_power_on().hex(" ")
    '07 00 40 00 21 81 a0'
    >>> client.get_loco_info(LocoAddress(3)).hex(" ")
    '09 00 40 00 e3 f0 00 03 10'
    >>> result = client.decode_datagram(bytes.fromhex("0A 00 40 00 EF 00 03 08 85 61"))
    >>> result.events[0].info.speed_step
    5
"""

from __future__ import annotations

__version__ = "0.1.0"

from .client import DatagramResult, ProtocolClient
from .codec import BroadcastFlag, decode_telegram
from .exceptions import (
    DecodeError,
    EncodeError,
    FramingError,
    InvalidAddressError,
    TransportError,
    Z21Error,
)
from .framing import FramedDatagram, iter_telegrams, split_datagram
from .models import (
    CentralState,
    CentralStateEx,
    DecodedEvent,
    Direction,
    FirmwareVersion,
    FirmwareVersionEvent,
    HardwareInfo,
    HardwareInfoEvent,
    HardwareType,
    LocoAddress,
    LocoInfo,
    LocoInfoEvent,
    ProgrammingModeEvent,
    SerialNumberEvent,
    ShortCircuitEvent,
    StatusChangedEvent,
    StoppedEvent,
    SystemStateChangedEvent,
    SystemStateData,
    TrackPowerOffEvent,
    TrackPowerOnEvent,
    UnrecognizedEvent,
    VersionEvent,
    VersionFamily,
    VersionInfo,
)
from .station import Z21Station
from .utils import decode_address, encode_address, format_bytes, parse_hex, xor_checksum

__all__ = [
    # Core API
    "ProtocolClient",
    "DatagramResult",
    "decode_telegram",
    "iter_telegrams",
    "split_datagram",
    "FramedDatagram",
    "BroadcastFlag",
    "Z21Station",
    # Values
    "LocoAddress",
    "LocoInfo",
    "Direction",
    "CentralState",
    "CentralStateEx",
    "SystemStateData",
    "HardwareType",
    "HardwareInfo",
    "FirmwareVersion",
    "VersionFamily",
    "VersionInfo",
    # Events
    "DecodedEvent",
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
    # Exceptions
    "Z21Error",
    "FramingError",
    "DecodeError",
    "EncodeError",
    "InvalidAddressError",
    "TransportError",
    # Helpers
    "xor_checksum",
    "encode_address",
    "decode_address",
    "format_bytes",
    "parse_hex",
    # Version
    "__version__",
]
