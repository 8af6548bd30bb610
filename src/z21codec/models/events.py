"""Decoded event types.

Every telegram decodes to exactly one event. The events form a tagged union,
:data:`DecodedEvent`, discriminated by the ``kind`` field, so applications can
dispatch with ``match`` or ``isinstance`` instead of registering handlers::

    for event in client.decode_datagram(datagram).events:
        match event:
            case LocoInfoEvent(info=info):
                print(info.address, info.speed_step)
            case TrackPowerOffEvent():
                print("track power off")
            case UnrecognizedEvent(raw=raw):
                print("unknown telegram", raw.hex(" "))
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import Field

from .base import Z21Model
from .info import FirmwareVersion, HardwareInfo, LocoInfo, VersionInfo
from .state import CentralState, SystemStateData


class SerialNumberEvent(Z21Model):
    """Reply to LAN_GET_SERIAL_NUMBER."""

    kind: Literal["serial_number"] = "serial_number"
    serial_number: int


class VersionEvent(Z21Model):
    """Reply to LAN_X_GET_VERSION."""

    kind: Literal["version"] = "version"
    info: VersionInfo


class TrackPowerOffEvent(Z21Model):
    """Broadcast: track power switched off."""

    kind: Literal["track_power_off"] = "track_power_off"

    @property
    def track_power_on(self) -> bool:
        return False


class TrackPowerOnEvent(Z21Model):
    """Broadcast: track power switched on."""

    kind: Literal["track_power_on"] = "track_power_on"

    @property
    def track_power_on(self) -> bool:
        return True


class ProgrammingModeEvent(Z21Model):
    """Broadcast: the station entered service (programming) mode."""

    kind: Literal["programming_mode"] = "programming_mode"


class ShortCircuitEvent(Z21Model):
    """Broadcast: short circuit on the track."""

    kind: Literal["short_circuit"] = "short_circuit"


class StatusChangedEvent(Z21Model):
    """Reply to LAN_X_GET_STATUS."""

    kind: Literal["status_changed"] = "status_changed"
    state: CentralState


class StoppedEvent(Z21Model):
    """Broadcast: emergency stop, all locomotives halted."""

    kind: Literal["stopped"] = "stopped"


class FirmwareVersionEvent(Z21Model):
    """Reply to LAN_X_GET_FIRMWARE_VERSION."""

    kind: Literal["firmware_version"] = "firmware_version"
    version: FirmwareVersion


class SystemStateChangedEvent(Z21Model):
    """LAN_SYSTEMSTATE_DATACHANGED, broadcast or reply to a system state query."""

    kind: Literal["system_state_changed"] = "system_state_changed"
    data: SystemStateData


class HardwareInfoEvent(Z21Model):
    """Reply to LAN_GET_HWINFO."""

    kind: Literal["hardware_info"] = "hardware_info"
    info: HardwareInfo


class LocoInfoEvent(Z21Model):
    """LAN_X_LOCO_INFO, broadcast or reply to a loco info query."""

    kind: Literal["loco_info"] = "loco_info"
    info: LocoInfo


class UnrecognizedEvent(Z21Model):
    """A framed telegram with no matching decoder.

    Carries the telegram unchanged so nothing received is silently lost.
    """

    kind: Literal["unrecognized"] = "unrecognized"
    raw: bytes


DecodedEvent = Annotated[
    Union[
        SerialNumberEvent,
        VersionEvent,
        TrackPowerOffEvent,
        TrackPowerOnEvent,
        ProgrammingModeEvent,
        ShortCircuitEvent,
        StatusChangedEvent,
        StoppedEvent,
        FirmwareVersionEvent,
        SystemStateChangedEvent,
        HardwareInfoEvent,
        LocoInfoEvent,
        UnrecognizedEvent,
    ],
    Field(discriminator="kind"),
]

# isinstance() target for both track power broadcasts
TrackPowerEvent = Union[TrackPowerOffEvent, TrackPowerOnEvent]
