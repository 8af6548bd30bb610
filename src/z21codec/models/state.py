"""Command station state: central state flags and the system state snapshot."""

from __future__ import annotations

import enum

from .base import Z21Model

UNKNOWN_READING = -1


class CentralStateFlag(enum.IntFlag):
    """Bits of the central state byte."""

    EMERGENCY_STOP = 0x01
    TRACK_VOLTAGE_OFF = 0x02
    SHORT_CIRCUIT = 0x04
    PROGRAMMING_MODE = 0x20


class CentralStateExFlag(enum.IntFlag):
    """Bits of the extended central state byte."""

    HIGH_TEMPERATURE = 0x01
    POWER_LOST = 0x02
    SHORT_CIRCUIT_EXTERNAL = 0x04
    SHORT_CIRCUIT_INTERNAL = 0x08


class CentralState(Z21Model):
    """Central state flags, reported by status-changed and system-state telegrams."""

    emergency_stop: bool = False
    track_voltage_off: bool = False
    short_circuit: bool = False
    programming_mode: bool = False

    @classmethod
    def from_byte(cls, value: int) -> CentralState:
        """Extract the flags from a central state byte; other bits are ignored."""
        return cls(
            emergency_stop=bool(value & CentralStateFlag.EMERGENCY_STOP),
            track_voltage_off=bool(value & CentralStateFlag.TRACK_VOLTAGE_OFF),
            short_circuit=bool(value & CentralStateFlag.SHORT_CIRCUIT),
            programming_mode=bool(value & CentralStateFlag.PROGRAMMING_MODE),
        )

    def to_byte(self) -> int:
        flags = CentralStateFlag(0)
        if self.emergency_stop:
            flags |= CentralStateFlag.EMERGENCY_STOP
        if self.track_voltage_off:
            flags |= CentralStateFlag.TRACK_VOLTAGE_OFF
        if self.short_circuit:
            flags |= CentralStateFlag.SHORT_CIRCUIT
        if self.programming_mode:
            flags |= CentralStateFlag.PROGRAMMING_MODE
        return int(flags)


class CentralStateEx(Z21Model):
    """Extended central state flags (system state telegram only)."""

    high_temperature: bool = False
    power_lost: bool = False
    short_circuit_external: bool = False
    short_circuit_internal: bool = False

    @classmethod
    def from_byte(cls, value: int) -> CentralStateEx:
        return cls(
            high_temperature=bool(value & CentralStateExFlag.HIGH_TEMPERATURE),
            power_lost=bool(value & CentralStateExFlag.POWER_LOST),
            short_circuit_external=bool(value & CentralStateExFlag.SHORT_CIRCUIT_EXTERNAL),
            short_circuit_internal=bool(value & CentralStateExFlag.SHORT_CIRCUIT_INTERNAL),
        )

    def to_byte(self) -> int:
        flags = CentralStateExFlag(0)
        if self.high_temperature:
            flags |= CentralStateExFlag.HIGH_TEMPERATURE
        if self.power_lost:
            flags |= CentralStateExFlag.POWER_LOST
        if self.short_circuit_external:
            flags |= CentralStateExFlag.SHORT_CIRCUIT_EXTERNAL
        if self.short_circuit_internal:
            flags |= CentralStateExFlag.SHORT_CIRCUIT_INTERNAL
        return int(flags)


class SystemStateData(Z21Model):
    """Snapshot of the command station's electrical and thermal state.

    Readings default to -1, meaning "not reported". Decoded values come from
    the system-state-changed telegram.

    Attributes:
        main_current: Main track current in mA
        prog_current: Programming track current in mA
        filtered_main_current: Smoothed main track current in mA
        temperature: Internal temperature in degrees C
        supply_voltage: Supply voltage in mV
        vcc_voltage: Internal (track) voltage in mV
        central_state: Central state flags
        central_state_ex: Extended central state flags
    """

    main_current: int = UNKNOWN_READING
    prog_current: int = UNKNOWN_READING
    filtered_main_current: int = UNKNOWN_READING
    temperature: int = UNKNOWN_READING
    supply_voltage: int = UNKNOWN_READING
    vcc_voltage: int = UNKNOWN_READING
    central_state: CentralState = CentralState()
    central_state_ex: CentralStateEx = CentralStateEx()
