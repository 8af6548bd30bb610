"""Locomotive address value type."""

from __future__ import annotations

from pydantic import field_validator

from ..utils.address import NO_ADDRESS, clamp_address, decode_address, encode_address
from .base import Z21Model


class LocoAddress(Z21Model):
    """A locomotive address in the range 1-9999.

    Out-of-range input does not raise: it is clamped to 0, the "unset/invalid"
    sentinel. Commands that need a real address (such as
    :func:`~z21codec.codec.encoder.get_loco_info`) reject the sentinel.

    Example:
        >>> LocoAddress(3).to_bytes().hex()
        '0003'
        >>> LocoAddress(10000).value
        0
        >>> LocoAddress.from_bytes(0xC4, 0xD2).value
        1234
    """

    value: int = NO_ADDRESS

    def __init__(self, value: int = NO_ADDRESS) -> None:
        super().__init__(value=value)

    @field_validator("value")
    @classmethod
    def _clamp(cls, value: int) -> int:
        return clamp_address(value)

    @classmethod
    def from_bytes(cls, msb: int, lsb: int) -> LocoAddress:
        """Build an address from its two wire bytes."""
        return cls(decode_address(msb, lsb))

    def to_bytes(self) -> bytes:
        """Return the two-byte wire form (MSB, LSB)."""
        return encode_address(self.value)

    @property
    def msb(self) -> int:
        return self.to_bytes()[0]

    @property
    def lsb(self) -> int:
        return self.to_bytes()[1]

    @property
    def is_valid(self) -> bool:
        """True unless this is the 0 sentinel."""
        return self.value != NO_ADDRESS

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)
