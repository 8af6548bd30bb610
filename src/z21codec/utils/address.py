"""Locomotive address wire codec.

Locomotive addresses are 14-bit values in the range 1-9999 and travel as two
bytes, most significant first. Addresses of 128 and above are long DCC
addresses; the station expects the two top bits of the MSB set for them.
Decoding masks those marker bits off again.

Out-of-range values never raise: they collapse to 0, the "no address"
sentinel.
"""

from __future__ import annotations

MIN_ADDRESS = 1
MAX_ADDRESS = 9999
NO_ADDRESS = 0

LONG_ADDRESS_THRESHOLD = 128
LONG_ADDRESS_MARKER = 0xC0
ADDRESS_MSB_MASK = 0x3F


def clamp_address(value: int) -> int:
    """Return ``value`` if it is a valid address, else 0."""
    if MIN_ADDRESS <= value <= MAX_ADDRESS:
        return value
    return NO_ADDRESS


def encode_address(value: int) -> bytes:
    """Encode an address as its two-byte wire form (MSB, LSB).

    Args:
        value: Locomotive address; out-of-range values encode as address 0

    Returns:
        Two bytes: MSB (with long-address marker if needed), LSB

    Example:
        >>> encode_address(3).hex()
        '0003'
        >>> encode_address(1234).hex()
        'c4d2'
    """
    value = clamp_address(value)
    msb = value >> 8
    if value >= LONG_ADDRESS_THRESHOLD:
        msb |= LONG_ADDRESS_MARKER
    return bytes([msb, value & 0xFF])


def decode_address(msb: int, lsb: int) -> int:
    """Decode the two wire bytes of an address.

    The long-address marker bits are ignored. A result outside 1-9999 (only
    possible with a corrupt MSB) becomes 0.

    Example:
        >>> decode_address(0xC4, 0xD2)
        1234
    """
    return clamp_address(((msb & ADDRESS_MSB_MASK) << 8) | lsb)
