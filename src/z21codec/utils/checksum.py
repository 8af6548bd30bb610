"""XOR checksum used by X-Bus telegrams.

The checksum byte is the bytewise XOR of every byte from the X-Bus header
through the last data byte. The two length bytes and the LAN header are not
included.
"""

from __future__ import annotations

from functools import reduce
from operator import xor


def xor_checksum(data: bytes) -> int:
    """Calculate the XOR checksum of ``data``.

    Args:
        data: X-Bus header and data bytes

    Returns:
        Checksum byte (0-255); 0 for empty input

    Example:
        >>> xor_checksum(b"\\x21\\x81")
        160
    """
    return reduce(xor, data, 0)


def verify_xor_checksum(data: bytes, expected: int) -> bool:
    """Verify the XOR checksum of ``data`` against ``expected``.

    Args:
        data: X-Bus header and data bytes (without the checksum byte)
        expected: Checksum byte received on the wire

    Returns:
        True if the checksum matches, False otherwise
    """
    if not 0 <= expected <= 0xFF:
        raise ValueError(f"Checksum must be a single byte, got {expected}")
    return xor_checksum(data) == expected
