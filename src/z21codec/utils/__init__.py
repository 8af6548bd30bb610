"""Utility functions for z21codec.

This module provides the leaf helpers shared by the encoder and decoder: the
XOR checksum, the locomotive address wire codec and hex formatting.
"""

from __future__ import annotations

from .address import MAX_ADDRESS, MIN_ADDRESS, NO_ADDRESS, clamp_address, decode_address, encode_address
from .checksum import verify_xor_checksum, xor_checksum
from .hexdump import format_bytes, parse_hex

__all__ = [
    # Checksum
    "xor_checksum",
    "verify_xor_checksum",
    # Address codec
    "clamp_address",
    "encode_address",
    "decode_address",
    "MIN_ADDRESS",
    "MAX_ADDRESS",
    "NO_ADDRESS",
    # Formatting
    "format_bytes",
    "parse_hex",
]
