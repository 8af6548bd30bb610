"""Hex formatting helpers for telegram diagnostics."""

from __future__ import annotations

import re

_SEPARATORS = re.compile(r"[\s,:;]+")


def format_bytes(data: bytes) -> str:
    """Render bytes as upper-case hex pairs, e.g. ``07 00 40 00 21 81 A0``."""
    return data.hex(" ").upper()


def parse_hex(text: str) -> bytes:
    """Parse a hex dump into bytes.

    Accepts the formats people paste from sniffers and logs: pairs separated
    by spaces, commas, colons or semicolons, optional ``0x`` prefixes, or one
    run of hex digits.

    Raises:
        ValueError: If the text contains anything that is not hex

    Example:
        >>> parse_hex("0x07,0x00 40:00")
        b'\\x07\\x00@\\x00'
    """
    tokens = [t for t in _SEPARATORS.split(text.strip()) if t]
    cleaned = []
    for token in tokens:
        if token.lower().startswith("0x"):
            token = token[2:]
        # single digits come from dumps that drop the leading zero ("7,0,40")
        if len(token) == 1:
            token = "0" + token
        cleaned.append(token)
    try:
        return bytes.fromhex("".join(cleaned))
    except ValueError as e:
        raise ValueError(f"Invalid hex input {text!r}: {e}") from e
