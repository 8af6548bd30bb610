"""Datagram to telegram framing.

A single UDP datagram from the station may carry several telegrams back to
back. Each telegram starts with its own length:

    +---------+---------+---------+---------+------------------+
    | Len LSB | Len MSB | Header  | Header  |   Data ...       |
    | 1 byte  | 1 byte  | LSB     | MSB     |                  |
    +---------+---------+---------+---------+------------------+

- Length: little-endian 16-bit, counts the whole telegram including itself.
  Telegrams never exceed 255 bytes, so only the low byte is read.
- Header: LAN header (0x40 for X-Bus tunnelled telegrams)

The length byte is the only alignment marker. Once a length is invalid (less
than 4, or running past the end of the datagram) the position of the next
telegram is unknown, so the rest of the datagram is dropped.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from ..exceptions import FramingError
from ..utils.hexdump import format_bytes

logger = logging.getLogger(__name__)

MIN_TELEGRAM_LENGTH = 4


@dataclass(frozen=True)
class FramedDatagram:
    """Result of splitting one datagram.

    Attributes:
        telegrams: Telegrams framed before any fault, in datagram order
        error: The framing fault that truncated the datagram, if any
    """

    telegrams: list[bytes] = field(default_factory=list)
    error: FramingError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def iter_telegrams(datagram: bytes | None) -> Iterator[bytes]:
    """Lazily split a datagram into telegrams.

    Every telegram before a fault is yielded first; the fault is then raised
    from the generator.

    Args:
        datagram: Raw datagram as received; None or empty yields nothing

    Yields:
        One telegram per iteration, as an immutable ``bytes`` slice

    Raises:
        FramingError: If a length byte is below 4 or overruns the datagram

    Example:
        >>> list(iter_telegrams(bytes.fromhex("04001000" "0400 1a00")))
        [b'\\x04\\x00\\x10\\x00', b'\\x04\\x00\\x1a\\x00']
    """
    if not datagram:
        return

    data = bytes(datagram)
    size = len(data)
    position = 0

    while position < size:
        length = data[position]
        if length < MIN_TELEGRAM_LENGTH or position + length > size:
            raise FramingError(
                f"Invalid telegram length {length} at offset {position} "
                f"({size - position} bytes left in datagram)",
                offset=position,
                declared_length=length,
                discarded=data[position:],
            )
        yield data[position : position + length]
        position += length


def split_datagram(datagram: bytes | None) -> FramedDatagram:
    """Split a datagram into telegrams, collecting a framing fault instead of raising.

    The fault is logged at WARNING level with the discarded bytes.

    Args:
        datagram: Raw datagram as received

    Returns:
        FramedDatagram with the telegrams before any fault and the fault itself
    """
    telegrams: list[bytes] = []
    try:
        for telegram in iter_telegrams(datagram):
            telegrams.append(telegram)
    except FramingError as e:
        logger.warning("%s; discarded %s", e, format_bytes(e.discarded))
        return FramedDatagram(telegrams=telegrams, error=e)
    return FramedDatagram(telegrams=telegrams)
