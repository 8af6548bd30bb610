"""Exception hierarchy for z21codec.

All exceptions inherit from Z21Error so callers can catch anything raised by
the package in one place.
"""

from __future__ import annotations


class Z21Error(Exception):
    """Base exception for all z21codec errors."""

    pass


class FramingError(Z21Error):
    """Raised when a datagram cannot be split into telegrams.

    The length byte at ``offset`` is either smaller than the minimum telegram
    size (4) or points past the end of the datagram. Telegram lengths are the
    only alignment information in a datagram, so everything from ``offset``
    onwards is discarded.

    Attributes:
        offset: Position of the offending length byte within the datagram
        declared_length: Value of that length byte
        discarded: The unparsed tail of the datagram
    """

    def __init__(self, message: str, *, offset: int, declared_length: int, discarded: bytes) -> None:
        super().__init__(message)
        self.offset = offset
        self.declared_length = declared_length
        self.discarded = discarded


class DecodeError(Z21Error):
    """Raised when a framed telegram is too short for its opcode.

    Examples:
        - X-Bus telegram without an X-Bus header byte
        - Loco info telegram missing the speed byte
        - System state telegram shorter than 18 bytes
    """

    pass


class EncodeError(Z21Error):
    """Raised when an outbound command cannot be built from its arguments."""

    pass


class InvalidAddressError(EncodeError, ValueError):
    """Raised when a command needs a locomotive address and got 0 or None."""

    pass


class TransportError(Z21Error):
    """Raised when the transport cannot deliver a datagram.

    Examples:
        - Sending before connect() or after disconnect()
        - Socket error while sending (a reconnect has already been attempted)
    """

    pass
