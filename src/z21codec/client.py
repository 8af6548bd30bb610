"""Stateless protocol client.

ProtocolClient composes the framer and decoder for inbound datagrams and
exposes the encoder's command set for outbound ones. The Z21 LAN protocol has
no session state at this layer, so one client can serve any number of
threads and transports.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from .codec import encoder
from .codec.constants import DEFAULT_BROADCAST_FLAGS, BroadcastFlag
from .codec.decoder import decode_telegram
from .exceptions import DecodeError, FramingError
from .framing import iter_telegrams, split_datagram
from .models.address import LocoAddress
from .models.events import DecodedEvent, UnrecognizedEvent
from .models.info import LocoInfo
from .utils.hexdump import format_bytes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DatagramResult:
    """Events decoded from one datagram.

    Attributes:
        events: One event per telegram, in datagram order
        framing_error: The fault that truncated the datagram, if any
    """

    events: list[DecodedEvent] = field(default_factory=list)
    framing_error: FramingError | None = None

    @property
    def ok(self) -> bool:
        return self.framing_error is None


class ProtocolClient:
    """Z21 LAN protocol codec facade.

    Examples:
        ```python
        client = ProtocolClient()

        # Outbound
        sock.send(client.set_track_power_on())
        sock.send(client.get_loco_info(LocoAddress(3)))

        # Inbound
        result = client.decode_datagram(sock.recv(1024))
        for event in result.events:
            print(event)
        ```
    """

    # ------------------------------------------------------------------
    # Inbound
    # ------------------------------------------------------------------

    def decode_telegram(self, telegram: bytes) -> DecodedEvent:
        """Decode one telegram, never raising on its content.

        A telegram too short for its opcode is logged and returned as
        :class:`UnrecognizedEvent` carrying the raw bytes.
        """
        try:
            return decode_telegram(telegram)
        except DecodeError as e:
            logger.warning("%s", e)
            return UnrecognizedEvent(raw=bytes(telegram))

    def decode_datagram(self, datagram: bytes | None) -> DatagramResult:
        """Frame and decode a whole datagram.

        Args:
            datagram: Raw datagram as received from the station

        Returns:
            DatagramResult with one event per telegram framed before any fault
        """
        framed = split_datagram(datagram)
        events = [self.decode_telegram(telegram) for telegram in framed.telegrams]
        return DatagramResult(events=events, framing_error=framed.error)

    def iter_events(self, datagram: bytes | None) -> Iterator[DecodedEvent]:
        """Lazily frame and decode a datagram.

        A framing fault ends the iteration; it is logged, not raised.
        """
        try:
            for telegram in iter_telegrams(datagram):
                yield self.decode_telegram(telegram)
        except FramingError as e:
            logger.warning("%s; discarded %s", e, format_bytes(e.discarded))

    # ------------------------------------------------------------------
    # Outbound
    # ------------------------------------------------------------------

    def get_serial_number(self) -> bytes:
        return encoder.get_serial_number()

    def get_version(self) -> bytes:
        return encoder.get_version()

    def get_status(self) -> bytes:
        return encoder.get_status()

    def set_track_power_off(self) -> bytes:
        return encoder.set_track_power_off()

    def set_track_power_on(self) -> bytes:
        return encoder.set_track_power_on()

    def set_stop(self) -> bytes:
        return encoder.set_stop()

    def get_firmware_version(self) -> bytes:
        return encoder.get_firmware_version()

    def set_broadcast_flags(self, flags: BroadcastFlag | int = DEFAULT_BROADCAST_FLAGS) -> bytes:
        return encoder.set_broadcast_flags(flags)

    def get_system_state(self) -> bytes:
        return encoder.get_system_state()

    def get_hardware_info(self) -> bytes:
        return encoder.get_hardware_info()

    def logoff(self) -> bytes:
        return encoder.logoff()

    def get_loco_info(self, address: LocoAddress | int | None) -> bytes:
        """Build a loco info request; raises InvalidAddressError for address 0."""
        return encoder.get_loco_info(address)

    def set_loco_drive(self, info: LocoInfo) -> bytes:
        """Build a 128-step drive command for ``info``."""
        return encoder.set_loco_drive(info)
