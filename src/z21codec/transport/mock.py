"""In-memory transport for tests and offline tooling.

MockTransport records every datagram sent and lets a test inject datagrams as
if the station had sent them. Canned replies emulate a station answering
requests.
"""

from __future__ import annotations

import logging

from ..exceptions import TransportError
from ..utils.hexdump import format_bytes
from .driver import DatagramCallback, Transport

logger = logging.getLogger(__name__)


class MockTransport(Transport):
    """Simulated transport with synchronous delivery.

    Attributes:
        sent: Datagrams passed to send(), in order
        rx_callbacks: Registered receive callbacks
        responses: Canned replies keyed by the exact request bytes

    Examples:
        ```python
        from z21codec.codec import encoder

        transport = MockTransport()
        transport.add_response(
            encoder.get_serial_number(), bytes.fromhex("08 00 10 00 4A 30 01 00")
        )
        transport.attach_rx_callback(lambda data: print(data.hex(" ")))
        transport.connect()

        transport.send(encoder.get_serial_number())  # prints the canned reply
        assert transport.sent == [encoder.get_serial_number()]
        ```
    """

    def __init__(self) -> None:
        self.sent: list[bytes] = []
        self.rx_callbacks: list[DatagramCallback] = []
        self.responses: dict[bytes, bytes] = {}
        self._connected = False

    @property
    def is_connected(self) -> bool:
        return self._connected

    def connect(self) -> None:
        self._connected = True
        logger.debug("Mock transport connected")

    def disconnect(self) -> None:
        self._connected = False
        logger.debug("Mock transport disconnected")

    def send(self, data: bytes) -> None:
        if not self._connected:
            raise TransportError("Transport not connected. Call connect() before send().")
        self.sent.append(bytes(data))
        logger.debug("Sent %s", format_bytes(data))

        reply = self.responses.get(bytes(data))
        if reply is not None:
            self.inject(reply)

    def add_response(self, request: bytes, reply: bytes) -> None:
        """Reply with ``reply`` whenever exactly ``request`` is sent."""
        self.responses[bytes(request)] = bytes(reply)

    def inject(self, datagram: bytes) -> None:
        """Deliver ``datagram`` to every callback as if the station sent it.

        Callback exceptions propagate, so test failures inside callbacks
        surface at the injection site.
        """
        if not self._connected:
            raise TransportError("Transport not connected. Call connect() before inject().")
        logger.debug("Received %s", format_bytes(datagram))
        for callback in list(self.rx_callbacks):
            callback(bytes(datagram))

    def attach_rx_callback(self, callback: DatagramCallback) -> None:
        self.rx_callbacks.append(callback)

    def detach_rx_callback(self, callback: DatagramCallback) -> None:
        if callback in self.rx_callbacks:
            self.rx_callbacks.remove(callback)
