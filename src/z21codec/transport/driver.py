"""Abstract interface for datagram transports.

The codec never touches sockets. A Transport moves whole datagrams between
the application and the command station:

- UdpTransport: the real thing, UDP on port 21105
- MockTransport: in-memory, for tests and offline tooling
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

DatagramCallback = Callable[[bytes], None]


class Transport(ABC):
    """Abstract interface for datagram transports.

    Examples:
        ```python
        transport = UdpTransport(UdpTransportConfig(host="192.168.0.111"))
        transport.attach_rx_callback(lambda data: print(data.hex(" ")))
        transport.connect()
        transport.send(encoder.get_serial_number())
        transport.disconnect()
        ```
    """

    @abstractmethod
    def connect(self) -> None:
        """Open the transport and start delivering received datagrams.

        Raises:
            TransportError: If the transport cannot be opened
        """
        pass

    @abstractmethod
    def send(self, data: bytes) -> None:
        """Send one datagram to the command station.

        Raises:
            TransportError: If the transport is closed or the send fails
        """
        pass

    @abstractmethod
    def attach_rx_callback(self, callback: DatagramCallback) -> None:
        """Register a callback invoked with every received datagram.

        Multiple callbacks can be registered; they run in registration order.
        """
        pass

    @abstractmethod
    def detach_rx_callback(self, callback: DatagramCallback) -> None:
        """Remove a previously registered callback. Unknown callbacks are ignored."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Close the transport. Safe to call more than once."""
        pass

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        pass
