"""UDP transport to a Z21 command station.

The station talks to whichever address and port a client last sent from, so
the socket is bound once and connected to the station. A background thread
receives datagrams and hands them to the registered callbacks.

Design Patterns:
- Background thread: receive with a socket timeout and a per-connection
  stop flag, so disconnect() stops exactly the thread it started
- Reconnect on send failure: the socket is re-connected before the error is
  reported to the caller
"""

from __future__ import annotations

import logging
import socket
import threading
from threading import Thread

from ..exceptions import TransportError
from ..utils.hexdump import format_bytes
from .config import UdpTransportConfig
from .driver import DatagramCallback, Transport

logger = logging.getLogger(__name__)


class UdpTransport(Transport):
    """Datagram transport over UDP.

    Attributes:
        config: Host, ports and socket parameters

    Examples:
        ```python
        from z21codec import ProtocolClient
        from z21codec.transport import UdpTransport, UdpTransportConfig

        client = ProtocolClient()
        transport = UdpTransport(UdpTransportConfig(host="192.168.0.111"))

        def on_datagram(data: bytes) -> None:
            for event in client.decode_datagram(data).events:
                print(event)

        transport.attach_rx_callback(on_datagram)
        transport.connect()
        transport.send(client.get_serial_number())
        ```
    """

    def __init__(self, config: UdpTransportConfig | None = None) -> None:
        self.config = config if config is not None else UdpTransportConfig()
        self._callbacks: list[DatagramCallback] = []
        self._callbacks_lock = threading.Lock()
        self._sock: socket.socket | None = None
        self._thread: Thread | None = None
        self._stop: threading.Event | None = None

    @property
    def is_connected(self) -> bool:
        return self._sock is not None

    @property
    def local_address(self) -> tuple[str, int] | None:
        """Address the socket is bound to, None while disconnected."""
        if self._sock is None:
            return None
        return self._sock.getsockname()

    def connect(self) -> None:
        if self._sock is not None:
            logger.debug("Already connected to %s:%d", self.config.host, self.config.port)
            return

        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind(("", self.config.bind_port))
            sock.connect((self.config.host, self.config.port))
            sock.settimeout(self.config.receive_timeout)
        except OSError as e:
            sock.close()
            raise TransportError(
                f"Cannot connect to {self.config.host}:{self.config.port}: {e}"
            ) from e

        # each connection has its own stop flag, so an old receive thread stays stopped
        stop = threading.Event()
        self._sock = sock
        self._stop = stop
        self._thread = Thread(
            target=self._rx_loop, args=(sock, stop), daemon=True, name="Z21-RX"
        )
        self._thread.start()
        logger.info(
            "Connected to %s:%d (local port %d)",
            self.config.host,
            self.config.port,
            sock.getsockname()[1],
        )

    def reconnect(self) -> None:
        """Re-connect the socket to the station after a socket error.

        Raises:
            TransportError: If not connected or the connect call fails
        """
        sock = self._sock
        if sock is None:
            raise TransportError("Transport not connected. Call connect() first.")
        try:
            sock.connect((self.config.host, self.config.port))
        except OSError as e:
            raise TransportError(f"Reconnect to {self.config.host}:{self.config.port} failed: {e}") from e
        logger.info("Reconnected to %s:%d", self.config.host, self.config.port)

    def send(self, data: bytes) -> None:
        sock = self._sock
        if sock is None:
            raise TransportError("Transport not connected. Call connect() before send().")

        try:
            sock.send(data)
        except OSError as e:
            logger.warning("Send of %s failed: %s; reconnecting", format_bytes(data), e)
            try:
                self.reconnect()
            except TransportError as reconnect_error:
                logger.warning("%s", reconnect_error)
            raise TransportError(f"Send failed: {e}") from e

        logger.debug("Sent %s", format_bytes(data))

    def attach_rx_callback(self, callback: DatagramCallback) -> None:
        with self._callbacks_lock:
            self._callbacks.append(callback)

    def detach_rx_callback(self, callback: DatagramCallback) -> None:
        with self._callbacks_lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    def disconnect(self) -> None:
        sock = self._sock
        if sock is None:
            return

        if self._stop is not None:
            self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=self.config.receive_timeout * 4)
        sock.close()
        self._sock = None
        self._thread = None
        self._stop = None
        logger.info("Disconnected from %s:%d", self.config.host, self.config.port)

    def __enter__(self) -> UdpTransport:
        self.connect()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.disconnect()

    def _rx_loop(self, sock: socket.socket, stop: threading.Event) -> None:
        """Receive datagrams on ``sock`` until ``stop`` is set by disconnect()."""
        logger.debug("Receive thread started")
        while not stop.is_set():
            try:
                data = sock.recv(self.config.buffer_size)
            except socket.timeout:
                continue
            except OSError as e:
                if stop.is_set():
                    break
                # ICMP port unreachable surfaces here on a connected socket
                logger.warning("Receive error: %s", e)
                continue

            logger.debug("Received %s", format_bytes(data))
            self._dispatch(data)

        logger.debug("Receive thread stopped")

    def _dispatch(self, data: bytes) -> None:
        with self._callbacks_lock:
            callbacks = list(self._callbacks)
        for callback in callbacks:
            try:
                callback(data)
            except Exception:
                logger.exception("Receive callback %r failed", callback)
