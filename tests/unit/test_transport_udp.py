"""Tests for the UDP transport against a loopback fake station."""

from __future__ import annotations

import logging
import socket
import threading
import time
from collections.abc import Iterator

import pytest

from z21codec.codec import encoder
from z21codec.exceptions import TransportError
from z21codec.transport import UdpTransport, UdpTransportConfig

TIMEOUT = 2.0


@pytest.fixture
def station_socket() -> Iterator[socket.socket]:
    """UDP socket standing in for the command station."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(TIMEOUT)
    yield sock
    sock.close()


@pytest.fixture
def transport(station_socket: socket.socket) -> Iterator[UdpTransport]:
    config = UdpTransportConfig(
        host="127.0.0.1",
        port=station_socket.getsockname()[1],
        local_port=0,
        receive_timeout=0.05,
    )
    udp = UdpTransport(config)
    yield udp
    udp.disconnect()


class TestUdpTransport:
    """Tests for UdpTransport."""

    def test_not_connected_initially(self, transport: UdpTransport) -> None:
        assert not transport.is_connected
        assert transport.local_address is None

    def test_send_requires_connection(self, transport: UdpTransport) -> None:
        with pytest.raises(TransportError, match="not connected"):
            transport.send(encoder.get_serial_number())

    def test_reconnect_requires_connection(self, transport: UdpTransport) -> None:
        with pytest.raises(TransportError):
            transport.reconnect()

    def test_send_reaches_station(
        self, transport: UdpTransport, station_socket: socket.socket
    ) -> None:
        transport.connect()
        transport.send(encoder.get_serial_number())

        data, _ = station_socket.recvfrom(1024)
        assert data == encoder.get_serial_number()

    def test_receive_dispatches_to_callback(
        self, transport: UdpTransport, station_socket: socket.socket
    ) -> None:
        received: list[bytes] = []
        done = threading.Event()

        def on_datagram(data: bytes) -> None:
            received.append(data)
            done.set()

        transport.attach_rx_callback(on_datagram)
        transport.connect()
        transport.send(encoder.get_serial_number())

        _, client_address = station_socket.recvfrom(1024)
        reply = bytes.fromhex("08 00 10 00 4A 30 01 00")
        station_socket.sendto(reply, client_address)

        assert done.wait(TIMEOUT)
        assert received == [reply]

    def test_failing_callback_does_not_stop_others(
        self, transport: UdpTransport, station_socket: socket.socket
    ) -> None:
        done = threading.Event()

        def boom(data: bytes) -> None:
            raise RuntimeError("callback failed")

        transport.attach_rx_callback(boom)
        transport.attach_rx_callback(lambda data: done.set())
        transport.connect()
        transport.send(encoder.logoff())

        _, client_address = station_socket.recvfrom(1024)
        station_socket.sendto(b"\x04\x00\x30\x00", client_address)

        assert done.wait(TIMEOUT)

    def test_connect_twice_is_noop(self, transport: UdpTransport) -> None:
        transport.connect()
        address = transport.local_address
        transport.connect()

        assert transport.local_address == address

    def test_disconnect(self, transport: UdpTransport) -> None:
        transport.connect()
        assert transport.is_connected

        transport.disconnect()
        assert not transport.is_connected

        transport.disconnect()  # idempotent
        with pytest.raises(TransportError):
            transport.send(encoder.logoff())

    def test_reconnect_from_callback_stops_old_receiver(
        self,
        transport: UdpTransport,
        station_socket: socket.socket,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test a disconnect/connect inside a callback leaves only the new receive thread."""
        receivers: list[threading.Thread] = []
        reconnected = threading.Event()

        def on_datagram(data: bytes) -> None:
            if not receivers:
                receivers.append(threading.current_thread())
                transport.disconnect()
                transport.connect()
                reconnected.set()

        transport.attach_rx_callback(on_datagram)
        transport.connect()
        transport.send(encoder.logoff())
        _, client_address = station_socket.recvfrom(1024)

        with caplog.at_level(logging.WARNING, logger="z21codec.transport.udp"):
            station_socket.sendto(b"\x04\x00\x30\x00", client_address)
            assert reconnected.wait(TIMEOUT)
            receivers[0].join(TIMEOUT)
            time.sleep(0.2)  # several receive timeouts of the new connection

        assert not receivers[0].is_alive()
        assert "Receive error" not in caplog.text

        transport.send(encoder.get_status())
        data, _ = station_socket.recvfrom(1024)
        assert data == encoder.get_status()

    def test_context_manager(self, station_socket: socket.socket) -> None:
        config = UdpTransportConfig(
            host="127.0.0.1",
            port=station_socket.getsockname()[1],
            local_port=0,
            receive_timeout=0.05,
        )

        with UdpTransport(config) as transport:
            assert transport.is_connected
            transport.send(encoder.get_status())

        assert not transport.is_connected
        data, _ = station_socket.recvfrom(1024)
        assert data == encoder.get_status()
