"""Datagram transports for z21codec.

The codec layer is pure; these classes move datagrams to and from the
command station:

- **UdpTransport**: UDP socket with a background receive thread and
  reconnect-on-error
- **MockTransport**: in-memory transport with canned replies, for tests
"""

from __future__ import annotations

from .config import DEFAULT_PORT, UdpTransportConfig
from .driver import DatagramCallback, Transport
from .mock import MockTransport
from .udp import UdpTransport

__all__ = [
    "Transport",
    "DatagramCallback",
    "UdpTransport",
    "UdpTransportConfig",
    "MockTransport",
    "DEFAULT_PORT",
]
