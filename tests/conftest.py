"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from z21codec import ProtocolClient
from z21codec.transport import MockTransport


@pytest.fixture
def client() -> ProtocolClient:
    """Stateless protocol client."""
    return ProtocolClient()


@pytest.fixture
def mock_transport() -> MockTransport:
    """Connected in-memory transport."""
    transport = MockTransport()
    transport.connect()
    return transport


@pytest.fixture
def loco_info_telegram() -> bytes:
    """LAN_X_LOCO_INFO for address 3: occupied, forward, speed step 5."""
    return bytes.fromhex("0A 00 40 00 EF 00 03 28 85 41")


@pytest.fixture
def system_state_telegram() -> bytes:
    """LAN_SYSTEMSTATE_DATACHANGED with representative readings."""
    return bytes.fromhex(
        "14 00 84 00"
        " E8 03"  # main current 1000 mA
        " 0A 00"  # prog current 10 mA
        " E0 03"  # filtered main current 992 mA
        " 23 00"  # temperature 35 C
        " 30 4B"  # supply voltage 19248 mV
        " 10 40"  # VCC voltage 16400 mV
        " 22"  # central state: track voltage off, programming mode
        " 05"  # central state ex: high temperature, external short circuit
        " 00 00"  # reserved, capabilities
    )
