"""Configuration for the UDP transport."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_PORT = 21105


@dataclass
class UdpTransportConfig:
    """Configuration for :class:`~z21codec.transport.udp.UdpTransport`.

    Attributes:
        host: Command station IP address or host name
        port: Command station UDP port (default 21105)
        local_port: Local UDP port to bind. None binds the station port, as
            the station replies to the port it received from; 0 picks a free
            ephemeral port.
        receive_timeout: Socket timeout of the receive loop in seconds. Bounds
            how long disconnect() waits for the receive thread.
        buffer_size: Maximum datagram size read from the socket

    Examples:
        ```python
        config = UdpTransportConfig(host="192.168.0.111")

        # Read Z21_HOST / Z21_PORT / Z21_LOCAL_PORT
        config = UdpTransportConfig.from_env()
        ```
    """

    host: str = "192.168.0.111"
    port: int = DEFAULT_PORT
    local_port: int | None = None
    receive_timeout: float = 0.5
    buffer_size: int = 1024

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if not self.host:
            raise ValueError("host must not be empty")

        if not 1 <= self.port <= 65535:
            raise ValueError(f"port must be 1-65535, got {self.port}")

        if self.local_port is not None and not 0 <= self.local_port <= 65535:
            raise ValueError(f"local_port must be 0-65535, got {self.local_port}")

        if self.receive_timeout <= 0:
            raise ValueError(f"receive_timeout must be > 0, got {self.receive_timeout}")

        if self.buffer_size < 4:
            raise ValueError(f"buffer_size must be >= 4, got {self.buffer_size}")

    @property
    def bind_port(self) -> int:
        return self.port if self.local_port is None else self.local_port

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> UdpTransportConfig:
        """Build a config from ``Z21_HOST``, ``Z21_PORT`` and ``Z21_LOCAL_PORT``.

        Unset variables keep their defaults.

        Raises:
            ValueError: If a port variable is not an integer or out of range
        """
        env = os.environ if environ is None else environ
        kwargs: dict[str, object] = {}
        if env.get("Z21_HOST"):
            kwargs["host"] = env["Z21_HOST"]
        if env.get("Z21_PORT"):
            kwargs["port"] = int(env["Z21_PORT"])
        if env.get("Z21_LOCAL_PORT"):
            kwargs["local_port"] = int(env["Z21_LOCAL_PORT"])
        return cls(**kwargs)  # type: ignore[arg-type]
