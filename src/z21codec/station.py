"""Station facade: transport, codec and event subscriptions in one object.

Z21Station wires a :class:`~z21codec.transport.Transport` to a
:class:`~z21codec.client.ProtocolClient` and fans decoded events out to
subscribers. Applications that prefer to drive their own dispatch can use
ProtocolClient directly and ignore this module.
"""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from typing import Any, Callable

from .client import ProtocolClient
from .codec.encoder import COMMANDS
from .exceptions import TransportError
from .models.events import DecodedEvent, TrackPowerEvent
from .transport.driver import Transport

logger = logging.getLogger(__name__)

EventCallback = Callable[[Any], None]
RawCallback = Callable[[bytes], None]
TrackPowerCallback = Callable[[bool], None]


class Z21Station:
    """A command station reached through a transport.

    Callbacks run on the transport's receive thread. A failing callback is
    logged and does not stop delivery to the others.

    Attributes:
        transport: Datagram transport to the station
        client: Codec used for both directions
        subscribe_broadcasts: Send LAN_SET_BROADCASTFLAGS on connect so the
            station pushes loco info and system state changes

    Examples:
        ```python
        from z21codec import LocoInfo, LocoInfoEvent, Z21Station
        from z21codec.transport import UdpTransport, UdpTransportConfig

        station = Z21Station(UdpTransport(UdpTransportConfig(host="192.168.0.111")))
        station.subscribe(LocoInfoEvent, lambda event: print(event.info))
        station.subscribe_track_power(lambda on: print("power", on))

        with station:
            station.request("set-track-power-on")
            station.request("set-loco-drive", LocoInfo(address=3, speed_step=40))
        ```
    """

    def __init__(
        self,
        transport: Transport,
        client: ProtocolClient | None = None,
        *,
        subscribe_broadcasts: bool = True,
    ) -> None:
        self.transport = transport
        self.client = client if client is not None else ProtocolClient()
        self.subscribe_broadcasts = subscribe_broadcasts
        self._subscribers: dict[type | None, list[EventCallback]] = defaultdict(list)
        self._raw_subscribers: list[RawCallback] = []
        self._track_power_subscribers: list[TrackPowerCallback] = []
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def connect(self) -> None:
        """Connect the transport and start dispatching received events.

        The datagram handler is attached only once the transport is up; if
        the broadcast subscription fails it is detached again, so a retried
        connect() never delivers events twice.
        """
        self.transport.connect()
        self.transport.attach_rx_callback(self._on_datagram)
        if self.subscribe_broadcasts:
            try:
                self.send(self.client.set_broadcast_flags())
            except TransportError:
                self.transport.detach_rx_callback(self._on_datagram)
                raise

    def close(self, logoff: bool = True) -> None:
        """Log off from the station (optional) and disconnect the transport."""
        if logoff and self.transport.is_connected:
            try:
                self.send(self.client.logoff())
            except TransportError as e:
                logger.warning("Logoff failed: %s", e)
        self.transport.detach_rx_callback(self._on_datagram)
        self.transport.disconnect()

    def __enter__(self) -> Z21Station:
        self.connect()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, event_type: type | None, callback: EventCallback) -> None:
        """Call ``callback`` for every event of ``event_type`` (None: every event)."""
        with self._lock:
            self._subscribers[event_type].append(callback)

    def unsubscribe(self, event_type: type | None, callback: EventCallback) -> None:
        with self._lock:
            callbacks = self._subscribers.get(event_type, [])
            if callback in callbacks:
                callbacks.remove(callback)

    def subscribe_raw(self, callback: RawCallback) -> None:
        """Call ``callback`` with every datagram before it is decoded."""
        with self._lock:
            self._raw_subscribers.append(callback)

    def subscribe_track_power(self, callback: TrackPowerCallback) -> None:
        """Call ``callback(True/False)`` on track power on/off broadcasts."""
        with self._lock:
            self._track_power_subscribers.append(callback)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def send(self, telegram: bytes) -> None:
        self.transport.send(telegram)

    def request(self, command: str, *args: Any) -> bytes:
        """Build the named command (see ``COMMANDS``) and send it.

        Returns:
            The telegram that was sent

        Raises:
            KeyError: If ``command`` is not a known command name
            EncodeError: If the arguments are invalid; nothing is sent
        """
        try:
            builder = COMMANDS[command]
        except KeyError:
            raise KeyError(f"Unknown command {command!r}. Valid: {sorted(COMMANDS)}") from None
        telegram = builder(*args)
        self.send(telegram)
        return telegram

    def emergency_stop(self) -> None:
        """Switch track power off.

        Stronger than ``set-stop``, which only halts locomotives and leaves
        the track powered.
        """
        self.send(self.client.set_track_power_off())

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _on_datagram(self, data: bytes) -> None:
        with self._lock:
            raw_subscribers = list(self._raw_subscribers)
        for callback in raw_subscribers:
            self._invoke(callback, data)

        for event in self.client.decode_datagram(data).events:
            self._dispatch(event)

    def _dispatch(self, event: DecodedEvent) -> None:
        with self._lock:
            callbacks = list(self._subscribers.get(type(event), []))
            callbacks += self._subscribers.get(None, [])
            track_power_subscribers = list(self._track_power_subscribers)

        for callback in callbacks:
            self._invoke(callback, event)

        if isinstance(event, TrackPowerEvent):
            for callback in track_power_subscribers:
                self._invoke(callback, event.track_power_on)

    @staticmethod
    def _invoke(callback: Callable[[Any], None], argument: Any) -> None:
        try:
            callback(argument)
        except Exception:
            logger.exception("Subscriber %r failed", callback)
