"""The client's connection to the game server."""

from __future__ import annotations

import socket

from mwmud.client.dispatcher import Dispatcher
from mwmud.client.events import ChatEvent, EventType, GameEvent, Listener, NetworkEvent
from mwmud.packet import PacketReader, encode_packet

DEFAULT_PORT = 25565
CONNECT_TIMEOUT = 3.0
CONNECTION_FAILED = "Failed to connect. Is the server running?"

_RECV_SIZE = 4096


class ClientNetwork(Listener):
    """Connects to a server, sends queued data and reports received messages."""

    def __init__(
        self,
        dispatcher: Dispatcher,
        port: int = DEFAULT_PORT,
        timeout: float = CONNECT_TIMEOUT,
    ) -> None:
        self._dispatcher = dispatcher
        self.port = port
        self.timeout = timeout
        self._socket: socket.socket | None = None
        self._reader = PacketReader()
        dispatcher.subscribe(EventType.NETWORK_CLIENT_DATASEND, self)

    @property
    def connected(self) -> bool:
        return self._socket is not None

    def connect(self, ip: str) -> bool:
        """Try to reach the server; report success or failure as an event."""
        try:
            sock = socket.create_connection((ip, self.port), timeout=self.timeout)
        except (OSError, ValueError):
            self._dispatcher.enqueue(
                NetworkEvent(EventType.NETWORK_CLIENT_CONNECTIONFAIL, CONNECTION_FAILED)
            )
            return False
        sock.setblocking(False)
        self._socket = sock
        self._dispatcher.enqueue(NetworkEvent(EventType.NETWORK_CLIENT_CONNECTIONSUCCESS, ""))
        return True

    def _drop(self) -> None:
        if self._socket is not None:
            self._socket.close()
            self._socket = None

    def poll(self) -> None:
        """Read what the server sent and queue each message for display."""
        if self._socket is None:
            return
        while True:
            try:
                chunk = self._socket.recv(_RECV_SIZE)
            except (BlockingIOError, InterruptedError):
                break
            except OSError:
                self._drop()
                break
            if not chunk:
                self._drop()
                break
            for message in self._reader.feed(chunk):
                self._dispatcher.enqueue(ChatEvent(EventType.CHAT_MESSAGEDISPLAY, message))

    def on_notify(self, event: GameEvent) -> None:
        """Send the text of a data-send event to the server."""
        if (
            event.event_type is EventType.NETWORK_CLIENT_DATASEND
            and isinstance(event, NetworkEvent)
            and self._socket is not None
        ):
            try:
                self._socket.sendall(encode_packet(event.message))
            except OSError:
                self._drop()

    def close(self) -> None:
        """Disconnect and stop listening for events."""
        self._drop()
        self._dispatcher.unsubscribe(EventType.NETWORK_CLIENT_DATASEND, self)