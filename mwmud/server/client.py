"""A client connection held by the server."""

from __future__ import annotations

import socket
from collections import deque

from mwmud.packet import PacketReader, encode_packet
from mwmud.server.dispatcher import Dispatcher
from mwmud.server.events import Broadcast

_RECV_SIZE = 4096


class Client:
    """A connected client: its socket, its login state and its pending data."""

    def __init__(self, sock: socket.socket, dispatcher: Dispatcher) -> None:
        self._socket = sock
        self._socket.setblocking(False)
        self._dispatcher = dispatcher
        self._reader = PacketReader()
        self._pending: deque[str] = deque()
        self._name = ""
        self._logged_in = False
        self.disconnected = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def logged_in(self) -> bool:
        return self._logged_in

    @property
    def ip(self) -> str:
        """The remote address of the client."""
        peer = self._socket.getpeername()
        return peer[0] if isinstance(peer, tuple) else str(peer)

    def log_in(self, name: str) -> bool:
        """Log in under a name; False if already logged in."""
        if self._logged_in:
            return False
        self._dispatcher.enqueue(Broadcast(f"{name} has logged in."))
        self._name = name
        self._logged_in = True
        return True

    def log_out(self) -> bool:
        """Log out and clear the name; False if not logged in."""
        if not self._logged_in:
            return False
        self._dispatcher.enqueue(Broadcast(f"{self._name} has logged out."))
        self._name = ""
        self._logged_in = False
        return True

    def sent_data(self) -> bool:
        """Read whatever the client has sent and report whether a message is ready."""
        while True:
            try:
                chunk = self._socket.recv(_RECV_SIZE)
            except (BlockingIOError, InterruptedError):
                break
            except OSError:
                self.disconnected = True
                break
            if not chunk:
                self.disconnected = True
                break
            self._pending.extend(self._reader.feed(chunk))
        return bool(self._pending)

    def take_data(self) -> str:
        """Return and consume the oldest received message, or "" if none."""
        return self._pending.popleft() if self._pending else ""

    def send_packet(self, packet: bytes) -> bool:
        """Send raw packet bytes; False if the socket refused them."""
        try:
            self._socket.sendall(packet)
        except OSError:
            return False
        return True

    def send_message(self, message: str) -> bool:
        """Send a text message to the client."""
        return self.send_packet(encode_packet(message))

    def close(self) -> None:
        """Close the connection."""
        self._socket.close()