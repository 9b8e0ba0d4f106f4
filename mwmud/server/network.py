"""The dedicated server: accepts clients, reads their messages and answers events."""

from __future__ import annotations

import argparse
import socket
import sys
import time
from typing import TextIO

from mwmud.packet import encode_packet
from mwmud.server.client import Client
from mwmud.server.dispatcher import Dispatcher
from mwmud.server.events import (
    Broadcast,
    ClientDisconnect,
    DirectMessage,
    Event,
    EventType,
    Listener,
    Shutdown,
)
from mwmud.server.parser import CommandParser

DEFAULT_PORT = 25565
POLL_INTERVAL = 0.02

_SUBSCRIBED = (
    EventType.SERVER_SHUTDOWN,
    EventType.SERVER_NETWORK_CLIENTDISCONNECT,
    EventType.SERVER_MESSAGE_BROADCAST,
    EventType.SERVER_MESSAGE_DIRECT,
)


class ServerNetwork(Listener):
    """Listens for clients, parses what they send and delivers server events."""

    MAX_CONNECTIONS = 8

    def __init__(
        self,
        dispatcher: Dispatcher | None = None,
        host: str = "",
        port: int = DEFAULT_PORT,
        out: TextIO | None = None,
    ) -> None:
        self.dispatcher = dispatcher if dispatcher is not None else Dispatcher()
        self.host = host
        self.port = port
        self.running = False
        self._out = out
        self._listener: socket.socket | None = None
        self._clients: dict[Client, str] = {}
        self._parser: CommandParser | None = None

    def _say(self, text: str) -> None:
        print(text, file=self._out if self._out is not None else sys.stdout)

    @property
    def address(self) -> tuple[str, int] | None:
        """The address the server listens on, once started."""
        if self._listener is None:
            return None
        host, port = self._listener.getsockname()[:2]
        return host, port

    @property
    def clients(self) -> list[Client]:
        """The clients currently connected, in order of arrival."""
        return list(self._clients)

    def start(self) -> bool:
        """Bind the listening socket and register commands; False if binding fails."""
        self._say("Starting server...")
        self._say(f"Binding server to port {self.port}...")
        listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            listener.bind((self.host, self.port))
            listener.listen()
        except OSError:
            listener.close()
            self._say("Failed to bind server to port. Is a server already running?")
            return False
        listener.setblocking(False)
        self._listener = listener

        self._say("Registering commands...")
        self._parser = CommandParser(self.dispatcher)

        self._say("Server started successfully.\n====================================")
        self.running = True

        for event_type in _SUBSCRIBED:
            self.dispatcher.subscribe(event_type, self)
        return True

    def poll(self) -> None:
        """Accept a waiting client and parse every message clients have sent."""
        if self._listener is None or self._parser is None:
            return

        try:
            sock, address = self._listener.accept()
        except (BlockingIOError, InterruptedError):
            pass
        else:
            ip = address[0] if isinstance(address, tuple) else str(address)
            self._say(f"{ip} connected.")
            self._clients[Client(sock, self.dispatcher)] = ip

        for client in list(self._clients):
            while client.sent_data():
                message = client.take_data()
                try:
                    self._parser.parse(message, client)
                except ValueError as error:
                    client.send_message(f"SERVER: {error}")
            if client.disconnected:
                self._disconnect_client(client)

    def on_notify(self, event: Event) -> None:
        """Handle shutdown, disconnect and message events."""
        if isinstance(event, Shutdown):
            self.cleanup()
        elif isinstance(event, ClientDisconnect):
            self._disconnect_client(event.client)
        elif isinstance(event, Broadcast):
            self._broadcast_message(event.msg)
        elif isinstance(event, DirectMessage):
            event.recipient.send_message(f"SERVER: {event.msg}")

    def cleanup(self) -> None:
        """Tell clients the server is going down, drop them and stop listening."""
        if self._parser is None:
            return
        self._broadcast_message("Server is shutting down.")

        for client in self._clients:
            client.close()
        self._clients.clear()

        self._parser.close()
        self._parser = None

        for event_type in _SUBSCRIBED:
            self.dispatcher.unsubscribe(event_type, self)

        if self._listener is not None:
            self._listener.close()
            self._listener = None
        self.running = False

    def _broadcast_packet(self, packet: bytes) -> None:
        for client in self._clients:
            client.send_packet(packet)

    def _broadcast_message(self, message: str) -> None:
        self._say(message)
        self._broadcast_packet(encode_packet(message))

    def _disconnect_client(self, client: Client) -> None:
        if client not in self._clients:
            return
        client.log_out()
        ip = self._clients.pop(client)
        self._say(f"{ip} disconnected.")
        client.close()


def _display_shutdown_message() -> None:
    try:
        input("Server is shutting down.  Press ENTER to continue.")
    except (EOFError, OSError):
        pass


def main(argv: list[str] | None = None) -> int:
    """Run the dedicated server until it stops or is interrupted."""
    arg_parser = argparse.ArgumentParser(prog="mwmud-server", description="Run the MWMUD server.")
    arg_parser.add_argument("--host", default="", help="address to listen on")
    arg_parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to listen on")
    args = arg_parser.parse_args(argv)

    print("MWMUD prealpha version")
    print()

    server = ServerNetwork(host=args.host, port=args.port)
    if not server.start():
        _display_shutdown_message()
        return 1

    try:
        while server.running:
            try:
                server.dispatcher.flush()
                server.poll()
            except Exception as error:
                print("Server encountered an error from which it couldn't recover.")
                print(f"ERROR: {error}")
                print()
                server.running = False
            time.sleep(POLL_INTERVAL)
    except KeyboardInterrupt:
        pass

    _display_shutdown_message()
    server.cleanup()
    return 0