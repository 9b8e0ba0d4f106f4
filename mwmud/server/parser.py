"""Parsing of messages that clients send to the server."""

from __future__ import annotations

from mwmud.server.client import Client
from mwmud.server.commands import NetworkCommands, ServerCommand, ServerCommandModule
from mwmud.server.dispatcher import Dispatcher
from mwmud.server.events import Broadcast
from mwmud.server.util import split_string

NOT_LOGGED_IN_MESSAGE = (
    "SERVER: You may only send messages while logged in to a character.  "
    "Use the /login command to log in."
)


class CommandParser:
    """Routes client messages to chat broadcasts or to commands."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher
        self.modules: list[ServerCommandModule] = [NetworkCommands(dispatcher)]

    def parse(self, message: str, sender: Client) -> None:
        """Broadcast a chat message, or run the command it names."""
        if message[:1] != ServerCommand.CMD_DELIM:
            if sender.logged_in:
                self._dispatcher.enqueue(Broadcast(f"{sender.name}: {message}"))
            else:
                sender.send_message(NOT_LOGGED_IN_MESSAGE)
            return

        space = message.find(" ")
        name = message[1:] if space == -1 else message[1:space]
        for module in self.modules:
            for command in module.commands:
                if command.match(name):
                    command.execute(split_string(message, " "), sender)
                    return

    def close(self) -> None:
        """Release every command module."""
        while self.modules:
            self.modules.pop().close()

    def __enter__(self) -> "CommandParser":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()