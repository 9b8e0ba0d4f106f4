"""Routing of what the user types: chat text to the server, commands to their handlers."""

from __future__ import annotations

from typing import Callable

from mwmud.client.commands import (
    ChatCommands,
    Command,
    CommandModule,
    CommandRegistry,
    NetworkCommands,
)
from mwmud.client.dispatcher import Dispatcher
from mwmud.client.events import ChatEvent, EventType, NetworkEvent, Screen
from mwmud.client.util import split_string


class GlobalChat:
    """Parses user input and holds the command modules it can run."""

    def __init__(
        self,
        dispatcher: Dispatcher,
        title_screen: Callable[[], Screen] | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self.registry = CommandRegistry(dispatcher)
        self.modules: list[CommandModule] = [
            ChatCommands(dispatcher),
            NetworkCommands(dispatcher, title_screen),
        ]
        for module in self.modules:
            self.registry.register_module(module)

    def _display(self, message: str) -> None:
        self._dispatcher.enqueue(ChatEvent(EventType.CHAT_MESSAGEDISPLAY, message))

    def parse(self, text: str) -> None:
        """Send plain text to the server, or echo and run a "/command"."""
        if text[:1] != Command.CMD_DELIM:
            self._dispatcher.enqueue(NetworkEvent(EventType.NETWORK_CLIENT_DATASEND, text))
            return

        self._display(text)
        space = text.find(" ")
        name = text[1:] if space == -1 else text[1:space]
        args = split_string(text, " ")

        help_command = self.registry.help_command
        if help_command.match(name):
            help_command.execute(args)
            return

        for module in self.modules:
            for command in module.commands:
                if command.match(name):
                    command.execute(args)
                    return

        self._display(
            f"The command {name} either does not exist or isn't registered with a "
            "command module. Did you enter it correctly?"
        )

    def clean(self) -> None:
        """Deregister and drop every command module."""
        while self.modules:
            self.registry.deregister_module(self.modules.pop())

    def __enter__(self) -> "GlobalChat":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.clean()