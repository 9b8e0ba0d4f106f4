"""Commands the server understands, and the modules that group them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar, Iterable

from mwmud.server.client import Client
from mwmud.server.dispatcher import Dispatcher
from mwmud.server.events import ClientDisconnect


class ServerCommand(ABC):
    """A command a client can run by sending "/<alias> [args]"."""

    CMD_DELIM: ClassVar[str] = "/"
    aliases: ClassVar[tuple[str, ...]] = ()

    def match(self, text: str) -> bool:
        """Return whether the text is one of the command's aliases."""
        return text in self.aliases

    @abstractmethod
    def execute(self, args: list[str], sender: Client) -> None:
        """Run the command; args[0] is the command itself."""


class PingCommand(ServerCommand):
    """Latency check; the server takes no action."""

    aliases = ("ping",)

    def execute(self, args: list[str], sender: Client) -> None:
        return None


class DisconnectCommand(ServerCommand):
    """Removes the sender from the connected clients."""

    aliases = ("disconnect",)

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    def execute(self, args: list[str], sender: Client) -> None:
        self._dispatcher.enqueue(ClientDisconnect(sender))


class LoginCommand(ServerCommand):
    """Logs the sender in under a name: /login <name>."""

    aliases = ("login",)

    def execute(self, args: list[str], sender: Client) -> None:
        if len(args) < 2:
            raise ValueError("usage: /login <name>")
        sender.log_in(args[1])


class LogoutCommand(ServerCommand):
    """Logs the sender out of their character."""

    aliases = ("logout",)

    def execute(self, args: list[str], sender: Client) -> None:
        if not sender.log_out():
            sender.send_message("SERVER: Must be logged in to log out.")


class ServerCommandModule:
    """A named group of commands, registered as active while open."""

    _active: ClassVar[dict["ServerCommandModule", None]] = {}

    def __init__(self, name: str, commands: Iterable[ServerCommand]) -> None:
        self.name = name
        self.commands: list[ServerCommand] = list(commands)
        ServerCommandModule._active[self] = None

    @staticmethod
    def active_modules() -> list["ServerCommandModule"]:
        """Return the modules currently registered, in registration order."""
        return list(ServerCommandModule._active)

    def close(self) -> None:
        """Deregister the module and drop its commands."""
        ServerCommandModule._active.pop(self, None)
        self.commands.clear()

    def __enter__(self) -> "ServerCommandModule":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class NetworkCommands(ServerCommandModule):
    """Commands about the client-server connection."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        super().__init__(
            "Network",
            [
                PingCommand(),
                DisconnectCommand(dispatcher),
                LoginCommand(),
                LogoutCommand(),
            ],
        )