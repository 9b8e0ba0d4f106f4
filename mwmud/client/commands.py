"""Chat commands the client understands, the modules grouping them, and help."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, ClassVar, Iterable

from mwmud.client.dispatcher import Dispatcher
from mwmud.client.events import ChatEvent, EventType, NetworkEvent, Screen, ScreenEvent
from mwmud.client.util import concat_strings, equals_ignore_case

MALFORMED_COMMAND = "Malformed command."


class Command(ABC):
    """A command the user runs by typing "/<alias> [args]"."""

    CMD_DELIM: ClassVar[str] = "/"
    aliases: ClassVar[tuple[str, ...]] = ()
    description: ClassVar[str] = ""
    _usage_args: ClassVar[str] = ""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    @property
    def usage(self) -> str:
        return f"{self.CMD_DELIM}{self.aliases[0]}{self._usage_args}"

    def match(self, text: str) -> bool:
        """Return whether the text is one of the command's aliases."""
        return text in self.aliases

    @abstractmethod
    def execute(self, args: list[str]) -> None:
        """Run the command; args[0] is the command itself."""

    def _display(self, message: str) -> None:
        self._dispatcher.enqueue(ChatEvent(EventType.CHAT_MESSAGEDISPLAY, message))

    def _send(self, args: list[str]) -> None:
        self._dispatcher.enqueue(
            NetworkEvent(EventType.NETWORK_CLIENT_DATASEND, concat_strings(args, " "))
        )


class ClearChatCommand(Command):
    aliases = ("clear", "cls")
    description = "Clears all chat messages from the chat window."

    def execute(self, args: list[str]) -> None:
        if len(args) > 1:
            return
        self._dispatcher.enqueue(ChatEvent(EventType.CHAT_CLEARCHAT, ""))


class DisconnectCommand(Command):
    """Asks the server to disconnect and returns the user to the title screen."""

    aliases = ("disconnect",)
    description = (
        "Forcefully disconnects the client from the server and "
        "returns the user back to the title screen."
    )

    def __init__(
        self,
        dispatcher: Dispatcher,
        title_screen: Callable[[], Screen] | None = None,
    ) -> None:
        super().__init__(dispatcher)
        self._title_screen = title_screen

    def execute(self, args: list[str]) -> None:
        if len(args) > 1:
            self._display(MALFORMED_COMMAND)
            return
        self._send(args)
        screen = self._title_screen() if self._title_screen is not None else None
        self._dispatcher.enqueue(ScreenEvent(EventType.SCREEN_CLEARANDSET, screen))


class LoginCommand(Command):
    aliases = ("login",)
    description = "Assigns the client a name within the server."
    _usage_args = " <name>"

    def execute(self, args: list[str]) -> None:
        if len(args) != 2:
            self._display(MALFORMED_COMMAND)
        else:
            self._send(args)


class LogoutCommand(Command):
    aliases = ("logout",)
    description = "Logs the user out of their current character."

    def execute(self, args: list[str]) -> None:
        if len(args) > 1:
            self._display(MALFORMED_COMMAND)
        else:
            self._send(args)


class PingCommand(Command):
    aliases = ("ping",)
    description = "Ping pong!"

    def execute(self, args: list[str]) -> None:
        self._send(args)


class CommandModule:
    """A named group of commands."""

    def __init__(self, name: str, commands: Iterable[Command] = ()) -> None:
        self.name = name
        self.commands: list[Command] = list(commands)


class GeneralCommands(CommandModule):
    def __init__(self, dispatcher: Dispatcher) -> None:
        super().__init__("General")


class ChatCommands(CommandModule):
    def __init__(self, dispatcher: Dispatcher) -> None:
        super().__init__("Chat", [ClearChatCommand(dispatcher)])


class NetworkCommands(CommandModule):
    def __init__(
        self,
        dispatcher: Dispatcher,
        title_screen: Callable[[], Screen] | None = None,
    ) -> None:
        super().__init__(
            "Network",
            [
                PingCommand(dispatcher),
                DisconnectCommand(dispatcher, title_screen),
                LoginCommand(dispatcher),
                LogoutCommand(dispatcher),
            ],
        )


class HelpCommand(Command):
    """Describes registered commands and the active command modules."""

    aliases = ("help", "h", "?")
    description = "A command that helps you use other commands."
    _usage_args = " <command>"

    def __init__(
        self,
        dispatcher: Dispatcher,
        modules: Callable[[], Iterable[CommandModule]] | None = None,
    ) -> None:
        super().__init__(dispatcher)
        self._modules = modules if modules is not None else tuple
        self.registered_commands: list[Command] = []
        self.register_command(self)

    def register_command(self, command: Command) -> None:
        """Make a command known to help."""
        self.registered_commands.append(command)

    def deregister_command(self, command: Command) -> None:
        """Forget a command."""
        if command in self.registered_commands:
            self.registered_commands.remove(command)

    def _module_listing(self) -> str:
        lines = [
            'Type "/help -m <module>" to view available commands.',
            "Available command modules:",
        ]
        lines.extend(f"\t{module.name}" for module in self._modules())
        return "\n".join(lines)

    def _module_commands(self, name: str) -> str:
        for module in self._modules():
            if equals_ignore_case(name, module.name):
                listing = "".join(f"\t{command.aliases[0]}" for command in module.commands)
                return f"Commands available in module {module.name}:\n{listing}"
        return f'No command module with the name "{name}" exists or has been registered.'

    def _command_details(self, alias: str) -> str:
        matches = [command for command in self.registered_commands if command.match(alias)]
        if not matches:
            return (
                f'No information available. A command with the alias "{alias}" '
                "either doesn't exist or isn't registered with the help command."
            )
        command = matches[-1]
        return (
            f"Command:\t{command.aliases[0]}\n"
            f"Description:\t{command.description}\n"
            f"Usage:\t\t{command.usage}\n"
            f"Aliases:\t\t{', '.join(command.aliases)}"
        )

    def execute(self, args: list[str]) -> None:
        if len(args) == 1:
            message = self._module_listing()
        elif len(args) == 3 and args[1] == "-m":
            message = self._module_commands(args[2])
        elif len(args) == 2:
            message = self._command_details(args[1])
        else:
            message = ""
        self._display(message + "\n")


class CommandRegistry:
    """The active command modules and the help command that knows them all."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._active: dict[CommandModule, None] = {}
        self.help_command = HelpCommand(dispatcher, lambda: self.active_modules)

    @property
    def active_modules(self) -> list[CommandModule]:
        """The registered modules, in registration order."""
        return list(self._active)

    def register_module(self, module: CommandModule) -> None:
        """Activate a module and make its commands known to help."""
        for command in module.commands:
            self.help_command.register_command(command)
        self._active[module] = None

    def deregister_module(self, module: CommandModule) -> None:
        """Deactivate a module and remove its commands from help."""
        for command in module.commands:
            self.help_command.deregister_command(command)
        self._active.pop(module, None)