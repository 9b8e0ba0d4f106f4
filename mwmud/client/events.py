"""Events passed through the client dispatcher, and the interfaces that use them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, IntEnum, auto
from typing import Any, Union


class Key(IntEnum):
    """Control keys, by their virtual-key codes.

    Typed characters reach screens as one-character strings; these keys reach
    them as members of this enum.
    """

    BACK = 0x08
    RETURN = 0x0D
    ESCAPE = 0x1B
    LEFT = 0x25
    UP = 0x26
    RIGHT = 0x27
    DOWN = 0x28


KeyInput = Union[str, Key]


class EventType(Enum):
    UNKNOWN = 0

    ENGINE_SHUTDOWN = auto()

    NETWORK_CLIENT_ATTEMPTCONNECT = auto()
    NETWORK_CLIENT_CONNECTIONSUCCESS = auto()
    NETWORK_CLIENT_CONNECTIONFAIL = auto()
    NETWORK_CLIENT_DATASEND = auto()
    NETWORK_CLIENT_DATARECEIVE = auto()

    INPUT_KEYPRESSED = auto()

    SCREEN_ADVANCE = auto()
    SCREEN_RETURN = auto()
    SCREEN_CLEARANDSET = auto()

    CHAT_MESSAGEDISPLAY = auto()
    CHAT_CLEARCHAT = auto()

    UI_TEXTINPUT_HEIGHTCHANGED = auto()


@dataclass
class GameEvent:
    event_type: EventType


@dataclass
class NetworkEvent(GameEvent):
    """An event carrying text to or from the server."""

    message: str


@dataclass
class InputEvent(GameEvent):
    """A key the user pressed."""

    key: KeyInput


@dataclass
class ScreenEvent(GameEvent):
    """A change to the screen stack."""

    next_screen: Screen | None = None


@dataclass
class ChatEvent(GameEvent):
    """A chat message to show, or a chat operation."""

    message: str


@dataclass
class UIEvent(GameEvent):
    """A change reported by a UI element."""

    element: Any
    info: str


class ChatMessageType(Enum):
    GENERIC = 0
    SYSTEM_NOTIFICATION = 1


@dataclass
class ChatMessage:
    message_type: ChatMessageType
    msg: str


class Listener(ABC):
    """Something that receives events from a dispatcher."""

    @abstractmethod
    def on_notify(self, event: GameEvent) -> None:
        """Handle a delivered event."""


class Screen(ABC):
    """A full screen of the game: it takes keys and draws itself."""

    @abstractmethod
    def handle_keypress(self, key: KeyInput) -> None:
        """Handle a key pressed while the screen is active."""

    @abstractmethod
    def draw(self, canvas: Any) -> None:
        """Draw the screen onto a canvas."""

    def close(self) -> None:
        """Release what the screen holds; nothing by default."""