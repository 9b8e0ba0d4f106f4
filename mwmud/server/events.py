"""Events passed through the server dispatcher, and the listener interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class EventType(Enum):
    UNKNOWN = 0
    SERVER_SHUTDOWN = auto()
    SERVER_NETWORK_CLIENTDISCONNECT = auto()
    SERVER_MESSAGE_BROADCAST = auto()
    SERVER_MESSAGE_DIRECT = auto()


@dataclass
class Event:
    event_type: EventType = EventType.UNKNOWN


@dataclass
class Shutdown(Event):
    """The server is shutting down."""

    event_type: EventType = field(default=EventType.SERVER_SHUTDOWN, init=False)


@dataclass
class ClientDisconnect(Event):
    """A client is leaving the server."""

    client: Any
    event_type: EventType = field(
        default=EventType.SERVER_NETWORK_CLIENTDISCONNECT, init=False
    )


@dataclass
class Broadcast(Event):
    """A message to send to every connected client."""

    msg: str
    event_type: EventType = field(
        default=EventType.SERVER_MESSAGE_BROADCAST, init=False
    )


@dataclass
class DirectMessage(Event):
    """A message sent by the server to a single client."""

    recipient: Any
    msg: str
    event_type: EventType = field(default=EventType.SERVER_MESSAGE_DIRECT, init=False)


class Listener(ABC):
    """Something that receives events from a dispatcher."""

    @abstractmethod
    def on_notify(self, event: Event) -> None:
        """Handle a delivered event."""