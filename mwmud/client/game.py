"""The game: a stack of screens driven by events, and the network client."""

from __future__ import annotations

from typing import Callable

from mwmud.client.chat import GlobalChat
from mwmud.client.dispatcher import Dispatcher
from mwmud.client.events import (
    EventType,
    GameEvent,
    InputEvent,
    Listener,
    NetworkEvent,
    Screen,
    ScreenEvent,
)
from mwmud.client.network import ClientNetwork
from mwmud.client.screens import SCREEN_HEIGHT, SCREEN_WIDTH, TitleScreen
from mwmud.client.ui import Canvas, Rect

BACKGROUND_COLOR = "black"

_SUBSCRIBED = (
    EventType.ENGINE_SHUTDOWN,
    EventType.NETWORK_CLIENT_ATTEMPTCONNECT,
    EventType.INPUT_KEYPRESSED,
    EventType.SCREEN_ADVANCE,
    EventType.SCREEN_RETURN,
    EventType.SCREEN_CLEARANDSET,
)


class Game(Listener):
    """Owns the screen stack, the chat system and the server connection."""

    def __init__(
        self,
        dispatcher: Dispatcher | None = None,
        network_factory: Callable[[Dispatcher], ClientNetwork] = ClientNetwork,
    ) -> None:
        self.dispatcher = dispatcher if dispatcher is not None else Dispatcher()
        self._network_factory = network_factory
        self.chat = GlobalChat(self.dispatcher, self._title_screen)
        self.client: ClientNetwork | None = None
        self._screens: list[Screen] = []
        for event_type in _SUBSCRIBED:
            self.dispatcher.subscribe(event_type, self)
        self.running = True
        self._screens.append(self._title_screen())

    def _title_screen(self) -> TitleScreen:
        return TitleScreen(self.dispatcher, self.chat.parse)

    @property
    def screens(self) -> list[Screen]:
        """The screen stack, bottom first."""
        return list(self._screens)

    @property
    def active_screen(self) -> Screen:
        """The screen on top of the stack."""
        if not self._screens:
            raise IndexError("no active screen")
        return self._screens[-1]

    def update(self) -> None:
        """Deliver queued events and read from the server."""
        self.dispatcher.flush()
        if self.client is not None:
            self.client.poll()

    def render(self, canvas: Canvas) -> None:
        """Clear the canvas and draw the active screen."""
        canvas.clear()
        canvas.fill_rect(Rect(0, 0, SCREEN_WIDTH, SCREEN_HEIGHT), BACKGROUND_COLOR)
        if self._screens:
            self._screens[-1].draw(canvas)

    def shutdown(self) -> None:
        """Stop listening, release every screen and the connection."""
        for event_type in _SUBSCRIBED:
            self.dispatcher.unsubscribe(event_type, self)
        self.chat.clean()
        self._clear_screens()
        self._drop_client()
        self.running = False

    def on_notify(self, event: GameEvent) -> None:
        event_type = event.event_type
        if event_type is EventType.ENGINE_SHUTDOWN:
            self.shutdown()
        elif event_type is EventType.NETWORK_CLIENT_ATTEMPTCONNECT and isinstance(
            event, NetworkEvent
        ):
            self._drop_client()
            client = self._network_factory(self.dispatcher)
            if client.connect(event.message):
                self.client = client
            else:
                client.close()
        elif event_type is EventType.INPUT_KEYPRESSED and isinstance(event, InputEvent):
            if self._screens:
                self._screens[-1].handle_keypress(event.key)
        elif event_type is EventType.SCREEN_ADVANCE and isinstance(event, ScreenEvent):
            if event.next_screen is not None:
                self._screens.append(event.next_screen)
        elif event_type is EventType.SCREEN_RETURN:
            if self._screens:
                self._screens.pop().close()
        elif event_type is EventType.SCREEN_CLEARANDSET and isinstance(event, ScreenEvent):
            self._clear_screens()
            if event.next_screen is not None:
                self._screens.append(event.next_screen)

    def _clear_screens(self) -> None:
        while self._screens:
            self._screens.pop().close()

    def _drop_client(self) -> None:
        if self.client is not None:
            self.client.close()
            self.client = None