"""The client's screens: title, main menu, server connection and the game itself."""

from __future__ import annotations

from typing import Callable

from mwmud.client.chatbox import Chatbox
from mwmud.client.dispatcher import Dispatcher
from mwmud.client.events import (
    EventType,
    GameEvent,
    Key,
    KeyInput,
    Listener,
    NetworkEvent,
    Screen,
    ScreenEvent,
)
from mwmud.client.ui import (
    Canvas,
    FontWeight,
    ParagraphAlign,
    Rect,
    TextAlign,
    UILabeledTextInput,
    UIMenuOption,
    UIText,
    VerticalList,
)

SCREEN_WIDTH = 960
SCREEN_HEIGHT = 540

Submit = Callable[[str], None]


def _printable(key: KeyInput) -> bool:
    return isinstance(key, str) and len(key) == 1 and " " <= key <= "~"


def _title() -> UIText:
    return UIText(
        "MWMUD", 64, TextAlign.CENTER, ParagraphAlign.CENTER, FontWeight.BOLD,
        Rect(0, 0, SCREEN_WIDTH, 100),
    )


def _version() -> UIText:
    return UIText(
        "Prealpha Version", 16, TextAlign.CENTER, ParagraphAlign.CENTER, FontWeight.LIGHT,
        Rect(0, 90, SCREEN_WIDTH, 110),
    )


class TitleScreen(Screen):
    """The first screen; ENTER moves on to the main menu."""

    def __init__(self, dispatcher: Dispatcher, on_submit: Submit | None = None) -> None:
        self._dispatcher = dispatcher
        self._on_submit = on_submit
        self.title = _title()
        self.version = _version()
        self.prompt = UIText(
            "Press ENTER", 24, TextAlign.CENTER, ParagraphAlign.CENTER, FontWeight.NORMAL,
            Rect(0, SCREEN_HEIGHT // 2 + 20, SCREEN_WIDTH, SCREEN_HEIGHT // 2 - 20),
        )

    def handle_keypress(self, key: KeyInput) -> None:
        if key == Key.RETURN:
            self._dispatcher.enqueue(
                ScreenEvent(
                    EventType.SCREEN_ADVANCE,
                    MainMenuScreen(self._dispatcher, self._on_submit),
                )
            )

    def draw(self, canvas: Canvas) -> None:
        self.title.draw(canvas)
        self.version.draw(canvas)
        self.prompt.draw(canvas)


class MainMenuScreen(Screen):
    """A list of menu options navigated with the arrow keys."""

    def __init__(self, dispatcher: Dispatcher, on_submit: Submit | None = None) -> None:
        self._dispatcher = dispatcher
        self._on_submit = on_submit
        self.title = _title()
        self.version = _version()
        self.menu_options: VerticalList[UIMenuOption] = VerticalList(
            24, TextAlign.CENTER, ParagraphAlign.CENTER, FontWeight.NORMAL,
            10, 0, 200, SCREEN_WIDTH, element_type=UIMenuOption,
        )
        self.menu_options.push_back("Join Game").on_select = self._join_game
        self.menu_options.push_back("Exit").on_select = self._exit
        self.highlighted = 0
        self.menu_options[0].focused = True

    def _join_game(self) -> None:
        self._dispatcher.enqueue(
            ScreenEvent(
                EventType.SCREEN_ADVANCE,
                MPConnectScreen(self._dispatcher, self._on_submit),
            )
        )

    def _exit(self) -> None:
        self._dispatcher.enqueue(GameEvent(EventType.ENGINE_SHUTDOWN))

    @property
    def highlighted_option(self) -> UIMenuOption:
        return self.menu_options[self.highlighted]

    def _move(self, step: int) -> None:
        target = self.highlighted + step
        if 0 <= target < len(self.menu_options):
            self.highlighted_option.focused = False
            self.highlighted = target
            self.highlighted_option.focused = True

    def handle_keypress(self, key: KeyInput) -> None:
        if key == Key.RETURN:
            self.highlighted_option.select()
        elif key == Key.ESCAPE:
            self._dispatcher.enqueue(ScreenEvent(EventType.SCREEN_RETURN))
        elif key == Key.UP:
            self._move(-1)
        elif key == Key.DOWN:
            self._move(1)

    def draw(self, canvas: Canvas) -> None:
        self.title.draw(canvas)
        self.version.draw(canvas)
        self.menu_options.draw(canvas)


class MPConnectScreen(Screen, Listener):
    """Asks for a server address and tries to join it."""

    def __init__(self, dispatcher: Dispatcher, on_submit: Submit | None = None) -> None:
        self._dispatcher = dispatcher
        self._on_submit = on_submit
        self.ip_input = UILabeledTextInput(
            "Server IP:", 24, ParagraphAlign.NEAR, FontWeight.NORMAL,
            SCREEN_WIDTH / 3 + 20, SCREEN_HEIGHT / 2 - 50, 150, 250,
        )
        bottom = self.ip_input.bottom
        self.connect_button = UIMenuOption(
            "Join", 24, TextAlign.CENTER, ParagraphAlign.CENTER, FontWeight.NORMAL,
            Rect(0, bottom, SCREEN_WIDTH, bottom + 40), on_select=self._attempt_connect,
        )
        button_bottom = self.connect_button.bounds.bottom
        self.connection_notification = UIText(
            "", 24, TextAlign.CENTER, ParagraphAlign.CENTER, FontWeight.NORMAL,
            Rect(0, button_bottom + 50, SCREEN_WIDTH, button_bottom + 100),
        )
        self.focusable = [self.ip_input, self.connect_button]
        self._focus_index = 0
        self.focused_element.focused = True
        dispatcher.subscribe(EventType.NETWORK_CLIENT_CONNECTIONSUCCESS, self)
        dispatcher.subscribe(EventType.NETWORK_CLIENT_CONNECTIONFAIL, self)

    @property
    def focused_element(self) -> UILabeledTextInput | UIMenuOption:
        return self.focusable[self._focus_index]

    @property
    def ip(self) -> str:
        return self.ip_input.input_text

    def _attempt_connect(self) -> None:
        self._dispatcher.enqueue(NetworkEvent(EventType.NETWORK_CLIENT_ATTEMPTCONNECT, self.ip))

    def _move(self, step: int) -> None:
        target = self._focus_index + step
        if 0 <= target < len(self.focusable):
            self.focused_element.focused = False
            self._focus_index = target
            self.focused_element.focused = True

    def handle_keypress(self, key: KeyInput) -> None:
        element = self.focused_element
        if key == Key.RETURN:
            if isinstance(element, UIMenuOption):
                element.select()
        elif key == Key.ESCAPE:
            self._dispatcher.enqueue(ScreenEvent(EventType.SCREEN_RETURN))
        elif key == Key.UP:
            self._move(-1)
        elif key == Key.DOWN:
            self._move(1)
        elif key == Key.BACK or _printable(key):
            if isinstance(element, UILabeledTextInput):
                element.char_in(key)

    def on_notify(self, event: GameEvent) -> None:
        if event.event_type is EventType.NETWORK_CLIENT_CONNECTIONSUCCESS:
            self._dispatcher.enqueue(
                ScreenEvent(
                    EventType.SCREEN_CLEARANDSET,
                    GameScreen(self._dispatcher, self._on_submit),
                )
            )
        elif event.event_type is EventType.NETWORK_CLIENT_CONNECTIONFAIL and isinstance(
            event, NetworkEvent
        ):
            self.connection_notification.text = event.message

    def draw(self, canvas: Canvas) -> None:
        self.ip_input.draw(canvas)
        self.connect_button.draw(canvas)
        self.connection_notification.draw(canvas)

    def close(self) -> None:
        """Stop listening for connection results."""
        self._dispatcher.unsubscribe(EventType.NETWORK_CLIENT_CONNECTIONFAIL, self)
        self._dispatcher.unsubscribe(EventType.NETWORK_CLIENT_CONNECTIONSUCCESS, self)


class GameScreen(Screen):
    """The in-game screen: a chat box filling the window."""

    def __init__(self, dispatcher: Dispatcher, on_submit: Submit | None = None) -> None:
        self._dispatcher = dispatcher
        self.chatbox = Chatbox(
            dispatcher, on_submit, 14, FontWeight.NORMAL, 14,
            0, 0, SCREEN_WIDTH, SCREEN_HEIGHT,
        )
        self.chatbox.focused = True

    def handle_keypress(self, key: KeyInput) -> None:
        if key == Key.ESCAPE:
            self._dispatcher.enqueue(GameEvent(EventType.ENGINE_SHUTDOWN))
        elif key == Key.RETURN or key == Key.BACK or _printable(key):
            if self.chatbox.focused:
                self.chatbox.handle_char_input(key)

    def draw(self, canvas: Canvas) -> None:
        self.chatbox.draw(canvas)

    def close(self) -> None:
        """Stop the chat box listening for events."""
        self.chatbox.close()