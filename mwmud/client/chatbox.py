"""The chat box: a growing input line above which chat messages scroll."""

from __future__ import annotations

from typing import Callable

from mwmud.client.dispatcher import Dispatcher
from mwmud.client.events import (
    ChatEvent,
    EventType,
    GameEvent,
    Key,
    KeyInput,
    Listener,
    UIEvent,
)
from mwmud.client.ui import (
    INPUT_RECT_COLOR_DEFAULT,
    Canvas,
    FontWeight,
    ParagraphAlign,
    Rect,
    TextAlign,
    UIText,
    VerticalList,
)

DEFAULT_MAX_HISTORY = 100
MESSAGE_SPACING = 5


def _printable(key: KeyInput) -> bool:
    return isinstance(key, str) and len(key) == 1 and " " <= key <= "~"


class ChatInput(UIText):
    """The line the user types into; it grows upwards as text wraps."""

    def __init__(
        self,
        dispatcher: Dispatcher,
        on_submit: Callable[[str], None] | None = None,
        text_size: float = 14.0,
        font_weight: FontWeight = FontWeight.NORMAL,
        max_top: float = 0.0,
        left: float = 0.0,
        right: float = 0.0,
        bottom: float = 0.0,
    ) -> None:
        super().__init__(
            "",
            text_size,
            TextAlign.LEADING,
            ParagraphAlign.FAR,
            font_weight,
            Rect(left, bottom, right, bottom),
        )
        self._dispatcher = dispatcher
        self.on_submit = on_submit
        self.max_top = max_top
        self.last_text_height = 0

    def char_in(self, key: KeyInput) -> None:
        """Type, erase or submit, and report any change in the input's height."""
        if _printable(key):
            self.text += key
            previous_top = self.bounds.top
            self.bounds.top = self.bounds.bottom - self.text_height()
            if self.bounds.top < self.max_top:
                self.text = self.text[:-1]
                self.bounds.top = previous_top
        elif key == Key.BACK:
            self.text = self.text[:-1]
            if self.text:
                self.bounds.top = self.bounds.bottom - int(self.text_height())
            else:
                self.bounds.top = self.bounds.bottom
        elif key == Key.RETURN:
            if self.text and self.on_submit is not None:
                self.on_submit(self.text)
            self.text = ""
            self.bounds.top = self.bounds.bottom

        current = int(self.text_height()) if self.text else 0
        if current != self.last_text_height:
            info = "grow" if current > self.last_text_height else "shrink"
            self._dispatcher.enqueue(UIEvent(EventType.UI_TEXTINPUT_HEIGHTCHANGED, self, info))
            self.last_text_height = current

    def draw(self, canvas: Canvas) -> None:
        canvas.fill_rect(self.bounds, INPUT_RECT_COLOR_DEFAULT)
        if self.text:
            super().draw(canvas)


class ChatOutput(Listener):
    """The scrolling list of chat messages above the input line."""

    def __init__(
        self,
        dispatcher: Dispatcher,
        text_size: float = 14.0,
        left: float = 0.0,
        top: float = 0.0,
        right: float = 0.0,
        bottom: float = 0.0,
        max_history: int = DEFAULT_MAX_HISTORY,
    ) -> None:
        self._dispatcher = dispatcher
        self.text_size = text_size
        self.left = left
        self.top = top
        self.right = right
        self.bottom = bottom
        self.max_history = max_history
        self.history: list[str] = []
        self.rendered: VerticalList[UIText] = VerticalList(
            text_size,
            TextAlign.LEADING,
            ParagraphAlign.CENTER,
            FontWeight.NORMAL,
            MESSAGE_SPACING,
            left,
            top,
            right,
        )
        self.render_start = 0
        self.hidden_boundary = 0
        dispatcher.subscribe(EventType.UI_TEXTINPUT_HEIGHTCHANGED, self)
        dispatcher.subscribe(EventType.CHAT_CLEARCHAT, self)

    def _overflows(self) -> bool:
        return self.top + self.rendered.height > self.bottom

    def push_back(self, text: str) -> None:
        """Add a message, scrolling older ones out of view as needed."""
        if len(self.history) >= self.max_history:
            self.history.pop(0)
            if self.rendered and self.rendered.height < self.bottom:
                self.rendered.pop_front()
        self.history.append(text)

        self.rendered.push_back(text)
        if self._overflows():
            while self._overflows() and self.rendered:
                self.rendered.pop_front()
                self.render_start += 1
            self.hidden_boundary = self.render_start

    def on_notify(self, event: GameEvent) -> None:
        if event.event_type is EventType.UI_TEXTINPUT_HEIGHTCHANGED and isinstance(event, UIEvent):
            self.bottom = int(event.element.bounds.top)
            if not self.history:
                return
            if event.info == "grow":
                while self._overflows() and self.rendered:
                    self.hidden_boundary += 1
                    self.rendered.pop_front()
            elif event.info == "shrink":
                if self.render_start != self.hidden_boundary and self.hidden_boundary != 0:
                    while self.hidden_boundary != self.render_start:
                        self.hidden_boundary -= 1
                        self.rendered.push_front(self.history[self.hidden_boundary])
                        if self._overflows():
                            self.hidden_boundary += 1
                            self.rendered.pop_front()
                            break
        elif event.event_type is EventType.CHAT_CLEARCHAT:
            self.render_start = 0
            self.hidden_boundary = 0
            self.history.clear()
            self.rendered.clear()

    def draw(self, canvas: Canvas) -> None:
        self.rendered.draw(canvas)

    def close(self) -> None:
        """Stop listening for events."""
        self._dispatcher.unsubscribe(EventType.CHAT_CLEARCHAT, self)
        self._dispatcher.unsubscribe(EventType.UI_TEXTINPUT_HEIGHTCHANGED, self)


class Chatbox(Listener):
    """An input line and a message list sharing one area of the screen."""

    def __init__(
        self,
        dispatcher: Dispatcher,
        on_submit: Callable[[str], None] | None = None,
        input_text_size: float = 14.0,
        input_font_weight: FontWeight = FontWeight.NORMAL,
        output_text_size: float = 14.0,
        left: float = 0.0,
        top: float = 0.0,
        right: float = 0.0,
        bottom: float = 0.0,
    ) -> None:
        self._dispatcher = dispatcher
        self.input = ChatInput(
            dispatcher, on_submit, input_text_size, input_font_weight, top, left, right, bottom
        )
        self.output = ChatOutput(dispatcher, output_text_size, left, top, right, bottom)
        self._focused = False
        dispatcher.subscribe(EventType.CHAT_MESSAGEDISPLAY, self)

    @property
    def focused(self) -> bool:
        return self._focused

    @focused.setter
    def focused(self, value: bool) -> None:
        self._focused = value
        self.input.focused = value

    def handle_char_input(self, key: KeyInput) -> None:
        """Pass a key to the input while it has focus."""
        if self.input.focused:
            self.input.char_in(key)

    def on_notify(self, event: GameEvent) -> None:
        if event.event_type is EventType.CHAT_MESSAGEDISPLAY and isinstance(event, ChatEvent):
            self.output.push_back(event.message)

    def draw(self, canvas: Canvas) -> None:
        self.output.draw(canvas)
        self.input.draw(canvas)

    def close(self) -> None:
        """Stop listening for events."""
        self._dispatcher.unsubscribe(EventType.CHAT_MESSAGEDISPLAY, self)
        self.output.close()