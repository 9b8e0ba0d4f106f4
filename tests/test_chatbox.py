import pytest

from mwmud.client.chatbox import MESSAGE_SPACING, ChatInput, ChatOutput, Chatbox
from mwmud.client.dispatcher import Dispatcher
from mwmud.client.events import ChatEvent, EventType, Key, Listener, UIEvent
from mwmud.client.ui import INPUT_RECT_COLOR_DEFAULT, Canvas, FillOp, Rect, TextOp, UIText, text_height

WIDTH = 600
SIZE = 14
LINE = text_height("x", SIZE, WIDTH)


class Recorder(Listener):
    def __init__(self):
        self.events = []

    def on_notify(self, event):
        self.events.append(event)


def _height_recorder(dispatcher):
    recorder = Recorder()
    dispatcher.subscribe(EventType.UI_TEXTINPUT_HEIGHTCHANGED, recorder)
    return recorder


def _output(dispatcher, **kwargs):
    bottom = int(2 * LINE + MESSAGE_SPACING) + 1
    return ChatOutput(dispatcher, text_size=SIZE, left=0, top=0, right=WIDTH, bottom=bottom, **kwargs)


def _rendered(output):
    return [element.text for element in output.rendered]


def test_typing_grows_input():
    dispatcher = Dispatcher()
    recorder = _height_recorder(dispatcher)
    chat_input = ChatInput(dispatcher, text_size=SIZE, left=0, right=WIDTH, bottom=500)
    chat_input.char_in("h")
    assert chat_input.text == "h"
    assert chat_input.bounds.top == pytest.approx(500 - LINE)
    dispatcher.flush()
    assert [event.info for event in recorder.events] == ["grow"]
    assert recorder.events[0].element is chat_input


def test_same_height_sends_no_event():
    dispatcher = Dispatcher()
    recorder = _height_recorder(dispatcher)
    chat_input = ChatInput(dispatcher, text_size=SIZE, left=0, right=WIDTH, bottom=500)
    chat_input.char_in("h")
    chat_input.char_in("i")
    dispatcher.flush()
    assert len(recorder.events) == 1


def test_backspace_to_empty_shrinks():
    dispatcher = Dispatcher()
    recorder = _height_recorder(dispatcher)
    chat_input = ChatInput(dispatcher, text_size=SIZE, left=0, right=WIDTH, bottom=500)
    chat_input.char_in("h")
    chat_input.char_in(Key.BACK)
    dispatcher.flush()
    assert chat_input.text == ""
    assert chat_input.bounds.top == chat_input.bounds.bottom
    assert [event.info for event in recorder.events] == ["grow", "shrink"]


def test_max_top_rejects_character():
    dispatcher = Dispatcher()
    recorder = _height_recorder(dispatcher)
    chat_input = ChatInput(dispatcher, text_size=SIZE, max_top=500 - LINE / 2, left=0, right=WIDTH, bottom=500)
    chat_input.char_in("a")
    dispatcher.flush()
    assert chat_input.text == ""
    assert chat_input.bounds.top == 500
    assert recorder.events == []


def test_return_submits_and_clears():
    submitted = []
    chat_input = ChatInput(Dispatcher(), submitted.append, SIZE, left=0, right=WIDTH, bottom=500)
    for key in ("h", "i", Key.RETURN):
        chat_input.char_in(key)
    assert submitted == ["hi"]
    assert chat_input.text == ""
    assert chat_input.bounds.top == chat_input.bounds.bottom


def test_return_on_empty_submits_nothing():
    submitted = []
    chat_input = ChatInput(Dispatcher(), submitted.append, SIZE, left=0, right=WIDTH, bottom=500)
    chat_input.char_in(Key.RETURN)
    assert submitted == []


def test_input_draw():
    chat_input = ChatInput(Dispatcher(), text_size=SIZE, left=0, right=WIDTH, bottom=500)
    canvas = Canvas()
    chat_input.draw(canvas)
    assert canvas.operations == [FillOp(Rect(0, 500, WIDTH, 500), INPUT_RECT_COLOR_DEFAULT)]
    chat_input.char_in("a")
    canvas.clear()
    chat_input.draw(canvas)
    assert [type(op) for op in canvas.operations] == [FillOp, TextOp]


def test_output_scrolls_old_messages_away():
    output = _output(Dispatcher())
    for message in ("m1", "m2", "m3"):
        output.push_back(message)
    assert _rendered(output) == ["m2", "m3"]
    assert output.history == ["m1", "m2", "m3"]
    assert output.render_start == 1
    assert output.hidden_boundary == 1


def test_output_clear_chat_event():
    dispatcher = Dispatcher()
    output = _output(dispatcher)
    for message in ("m1", "m2", "m3"):
        output.push_back(message)
    dispatcher.enqueue(ChatEvent(EventType.CHAT_CLEARCHAT, ""))
    dispatcher.flush()
    assert output.history == []
    assert len(output.rendered) == 0
    assert (output.render_start, output.hidden_boundary) == (0, 0)


def test_output_grow_then_shrink():
    dispatcher = Dispatcher()
    output = _output(dispatcher)
    original_bottom = output.bottom
    output.push_back("m1")
    output.push_back("m2")
    element = UIText(bounds=Rect(0, int(LINE) + 1, WIDTH, original_bottom))
    dispatcher.enqueue(UIEvent(EventType.UI_TEXTINPUT_HEIGHTCHANGED, element, "grow"))
    dispatcher.flush()
    assert _rendered(output) == ["m2"]
    assert output.hidden_boundary == 1

    element.bounds.top = original_bottom
    dispatcher.enqueue(UIEvent(EventType.UI_TEXTINPUT_HEIGHTCHANGED, element, "shrink"))
    dispatcher.flush()
    assert _rendered(output) == ["m1", "m2"]
    assert output.hidden_boundary == 0


def test_output_history_limit():
    output = ChatOutput(Dispatcher(), SIZE, 0, 0, WIDTH, 10000, max_history=2)
    for message in ("m1", "m2", "m3"):
        output.push_back(message)
    assert output.history == ["m2", "m3"]


def test_output_close_stops_listening():
    dispatcher = Dispatcher()
    output = _output(dispatcher)
    output.push_back("m1")
    output.close()
    dispatcher.enqueue(ChatEvent(EventType.CHAT_CLEARCHAT, ""))
    dispatcher.flush()
    assert output.history == ["m1"]


def _chatbox(dispatcher, **kwargs):
    return Chatbox(dispatcher, left=0, top=0, right=WIDTH, bottom=500, **kwargs)


def test_chatbox_displays_messages():
    dispatcher = Dispatcher()
    box = _chatbox(dispatcher)
    dispatcher.enqueue(ChatEvent(EventType.CHAT_MESSAGEDISPLAY, "hello"))
    dispatcher.flush()
    assert _rendered(box.output) == ["hello"]


def test_chatbox_input_needs_focus():
    box = _chatbox(Dispatcher())
    box.handle_char_input("a")
    assert box.input.text == ""
    box.focused = True
    box.handle_char_input("a")
    assert box.input.focused is True
    assert box.input.text == "a"


def test_chatbox_submit():
    submitted = []
    box = _chatbox(Dispatcher(), on_submit=submitted.append)
    box.focused = True
    for key in ("o", "k", Key.RETURN):
        box.handle_char_input(key)
    assert submitted == ["ok"]


def test_chatbox_input_height_moves_output_bottom():
    dispatcher = Dispatcher()
    box = _chatbox(dispatcher)
    box.output.push_back("m1")
    box.focused = True
    box.handle_char_input("a")
    dispatcher.flush()
    assert box.output.bottom == int(box.input.bounds.top)


def test_chatbox_close():
    dispatcher = Dispatcher()
    box = _chatbox(dispatcher)
    box.close()
    dispatcher.enqueue(ChatEvent(EventType.CHAT_MESSAGEDISPLAY, "hello"))
    dispatcher.flush()
    assert box.output.history == []


def test_chatbox_draw_order():
    box = _chatbox(Dispatcher())
    box.output.push_back("hello")
    canvas = Canvas()
    box.draw(canvas)
    assert [type(op) for op in canvas.operations] == [TextOp, FillOp]