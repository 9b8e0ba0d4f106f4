from mwmud.client.dispatcher import Dispatcher
from mwmud.client.events import (
    EventType,
    GameEvent,
    InputEvent,
    Listener,
    NetworkEvent,
    ScreenEvent,
)
from mwmud.client.game import Game
from mwmud.client.screens import GameScreen, MainMenuScreen, TitleScreen
from mwmud.client.events import Key
from mwmud.client.ui import Canvas, FillOp, TextOp


class FakeNetwork(Listener):
    instances = []
    succeed = True

    def __init__(self, dispatcher):
        self.dispatcher = dispatcher
        self.connected_to = None
        self.closed = False
        self.polls = 0
        FakeNetwork.instances.append(self)

    def connect(self, ip):
        self.connected_to = ip
        return FakeNetwork.succeed

    def poll(self):
        self.polls += 1

    def on_notify(self, event):
        pass

    def close(self):
        self.closed = True


def make_game(succeed=True):
    FakeNetwork.instances = []
    FakeNetwork.succeed = succeed
    return Game(Dispatcher(), network_factory=FakeNetwork)


def press(game, key):
    game.dispatcher.enqueue(InputEvent(EventType.INPUT_KEYPRESSED, key))
    game.update()


def test_starts_on_title_screen():
    game = make_game()
    assert game.running is True
    assert isinstance(game.active_screen, TitleScreen)
    assert len(game.screens) == 1


def test_enter_advances_and_escape_returns():
    game = make_game()
    press(game, Key.RETURN)
    assert isinstance(game.active_screen, MainMenuScreen)
    assert len(game.screens) == 2
    press(game, Key.ESCAPE)
    assert isinstance(game.active_screen, TitleScreen)
    assert len(game.screens) == 1


def test_clear_and_set_replaces_stack():
    game = make_game()
    press(game, Key.RETURN)
    new_screen = GameScreen(game.dispatcher)
    game.dispatcher.enqueue(ScreenEvent(EventType.SCREEN_CLEARANDSET, new_screen))
    game.update()
    assert game.screens == [new_screen]


def test_failed_connection_drops_client():
    game = make_game(succeed=False)
    game.dispatcher.enqueue(NetworkEvent(EventType.NETWORK_CLIENT_ATTEMPTCONNECT, "127.0.0.1"))
    game.update()
    assert game.client is None
    assert FakeNetwork.instances[0].connected_to == "127.0.0.1"
    assert FakeNetwork.instances[0].closed is True


def test_successful_connection_is_polled():
    game = make_game()
    game.dispatcher.enqueue(NetworkEvent(EventType.NETWORK_CLIENT_ATTEMPTCONNECT, "127.0.0.1"))
    game.update()
    assert game.client is FakeNetwork.instances[0]
    polls = game.client.polls
    game.update()
    assert game.client.polls == polls + 1


def test_shutdown_event_stops_game():
    game = make_game()
    game.dispatcher.enqueue(NetworkEvent(EventType.NETWORK_CLIENT_ATTEMPTCONNECT, "127.0.0.1"))
    game.update()
    client = game.client
    game.dispatcher.enqueue(GameEvent(EventType.ENGINE_SHUTDOWN))
    game.update()
    assert game.running is False
    assert game.screens == []
    assert client.closed is True
    assert game.client is None


def test_render_clears_then_draws_active_screen():
    game = make_game()
    canvas = Canvas()
    game.render(canvas)
    game.render(canvas)
    assert isinstance(canvas.operations[0], FillOp)
    assert canvas.operations[0].color == "black"
    texts = [op.text for op in canvas.operations if isinstance(op, TextOp)]
    assert texts == ["MWMUD", "Prealpha Version", "Press ENTER"]