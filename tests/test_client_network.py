import socket
import time

import pytest

from mwmud.client.dispatcher import Dispatcher
from mwmud.client.events import ChatEvent, EventType, Listener, NetworkEvent
from mwmud.client.network import CONNECTION_FAILED, ClientNetwork
from mwmud.packet import PacketReader, encode_packet


class Recorder(Listener):
    def __init__(self, dispatcher, *types):
        self.events = []
        for event_type in types:
            dispatcher.subscribe(event_type, self)

    def on_notify(self, event):
        self.events.append(event)


@pytest.fixture
def server():
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen()
    yield listener
    listener.close()


def _free_port():
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


def test_connect_success_enqueues_event(server):
    dispatcher = Dispatcher()
    recorder = Recorder(dispatcher, EventType.NETWORK_CLIENT_CONNECTIONSUCCESS)
    client = ClientNetwork(dispatcher, port=server.getsockname()[1])
    assert client.connect("127.0.0.1") is True
    assert client.connected is True
    dispatcher.flush()
    assert [e.event_type for e in recorder.events] == [EventType.NETWORK_CLIENT_CONNECTIONSUCCESS]
    client.close()


def test_connect_failure_enqueues_message():
    dispatcher = Dispatcher()
    recorder = Recorder(dispatcher, EventType.NETWORK_CLIENT_CONNECTIONFAIL)
    client = ClientNetwork(dispatcher, port=_free_port(), timeout=1.0)
    assert client.connect("127.0.0.1") is False
    assert client.connected is False
    dispatcher.flush()
    assert len(recorder.events) == 1
    assert recorder.events[0].message == "Failed to connect. Is the server running?"
    assert recorder.events[0].message == CONNECTION_FAILED


def test_poll_turns_packets_into_chat_messages(server):
    dispatcher = Dispatcher()
    recorder = Recorder(dispatcher, EventType.CHAT_MESSAGEDISPLAY)
    client = ClientNetwork(dispatcher, port=server.getsockname()[1])
    client.connect("127.0.0.1")
    conn, _ = server.accept()
    conn.sendall(encode_packet("hello") + encode_packet("world"))
    deadline = time.monotonic() + 2.0
    while len(recorder.events) < 2 and time.monotonic() < deadline:
        client.poll()
        dispatcher.flush()
        time.sleep(0.01)
    messages = [e.message for e in recorder.events if isinstance(e, ChatEvent)]
    assert messages == ["hello", "world"]
    conn.close()
    client.close()


def test_datasend_event_reaches_server(server):
    dispatcher = Dispatcher()
    client = ClientNetwork(dispatcher, port=server.getsockname()[1])
    client.connect("127.0.0.1")
    conn, _ = server.accept()
    conn.settimeout(2.0)
    dispatcher.enqueue(NetworkEvent(EventType.NETWORK_CLIENT_DATASEND, "/login bob"))
    dispatcher.flush()
    reader = PacketReader()
    received = []
    while not received:
        received.extend(reader.feed(conn.recv(4096)))
    assert received == ["/login bob"]
    conn.close()
    client.close()


def test_close_disconnects(server):
    dispatcher = Dispatcher()
    client = ClientNetwork(dispatcher, port=server.getsockname()[1])
    client.connect("127.0.0.1")
    client.close()
    assert client.connected is False