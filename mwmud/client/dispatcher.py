"""Queued event delivery for the client."""

from __future__ import annotations

from collections import defaultdict, deque

from mwmud.client.events import EventType, GameEvent, Listener


class DuplicateSubscriptionError(Exception):
    """A listener was subscribed to an event type it already holds."""

    def __init__(self, message: str, info: str = "") -> None:
        super().__init__(message)
        self.info = info


class Dispatcher:
    """Delivers queued events to the listeners subscribed to their type.

    Events queued while a flush is running are delivered by the same flush.
    Each event goes to the listeners subscribed when its delivery begins.
    """

    def __init__(self) -> None:
        self._subscriptions: defaultdict[EventType, dict[Listener, None]] = defaultdict(dict)
        self._events: deque[GameEvent] = deque()

    def __len__(self) -> int:
        return len(self._events)

    def subscribe(self, event_type: EventType, listener: Listener) -> None:
        """Subscribe a listener to an event type."""
        self._subscriptions[event_type][listener] = None

    def unsubscribe(self, event_type: EventType, listener: Listener) -> None:
        """Unsubscribe a listener from an event type."""
        listeners = self._subscriptions.get(event_type)
        if listeners is not None:
            listeners.pop(listener, None)

    def enqueue(self, event: GameEvent) -> None:
        """Queue an event for delivery on the next flush."""
        self._events.append(event)

    def flush(self) -> None:
        """Deliver every queued event to its subscribers."""
        while self._events:
            event = self._events.popleft()
            for listener in list(self._subscriptions.get(event.event_type, ())):
                listener.on_notify(event)