"""Queued event delivery for the server."""

from __future__ import annotations

from collections import defaultdict, deque

from mwmud.server.events import Event, EventType, Listener


class Dispatcher:
    """Delivers queued events to the listeners subscribed to their type.

    While a flush is running, new events and subscription changes are held
    back and applied once the flush is over, so a flush only delivers the
    events that were queued before it began, to the listeners subscribed
    before it began.
    """

    def __init__(self) -> None:
        self._subscriptions: defaultdict[EventType, dict[Listener, None]] = defaultdict(dict)
        self._requests: deque[tuple[bool, EventType, Listener]] = deque()
        self._events: deque[Event] = deque()
        self._overflow: deque[Event] = deque()
        self._flushing = False

    def subscribe(self, event_type: EventType, listener: Listener) -> None:
        """Subscribe a listener to an event type."""
        if self._flushing:
            self._requests.append((True, event_type, listener))
        else:
            self._subscriptions[event_type][listener] = None

    def unsubscribe(self, event_type: EventType, listener: Listener) -> None:
        """Unsubscribe a listener from an event type."""
        if self._flushing:
            self._requests.append((False, event_type, listener))
        else:
            self._subscriptions[event_type].pop(listener, None)

    def enqueue(self, event: Event) -> None:
        """Queue an event for delivery on the next flush."""
        if self._flushing:
            self._overflow.append(event)
        else:
            self._events.append(event)

    def flush(self) -> None:
        """Deliver every queued event to its subscribers."""
        self._flushing = True
        try:
            while self._events:
                event = self._events.popleft()
                for listener in list(self._subscriptions.get(event.event_type, ())):
                    listener.on_notify(event)
        finally:
            self._flushing = False
            self._events.extend(self._overflow)
            self._overflow.clear()
            while self._requests:
                add, event_type, listener = self._requests.popleft()
                if add:
                    self.subscribe(event_type, listener)
                else:
                    self.unsubscribe(event_type, listener)