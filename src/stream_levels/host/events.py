"""Synchronous event dispatch for host objects."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class Event:
    type: str
    target: Any
    data: dict[str, Any] = field(default_factory=dict)


Listener = Callable[[Event], None]


class EventTarget:
    """Mixin giving an object ``on`` / ``off`` / ``one`` / ``trigger``.

    Listeners run synchronously, in registration order, on the caller's
    thread.  Exceptions raised by a listener propagate to ``trigger``.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}

    def on(self, event_type: str, listener: Listener) -> None:
        self._listeners.setdefault(event_type, []).append(listener)

    def one(self, event_type: str, listener: Listener) -> None:
        """Register *listener* for a single delivery of *event_type*."""

        def once(event: Event) -> None:
            self.off(event_type, once)
            listener(event)

        self.on(event_type, once)

    def off(self, event_type: str | None = None, listener: Listener | None = None) -> None:
        """Remove listeners.

        No arguments removes everything, *event_type* alone removes all
        listeners of that type.
        """
        if event_type is None:
            self._listeners.clear()
            return
        if listener is None:
            self._listeners.pop(event_type, None)
            return
        listeners = self._listeners.get(event_type, [])
        if listener in listeners:
            listeners.remove(listener)

    def trigger(self, event_type: str, **data: Any) -> Event:
        event = Event(type=event_type, target=self, data=data)
        for listener in list(self._listeners.get(event_type, ())):
            listener(event)
        return event

    def listener_count(self, event_type: str | None = None) -> int:
        if event_type is None:
            return sum(len(listeners) for listeners in self._listeners.values())
        return len(self._listeners.get(event_type, ()))
