"""
In-process event bus.

Implements the NotifierPort: listeners subscribe per event name. With
record=True every emitted event is also kept for later inspection.

Key behaviors:
- Listeners run synchronously in subscription order
- A listener that raises does not stop the remaining listeners; the error is logged
- Recording is off by default; recorded events are kept until clear_recorded()
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

Listener = Callable[[dict[str, Any]], None]


@dataclass(frozen=True)
class RecordedEvent:
    """An emitted event."""

    name: str
    payload: dict[str, Any]


@dataclass
class EventBus:
    """Synchronous publish/subscribe notifier."""

    record: bool = False
    _listeners: dict[str, list[Listener]] = field(default_factory=dict)
    recorded: list[RecordedEvent] = field(default_factory=list)

    def on(self, event_name: str, listener: Listener) -> None:
        self._listeners.setdefault(event_name, []).append(listener)

    def off(self, event_name: str, listener: Listener) -> None:
        listeners = self._listeners.get(event_name, [])
        if listener in listeners:
            listeners.remove(listener)

    def notify(self, event_name: str, payload: dict[str, Any]) -> None:
        if self.record:
            self.recorded.append(RecordedEvent(event_name, dict(payload)))
        for listener in list(self._listeners.get(event_name, [])):
            try:
                listener(payload)
            except Exception:
                logger.exception("Listener for %r failed", event_name)

    def clear_listeners(self) -> None:
        self._listeners.clear()

    def events_named(self, event_name: str) -> list[RecordedEvent]:
        return [event for event in self.recorded if event.name == event_name]

    def clear_recorded(self) -> None:
        self.recorded.clear()
