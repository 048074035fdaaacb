import logging
from collections.abc import Callable
from typing import Any

from dungeon_automation.models.models import EventType

LOGGER = logging.getLogger(__name__)

EventCallback = Callable[[dict[str, Any]], None]


class EventManager:
    def __init__(self) -> None:
        self._subscribers: dict[EventType, list[EventCallback]] = {event_type: [] for event_type in EventType}

    def has_subscribers(self, event_type: EventType) -> bool:
        return bool(self._subscribers[event_type])

    def publish(self, event_type: EventType, payload: dict[str, Any] | None = None) -> None:
        event_payload = payload if payload is not None else {}
        LOGGER.debug("Publishing %s to %d subscriber(s)", event_type.name, len(self._subscribers[event_type]))
        for callback in list(self._subscribers[event_type]):
            callback(event_payload)

    def subscribe(self, event_type: EventType, callback: EventCallback) -> None:
        if callback not in self._subscribers[event_type]:
            self._subscribers[event_type].append(callback)

    def unsubscribe(self, event_type: EventType, callback: EventCallback) -> None:
        if callback in self._subscribers[event_type]:
            self._subscribers[event_type].remove(callback)
