import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, DefaultDict, Dict, List

logger = logging.getLogger(__name__)

LEVEL_STARTED = "level_started"
ITEM_COLLECTED = "item_collected"
POWERUP_COLLECTED = "powerup_collected"
ITEMS_COMPLETE = "items_complete"
LEVEL_ADVANCED = "level_advanced"
GAME_WON = "game_won"
GAME_LOST = "game_lost"
PLAYER_MOVED = "player_moved"


@dataclass(frozen=True)
class Event:
    """Generic event container.

    Attributes:
        name: Event type/name string, one of the module constants.
        payload: Arbitrary payload associated with the event.
    """
    name: str
    payload: Dict[str, Any]


class EventBus:
    """A lightweight publish/subscribe event bus.

    Subscribers can register callbacks for specific event names. When an event is
    published, all callbacks registered for that event name will be invoked in
    registration order. Published events are kept in ``history``.
    """

    def __init__(self) -> None:
        self._subs: DefaultDict[str, List[Callable[[Event], None]]] = defaultdict(list)
        self.history: List[Event] = []

    def subscribe(self, event_name: str, callback: Callable[[Event], None]) -> None:
        if not callable(callback):
            raise TypeError("callback must be callable")
        self._subs[event_name].append(callback)
        logger.debug("Subscribed %s to '%s'", getattr(callback, "__name__", str(callback)), event_name)

    def unsubscribe(self, event_name: str, callback: Callable[[Event], None]) -> None:
        if event_name in self._subs and callback in self._subs[event_name]:
            self._subs[event_name].remove(callback)

    def publish(self, event_name: str, **payload: Any) -> Event:
        event = Event(name=event_name, payload=payload)
        self.history.append(event)
        subs = list(self._subs.get(event_name, []))
        logger.debug("Publishing event '%s' to %d subscribers with payload: %s", event_name, len(subs), payload)
        for cb in subs:
            try:
                cb(event)
            except Exception:
                logger.exception("Unhandled exception in event subscriber for '%s'", event_name)
        return event

    def names(self) -> List[str]:
        return [e.name for e in self.history]
