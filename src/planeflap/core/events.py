"""
Event bus for planeflap.

The window publishes input here (KEY_DOWN, POINTER_DOWN, ...); the
engine and the game publish what happened (rows spawned, jumps, deaths,
restarts, flow changes). Anything can subscribe.
"""

from collections import defaultdict, deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Awaitable, Callable, Deque, Dict, List
import asyncio
import inspect
import logging
import time

logger = logging.getLogger(__name__)


class EventType(Enum):
    # Input
    KEY_DOWN = auto()
    KEY_UP = auto()
    POINTER_DOWN = auto()
    POINTER_UP = auto()

    # Game
    ROW_SPAWNED = auto()
    PLAYER_JUMPED = auto()
    PLAYER_DIED = auto()
    GAME_RESTART = auto()
    STATE_CHANGED = auto()

    # System
    TICK = auto()
    SHUTDOWN = auto()


@dataclass
class Event:
    """
    Something that happened.

    Attributes:
        type: EventType, or a string for ad-hoc events
        data: Payload
        source: Who emitted it ("keyboard", "engine", "main", ...)
        timestamp: time.monotonic() at creation
    """
    type: EventType | str
    data: Dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.monotonic)


Handler = Callable[[Event], None] | Callable[[Event], Awaitable[None]]


class EventBus:
    """
    Publish/subscribe hub.

    emit() calls synchronous handlers right away. Coroutine handlers
    only run for queued events drained by process_queue(), which the
    window awaits once per frame. A handler that raises is logged and
    does not stop the others.
    """

    HISTORY_SIZE = 100

    def __init__(self) -> None:
        self._handlers: Dict[EventType | str, List[Handler]] = defaultdict(list)
        self._catch_all: List[Handler] = []
        self._queue: Deque[Event] = deque()
        self._history: Deque[Event] = deque(maxlen=self.HISTORY_SIZE)

    def subscribe(self, event_type: EventType | str, handler: Handler) -> Callable[[], None]:
        """Call handler for every event of event_type. Returns an unsubscribe function."""
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type}")
        return self._remover(self._handlers[event_type], handler)

    def subscribe_all(self, handler: Handler) -> Callable[[], None]:
        self._catch_all.append(handler)
        return self._remover(self._catch_all, handler)

    @staticmethod
    def _remover(handlers: List[Handler], handler: Handler) -> Callable[[], None]:
        def unsubscribe() -> None:
            if handler in handlers:
                handlers.remove(handler)
        return unsubscribe

    def _targets(self, event: Event) -> List[Handler]:
        return [*self._handlers.get(event.type, ()), *self._catch_all]

    def emit(self, event: Event) -> None:
        """Deliver to synchronous handlers now."""
        self._history.append(event)
        for handler in self._targets(event):
            if inspect.iscoroutinefunction(handler):
                continue
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler for {event.type}: {e}")

    async def _deliver(self, event: Event) -> None:
        pending = []
        for handler in self._targets(event):
            if inspect.iscoroutinefunction(handler):
                pending.append(handler(event))
                continue
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler for {event.type}: {e}")

        for result in await asyncio.gather(*pending, return_exceptions=True):
            if isinstance(result, Exception):
                logger.error(f"Error in async handler for {event.type}: {result}")

    def queue_event(self, event: Event) -> None:
        """Hold an event until the next process_queue()."""
        self._queue.append(event)

    async def process_queue(self) -> None:
        """Deliver every event queued so far, oldest first."""
        batch, self._queue = self._queue, deque()
        for event in batch:
            self._history.append(event)
            await self._deliver(event)

    @property
    def queued_count(self) -> int:
        return len(self._queue)

    def get_history(self, event_type: EventType | str | None = None, limit: int = 10) -> List[Event]:
        events = [e for e in self._history if event_type is None or e.type == event_type]
        return events[-limit:]

    def clear_history(self) -> None:
        self._history.clear()


def key_down_event(key: str, source: str = "keyboard") -> Event:
    return Event(EventType.KEY_DOWN, data={"key": key}, source=source)


def pointer_down_event(x: float, y: float, source: str = "pointer") -> Event:
    """Pointer press at (x, y) in game coordinates."""
    return Event(EventType.POINTER_DOWN, data={"x": x, "y": y}, source=source)


def tick_event(delta: float, frame: int) -> Event:
    return Event(EventType.TICK, data={"delta": delta, "frame": frame})
