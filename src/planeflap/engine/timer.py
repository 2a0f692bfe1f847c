"""Scheduled callbacks driven by the frame clock."""

from dataclasses import dataclass, field
from typing import Any, Callable, List
import logging

logger = logging.getLogger(__name__)


@dataclass
class TimerEvent:
    """A scheduled callback.

    Attributes:
        delay: Interval in milliseconds
        callback: Called with args each time the event fires
        loop: Re-arm after firing
    """

    delay: float
    callback: Callable[..., Any]
    loop: bool = False
    args: tuple = ()
    elapsed: float = 0.0
    pending_delete: bool = field(default=False, repr=False)
    fire_count: int = 0


class TimerEvents:
    """Clock-driven timer list.

    Events fire from update(), at most once per call; a looped event
    that fell behind keeps at most one interval of backlog. An event
    removed during a frame never fires again.
    """

    def __init__(self) -> None:
        self._events: List[TimerEvent] = []

    def add(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerEvent:
        """Schedule callback once after delay ms."""
        return self._create(delay, callback, False, args)

    def loop(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerEvent:
        """Schedule callback every delay ms until removed."""
        return self._create(delay, callback, True, args)

    def _create(self, delay: float, callback, loop: bool, args: tuple) -> TimerEvent:
        if delay <= 0:
            raise ValueError(f"Timer delay must be positive, got {delay}")
        event = TimerEvent(delay=delay, callback=callback, loop=loop, args=args)
        self._events.append(event)
        logger.debug(f"Timer scheduled: every {delay}ms" if loop else f"Timer scheduled: in {delay}ms")
        return event

    def remove(self, event: TimerEvent) -> bool:
        """Cancel an event. Returns True if it was scheduled."""
        if event in self._events:
            event.pending_delete = True
            self._events.remove(event)
            logger.debug("Timer removed")
            return True
        return False

    def remove_all(self) -> None:
        for event in self._events:
            event.pending_delete = True
        self._events.clear()

    def update(self, delta_ms: float) -> int:
        """Advance all timers by delta_ms. Returns the number of firings."""
        fired = 0
        for event in list(self._events):
            if event.pending_delete:
                continue
            event.elapsed += delta_ms
            if event.elapsed < event.delay:
                continue
            event.elapsed = min(event.elapsed - event.delay, event.delay)
            event.fire_count += 1
            fired += 1
            event.callback(*event.args)
            if not event.loop:
                self.remove(event)
        return fired

    @property
    def length(self) -> int:
        return len(self._events)
