"""
Keyboard and pointer input.

The window turns pygame events into KEY_DOWN / POINTER_DOWN events on
the event bus; InputManager listens to those and calls whatever the
current game state bound with on_down().
"""

from typing import Callable, Dict
import logging

from planeflap.core.events import Event, EventBus, EventType

logger = logging.getLogger(__name__)


class Keys:
    """Key names as reported by pygame.key.name()."""

    SPACEBAR = "space"


class Key:
    """A single keyboard key.

    Press state is driven by InputManager from bus events.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._pressed = False
        self._down_callbacks: list[Callable[[], None]] = []
        self._up_callbacks: list[Callable[[], None]] = []

    def is_down(self) -> bool:
        return self._pressed

    def on_down(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register a press callback. Returns an unsubscribe function."""
        self._down_callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._down_callbacks:
                self._down_callbacks.remove(callback)

        return unsubscribe

    def on_up(self, callback: Callable[[], None]) -> Callable[[], None]:
        self._up_callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._up_callbacks:
                self._up_callbacks.remove(callback)

        return unsubscribe

    def _press(self) -> None:
        # Key repeat doesn't fire again until released
        if not self._pressed:
            self._pressed = True
            for callback in list(self._down_callbacks):
                callback()

    def _release(self) -> None:
        if self._pressed:
            self._pressed = False
            for callback in list(self._up_callbacks):
                callback()


class Pointer:
    """Mouse or touch pointer in game coordinates."""

    def __init__(self) -> None:
        self.x = 0.0
        self.y = 0.0
        self._pressed = False
        self._down_callbacks: list[Callable[[], None]] = []

    def is_down(self) -> bool:
        return self._pressed

    def on_down(self, callback: Callable[[], None]) -> Callable[[], None]:
        self._down_callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._down_callbacks:
                self._down_callbacks.remove(callback)

        return unsubscribe

    def _press(self, x: float, y: float) -> None:
        self.x, self.y = x, y
        self._pressed = True
        for callback in list(self._down_callbacks):
            callback()

    def _release(self) -> None:
        self._pressed = False


class InputManager:
    """Routes bus input events to keys and the pointer."""

    def __init__(self, event_bus: EventBus) -> None:
        self.event_bus = event_bus
        self._keys: Dict[str, Key] = {}
        self.pointer = Pointer()

        event_bus.subscribe(EventType.KEY_DOWN, self._on_key_down)
        event_bus.subscribe(EventType.KEY_UP, self._on_key_up)
        event_bus.subscribe(EventType.POINTER_DOWN, self._on_pointer_down)
        event_bus.subscribe(EventType.POINTER_UP, self._on_pointer_up)

    def add_key(self, name: str) -> Key:
        """Get (or create) the Key object for a key name."""
        if name not in self._keys:
            self._keys[name] = Key(name)
        return self._keys[name]

    def on_down(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Bind a callback to pointer presses."""
        return self.pointer.on_down(callback)

    def reset(self) -> None:
        """Drop every key and pointer binding."""
        self._keys.clear()
        self.pointer = Pointer()
        logger.debug("Input bindings reset")

    def _on_key_down(self, event: Event) -> None:
        key = self._keys.get(event.data.get("key", ""))
        if key is not None:
            key._press()

    def _on_key_up(self, event: Event) -> None:
        key = self._keys.get(event.data.get("key", ""))
        if key is not None:
            key._release()

    def _on_pointer_down(self, event: Event) -> None:
        self.pointer._press(event.data.get("x", 0.0), event.data.get("y", 0.0))

    def _on_pointer_up(self, event: Event) -> None:
        self.pointer._release()
