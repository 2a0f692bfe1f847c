"""
Game window using pygame.

Feeds keyboard and pointer input to the event bus, steps the game once
per frame and presents its buffer scaled into the window.
"""

import asyncio
import logging
from typing import Optional

import pygame

from planeflap.config.settings import DisplaySettings
from planeflap.core.events import Event, EventType, key_down_event, pointer_down_event, tick_event
from planeflap.engine.game import Game
from planeflap.engine.scale import ScaleResult

logger = logging.getLogger(__name__)


class GameWindow:
    """
    Desktop window for the game.

    Keyboard Mapping:
        SPACE: Jump (any other key is forwarded to the game too)
        Mouse / touch: Jump
        D: Toggle debug overlay
        S: Screenshot
        F: Toggle fullscreen
        ESC / Q: Quit
    """

    SYSTEM_KEYS = {"escape", "q", "d", "s", "f"}
    # Longest frame the game is stepped by, in ms
    MAX_FRAME_MS = 100

    def __init__(self, game: Game, config: Optional[DisplaySettings] = None) -> None:
        self.game = game
        self.config = config or DisplaySettings()
        self.event_bus = game.event_bus

        self._screen: Optional[pygame.Surface] = None
        self._clock: Optional[pygame.time.Clock] = None
        self._font: Optional[pygame.font.Font] = None
        self._running = False
        self._fullscreen = self.config.fullscreen
        self._show_debug = self.config.show_debug
        self._placement: Optional[ScaleResult] = None

        self._log_buffer: list[str] = []
        self._max_log_lines = 6
        self._setup_log_capture()

        logger.info("GameWindow created")

    def _setup_log_capture(self) -> None:
        """Keep the last few log lines for the debug overlay."""
        class OverlayLogHandler(logging.Handler):
            def __init__(self, window: "GameWindow"):
                super().__init__(level=logging.INFO)
                self.window = window

            def emit(self, record):
                buffer = self.window._log_buffer
                buffer.append(self.format(record))
                if len(buffer) > self.window._max_log_lines * 2:
                    del buffer[:-self.window._max_log_lines]

        handler = OverlayLogHandler(self)
        handler.setFormatter(logging.Formatter("%(levelname).1s %(message)s"))
        logging.getLogger("planeflap").addHandler(handler)
        self._log_handler = handler

    def _init_pygame(self) -> None:
        pygame.init()
        pygame.display.set_caption(self.config.title)
        self._set_mode()
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont(None, 18)

        logger.info(f"Pygame initialized: {self._screen.get_width()}x{self._screen.get_height()}")

    def _set_mode(self) -> None:
        flags = pygame.DOUBLEBUF
        if self._fullscreen:
            flags |= pygame.FULLSCREEN
            size = (0, 0)
        else:
            size = (self.config.window_width, self.config.window_height)
            # SHOW_ALL is picked in preload on non-desktop platforms
            if not self.game.context.desktop:
                flags |= pygame.RESIZABLE
        self._screen = pygame.display.set_mode(size, flags)

    def _placement_now(self) -> ScaleResult:
        width, height = self._screen.get_size()
        self._placement = self.game.scale.compute(width, height)
        return self._placement

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            self._handle_event(event)

    def _handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self._running = False

        elif event.type == pygame.KEYDOWN:
            self._handle_keydown(event)

        elif event.type == pygame.KEYUP:
            self.event_bus.emit(Event(
                EventType.KEY_UP, data={"key": pygame.key.name(event.key)}, source="keyboard"
            ))

        # SDL also synthesises mouse events for touches; FINGERDOWN covers those
        elif event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP) and getattr(event, "touch", False):
            return

        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._pointer_down(*event.pos)

        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.event_bus.emit(Event(EventType.POINTER_UP, source="mouse"))

        elif event.type == pygame.FINGERDOWN:
            width, height = self._screen.get_size()
            self._pointer_down(event.x * width, event.y * height)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        name = pygame.key.name(event.key)

        if name in ("escape", "q"):
            self._running = False
        elif name == "d":
            self._show_debug = not self._show_debug
        elif name == "s":
            self._capture_screenshot()
        elif name == "f":
            self._toggle_fullscreen()

        if name not in self.SYSTEM_KEYS:
            self.event_bus.emit(key_down_event(name))

    def _pointer_down(self, window_x: float, window_y: float) -> None:
        placement = self._placement or self._placement_now()
        x, y = self.game.scale.to_game(placement, window_x, window_y)
        self.event_bus.emit(pointer_down_event(x, y))

    def _render(self) -> None:
        placement = self._placement_now()
        buffer = self.game.render()

        # Buffer is (h, w, 3); surfarray wants (w, h, 3)
        surface = pygame.surfarray.make_surface(buffer.swapaxes(0, 1))
        if placement.scale != 1.0:
            surface = pygame.transform.smoothscale(surface, (placement.width, placement.height))

        self._screen.fill((0, 0, 0))
        self._screen.blit(surface, (placement.offset_x, placement.offset_y))

        if self._show_debug:
            self._render_debug()

        pygame.display.flip()

    def _debug_lines(self) -> list[str]:
        state = self.game.state.current
        plane = getattr(state, "plane", None)
        pipes = getattr(state, "pipes", None)

        return [
            f"FPS: {self._clock.get_fps():.1f}" if self._clock else "FPS: --",
            f"Frame: {self.game.frame_count}",
            f"Flow: {self.game.flow.state.name}",
            f"Score: {getattr(state, 'score', 0)}",
            f"Alive: {plane.alive if plane else '--'}",
            f"Pipes: {len(pipes.living()) if pipes is not None else 0}",
            "",
            *self._log_buffer[-self._max_log_lines:],
        ]

    def _render_debug(self) -> None:
        if not self._font:
            return

        y = 60
        for line in self._debug_lines():
            text_surface = self._font.render(line, True, (255, 255, 255))
            self._screen.blit(text_surface, (10, y))
            y += 16

    def _capture_screenshot(self) -> None:
        if self._screen:
            filename = f"screenshot_{self.game.frame_count}.png"
            pygame.image.save(self._screen, filename)
            logger.info(f"Screenshot saved: {filename}")

    def _toggle_fullscreen(self) -> None:
        self._fullscreen = not self._fullscreen
        self._set_mode()
        self._placement = None
        logger.info(f"Fullscreen: {self._fullscreen}")

    async def run(self) -> None:
        """Main window loop."""
        self._init_pygame()
        self._running = True

        logger.info("Window loop started")

        try:
            while self._running:
                self._handle_events()

                delta_ms = min(self._clock.get_time(), self.MAX_FRAME_MS)
                self.game.step(delta_ms)
                self.event_bus.emit(tick_event(delta_ms / 1000.0, self.game.frame_count))

                await self.event_bus.process_queue()

                self._render()

                self._clock.tick(self.config.fps)

                await asyncio.sleep(0)
        finally:
            self._cleanup()

    def _cleanup(self) -> None:
        logging.getLogger("planeflap").removeHandler(self._log_handler)
        self.game.audio.cleanup()
        pygame.quit()
        logger.info("Window closed")

    def stop(self) -> None:
        self._running = False
