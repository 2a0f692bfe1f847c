"""
Game facade: owns every engine subsystem and runs one frame at a time.

Game states don't subclass anything. They are built by a factory that
receives the GameContext and must provide preload(), create() and
update().
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional, Protocol
import logging
import random

from planeflap.animation.engine import AnimationEngine
from planeflap.audio.engine import AudioEngine
from planeflap.core.events import Event, EventBus, EventType
from planeflap.core.state import State, StateContext, StateMachine
from planeflap.engine.input import InputManager
from planeflap.engine.loader import AssetCache, AssetLoader
from planeflap.engine.physics import ArcadePhysics
from planeflap.engine.scale import ScaleManager, is_desktop
from planeflap.engine.sprites import Group, Sprite, Text, World
from planeflap.engine.timer import TimerEvents
from planeflap.graphics.primitives import Buffer, Color, parse_color
from planeflap.graphics.renderer import Renderer

logger = logging.getLogger(__name__)


class GameState(Protocol):
    """What a game state must provide."""

    def preload(self) -> None: ...

    def create(self) -> None: ...

    def update(self) -> None: ...


StateFactory = Callable[["GameContext"], GameState]


@dataclass
class Stage:
    background_color: Color = (0, 0, 0)

    def set_background_color(self, value: str | Color) -> None:
        self.background_color = parse_color(value)


class ObjectFactory:
    """Creates game objects and adds them to the world."""

    def __init__(self, world: World, cache: AssetCache) -> None:
        self.world = world
        self.cache = cache

    def sprite(self, x: float, y: float, key: str, group: Optional[Group] = None) -> Sprite:
        """Create a sprite sized to its image, in group or else the world."""
        width, height = self.cache.frame_size(key)
        sprite = Sprite(key, x, y, width, height)
        if group is not None:
            group.add(sprite)
        else:
            self.world.add(sprite)
        return sprite

    def group(self, name: str = "group") -> Group:
        group = Group(name)
        self.world.add(group)
        return group

    def text(self, x: float, y: float, text: str, size: int = 30, color: str | Color = "#ffffff") -> Text:
        label = Text(x, y, text, size=size, color=parse_color(color))
        self.world.add(label)
        return label


@dataclass
class GameContext:
    """Engine capabilities handed to game states."""

    width: int
    height: int
    world: World
    add: ObjectFactory
    physics: ArcadePhysics
    time: TimerEvents
    tweens: AnimationEngine
    input: InputManager
    load: AssetLoader
    cache: AssetCache
    sound: AudioEngine
    scale: ScaleManager
    stage: Stage
    event_bus: EventBus
    flow: StateMachine
    state: "StateManager"
    rng: random.Random
    desktop: bool = True


class StateManager:
    """Registry of game states with deferred switching.

    start() only marks the switch; it is applied at the beginning of
    the next frame so the current frame finishes on the old state.
    """

    def __init__(self, game: "Game") -> None:
        self._game = game
        self._factories: Dict[str, StateFactory] = {}
        self._pending: Optional[str] = None
        self.current: Optional[GameState] = None
        self.current_key: Optional[str] = None

    def add(self, key: str, factory: StateFactory) -> None:
        self._factories[key] = factory
        logger.debug(f"State registered: {key}")

    def start(self, key: str) -> None:
        """Switch to the state registered under key on the next frame."""
        if key not in self._factories:
            raise KeyError(f"No state registered as '{key}'")
        self._pending = key

    @property
    def pending(self) -> Optional[str]:
        return self._pending

    def pre_update(self) -> None:
        if self._pending is not None:
            key, self._pending = self._pending, None
            self._switch(key)

    def _switch(self, key: str) -> None:
        game = self._game
        restarting = self.current is not None

        if restarting:
            game.flow.transition(State.LOADING)
            game.flow.context.restarts += 1
            game.event_bus.emit(Event(
                EventType.GAME_RESTART,
                data={"state": key, "restarts": game.flow.context.restarts},
                source="engine",
            ))

        game.reset_world()

        state = self._factories[key](game.context)
        self.current = state
        self.current_key = key
        game.flow.context.current_state = key

        logger.info(f"Starting state: {key}")
        state.preload()
        state.create()
        game.flow.transition(State.PLAYING)


class Game:
    """Owns the engine subsystems and steps them once per frame.

    Frame order: pending state switch, physics, timers, state update,
    tweens, sprite frame animations.
    """

    def __init__(
        self,
        width: int = 400,
        height: int = 490,
        assets_path: Path = Path("assets"),
        audio: Optional[AudioEngine] = None,
        event_bus: Optional[EventBus] = None,
        rng: Optional[random.Random] = None,
        desktop: Optional[bool] = None,
    ) -> None:
        self.width = width
        self.height = height
        self.event_bus = event_bus or EventBus()
        self.audio = audio or AudioEngine()
        self.rng = rng or random.Random()
        self.frame_count = 0

        self.world = World(width, height)
        self.cache = AssetCache()
        self.physics = ArcadePhysics(self.world)
        self.time = TimerEvents()
        self.tweens = AnimationEngine()
        self.input = InputManager(self.event_bus)
        self.loader = AssetLoader(assets_path, self.cache, self.audio)
        self.scale = ScaleManager(width, height)
        self.stage = Stage()
        self.renderer = Renderer(width, height, self.cache)

        self.flow = StateMachine()
        self.flow.add_listener(self._on_flow_change)
        self.state = StateManager(self)

        self.context = GameContext(
            width=width,
            height=height,
            world=self.world,
            add=ObjectFactory(self.world, self.cache),
            physics=self.physics,
            time=self.time,
            tweens=self.tweens,
            input=self.input,
            load=self.loader,
            cache=self.cache,
            sound=self.audio,
            scale=self.scale,
            stage=self.stage,
            event_bus=self.event_bus,
            flow=self.flow,
            state=self.state,
            rng=self.rng,
            desktop=is_desktop() if desktop is None else desktop,
        )

        logger.info(f"Game created: {width}x{height}")

    def _on_flow_change(self, old: State, new: State, context: StateContext) -> None:
        self.event_bus.emit(Event(
            EventType.STATE_CHANGED,
            data={"from": old.name, "to": new.name},
            source="engine",
        ))

    def reset_world(self) -> None:
        """Drop everything a state built: objects, timers, tweens, bindings."""
        self.world.clear()
        self.time.remove_all()
        self.tweens.stop_all()
        self.input.reset()
        self.renderer.reset()

    def step(self, delta_ms: float) -> None:
        """Advance the game by one frame of delta_ms milliseconds."""
        self.state.pre_update()
        state = self.state.current
        if state is None:
            return

        self.physics.update(delta_ms)
        self.time.update(delta_ms)
        state.update()
        self.tweens.update(delta_ms)

        for sprite in self.world.sprites():
            frame = sprite.animations.update(delta_ms)
            if frame is not None:
                sprite.frame = frame

        self.frame_count += 1

    def render(self) -> Buffer:
        """Render the current frame into an RGB buffer (height, width, 3)."""
        return self.renderer.render(self.world, self.stage.background_color)
