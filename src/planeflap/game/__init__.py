"""The flappy plane game."""

from pathlib import Path
from typing import Optional
import random

from planeflap.audio.engine import AudioEngine
from planeflap.core.events import EventBus
from planeflap.engine.game import Game
from planeflap.game.main_state import MainState

__all__ = ["MainState", "create_game"]


def create_game(
    assets_path: Path = Path("assets"),
    audio: Optional[AudioEngine] = None,
    event_bus: Optional[EventBus] = None,
    seed: Optional[int] = None,
    desktop: Optional[bool] = None,
) -> Game:
    """Build a 400x490 game with MainState registered and started.

    The state is built on the first step().
    """
    game = Game(
        width=400,
        height=490,
        assets_path=assets_path,
        audio=audio,
        event_bus=event_bus,
        rng=random.Random(seed),
        desktop=desktop,
    )
    game.state.add(MainState.name, MainState)
    game.state.start(MainState.name)
    return game
