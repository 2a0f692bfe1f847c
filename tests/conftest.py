import os
import random
import sys
from pathlib import Path

import pytest

# Headless SDL for pygame-backed modules
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

SRC = Path(__file__).resolve().parents[1] / "src"
src_str = str(SRC)
if src_str not in sys.path:
    sys.path.insert(0, src_str)

from planeflap.engine.game import Game  # noqa: E402
from planeflap.game import MainState  # noqa: E402


class FixedHole(random.Random):
    """Random whose randint always returns the same gap slot."""

    def __init__(self, hole: int) -> None:
        super().__init__(0)
        self.hole = hole

    def randint(self, a, b):
        return self.hole


def make_game(tmp_path: Path, hole: int | None = None, desktop: bool = True) -> Game:
    rng = FixedHole(hole) if hole is not None else random.Random(1234)
    game = Game(assets_path=tmp_path, rng=rng, desktop=desktop)
    game.state.add(MainState.name, MainState)
    game.state.start(MainState.name)
    return game


@pytest.fixture
def game(tmp_path):
    """A started game whose first step(0) has built MainState."""
    g = make_game(tmp_path, hole=3)
    g.step(0)
    return g
