"""Fitting the game surface into the window."""

from dataclasses import dataclass
from enum import Enum, auto
import logging
import sys

logger = logging.getLogger(__name__)

# Platforms where the game runs in a browser or on a phone
_NON_DESKTOP_PLATFORMS = {"emscripten", "wasi", "android", "ios"}


def is_desktop(platform: str | None = None) -> bool:
    """Check whether we're running on a desktop OS."""
    return (platform or sys.platform) not in _NON_DESKTOP_PLATFORMS


class ScaleMode(Enum):
    NO_SCALE = auto()
    SHOW_ALL = auto()


@dataclass
class ScaleResult:
    """Where and how large to draw the game in the window."""

    scale: float
    offset_x: int
    offset_y: int
    width: int
    height: int


class ScaleManager:
    """Computes game-to-window placement.

    SHOW_ALL keeps the aspect ratio and fits the game inside the
    window, clamped between the min and max sizes. NO_SCALE draws at
    1:1. Page alignment centres the result on either axis.
    """

    def __init__(self, game_width: int, game_height: int) -> None:
        self.game_width = game_width
        self.game_height = game_height
        self.scale_mode = ScaleMode.NO_SCALE
        self.page_align_horizontally = False
        self.page_align_vertically = False
        self.min_width = game_width
        self.min_height = game_height
        self.max_width = game_width
        self.max_height = game_height
        self._last: ScaleResult | None = None

    def set_min_max(self, min_width: int, min_height: int, max_width: int, max_height: int) -> None:
        self.min_width = min_width
        self.min_height = min_height
        self.max_width = max_width
        self.max_height = max_height

    def compute(self, window_width: int, window_height: int) -> ScaleResult:
        """Compute scale and offset for a window of the given size."""
        if self.scale_mode == ScaleMode.SHOW_ALL:
            scale = min(window_width / self.game_width, window_height / self.game_height)
            min_scale = max(self.min_width / self.game_width, self.min_height / self.game_height)
            max_scale = min(self.max_width / self.game_width, self.max_height / self.game_height)
            scale = max(min_scale, min(scale, max_scale))
        else:
            scale = 1.0

        width = round(self.game_width * scale)
        height = round(self.game_height * scale)
        offset_x = (window_width - width) // 2 if self.page_align_horizontally else 0
        offset_y = (window_height - height) // 2 if self.page_align_vertically else 0

        result = ScaleResult(scale, offset_x, offset_y, width, height)
        if result != self._last:
            logger.debug(f"Scale: {scale:.3f} at ({offset_x}, {offset_y})")
            self._last = result
        return result

    def to_game(self, result: ScaleResult, window_x: float, window_y: float) -> tuple[float, float]:
        """Map a window position back into game coordinates."""
        return (
            (window_x - result.offset_x) / result.scale,
            (window_y - result.offset_y) / result.scale,
        )
