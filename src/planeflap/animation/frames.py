"""Spritesheet frame animations."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


@dataclass
class FrameAnimation:
    """A named sequence of spritesheet frames played at a fixed rate.

    Attributes:
        name: Animation name
        frames: Frame indices in play order
        frame_rate: Frames per second
        loop: Whether to wrap around at the end
    """

    name: str
    frames: List[int]
    frame_rate: float = 60.0
    loop: bool = False

    _index: int = field(default=0, repr=False)
    _elapsed: float = field(default=0.0, repr=False)
    _playing: bool = field(default=False, repr=False)

    def __post_init__(self) -> None:
        if not self.frames:
            raise ValueError(f"Frame animation '{self.name}' has no frames")

    @property
    def frame_duration(self) -> float:
        """Duration of one frame in milliseconds."""
        return 1000.0 / self.frame_rate

    @property
    def current_frame(self) -> int:
        return self.frames[self._index]

    @property
    def is_playing(self) -> bool:
        return self._playing

    def play(self) -> None:
        self._index = 0
        self._elapsed = 0.0
        self._playing = True

    def stop(self) -> None:
        self._playing = False

    def update(self, delta_ms: float) -> int:
        """Advance by delta_ms and return the frame to show."""
        if not self._playing:
            return self.current_frame

        self._elapsed += delta_ms
        while self._elapsed >= self.frame_duration:
            self._elapsed -= self.frame_duration
            if self._index + 1 < len(self.frames):
                self._index += 1
            elif self.loop:
                self._index = 0
            else:
                self._playing = False
                break

        return self.current_frame


class SpriteAnimations:
    """Frame animations owned by a single sprite."""

    def __init__(self) -> None:
        self._animations: Dict[str, FrameAnimation] = {}
        self._current: Optional[FrameAnimation] = None

    def add(
        self,
        name: str,
        frames: List[int],
        frame_rate: float = 60.0,
        loop: bool = False,
    ) -> FrameAnimation:
        animation = FrameAnimation(name, list(frames), frame_rate, loop)
        self._animations[name] = animation
        return animation

    def play(self, name: str) -> FrameAnimation:
        """Play an animation previously added under name."""
        animation = self._animations[name]
        if self._current is not None and self._current is not animation:
            self._current.stop()
        self._current = animation
        animation.play()
        logger.debug(f"Frame animation playing: {name}")
        return animation

    @property
    def current(self) -> Optional[FrameAnimation]:
        return self._current

    def update(self, delta_ms: float) -> Optional[int]:
        """Advance the current animation; returns its frame or None."""
        if self._current is None:
            return None
        return self._current.update(delta_ms)
