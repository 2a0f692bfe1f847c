"""Asset loading with generated fallbacks."""

from pathlib import Path
from typing import Callable, Dict, List, Optional
import logging

import numpy as np
from numpy.typing import NDArray
from PIL import Image, UnidentifiedImageError

from planeflap.audio.engine import AudioEngine
from planeflap.graphics.sprites import slice_spritesheet, to_array

logger = logging.getLogger(__name__)

Frame = NDArray[np.uint8]


class AssetCache:
    """Loaded images, stored as lists of RGBA frames per key."""

    def __init__(self) -> None:
        self._frames: Dict[str, List[Frame]] = {}

    def add_frames(self, key: str, frames: List[Frame]) -> None:
        if not frames:
            raise ValueError(f"No frames for asset '{key}'")
        self._frames[key] = frames

    def get_frames(self, key: str) -> List[Frame]:
        """Frames for key. Raises KeyError if it was never loaded."""
        try:
            return self._frames[key]
        except KeyError:
            raise KeyError(f"Asset not loaded: {key}") from None

    def frame_size(self, key: str) -> tuple[int, int]:
        """(width, height) of the first frame."""
        h, w = self.get_frames(key)[0].shape[:2]
        return w, h

    def has(self, key: str) -> bool:
        return key in self._frames

    def clear(self) -> None:
        self._frames.clear()


class AssetLoader:
    """Loads images, spritesheets and sounds from the assets directory.

    A missing or unreadable file is logged and replaced by the fallback,
    so a state's preload never fails.
    """

    def __init__(self, assets_path: Path, cache: AssetCache, audio: AudioEngine) -> None:
        self.assets_path = Path(assets_path)
        self.cache = cache
        self.audio = audio

    def _open(self, filename: str) -> Optional[Image.Image]:
        path = self.assets_path / filename
        if not path.is_file():
            logger.warning(f"Asset not found, using generated art: {path}")
            return None
        try:
            with Image.open(path) as image:
                return image.convert("RGBA")
        except (OSError, UnidentifiedImageError) as e:
            logger.warning(f"Failed to read {path}: {e}")
            return None

    def image(self, key: str, filename: str, fallback: Callable[[], Frame]) -> None:
        """Load a single image under key."""
        if self.cache.has(key):
            return
        image = self._open(filename)
        frame = to_array(image) if image is not None else fallback()
        self.cache.add_frames(key, [frame])
        logger.debug(f"Image '{key}' ready")

    def spritesheet(
        self,
        key: str,
        filename: str,
        frame_width: int,
        frame_height: int,
        fallback: Callable[[], List[Frame]],
    ) -> None:
        """Load a spritesheet cut into frame_width x frame_height frames."""
        if self.cache.has(key):
            return
        image = self._open(filename)
        frames = []
        if image is not None:
            frames = slice_spritesheet(image, frame_width, frame_height)
            if not frames:
                logger.warning(f"Spritesheet {filename} is smaller than one frame")
        self.cache.add_frames(key, frames or fallback())
        logger.debug(f"Spritesheet '{key}' ready ({len(self.cache.get_frames(key))} frames)")

    def audio_file(self, key: str, filename: str) -> None:
        """Load a sound, synthesising the built-in one if the file is missing."""
        if self.audio.has_sound(key):
            return
        if not self.audio.load(key, self.assets_path / filename):
            self.audio.generate(key)
