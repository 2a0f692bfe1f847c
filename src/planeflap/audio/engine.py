"""
planeflap audio engine.

Plays sound effects through pygame.mixer. Sounds come from files in the
assets directory, or are synthesised with numpy when the file is
missing. Without a working mixer every call is a silent no-op.
"""

import logging
from pathlib import Path
from typing import Callable, Dict, Optional

import numpy as np
from numpy.typing import NDArray
import pygame

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100

Samples = NDArray[np.float64]


def square(t: Samples, freq: Samples | float) -> Samples:
    return np.where((t * freq) % 1 < 0.5, 1.0, -1.0)


def sine(t: Samples, freq: Samples | float) -> Samples:
    return np.sin(2 * np.pi * freq * t)


def jump_chirp(duration: float = 0.12) -> Samples:
    """Short rising chirp with a linear fade-out."""
    t = np.arange(int(SAMPLE_RATE * duration)) / SAMPLE_RATE
    freq = 420 + t * 3200
    envelope = 1 - t / duration
    return (square(t, freq) * 0.35 + sine(t, freq / 2) * 0.25) * envelope


class SoundEffect:
    """A keyed sound with its own volume."""

    def __init__(self, engine: "AudioEngine", key: str, volume: float = 1.0) -> None:
        self.engine = engine
        self.key = key
        self.volume = volume

    def play(self) -> Optional[pygame.mixer.Channel]:
        return self.engine.play(self.key, volume=self.volume)


class AudioEngine:
    """Sound effect playback on pygame.mixer."""

    GENERATORS: Dict[str, Callable[[], Samples]] = {
        "jump": jump_chirp,
    }

    def __init__(self, master_volume: float = 1.0, muted: bool = False):
        self._ready = False
        self._sounds: Dict[str, pygame.mixer.Sound] = {}
        self._master = master_volume
        self._muted = muted

    @property
    def initialized(self) -> bool:
        return self._ready

    def init(self) -> bool:
        """Open the mixer. Returns False (and stays silent) on failure."""
        try:
            pygame.mixer.pre_init(SAMPLE_RATE, -16, 2, 512)
            pygame.mixer.init()
        except pygame.error as e:
            logger.error(f"Failed to initialize audio: {e}")
            return False
        pygame.mixer.set_num_channels(8)
        self._ready = True
        logger.info("Audio engine initialized")
        return True

    def _to_sound(self, samples: Samples) -> pygame.mixer.Sound:
        """Mono float samples in [-1, 1] -> 16-bit stereo Sound."""
        pcm = (np.clip(samples, -1.0, 1.0) * 32767).astype(np.int16)
        stereo = np.repeat(pcm, 2)
        return pygame.mixer.Sound(buffer=stereo.tobytes())

    def load(self, key: str, path: Path) -> bool:
        """Load a sound file under key. Returns False if it couldn't be read."""
        if not self._ready:
            return False
        if not path.is_file():
            logger.warning(f"Sound file not found: {path}")
            return False
        try:
            self._sounds[key] = pygame.mixer.Sound(str(path))
        except pygame.error as e:
            logger.warning(f"Failed to load sound {path}: {e}")
            return False
        logger.debug(f"Loaded sound '{key}' from {path}")
        return True

    def generate(self, key: str) -> bool:
        """Synthesise the built-in sound for key, if there is one."""
        if not self._ready:
            return False
        generator = self.GENERATORS.get(key)
        if generator is None:
            logger.warning(f"No generated sound for '{key}'")
            return False
        self._sounds[key] = self._to_sound(generator())
        logger.debug(f"Generated sound '{key}'")
        return True

    def has_sound(self, key: str) -> bool:
        return key in self._sounds

    def add(self, key: str, volume: float = 1.0) -> SoundEffect:
        return SoundEffect(self, key, volume)

    def play(self, key: str, volume: float = 1.0, loops: int = 0) -> Optional[pygame.mixer.Channel]:
        """Play a sound. Returns its channel, or None if nothing played."""
        sound = self._sounds.get(key) if self._ready and not self._muted else None
        if sound is None:
            return None
        sound.set_volume(volume * self._master)
        return sound.play(loops=loops)

    def stop_all(self) -> None:
        if self._ready:
            pygame.mixer.stop()

    def set_master_volume(self, volume: float) -> None:
        self._master = min(1.0, max(0.0, volume))

    def is_muted(self) -> bool:
        return self._muted

    def toggle_mute(self) -> bool:
        self._muted = not self._muted
        if self._muted:
            self.stop_all()
        logger.info(f"Audio {'muted' if self._muted else 'unmuted'}")
        return self._muted

    def cleanup(self) -> None:
        if not self._ready:
            return
        pygame.mixer.quit()
        self._ready = False
        self._sounds.clear()
        logger.info("Audio engine cleaned up")
