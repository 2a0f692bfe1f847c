"""planeflap audio system."""

from .engine import AudioEngine, SoundEffect

__all__ = ["AudioEngine", "SoundEffect"]
