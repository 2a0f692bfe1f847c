"""Animation module for planeflap."""

from planeflap.animation.easing import Easing, get_easing
from planeflap.animation.timeline import Timeline, Track, Keyframe, PlayState
from planeflap.animation.engine import AnimationEngine
from planeflap.animation.frames import FrameAnimation, SpriteAnimations

__all__ = [
    "Easing",
    "get_easing",
    "Timeline",
    "Track",
    "Keyframe",
    "PlayState",
    "AnimationEngine",
    "FrameAnimation",
    "SpriteAnimations",
]
