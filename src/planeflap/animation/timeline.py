"""Keyframed timelines.

A timeline has a duration in milliseconds and any number of named
tracks. Each track holds keyframes at normalised times (0..1) and is
sampled by interpolating between the two keyframes around the current
progress.
"""

from bisect import bisect_right
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional

from planeflap.animation.easing import Easing, get_easing


class PlayState(Enum):
    STOPPED = auto()
    PLAYING = auto()
    PAUSED = auto()
    FINISHED = auto()


@dataclass(order=True)
class Keyframe:
    """Value of a track at normalised time. easing shapes the segment
    that ends at this keyframe."""

    time: float
    value: Any = field(compare=False)
    easing: Easing | str = field(default=Easing.LINEAR, compare=False)


def lerp(start: Any, end: Any, t: float) -> Any:
    """Blend two values of the same shape; non-numeric values snap at t = 0.5."""
    if isinstance(start, bool) or not isinstance(start, (int, float, tuple)):
        return end if t >= 0.5 else start
    if isinstance(start, tuple):
        if not isinstance(end, tuple) or len(start) != len(end):
            return start
        return tuple(lerp(s, e, t) for s, e in zip(start, end))
    return start + (end - start) * t


@dataclass
class Track:
    name: str
    keyframes: List[Keyframe] = field(default_factory=list)

    def add_keyframe(self, time: float, value: Any, easing: Easing | str = Easing.LINEAR) -> "Track":
        """Insert a keyframe, keeping the list ordered. Returns self."""
        time = min(1.0, max(0.0, time))
        frame = Keyframe(time, value, easing)
        self.keyframes.insert(bisect_right(self.keyframes, frame), frame)
        return self

    def get_value_at(self, t: float) -> Any:
        frames = self.keyframes
        if not frames:
            return None
        if t <= frames[0].time:
            return frames[0].value
        if t >= frames[-1].time:
            return frames[-1].value

        i = bisect_right([k.time for k in frames], t)
        before, after = frames[i - 1], frames[i]
        span = after.time - before.time
        local = (t - before.time) / span if span > 0 else 1.0
        return lerp(before.value, after.value, get_easing(after.easing)(local))


@dataclass
class Timeline:
    """Named tracks played over duration milliseconds."""

    name: str
    duration: float = 1000.0
    loop: bool = False
    tracks: Dict[str, Track] = field(default_factory=dict)

    _state: PlayState = field(default=PlayState.STOPPED, repr=False)
    _elapsed: float = field(default=0.0, repr=False)

    def add_track(self, name: str) -> Track:
        self.tracks[name] = Track(name)
        return self.tracks[name]

    def get_track(self, name: str) -> Optional[Track]:
        return self.tracks.get(name)

    def play(self, from_start: bool = False) -> "Timeline":
        if from_start or self._state == PlayState.FINISHED:
            self._elapsed = 0.0
        self._state = PlayState.PLAYING
        return self

    def pause(self) -> "Timeline":
        if self._state == PlayState.PLAYING:
            self._state = PlayState.PAUSED
        return self

    def stop(self) -> "Timeline":
        self._state = PlayState.STOPPED
        self._elapsed = 0.0
        return self

    @property
    def state(self) -> PlayState:
        return self._state

    @property
    def progress(self) -> float:
        return 1.0 if self.duration <= 0 else self._elapsed / self.duration

    @property
    def is_playing(self) -> bool:
        return self._state == PlayState.PLAYING

    @property
    def is_finished(self) -> bool:
        return self._state == PlayState.FINISHED

    def update(self, delta_ms: float) -> Dict[str, Any]:
        """Advance by delta_ms while playing and sample every track."""
        if self._state == PlayState.PLAYING:
            self._elapsed += delta_ms
            if self._elapsed >= self.duration:
                if self.loop and self.duration > 0:
                    self._elapsed %= self.duration
                else:
                    self._elapsed = self.duration
                    self._state = PlayState.FINISHED
        return self.values()

    def values(self) -> Dict[str, Any]:
        t = self.progress
        return {name: track.get_value_at(t) for name, track in self.tracks.items()}

    def get_value(self, track_name: str) -> Any:
        track = self.tracks.get(track_name)
        return track.get_value_at(self.progress) if track else None

    @classmethod
    def tween(
        cls,
        start: Dict[str, Any],
        end: Dict[str, Any],
        duration: float,
        easing: Easing | str = Easing.LINEAR,
        name: str = "tween",
    ) -> "Timeline":
        """One track per property, going from start to end."""
        timeline = cls(name=name, duration=duration)
        for prop, target in end.items():
            timeline.add_track(prop).add_keyframe(0.0, start[prop]).add_keyframe(1.0, target, easing)
        return timeline
