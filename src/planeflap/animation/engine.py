"""Runs timelines and property tweens once per frame."""

from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Set
import itertools
import logging

from planeflap.animation.easing import Easing
from planeflap.animation.timeline import Timeline

logger = logging.getLogger(__name__)

ValuesCallback = Callable[[Dict[str, Any]], None]


@dataclass
class ActiveAnimation:
    timeline: Timeline
    group: str = "default"
    on_update: Optional[ValuesCallback] = None
    on_complete: Optional[Callable[[], None]] = None
    cancelled: bool = False


class AnimationEngine:
    """Owns running timelines, keyed by name.

    Starting an animation under a name that is already running replaces
    it. Finished animations are dropped after their on_complete runs.
    """

    def __init__(self) -> None:
        self._active: Dict[str, ActiveAnimation] = {}
        self._groups: Dict[str, Set[str]] = defaultdict(set)
        self._ids = itertools.count()

    def play(
        self,
        timeline: Timeline,
        name: Optional[str] = None,
        group: str = "default",
        on_update: Optional[ValuesCallback] = None,
        on_complete: Optional[Callable[[], None]] = None,
    ) -> str:
        """Start timeline from the beginning. Returns the animation name."""
        name = name or f"{timeline.name}_{next(self._ids)}"
        self.stop(name)

        self._active[name] = ActiveAnimation(timeline, group, on_update, on_complete)
        self._groups[group].add(name)
        timeline.play(from_start=True)
        logger.debug(f"Animation started: {name} ({group})")
        return name

    def tween(
        self,
        target: Any,
        props: Dict[str, float],
        duration: float,
        easing: Easing | str = Easing.LINEAR,
        name: Optional[str] = None,
        group: str = "default",
        on_complete: Optional[Callable[[], None]] = None,
    ) -> str:
        """Animate target's attributes from their current values to props
        over duration ms."""
        start = {prop: getattr(target, prop) for prop in props}

        def write_back(values: Dict[str, Any]) -> None:
            for prop, value in values.items():
                setattr(target, prop, value)

        return self.play(
            Timeline.tween(start, props, duration, easing, name=name or "tween"),
            name=name,
            group=group,
            on_update=write_back,
            on_complete=on_complete,
        )

    def stop(self, name: str) -> bool:
        active = self._active.pop(name, None)
        if active is None:
            return False
        active.cancelled = True
        active.timeline.stop()
        self._groups[active.group].discard(name)
        logger.debug(f"Animation stopped: {name}")
        return True

    def stop_group(self, group: str) -> int:
        return sum(self.stop(name) for name in list(self._groups.get(group, ())))

    def stop_all(self) -> int:
        return sum(self.stop(name) for name in list(self._active))

    def update(self, delta_ms: float) -> Dict[str, Dict[str, Any]]:
        """Advance every animation; returns the sampled values by name."""
        sampled: Dict[str, Dict[str, Any]] = {}

        # Callbacks may start or stop animations while we iterate
        for name, active in list(self._active.items()):
            if active.cancelled:
                continue
            values = active.timeline.update(delta_ms)
            sampled[name] = values
            if active.on_update:
                active.on_update(values)
            if not active.timeline.is_finished:
                continue
            if self._active.get(name) is active:
                del self._active[name]
                self._groups[active.group].discard(name)
                logger.debug(f"Animation completed: {name}")
            if active.on_complete:
                active.on_complete()

        return sampled

    def is_playing(self, name: str) -> bool:
        active = self._active.get(name)
        return active is not None and active.timeline.is_playing

    def has_animation(self, name: str) -> bool:
        return name in self._active

    @property
    def animation_count(self) -> int:
        return len(self._active)
