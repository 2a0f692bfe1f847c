"""Arcade physics: gravity, velocity integration, world bounds and overlap."""

from typing import Callable, Iterable, Optional, Union
import logging

from planeflap.engine.sprites import Body, Group, Sprite, World

logger = logging.getLogger(__name__)

OverlapCallback = Callable[[Sprite, Sprite], None]


class ArcadePhysics:
    """Axis-aligned arcade physics over the world's sprites."""

    def __init__(self, world: World) -> None:
        self.world = world

    def enable(self, sprite: Sprite) -> Body:
        """Give a sprite a physics body."""
        if sprite.body is None:
            sprite.body = Body()
        return sprite.body

    def update(self, delta_ms: float) -> None:
        """Integrate every body and apply world-bounds kills.

        Velocity is advanced by gravity first, then position by
        velocity, over delta_ms.
        """
        dt = delta_ms / 1000.0
        bounds = self.world.bounds

        for sprite in self.world.sprites():
            body = sprite.body
            if body is not None and body.enable and sprite.exists:
                body.velocity.x += body.gravity.x * dt
                body.velocity.y += body.gravity.y * dt
                sprite.x += body.velocity.x * dt
                sprite.y += body.velocity.y * dt

            if sprite.check_world_bounds:
                self._check_world_bounds(sprite, bounds)

    def _check_world_bounds(self, sprite: Sprite, bounds) -> None:
        # Only fires after the sprite has been inside the world once,
        # so objects spawned just outside the edge survive.
        inside = sprite.bounds.intersects(bounds)
        if inside:
            sprite.in_world = True
        elif sprite.in_world:
            sprite.in_world = False
            if sprite.out_of_bounds_kill:
                logger.debug(f"Out of bounds: {sprite!r}")
                sprite.kill()

    def overlap(
        self,
        a: Union[Sprite, Group],
        b: Union[Sprite, Group],
        callback: Optional[OverlapCallback] = None,
    ) -> bool:
        """Test two sprites/groups for overlap.

        Calls callback(sprite_a, sprite_b) for every overlapping pair.

        Returns:
            True if any pair overlapped
        """
        found = False
        for sa in self._members(a):
            for sb in self._members(b):
                if sa is sb:
                    continue
                if sa.bounds.intersects(sb.bounds):
                    found = True
                    if callback is not None:
                        callback(sa, sb)
        return found

    @staticmethod
    def _members(obj: Union[Sprite, Group]) -> Iterable[Sprite]:
        if isinstance(obj, Group):
            return [s for s in obj if s.exists and s.body is not None]
        if obj.exists and obj.body is not None:
            return [obj]
        return []
