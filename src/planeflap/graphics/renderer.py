"""Renders the world display list into an RGB buffer."""

import logging

from planeflap.engine.loader import AssetCache
from planeflap.engine.sprites import Group, Sprite, Text, World
from planeflap.graphics.primitives import (
    Buffer, Color, GLYPH_HEIGHT, draw_image, draw_text, fill, new_buffer
)
from planeflap.graphics.sprites import RotationCache

logger = logging.getLogger(__name__)


class Renderer:
    """Draws sprites and text labels in display order."""

    def __init__(self, width: int, height: int, cache: AssetCache) -> None:
        self.width = width
        self.height = height
        self.cache = cache
        self._buffer = new_buffer(width, height)
        self._rotations = RotationCache()

    def render(self, world: World, background_color: Color = (0, 0, 0)) -> Buffer:
        """Render the world and return the (reused) frame buffer."""
        buffer = self._buffer
        fill(buffer, background_color)

        for obj in world.children:
            if isinstance(obj, Group):
                for sprite in obj:
                    self._draw_sprite(buffer, sprite)
            elif isinstance(obj, Sprite):
                self._draw_sprite(buffer, obj)
            elif isinstance(obj, Text):
                self._draw_text(buffer, obj)

        return buffer

    def reset(self) -> None:
        self._rotations.clear()

    def _draw_sprite(self, buffer: Buffer, sprite: Sprite) -> None:
        if not sprite.exists:
            return
        frames = self.cache.get_frames(sprite.key)
        frame = frames[sprite.frame % len(frames)]
        anchor = (sprite.anchor.x, sprite.anchor.y)
        image, off_x, off_y = self._rotations.get(frame, sprite.angle, anchor)
        draw_image(buffer, image, int(round(sprite.x)) + off_x, int(round(sprite.y)) + off_y)

    def _draw_text(self, buffer: Buffer, text: Text) -> None:
        if not text.exists:
            return
        scale = max(1, text.size // GLYPH_HEIGHT)
        draw_text(buffer, text.text, int(text.x), int(text.y), text.color, scale=scale)
