"""Generated sprite art and sprite rotation.

Used when the image files are missing from the assets directory, so
the game always has something to draw.
"""

import math
from functools import lru_cache
from typing import List, Tuple

import numpy as np
from numpy.typing import NDArray
from PIL import Image, ImageDraw

RGBA = NDArray[np.uint8]

PIPE_FILL = (115, 191, 46, 255)
PIPE_EDGE = (84, 56, 71, 255)
PLANE_BODY = (222, 78, 62, 255)
PLANE_WING = (176, 52, 44, 255)
PLANE_WINDOW = (200, 236, 255, 255)
PROPELLER = (60, 60, 60, 255)


def to_array(image: Image.Image) -> RGBA:
    return np.array(image.convert("RGBA"), dtype=np.uint8)


def make_pipe(width: int = 50, height: int = 50) -> RGBA:
    """A single pipe segment: green block with a dark outline."""
    image = Image.new("RGBA", (width, height), PIPE_FILL)
    draw = ImageDraw.Draw(image)
    draw.rectangle([0, 0, width - 1, height - 1], outline=PIPE_EDGE, width=3)
    draw.line([(8, 4), (8, height - 5)], fill=(160, 226, 90, 255), width=4)
    return to_array(image)


def make_plane_frames(width: int = 50, height: int = 43, count: int = 3) -> List[RGBA]:
    """Plane facing right; frames differ only in propeller position."""
    frames = []
    mid = height // 2
    for i in range(count):
        image = Image.new("RGBA", (width, height), (0, 0, 0, 0))
        draw = ImageDraw.Draw(image)

        # Tail fin, fuselage, wing, cockpit
        draw.polygon([(2, mid - 14), (12, mid - 2), (4, mid + 2)], fill=PLANE_WING)
        draw.ellipse([4, mid - 7, width - 8, mid + 7], fill=PLANE_BODY)
        draw.polygon([(16, mid + 1), (32, mid + 1), (22, mid + 14)], fill=PLANE_WING)
        draw.ellipse([26, mid - 6, 36, mid], fill=PLANE_WINDOW)

        # Propeller blade swings through the frames
        reach = (mid - 4) * (1 - i / max(count - 1, 1)) + 4
        nose = width - 6
        draw.line([(nose, mid - reach), (nose, mid + reach)], fill=PROPELLER, width=3)
        draw.ellipse([nose - 3, mid - 3, nose + 3, mid + 3], fill=PROPELLER)

        frames.append(to_array(image))
    return frames


def slice_spritesheet(sheet: Image.Image, frame_width: int, frame_height: int) -> List[RGBA]:
    """Cut a spritesheet into frames, left to right, top to bottom."""
    frames = []
    cols = sheet.width // frame_width
    rows = sheet.height // frame_height
    for row in range(rows):
        for col in range(cols):
            box = (
                col * frame_width,
                row * frame_height,
                (col + 1) * frame_width,
                (row + 1) * frame_height,
            )
            frames.append(to_array(sheet.crop(box)))
    return frames


def rotate_about_anchor(
    frame: RGBA,
    angle: float,
    anchor: Tuple[float, float],
) -> Tuple[RGBA, int, int]:
    """Rotate a frame clockwise by angle degrees around its anchor point.

    The anchor may lie outside the frame. Returns the rotated image and
    the offset of its top-left corner from the anchor position.
    """
    h, w = frame.shape[:2]
    ax = anchor[0] * w
    ay = anchor[1] * h

    if round(angle) == 0:
        return frame, -int(round(ax)), -int(round(ay))

    # Square canvas centred on the anchor, large enough for any angle
    reach_x = max(abs(ax), abs(w - ax))
    reach_y = max(abs(ay), abs(h - ay))
    radius = int(math.ceil(math.hypot(reach_x, reach_y)))
    size = radius * 2

    canvas = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    canvas.paste(Image.fromarray(frame), (int(round(radius - ax)), int(round(radius - ay))))
    rotated = canvas.rotate(-angle, resample=Image.Resampling.BICUBIC)
    return to_array(rotated), -radius, -radius


class RotationCache:
    """Caches rotated frames by (frame id, whole degrees)."""

    def __init__(self, max_size: int = 512) -> None:
        self._rotate = lru_cache(maxsize=max_size)(self._rotate_uncached)
        self._frames: dict = {}

    def get(self, frame: RGBA, angle: float, anchor: Tuple[float, float]) -> Tuple[RGBA, int, int]:
        key = id(frame)
        self._frames[key] = frame
        return self._rotate(key, int(round(angle)), anchor)

    def _rotate_uncached(self, key: int, angle: int, anchor: Tuple[float, float]):
        return rotate_about_anchor(self._frames[key], angle, anchor)

    def clear(self) -> None:
        self._rotate.cache_clear()
        self._frames.clear()
