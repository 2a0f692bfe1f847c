"""Drawing on numpy RGB buffers of shape (height, width, 3)."""

from typing import Dict, List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray
from PIL import ImageColor

Color = Tuple[int, int, int]
Buffer = NDArray[np.uint8]

# Glyphs are 3x5 cells, scaled at draw time
GLYPH_HEIGHT = 5


def parse_color(value: str | Color) -> Color:
    """'#71c5cf', 'white' or an RGB tuple -> RGB tuple."""
    if isinstance(value, tuple):
        return value
    return ImageColor.getrgb(value)[:3]


def new_buffer(width: int, height: int) -> Buffer:
    return np.zeros((height, width, 3), dtype=np.uint8)


def fill(buffer: Buffer, color: Color) -> None:
    buffer[...] = color


def _clip(buffer: Buffer, x: int, y: int, width: int, height: int) -> Optional[Tuple[slice, slice, slice, slice]]:
    """Overlap of a width x height box at (x, y) with the buffer.

    Returns (dst_rows, dst_cols, src_rows, src_cols), or None when the
    box is entirely outside.
    """
    buf_h, buf_w = buffer.shape[:2]
    left, top = max(0, x), max(0, y)
    right, bottom = min(buf_w, x + width), min(buf_h, y + height)
    if right <= left or bottom <= top:
        return None
    return (
        slice(top, bottom),
        slice(left, right),
        slice(top - y, bottom - y),
        slice(left - x, right - x),
    )


def draw_image(buffer: Buffer, image: Buffer, x: int, y: int, alpha: float = 1.0) -> None:
    """Draw an RGB or RGBA image with its top-left corner at (x, y).

    RGBA images are blended using their alpha channel times alpha.
    """
    clipped = _clip(buffer, x, y, image.shape[1], image.shape[0])
    if clipped is None:
        return
    dst_rows, dst_cols, src_rows, src_cols = clipped
    src = image[src_rows, src_cols]

    if src.shape[2] == 3 and alpha >= 1.0:
        buffer[dst_rows, dst_cols] = src
        return

    if src.shape[2] == 4:
        weight = src[:, :, 3:4] * (alpha / 255.0)
    else:
        weight = np.float64(alpha)
    dst = buffer[dst_rows, dst_cols]
    buffer[dst_rows, dst_cols] = (src[:, :, :3] * weight + dst * (1 - weight)).astype(np.uint8)


def draw_text(buffer: Buffer, text: str, x: int, y: int, color: Color, scale: int = 1) -> Tuple[int, int]:
    """Draw text with the built-in bitmap font; unknown characters show as '?'.

    Returns:
        (width, height) of the drawn text in pixels
    """
    cursor = x
    for char in text:
        if char == " ":
            cursor += 4 * scale
            continue
        glyph = _FONT.get(char, _FONT["?"])
        for row, bits in enumerate(glyph):
            for col, bit in enumerate(bits):
                if bit:
                    cell = _clip(buffer, cursor + col * scale, y + row * scale, scale, scale)
                    if cell is not None:
                        buffer[cell[0], cell[1]] = color
        cursor += (len(glyph[0]) + 1) * scale
    return cursor - x, GLYPH_HEIGHT * scale


_FONT: Dict[str, List[List[int]]] = {
    '0': [[0,1,0], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
    '1': [[0,1,0], [1,1,0], [0,1,0], [0,1,0], [1,1,1]],
    '2': [[0,1,0], [1,0,1], [0,0,1], [0,1,0], [1,1,1]],
    '3': [[1,1,0], [0,0,1], [0,1,0], [0,0,1], [1,1,0]],
    '4': [[1,0,1], [1,0,1], [1,1,1], [0,0,1], [0,0,1]],
    '5': [[1,1,1], [1,0,0], [1,1,0], [0,0,1], [1,1,0]],
    '6': [[0,1,1], [1,0,0], [1,1,0], [1,0,1], [0,1,0]],
    '7': [[1,1,1], [0,0,1], [0,1,0], [0,1,0], [0,1,0]],
    '8': [[0,1,0], [1,0,1], [0,1,0], [1,0,1], [0,1,0]],
    '9': [[0,1,0], [1,0,1], [0,1,1], [0,0,1], [1,1,0]],
    '?': [[0,1,0], [1,0,1], [0,0,1], [0,0,0], [0,1,0]],
    '-': [[0,0,0], [0,0,0], [1,1,1], [0,0,0], [0,0,0]],
    ':': [[0,0,0], [0,1,0], [0,0,0], [0,1,0], [0,0,0]],
}
