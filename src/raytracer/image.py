"""Plain 2-D image helpers: PNG loading, block-average downscaling, shapes."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from PIL import Image

from .engine import FrameBuffer
from .primitives import Color


def load_image(path: Union[str, Path]) -> FrameBuffer:
    """Read an image file into a ``FrameBuffer`` (alpha is dropped)."""

    with Image.open(path) as source:
        rgb = source.convert("RGB")
        width, height = rgb.size
        buffer = FrameBuffer(width, height)
        data = rgb.tobytes()
        buffer.pixels = [(data[i], data[i + 1], data[i + 2]) for i in range(0, len(data), 3)]
    return buffer


def average_block(buffer: FrameBuffer, start_row: int, end_row: int, start_col: int, end_col: int) -> Color:
    """Integer mean colour of ``buffer[start_row:end_row, start_col:end_col]``."""

    red = green = blue = 0
    count = 0
    for row in range(start_row, end_row):
        for col in range(start_col, end_col):
            r, g, b = buffer.pixel_at(row, col)
            red += r
            green += g
            blue += b
            count += 1
    if count == 0:
        return (0, 0, 0)
    return (red // count, green // count, blue // count)


def downscale(buffer: FrameBuffer, width: int, height: int) -> FrameBuffer:
    """Shrink ``buffer`` to ``width`` x ``height`` by averaging source blocks.

    When the target is larger than the source some blocks are empty and come
    out black.
    """

    result = FrameBuffer(width, height)
    row_scale = buffer.height / height
    col_scale = buffer.width / width
    for row in range(height):
        start_row = int(row * row_scale)
        end_row = int((row + 1) * row_scale)
        for col in range(width):
            start_col = int(col * col_scale)
            end_col = int((col + 1) * col_scale)
            result.set_pixel(row, col, average_block(buffer, start_row, end_row, start_col, end_col))
    return result


def draw_rectangle(buffer: FrameBuffer, x: int, y: int, width: int, height: int, color: Color) -> None:
    for row in range(max(0, y), min(buffer.height, y + height)):
        for col in range(max(0, x), min(buffer.width, x + width)):
            buffer.set_pixel(row, col, color)


def draw_circle(buffer: FrameBuffer, x: int, y: int, radius: int, color: Color) -> None:
    for row in range(y - radius, y + radius + 1):
        for col in range(x - radius, x + radius + 1):
            if not buffer.in_bounds(row, col):
                continue
            dx = col - x
            dy = row - y
            if dx * dx + dy * dy <= radius * radius:
                buffer.set_pixel(row, col, color)


def demo_canvas(base: Optional[FrameBuffer] = None) -> FrameBuffer:
    """Draw a blue rectangle and a purple circle onto ``base``.

    Without ``base`` a black 100x200 canvas is used.
    """

    canvas = base if base is not None else FrameBuffer(100, 200)
    draw_rectangle(canvas, 15, 47, 30, 60, (34, 150, 228))
    draw_circle(canvas, 63, 153, 16, (182, 34, 228))
    return canvas
