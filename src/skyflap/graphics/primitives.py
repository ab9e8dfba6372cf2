"""Basic drawing primitives for SKYFLAP frame buffers."""

from typing import Tuple, Optional
import math

import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Buffer = NDArray[np.uint8]


def fill(buffer: Buffer, color: Color) -> None:
    """Fill entire buffer with color."""
    buffer[:, :] = color


def _clip(buffer: Buffer, x: float, y: float, width: float, height: float) -> Tuple[int, int, int, int]:
    """Clamp a rectangle to buffer bounds, returning integer edges."""
    h, w = buffer.shape[:2]
    x1 = max(0, min(int(round(x)), w))
    y1 = max(0, min(int(round(y)), h))
    x2 = max(0, min(int(round(x + width)), w))
    y2 = max(0, min(int(round(y + height)), h))
    return x1, y1, x2, y2


def draw_rect(
    buffer: Buffer,
    x: float,
    y: float,
    width: float,
    height: float,
    color: Color,
) -> None:
    """Draw a filled rectangle on the buffer.

    Args:
        buffer: Target numpy array (height, width, 3)
        x: Left edge x coordinate
        y: Top edge y coordinate
        width: Rectangle width
        height: Rectangle height
        color: RGB color tuple
    """
    x1, y1, x2, y2 = _clip(buffer, x, y, width, height)
    buffer[y1:y2, x1:x2] = color


def blend_rect(
    buffer: Buffer,
    x: float,
    y: float,
    width: float,
    height: float,
    color: Color,
    alpha: float,
) -> None:
    """Alpha-blend a solid rectangle over the buffer."""
    x1, y1, x2, y2 = _clip(buffer, x, y, width, height)
    if x2 <= x1 or y2 <= y1:
        return
    region = buffer[y1:y2, x1:x2].astype(np.float32)
    blended = region * (1.0 - alpha) + np.array(color, dtype=np.float32) * alpha
    buffer[y1:y2, x1:x2] = np.clip(blended, 0, 255).astype(np.uint8)


def draw_rounded_rect(
    buffer: Buffer,
    x: float,
    y: float,
    width: float,
    height: float,
    radius: float,
    color: Color,
) -> None:
    """Draw a filled rectangle with rounded corners."""
    x1, y1, x2, y2 = _clip(buffer, x, y, width, height)
    if x2 <= x1 or y2 <= y1:
        return

    r = max(0.0, min(radius, width / 2, height / 2))
    ys, xs = np.ogrid[y1:y2, x1:x2]
    px = xs + 0.5
    py = ys + 0.5

    # Distance outside the inner rectangle shrunk by r
    dx = np.maximum(np.maximum(x + r - px, px - (x + width - r)), 0)
    dy = np.maximum(np.maximum(y + r - py, py - (y + height - r)), 0)
    mask = dx * dx + dy * dy <= r * r
    buffer[y1:y2, x1:x2][mask] = color


def draw_circle(
    buffer: Buffer,
    cx: float,
    cy: float,
    radius: float,
    color: Color,
) -> None:
    """Draw a filled circle on the buffer."""
    h, w = buffer.shape[:2]
    y_indices, x_indices = np.ogrid[:h, :w]
    dist_sq = (x_indices - cx) ** 2 + (y_indices - cy) ** 2
    mask = dist_sq <= radius ** 2
    buffer[mask] = color


def _local_coords(
    buffer: Buffer,
    cx: float,
    cy: float,
    extent: float,
    angle: float,
) -> Optional[Tuple[Tuple[int, int, int, int], NDArray, NDArray]]:
    """Pixel coordinates around (cx, cy) rotated into a local frame."""
    x1, y1, x2, y2 = _clip(buffer, cx - extent, cy - extent, 2 * extent, 2 * extent)
    if x2 <= x1 or y2 <= y1:
        return None

    ys, xs = np.ogrid[y1:y2, x1:x2]
    dx = xs + 0.5 - cx
    dy = ys + 0.5 - cy
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    local_x = dx * cos_a + dy * sin_a
    local_y = -dx * sin_a + dy * cos_a
    return (x1, y1, x2, y2), local_x, local_y


def draw_rotated_rect(
    buffer: Buffer,
    cx: float,
    cy: float,
    width: float,
    height: float,
    angle: float,
    color: Color,
    radius: float = 0.0,
) -> None:
    """Draw a filled rectangle centered at (cx, cy), rotated by angle radians."""
    extent = math.hypot(width, height) / 2 + 1
    coords = _local_coords(buffer, cx, cy, extent, angle)
    if coords is None:
        return
    (x1, y1, x2, y2), lx, ly = coords

    hw = width / 2
    hh = height / 2
    r = max(0.0, min(radius, hw, hh))
    dx = np.maximum(np.abs(lx) - (hw - r), 0)
    dy = np.maximum(np.abs(ly) - (hh - r), 0)
    mask = dx * dx + dy * dy <= r * r
    buffer[y1:y2, x1:x2][mask] = color


def draw_ellipse(
    buffer: Buffer,
    cx: float,
    cy: float,
    rx: float,
    ry: float,
    angle: float,
    color: Color,
) -> None:
    """Draw a filled ellipse centered at (cx, cy), rotated by angle radians."""
    if rx <= 0 or ry <= 0:
        return
    coords = _local_coords(buffer, cx, cy, max(rx, ry) + 1, angle)
    if coords is None:
        return
    (x1, y1, x2, y2), lx, ly = coords
    mask = (lx / rx) ** 2 + (ly / ry) ** 2 <= 1.0
    buffer[y1:y2, x1:x2][mask] = color


def draw_text(
    buffer: Buffer,
    text: str,
    x: int,
    y: int,
    color: Color,
    font: Optional[dict] = None,
    scale: int = 1,
) -> Tuple[int, int]:
    """Draw text using a bitmap font.

    Args:
        buffer: Target numpy array (height, width, 3)
        text: Text string to draw
        x: Starting x coordinate
        y: Starting y coordinate
        color: RGB color tuple
        font: Bitmap font dictionary (char -> 2D array). Uses built-in if None.
        scale: Scale factor for font size

    Returns:
        Tuple of (width, height) of rendered text in pixels
    """
    if font is None:
        font = _DEFAULT_FONT

    h, w = buffer.shape[:2]
    cursor_x = x

    for char in text:
        if char == ' ':
            cursor_x += 4 * scale
            continue

        char_data = font.get(char.upper(), font.get('?', []))
        if not char_data:
            cursor_x += 4 * scale
            continue

        for row_idx, row in enumerate(char_data):
            for col_idx, pixel in enumerate(row):
                if pixel:
                    px = cursor_x + col_idx * scale
                    py = y + row_idx * scale
                    bx1, by1 = max(0, px), max(0, py)
                    bx2, by2 = min(w, px + scale), min(h, py + scale)
                    if bx2 > bx1 and by2 > by1:
                        buffer[by1:by2, bx1:bx2] = color

        cursor_x += (len(char_data[0]) + 1) * scale

    return cursor_x - x, 5 * scale


def text_width(text: str, scale: int = 1, font: Optional[dict] = None) -> int:
    """Width in pixels that draw_text would use for text."""
    if font is None:
        font = _DEFAULT_FONT
    width = 0
    for char in text:
        char_data = font.get(char.upper(), font.get('?', [])) if char != ' ' else None
        width += (len(char_data[0]) + 1) * scale if char_data else 4 * scale
    return width


def draw_centered_text(
    buffer: Buffer,
    text: str,
    y: int,
    color: Color,
    scale: int = 1,
    shadow: Optional[Color] = None,
) -> None:
    """Draw text horizontally centered, with an optional drop shadow."""
    x = (buffer.shape[1] - text_width(text, scale)) // 2
    if shadow is not None:
        draw_text(buffer, text, x + scale, y + scale, shadow, scale=scale)
    draw_text(buffer, text, x, y, color, scale=scale)


# Simple 3x5 bitmap font; each character is a list of rows of 0/1 pixels
_DEFAULT_FONT = {
    'A': [[0,1,0], [1,0,1], [1,1,1], [1,0,1], [1,0,1]],
    'B': [[1,1,0], [1,0,1], [1,1,0], [1,0,1], [1,1,0]],
    'C': [[0,1,1], [1,0,0], [1,0,0], [1,0,0], [0,1,1]],
    'D': [[1,1,0], [1,0,1], [1,0,1], [1,0,1], [1,1,0]],
    'E': [[1,1,1], [1,0,0], [1,1,0], [1,0,0], [1,1,1]],
    'F': [[1,1,1], [1,0,0], [1,1,0], [1,0,0], [1,0,0]],
    'G': [[0,1,1], [1,0,0], [1,0,1], [1,0,1], [0,1,1]],
    'H': [[1,0,1], [1,0,1], [1,1,1], [1,0,1], [1,0,1]],
    'I': [[1,1,1], [0,1,0], [0,1,0], [0,1,0], [1,1,1]],
    'J': [[0,0,1], [0,0,1], [0,0,1], [1,0,1], [0,1,0]],
    'K': [[1,0,1], [1,0,1], [1,1,0], [1,0,1], [1,0,1]],
    'L': [[1,0,0], [1,0,0], [1,0,0], [1,0,0], [1,1,1]],
    'M': [[1,0,1], [1,1,1], [1,0,1], [1,0,1], [1,0,1]],
    'N': [[1,0,1], [1,1,1], [1,1,1], [1,0,1], [1,0,1]],
    'O': [[0,1,0], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
    'P': [[1,1,0], [1,0,1], [1,1,0], [1,0,0], [1,0,0]],
    'Q': [[0,1,0], [1,0,1], [1,0,1], [1,1,1], [0,1,1]],
    'R': [[1,1,0], [1,0,1], [1,1,0], [1,0,1], [1,0,1]],
    'S': [[0,1,1], [1,0,0], [0,1,0], [0,0,1], [1,1,0]],
    'T': [[1,1,1], [0,1,0], [0,1,0], [0,1,0], [0,1,0]],
    'U': [[1,0,1], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
    'V': [[1,0,1], [1,0,1], [1,0,1], [0,1,0], [0,1,0]],
    'W': [[1,0,1], [1,0,1], [1,0,1], [1,1,1], [1,0,1]],
    'X': [[1,0,1], [1,0,1], [0,1,0], [1,0,1], [1,0,1]],
    'Y': [[1,0,1], [1,0,1], [0,1,0], [0,1,0], [0,1,0]],
    'Z': [[1,1,1], [0,0,1], [0,1,0], [1,0,0], [1,1,1]],
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
    '!': [[0,1,0], [0,1,0], [0,1,0], [0,0,0], [0,1,0]],
    '.': [[0,0,0], [0,0,0], [0,0,0], [0,0,0], [0,1,0]],
    ',': [[0,0,0], [0,0,0], [0,0,0], [0,1,0], [1,0,0]],
    ':': [[0,0,0], [0,1,0], [0,0,0], [0,1,0], [0,0,0]],
    '-': [[0,0,0], [0,0,0], [1,1,1], [0,0,0], [0,0,0]],
}
