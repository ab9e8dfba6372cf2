"""Graphics module for SKYFLAP rendering pipeline."""

from skyflap.graphics.renderer import SceneRenderer
from skyflap.graphics.primitives import (
    blend_rect,
    draw_centered_text,
    draw_circle,
    draw_ellipse,
    draw_rect,
    draw_rotated_rect,
    draw_rounded_rect,
    draw_text,
    fill,
    text_width,
)

__all__ = [
    # Renderer
    "SceneRenderer",
    # Primitives
    "blend_rect",
    "draw_centered_text",
    "draw_circle",
    "draw_ellipse",
    "draw_rect",
    "draw_rotated_rect",
    "draw_rounded_rect",
    "draw_text",
    "fill",
    "text_width",
]
