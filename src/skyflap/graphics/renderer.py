"""Scene renderer: turns a RenderSnapshot into an RGB frame buffer."""

from typing import Optional
import math

import numpy as np
from numpy.typing import NDArray

from skyflap.config.palette import Palette
from skyflap.game.snapshot import AvatarView, ObstacleView, RenderSnapshot
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
)
from skyflap.shell import Overlay


class SceneRenderer:
    """Draws the sky, obstacles, ground, avatar, HUD and end-of-run overlay.

    Only reads the snapshot it is given; output is a (height, width, 3)
    uint8 buffer ready for a display surface.
    """

    CORNER_RADIUS = 6
    BEZEL = 6
    GROUND_STRIPE_STEP = 18
    HUD_SCALE = 3

    def __init__(self, palette: Optional[Palette] = None) -> None:
        self.palette = palette or Palette()
        p = self.palette
        self._sky = p.to_rgb("sky")
        self._obstacle = p.to_rgb("obstacle")
        self._ground = p.to_rgb("ground")
        self._avatar = p.to_rgb("avatar")
        self._wing = p.to_rgb("wing")
        self._eye = p.to_rgb("eye")
        self._text = p.to_rgb("text")
        self._shadow = p.to_rgb("text_shadow")
        self._overlay = p.to_rgb("overlay")

    def render(
        self,
        snapshot: RenderSnapshot,
        overlay: Optional[Overlay] = None,
        buffer: Optional[NDArray[np.uint8]] = None,
    ) -> NDArray[np.uint8]:
        """Render one frame.

        Args:
            snapshot: Engine state to draw
            overlay: End-of-run text, drawn on top if given
            buffer: Reused target buffer; allocated if None or mis-sized

        Returns:
            The frame buffer
        """
        shape = (snapshot.height, snapshot.width, 3)
        if buffer is None or buffer.shape != shape:
            buffer = np.zeros(shape, dtype=np.uint8)

        fill(buffer, self._sky)
        for obstacle in snapshot.obstacles:
            self._draw_obstacle(buffer, obstacle, snapshot)
        self._draw_ground(buffer, snapshot)
        self._draw_avatar(buffer, snapshot.avatar)

        if not snapshot.running:
            blend_rect(buffer, 0, 0, snapshot.width, snapshot.height, self._overlay, 0.15)

        self._draw_hud(buffer, snapshot)
        if overlay is not None:
            self._draw_overlay(buffer, overlay, snapshot)

        return buffer

    def _draw_obstacle(
        self,
        buffer: NDArray[np.uint8],
        obstacle: ObstacleView,
        snapshot: RenderSnapshot,
    ) -> None:
        x, w = obstacle.x, obstacle.width
        bottom_h = snapshot.height - obstacle.gap_bottom - (snapshot.height - snapshot.ground_y)

        draw_rounded_rect(buffer, x, 0, w, obstacle.top, self.CORNER_RADIUS, self._obstacle)
        draw_rounded_rect(
            buffer, x, obstacle.gap_bottom, w, bottom_h, self.CORNER_RADIUS, self._obstacle
        )

        # Darker bezel at the gap edges
        blend_rect(buffer, x, obstacle.top - self.BEZEL, w, self.BEZEL, (0, 0, 0), 0.08)
        blend_rect(buffer, x, obstacle.gap_bottom, w, self.BEZEL, (0, 0, 0), 0.08)

    def _draw_ground(self, buffer: NDArray[np.uint8], snapshot: RenderSnapshot) -> None:
        ground_h = snapshot.height - snapshot.ground_y
        draw_rect(buffer, 0, snapshot.ground_y, snapshot.width, ground_h, self._ground)
        for x in range(0, snapshot.width, self.GROUND_STRIPE_STEP):
            blend_rect(buffer, x, snapshot.ground_y, 10, 6, (0, 0, 0), 0.06)

    def _draw_avatar(self, buffer: NDArray[np.uint8], avatar: AvatarView) -> None:
        cx, cy, rot = avatar.x, avatar.y, avatar.rotation
        w, h = avatar.width, avatar.height

        draw_rotated_rect(buffer, cx, cy, w, h, rot, self._avatar, radius=self.CORNER_RADIUS)
        draw_ellipse(buffer, cx, cy, w * 0.4, h * 0.25, rot - 0.8, self._wing)

        # Eye sits right of center and slightly up, rotated with the body
        ex, ey = w * 0.14, -h * 0.08
        cos_r, sin_r = math.cos(rot), math.sin(rot)
        draw_circle(
            buffer,
            cx + ex * cos_r - ey * sin_r,
            cy + ex * sin_r + ey * cos_r,
            2.4,
            self._eye,
        )

    def _draw_hud(self, buffer: NDArray[np.uint8], snapshot: RenderSnapshot) -> None:
        s = self.HUD_SCALE
        draw_text(buffer, f"SCORE: {snapshot.score}", 10 + s, 10 + s, self._shadow, scale=s)
        draw_text(buffer, f"SCORE: {snapshot.score}", 10, 10, self._text, scale=s)
        draw_text(buffer, f"BEST: {snapshot.best_score}", 10 + s, 32 + s, self._shadow, scale=s)
        draw_text(buffer, f"BEST: {snapshot.best_score}", 10, 32, self._text, scale=s)

    def _draw_overlay(
        self,
        buffer: NDArray[np.uint8],
        overlay: Overlay,
        snapshot: RenderSnapshot,
    ) -> None:
        top = snapshot.height // 3
        blend_rect(buffer, 0, top - 20, snapshot.width, 130, self._overlay, 0.45)
        draw_centered_text(buffer, overlay.title, top, self._text, scale=5, shadow=self._shadow)
        draw_centered_text(buffer, overlay.subtitle, top + 45, self._text, scale=2, shadow=self._shadow)
        if overlay.hint:
            draw_centered_text(buffer, overlay.hint, top + 80, self._text, scale=2, shadow=self._shadow)
