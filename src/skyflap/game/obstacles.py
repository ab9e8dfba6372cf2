"""Obstacle stream: spawning, scrolling, scoring and retirement."""

import logging
import math
import random
from dataclasses import dataclass
from typing import Iterator, List, Optional

from skyflap.config.settings import ObstacleSettings
from skyflap.game.collision import Rect

logger = logging.getLogger(__name__)


@dataclass
class Obstacle:
    """A pair of barriers with a gap between them.

    ``top`` is the height of the upper barrier, i.e. the y coordinate of
    the gap's upper edge.
    """

    x: float
    top: int
    scored: bool = False

    def right_edge(self, width: float) -> float:
        return self.x + width

    def top_rect(self, width: float) -> Rect:
        return Rect(self.x, 0, width, self.top)

    def bottom_rect(
        self,
        width: float,
        gap: float,
        screen_height: float,
        ground_margin: float,
    ) -> Rect:
        gap_bottom = self.top + gap
        return Rect(self.x, gap_bottom, width, screen_height - gap_bottom - ground_margin)


def spawn_obstacle(
    rng: random.Random,
    screen_width: float,
    screen_height: float,
    gap_size: float,
    ground_margin: float,
    min_top: int = 60,
    spawn_offset: float = 10,
) -> Obstacle:
    """Create an obstacle just off the right edge with a random gap.

    The gap top is drawn uniformly from [min_top, max_top) where max_top
    leaves min_top clearance above the ground strip.
    """
    max_top = screen_height - gap_size - ground_margin - min_top
    top = math.floor(rng.random() * (max_top - min_top) + min_top)
    return Obstacle(x=screen_width + spawn_offset, top=top)


def scroll_speed(
    score: int,
    base: float = 2.6,
    scale: float = 0.06,
    cap: float = 2.2,
) -> float:
    """Horizontal speed in px/frame; ramps with score up to base + cap."""
    return base + min(cap, score * scale)


class ObstacleStream:
    """The set of active obstacles."""

    def __init__(
        self,
        settings: ObstacleSettings,
        screen_width: float,
        screen_height: float,
        ground_margin: float,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.settings = settings
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.ground_margin = ground_margin
        self._rng = rng or random.Random()
        self._obstacles: List[Obstacle] = []

    def __iter__(self) -> Iterator[Obstacle]:
        return iter(self._obstacles)

    def __len__(self) -> int:
        return len(self._obstacles)

    def clear(self) -> None:
        self._obstacles = []

    def spawn(self) -> Obstacle:
        """Spawn one obstacle off the right edge."""
        obstacle = spawn_obstacle(
            self._rng,
            self.screen_width,
            self.screen_height,
            self.settings.gap,
            self.ground_margin,
            min_top=self.settings.min_top,
            spawn_offset=self.settings.spawn_offset,
        )
        self._obstacles.append(obstacle)
        logger.debug(f"Obstacle spawned: top={obstacle.top}")
        return obstacle

    def speed_for(self, score: int) -> float:
        return scroll_speed(
            score,
            base=self.settings.base_speed,
            scale=self.settings.speed_scale,
            cap=self.settings.speed_cap,
        )

    def advance(self, speed: float) -> None:
        """Scroll every obstacle left by speed pixels."""
        for obstacle in self._obstacles:
            obstacle.x -= speed

    def collect_scored(self, avatar_left: float) -> int:
        """Mark obstacles the avatar has fully passed.

        Returns:
            Number of obstacles newly marked this call
        """
        count = 0
        for obstacle in self._obstacles:
            if obstacle.scored:
                continue
            if obstacle.right_edge(self.settings.width) < avatar_left:
                obstacle.scored = True
                count += 1
        return count

    def retire(self) -> int:
        """Drop obstacles whose right edge has left the screen.

        Returns:
            Number of obstacles removed
        """
        limit = -self.settings.retire_margin
        width = self.settings.width
        kept = [o for o in self._obstacles if o.right_edge(width) >= limit]
        removed = len(self._obstacles) - len(kept)
        self._obstacles = kept
        return removed

    def rects(self, obstacle: Obstacle) -> tuple[Rect, Rect]:
        """Top and bottom collision rectangles of an obstacle."""
        width = self.settings.width
        return (
            obstacle.top_rect(width),
            obstacle.bottom_rect(
                width, self.settings.gap, self.screen_height, self.ground_margin
            ),
        )
