"""Read-only views of engine state for drawing."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class AvatarView:
    x: float
    y: float
    width: float
    height: float
    rotation: float


@dataclass(frozen=True)
class ObstacleView:
    x: float
    top: int
    gap: int
    width: int

    @property
    def gap_bottom(self) -> int:
        return self.top + self.gap


@dataclass(frozen=True)
class RenderSnapshot:
    """Everything the presentation layer needs for one frame."""

    avatar: AvatarView
    obstacles: Tuple[ObstacleView, ...]
    score: int
    best_score: int
    running: bool
    frame: int
    ground_y: int
    width: int
    height: int
