"""Game simulation core: physics, obstacles, collisions and scoring."""

from skyflap.game.avatar import Avatar, Boundary
from skyflap.game.collision import Circle, Rect, clamp, rect_circle_overlap
from skyflap.game.engine import RunState, RunStatus, SimulationEngine
from skyflap.game.obstacles import Obstacle, ObstacleStream, scroll_speed, spawn_obstacle
from skyflap.game.snapshot import AvatarView, ObstacleView, RenderSnapshot

__all__ = [
    "Avatar",
    "Boundary",
    "Circle",
    "Rect",
    "clamp",
    "rect_circle_overlap",
    "RunState",
    "RunStatus",
    "SimulationEngine",
    "Obstacle",
    "ObstacleStream",
    "scroll_speed",
    "spawn_obstacle",
    "AvatarView",
    "ObstacleView",
    "RenderSnapshot",
]
