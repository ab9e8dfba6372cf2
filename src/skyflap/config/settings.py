"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested groups can be overridden with a double underscore, e.g.
``SKYFLAP_PHYSICS__GRAVITY=0.5``.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DisplaySettings(BaseModel):
    """Screen layout and frame pacing."""

    width: int = Field(default=400, gt=0)
    height: int = Field(default=600, gt=0)

    # Ground strip at the bottom of the screen
    ground_height: int = Field(default=80, ge=0)

    fps: int = Field(default=60, gt=0)
    scale: int = Field(default=1, ge=1)

    @property
    def ground_y(self) -> int:
        """Y coordinate of the ground line."""
        return self.height - self.ground_height


class PhysicsSettings(BaseModel):
    """Avatar physics, in pixels and frames."""

    gravity: float = 0.6
    flap_power: float = -9.5

    # Rotation is vy / rotation_divisor, clamped
    rotation_divisor: float = Field(default=12.0, gt=0)
    min_rotation: float = -0.6
    max_rotation: float = 1.2

    # Avatar sprite
    avatar_x: float = 90.0
    avatar_width: float = Field(default=34.0, gt=0)
    avatar_height: float = Field(default=24.0, gt=0)
    hitbox_inset: float = 2.0


class ObstacleSettings(BaseModel):
    """Obstacle geometry, spawning and scrolling."""

    gap: int = Field(default=150, gt=0)
    width: int = Field(default=56, gt=0)
    min_top: int = Field(default=60, ge=0)

    # Frames between spawns (~1.5s at 60fps)
    spawn_interval: int = Field(default=90, ge=0)
    spawn_offset: int = 10
    retire_margin: int = 20

    # Scroll speed ramps with score, capped
    base_speed: float = 2.6
    speed_scale: float = 0.06
    speed_cap: float = 2.2


class StorageSettings(BaseModel):
    """Best score persistence."""

    path: Path = Path("data/best_score.json")
    key: str = "flappy-best"


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="SKYFLAP_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = False
    title: str = "SKYFLAP"

    # Optional YAML palette overriding the default colors
    palette_file: Optional[Path] = None

    # Nested settings
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    physics: PhysicsSettings = Field(default_factory=PhysicsSettings)
    obstacles: ObstacleSettings = Field(default_factory=ObstacleSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)

    @model_validator(mode="after")
    def _check_gap_fits(self) -> "Settings":
        """The gap, the ground strip and both top margins must fit on screen."""
        free = (
            self.display.height
            - self.obstacles.gap
            - self.display.ground_height
            - 2 * self.obstacles.min_top
        )
        if free <= 0:
            raise ValueError(
                f"screen height {self.display.height} cannot fit gap "
                f"{self.obstacles.gap} with ground {self.display.ground_height} "
                f"and min_top {self.obstacles.min_top}"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
