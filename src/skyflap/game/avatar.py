"""Avatar physics: gravity, impulse and screen bounds."""

from dataclasses import dataclass
from enum import Enum, auto

from skyflap.config.settings import PhysicsSettings
from skyflap.game.collision import Circle, clamp


class Boundary(Enum):
    """Which screen boundary the avatar touched this frame."""

    NONE = auto()
    CEILING = auto()  # Clamped, run continues
    GROUND = auto()   # Terminal


@dataclass
class Avatar:
    """The player-controlled falling/jumping entity.

    Position is the sprite center. ``rotation`` is derived from velocity
    and only used for drawing.
    """

    x: float
    y: float
    width: float = 34.0
    height: float = 24.0
    vy: float = 0.0
    rotation: float = 0.0

    # Rotation mapping, copied from PhysicsSettings on spawn
    rotation_divisor: float = 12.0
    min_rotation: float = -0.6
    max_rotation: float = 1.2
    hitbox_inset: float = 2.0

    @classmethod
    def spawn(cls, physics: PhysicsSettings, screen_height: float) -> "Avatar":
        """Create a fresh avatar at the spawn point, vertically centered."""
        return cls(
            x=physics.avatar_x,
            y=screen_height / 2,
            width=physics.avatar_width,
            height=physics.avatar_height,
            rotation_divisor=physics.rotation_divisor,
            min_rotation=physics.min_rotation,
            max_rotation=physics.max_rotation,
            hitbox_inset=physics.hitbox_inset,
        )

    @property
    def half_width(self) -> float:
        return self.width / 2

    @property
    def half_height(self) -> float:
        return self.height / 2

    @property
    def left(self) -> float:
        """Left edge of the sprite."""
        return self.x - self.half_width

    @property
    def hitbox(self) -> Circle:
        """Collision circle, slightly smaller than the sprite."""
        radius = max(self.width, self.height) * 0.5 - self.hitbox_inset
        return Circle(self.x, self.y, radius)

    def integrate(self, gravity: float) -> None:
        """Advance one frame under gravity."""
        self.vy += gravity
        self.y += self.vy
        self.rotation = clamp(
            self.vy / self.rotation_divisor, self.min_rotation, self.max_rotation
        )

    def apply_impulse(self, power: float) -> None:
        """Override vertical velocity (not additive)."""
        self.vy = power

    def clamp_to_bounds(self, ground_y: float) -> Boundary:
        """Keep the avatar between the top of the screen and the ground.

        Ground contact rests the avatar on the ground line and is reported
        as terminal. Ceiling contact keeps it on screen and kills upward
        velocity.
        """
        if self.y + self.half_height >= ground_y:
            self.y = ground_y - self.half_height
            return Boundary.GROUND

        if self.y - self.half_height <= 0:
            self.y = self.half_height
            self.vy = 0.0
            return Boundary.CEILING

        return Boundary.NONE
