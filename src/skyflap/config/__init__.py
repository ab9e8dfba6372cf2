"""Configuration for SKYFLAP."""

from .settings import (
    Settings,
    DisplaySettings,
    PhysicsSettings,
    ObstacleSettings,
    StorageSettings,
    get_settings,
)
from .palette import Palette, load_palette

__all__ = [
    "Settings",
    "DisplaySettings",
    "PhysicsSettings",
    "ObstacleSettings",
    "StorageSettings",
    "get_settings",
    "Palette",
    "load_palette",
]
