"""
Color palette and palette loading utilities.
"""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml


@dataclass
class Palette:
    """Scene color palette."""
    sky: str = "#9CE7F7"          # Background above the ground
    obstacle: str = "#2B9A2B"     # Obstacle body
    ground: str = "#D2A66B"       # Ground strip
    avatar: str = "#FFD54A"       # Avatar body
    wing: str = "#FFB74D"         # Avatar wing
    eye: str = "#000000"
    text: str = "#FFFFFF"         # HUD and overlay text
    text_shadow: str = "#1A1A1A"
    overlay: str = "#000000"      # End-of-run dimming

    def to_rgb(self, color_name: str) -> tuple[int, int, int]:
        """Convert hex color to RGB tuple."""
        hex_color = getattr(self, color_name, self.text)
        hex_color = hex_color.lstrip("#")
        return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))

    @classmethod
    def from_yaml(cls, data: dict[str, Any]) -> "Palette":
        """Create palette from YAML data, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        colors = data.get("colors", data)
        return cls(**{k: str(v) for k, v in colors.items() if k in known})


def load_palette(palette_file: Path | None = None) -> Palette:
    """
    Load a palette from a YAML file.

    Args:
        palette_file: Path to the YAML file, or None for the default palette

    Returns:
        Palette instance
    """
    if palette_file is None or not palette_file.exists():
        return Palette()

    with open(palette_file, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return Palette.from_yaml(data)
