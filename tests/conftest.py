from __future__ import annotations

import random
from pathlib import Path

import pytest

from skyflap.config.settings import Settings, StorageSettings, get_settings
from skyflap.core.events import EventBus
from skyflap.game.engine import SimulationEngine


class FixedRandom(random.Random):
    """Random source whose random() always returns the same value."""

    def __init__(self, value: float = 0.5) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> None:
    get_settings.cache_clear()


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Default game settings, isolated from .env and with storage under tmp_path."""
    return Settings(
        _env_file=None,
        storage=StorageSettings(path=tmp_path / "best_score.json"),
    )


@pytest.fixture()
def bus() -> EventBus:
    return EventBus()


@pytest.fixture()
def engine(settings: Settings, bus: EventBus) -> SimulationEngine:
    return SimulationEngine(settings, rng=FixedRandom(0.5), event_bus=bus)


@pytest.fixture()
def fixed_random():
    return FixedRandom
