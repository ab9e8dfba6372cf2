"""
Game shell: glue between input, the simulation engine and persistence.

Subscribes to input and system events on the bus, forwards them to the
engine, persists new best scores and builds the end-of-run overlay.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Set
import logging
import random

from skyflap.config.settings import Settings, get_settings
from skyflap.core.events import Event, EventBus, EventType
from skyflap.game.engine import RunStatus, SimulationEngine
from skyflap.game.snapshot import RenderSnapshot
from skyflap.storage.best_score import BestScoreStore

logger = logging.getLogger(__name__)

ENCOURAGEMENT_THRESHOLD = 10
RESTART_HINT = "Tap, click or press space"


@dataclass(frozen=True)
class Overlay:
    """End-of-run overlay text."""

    title: str
    subtitle: str
    hint: str = ""


def end_of_run_message(score: int) -> str:
    """Subtitle shown when a run ends."""
    message = f"Your score: {score}"
    if score >= ENCOURAGEMENT_THRESHOLD:
        message += " - Great job!"
    return message


class GameShell:
    """
    Wires one SimulationEngine to an event bus and a best score store.

    Events handled:
        IMPULSE: flap, or restart after the run ended
        RESTART: start a new run immediately
        TICK: advance one frame unless paused
        PAUSE / RESUME: stop and restart frame advancement. Each event
            source pauses independently and play resumes only once every
            source has resumed.
        BEST_SCORE_CHANGED: persist the new best
        RUN_STARTED / RUN_ENDED: hide / show the overlay
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        store: Optional[BestScoreStore] = None,
        event_bus: Optional[EventBus] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.event_bus = event_bus or EventBus()
        self.store = store or BestScoreStore(
            self.settings.storage.path, key=self.settings.storage.key
        )

        self._overlay: Optional[Overlay] = None
        self._pause_reasons: Set[str] = set()
        self._unsubscribers: List[Callable[[], None]] = []

        handlers = {
            EventType.IMPULSE: self._on_impulse,
            EventType.RESTART: self._on_restart,
            EventType.TICK: self._on_tick,
            EventType.PAUSE: self._on_pause,
            EventType.RESUME: self._on_resume,
            EventType.BEST_SCORE_CHANGED: self._on_best_score,
            EventType.RUN_STARTED: self._on_run_started,
            EventType.RUN_ENDED: self._on_run_ended,
        }
        for event_type, handler in handlers.items():
            self._unsubscribers.append(self.event_bus.subscribe(event_type, handler))

        best = self.store.load()
        self.engine = SimulationEngine(
            self.settings, best_score=best, rng=rng, event_bus=self.event_bus
        )

    @property
    def overlay(self) -> Optional[Overlay]:
        """Overlay to draw, or None while a run is in progress."""
        return self._overlay

    @property
    def paused(self) -> bool:
        return bool(self._pause_reasons)

    def paused_by(self, source: str) -> bool:
        """Whether the given event source is holding a pause."""
        return source in self._pause_reasons

    def tick(self) -> RunStatus:
        """Advance the engine one frame unless paused."""
        if self.paused:
            return self.engine.status
        return self.engine.advance()

    def snapshot(self) -> RenderSnapshot:
        return self.engine.render_state()

    def close(self) -> None:
        """Detach from the event bus."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

    # Event handlers
    def _on_impulse(self, event: Event) -> None:
        self.engine.trigger_impulse()

    def _on_restart(self, event: Event) -> None:
        self.engine.reset()

    def _on_tick(self, event: Event) -> None:
        self.tick()

    def _on_pause(self, event: Event) -> None:
        was_paused = self.paused
        self._pause_reasons.add(event.source)
        if not was_paused:
            logger.info(f"Paused ({event.source})")

    def _on_resume(self, event: Event) -> None:
        if event.source not in self._pause_reasons:
            return
        self._pause_reasons.discard(event.source)
        if not self.paused:
            logger.info(f"Resumed ({event.source})")

    def _on_best_score(self, event: Event) -> None:
        self.store.record(event.data.get("best_score", 0))

    def _on_run_started(self, event: Event) -> None:
        self._overlay = None

    def _on_run_ended(self, event: Event) -> None:
        score = event.data.get("score", 0)
        self._overlay = Overlay(
            title="Game Over",
            subtitle=end_of_run_message(score),
            hint=RESTART_HINT,
        )
