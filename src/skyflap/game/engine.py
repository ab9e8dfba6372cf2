"""
Simulation engine for SKYFLAP.

Owns the avatar, the obstacle stream and the run state, and advances
them one frame at a time.

States:
    RUNNING: Avatar falls, obstacles scroll, score accrues
    ENDED: Frozen after a ground or obstacle collision, waiting for an
        impulse to restart
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional
import logging
import random

from skyflap.config.settings import Settings, get_settings
from skyflap.core.events import EventBus, Event, EventType
from skyflap.game.avatar import Avatar, Boundary
from skyflap.game.collision import rect_circle_overlap
from skyflap.game.obstacles import ObstacleStream
from skyflap.game.snapshot import AvatarView, ObstacleView, RenderSnapshot

logger = logging.getLogger(__name__)


class RunStatus(Enum):
    """Engine states."""
    RUNNING = auto()
    ENDED = auto()


@dataclass
class RunState:
    """Counters for the current run."""
    frame: int = 0
    spawn_timer: int = 0
    score: int = 0
    best_score: int = 0
    status: RunStatus = RunStatus.RUNNING

    @property
    def running(self) -> bool:
        return self.status == RunStatus.RUNNING


class SimulationEngine:
    """
    Frame-driven game simulation.

    The shell calls advance() once per display frame and
    trigger_impulse() for every key press, click or touch. Drawing code
    reads render_state() and never touches engine fields directly.

    If an event bus is given, the engine publishes RUN_STARTED,
    SCORE_CHANGED, BEST_SCORE_CHANGED and RUN_ENDED on it.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        best_score: int = 0,
        rng: Optional[random.Random] = None,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._event_bus = event_bus
        display = self.settings.display

        self._stream = ObstacleStream(
            self.settings.obstacles,
            screen_width=display.width,
            screen_height=display.height,
            ground_margin=display.ground_height,
            rng=rng,
        )
        self._state = RunState(best_score=max(0, best_score))
        self._avatar: Avatar
        self.reset()

    @property
    def status(self) -> RunStatus:
        return self._state.status

    @property
    def running(self) -> bool:
        return self._state.running

    @property
    def score(self) -> int:
        return self._state.score

    @property
    def best_score(self) -> int:
        return self._state.best_score

    @property
    def frame(self) -> int:
        return self._state.frame

    @property
    def ground_y(self) -> int:
        return self.settings.display.ground_y

    def reset(self) -> None:
        """Start a fresh run. The best score carries over."""
        display = self.settings.display
        self._avatar = Avatar.spawn(self.settings.physics, display.height)
        self._stream.clear()
        self._state = RunState(best_score=self._state.best_score)

        logger.info("Run started")
        self._emit(EventType.RUN_STARTED, best_score=self._state.best_score)

    def trigger_impulse(self) -> None:
        """Flap while running; restart after the run has ended."""
        if self._state.status == RunStatus.ENDED:
            self.reset()
            return
        self._avatar.apply_impulse(self.settings.physics.flap_power)

    def advance(self) -> RunStatus:
        """Advance the simulation by one frame.

        Returns:
            Status after this frame
        """
        state = self._state
        if state.status == RunStatus.ENDED:
            return state.status

        state.frame += 1
        avatar = self._avatar
        avatar.integrate(self.settings.physics.gravity)

        if avatar.clamp_to_bounds(self.ground_y) == Boundary.GROUND:
            self._end_run("ground")
            return state.status

        obstacles = self.settings.obstacles
        state.spawn_timer += 1
        if state.spawn_timer > obstacles.spawn_interval:
            self._stream.spawn()
            state.spawn_timer = 0

        self._stream.advance(self._stream.speed_for(state.score))

        for _ in range(self._stream.collect_scored(avatar.left)):
            self._add_point()

        self._stream.retire()

        hitbox = avatar.hitbox
        for obstacle in self._stream:
            if any(rect_circle_overlap(rect, hitbox) for rect in self._stream.rects(obstacle)):
                self._end_run("obstacle")
                return state.status

        return state.status

    def render_state(self) -> RenderSnapshot:
        """Build an immutable snapshot of the current frame."""
        display = self.settings.display
        obstacles = self.settings.obstacles
        avatar = self._avatar
        return RenderSnapshot(
            avatar=AvatarView(
                x=avatar.x,
                y=avatar.y,
                width=avatar.width,
                height=avatar.height,
                rotation=avatar.rotation,
            ),
            obstacles=tuple(
                ObstacleView(x=o.x, top=o.top, gap=obstacles.gap, width=obstacles.width)
                for o in self._stream
            ),
            score=self._state.score,
            best_score=self._state.best_score,
            running=self._state.running,
            frame=self._state.frame,
            ground_y=display.ground_y,
            width=display.width,
            height=display.height,
        )

    def _add_point(self) -> None:
        state = self._state
        state.score += 1
        self._emit(EventType.SCORE_CHANGED, score=state.score)

        if state.score > state.best_score:
            state.best_score = state.score
            logger.debug(f"New best score: {state.best_score}")
            self._emit(EventType.BEST_SCORE_CHANGED, best_score=state.best_score)

    def _end_run(self, cause: str) -> None:
        self._state.status = RunStatus.ENDED
        logger.info(f"Run ended ({cause}): score={self._state.score}")
        self._emit(
            EventType.RUN_ENDED,
            score=self._state.score,
            best_score=self._state.best_score,
            cause=cause,
        )

    def _emit(self, event_type: EventType, **data) -> None:
        if self._event_bus is not None:
            self._event_bus.emit(Event(event_type, data=data, source="engine"))
