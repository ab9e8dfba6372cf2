from __future__ import annotations

import dataclasses

import pytest

from skyflap.config.settings import Settings
from skyflap.core.events import EventBus, EventType
from skyflap.game.engine import RunStatus, SimulationEngine

HOVER_Y = 300.0


def _hover(engine: SimulationEngine, frames: int) -> list:
    """Flap whenever the avatar sinks below HOVER_Y; stop if the run ends.

    Returns the snapshot after every advance().
    """
    snapshots = []
    for _ in range(frames):
        if engine.render_state().avatar.y > HOVER_Y:
            engine.trigger_impulse()
        status = engine.advance()
        snapshots.append(engine.render_state())
        if status == RunStatus.ENDED:
            break
    return snapshots


def _assert_in_bounds(engine: SimulationEngine, snapshot) -> None:
    half_h = snapshot.avatar.height / 2
    assert half_h <= snapshot.avatar.y <= engine.ground_y - half_h


def test_initial_state_is_fresh_run(engine: SimulationEngine) -> None:
    snapshot = engine.render_state()
    assert engine.status == RunStatus.RUNNING
    assert snapshot.running
    assert snapshot.score == 0
    assert snapshot.obstacles == ()
    assert snapshot.avatar.y == 300
    assert snapshot.ground_y == 520
    assert (snapshot.width, snapshot.height) == (400, 600)


def test_free_fall_follows_closed_form(engine: SimulationEngine) -> None:
    y0 = engine.render_state().avatar.y
    for n in range(1, 26):
        assert engine.advance() == RunStatus.RUNNING
        assert engine.render_state().avatar.y == pytest.approx(y0 + 0.3 * n * (n + 1))


def test_ground_contact_ends_run_on_same_frame(engine: SimulationEngine, bus: EventBus) -> None:
    for _ in range(25):
        assert engine.advance() == RunStatus.RUNNING

    assert engine.advance() == RunStatus.ENDED
    snapshot = engine.render_state()
    assert snapshot.avatar.y == 520 - 12
    assert not snapshot.running
    assert snapshot.frame == 26

    ended = bus.get_history(EventType.RUN_ENDED)
    assert len(ended) == 1
    assert ended[0].data["cause"] == "ground"
    assert ended[0].data["score"] == 0


def test_ended_state_is_frozen(engine: SimulationEngine) -> None:
    while engine.advance() == RunStatus.RUNNING:
        pass
    before = engine.render_state()
    for _ in range(10):
        assert engine.advance() == RunStatus.ENDED
    assert engine.render_state() == before


def test_ceiling_is_soft(engine: SimulationEngine) -> None:
    for _ in range(60):
        engine.trigger_impulse()
        assert engine.advance() == RunStatus.RUNNING
        _assert_in_bounds(engine, engine.render_state())
    assert engine.render_state().avatar.y == pytest.approx(12)


def test_spawn_cadence(engine: SimulationEngine) -> None:
    snapshots = _hover(engine, 91)
    assert all(s.obstacles == () for s in snapshots[:90])

    spawned = snapshots[90].obstacles
    assert len(spawned) == 1
    # Spawned at 410 and scrolled once in the same frame
    assert spawned[0].x == pytest.approx(410 - 2.6)
    assert spawned[0].top == 185
    assert spawned[0].gap == 150

    snapshots = _hover(engine, 91)
    assert len(snapshots[-1].obstacles) == 2


def test_hovering_through_gaps_scores_once_per_obstacle(
    engine: SimulationEngine, bus: EventBus
) -> None:
    snapshots = _hover(engine, 600)

    assert engine.status == RunStatus.RUNNING
    for snapshot in snapshots:
        _assert_in_bounds(engine, snapshot)

    scores = [s.score for s in snapshots]
    assert scores == sorted(scores)
    assert all(b - a in (0, 1) for a, b in zip(scores, scores[1:]))
    assert scores[-1] >= 3

    changes = [e.data["score"] for e in bus.get_history(EventType.SCORE_CHANGED, limit=100)]
    assert changes == list(range(1, scores[-1] + 1))


def test_best_score_follows_score(engine: SimulationEngine, bus: EventBus) -> None:
    _hover(engine, 600)
    assert engine.best_score == engine.score
    best_events = bus.get_history(EventType.BEST_SCORE_CHANGED, limit=100)
    assert best_events[-1].data["best_score"] == engine.score


def test_best_score_only_announced_when_beaten(settings: Settings, fixed_random) -> None:
    bus = EventBus()
    engine = SimulationEngine(settings, best_score=2, rng=fixed_random(0.5), event_bus=bus)
    _hover(engine, 600)

    assert engine.score >= 3
    announced = [e.data["best_score"] for e in bus.get_history(EventType.BEST_SCORE_CHANGED, limit=100)]
    assert announced == list(range(3, engine.score + 1))


def test_obstacle_collision_ends_run(settings: Settings, fixed_random) -> None:
    bus = EventBus()
    # Gap spans [60, 210); hovering around y=230..310 hits the lower barrier
    engine = SimulationEngine(settings, rng=fixed_random(0.0), event_bus=bus)
    snapshots = _hover(engine, 400)

    assert engine.status == RunStatus.ENDED
    # First obstacle: x = 410 - 2.6 * (frame - 90) first drops below 90 + 15 at 208
    assert snapshots[-1].frame == 208
    assert len(snapshots[-1].obstacles) == 2
    assert snapshots[-1].score == 0
    assert bus.get_history(EventType.RUN_ENDED)[-1].data["cause"] == "obstacle"


def test_impulse_after_end_resets_run(settings: Settings, fixed_random) -> None:
    bus = EventBus()
    engine = SimulationEngine(settings, rng=fixed_random(0.0), event_bus=bus)
    _hover(engine, 400)
    assert engine.status == RunStatus.ENDED
    assert engine.render_state().obstacles

    engine.trigger_impulse()

    snapshot = engine.render_state()
    assert engine.status == RunStatus.RUNNING
    assert snapshot.score == 0
    assert snapshot.obstacles == ()
    assert snapshot.frame == 0
    assert snapshot.avatar.y == 300
    assert len(bus.get_history(EventType.RUN_STARTED)) == 2

    # The restarting impulse does not also flap
    engine.advance()
    assert engine.render_state().avatar.y == pytest.approx(300.6)


def test_reset_keeps_best_score(engine: SimulationEngine) -> None:
    _hover(engine, 600)
    best = engine.best_score
    assert best > 0

    engine.reset()
    assert engine.score == 0
    assert engine.best_score == best


def test_impulse_while_running_overrides_velocity(engine: SimulationEngine) -> None:
    for _ in range(10):
        engine.advance()
    y = engine.render_state().avatar.y

    engine.trigger_impulse()
    engine.advance()
    # vy = -9.5 + 0.6 gravity
    assert engine.render_state().avatar.y == pytest.approx(y - 8.9)


def test_snapshot_is_read_only(engine: SimulationEngine) -> None:
    _hover(engine, 100)
    snapshot = engine.render_state()

    with pytest.raises(dataclasses.FrozenInstanceError):
        snapshot.score = 99
    with pytest.raises(dataclasses.FrozenInstanceError):
        snapshot.avatar.y = 0
    with pytest.raises(dataclasses.FrozenInstanceError):
        snapshot.obstacles[0].x = 0
    assert isinstance(snapshot.obstacles, tuple)

    engine.advance()
    assert engine.render_state().frame == snapshot.frame + 1
    assert snapshot.frame == 100


def test_engines_are_independent(settings: Settings, fixed_random) -> None:
    a = SimulationEngine(settings, rng=fixed_random(0.5))
    b = SimulationEngine(settings, rng=fixed_random(0.5))
    for _ in range(5):
        a.advance()
    assert a.frame == 5
    assert b.frame == 0
    assert b.render_state().avatar.y == 300


def test_negative_best_score_is_clamped(settings: Settings) -> None:
    assert SimulationEngine(settings, best_score=-4).best_score == 0
