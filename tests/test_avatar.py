from __future__ import annotations

import pytest

from skyflap.config.settings import PhysicsSettings
from skyflap.game.avatar import Avatar, Boundary


@pytest.fixture()
def avatar() -> Avatar:
    return Avatar.spawn(PhysicsSettings(), screen_height=600)


def test_spawn_point(avatar: Avatar) -> None:
    assert avatar.x == 90
    assert avatar.y == 300
    assert avatar.vy == 0
    assert avatar.half_width == 17
    assert avatar.half_height == 12
    assert avatar.left == 73


def test_hitbox_radius_is_half_the_larger_side_minus_inset(avatar: Avatar) -> None:
    hitbox = avatar.hitbox
    assert (hitbox.x, hitbox.y) == (avatar.x, avatar.y)
    assert hitbox.radius == pytest.approx(15.0)


def test_integrate_applies_gravity_then_moves(avatar: Avatar) -> None:
    avatar.integrate(0.6)
    assert avatar.vy == pytest.approx(0.6)
    assert avatar.y == pytest.approx(300.6)
    assert avatar.rotation == pytest.approx(0.05)


def test_free_fall_matches_closed_form(avatar: Avatar) -> None:
    y0 = avatar.y
    for n in range(1, 26):
        avatar.integrate(0.6)
        assert avatar.y == pytest.approx(y0 + 0.3 * n * (n + 1))


@pytest.mark.parametrize("prior_vy", [-20.0, -9.5, 0.0, 3.3, 15.0])
def test_impulse_overrides_velocity(avatar: Avatar, prior_vy: float) -> None:
    avatar.vy = prior_vy
    avatar.apply_impulse(-9.5)
    assert avatar.vy == -9.5


def test_repeated_impulses_do_not_accumulate(avatar: Avatar) -> None:
    avatar.apply_impulse(-9.5)
    avatar.apply_impulse(-9.5)
    assert avatar.vy == -9.5


def test_rotation_is_clamped(avatar: Avatar) -> None:
    avatar.vy = -30
    avatar.integrate(0.0)
    assert avatar.rotation == pytest.approx(-0.6)

    avatar.vy = 40
    avatar.integrate(0.0)
    assert avatar.rotation == pytest.approx(1.2)


def test_ground_contact_rests_on_ground(avatar: Avatar) -> None:
    avatar.y = 515
    assert avatar.clamp_to_bounds(ground_y=520) == Boundary.GROUND
    assert avatar.y == 520 - 12


def test_ceiling_contact_clamps_and_stops(avatar: Avatar) -> None:
    avatar.y = 5
    avatar.vy = -9.5
    assert avatar.clamp_to_bounds(ground_y=520) == Boundary.CEILING
    assert avatar.y == 12
    assert avatar.vy == 0


def test_mid_air_is_unbounded(avatar: Avatar) -> None:
    avatar.vy = 4.0
    assert avatar.clamp_to_bounds(ground_y=520) == Boundary.NONE
    assert avatar.y == 300
    assert avatar.vy == 4.0
