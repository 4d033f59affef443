from __future__ import annotations

import math

import pytest

from lunar.components import Controls
from lunar.config import DEFAULT_CONFIG, SimulationConfig
from lunar.maths import Vector2, wrap_angle
from lunar.physics import PhysicsBody
from lunar.ship import Ship, spawn_ship


def test_body_at_rest_stays_put_for_any_dt() -> None:
    for dt in (0.0, 0.5, 3.0, 1000.0):
        body = PhysicsBody.vector(Vector2(4.0, -2.0))
        body.time_step(dt, 0.999)
        assert body.position == Vector2(4.0, -2.0)
        assert body.velocity == Vector2(0.0, 0.0)


def test_acceleration_feeds_velocity_before_position() -> None:
    body = PhysicsBody.scalar(0.0, 0.0, 2.0)
    body.time_step(3.0, 1.0)

    assert body.velocity == pytest.approx(2.0)
    assert body.position == pytest.approx(6.0)
    assert body.acceleration == 0.0


def test_friction_decays_velocity_by_power_of_dt() -> None:
    body = PhysicsBody.vector(velocity=Vector2(1.0, 0.0))
    body.time_step(2.0, 0.5)

    assert body.position.x == pytest.approx(2.0)
    assert body.velocity.x == pytest.approx(0.25)

    # Without acceleration every positive dt strictly shrinks the speed.
    for dt in (0.01, 0.5, 1.7, 16.0):
        before = body.velocity.length()
        body.time_step(dt, 0.999)
        assert body.velocity.length() < before

    spin = PhysicsBody.scalar(0.0, -0.3)
    spin.time_step(0.01, 0.999)
    assert abs(spin.velocity) < 0.3


def test_acceleration_is_cleared_after_each_step() -> None:
    body = PhysicsBody.vector()
    body.accelerate(Vector2(1.0, 1.0))
    body.accelerate(Vector2(0.5, 0.0))
    assert body.acceleration == Vector2(1.5, 1.0)

    body.time_step(1.0, 1.0)
    assert body.acceleration == Vector2(0.0, 0.0)

    body.time_step(1.0, 1.0)
    assert body.velocity == Vector2(1.5, 1.0)


def test_step_rebinds_vectors_instead_of_mutating() -> None:
    body = PhysicsBody.vector(Vector2(0.0, 0.0), Vector2(1.0, 0.0))
    held = body.position
    body.time_step(1.0, 1.0)
    assert held == Vector2(0.0, 0.0)
    assert body.position == Vector2(1.0, 0.0)


def test_ship_falls_under_gravity() -> None:
    ship = Ship.at_rest(Vector2(0.0, 100.0))
    ship.time_step(1.0)

    assert ship.position.y == pytest.approx(100.0 - 0.001)
    assert ship.velocity.y == pytest.approx(-0.001 * 0.999)
    assert ship.velocity.x == 0.0
    assert ship.body.acceleration == Vector2(0.0, 0.0)


def test_rotate_left_turns_counter_clockwise() -> None:
    ship = Ship.at_rest(Vector2(0.0, 100.0))
    ship.rotate_left(2.0)
    ship.time_step(2.0)

    assert ship.angular_velocity == pytest.approx(0.0002 * 0.999**2)
    assert ship.angle == pytest.approx(0.0004)
    assert ship.rotation.acceleration == 0.0


def test_right_overrides_left_when_both_held() -> None:
    ship = Ship.at_rest(Vector2(0.0, 100.0))
    ship.apply_controls(Controls(left=True, right=True), 1.0)
    assert ship.rotation.acceleration == pytest.approx(-DEFAULT_CONFIG.rotation_accel)


def test_thrust_upright_beats_gravity() -> None:
    ship = Ship.at_rest(Vector2(0.0, 100.0))
    ship.thrust_up(1.0)
    ship.time_step(1.0)

    assert ship.velocity.y == pytest.approx(0.001 * 0.999)
    assert ship.velocity.x == pytest.approx(0.0, abs=1e-12)


def test_thrust_follows_ship_angle() -> None:
    ship = Ship.at_rest(Vector2(0.0, 100.0), angle=math.pi / 2)
    ship.apply_controls(Controls(thrust=True), 1.0)
    ship.time_step(1.0)

    # Tilted a quarter turn counter-clockwise, the nozzle pushes towards -x.
    assert ship.velocity.x == pytest.approx(-0.002 * 0.999)
    assert ship.velocity.y == pytest.approx(-0.001 * 0.999)


def test_thrust_scales_with_dt() -> None:
    slow = Ship.at_rest(Vector2(0.0, 0.0))
    fast = Ship.at_rest(Vector2(0.0, 0.0))
    slow.thrust_up(1.0)
    fast.thrust_up(4.0)
    assert fast.body.acceleration.y == pytest.approx(4.0 * slow.body.acceleration.y)


class _FixedRng:
    def standard_normal(self, size=None):
        return [0.0] * (size or 1)

    def integers(self, low, high=None, size=None):
        return low

    def uniform(self, low=0.0, high=1.0, size=None):
        if size is None:
            return high
        return [low] * size


def test_spawn_ship_uses_config_ranges() -> None:
    config = SimulationConfig(max_height=120)
    ship = spawn_ship(config, _FixedRng())

    assert ship.position == Vector2(50.0, 240.0)
    assert ship.velocity == Vector2(-0.5, -0.5)
    assert ship.angle == pytest.approx(0.5)
    assert ship.angular_velocity == 0.0
    assert ship.size == Vector2(10.0, 10.0)


def test_wrap_angle_maps_full_turns_to_zero() -> None:
    assert wrap_angle(0.05) == pytest.approx(0.05)
    assert wrap_angle(2 * math.pi - 0.05) == pytest.approx(-0.05)
    assert wrap_angle(-4 * math.pi + 0.02) == pytest.approx(0.02)
    assert abs(wrap_angle(math.pi)) == pytest.approx(math.pi)
