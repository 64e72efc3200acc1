from __future__ import annotations

import math
import random

import pytest

from game.asteroids.entities import Vector2
from game.asteroids.ship import SPAWN_ANGLE, Ship, ShipState

from conftest import make_vulnerable


@pytest.fixture
def ship(config):
    return Ship.spawn(config)


def test_spawn_centered_facing_up(ship, config):
    assert ship.position == Vector2(config.width / 2, config.height / 2)
    assert ship.angle == pytest.approx(math.pi / 2)
    assert ship.radius == pytest.approx(15)
    assert ship.state is ShipState.ALIVE


def test_thrust_then_friction(ship):
    ship.thrusting = True
    ship.update(0.1, 800, 600)
    # 300 px/s^2 * 0.1 s, then friction factor (1 - 0.7 * 0.1)
    assert ship.velocity.x == pytest.approx(0.0, abs=1e-9)
    assert ship.velocity.y == pytest.approx(30 * 0.93)
    assert ship.position.y == pytest.approx(300 + 30 * 0.93 * 0.1)


def test_friction_applies_without_thrust(ship):
    ship.velocity = Vector2(100, 0)
    ship.update(0.1, 800, 600)
    assert ship.velocity.x == pytest.approx(93)


def test_rotation_uses_turn_speed(ship):
    ship.rotation = 1
    ship.update(0.25, 800, 600)
    assert ship.angle == pytest.approx(math.pi)
    ship.rotation = -1
    ship.update(0.5, 800, 600)
    assert ship.angle == pytest.approx(0.0, abs=1e-9)


def test_shoot_spawns_at_nose_without_ship_velocity(ship):
    ship.angle = 0.0
    ship.velocity = Vector2(50, 0)
    bullet = ship.shoot(live_bullets=0)
    assert bullet is not None
    assert bullet.position.x == pytest.approx(415)
    assert bullet.position.y == pytest.approx(300)
    assert bullet.velocity.x == pytest.approx(500)
    assert bullet.velocity.y == pytest.approx(0, abs=1e-9)
    assert bullet.radius == 2
    assert bullet.lifetime == pytest.approx(1.0)


def test_shoot_respects_cooldown(ship):
    assert ship.shoot(0) is not None
    assert ship.shoot(1) is None
    ship.update(0.05, 800, 600)
    assert ship.shoot(1) is None
    ship.update(0.05, 800, 600)
    assert ship.shoot_cooldown == 0
    assert ship.shoot(1) is not None


def test_shoot_respects_bullet_cap(ship, config):
    assert ship.shoot(config.bullet_max) is None
    assert ship.shoot_cooldown == 0
    assert ship.shoot(config.bullet_max - 1) is not None


def test_explode_only_from_alive(ship):
    ship.velocity = Vector2(100, 0)
    ship.thrusting = True
    ship.rotation = -1
    assert ship.explode()
    assert ship.state is ShipState.EXPLODING
    assert ship.explode_timer == pytest.approx(0.3)
    assert ship.velocity == Vector2()
    assert not ship.thrusting
    assert ship.rotation == 0
    assert not ship.explode()

    ship.respawn()
    assert ship.state is ShipState.INVINCIBLE
    assert not ship.explode()


def test_exploding_ship_ignores_controls(ship):
    ship.explode()
    before = ship.position
    ship.thrusting = True
    ship.rotation = 1
    assert ship.update(0.1, 800, 600) is False
    assert ship.position == before
    assert ship.angle == pytest.approx(SPAWN_ANGLE)
    assert ship.shoot(0) is None
    assert not ship.hyperspace(random.Random(0))


def test_explosion_finishes_once(ship):
    ship.explode()
    assert ship.update(0.1, 800, 600) is False
    assert ship.update(0.1, 800, 600) is False
    assert ship.update(0.15, 800, 600) is True
    assert ship.state is ShipState.ALIVE
    assert ship.explode_timer == 0
    assert not ship.visible


def test_respawn_resets_kinematics(ship, config):
    ship.position = Vector2(10, 20)
    ship.velocity = Vector2(100, 100)
    ship.angle = 2.0
    ship.respawn()
    assert ship.position == Vector2(config.width / 2, config.height / 2)
    assert ship.velocity == Vector2()
    assert ship.angle == pytest.approx(SPAWN_ANGLE)
    assert ship.invincible_timer == pytest.approx(config.ship_inv_dur)
    assert ship.visible


def test_invincibility_blinks_then_expires(ship):
    ship.respawn()
    ship.update(0.05, 800, 600)
    assert ship.visible
    ship.update(0.06, 800, 600)
    assert not ship.visible
    ship.update(0.1, 800, 600)
    assert ship.visible
    assert ship.invincible

    ship.update(3.0, 800, 600)
    assert ship.state is ShipState.ALIVE
    assert ship.visible
    assert ship.invincible_timer == 0


def test_invincible_ship_is_controllable(ship):
    ship.respawn()
    ship.thrusting = True
    ship.update(0.1, 800, 600)
    assert ship.velocity.y > 0
    assert ship.shoot(0) is not None


def test_hyperspace_keeps_state(ship, config):
    rng = random.Random(3)
    make_vulnerable(ship)
    assert ship.hyperspace(rng)
    assert ship.state is ShipState.ALIVE
    assert 0 <= ship.position.x <= config.width
    assert 0 <= ship.position.y <= config.height

    ship.respawn()
    timer = ship.invincible_timer
    assert ship.hyperspace(rng)
    assert ship.state is ShipState.INVINCIBLE
    assert ship.invincible_timer == timer
