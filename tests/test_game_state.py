from __future__ import annotations

import pytest

from game.asteroids.config import GameConfig
from game.asteroids.entities import AsteroidTier, Bullet, Vector2
from game.asteroids.game_state import GameController, InputEvent
from game.asteroids.ship import ShipState

from conftest import make_vulnerable, rock, run_until


def crash(controller: GameController):
    """Put a small rock on a vulnerable ship and run until the explosion is over"""
    s = controller.state
    make_vulnerable(s.ship)
    anchor = rock(20, 20)
    s.asteroids = [rock(s.ship.position.x, s.ship.position.y, AsteroidTier.SMALL), anchor]
    controller.tick(1 / 60)
    assert s.ship.state is ShipState.EXPLODING
    return run_until(controller, lambda ev: ev.life_lost)


def test_new_game_starts_at_level_one(controller, config):
    s = controller.state
    assert controller.level == 1
    assert controller.score == 0
    assert controller.lives == 3
    assert not controller.game_over
    assert len(s.asteroids) == config.asteroid_num
    assert all(a.tier is AsteroidTier.LARGE for a in s.asteroids)
    assert s.bullets == []
    assert s.ship.invincible


def test_fire_at_large_asteroid_end_to_end(controller):
    s = controller.state
    target = rock(400, 450)  # straight above the ship, which faces up
    s.asteroids = [target]

    controller.handle_event(InputEvent.FIRE)
    assert s.bullets == []  # one-shot actions wait for the next tick

    events = run_until(controller, lambda ev: ev.asteroids_destroyed > 0)

    assert events.score_delta == 20
    assert controller.score == 20
    assert s.bullets == []
    assert len(s.asteroids) == 2
    for child in s.asteroids:
        assert child.tier is AsteroidTier.MEDIUM
        assert child.radius == 25
        assert child.position == Vector2(400, 450)


def test_bullets_expire_after_lifetime(controller):
    s = controller.state
    s.asteroids = [rock(20, 20)]
    s.ship.angle = 0.0  # fire sideways, nothing in the way
    s.ship.position = Vector2(400, 500)
    controller.handle_event(InputEvent.FIRE)
    controller.tick(0.1)
    assert len(s.bullets) == 1
    for _ in range(9):
        controller.tick(0.1)
    assert len(s.bullets) <= 1
    controller.tick(0.1)
    assert s.bullets == []


def test_cooldown_limits_queued_fire(controller):
    s = controller.state
    s.asteroids = [rock(20, 20)]
    controller.handle_event(InputEvent.FIRE)
    controller.handle_event(InputEvent.FIRE)
    events = controller.tick(1 / 60)
    assert events.bullets_fired == 1
    assert len(s.bullets) == 1


def test_invincible_ship_never_collides(controller):
    s = controller.state
    assert s.ship.invincible
    s.asteroids = [rock(s.ship.position.x, s.ship.position.y)]
    for _ in range(30):
        events = controller.tick(1 / 60)
        assert not events.life_lost
    assert s.ship.invincible
    assert controller.score == 0
    assert len(s.asteroids) == 1


def test_ship_collision_destroys_asteroid_and_explodes(controller):
    s = controller.state
    make_vulnerable(s.ship)
    s.asteroids = [rock(s.ship.position.x, s.ship.position.y), rock(s.ship.position.x + 10, s.ship.position.y)]
    events = controller.tick(1 / 60)
    assert s.ship.exploding
    # only one ship hit per tick: the first rock splits, the second is untouched
    assert events.asteroids_destroyed == 1
    assert events.score_delta == 20
    assert len(s.asteroids) == 3
    assert controller.lives == 3


def test_life_lost_after_explosion_then_respawn(controller, config):
    events = crash(controller)
    s = controller.state
    assert controller.lives == 2
    assert not events.game_over
    assert s.ship.invincible
    assert s.ship.position == Vector2(config.width / 2, config.height / 2)


def test_game_over_exactly_when_lives_run_out(controller):
    game_overs = 0
    for expected in (2, 1, 0):
        events = crash(controller)
        game_overs += int(events.game_over)
        assert controller.lives == expected
    assert controller.game_over
    assert game_overs == 1
    assert controller.lives == 0


def test_game_over_freezes_simulation(controller):
    for _ in range(3):
        crash(controller)
    s = controller.state
    score = controller.score
    positions = [a.position for a in s.asteroids]
    ship_pos = s.ship.position

    controller.handle_event(InputEvent.FIRE)
    controller.handle_event(InputEvent.THRUST_START)
    for _ in range(60):
        events = controller.tick(1 / 60)
        assert not events.game_over
        assert events.score_delta == 0
    assert controller.score == score
    assert controller.lives == 0
    assert [a.position for a in s.asteroids] == positions
    assert s.ship.position == ship_pos
    assert s.bullets == []


def test_restart_after_game_over(controller, config):
    controller.handle_event(InputEvent.RESTART)
    assert controller.level == 1  # ignored while playing

    for _ in range(3):
        crash(controller)
    controller.handle_event(InputEvent.RESTART)
    assert not controller.game_over
    assert controller.score == 0
    assert controller.lives == config.start_lives
    assert controller.level == 1
    assert len(controller.state.asteroids) == config.asteroid_num


def test_level_advances_when_field_is_clear(controller, config):
    s = controller.state
    s.asteroids = []
    events = controller.tick(1 / 60)
    assert events.level_up
    assert controller.level == 2
    assert len(s.asteroids) == config.asteroid_num + 1
    assert s.ship.invincible


def test_no_level_up_while_exploding(controller):
    s = controller.state
    make_vulnerable(s.ship)
    s.asteroids = [rock(s.ship.position.x, s.ship.position.y, AsteroidTier.SMALL)]
    events = controller.tick(1 / 60)
    assert s.asteroids == []
    assert s.ship.exploding
    assert not events.level_up
    assert controller.level == 1

    run_until(controller, lambda ev: ev.level_up)
    assert controller.level == 2
    assert controller.lives == 2


def test_score_only_increases_over_random_play(config):
    controller = GameController(config, seed=99)
    events_in = [InputEvent.FIRE, InputEvent.ROTATE_LEFT, InputEvent.THRUST_START,
                 InputEvent.ROTATE_STOP, InputEvent.THRUST_STOP, InputEvent.HYPERSPACE]
    last_score, last_lives, last_level = 0, controller.lives, controller.level
    for i in range(3000):
        controller.handle_event(events_in[i % len(events_in)])
        controller.tick(1 / 30)
        assert controller.score >= last_score
        assert controller.lives <= last_lives
        assert controller.level >= last_level
        assert controller.lives >= 0
        last_score, last_lives, last_level = controller.score, controller.lives, controller.level


def test_hyperspace_is_applied_on_next_tick(controller):
    s = controller.state
    s.asteroids = [rock(20, 20)]
    before = s.ship.position
    controller.handle_event(InputEvent.HYPERSPACE)
    assert s.ship.position == before
    controller.tick(1 / 60)
    assert s.ship.position != before
    assert s.ship.invincible


def test_rotation_and_thrust_events_set_flags(controller):
    ship = controller.state.ship
    controller.handle_event(InputEvent.ROTATE_LEFT)
    assert ship.rotation == 1
    controller.handle_event(InputEvent.ROTATE_RIGHT)
    assert ship.rotation == -1
    controller.handle_event(InputEvent.ROTATE_STOP)
    assert ship.rotation == 0
    controller.handle_event(InputEvent.THRUST_START)
    assert ship.thrusting
    controller.handle_event(InputEvent.THRUST_STOP)
    assert not ship.thrusting


def test_same_seed_same_game():
    a = GameController(GameConfig(), seed=5)
    b = GameController(GameConfig(), seed=5)
    for _ in range(120):
        a.handle_event(InputEvent.FIRE)
        b.handle_event(InputEvent.FIRE)
        a.tick(1 / 30)
        b.tick(1 / 30)
    assert a.score == b.score
    assert [x.position for x in a.state.asteroids] == [x.position for x in b.state.asteroids]


def test_hud_reports_counters(controller):
    assert controller.hud() == {"score": 0, "lives": 3, "level": 1, "game_over": False}


def test_controls_ignored_while_exploding(controller):
    s = controller.state
    make_vulnerable(s.ship)
    s.asteroids = [rock(s.ship.position.x, s.ship.position.y, AsteroidTier.SMALL), rock(20, 20)]
    controller.tick(1 / 60)
    assert s.ship.exploding

    controller.handle_event(InputEvent.THRUST_START)
    controller.handle_event(InputEvent.ROTATE_LEFT)
    assert not s.ship.thrusting
    assert s.ship.rotation == 0

    run_until(controller, lambda ev: ev.life_lost)
    controller.tick(1 / 60)
    assert s.ship.invincible
    assert not s.ship.thrusting
    assert s.ship.rotation == 0
    assert s.ship.velocity == Vector2()


def test_start_game_mid_game_resets_everything(controller, config):
    s = controller.state
    s.asteroids = [rock(20, 20)]
    run_until(controller, lambda ev: not controller.state.ship.invincible, max_ticks=400)
    s.score = 120
    s.lives = 1
    s.level = 4
    s.bullets = [Bullet(position=Vector2(50, 50), velocity=Vector2())]
    controller.handle_event(InputEvent.FIRE)
    controller.handle_event(InputEvent.HYPERSPACE)

    controller.handle_event(InputEvent.START_GAME)
    fresh = controller.state
    assert fresh is not s
    assert controller.hud() == {"score": 0, "lives": config.start_lives, "level": 1, "game_over": False}
    assert fresh.bullets == []
    assert len(fresh.asteroids) == config.asteroid_num
    assert fresh.ship.invincible

    centre = fresh.ship.position
    events = controller.tick(1 / 60)
    assert events.bullets_fired == 0
    assert fresh.bullets == []
    assert fresh.ship.position == centre


def test_fragments_become_targets_on_the_next_tick(controller):
    s = controller.state
    s.asteroids = [rock(100, 100)]
    s.bullets = [
        Bullet(position=Vector2(100, 100), velocity=Vector2()),
        Bullet(position=Vector2(100, 100), velocity=Vector2()),
    ]

    events = controller.tick(1 / 60)
    assert events.asteroids_destroyed == 1
    assert len(s.bullets) == 1
    assert [a.tier for a in s.asteroids] == [AsteroidTier.MEDIUM, AsteroidTier.MEDIUM]

    events = controller.tick(1 / 60)
    assert events.asteroids_destroyed == 1
    assert events.score_delta == 50
    assert s.bullets == []
