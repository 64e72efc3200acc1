from __future__ import annotations

from game.asteroids.collision import collides, find_bullet_hits, find_ship_hit
from game.asteroids.entities import AsteroidTier, Bullet, Vector2
from game.asteroids.ship import Ship

from conftest import make_vulnerable, rock


def bullet_at(x, y):
    return Bullet(position=Vector2(x, y), velocity=Vector2())


def test_collides_uses_bounding_radii():
    a = rock(0, 0, AsteroidTier.SMALL)  # radius 13
    assert collides(a, bullet_at(14.9, 0))
    assert not collides(a, bullet_at(15.0, 0))


def test_ship_hit_is_first_match_not_closest(config):
    ship = Ship.spawn(config)
    make_vulnerable(ship)
    x, y = ship.position.x, ship.position.y
    far_but_touching = rock(x + 60, y)      # 60 < 15 + 50
    dead_center = rock(x, y)
    assert find_ship_hit(ship, [far_but_touching, dead_center]) == 0
    assert find_ship_hit(ship, [rock(10, 10), dead_center]) == 1
    assert find_ship_hit(ship, [rock(10, 10)]) is None


def test_ship_hit_skipped_unless_vulnerable(config):
    ship = Ship.spawn(config)
    on_top = [rock(ship.position.x, ship.position.y)]

    ship.respawn()
    assert find_ship_hit(ship, on_top) is None

    make_vulnerable(ship)
    ship.explode()
    assert find_ship_hit(ship, on_top) is None


def test_bullet_destroys_at_most_one_asteroid():
    overlapping = [rock(100, 100), rock(110, 100)]
    hits = find_bullet_hits([bullet_at(105, 100)], overlapping)
    assert hits == [(0, 0)]


def test_asteroid_claimed_by_first_bullet_only():
    asteroids = [rock(100, 100)]
    bullets = [bullet_at(100, 100), bullet_at(101, 100)]
    assert find_bullet_hits(bullets, asteroids) == [(0, 0)]


def test_second_bullet_takes_next_overlapping_asteroid():
    asteroids = [rock(100, 100), rock(120, 100)]
    bullets = [bullet_at(110, 100), bullet_at(111, 100)]
    assert find_bullet_hits(bullets, asteroids) == [(0, 0), (1, 1)]


def test_no_hits_when_apart():
    assert find_bullet_hits([bullet_at(500, 500)], [rock(100, 100)]) == []
