"""
Asteroid spawn and split policy
"""

from __future__ import annotations

import math
import random
from typing import List

from .config import GameConfig
from .entities import Asteroid, AsteroidTier, Vector2
from .ship import Ship
from .utils import angle_to_direction, distance


def asteroid_count(level: int, config: GameConfig) -> int:
    """Number of large asteroids that open a level"""
    return config.asteroid_num + (level - 1)


def points_for(tier: AsteroidTier, config: GameConfig) -> int:
    if tier is AsteroidTier.LARGE:
        return config.asteroid_pts_lge
    if tier is AsteroidTier.MEDIUM:
        return config.asteroid_pts_med
    return config.asteroid_pts_sml


def random_velocity(radius: float, rng: random.Random, config: GameConfig) -> Vector2:
    """Random heading; smaller rocks get a proportionally higher top speed"""
    dx, dy = angle_to_direction(rng.uniform(0, math.tau))
    speed = rng.uniform(0, config.asteroid_speed) * (config.asteroid_size / radius)
    return Vector2(dx * speed, dy * speed)


def make_asteroid(
    position: Vector2,
    tier: AsteroidTier,
    radius: float,
    rng: random.Random,
    config: GameConfig,
) -> Asteroid:
    vert = config.asteroid_vert
    n_vert = rng.randint(max(3, vert // 2), max(3, vert + vert // 2))
    jag = config.asteroid_jag
    return Asteroid(
        position=position,
        velocity=random_velocity(radius, rng, config),
        radius=radius,
        tier=tier,
        angle=rng.uniform(0, math.tau),
        rotation_speed=rng.uniform(-config.asteroid_spin, config.asteroid_spin),
        offsets=[rng.uniform(1 - jag, 1 + jag) for _ in range(n_vert)],
    )


def safe_position(ship: Ship, rng: random.Random, config: GameConfig) -> Vector2:
    """
    Random playfield position clear of the ship.

    Gives up after `spawn_retries` samples and keeps the last one, so a
    crowded or tiny playfield cannot hang level start.
    """
    min_dist = config.safe_spawn_distance
    pos = Vector2()
    for _ in range(config.spawn_retries):
        pos = Vector2(rng.uniform(0, config.width), rng.uniform(0, config.height))
        if distance(ship.position.x, ship.position.y, pos.x, pos.y) >= min_dist:
            return pos
    return pos


def spawn_level(level: int, ship: Ship, rng: random.Random, config: GameConfig) -> List[Asteroid]:
    """Fresh wave of large asteroids for `level`"""
    tier = AsteroidTier.LARGE
    radius = tier.radius(config.asteroid_size)
    return [
        make_asteroid(safe_position(ship, rng, config), tier, radius, rng, config)
        for _ in range(asteroid_count(level, config))
    ]


def split(asteroid: Asteroid, rng: random.Random, config: GameConfig) -> List[Asteroid]:
    """
    Children left behind by a destroyed asteroid.

    Two half-radius (rounded up) rocks at the parent's position, or none
    once the parent is at or below the split floor.
    """
    if asteroid.radius <= config.split_floor:
        return []
    child_tier = asteroid.tier.child or AsteroidTier.SMALL
    child_radius = math.ceil(asteroid.radius / 2)
    return [
        make_asteroid(asteroid.position, child_tier, child_radius, rng, config)
        for _ in range(2)
    ]
