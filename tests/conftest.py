from __future__ import annotations

import random

import pytest

from game.asteroids.config import GameConfig
from game.asteroids.entities import Asteroid, AsteroidTier, Vector2
from game.asteroids.game_state import GameController
from game.asteroids.ship import ShipState


@pytest.fixture
def config():
    return GameConfig()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def controller(config):
    return GameController(config, seed=7)


def rock(x: float, y: float, tier: AsteroidTier = AsteroidTier.LARGE, size: float = 100) -> Asteroid:
    """Stationary asteroid of the given tier"""
    return Asteroid(position=Vector2(x, y), velocity=Vector2(), radius=tier.radius(size), tier=tier)


def make_vulnerable(ship):
    ship.state = ShipState.ALIVE
    ship.invincible_timer = 0.0
    ship.visible = True


def run_until(controller, predicate, dt: float = 1 / 60, max_ticks: int = 600):
    """Tick until predicate(events) holds; returns the events of that tick"""
    for _ in range(max_ticks):
        events = controller.tick(dt)
        if predicate(events):
            return events
    raise AssertionError("condition never reached")
