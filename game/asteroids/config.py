"""
Gameplay constants for the asteroids simulation

All rates are per second; distances are in playfield pixels.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields, asdict
from typing import Any, Dict


@dataclass
class GameConfig:
    """Tunable gameplay constants"""
    # Playfield
    width: int = 800
    height: int = 600

    # Ship
    ship_size: float = 30.0  # height of the ship triangle
    ship_thrust: float = 300.0  # px/s^2
    friction: float = 0.7  # 0 = none, 1 = lots
    turn_speed: float = 360.0  # degrees/sec
    ship_explode_dur: float = 0.3
    ship_inv_dur: float = 3.0
    ship_blink_dur: float = 0.1
    start_lives: int = 3

    # Bullets
    bullet_speed: float = 500.0
    bullet_max: int = 10
    bullet_lifetime: float = 1.0
    bullet_radius: float = 2.0
    shoot_cooldown: float = 0.1

    # Asteroids
    asteroid_num: int = 3  # starting count at level 1
    asteroid_size: float = 100.0  # diameter of a large asteroid
    asteroid_speed: float = 50.0  # max starting speed of a large asteroid
    asteroid_vert: int = 10  # average vertex count
    asteroid_jag: float = 0.4  # 0 = round, 1 = very jagged
    asteroid_spin: float = 1.0  # max spin, radians/sec
    asteroid_pts_lge: int = 20
    asteroid_pts_med: int = 50
    asteroid_pts_sml: int = 100
    spawn_retries: int = 100

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Playfield must be positive, got {self.width}x{self.height}")
        if self.asteroid_size <= 0:
            raise ValueError("asteroid_size must be positive")
        if not 0.0 <= self.asteroid_jag < 1.0:
            raise ValueError("asteroid_jag must be in [0, 1)")
        if self.bullet_max < 1:
            raise ValueError("bullet_max must be at least 1")
        if self.start_lives < 1:
            raise ValueError("start_lives must be at least 1")
        if self.ship_explode_dur <= 0 or self.ship_inv_dur <= 0 or self.ship_blink_dur <= 0:
            raise ValueError("Ship explode, invincibility and blink durations must be positive")
        if self.spawn_retries < 1:
            raise ValueError("spawn_retries must be at least 1")

    @property
    def ship_radius(self) -> float:
        return self.ship_size / 2

    @property
    def turn_speed_rad(self) -> float:
        return math.radians(self.turn_speed)

    @property
    def split_floor(self) -> int:
        """Asteroids at or below this radius vanish without children"""
        return math.ceil(self.asteroid_size / 8)

    @property
    def safe_spawn_distance(self) -> float:
        return self.asteroid_size * 2 + self.ship_radius

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown game config keys: {sorted(unknown)}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
