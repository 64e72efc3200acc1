"""
Game entity dataclasses: Vector2, Bullet, Asteroid
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .utils import wrap_coordinate


@dataclass(frozen=True)
class Vector2:
    """2D position or velocity"""
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, k: float) -> "Vector2":
        return Vector2(self.x * k, self.y * k)

    __rmul__ = __mul__

    def length(self) -> float:
        return math.hypot(self.x, self.y)


def wrap_position(position: Vector2, radius: float, width: float, height: float) -> Vector2:
    """Torus wraparound: leaving by more than `radius` re-enters on the opposite edge"""
    return Vector2(
        wrap_coordinate(position.x, width, radius),
        wrap_coordinate(position.y, height, radius),
    )


class AsteroidTier(Enum):
    """Asteroid size classes; the value is the divisor of the base asteroid size"""
    LARGE = 2
    MEDIUM = 4
    SMALL = 8

    def radius(self, asteroid_size: float) -> int:
        return math.ceil(asteroid_size / self.value)

    @property
    def child(self) -> Optional["AsteroidTier"]:
        if self is AsteroidTier.LARGE:
            return AsteroidTier.MEDIUM
        if self is AsteroidTier.MEDIUM:
            return AsteroidTier.SMALL
        return None


@dataclass
class Bullet:
    """Bullet projectile entity"""
    position: Vector2
    velocity: Vector2
    radius: float = 2.0
    lifetime: float = 1.0  # seconds left

    @property
    def expired(self) -> bool:
        return self.lifetime <= 0

    def bounding_radius(self) -> float:
        return self.radius

    def update(self, dt: float, width: float, height: float):
        self.position = wrap_position(self.position + self.velocity * dt, self.radius, width, height)
        self.lifetime -= dt


@dataclass
class Asteroid:
    """Drifting rock; `offsets` only shape the outline when drawn"""
    position: Vector2
    velocity: Vector2
    radius: float
    tier: AsteroidTier = AsteroidTier.LARGE
    angle: float = 0.0
    rotation_speed: float = 0.0  # radians/sec
    offsets: List[float] = field(default_factory=list)

    def bounding_radius(self) -> float:
        return self.radius

    def update(self, dt: float, width: float, height: float):
        self.position = wrap_position(self.position + self.velocity * dt, self.radius, width, height)
        self.angle = (self.angle + self.rotation_speed * dt) % math.tau

    def outline(self) -> List[tuple]:
        """Jagged polygon vertices in playfield coordinates"""
        n = len(self.offsets)
        if n == 0:
            return []
        step = math.tau / n
        return [
            (
                self.position.x + self.radius * off * math.cos(self.angle + i * step),
                self.position.y + self.radius * off * math.sin(self.angle + i * step),
            )
            for i, off in enumerate(self.offsets)
        ]
