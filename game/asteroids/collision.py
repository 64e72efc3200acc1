"""
Circle-circle collision detection

Only the common entity capability is used: `position` and
`bounding_radius()`. No swept tests; a fast bullet may tunnel through a
small rock between two ticks.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, Sequence, Tuple

from .entities import Asteroid, Bullet, Vector2
from .ship import Ship
from .utils import circle_collide


class Collidable(Protocol):
    position: Vector2

    def bounding_radius(self) -> float: ...


def collides(a: Collidable, b: Collidable) -> bool:
    """True if the two bounding circles overlap"""
    return circle_collide(
        a.position.x, a.position.y, a.bounding_radius(),
        b.position.x, b.position.y, b.bounding_radius(),
    )


def find_ship_hit(ship: Ship, asteroids: Sequence[Asteroid]) -> Optional[int]:
    """
    Index of the first asteroid (in list order) touching the ship, or None.

    First match, not closest match. Skipped entirely unless the ship is
    vulnerable (plain ALIVE).
    """
    if not ship.vulnerable:
        return None
    for j, asteroid in enumerate(asteroids):
        if collides(ship, asteroid):
            return j
    return None


def find_bullet_hits(
    bullets: Sequence[Bullet], asteroids: Sequence[Asteroid]
) -> List[Tuple[int, int]]:
    """
    (bullet index, asteroid index) pairs for this tick.

    Each bullet takes the first asteroid it overlaps and stops scanning;
    an asteroid already claimed by an earlier bullet is skipped.

    The scan runs over the asteroids as they were at the start of the
    check. Fragments split off this tick are only hittable from the next
    tick on.
    """
    hits: List[Tuple[int, int]] = []
    claimed = set()
    for i, bullet in enumerate(bullets):
        for j, asteroid in enumerate(asteroids):
            if j in claimed:
                continue
            if collides(bullet, asteroid):
                hits.append((i, j))
                claimed.add(j)
                break
    return hits
