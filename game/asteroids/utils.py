"""
Vector math and small numeric helpers for the simulation
"""

from __future__ import annotations
import math
import random
from typing import Tuple, Optional
import numpy as np


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points"""
    return math.hypot(x2 - x1, y2 - y1)


def angle_to_direction(angle: float) -> Tuple[float, float]:
    """Unit vector for an angle in radians (y axis points up)"""
    return math.cos(angle), math.sin(angle)


def wrap_coordinate(value: float, extent: float, margin: float) -> float:
    """
    Toroidal wrap of a single axis.

    A value that has left [-margin, extent + margin] re-enters on the
    opposite edge, offset by the same margin.
    """
    if value < -margin:
        return extent + margin
    if value > extent + margin:
        return -margin
    return value


def circle_collide(x1, y1, r1, x2, y2, r2) -> bool:
    """Check if two circles overlap (touching does not count)"""
    dx = x1 - x2
    dy = y1 - y2
    rr = r1 + r2
    return (dx * dx + dy * dy) < (rr * rr)


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
