"""
Player ship: kinematics and the life-cycle state machine

    ALIVE --explode()--> EXPLODING --timer--> (controller) --respawn()--> INVINCIBLE --timer--> ALIVE

The ship never touches lives or score; when the explosion timer runs out
`update` reports it and the progression controller decides between a
respawn and game over.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .config import GameConfig
from .entities import Bullet, Vector2, wrap_position
from .utils import angle_to_direction

SPAWN_ANGLE = math.pi / 2  # facing up


class ShipState(Enum):
    ALIVE = "alive"
    EXPLODING = "exploding"
    INVINCIBLE = "invincible"


@dataclass
class Ship:
    """Player ship entity"""
    position: Vector2
    velocity: Vector2 = field(default_factory=Vector2)
    angle: float = SPAWN_ANGLE
    radius: float = 15.0
    rotation: int = 0  # -1 clockwise, 0 none, 1 counter-clockwise
    thrusting: bool = False
    state: ShipState = ShipState.ALIVE
    explode_timer: float = 0.0
    invincible_timer: float = 0.0
    blink_timer: float = 0.0
    shoot_cooldown: float = 0.0
    visible: bool = True  # blink output for the renderer only
    config: GameConfig = field(default_factory=GameConfig, repr=False)

    @classmethod
    def spawn(cls, config: GameConfig) -> "Ship":
        """New ship at the centre of the playfield"""
        return cls(
            position=Vector2(config.width / 2, config.height / 2),
            radius=config.ship_radius,
            config=config,
        )

    # ----------------------------
    # State queries
    # ----------------------------

    @property
    def controllable(self) -> bool:
        return self.state is not ShipState.EXPLODING

    @property
    def vulnerable(self) -> bool:
        return self.state is ShipState.ALIVE

    @property
    def exploding(self) -> bool:
        return self.state is ShipState.EXPLODING

    @property
    def invincible(self) -> bool:
        return self.state is ShipState.INVINCIBLE

    def bounding_radius(self) -> float:
        return self.radius

    # ----------------------------
    # Transitions
    # ----------------------------

    def explode(self) -> bool:
        """Hit by an asteroid. Only a plain ALIVE ship can explode."""
        if self.state is not ShipState.ALIVE:
            return False
        self.state = ShipState.EXPLODING
        self.explode_timer = self.config.ship_explode_dur
        self.velocity = Vector2()
        self.thrusting = False
        self.rotation = 0
        return True

    def respawn(self):
        """Back to the centre, stationary, facing up, with a fresh invincibility window"""
        self.position = Vector2(self.config.width / 2, self.config.height / 2)
        self.velocity = Vector2()
        self.angle = SPAWN_ANGLE
        self.explode_timer = 0.0
        self.state = ShipState.INVINCIBLE
        self.invincible_timer = self.config.ship_inv_dur
        self.blink_timer = self.config.ship_blink_dur
        self.visible = True

    def hyperspace(self, rng: random.Random) -> bool:
        """Teleport to a random spot. Grants no invincibility."""
        if not self.controllable:
            return False
        self.position = Vector2(
            rng.uniform(0, self.config.width),
            rng.uniform(0, self.config.height),
        )
        return True

    def shoot(self, live_bullets: int) -> Optional[Bullet]:
        """Fire from the nose if off cooldown and under the bullet cap, else None"""
        cfg = self.config
        if not self.controllable or self.shoot_cooldown > 0 or live_bullets >= cfg.bullet_max:
            return None
        dx, dy = angle_to_direction(self.angle)
        direction = Vector2(dx, dy)
        self.shoot_cooldown = cfg.shoot_cooldown
        return Bullet(
            position=self.position + direction * self.radius,
            velocity=direction * cfg.bullet_speed,
            radius=cfg.bullet_radius,
            lifetime=cfg.bullet_lifetime,
        )

    # ----------------------------
    # Per-tick update
    # ----------------------------

    def update(self, dt: float, width: float, height: float) -> bool:
        """
        Advance one tick.

        Returns True on the tick the explosion animation finishes. The ship
        is then plain ALIVE but hidden until the controller respawns it.
        """
        cfg = self.config
        self.shoot_cooldown = max(0.0, self.shoot_cooldown - dt)

        if self.state is ShipState.EXPLODING:
            self.explode_timer -= dt
            if self.explode_timer <= 0:
                self.explode_timer = 0.0
                self.state = ShipState.ALIVE
                self.visible = False
                return True
            return False

        if self.state is ShipState.INVINCIBLE:
            self._update_invincibility(dt)

        if self.thrusting:
            dx, dy = angle_to_direction(self.angle)
            self.velocity = self.velocity + Vector2(dx, dy) * (cfg.ship_thrust * dt)

        # Friction applies every tick, thrusting or not
        self.velocity = self.velocity * max(0.0, 1.0 - cfg.friction * dt)

        self.angle += self.rotation * cfg.turn_speed_rad * dt

        self.position = wrap_position(self.position + self.velocity * dt, self.radius, width, height)
        return False

    def _update_invincibility(self, dt: float):
        self.invincible_timer -= dt
        if self.invincible_timer <= 0:
            self.invincible_timer = 0.0
            self.blink_timer = 0.0
            self.state = ShipState.ALIVE
            self.visible = True
            return

        self.blink_timer -= dt
        while self.blink_timer <= 0:
            self.visible = not self.visible
            self.blink_timer += self.config.ship_blink_dur
