"""
Game progression controller
---------------------------
Owns the whole simulation state and advances it one tick at a time:

    queued actions -> ship -> bullets -> asteroids -> collisions -> level check

Input handlers may run at any time relative to the tick. They only flip
ship control flags or queue one-shot actions (fire, hyperspace); queued
actions are applied at the start of the next tick so no collection is
mutated while it is being iterated.
"""

from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Deque, Dict, List, Optional

from .collision import find_bullet_hits, find_ship_hit
from .config import GameConfig
from .entities import Asteroid, Bullet
from .ship import Ship
from .spawning import points_for, spawn_level, split


class InputEvent(Enum):
    ROTATE_LEFT = "rotate_left"
    ROTATE_RIGHT = "rotate_right"
    ROTATE_STOP = "rotate_stop"
    THRUST_START = "thrust_start"
    THRUST_STOP = "thrust_stop"
    FIRE = "fire"
    HYPERSPACE = "hyperspace"
    START_GAME = "start_game"
    RESTART = "restart"


ONE_SHOT_EVENTS = (InputEvent.FIRE, InputEvent.HYPERSPACE)


@dataclass
class TickEvents:
    """Outcomes of a single tick, consumed by the HUD and the RL reward"""
    score_delta: int = 0
    asteroids_destroyed: int = 0
    bullets_fired: int = 0
    life_lost: bool = False
    level_up: bool = False
    game_over: bool = False


@dataclass
class GameState:
    """Everything that changes during a game"""
    ship: Ship
    bullets: List[Bullet] = field(default_factory=list)
    asteroids: List[Asteroid] = field(default_factory=list)
    score: int = 0
    lives: int = 3
    level: int = 0
    game_over: bool = False


class GameController:
    """Drives ticks and owns the GameState; nothing else mutates it"""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or GameConfig()
        self.rng = rng if rng is not None else random.Random(seed)
        self._pending: Deque[InputEvent] = deque()
        self.state: GameState = None  # type: ignore
        self.new_game()

    # ----------------------------
    # Read-only views
    # ----------------------------

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def lives(self) -> int:
        return self.state.lives

    @property
    def level(self) -> int:
        return self.state.level

    @property
    def game_over(self) -> bool:
        return self.state.game_over

    def hud(self) -> Dict[str, Any]:
        return {
            "score": self.state.score,
            "lives": self.state.lives,
            "level": self.state.level,
            "game_over": self.state.game_over,
        }

    # ----------------------------
    # Game / level start
    # ----------------------------

    def new_game(self):
        """Full reset: new ship, empty field, counters back to their start values"""
        self.state = GameState(ship=Ship.spawn(self.config), lives=self.config.start_lives)
        self._pending.clear()
        self.next_level()

    def next_level(self):
        s = self.state
        s.level += 1
        s.ship.respawn()
        s.asteroids = spawn_level(s.level, s.ship, self.rng, self.config)

    # ----------------------------
    # Input
    # ----------------------------

    def handle_event(self, event: InputEvent):
        s = self.state
        if event is InputEvent.START_GAME:
            self.new_game()
            return
        if event is InputEvent.RESTART:
            if s.game_over:
                self.new_game()
            return
        if s.game_over:
            return

        if event in ONE_SHOT_EVENTS:
            self._pending.append(event)
        elif s.ship.exploding:
            # No steering while the wreck burns out
            return
        elif event is InputEvent.ROTATE_LEFT:
            s.ship.rotation = 1
        elif event is InputEvent.ROTATE_RIGHT:
            s.ship.rotation = -1
        elif event is InputEvent.ROTATE_STOP:
            s.ship.rotation = 0
        elif event is InputEvent.THRUST_START:
            s.ship.thrusting = True
        elif event is InputEvent.THRUST_STOP:
            s.ship.thrusting = False

    def _apply_pending(self, events: TickEvents):
        s = self.state
        while self._pending:
            event = self._pending.popleft()
            if event is InputEvent.FIRE:
                bullet = s.ship.shoot(len(s.bullets))
                if bullet is not None:
                    s.bullets.append(bullet)
                    events.bullets_fired += 1
            elif event is InputEvent.HYPERSPACE:
                s.ship.hyperspace(self.rng)

    # ----------------------------
    # Tick
    # ----------------------------

    def tick(self, dt: float) -> TickEvents:
        """Advance the simulation by `dt` seconds. A finished game does not change."""
        events = TickEvents()
        s = self.state
        if s.game_over:
            self._pending.clear()
            return events

        w, h = self.config.width, self.config.height

        self._apply_pending(events)

        if s.ship.update(dt, w, h):
            self._on_explosion_finished(events)
            if s.game_over:
                return events

        for b in s.bullets:
            b.update(dt, w, h)
        s.bullets = [b for b in s.bullets if not b.expired]

        for a in s.asteroids:
            a.update(dt, w, h)

        self._handle_collisions(events)

        if not s.asteroids and not s.ship.exploding:
            self.next_level()
            events.level_up = True

        return events

    def _on_explosion_finished(self, events: TickEvents):
        s = self.state
        s.lives -= 1
        events.life_lost = True
        if s.lives <= 0:
            s.lives = 0
            s.game_over = True
            events.game_over = True
        else:
            s.ship.respawn()

    def _handle_collisions(self, events: TickEvents):
        s = self.state

        # Ship vs asteroids: at most one hit per tick, first in list order
        j = find_ship_hit(s.ship, s.asteroids)
        if j is not None:
            s.ship.explode()
            asteroid = s.asteroids.pop(j)
            s.asteroids.extend(self._destroy(asteroid, events))

        # Bullets vs asteroids
        hits = find_bullet_hits(s.bullets, s.asteroids)
        if not hits:
            return
        dead_bullets = {i for i, _ in hits}
        dead_asteroids = {j for _, j in hits}
        children: List[Asteroid] = []
        for _, j in hits:
            children.extend(self._destroy(s.asteroids[j], events))
        s.bullets = [b for i, b in enumerate(s.bullets) if i not in dead_bullets]
        s.asteroids = [a for j, a in enumerate(s.asteroids) if j not in dead_asteroids]
        s.asteroids.extend(children)

    def _destroy(self, asteroid: Asteroid, events: TickEvents) -> List[Asteroid]:
        """Award points for `asteroid` and return its fragments"""
        points = points_for(asteroid.tier, self.config)
        self.state.score += points
        events.score_delta += points
        events.asteroids_destroyed += 1
        return split(asteroid, self.rng, self.config)
