"""
AsteroidsEnv - the asteroids game as a Gymnasium environment
------------------------------------------------------------
- GameController runs the simulation, Arcade draws it (optional)
- Gymnasium API
- 1 RL agent flying the ship: rotate, thrust, fire, hyperspace
- Vector observation: ship state + K nearest asteroids
- MultiDiscrete action space: [rotate(3), thrust(2), fire(2), hyperspace(2)]

The env only turns actions into the same input events a keyboard would
send, so an agent plays by exactly the rules a human does.

Install:
    pip install gymnasium arcade numpy

Quick test:
    python -m game.asteroids.asteroids_env
"""

from __future__ import annotations

import math
from typing import Optional, Dict, Any

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import GameConfig
from .game_state import GameController, InputEvent, TickEvents
from .utils import clamp, seed_everything

DEFAULT_REWARD_CONFIG = {
    "name": "baseline",
    "R_SCORE": 0.01,      # per point scored
    "R_LEVEL": 5.0,       # clearing a level
    "R_LIFE": 3.0,        # penalty for losing a life
    "R_SHOT": 0.01,       # penalty per bullet fired
    "R_TIME": 0.001,      # small per-step penalty
    "R_GAME_OVER": 5.0,   # penalty when the last life is gone
}

SHIP_OBS = 9
ASTEROID_OBS = 5


class AsteroidsEnv(gym.Env):
    """Asteroids environment using the pure-Python simulation core"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        obs_mode: str = "vector",
        width: int = 800,
        height: int = 600,
        dt: float = 1 / 30,
        max_steps: int = 3600,  # 2 minutes at 30 FPS
        k_asteroids: int = 8,
        reward_config: Optional[Dict[str, Any]] = None,
        game_config: Optional[Dict[str, Any]] = None,
    ):
        super().__init__()

        assert obs_mode in ("vector",), "Only 'vector' observations are implemented."
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        assert dt > 0, "dt must be positive"
        self.render_mode = render_mode
        self.obs_mode = obs_mode

        overrides = dict(game_config or {})
        overrides.update(width=width, height=height)
        self.config = GameConfig.from_dict(overrides)

        self.width = width
        self.height = height
        self.dt = dt
        self.max_steps = max_steps
        self.k_asteroids = k_asteroids

        self.reward_config = dict(DEFAULT_REWARD_CONFIG)
        if reward_config:
            self.reward_config.update(reward_config)

        # Action space:
        # rotate: 0 none, 1 left, 2 right
        # thrust: 0/1
        # fire: 0/1
        # hyperspace: 0/1
        self.action_space = spaces.MultiDiscrete([3, 2, 2, 2])

        # Observation space (vector)
        # Ship: pos(2) vel(2) heading cos/sin(2) cooldown(1) invincible(1) exploding(1)
        # Each asteroid: rel pos(2) rel vel(2) radius(1)
        obs_dim = SHIP_OBS + self.k_asteroids * ASTEROID_OBS
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None

        self.game: GameController = None  # type: ignore
        self._step_count = 0
        self._events = TickEvents()

        # Episode totals for the metrics callback
        self._episode_shots = 0
        self._episode_kills = 0
        self._episode_lives_lost = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        # Global random/numpy state is for the training side; the game draws
        # only from its own generator below
        seed_everything(seed)

        # Derive the game's RNG from the env's seeded generator
        game_seed = int(self.np_random.integers(0, 2**31 - 1))
        self.game = GameController(self.config, seed=game_seed)

        self._step_count = 0
        self._events = TickEvents()
        self._episode_shots = 0
        self._episode_kills = 0
        self._episode_lives_lost = 0

        return self._get_obs(), self._get_info()

    def step(self, action):
        rotate, thrust, fire, hyper = (int(a) for a in action)

        self._apply_action(rotate, thrust, fire, hyper)
        self._events = self.game.tick(self.dt)

        self._episode_shots += self._events.bullets_fired
        self._episode_kills += self._events.asteroids_destroyed
        self._episode_lives_lost += int(self._events.life_lost)

        reward = self._compute_reward()

        terminated = self.game.game_over
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Core mechanics
    # ----------------------------

    def _apply_action(self, rotate: int, thrust: int, fire: int, hyper: int):
        game = self.game
        if rotate == 1:
            game.handle_event(InputEvent.ROTATE_LEFT)
        elif rotate == 2:
            game.handle_event(InputEvent.ROTATE_RIGHT)
        else:
            game.handle_event(InputEvent.ROTATE_STOP)

        game.handle_event(InputEvent.THRUST_START if thrust else InputEvent.THRUST_STOP)

        if fire:
            game.handle_event(InputEvent.FIRE)
        if hyper:
            game.handle_event(InputEvent.HYPERSPACE)

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        cfg = self.config
        ship = self.game.state.ship
        vmax = max(1e-6, cfg.bullet_speed)

        obs_parts = [
            clamp(ship.position.x / self.width * 2 - 1, -1, 1),
            clamp(ship.position.y / self.height * 2 - 1, -1, 1),
            clamp(ship.velocity.x / vmax, -1, 1),
            clamp(ship.velocity.y / vmax, -1, 1),
            math.cos(ship.angle),
            math.sin(ship.angle),
            clamp(ship.shoot_cooldown / max(1e-6, cfg.shoot_cooldown) * 2 - 1, -1, 1),
            1.0 if ship.invincible else -1.0,
            1.0 if ship.exploding else -1.0,
        ]

        # Asteroids: top-K nearest
        asteroids_sorted = sorted(
            self.game.state.asteroids,
            key=lambda a: (a.position.x - ship.position.x) ** 2 + (a.position.y - ship.position.y) ** 2,
        )
        large = max(1.0, cfg.asteroid_size / 2)
        for i in range(self.k_asteroids):
            if i < len(asteroids_sorted):
                a = asteroids_sorted[i]
                obs_parts += [
                    clamp((a.position.x - ship.position.x) / self.width, -1, 1),
                    clamp((a.position.y - ship.position.y) / self.height, -1, 1),
                    clamp((a.velocity.x - ship.velocity.x) / vmax, -1, 1),
                    clamp((a.velocity.y - ship.velocity.y) / vmax, -1, 1),
                    clamp(a.radius / large, 0, 1),
                ]
            else:
                obs_parts += [0.0] * ASTEROID_OBS

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self) -> float:
        rc = self.reward_config
        ev = self._events

        reward = 0.0
        reward += rc["R_SCORE"] * ev.score_delta
        if ev.level_up:
            reward += rc["R_LEVEL"]
        if ev.life_lost:
            reward -= rc["R_LIFE"]
        reward -= rc["R_SHOT"] * ev.bullets_fired
        reward -= rc["R_TIME"]
        if ev.game_over:
            reward -= rc["R_GAME_OVER"]

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        info = self.game.hud()
        info.update({
            "num_asteroids": len(self.game.state.asteroids),
            "num_bullets": len(self.game.state.bullets),
            "shots_fired": self._episode_shots,
            "asteroids_destroyed": self._episode_kills,
            "lives_lost": self._episode_lives_lost,
            "step": self._step_count,
        })
        return info

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        # Arcade needs a display, so it is only imported once rendering is asked for
        from .window import AsteroidsWindow

        if self._window is None:
            self._window = AsteroidsWindow(
                self.game,
                visible=self.render_mode == "human",
                interactive=False,
            )
        self._window.controller = self.game

        if self.render_mode == "human":
            self._window.on_draw()
            return None
        return self._window.capture_rgb()

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: int = 42):
    """Run a random episode for testing"""
    import time

    env = AsteroidsEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    print("Running episode... close the window to exit early.")

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

        if render and env._window:
            env._window.dispatch_events()
            env._window.flip()
            time.sleep(env.dt)

    print(f"Random episode return: {total:.2f}  "
          f"score={info['score']} level={info['level']} lives={info['lives']}")

    env.close()
    return total, info


if __name__ == "__main__":
    run_random_episode(render=True)
