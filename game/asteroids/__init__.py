"""Asteroids - simulation core, Gymnasium environment and Arcade window"""

from .config import GameConfig
from .game_state import GameController, GameState, InputEvent, TickEvents
from .highscores import HighScoreTable
from .asteroids_env import AsteroidsEnv, run_random_episode

__all__ = [
    'GameConfig',
    'GameController',
    'GameState',
    'InputEvent',
    'TickEvents',
    'HighScoreTable',
    'AsteroidsEnv',
    'run_random_episode',
]
