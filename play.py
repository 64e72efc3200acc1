#!/usr/bin/env python
"""
Play asteroids with the keyboard

Controls:
    LEFT / RIGHT   rotate
    UP             thrust
    SPACE          fire
    CTRL or H      hyperspace
    R              restart after game over
    ESC            quit

Usage:
    python play.py --seed 7 --highscores highscores.json
"""

import argparse

import arcade

from game.asteroids import GameConfig, GameController, HighScoreTable
from game.asteroids.window import AsteroidsWindow
from rl.configs.asteroids_config import GAME_CONFIG


def main():
    parser = argparse.ArgumentParser(description="Play asteroids")
    parser.add_argument("--width", type=int, default=800, help="Playfield width (default: 800)")
    parser.add_argument("--height", type=int, default=600, help="Playfield height (default: 600)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for asteroid spawns")
    parser.add_argument(
        "--highscores",
        type=str,
        default="highscores.json",
        help="High-score file (default: highscores.json)",
    )
    parser.add_argument("--show-bounding", action="store_true", help="Draw collision circles")

    args = parser.parse_args()

    config = GameConfig.from_dict({**GAME_CONFIG, "width": args.width, "height": args.height})
    controller = GameController(config, seed=args.seed)

    highscores = HighScoreTable(args.highscores)
    highscores.load()
    print(f"[play] Loaded {len(highscores.entries)} high scores from {args.highscores}")
    for i, entry in enumerate(highscores.entries):
        print(f"  {i + 1}. {entry.initials}  {entry.score}")

    AsteroidsWindow(controller, highscores=highscores, show_bounding=args.show_bounding)
    arcade.run()


if __name__ == "__main__":
    main()
