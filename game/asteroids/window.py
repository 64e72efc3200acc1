"""
Arcade window: draws the game and, when interactive, turns keys into input events

Drawing only reads the GameState. All timing and rules live in the
GameController; this module never mutates ship, bullets or asteroids.
"""

from __future__ import annotations

import math
from typing import List, Optional, Tuple

import arcade
import numpy as np

from .game_state import GameController, InputEvent
from .highscores import HighScoreTable

Point = Tuple[float, float]


def ship_points(x: float, y: float, angle: float, r: float, scale: float = 1.0) -> List[Point]:
    """Nose, rear-left, rear-right of the ship triangle"""
    c, s = math.cos(angle), math.sin(angle)
    return [
        (x + r * c, y + r * s),
        (x - r * (c + s) * scale, y - r * (s - c) * scale),
        (x - r * (c - s) * scale, y - r * (s + c) * scale),
    ]


def flame_points(x: float, y: float, angle: float, r: float) -> List[Point]:
    c, s = math.cos(angle), math.sin(angle)
    return [
        (x - r * (c + 0.5 * s) * 1.6, y - r * (s - 0.5 * c) * 1.6),
        (x - r * (c + s) * 0.7, y - r * (s - c) * 0.7),
        (x - r * (c - s) * 0.7, y - r * (s + c) * 0.7),
    ]


class AsteroidsWindow(arcade.Window):
    """Arcade window for playing or watching the asteroids game"""

    def __init__(
        self,
        controller: GameController,
        visible: bool = True,
        interactive: bool = True,
        highscores: Optional[HighScoreTable] = None,
        show_bounding: bool = False,
        title: str = "Asteroids - Arcade",
    ):
        cfg = controller.config
        super().__init__(cfg.width, cfg.height, title, visible=visible)
        self.controller = controller
        self.interactive = interactive
        self.highscores = highscores
        self.show_bounding = show_bounding

        # Held keys, so releasing one rotation key falls back to the other
        self._left = False
        self._right = False

        # Initials entry after a qualifying game over
        self._entering_initials = False
        self._initials = ""
        self._last_rank: Optional[int] = None

        # Colors
        self.BG = arcade.color.BLACK
        self.SHIP_C = arcade.color.WHITE
        self.FLAME_C = (255, 60, 40)
        self.BULLET_C = (255, 80, 80)
        self.ASTEROID_C = arcade.color.SLATE_GRAY
        self.BOUND_C = arcade.color.LIME_GREEN
        self.HUD_C = (220, 220, 220)

    # ----------------------------
    # Simulation hook
    # ----------------------------

    def on_update(self, delta_time: float):
        if not self.interactive:
            return
        events = self.controller.tick(delta_time)
        if events.level_up:
            print(f"[AsteroidsWindow] Level {self.controller.level}")
        if events.game_over:
            score = self.controller.score
            print(f"[AsteroidsWindow] Game over - final score {score}")
            if self.highscores is not None and score > 0 and self.highscores.is_top_score(score):
                self._entering_initials = True
                self._initials = ""

    # ----------------------------
    # Input
    # ----------------------------

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == arcade.key.ESCAPE:
            self.close()
            return
        if not self.interactive:
            return
        if self._entering_initials:
            self._type_initial(symbol)
            return

        game = self.controller
        if game.game_over:
            if symbol == arcade.key.R:
                self._last_rank = None
                game.handle_event(InputEvent.RESTART)
            return

        if symbol == arcade.key.LEFT:
            self._left = True
            game.handle_event(InputEvent.ROTATE_LEFT)
        elif symbol == arcade.key.RIGHT:
            self._right = True
            game.handle_event(InputEvent.ROTATE_RIGHT)
        elif symbol == arcade.key.UP:
            game.handle_event(InputEvent.THRUST_START)
        elif symbol == arcade.key.SPACE:
            game.handle_event(InputEvent.FIRE)
        elif symbol in (arcade.key.LCTRL, arcade.key.RCTRL, arcade.key.H):
            game.handle_event(InputEvent.HYPERSPACE)

    def on_key_release(self, symbol: int, modifiers: int):
        if not self.interactive:
            return
        game = self.controller
        if symbol == arcade.key.LEFT:
            self._left = False
            game.handle_event(InputEvent.ROTATE_RIGHT if self._right else InputEvent.ROTATE_STOP)
        elif symbol == arcade.key.RIGHT:
            self._right = False
            game.handle_event(InputEvent.ROTATE_LEFT if self._left else InputEvent.ROTATE_STOP)
        elif symbol == arcade.key.UP:
            game.handle_event(InputEvent.THRUST_STOP)

    def _type_initial(self, symbol: int):
        if symbol in (arcade.key.ENTER, arcade.key.RETURN) and self._initials:
            score = self.controller.score
            self._last_rank = self.highscores.submit(self._initials, score)
            self._entering_initials = False
            if self._last_rank is None:
                return
            self.highscores.save()
            print(f"[AsteroidsWindow] Saved {self._initials} {score} "
                  f"as #{self._last_rank + 1} to {self.highscores.path}")
        elif symbol == arcade.key.BACKSPACE:
            self._initials = self._initials[:-1]
        elif arcade.key.A <= symbol <= arcade.key.Z and len(self._initials) < 3:
            self._initials += chr(symbol).upper()

    # ----------------------------
    # Drawing
    # ----------------------------

    def on_draw(self):
        """Draw the current game state"""
        self.clear()
        arcade.set_background_color(self.BG)
        state = self.controller.state

        for a in state.asteroids:
            outline = a.outline()
            if len(outline) >= 3:
                arcade.draw_polygon_outline(outline, self.ASTEROID_C, 2)
            if self.show_bounding:
                arcade.draw_circle_outline(a.position.x, a.position.y, a.radius, self.BOUND_C)

        for b in state.bullets:
            arcade.draw_circle_filled(b.position.x, b.position.y, b.radius, self.BULLET_C)

        if not state.game_over:
            self._draw_ship()

        self._draw_hud()

    def _draw_ship(self):
        ship = self.controller.state.ship
        cfg = self.controller.config
        x, y, r = ship.position.x, ship.position.y, ship.radius

        if ship.exploding:
            progress = (cfg.ship_explode_dur - ship.explode_timer) / cfg.ship_explode_dur
            for grow, color in ((2.0, arcade.color.DARK_RED), (1.0, arcade.color.RED), (0.5, arcade.color.ORANGE)):
                arcade.draw_circle_filled(x, y, r * (1 + progress * grow), color)
            return

        if not ship.visible:
            return

        arcade.draw_polygon_outline(ship_points(x, y, ship.angle, r), self.SHIP_C, max(1, cfg.ship_size / 20))
        if ship.thrusting:
            arcade.draw_polygon_filled(flame_points(x, y, ship.angle, r), self.FLAME_C)
        if self.show_bounding:
            arcade.draw_circle_outline(x, y, r, self.BOUND_C)

    def _draw_hud(self):
        game = self.controller
        arcade.draw_text(f"Score: {game.score}", 10, self.height - 30, self.HUD_C, 16)
        arcade.draw_text(f"Level: {game.level}", self.width / 2, self.height - 30, self.HUD_C, 16,
                         anchor_x="center")
        arcade.draw_text(f"Lives: {game.lives}", self.width - 10, self.height - 30, self.HUD_C, 16,
                         anchor_x="right")

        if not game.game_over:
            return

        cx, cy = self.width / 2, self.height / 2
        arcade.draw_text("GAME OVER", cx, cy + 40, arcade.color.WHITE, 50, anchor_x="center")
        if self._entering_initials:
            arcade.draw_text(f"New high score! Initials: {self._initials:_<3}", cx, cy - 10,
                             self.HUD_C, 20, anchor_x="center")
            arcade.draw_text("Type 3 letters, Enter to save", cx, cy - 40, self.HUD_C, 14,
                             anchor_x="center")
            return
        arcade.draw_text("Press R to Restart", cx, cy - 10, self.HUD_C, 20, anchor_x="center")
        if self.highscores is not None:
            for i, entry in enumerate(self.highscores.entries):
                marker = " <" if i == self._last_rank else ""
                arcade.draw_text(f"{i + 1}. {entry.initials}  {entry.score}{marker}",
                                 cx, cy - 60 - i * 24, self.HUD_C, 16, anchor_x="center")

    def capture_rgb(self) -> np.ndarray:
        """Draw once and return the frame as an HxWx3 uint8 array"""
        self.on_draw()
        image = arcade.get_image(0, 0, self.width, self.height)
        return np.asarray(image.convert("RGB"), dtype=np.uint8)
