"""
Arcade window - draws a ShapeShooter snapshot and turns keys into game input
"""

from __future__ import annotations

import math

import arcade

from .entities import EnemyKind
from .session import ShapeShooter, Snapshot
from .shooter_env import COLORS
from .state import GamePhase

DIRECTION_KEYS = {
    arcade.key.UP: "up",
    arcade.key.W: "up",
    arcade.key.DOWN: "down",
    arcade.key.S: "down",
    arcade.key.LEFT: "left",
    arcade.key.A: "left",
    arcade.key.RIGHT: "right",
    arcade.key.D: "right",
}

PAUSE_KEYS = (arcade.key.P, arcade.key.ESCAPE)
CONFIRM_KEYS = (arcade.key.RETURN, arcade.key.ENTER)

INSTRUCTIONS = (
    "Arrows / WASD to move",
    "Space to shoot, P to pause",
    "Destroy the enemies",
    "Defeat the boss to win!",
    "",
    "Power-ups:",
    "Yellow - Shield (invincibility)",
    "Red - Rapid fire",
    "Green - Extra life",
)


class ShooterWindow(arcade.Window):
    """
    Arcade window for the shooter.

    With ``interactive=True`` the window owns the frame loop: ``on_update``
    ticks the session and key events drive it. With ``interactive=False``
    (env rendering) it only draws.
    """

    def __init__(self, game: ShapeShooter, interactive: bool = True, title: str = "Shape Shooter"):
        super().__init__(int(game.settings.width), int(game.settings.height), title)
        self.game = game
        self.interactive = interactive
        self.background_color = COLORS["background"]
        self.HUD_C = (220, 220, 220)

    # ----------------------------
    # Input
    # ----------------------------

    def on_key_press(self, symbol: int, modifiers: int):
        if not self.interactive:
            return

        if symbol in DIRECTION_KEYS:
            self.game.set_direction(DIRECTION_KEYS[symbol], True)
        elif symbol == arcade.key.SPACE:
            self.game.shoot()
        elif symbol in PAUSE_KEYS:
            self.game.toggle_pause()
        elif symbol in CONFIRM_KEYS:
            if self.game.phase is GamePhase.INSTRUCTIONS:
                self.game.start()
            elif self.game.is_game_over:
                self.game.restart()

    def on_key_release(self, symbol: int, modifiers: int):
        if self.interactive and symbol in DIRECTION_KEYS:
            self.game.set_direction(DIRECTION_KEYS[symbol], False)

    def on_update(self, delta_time: float):
        if self.interactive:
            self.game.tick(delta_time * 1000)

    # ----------------------------
    # Drawing
    # ----------------------------

    def _sy(self, y: float) -> float:
        # World y grows downward, arcade y grows upward
        return self.height - y

    def on_draw(self):
        self.clear()
        snap = self.game.snapshot()

        for m in snap.markers:
            self._draw_star(m.x, m.y, m.size)
        for pu in snap.power_ups:
            arcade.draw_circle_filled(pu.x, self._sy(pu.y), pu.size / 2, COLORS[pu.type])
        for e in snap.enemies:
            if e.kind is EnemyKind.BOSS:
                self._draw_pentagon(e.x, e.y, e.size)
            else:
                self._draw_triangle(e.x, e.y, e.size)
        for b in snap.player_bullets:
            arcade.draw_circle_filled(b.x, self._sy(b.y), b.size / 2, COLORS["player_bullet"])
        for b in snap.enemy_bullets:
            arcade.draw_circle_filled(b.x, self._sy(b.y), b.size / 2, COLORS["enemy_bullet"])

        self._draw_player(snap)
        self._draw_hud(snap)

        if snap.phase is GamePhase.INSTRUCTIONS:
            self._draw_overlay("SHAPE SHOOTER", INSTRUCTIONS + ("", "Press Enter to start"))
        elif snap.phase is GamePhase.GAME_OVER:
            title = "YOU WIN!" if snap.victory else "GAME OVER"
            self._draw_overlay(title, (
                f"Final Score: {snap.score}",
                f"High Score: {snap.high_score}",
                "",
                "Press Enter to play again",
            ))

    def _draw_player(self, snap: Snapshot):
        p = snap.player
        half = p.size / 2
        left, right = p.x - half, p.x + half
        bottom, top = self._sy(p.y + half), self._sy(p.y - half)

        alpha = 77 if p.is_dead else 255
        arcade.draw_lrbt_rectangle_filled(left, right, bottom, top, COLORS["player"] + (alpha,))
        if p.has_shield:
            arcade.draw_lrbt_rectangle_outline(left, right, bottom, top, COLORS["star"], 3)

        # Eyes and mouth
        dark = COLORS["dark"] + (alpha,)
        arcade.draw_lrbt_rectangle_filled(p.x - 10, p.x - 4, self._sy(p.y - 2), self._sy(p.y - 8), dark)
        arcade.draw_lrbt_rectangle_filled(p.x + 4, p.x + 10, self._sy(p.y - 2), self._sy(p.y - 8), dark)
        arcade.draw_lrbt_rectangle_filled(p.x - 8, p.x + 8, self._sy(p.y + 9), self._sy(p.y + 5), dark)

    def _draw_triangle(self, x: float, y: float, size: float):
        half = size / 2
        points = [
            (x, self._sy(y - half)),
            (x - half, self._sy(y + half)),
            (x + half, self._sy(y + half)),
        ]
        arcade.draw_polygon_filled(points, COLORS["opponent"])

    def _draw_pentagon(self, x: float, y: float, size: float):
        points = []
        for i in range(5):
            angle = (math.pi * 2 / 5) * i - math.pi / 2
            points.append((x + math.cos(angle) * size / 2, self._sy(y + math.sin(angle) * size / 2)))
        arcade.draw_polygon_filled(points, COLORS["boss"])

    def _draw_star(self, x: float, y: float, size: float):
        spikes = 5
        outer, inner = size / 2, size / 4
        points = []
        for i in range(spikes * 2):
            radius = outer if i % 2 == 0 else inner
            angle = (math.pi / spikes) * i - math.pi / 2
            points.append((x + math.cos(angle) * radius, self._sy(y + math.sin(angle) * radius)))
        arcade.draw_polygon_filled(points, COLORS["star"])

    def _draw_hud(self, snap: Snapshot):
        arcade.draw_lrbt_rectangle_filled(0, self.width, self.height - 28, self.height, COLORS["ui"])
        txt = (f"Score: {snap.score}   "
               f"High: {snap.high_score}   "
               f"Lives: {snap.lives}")
        arcade.draw_text(txt, 12, self.height - 20, self.HUD_C, 14)
        if snap.phase is GamePhase.PAUSED:
            arcade.draw_text("PAUSED", self.width - 90, self.height - 20, self.HUD_C, 14)

    def _draw_overlay(self, title: str, lines):
        arcade.draw_lrbt_rectangle_filled(0, self.width, 0, self.height, COLORS["dark"] + (210,))
        cx = self.width / 2
        y = self.height * 0.75
        arcade.draw_text(title, cx, y, COLORS["star"], 32, anchor_x="center")
        for line in lines:
            y -= 26
            arcade.draw_text(line, cx, y, self.HUD_C, 16, anchor_x="center")
