"""
Gameplay constants, overridable from a plain dict (see game/configs/shooter_config.py)
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class GameSettings:
    # Arena
    width: float = 800.0
    height: float = 600.0

    # Sizes (square hit boxes)
    player_size: float = 40.0
    opponent_size: float = 35.0
    boss_size: float = 50.0
    bullet_size: float = 8.0
    powerup_size: float = 20.0

    # Per-tick speeds
    player_speed: float = 5.0
    opponent_speed: float = 2.0
    boss_speed: float = 4.0
    bullet_speed: float = 7.0
    enemy_bullet_factor: float = 0.7
    powerup_fall_speed: float = 2.0

    # Player
    initial_lives: int = 3
    death_duration_ms: float = 2000.0
    shoot_cooldown_ms: float = 300.0
    rapid_fire_cooldown_ms: float = 150.0
    start_offset_y: float = 50.0  # distance of the spawn point from the bottom edge

    # Enemies
    opponent_interval_min_ms: float = 2000.0
    opponent_interval_max_ms: float = 3000.0
    first_shot_stagger_ms: float = 2000.0
    boss_interval_ms: float = 1500.0
    spawn_band_top: float = 50.0
    spawn_band_bottom: float = 150.0
    boss_spawn_y: float = 80.0

    # Drops and replenishment
    powerup_chance_opponent: float = 0.3
    powerup_chance_boss: float = 0.7
    replacement_chance: float = 0.5

    # Timed effects
    shield_duration_ms: float = 5000.0
    rapid_fire_duration_ms: float = 5000.0
    marker_duration_ms: float = 2000.0

    @property
    def player_start(self):
        return self.width / 2, self.height - self.start_offset_y

    @property
    def enemy_bullet_speed(self) -> float:
        return self.bullet_speed * self.enemy_bullet_factor

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]] = None) -> "GameSettings":
        """Build settings from a dict, rejecting unknown keys"""
        data = dict(data or {})
        known = {f.name for f in fields(cls)}
        for key in data:
            if key not in known:
                raise KeyError(f"Unknown game setting: {key}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
