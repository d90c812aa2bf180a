"""
Spawner - opponents, the boss and power-up drops with randomized placement
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from .entities import Enemy, EnemyKind, PowerUp, PowerUpType
from .settings import GameSettings

logger = logging.getLogger(__name__)

POWERUP_TYPES = (PowerUpType.SHIELD, PowerUpType.RAPID_FIRE, PowerUpType.HEALTH)


class Spawner:
    """
    Creates entities from an injectable random source.

    Every random draw goes through ``self.rng`` so a seeded ``random.Random``
    reproduces the same placements, directions and shoot timings.
    """

    def __init__(self, settings: GameSettings, rng: Optional[random.Random] = None):
        self.settings = settings
        self.rng = rng if rng is not None else random.Random()

    def _direction(self) -> int:
        return 1 if self.rng.random() > 0.5 else -1

    def _first_shot(self, now_ms: float) -> float:
        # Pushing last-shot into the future staggers the first volley
        return now_ms + self.rng.random() * self.settings.first_shot_stagger_ms

    def spawn_opponent(self, now_ms: float) -> Enemy:
        s = self.settings
        size = s.opponent_size
        x = self.rng.random() * (s.width - size) + size / 2
        y = s.spawn_band_top + self.rng.random() * (s.spawn_band_bottom - s.spawn_band_top)
        interval = s.opponent_interval_min_ms + self.rng.random() * (
            s.opponent_interval_max_ms - s.opponent_interval_min_ms
        )
        enemy = Enemy(
            x=x,
            y=y,
            kind=EnemyKind.OPPONENT,
            size=size,
            speed=s.opponent_speed,
            direction=self._direction(),
            last_shot_ms=self._first_shot(now_ms),
            shoot_interval_ms=interval,
        )
        logger.debug("Spawned opponent at (%.1f, %.1f)", x, y)
        return enemy

    def spawn_boss(self, now_ms: float) -> Enemy:
        s = self.settings
        boss = Enemy(
            x=s.width / 2,
            y=s.boss_spawn_y,
            kind=EnemyKind.BOSS,
            size=s.boss_size,
            speed=s.boss_speed,
            direction=self._direction(),
            last_shot_ms=self._first_shot(now_ms),
            shoot_interval_ms=s.boss_interval_ms,
        )
        logger.info("Boss spawned")
        return boss

    def maybe_power_up(self, x: float, y: float, chance: float) -> Optional[PowerUp]:
        """Drop a power-up of uniformly random type with the given probability"""
        if self.rng.random() >= chance:
            return None
        kind = self.rng.choice(POWERUP_TYPES)
        logger.debug("Dropped %s power-up at (%.1f, %.1f)", kind.value, x, y)
        return PowerUp(
            x=x,
            y=y,
            type=kind,
            size=self.settings.powerup_size,
            vy=self.settings.powerup_fall_speed,
        )

    def should_replenish(self) -> bool:
        return self.rng.random() < self.settings.replacement_chance
