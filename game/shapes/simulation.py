"""
World state and the fixed-order simulation tick
-----------------------------------------------
One ``World`` holds every entity collection plus the simulation clock.
``World.step`` advances it by one tick:

1. player (timed effects, then held-direction movement)
2. opponents and boss (movement, then aimed shooting)
3. bullets, culled once outside the arena
4. power-ups, culled once below the arena
5. collisions (kills, hits, pickups, boss trigger, victory/defeat)
6. dead-marker expiry

Timed effects are stored as expires-at timestamps and checked in step 1,
so nothing is scheduled outside the tick.
"""

from __future__ import annotations

import logging
import random
from typing import Dict, List, Optional

from .entities import (
    Bullet,
    BulletOwner,
    DeadMarker,
    Enemy,
    InputState,
    Player,
    PowerUp,
    PowerUpType,
)
from .settings import GameSettings
from .spawner import Spawner
from .utils import clamp, normalize, out_of_arena, overlaps

logger = logging.getLogger(__name__)

OUTCOME_VICTORY = "victory"
OUTCOME_DEFEAT = "defeat"

EVENT_KEYS = ("kill", "boss_kill", "life_lost", "powerup", "shot")


class World:
    """All mutable game state for one session"""

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        rng: Optional[random.Random] = None,
    ):
        self.settings = settings or GameSettings()
        self.spawner = Spawner(self.settings, rng)

        self.now_ms = 0.0
        self.player: Player = None  # type: ignore
        self.enemies: List[Enemy] = []
        self.player_bullets: List[Bullet] = []
        self.enemy_bullets: List[Bullet] = []
        self.power_ups: List[PowerUp] = []
        self.markers: List[DeadMarker] = []

        self.score = 0
        self.boss_spawned = False
        self.outcome: Optional[str] = None

        # Event counters of the last tick, read by adapters (rewards, persistence)
        self.events: Dict[str, float] = {}
        # Shots fired between ticks, folded into the next tick's events
        self._pending_shots = 0

        self.reset()

    @property
    def rng(self) -> random.Random:
        return self.spawner.rng

    def reset(self):
        """Fresh world: new player, empty collections, one opponent"""
        s = self.settings
        x, y = s.player_start
        self.player = Player(x=x, y=y, size=s.player_size, lives=s.initial_lives)
        self.enemies = []
        self.player_bullets = []
        self.enemy_bullets = []
        self.power_ups = []
        self.markers = []
        self.score = 0
        self.boss_spawned = False
        self.outcome = None
        self.events = dict.fromkeys(EVENT_KEYS, 0.0)
        self._pending_shots = 0

        self.enemies.append(self.spawner.spawn_opponent(self.now_ms))

    @property
    def bosses(self) -> List[Enemy]:
        return [e for e in self.enemies if e.is_boss]

    @property
    def opponents(self) -> List[Enemy]:
        return [e for e in self.enemies if not e.is_boss]

    @property
    def bullets(self) -> List[Bullet]:
        return self.player_bullets + self.enemy_bullets

    # ----------------------------
    # Tick
    # ----------------------------

    def step(self, inputs: Optional[InputState] = None, dt_ms: float = 1000 / 60) -> Dict[str, float]:
        """Advance one tick and return the event counters it produced"""
        self.now_ms += dt_ms
        self.events = dict.fromkeys(EVENT_KEYS, 0.0)
        self.events["shot"] = float(self._pending_shots)
        self._pending_shots = 0

        self._update_player(inputs or InputState())
        self._update_enemies()
        self._update_bullets()
        self._update_power_ups()
        self._handle_collisions()
        self._purge_markers()
        return self.events

    def player_shoot(self) -> bool:
        """Fire straight up if the cooldown allows; returns whether a bullet left"""
        p = self.player
        if p.is_dead:
            return False

        s = self.settings
        cooldown = s.rapid_fire_cooldown_ms if p.has_rapid_fire else s.shoot_cooldown_ms
        if p.last_shot_ms is not None and self.now_ms - p.last_shot_ms <= cooldown:
            return False

        self.player_bullets.append(Bullet(
            x=p.x,
            y=p.y - p.size / 2,
            vx=0.0,
            vy=-s.bullet_speed,
            owner=BulletOwner.PLAYER,
            size=s.bullet_size,
        ))
        p.last_shot_ms = self.now_ms
        self._pending_shots += 1
        return True

    # ----------------------------
    # Phases
    # ----------------------------

    def _expire_effects(self):
        p = self.player
        now = self.now_ms

        if p.shield_until_ms is not None and now >= p.shield_until_ms:
            p.shield_until_ms = None
        if p.rapid_fire_until_ms is not None and now >= p.rapid_fire_until_ms:
            p.rapid_fire_until_ms = None

        if p.is_dead and p.respawn_at_ms is not None and now >= p.respawn_at_ms:
            p.x, p.y = self.settings.player_start
            p.is_dead = False
            p.respawn_at_ms = None

    def _update_player(self, inputs: InputState):
        self._expire_effects()

        p = self.player
        if p.is_dead:
            return

        s = self.settings
        half = p.size / 2
        # Axes are independent; opposite keys both apply
        if inputs.up:
            p.y = max(half, p.y - s.player_speed)
        if inputs.down:
            p.y = min(s.height - half, p.y + s.player_speed)
        if inputs.left:
            p.x = max(half, p.x - s.player_speed)
        if inputs.right:
            p.x = min(s.width - half, p.x + s.player_speed)

    def _update_enemies(self):
        width = self.settings.width
        for e in self.enemies:
            half = e.size / 2
            e.x += e.speed * e.direction

            # Flip before clamping so the bounce happens on the boundary tick
            if e.x <= half or e.x >= width - half:
                e.direction *= -1
            e.x = clamp(e.x, half, width - half)

            if self.now_ms - e.last_shot_ms > e.shoot_interval_ms and not self.player.is_dead:
                self._enemy_shoot(e)
                e.last_shot_ms = self.now_ms

    def _enemy_shoot(self, e: Enemy):
        dx = self.player.x - e.x
        dy = self.player.y - e.y
        nx, ny = normalize(dx, dy)
        if nx == 0.0 and ny == 0.0:
            return

        speed = self.settings.enemy_bullet_speed
        self.enemy_bullets.append(Bullet(
            x=e.x,
            y=e.y + e.size / 2,
            vx=nx * speed,
            vy=ny * speed,
            owner=BulletOwner.ENEMY,
            size=self.settings.bullet_size,
        ))

    def _update_bullets(self):
        s = self.settings
        for b in self.bullets:
            b.x += b.vx
            b.y += b.vy

        self.player_bullets = [
            b for b in self.player_bullets if not out_of_arena(b.x, b.y, s.width, s.height)
        ]
        self.enemy_bullets = [
            b for b in self.enemy_bullets if not out_of_arena(b.x, b.y, s.width, s.height)
        ]

    def _update_power_ups(self):
        for pu in self.power_ups:
            pu.y += pu.vy
        self.power_ups = [pu for pu in self.power_ups if pu.y <= self.settings.height]

    def _handle_collisions(self):
        # Player bullets vs enemies: one target per bullet
        remaining_bullets = []
        for b in self.player_bullets:
            target = next((e for e in self.enemies if overlaps(b, e)), None)
            if target is None:
                remaining_bullets.append(b)
            else:
                self._kill_enemy(target)
        self.player_bullets = remaining_bullets

        if self.outcome is not None:
            return

        p = self.player

        # Enemy bullets vs player; a shield skips the check so bullets fly through
        if not p.is_dead and not p.has_shield:
            hits = [b for b in self.enemy_bullets if overlaps(b, p)]
            if hits:
                # Every overlapping bullet is spent, the player takes one hit
                self.enemy_bullets = [b for b in self.enemy_bullets if not overlaps(b, p)]
                self._hit_player()

        # Power-ups vs player
        if not p.is_dead:
            remaining_power_ups = []
            for pu in self.power_ups:
                if overlaps(pu, p):
                    self._activate_power_up(pu.type)
                else:
                    remaining_power_ups.append(pu)
            self.power_ups = remaining_power_ups

    def _purge_markers(self):
        duration = self.settings.marker_duration_ms
        self.markers = [m for m in self.markers if self.now_ms - m.death_ms < duration]

    # ----------------------------
    # Collision outcomes
    # ----------------------------

    def _kill_enemy(self, e: Enemy):
        s = self.settings
        self.enemies.remove(e)
        self.markers.append(DeadMarker(x=e.x, y=e.y, death_ms=self.now_ms, kind=e.kind, size=e.size))
        self.score += 1
        self.events["kill"] += 1.0

        if e.is_boss:
            self.events["boss_kill"] += 1.0
            self._drop_power_up(e, s.powerup_chance_boss)
            if not self.bosses and self.player.lives > 0 and self.outcome is None:
                self.outcome = OUTCOME_VICTORY
            return

        if not self.boss_spawned:
            self.boss_spawned = True
            self.enemies.append(self.spawner.spawn_boss(self.now_ms))

        self._drop_power_up(e, s.powerup_chance_opponent)

        if self.spawner.should_replenish():
            self.enemies.append(self.spawner.spawn_opponent(self.now_ms))

    def _drop_power_up(self, e: Enemy, chance: float):
        pu = self.spawner.maybe_power_up(e.x, e.y, chance)
        if pu is not None:
            self.power_ups.append(pu)

    def _hit_player(self):
        p = self.player
        p.lives = max(0, p.lives - 1)
        p.is_dead = True
        self.events["life_lost"] += 1.0

        if p.lives == 0:
            self.outcome = OUTCOME_DEFEAT
        else:
            p.respawn_at_ms = self.now_ms + self.settings.death_duration_ms
            logger.debug("Player down, %d lives left", p.lives)

    def _activate_power_up(self, kind: PowerUpType):
        p = self.player
        s = self.settings
        # Re-granting resets the expiry, it never extends it
        if kind is PowerUpType.SHIELD:
            p.shield_until_ms = self.now_ms + s.shield_duration_ms
        elif kind is PowerUpType.RAPID_FIRE:
            p.rapid_fire_until_ms = self.now_ms + s.rapid_fire_duration_ms
        elif kind is PowerUpType.HEALTH:
            p.lives += 1
        self.events["powerup"] += 1.0
        logger.debug("Picked up %s", kind.value)
