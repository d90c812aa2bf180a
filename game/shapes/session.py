"""
ShapeShooter - the lifecycle surface presentation adapters talk to
"""

from __future__ import annotations

import copy
import logging
import random
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .entities import Bullet, DeadMarker, Enemy, InputState, Player, PowerUp
from .highscore import MemoryHighScoreStore
from .settings import GameSettings
from .simulation import OUTCOME_VICTORY, World
from .state import GamePhase, GameStateMachine

logger = logging.getLogger(__name__)

DEFAULT_TICK_MS = 1000 / 60


@dataclass(frozen=True)
class Snapshot:
    """Read-only copy of everything a renderer needs for one frame"""
    player: Player
    enemies: Tuple[Enemy, ...]
    player_bullets: Tuple[Bullet, ...]
    enemy_bullets: Tuple[Bullet, ...]
    power_ups: Tuple[PowerUp, ...]
    markers: Tuple[DeadMarker, ...]
    score: int
    lives: int
    high_score: int
    phase: GamePhase
    victory: bool
    now_ms: float
    width: float
    height: float


class ShapeShooter:
    """
    One game session: world, lifecycle phase and high score.

    The adapter holds direction keys through ``inputs`` (or ``set_direction``),
    calls ``tick`` once per frame and forwards discrete actions through
    ``shoot``/``toggle_pause``/``start``/``restart``.
    """

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        high_score_store=None,
        tick_ms: float = DEFAULT_TICK_MS,
    ):
        self.settings = settings or GameSettings()
        self.tick_ms = tick_ms
        self.world = World(self.settings, rng if rng is not None else random.Random(seed))
        self.machine = GameStateMachine()
        self.inputs = InputState()

        self.store = high_score_store if high_score_store is not None else MemoryHighScoreStore()
        self.high_score = self.store.load()

    # ----------------------------
    # Exposed state
    # ----------------------------

    @property
    def phase(self) -> GamePhase:
        return self.machine.phase

    @property
    def score(self) -> int:
        return self.world.score

    @property
    def lives(self) -> int:
        return self.world.player.lives

    @property
    def is_game_over(self) -> bool:
        return self.machine.is_game_over

    @property
    def is_victory(self) -> bool:
        return self.machine.is_victory

    # ----------------------------
    # Lifecycle
    # ----------------------------

    def start(self) -> bool:
        return self.machine.start()

    def pause(self) -> bool:
        return self.machine.pause()

    def resume(self) -> bool:
        return self.machine.resume()

    def toggle_pause(self) -> bool:
        return self.machine.toggle_pause()

    def restart(self) -> bool:
        logger.info("Restarting session (last score %d)", self.world.score)
        self.world.reset()
        self.inputs.clear()
        return self.machine.restart()

    def set_direction(self, direction: str, held: bool):
        if direction not in ("up", "down", "left", "right"):
            raise ValueError(f"Unknown direction: {direction}")
        setattr(self.inputs, direction, held)

    def shoot(self) -> bool:
        if not self.machine.is_running:
            return False
        return self.world.player_shoot()

    def tick(self, dt_ms: Optional[float] = None) -> Dict[str, float]:
        """Advance one tick when running; returns that tick's event counters"""
        if not self.machine.is_running:
            return {}

        events = self.world.step(self.inputs, self.tick_ms if dt_ms is None else dt_ms)

        if events.get("kill"):
            self._record_score()

        if self.world.outcome is not None:
            self.machine.finish(self.world.outcome == OUTCOME_VICTORY)

        return events

    def _record_score(self):
        score = self.world.score
        if score > self.high_score:
            self.high_score = score
        self.store.save(score)

    def snapshot(self) -> Snapshot:
        w = self.world
        return Snapshot(
            player=copy.copy(w.player),
            enemies=tuple(copy.copy(e) for e in w.enemies),
            player_bullets=tuple(copy.copy(b) for b in w.player_bullets),
            enemy_bullets=tuple(copy.copy(b) for b in w.enemy_bullets),
            power_ups=tuple(copy.copy(pu) for pu in w.power_ups),
            markers=tuple(copy.copy(m) for m in w.markers),
            score=w.score,
            lives=w.player.lives,
            high_score=self.high_score,
            phase=self.machine.phase,
            victory=self.machine.is_victory,
            now_ms=w.now_ms,
            width=self.settings.width,
            height=self.settings.height,
        )
