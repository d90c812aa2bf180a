"""
Game lifecycle: instructions -> running <-> paused -> game over -> (restart) running
"""

from __future__ import annotations

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class GamePhase(str, Enum):
    INSTRUCTIONS = "instructions"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class GameStateMachine:
    """
    Tracks the current phase and, once over, whether the game was won.

    Transition methods return True when they changed the phase and False when
    the request does not apply to the current phase (it is then ignored).
    """

    def __init__(self):
        self.phase = GamePhase.INSTRUCTIONS
        self.victory = False

    @property
    def is_running(self) -> bool:
        return self.phase is GamePhase.RUNNING

    @property
    def is_paused(self) -> bool:
        return self.phase is GamePhase.PAUSED

    @property
    def is_game_over(self) -> bool:
        return self.phase is GamePhase.GAME_OVER

    @property
    def is_victory(self) -> bool:
        # Only meaningful once the game is over
        return self.is_game_over and self.victory

    def _move(self, new_phase: GamePhase) -> bool:
        logger.info("Game phase %s -> %s", self.phase.value, new_phase.value)
        self.phase = new_phase
        return True

    def start(self) -> bool:
        if self.phase is not GamePhase.INSTRUCTIONS:
            return False
        return self._move(GamePhase.RUNNING)

    def pause(self) -> bool:
        if self.phase is not GamePhase.RUNNING:
            return False
        return self._move(GamePhase.PAUSED)

    def resume(self) -> bool:
        if self.phase is not GamePhase.PAUSED:
            return False
        return self._move(GamePhase.RUNNING)

    def toggle_pause(self) -> bool:
        if self.phase is GamePhase.RUNNING:
            return self.pause()
        return self.resume()

    def finish(self, victory: bool) -> bool:
        """Enter the terminal phase; the first outcome recorded wins"""
        if self.phase is GamePhase.GAME_OVER:
            return False
        self.victory = victory
        logger.info("Game over: %s", "victory" if victory else "defeat")
        return self._move(GamePhase.GAME_OVER)

    def restart(self) -> bool:
        self.victory = False
        return self._move(GamePhase.RUNNING)
