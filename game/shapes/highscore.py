"""
High-score persistence. The only I/O in the game; failures never reach gameplay.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)


class MemoryHighScoreStore:
    """Keeps the best score in memory only (training runs, tests)"""

    def __init__(self, initial: int = 0):
        self.value = max(0, int(initial))

    def load(self) -> int:
        return self.value

    def save(self, candidate: int) -> bool:
        if candidate <= self.value:
            return False
        self.value = candidate
        return True


class JsonHighScoreStore:
    """
    Stores ``{"high_score": N}`` in a JSON file.

    A missing, unreadable or malformed file loads as 0. ``save`` only writes
    when the candidate beats the stored value and logs, rather than raises,
    any write error.
    """

    def __init__(self, path: str):
        self.path = os.path.expanduser(path)
        self._cached: Optional[int] = None

    def load(self) -> int:
        if not os.path.exists(self.path):
            logger.debug("No high score file at %s", self.path)
            self._cached = 0
            return 0

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            value = data["high_score"]
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"invalid high score value {value!r}")
        except (OSError, ValueError, KeyError, TypeError) as exc:
            logger.warning("Ignoring unreadable high score file %s: %s", self.path, exc)
            value = 0

        self._cached = value
        return value

    def save(self, candidate: int) -> bool:
        stored = self._cached if self._cached is not None else self.load()
        if candidate <= stored:
            return False

        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            tmp_path = self.path + ".tmp"
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump({"high_score": int(candidate)}, f)
            os.replace(tmp_path, self.path)
        except OSError as exc:
            logger.warning("Could not save high score to %s: %s", self.path, exc)
            return False

        self._cached = candidate
        return True
