import random

import pytest

from game.shapes.entities import Enemy, EnemyKind
from game.shapes.settings import GameSettings
from game.shapes.simulation import World


# Far-future last shot keeps an enemy from firing during a test
NEVER_MS = 1e12


@pytest.fixture
def quiet_settings():
    """No random drops or replacements, so kills are fully predictable"""
    return GameSettings(
        powerup_chance_opponent=0.0,
        powerup_chance_boss=0.0,
        replacement_chance=0.0,
    )


@pytest.fixture
def world(quiet_settings):
    """World with the starting opponent removed"""
    w = World(quiet_settings, rng=random.Random(0))
    w.enemies.clear()
    return w


def make_enemy(x, y, kind=EnemyKind.OPPONENT, speed=0.0, direction=1, last_shot_ms=NEVER_MS):
    size = 50.0 if kind is EnemyKind.BOSS else 35.0
    return Enemy(
        x=x,
        y=y,
        kind=kind,
        size=size,
        speed=speed,
        direction=direction,
        last_shot_ms=last_shot_ms,
        shoot_interval_ms=1500.0 if kind is EnemyKind.BOSS else 2000.0,
    )
