"""
Game entity dataclasses
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class EnemyKind(str, Enum):
    OPPONENT = "opponent"  # triangle
    BOSS = "boss"  # pentagon


class BulletOwner(str, Enum):
    PLAYER = "player"
    ENEMY = "enemy"


class PowerUpType(str, Enum):
    SHIELD = "shield"
    RAPID_FIRE = "rapidFire"
    HEALTH = "health"


@dataclass
class InputState:
    """Held directions, as forwarded by the presentation adapter every tick"""
    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False

    def clear(self):
        self.up = self.down = self.left = self.right = False


@dataclass
class Player:
    """Player square"""
    x: float
    y: float
    size: float = 40.0
    lives: int = 3
    is_dead: bool = False  # temporary death, not life exhaustion
    last_shot_ms: Optional[float] = None  # None until the first shot
    respawn_at_ms: Optional[float] = None
    shield_until_ms: Optional[float] = None
    rapid_fire_until_ms: Optional[float] = None

    @property
    def has_shield(self) -> bool:
        return self.shield_until_ms is not None

    @property
    def has_rapid_fire(self) -> bool:
        return self.rapid_fire_until_ms is not None


@dataclass
class Enemy:
    """Opponent or boss; both share movement and aimed shooting"""
    x: float
    y: float
    kind: EnemyKind = EnemyKind.OPPONENT
    size: float = 35.0
    speed: float = 2.0
    direction: int = 1  # +1 right, -1 left
    last_shot_ms: float = 0.0
    shoot_interval_ms: float = 2000.0

    @property
    def is_boss(self) -> bool:
        return self.kind is EnemyKind.BOSS


@dataclass
class Bullet:
    """Bullet projectile entity"""
    x: float
    y: float
    vx: float
    vy: float
    owner: BulletOwner
    size: float = 8.0


@dataclass
class PowerUp:
    """Falling pickup dropped by a killed enemy"""
    x: float
    y: float
    type: PowerUpType
    size: float = 20.0
    vy: float = 2.0


@dataclass
class DeadMarker:
    """Star left where an enemy died; purely visual"""
    x: float
    y: float
    death_ms: float
    kind: EnemyKind = EnemyKind.OPPONENT
    size: float = 35.0
