"""Shape shooter - arcade shooter simulation, Gymnasium env and Arcade window"""

from .session import ShapeShooter, Snapshot
from .shooter_env import ShooterEnv, run_random_episode
from .simulation import World
from .state import GamePhase

__all__ = ['ShapeShooter', 'Snapshot', 'ShooterEnv', 'World', 'GamePhase', 'run_random_episode']
