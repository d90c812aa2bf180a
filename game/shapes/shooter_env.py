"""
ShooterEnv - the shape shooter behind the Gymnasium API
-------------------------------------------------------
- Wraps one ShapeShooter session; every env step is one simulation tick
- MultiDiscrete action space: [vertical(3), horizontal(3), shoot(2), pause(2)]
- Vector observation: player state + K nearest enemies + B nearest enemy
  bullets + P nearest power-ups, all scaled into [-1, 1]
- Arcade window for "human" rendering, numpy raster for "rgb_array"

Install:
    pip install gymnasium arcade numpy

Quick test:
    python -m game.shapes.shooter_env
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional, Union

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .entities import EnemyKind, PowerUpType
from .session import DEFAULT_TICK_MS, ShapeShooter
from .settings import GameSettings
from .utils import bounds, clamp

logger = logging.getLogger(__name__)

DEFAULT_REWARDS = {
    "R_KILL": 1.0,
    "R_BOSS": 2.0,
    "R_LIFE": 2.0,
    "R_POWERUP": 0.5,
    "R_SHOT": 0.01,
    "R_TIME": 0.001,
    "R_VICTORY": 10.0,
    "R_DEFEAT": 5.0,
}

POWERUP_ORDER = (PowerUpType.SHIELD, PowerUpType.RAPID_FIRE, PowerUpType.HEALTH)

# RGB colors shared by both renderers
COLORS = {
    "background": (22, 33, 62),
    "player": (78, 204, 163),
    "opponent": (233, 69, 96),
    "boss": (155, 89, 182),
    "player_bullet": (78, 204, 163),
    "enemy_bullet": (255, 107, 107),
    "star": (255, 215, 0),
    "dark": (22, 33, 62),
    "ui": (15, 52, 96),
    PowerUpType.SHIELD: (255, 215, 0),
    PowerUpType.RAPID_FIRE: (255, 107, 107),
    PowerUpType.HEALTH: (78, 204, 163),
}


class ShooterEnv(gym.Env):
    """Shape shooter environment"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        settings: Union[GameSettings, Dict[str, Any], None] = None,
        tick_ms: float = DEFAULT_TICK_MS,
        max_steps: int = 3600,  # 60s at 60 FPS
        k_enemies: int = 3,
        b_bullets: int = 5,
        p_power_ups: int = 2,
        allow_pause: bool = False,
        reward_config: Optional[Dict[str, float]] = None,
        high_score_store=None,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unsupported render_mode: {render_mode}"
        self.render_mode = render_mode

        if not isinstance(settings, GameSettings):
            settings = GameSettings.from_dict(settings)
        self.settings = settings
        self.width = int(settings.width)
        self.height = int(settings.height)
        self.tick_ms = tick_ms
        self.max_steps = max_steps

        # Observation config
        self.k_enemies = k_enemies
        self.b_bullets = b_bullets
        self.p_power_ups = p_power_ups
        self.allow_pause = allow_pause

        self.rewards = dict(DEFAULT_REWARDS)
        if reward_config:
            self.rewards.update({k: v for k, v in reward_config.items() if k.startswith("R_")})

        self.game = ShapeShooter(
            settings=settings,
            high_score_store=high_score_store,
            tick_ms=tick_ms,
        )

        # Action space:
        # vertical: 0 none, 1 up, 2 down
        # horizontal: 0 none, 1 left, 2 right
        # shoot: 0/1
        # pause toggle: 0/1
        self.action_space = spaces.MultiDiscrete([3, 3, 2, 2])

        # Observation space (vector)
        # Player: pos(2) lives(1) dead(1) shield(1) rapid(1) can_shoot(1) boss_spawned(1)
        # Each enemy: rel pos(2) is_boss(1)
        # Each enemy bullet: rel pos(2) vel(2)
        # Each power-up: rel pos(2) type one-hot(3)
        obs_dim = 8 + (self.k_enemies * 3) + (self.b_bullets * 4) + (self.p_power_ups * 5)
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None
        self._step_count = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        # Simulation randomness follows the env seed
        self.game.world.rng.seed(int(self.np_random.integers(0, 2**31 - 1)))
        self.game.restart()
        self._step_count = 0
        logger.debug("Episode reset (seed=%s)", seed)

        obs = self._get_obs()
        info = self._get_info()
        return obs, info

    def step(self, action):
        action = np.asarray(action, dtype=np.int64).reshape(-1)
        if action.shape != (4,):
            raise ValueError(f"Expected 4 action components, got shape {action.shape}")

        vertical, horizontal, shoot, pause = (int(a) for a in action)

        self.game.set_direction("up", vertical == 1)
        self.game.set_direction("down", vertical == 2)
        self.game.set_direction("left", horizontal == 1)
        self.game.set_direction("right", horizontal == 2)

        if pause and self.allow_pause:
            self.game.toggle_pause()
        if shoot:
            self.game.shoot()
        events = self.game.tick()

        reward = self._compute_reward(events)

        terminated = self.game.is_game_over
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        s = self.settings
        w = self.game.world
        p = w.player

        cooldown = s.rapid_fire_cooldown_ms if p.has_rapid_fire else s.shoot_cooldown_ms
        can_shoot = not p.is_dead and (
            p.last_shot_ms is None or w.now_ms - p.last_shot_ms > cooldown
        )

        obs_parts = [
            p.x / s.width * 2 - 1,
            p.y / s.height * 2 - 1,
            clamp(p.lives / max(1, s.initial_lives), 0, 1) * 2 - 1,
            float(p.is_dead),
            float(p.has_shield),
            float(p.has_rapid_fire),
            float(can_shoot),
            float(w.boss_spawned),
        ]

        def nearest(items, n):
            return sorted(items, key=lambda e: (e.x - p.x) ** 2 + (e.y - p.y) ** 2)[:n]

        def rel(e):
            return [clamp((e.x - p.x) / s.width, -1, 1), clamp((e.y - p.y) / s.height, -1, 1)]

        enemies = nearest(w.enemies, self.k_enemies)
        for i in range(self.k_enemies):
            if i < len(enemies):
                obs_parts += rel(enemies[i]) + [float(enemies[i].is_boss)]
            else:
                obs_parts += [0.0, 0.0, 0.0]

        speed = max(1e-6, s.enemy_bullet_speed)
        bullets = nearest(w.enemy_bullets, self.b_bullets)
        for i in range(self.b_bullets):
            if i < len(bullets):
                b = bullets[i]
                obs_parts += rel(b) + [clamp(b.vx / speed, -1, 1), clamp(b.vy / speed, -1, 1)]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0]

        power_ups = nearest(w.power_ups, self.p_power_ups)
        for i in range(self.p_power_ups):
            if i < len(power_ups):
                pu = power_ups[i]
                obs_parts += rel(pu) + [float(pu.type is t) for t in POWERUP_ORDER]
            else:
                obs_parts += [0.0] * 5

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self, events: Dict[str, float]) -> float:
        r = self.rewards
        reward = 0.0

        reward += r["R_KILL"] * events.get("kill", 0.0)
        reward += r["R_BOSS"] * events.get("boss_kill", 0.0)
        reward += r["R_POWERUP"] * events.get("powerup", 0.0)
        reward -= r["R_LIFE"] * events.get("life_lost", 0.0)
        reward -= r["R_SHOT"] * events.get("shot", 0.0)
        reward -= r["R_TIME"]

        if self.game.is_game_over and events:
            reward += r["R_VICTORY"] if self.game.is_victory else -r["R_DEFEAT"]

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        w = self.game.world
        return {
            "score": self.game.score,
            "lives": self.game.lives,
            "high_score": self.game.high_score,
            "phase": self.game.phase.value,
            "victory": self.game.is_victory,
            "boss_spawned": w.boss_spawned,
            "num_enemies": len(w.enemies),
            "num_bullets": len(w.player_bullets) + len(w.enemy_bullets),
            "num_power_ups": len(w.power_ups),
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self.render_mode == "rgb_array":
            return self._render_rgb_array()

        if self._window is None:
            from .window import ShooterWindow
            self._window = ShooterWindow(self.game, interactive=False)

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def _render_rgb_array(self) -> np.ndarray:
        """Rasterize every entity's hit box into an (H, W, 3) frame"""
        frame = np.empty((self.height, self.width, 3), dtype=np.uint8)
        frame[:] = COLORS["background"]

        w = self.game.world
        for m in w.markers:
            self._fill_box(frame, m.x, m.y, m.size / 2, COLORS["star"])
        for pu in w.power_ups:
            self._fill_box(frame, pu.x, pu.y, pu.size, COLORS[pu.type])
        for e in w.enemies:
            color = COLORS["boss"] if e.kind is EnemyKind.BOSS else COLORS["opponent"]
            self._fill_box(frame, e.x, e.y, e.size, color)
        for b in w.player_bullets:
            self._fill_box(frame, b.x, b.y, b.size, COLORS["player_bullet"])
        for b in w.enemy_bullets:
            self._fill_box(frame, b.x, b.y, b.size, COLORS["enemy_bullet"])

        p = w.player
        color = COLORS["player"]
        if p.is_dead:
            # faded
            color = tuple((c + bg) // 2 for c, bg in zip(color, COLORS["background"]))
        self._fill_box(frame, p.x, p.y, p.size, color)
        return frame

    @staticmethod
    def _fill_box(frame: np.ndarray, x: float, y: float, size: float, color):
        h, w = frame.shape[:2]
        left, right, top, bottom = bounds(x, y, size)
        x0, x1 = int(clamp(round(left), 0, w)), int(clamp(round(right), 0, w))
        y0, y1 = int(clamp(round(top), 0, h)), int(clamp(round(bottom), 0, h))
        if x1 > x0 and y1 > y0:
            frame[y0:y1, x0:x1] = color

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: Optional[int] = 42) -> float:
    """Run one episode with uniformly random actions; returns the total reward"""
    env = ShooterEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward
        if render:
            time.sleep(1 / env.metadata["render_fps"])

    print(f"Random episode return: {total:.2f}  "
          f"(score {info['score']}, phase {info['phase']}, victory {info['victory']})")

    env.close()
    return total


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run_random_episode(render=True)
