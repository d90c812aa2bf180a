import numpy as np
import pytest

from game.shapes.entities import Bullet, BulletOwner
from game.shapes.shooter_env import ShooterEnv
from game.shapes.state import GamePhase


IDLE = np.array([0, 0, 0, 0])


@pytest.fixture
def env():
    e = ShooterEnv()
    yield e
    e.close()


def test_spaces(env):
    assert env.action_space.nvec.tolist() == [3, 3, 2, 2]
    assert env.observation_space.shape == (8 + 3 * 3 + 5 * 4 + 2 * 5,)


def test_reset_starts_running(env):
    obs, info = env.reset(seed=0)
    assert env.observation_space.contains(obs)
    assert info["phase"] == GamePhase.RUNNING.value
    assert info["score"] == 0
    assert info["lives"] == 3
    assert info["num_enemies"] == 1


def test_step_contract(env):
    env.reset(seed=0)
    obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
    assert env.observation_space.contains(obs)
    assert isinstance(reward, float)
    assert not terminated
    assert not truncated
    assert info["step"] == 1


def test_movement_action(env):
    env.reset(seed=0)
    env.step(np.array([1, 2, 0, 0]))
    p = env.game.world.player
    assert (p.x, p.y) == (405, 545)


def test_bad_action_shape(env):
    env.reset(seed=0)
    with pytest.raises(ValueError):
        env.step(np.array([0, 0]))


def test_same_seed_same_rollout():
    actions = [np.array([i % 3, (i // 3) % 3, i % 2, 0]) for i in range(300)]
    runs = []
    for _ in range(2):
        env = ShooterEnv()
        obs, _ = env.reset(seed=123)
        trace = [obs]
        for a in actions:
            obs, *_ = env.step(a)
            trace.append(obs)
        runs.append(np.stack(trace))
    np.testing.assert_array_equal(runs[0], runs[1])


def test_defeat_terminates_with_penalty(env):
    env.reset(seed=0)
    p = env.game.world.player
    p.lives = 1
    env.game.world.enemy_bullets.append(
        Bullet(x=p.x, y=p.y, vx=0.0, vy=0.0, owner=BulletOwner.ENEMY)
    )
    obs, reward, terminated, truncated, info = env.step(IDLE)
    assert terminated
    assert info["phase"] == GamePhase.GAME_OVER.value
    assert not info["victory"]
    assert reward < -5


def test_truncation():
    env = ShooterEnv(max_steps=3)
    env.reset(seed=0)
    env.game.world.enemies.clear()
    for _ in range(2):
        assert not env.step(IDLE)[3]
    assert env.step(IDLE)[3]


def test_pause_action_ignored_by_default(env):
    env.reset(seed=0)
    env.step(np.array([0, 0, 0, 1]))
    assert env.game.phase is GamePhase.RUNNING


def test_pause_action_when_allowed():
    env = ShooterEnv(allow_pause=True)
    env.reset(seed=0)
    env.step(np.array([0, 0, 0, 1]))
    assert env.game.phase is GamePhase.PAUSED


def test_rgb_array_frame():
    env = ShooterEnv(render_mode="rgb_array")
    env.reset(seed=0)
    frame = env.render()
    assert frame.shape == (600, 800, 3)
    assert frame.dtype == np.uint8
    # player box is drawn around (400, 550)
    assert tuple(frame[550, 400]) == (78, 204, 163)
    assert tuple(frame[5, 5]) == (22, 33, 62)


def test_unknown_render_mode():
    with pytest.raises(AssertionError):
        ShooterEnv(render_mode="ascii")


def test_track_and_fire_policy_gives_valid_actions(env):
    from rl.evaluate import track_and_fire

    env.reset(seed=0)
    for _ in range(50):
        action = track_and_fire(env)
        assert env.action_space.contains(action)
        env.step(action)


def test_shot_costs_reward(env):
    env.reset(seed=0)
    env.game.world.enemies.clear()
    _, idle_reward, *_ = env.step(IDLE)
    _, shot_reward, *_ = env.step(np.array([0, 0, 1, 0]))
    assert shot_reward == pytest.approx(idle_reward - env.rewards["R_SHOT"])
