"""
Evaluation script for baseline policies on the shape shooter
Compares a random policy with a scripted track-and-fire policy.
"""

import argparse
from typing import Callable, Optional

import numpy as np

from game.shapes import ShooterEnv
from game.configs.shooter_config import ENV_CONFIG, GAME_CONFIG, REWARD_CONFIG


def track_and_fire(env: ShooterEnv) -> np.ndarray:
    """
    Stay under the nearest live enemy and keep shooting.
    Reads the world directly, so it only works on an unwrapped env.
    """
    world = env.game.world
    p = world.player
    if not world.enemies:
        return np.array([0, 0, 1, 0], dtype=np.int64)

    target = min(world.enemies, key=lambda e: abs(e.x - p.x) + (0 if e.is_boss else 1000))
    dx = target.x - p.x
    horizontal = 0
    if dx < -env.settings.player_speed:
        horizontal = 1
    elif dx > env.settings.player_speed:
        horizontal = 2
    return np.array([0, horizontal, 1, 0], dtype=np.int64)


def evaluate_policy(
    policy: Callable[[ShooterEnv], np.ndarray],
    n_episodes: int = 10,
    seed: Optional[int] = None,
    name: str = "policy",
):
    """
    Run a policy for several episodes and summarise the outcome

    Args:
        policy: Maps the env to an action
        n_episodes: Number of episodes to evaluate
        seed: Base seed; episode i uses seed + i
        name: Label used in the printout
    """
    env = ShooterEnv(render_mode=None, settings=GAME_CONFIG, reward_config=REWARD_CONFIG, **ENV_CONFIG)

    episode_rewards = []
    episode_lengths = []
    episode_scores = []
    wins = 0

    for episode in range(n_episodes):
        obs, info = env.reset(seed=seed + episode if seed is not None else None)

        terminated = False
        truncated = False
        total_reward = 0.0
        steps = 0

        while not (terminated or truncated):
            obs, reward, terminated, truncated, info = env.step(policy(env))
            total_reward += reward
            steps += 1

        episode_rewards.append(total_reward)
        episode_lengths.append(steps)
        episode_scores.append(info["score"])
        wins += int(info["victory"])

    env.close()

    results = {
        "mean_reward": float(np.mean(episode_rewards)),
        "std_reward": float(np.std(episode_rewards)),
        "mean_length": float(np.mean(episode_lengths)),
        "mean_score": float(np.mean(episode_scores)),
        "win_rate": wins / max(1, n_episodes),
        "episode_rewards": episode_rewards,
    }

    print(f"\n{name} ({n_episodes} episodes):")
    print(f"Mean Reward: {results['mean_reward']:.2f} ± {results['std_reward']:.2f}")
    print(f"Mean Episode Length: {results['mean_length']:.1f}")
    print(f"Mean Score: {results['mean_score']:.2f}")
    print(f"Win Rate: {results['win_rate']:.0%}")

    return results


def main():
    parser = argparse.ArgumentParser(description="Evaluate baseline policies")
    parser.add_argument(
        "--n-episodes",
        type=int,
        default=10,
        help="Number of evaluation episodes (default: 10)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed (default: 42)",
    )

    args = parser.parse_args()

    random_results = evaluate_policy(
        lambda env: env.action_space.sample(),
        n_episodes=args.n_episodes,
        seed=args.seed,
        name="Random policy",
    )
    scripted_results = evaluate_policy(
        track_and_fire,
        n_episodes=args.n_episodes,
        seed=args.seed,
        name="Track-and-fire policy",
    )

    improvement = scripted_results["mean_reward"] - random_results["mean_reward"]
    print(f"\nImprovement over random: {improvement:.2f}")


if __name__ == "__main__":
    main()
