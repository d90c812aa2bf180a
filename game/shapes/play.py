"""
Play the shape shooter in an Arcade window, or run headless random episodes

    python -m game.shapes.play
    python -m game.shapes.play --mode random --episodes 5 --seed 42
"""

import argparse
import logging

import numpy as np

from game.configs.shooter_config import ENV_CONFIG, GAME_CONFIG, HIGHSCORE_PATH
from .highscore import JsonHighScoreStore, MemoryHighScoreStore
from .session import ShapeShooter
from .settings import GameSettings
from .shooter_env import ShooterEnv

logger = logging.getLogger(__name__)


def play_human(highscore_path: str, seed=None):
    """Open the window and let the window's frame loop drive the session"""
    import arcade
    from .window import ShooterWindow

    settings = GameSettings.from_dict(GAME_CONFIG)
    logger.info("Game settings: %s", settings.to_dict())

    game = ShapeShooter(
        settings=settings,
        seed=seed,
        high_score_store=JsonHighScoreStore(highscore_path),
    )
    ShooterWindow(game, interactive=True)
    arcade.run()
    print(f"Final score: {game.score}  High score: {game.high_score}")


def play_random(n_episodes: int = 5, seed=None, max_steps=None, highscore_path=None):
    """Random-policy episodes without a window"""
    env_kwargs = dict(ENV_CONFIG)
    if max_steps is not None:
        env_kwargs["max_steps"] = max_steps

    store = JsonHighScoreStore(highscore_path) if highscore_path else MemoryHighScoreStore()
    env = ShooterEnv(render_mode=None, settings=GAME_CONFIG, high_score_store=store, **env_kwargs)
    logger.info("Game settings: %s", env.settings.to_dict())

    scores, wins = [], 0
    for episode in range(n_episodes):
        obs, info = env.reset(seed=seed + episode if seed is not None else None)
        terminated = truncated = False
        while not (terminated or truncated):
            obs, reward, terminated, truncated, info = env.step(env.action_space.sample())

        scores.append(info["score"])
        wins += int(info["victory"])
        print(f"Episode {episode + 1}/{n_episodes}: "
              f"score = {info['score']}, phase = {info['phase']}, steps = {info['step']}")

    env.close()

    print("\n" + "=" * 50)
    print(f"Mean score: {np.mean(scores):.2f} ± {np.std(scores):.2f}")
    print(f"Wins: {wins}/{n_episodes}")
    print(f"High score: {env.game.high_score}")
    print("=" * 50)
    return {"scores": scores, "wins": wins}


def main():
    parser = argparse.ArgumentParser(description="Play the shape shooter")
    parser.add_argument(
        "--mode",
        type=str,
        default="human",
        choices=["human", "random"],
        help="Interactive window or headless random episodes (default: human)",
    )
    parser.add_argument(
        "--episodes",
        type=int,
        default=5,
        help="Number of random episodes (default: 5)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed",
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=None,
        help="Step limit per random episode",
    )
    parser.add_argument(
        "--highscore",
        type=str,
        default=None,
        help=f"High score file (human default: {HIGHSCORE_PATH}; random: in memory)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Debug logging",
    )

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    if args.mode == "human":
        play_human(args.highscore or HIGHSCORE_PATH, seed=args.seed)
    else:
        play_random(args.episodes, seed=args.seed, max_steps=args.max_steps,
                    highscore_path=args.highscore)


if __name__ == "__main__":
    main()
