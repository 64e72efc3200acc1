"""
Evaluation script for trained asteroids agents
"""

import time
import argparse
from typing import Optional

import numpy as np

from stable_baselines3 import PPO, DQN
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize

from game.asteroids import AsteroidsEnv
from rl.configs.asteroids_config import REWARD_CONFIGS, get_env_kwargs
from rl.wrappers import MultiDiscreteToDiscreteWrapper

ALGORITHMS = {"ppo": PPO, "dqn": DQN}


def _print_results(title: str, rewards, lengths, scores, levels):
    print("\n" + "=" * 50)
    print(title)
    print(f"Mean Reward: {np.mean(rewards):.2f} ± {np.std(rewards):.2f}")
    print(f"Mean Episode Length: {np.mean(lengths):.1f}")
    print(f"Mean Score: {np.mean(scores):.1f}  (best {np.max(scores)})")
    print(f"Mean Level: {np.mean(levels):.2f}")
    print("=" * 50)


def evaluate_model(
    model_path: str,
    algo: str = "ppo",
    n_episodes: int = 10,
    render: bool = True,
    seed: Optional[int] = None,
    vec_normalize_path: Optional[str] = None,
    reward_config: str = "baseline",
):
    """
    Evaluate a trained model

    Args:
        model_path: Path to the saved model
        algo: Algorithm used ('ppo' or 'dqn')
        n_episodes: Number of episodes to evaluate
        render: Whether to render the environment
        seed: Random seed for evaluation
        vec_normalize_path: Path to VecNormalize stats (for PPO)
        reward_config: Reward shaping the model was trained with
    """
    if algo not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm: {algo}")
    model = ALGORITHMS[algo].load(model_path)

    render_mode = "human" if render else None
    base_env = AsteroidsEnv(render_mode=render_mode, **get_env_kwargs(reward_config))
    env = MultiDiscreteToDiscreteWrapper(base_env) if algo == "dqn" else base_env

    env = DummyVecEnv([lambda: env])
    if seed is not None:
        env.seed(seed)

    if vec_normalize_path:
        env = VecNormalize.load(vec_normalize_path, env)
        env.training = False
        env.norm_reward = False

    episode_rewards, episode_lengths, episode_scores, episode_levels = [], [], [], []

    for episode in range(n_episodes):
        obs = env.reset()
        total_reward = 0.0
        steps = 0

        while True:
            action, _ = model.predict(obs, deterministic=True)
            obs, reward, done, info = env.step(action)
            total_reward += float(reward[0])
            steps += 1

            if render and base_env._window:
                base_env._window.dispatch_events()
                base_env._window.flip()
                time.sleep(base_env.dt)

            if done[0]:
                break

        # DummyVecEnv resets on done; the terminal info still holds the final counters
        final = info[0]
        episode_rewards.append(total_reward)
        episode_lengths.append(steps)
        episode_scores.append(final.get("score", 0))
        episode_levels.append(final.get("level", 0))

        print(f"Episode {episode + 1}/{n_episodes}: "
              f"Reward = {total_reward:.2f}, Length = {steps}, "
              f"Score = {episode_scores[-1]}, Level = {episode_levels[-1]}")

    env.close()

    _print_results(f"Evaluation Results ({n_episodes} episodes):",
                   episode_rewards, episode_lengths, episode_scores, episode_levels)

    return {
        "mean_reward": float(np.mean(episode_rewards)),
        "std_reward": float(np.std(episode_rewards)),
        "mean_length": float(np.mean(episode_lengths)),
        "mean_score": float(np.mean(episode_scores)),
        "episode_rewards": episode_rewards,
        "episode_scores": episode_scores,
    }


def compare_with_random(n_episodes: int = 10, seed: Optional[int] = None, reward_config: str = "baseline"):
    """
    Evaluate a random policy baseline
    """
    print("Evaluating random policy baseline...")

    env = AsteroidsEnv(render_mode=None, **get_env_kwargs(reward_config))
    env.action_space.seed(seed)

    episode_rewards, episode_lengths, episode_scores, episode_levels = [], [], [], []

    for episode in range(n_episodes):
        obs, info = env.reset(seed=seed + episode if seed is not None else None)

        terminated = False
        truncated = False
        total_reward = 0.0
        steps = 0

        while not (terminated or truncated):
            action = env.action_space.sample()
            obs, reward, terminated, truncated, info = env.step(action)
            total_reward += reward
            steps += 1

        episode_rewards.append(total_reward)
        episode_lengths.append(steps)
        episode_scores.append(info["score"])
        episode_levels.append(info["level"])

    env.close()

    _print_results(f"Random Policy Results ({n_episodes} episodes):",
                   episode_rewards, episode_lengths, episode_scores, episode_levels)

    return {
        "mean_reward": float(np.mean(episode_rewards)),
        "std_reward": float(np.std(episode_rewards)),
        "mean_length": float(np.mean(episode_lengths)),
        "mean_score": float(np.mean(episode_scores)),
    }


def main():
    parser = argparse.ArgumentParser(description="Evaluate trained RL agent")
    parser.add_argument("model_path", type=str, help="Path to the trained model")
    parser.add_argument(
        "--algo",
        type=str,
        default="ppo",
        choices=sorted(ALGORITHMS),
        help="Algorithm used to train the model (default: ppo)",
    )
    parser.add_argument("--n-episodes", type=int, default=10, help="Number of evaluation episodes (default: 10)")
    parser.add_argument("--no-render", action="store_true", help="Disable rendering")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--vec-normalize", type=str, default=None, help="Path to VecNormalize stats file (for PPO)")
    parser.add_argument("--reward-config", type=str, default="baseline", choices=sorted(REWARD_CONFIGS))
    parser.add_argument("--compare-random", action="store_true", help="Also evaluate random policy for comparison")

    args = parser.parse_args()

    results = evaluate_model(
        model_path=args.model_path,
        algo=args.algo,
        n_episodes=args.n_episodes,
        render=not args.no_render,
        seed=args.seed,
        vec_normalize_path=args.vec_normalize,
        reward_config=args.reward_config,
    )

    if args.compare_random:
        print("\n")
        random_results = compare_with_random(
            n_episodes=args.n_episodes,
            seed=args.seed,
            reward_config=args.reward_config,
        )
        improvement = results["mean_score"] - random_results["mean_score"]
        print(f"\nScore improvement over random: {improvement:.1f}")


if __name__ == "__main__":
    main()
