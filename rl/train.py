"""
Training script for the asteroids environment using Stable-Baselines3
Supports PPO and DQN with per-episode game metrics tracking.
"""

import os
import argparse
from typing import Optional

from stable_baselines3 import PPO, DQN
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize
from stable_baselines3.common.callbacks import CheckpointCallback, EvalCallback
from stable_baselines3.common.monitor import Monitor

from game.asteroids import AsteroidsEnv
from rl.configs.asteroids_config import PPO_CONFIG, DQN_CONFIG, TRAINING_CONFIG, REWARD_CONFIGS, get_env_kwargs
from rl.metrics_callback import MetricsCallback, TensorboardMetricsCallback
from rl.wrappers import MultiDiscreteToDiscreteWrapper


def make_env(seed: Optional[int] = None, reward_config: str = "baseline", wrap_for_dqn: bool = False):
    """Factory function to create the environment"""
    def _init():
        env = AsteroidsEnv(**get_env_kwargs(reward_config))
        if wrap_for_dqn:
            env = MultiDiscreteToDiscreteWrapper(env)
        env = Monitor(env)
        if seed is not None:
            env.reset(seed=seed)
        return env
    return _init


def _banner(*lines):
    print(f"\n{'='*60}")
    for line in lines:
        print(line)
    print(f"{'='*60}\n")


def _report(algo: str, final_path: str, metrics_callback: MetricsCallback):
    summary = metrics_callback.get_summary()
    lines = [f"{algo.upper()} Training complete! Model saved to {final_path}"]
    if summary:
        lines.append(f"Mean Reward: {summary['mean_reward']:.2f} ± {summary['std_reward']:.2f}")
        lines.append(f"Mean Score: {summary['mean_score']:.1f}  Mean Level: {summary['mean_level']:.2f}")
        lines.append(f"Total Episodes: {summary['total_episodes']}")
    _banner(*lines)


def train_ppo(
    total_timesteps: int = None,
    save_dir: str = "./models/ppo",
    log_dir: str = "./logs/ppo",
    tensorboard_log: str = "./tensorboard_logs/ppo",
    n_envs: int = 4,
    reward_config: str = "baseline",
):
    """Train PPO agent on the asteroids environment"""

    if total_timesteps is None:
        total_timesteps = TRAINING_CONFIG["total_timesteps"]

    os.makedirs(save_dir, exist_ok=True)
    os.makedirs(log_dir, exist_ok=True)

    _banner(f"Training PPO for {total_timesteps:,} timesteps...",
            f"Using {n_envs} parallel environments, reward config '{reward_config}'")

    env = DummyVecEnv([make_env(seed=i, reward_config=reward_config) for i in range(n_envs)])
    env = VecNormalize(env, norm_obs=True, norm_reward=True)

    eval_env = DummyVecEnv([make_env(seed=100, reward_config=reward_config)])
    eval_env = VecNormalize(eval_env, norm_obs=True, norm_reward=False, training=False)

    checkpoint_callback = CheckpointCallback(
        save_freq=max(1, TRAINING_CONFIG["save_freq"] // n_envs),
        save_path=save_dir,
        name_prefix="ppo_asteroids",
    )

    eval_callback = EvalCallback(
        eval_env,
        best_model_save_path=save_dir,
        log_path=log_dir,
        eval_freq=max(1, TRAINING_CONFIG.get("eval_freq", 5000) // n_envs),
        deterministic=True,
        render=False,
    )

    metrics_callback = MetricsCallback(log_dir=log_dir, algo_name="ppo", verbose=1)
    tb_callback = TensorboardMetricsCallback(verbose=0)

    model = PPO(env=env, tensorboard_log=tensorboard_log, **PPO_CONFIG)
    model.learn(
        total_timesteps=total_timesteps,
        callback=[checkpoint_callback, eval_callback, metrics_callback, tb_callback],
    )

    final_path = os.path.join(save_dir, "ppo_asteroids_final")
    model.save(final_path)
    env.save(os.path.join(save_dir, "vec_normalize.pkl"))

    _report("ppo", final_path, metrics_callback)
    return model, metrics_callback


def train_dqn(
    total_timesteps: int = None,
    save_dir: str = "./models/dqn",
    log_dir: str = "./logs/dqn",
    tensorboard_log: str = "./tensorboard_logs/dqn",
    reward_config: str = "baseline",
):
    """Train DQN agent on the asteroids environment"""

    if total_timesteps is None:
        total_timesteps = TRAINING_CONFIG["total_timesteps"]

    os.makedirs(save_dir, exist_ok=True)
    os.makedirs(log_dir, exist_ok=True)

    _banner(f"Training DQN for {total_timesteps:,} timesteps...",
            "Using MultiDiscrete->Discrete action wrapper (24 actions)")

    env = DummyVecEnv([make_env(seed=0, reward_config=reward_config, wrap_for_dqn=True)])
    eval_env = DummyVecEnv([make_env(seed=100, reward_config=reward_config, wrap_for_dqn=True)])

    checkpoint_callback = CheckpointCallback(
        save_freq=TRAINING_CONFIG["save_freq"],
        save_path=save_dir,
        name_prefix="dqn_asteroids",
    )

    eval_callback = EvalCallback(
        eval_env,
        best_model_save_path=save_dir,
        log_path=log_dir,
        eval_freq=TRAINING_CONFIG.get("eval_freq", 10000),
        deterministic=True,
        render=False,
    )

    metrics_callback = MetricsCallback(log_dir=log_dir, algo_name="dqn", verbose=1)
    tb_callback = TensorboardMetricsCallback(verbose=0)

    model = DQN(env=env, tensorboard_log=tensorboard_log, **DQN_CONFIG)
    model.learn(
        total_timesteps=total_timesteps,
        callback=[checkpoint_callback, eval_callback, metrics_callback, tb_callback],
    )

    final_path = os.path.join(save_dir, "dqn_asteroids_final")
    model.save(final_path)

    _report("dqn", final_path, metrics_callback)
    return model, metrics_callback


def main():
    parser = argparse.ArgumentParser(description="Train RL agent on the asteroids environment")
    parser.add_argument(
        "--algo",
        type=str,
        default="ppo",
        choices=["ppo", "dqn", "all"],
        help="RL algorithm to use (default: ppo)",
    )
    parser.add_argument(
        "--timesteps",
        type=int,
        default=None,
        help=f"Total timesteps to train (default: {TRAINING_CONFIG['total_timesteps']})",
    )
    parser.add_argument(
        "--n-envs",
        type=int,
        default=4,
        help="Number of parallel environments for PPO (default: 4)",
    )
    parser.add_argument(
        "--reward-config",
        type=str,
        default="baseline",
        choices=sorted(REWARD_CONFIGS),
        help="Reward shaping to train with (default: baseline)",
    )

    args = parser.parse_args()

    if args.algo == "ppo":
        train_ppo(total_timesteps=args.timesteps, n_envs=args.n_envs, reward_config=args.reward_config)
    elif args.algo == "dqn":
        train_dqn(total_timesteps=args.timesteps, reward_config=args.reward_config)
    elif args.algo == "all":
        print("Training all algorithms sequentially...")
        train_dqn(total_timesteps=args.timesteps, reward_config=args.reward_config)
        train_ppo(total_timesteps=args.timesteps, n_envs=args.n_envs, reward_config=args.reward_config)


if __name__ == "__main__":
    main()
