"""
Custom callback for tracking game metrics during training.
Records: final score, level reached, asteroids destroyed, shots fired, lives lost.
"""

import os
import csv
from typing import Dict, List, Any, Optional

import numpy as np
from stable_baselines3.common.callbacks import BaseCallback

CSV_FIELDS = [
    "timestep", "episode", "reward", "length",
    "score", "level", "asteroids_destroyed", "shots_fired", "lives_lost", "game_over",
]


def episode_row(num_timesteps: int, episode: int, info: Dict[str, Any]) -> List[Any]:
    """One CSV row from the terminal info of an episode (Monitor adds info['episode'])"""
    ep_info = info["episode"]
    return [
        num_timesteps,
        episode,
        ep_info["r"],
        ep_info["l"],
        info.get("score", 0),
        info.get("level", 0),
        info.get("asteroids_destroyed", 0),
        info.get("shots_fired", 0),
        info.get("lives_lost", 0),
        int(bool(info.get("game_over", False))),
    ]


class MetricsCallback(BaseCallback):
    """
    Callback to track and log game metrics per episode.
    Saves to CSV for easy plotting.
    """

    def __init__(
        self,
        log_dir: str,
        algo_name: str,
        verbose: int = 1,
    ):
        super().__init__(verbose)
        self.log_dir = log_dir
        self.algo_name = algo_name

        self.episode_rewards: List[float] = []
        self.episode_lengths: List[int] = []
        self.episode_scores: List[int] = []
        self.episode_levels: List[int] = []
        self.episode_kills: List[int] = []

        self.csv_path: Optional[str] = None
        self.csv_file = None
        self.csv_writer = None

    def _on_training_start(self) -> None:
        """Initialize CSV file for logging."""
        os.makedirs(self.log_dir, exist_ok=True)
        self.csv_path = os.path.join(self.log_dir, f"{self.algo_name}_metrics.csv")

        self.csv_file = open(self.csv_path, "w", newline="")
        self.csv_writer = csv.writer(self.csv_file)
        self.csv_writer.writerow(CSV_FIELDS)
        self.csv_file.flush()

        if self.verbose > 0:
            print(f"[MetricsCallback] Logging to {self.csv_path}")

    def _on_step(self) -> bool:
        infos = self.locals.get("infos", [])
        dones = self.locals.get("dones", [])

        for info, done in zip(infos, dones):
            if not (done and "episode" in info):
                continue
            row = episode_row(self.num_timesteps, len(self.episode_rewards) + 1, info)
            self.episode_rewards.append(row[2])
            self.episode_lengths.append(row[3])
            self.episode_scores.append(row[4])
            self.episode_levels.append(row[5])
            self.episode_kills.append(row[6])

            if self.csv_writer:
                self.csv_writer.writerow(row)
                self.csv_file.flush()

            if self.verbose > 0 and len(self.episode_rewards) % 10 == 0:
                avg_reward = sum(self.episode_rewards[-10:]) / 10
                avg_score = sum(self.episode_scores[-10:]) / 10
                print(f"[{self.algo_name}] Episode {len(self.episode_rewards)}, "
                      f"Timestep {self.num_timesteps}, "
                      f"Avg Reward (10 ep): {avg_reward:.2f}, Avg Score: {avg_score:.0f}")

        return True

    def _on_training_end(self) -> None:
        if self.csv_file:
            self.csv_file.close()
            if self.verbose > 0:
                print(f"[MetricsCallback] Saved {len(self.episode_rewards)} episodes to {self.csv_path}")

    def get_summary(self) -> Dict[str, Any]:
        if not self.episode_rewards:
            return {}
        return {
            "mean_reward": np.mean(self.episode_rewards),
            "std_reward": np.std(self.episode_rewards),
            "mean_length": np.mean(self.episode_lengths),
            "total_episodes": len(self.episode_rewards),
            "mean_score": np.mean(self.episode_scores),
            "mean_level": np.mean(self.episode_levels),
            "mean_kills": np.mean(self.episode_kills),
        }


class TensorboardMetricsCallback(BaseCallback):
    """
    Logs game metrics to TensorBoard at the end of each episode.
    """

    def __init__(self, verbose: int = 0):
        super().__init__(verbose)

    def _on_step(self) -> bool:
        infos = self.locals.get("infos", [])
        dones = self.locals.get("dones", [])

        for info, done in zip(infos, dones):
            if done and "episode" in info and self.logger:
                ep = info["episode"]
                self.logger.record("custom/episode_reward", ep["r"])
                self.logger.record("custom/episode_length", ep["l"])
                self.logger.record("custom/final_score", info.get("score", 0))
                self.logger.record("custom/level_reached", info.get("level", 0))

        return True
