"""
Plotting script for asteroids training results.
Generates learning curves, an algorithm comparison and a text summary.
"""

import os
import argparse
from typing import Dict, Optional

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

COLORS = {"dqn": "#2ecc71", "ppo": "#3498db"}


def load_metrics(log_dir: str, algo: str) -> Optional[pd.DataFrame]:
    """Load metrics CSV for an algorithm."""
    for csv_path in (
        os.path.join(log_dir, algo, f"{algo}_metrics.csv"),
        os.path.join(log_dir, f"{algo}_metrics.csv"),
    ):
        if os.path.exists(csv_path):
            return pd.read_csv(csv_path)
    return None


def smooth(data: np.ndarray, window: int = 10) -> np.ndarray:
    """Apply rolling average smoothing."""
    if len(data) < window:
        return data
    kernel = np.ones(window) / window
    return np.convolve(data, kernel, mode="valid")


def _plot_series(ax, df: pd.DataFrame, column: str, window: int, label: str = None, color: str = None):
    values = df[column].values.astype(float)
    smoothed = smooth(values, window)
    ax.plot(df["timestep"].values[:len(smoothed)], smoothed, linewidth=2, label=label, color=color)


def plot_learning_curve(df: pd.DataFrame, algo: str, output_dir: str, window: int = 50):
    """Plot learning curves for a single algorithm."""
    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    fig.suptitle(f"{algo.upper()} Learning Curves", fontsize=16, fontweight="bold")

    panels = [
        (axes[0, 0], "reward", "Episode Reward"),
        (axes[0, 1], "score", "Final Score"),
        (axes[1, 0], "level", "Level Reached"),
    ]
    for ax, column, title in panels:
        _plot_series(ax, df, column, window, color=COLORS.get(algo))
        ax.set_xlabel("Timesteps")
        ax.set_ylabel(title)
        ax.set_title(f"{title} vs Timesteps")
        ax.grid(True, alpha=0.3)

    ax = axes[1, 1]
    scores = df["score"].values
    ax.hist(scores, bins=50, alpha=0.7, edgecolor="black")
    ax.axvline(np.mean(scores), color="red", linestyle="--", label=f"Mean: {np.mean(scores):.0f}")
    ax.set_xlabel("Final Score")
    ax.set_ylabel("Frequency")
    ax.set_title("Score Distribution")
    ax.legend()
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    os.makedirs(output_dir, exist_ok=True)
    save_path = os.path.join(output_dir, f"{algo}_learning_curve.png")
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()

    print(f"Saved {algo} learning curve to {save_path}")
    return save_path


def plot_comparison(data: Dict[str, pd.DataFrame], output_dir: str, window: int = 50):
    """Overlay reward and score curves of every algorithm."""
    fig, axes = plt.subplots(1, 2, figsize=(14, 5))
    fig.suptitle("Algorithm Comparison", fontsize=16, fontweight="bold")

    for ax, column, title in ((axes[0], "reward", "Episode Reward"), (axes[1], "score", "Final Score")):
        for algo, df in data.items():
            if df is not None and len(df) > 0:
                _plot_series(ax, df, column, window, label=algo.upper(), color=COLORS.get(algo))
        ax.set_xlabel("Timesteps")
        ax.set_ylabel(title)
        ax.set_title(f"{title} Comparison")
        ax.legend()
        ax.grid(True, alpha=0.3)

    plt.tight_layout()

    os.makedirs(output_dir, exist_ok=True)
    save_path = os.path.join(output_dir, "algorithm_comparison.png")
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()

    print(f"Saved comparison plot to {save_path}")
    return save_path


def generate_summary_report(data: Dict[str, pd.DataFrame], output_dir: str):
    """Generate a text summary report."""
    report_lines = [
        "=" * 60,
        "ASTEROIDS RL SUMMARY REPORT",
        "=" * 60,
    ]

    for algo, df in data.items():
        if df is None or len(df) == 0:
            continue
        final = df.tail(100)
        report_lines += [
            f"\n{algo.upper()} Results:",
            "-" * 40,
            f"  Total Episodes: {len(df)}",
            f"  Total Timesteps: {df['timestep'].max():,}",
            f"  Mean Reward: {df['reward'].mean():.2f} ± {df['reward'].std():.2f}",
            f"  Best Score: {df['score'].max()}",
            f"  Highest Level: {df['level'].max()}",
            "\n  Final Performance (last 100 episodes):",
            f"    Mean Reward: {final['reward'].mean():.2f} ± {final['reward'].std():.2f}",
            f"    Mean Score: {final['score'].mean():.1f}",
            f"    Mean Level: {final['level'].mean():.2f}",
            f"    Game Over Rate: {final['game_over'].mean():.2%}",
        ]

    report_lines.append("\n" + "=" * 60)

    report = "\n".join(report_lines)
    print(report)

    os.makedirs(output_dir, exist_ok=True)
    report_path = os.path.join(output_dir, "experiment_summary.txt")
    with open(report_path, "w") as f:
        f.write(report)

    print(f"\nSaved summary report to {report_path}")
    return report_path


def main():
    parser = argparse.ArgumentParser(description="Plot asteroids training results")
    parser.add_argument("--log-dir", type=str, default="./logs", help="Directory containing log files")
    parser.add_argument("--output-dir", type=str, default="./plots", help="Directory to save plots")
    parser.add_argument("--window", type=int, default=50, help="Smoothing window size (default: 50)")
    parser.add_argument("--algos", nargs="+", default=["dqn", "ppo"], help="Algorithms to plot")

    args = parser.parse_args()

    print(f"Loading metrics from {args.log_dir}...")

    data = {}
    for algo in args.algos:
        df = load_metrics(args.log_dir, algo)
        if df is not None:
            print(f"  Loaded {algo}: {len(df)} episodes")
        else:
            print(f"  No data found for {algo}")
        data[algo] = df

    if not any(d is not None for d in data.values()):
        print("\nNo data found! Make sure training has generated metrics files.")
        return

    for algo, df in data.items():
        if df is not None:
            plot_learning_curve(df, algo, args.output_dir, args.window)

    if sum(1 for d in data.values() if d is not None) > 1:
        plot_comparison(data, args.output_dir, args.window)

    generate_summary_report(data, args.output_dir)

    print(f"\nAll plots saved to {args.output_dir}/")


if __name__ == "__main__":
    main()
