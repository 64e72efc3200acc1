from __future__ import annotations

import numpy as np

from rl.metrics_callback import CSV_FIELDS, episode_row
from rl.plot_results import smooth


def test_episode_row_matches_csv_header():
    info = {
        "episode": {"r": 12.5, "l": 300},
        "score": 270,
        "level": 2,
        "asteroids_destroyed": 9,
        "shots_fired": 40,
        "lives_lost": 3,
        "game_over": True,
    }
    row = episode_row(1000, 4, info)
    assert len(row) == len(CSV_FIELDS)
    assert dict(zip(CSV_FIELDS, row)) == {
        "timestep": 1000,
        "episode": 4,
        "reward": 12.5,
        "length": 300,
        "score": 270,
        "level": 2,
        "asteroids_destroyed": 9,
        "shots_fired": 40,
        "lives_lost": 3,
        "game_over": 1,
    }


def test_smooth_rolling_mean():
    np.testing.assert_allclose(smooth(np.array([1.0, 2.0, 3.0, 4.0]), window=2), [1.5, 2.5, 3.5])
    short = np.array([1.0, 2.0])
    assert smooth(short, window=10) is short
