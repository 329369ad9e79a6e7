"""Trajectory measurements."""

import numpy as np
import pytest

from territory.engine import WorldConfig, generate_trajectory
from territory.grid import Color
from territory.metrics import (
    ball_speeds, capture_counts, lead_changes, territory_conserved, territory_share,
)


class TestMetrics:
    def test_territory_share(self):
        territory = np.array([[8, 8], [9, 7], [4, 12]])
        assert territory_share(territory, Color.LIGHT).tolist() == \
            pytest.approx([0.5, 7 / 16, 0.75])
        assert territory_share(territory, Color.DARK).tolist() == \
            pytest.approx([0.5, 9 / 16, 0.25])

    def test_ball_speeds(self):
        states = np.array([[[0, 0, 3, 4], [0, 0, 0, -2]]], dtype=float)
        assert ball_speeds(states).tolist() == [[5.0, 2.0]]

    def test_capture_counts(self):
        captures = [{'ball_id': 0}, {'ball_id': 1}, {'ball_id': 0}]
        assert capture_counts(captures).tolist() == [2, 1]

    def test_lead_changes_skip_ties(self):
        # light leads, tie, dark leads, dark leads, light leads
        territory = np.array([[7, 9], [8, 8], [9, 7], [10, 6], [6, 10]])
        assert lead_changes(territory) == 2

    def test_territory_conserved(self):
        assert territory_conserved(np.array([[8, 8], [9, 7]]), 16)
        assert not territory_conserved(np.array([[8, 8], [9, 8]]), 16)

    def test_speeds_follow_share(self):
        """Each recorded speed matches the feedback rule for the share at that tick."""
        cfg = WorldConfig(grid_size=8, square_size=10.0, ball_speed=2.0,
                          speed_ratio=2.0, seed=3)
        traj = generate_trajectory(cfg, n_steps=100)
        speeds = ball_speeds(traj['states'])
        assert np.allclose(speeds, traj['speeds'])
        assert (speeds[1:] >= 1.0 - 1e-9).all()
        assert (speeds[1:] <= 4.0 + 1e-9).all()
