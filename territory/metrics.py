import numpy as np
from typing import Dict, List

from territory.grid import Color


def territory_share(territory, color=Color.LIGHT):
    """(T+1, 2) cell counts → (T+1,) fraction owned by `color`."""
    territory = np.asarray(territory, dtype=np.float64)
    return territory[:, int(color)] / territory.sum(axis=1)


def ball_speeds(states):
    vel = states[:, :, 2:]
    return np.linalg.norm(vel, axis=2)


def capture_counts(captures: List[Dict], n_balls: int = 2) -> np.ndarray:
    counts = np.zeros(n_balls, dtype=np.int64)
    for c in captures:
        counts[c['ball_id']] += 1
    return counts


def lead_changes(territory) -> int:
    """How often the majority color switches (ties don't count as a lead)."""
    territory = np.asarray(territory)
    lead = np.sign(territory[:, Color.LIGHT] - territory[:, Color.DARK])
    lead = lead[lead != 0]
    return int(np.count_nonzero(lead[1:] != lead[:-1]))


def territory_conserved(territory, total_cells: int) -> bool:
    """Every recorded tick accounts for all cells."""
    territory = np.asarray(territory)
    return bool((territory.sum(axis=1) == total_cells).all())
