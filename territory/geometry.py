import math
from typing import Iterator, Tuple


def circle_intersects_square(cx: float, cy: float, r: float,
                             sx: float, sy: float, s: float) -> bool:
    """Circle (cx, cy, r) vs axis-aligned square with top-left (sx, sy), side s.

    Touching (distance exactly r) counts as a hit.
    """
    closest_x = max(sx, min(cx, sx + s))
    closest_y = max(sy, min(cy, sy + s))
    dx = cx - closest_x
    dy = cy - closest_y
    return dx * dx + dy * dy <= r * r


def _index_range(center: float, r: float, square_size: float,
                 grid_size: int) -> range:
    lo = max(0, math.floor((center - r) / square_size))
    hi = min(grid_size - 1, math.floor((center + r) / square_size))
    return range(lo, hi + 1)


def candidate_cells(next_x: float, next_y: float, r: float,
                    square_size: float, grid_size: int
                    ) -> Iterator[Tuple[int, int]]:
    """Cells whose bounds can overlap the ball's bounding box.

    Row-major: y ascending, then x ascending. Indices are clamped to
    [0, grid_size), never wrapped.
    """
    xs = _index_range(next_x, r, square_size, grid_size)
    for gy in _index_range(next_y, r, square_size, grid_size):
        for gx in xs:
            yield gx, gy
