"""
Territory capture engine — deterministic two-ball grid simulation.

- Square grid of cells, each owned by DARK or LIGHT
- A ball bounces off cells of its OWN color and flips them
- Ball speed follows its color's territory share every tick
- State per ball: (x, y, vx, vy, color, radius)
"""

import copy
import math
import numpy as np
from dataclasses import dataclass
from typing import List, Optional, Dict

import territory as T
from territory.errors import InvalidConfiguration
from territory.geometry import candidate_cells, circle_intersects_square
from territory.grid import Color, Grid


@dataclass
class Ball:
    """Physics-only state container. Color is fixed for the ball's lifetime."""
    x: float
    y: float
    vx: float
    vy: float
    color: Color
    radius: float
    ball_id: int = 0

    @property
    def speed(self) -> float:
        return math.hypot(self.vx, self.vy)

    @property
    def heading(self) -> float:
        return math.atan2(self.vy, self.vx)

    @property
    def state(self) -> np.ndarray:
        return np.array([self.x, self.y, self.vx, self.vy])


@dataclass(frozen=True)
class BallSnapshot:
    """Read-only view handed to renderers."""
    x: float
    y: float
    vx: float
    vy: float
    color: Color
    radius: float
    ball_id: int


@dataclass
class WorldConfig:
    grid_size: int = T.GRID_SIZE
    square_size: float = T.SQUARE_SIZE
    ball_speed: float = T.BALL_SPEED
    speed_ratio: float = T.SPEED_RATIO
    seed: Optional[int] = None

    @property
    def canvas_size(self) -> float:
        return self.grid_size * self.square_size

    @property
    def ball_radius(self) -> float:
        return self.square_size / 2

    @property
    def total_cells(self) -> int:
        return self.grid_size * self.grid_size

    def validate(self):
        if (isinstance(self.grid_size, bool)
                or not isinstance(self.grid_size, (int, np.integer))
                or self.grid_size <= 0):
            raise InvalidConfiguration(
                f"grid_size must be a positive integer, got {self.grid_size!r}")
        for name in ('square_size', 'ball_speed', 'speed_ratio'):
            value = getattr(self, name)
            # `not value > 0` also rejects NaN
            if (isinstance(value, bool)
                    or not isinstance(value, (int, float, np.number))
                    or not value > 0):
                raise InvalidConfiguration(f"{name} must be > 0, got {value!r}")


def target_speed(ball_speed: float, speed_ratio: float, own_ratio: float) -> float:
    """Speed for a ball whose color owns `own_ratio` of the grid.

    own_ratio 0 → ball_speed / speed_ratio, own_ratio 1 → ball_speed * speed_ratio.
    speed_ratio < 1 inverts the feedback; accepted as given.
    """
    multiplier = 1 / speed_ratio + (speed_ratio - 1 / speed_ratio) * own_ratio
    return ball_speed * multiplier


def _first_collision(ball: Ball, grid: Grid, next_x: float, next_y: float,
                     square_size: float):
    for gx, gy in candidate_cells(next_x, next_y, ball.radius,
                                  square_size, grid.size):
        if grid.color_at(gx, gy) != ball.color:
            continue
        if circle_intersects_square(next_x, next_y, ball.radius,
                                    gx * square_size, gy * square_size,
                                    square_size):
            return gx, gy
    return None


def _resolve_wall_collision(ball: Ball, canvas_size: float):
    r = ball.radius
    if ball.x - r <= 0 or ball.x + r >= canvas_size:
        ball.vx = -ball.vx
        ball.x = max(r, min(canvas_size - r, ball.x))
    if ball.y - r <= 0 or ball.y + r >= canvas_size:
        ball.vy = -ball.vy
        ball.y = max(r, min(canvas_size - r, ball.y))


def step_ball(ball: Ball, grid: Grid, config: WorldConfig) -> Optional[Dict]:
    """
    Advance one ball by one tick.

    ratio → speed (heading kept) → grid collision → walls.
    On a capture the ball stays put, one velocity axis flips and one cell
    flips. Returns {'cell': (gx, gy), 'axis': 'x' | 'y'} or None.
    """
    own_ratio = grid.count_color(ball.color) / (grid.size * grid.size)
    speed = target_speed(config.ball_speed, config.speed_ratio, own_ratio)
    angle = math.atan2(ball.vy, ball.vx)
    ball.vx = speed * math.cos(angle)
    ball.vy = speed * math.sin(angle)

    next_x = ball.x + ball.vx
    next_y = ball.y + ball.vy

    capture = None
    hit = _first_collision(ball, grid, next_x, next_y, config.square_size)
    if hit is not None:
        gx, gy = hit
        half = config.square_size / 2
        center_x = gx * config.square_size + half
        center_y = gy * config.square_size + half
        if abs(ball.x - center_x) > abs(ball.y - center_y):
            ball.vx = -ball.vx
            axis = 'x'
        else:
            ball.vy = -ball.vy
            axis = 'y'
        grid.flip(gx, gy)
        capture = {'cell': (gx, gy), 'axis': axis}
    else:
        ball.x = next_x
        ball.y = next_y

    _resolve_wall_collision(ball, config.canvas_size)
    return capture


class TerritoryEngine:
    """
    Deterministic two-ball territory engine.

    Tick: for each ball in list order, step_ball against the grid as left
    by the balls before it.
    """

    def __init__(self, config: Optional[WorldConfig] = None,
                 rng: Optional[np.random.RandomState] = None):
        self.config = config or WorldConfig()
        self.config.validate()
        self.rng = rng if rng is not None else np.random.RandomState(self.config.seed)
        self.grid: Grid = Grid.split(self.config.grid_size)
        self.balls: List[Ball] = []
        self.time: int = 0
        self.capture_log: List[Dict] = []
        self.initialize()

    def initialize(self, balls: Optional[List[Ball]] = None,
                   grid: Optional[Grid] = None) -> List[Ball]:
        if grid is not None:
            if grid.size != self.config.grid_size:
                raise InvalidConfiguration(
                    f"grid size {grid.size} != configured {self.config.grid_size}")
            self.grid = Grid(grid.cells)
        else:
            self.grid = Grid.split(self.config.grid_size)

        if balls is not None:
            if len(balls) > T.N_BALLS:
                raise InvalidConfiguration(
                    f"at most {T.N_BALLS} balls supported, got {len(balls)}")
            for b in balls:
                if b.radius != self.config.ball_radius:
                    raise InvalidConfiguration(
                        f"ball radius {b.radius} != square_size / 2 "
                        f"({self.config.ball_radius})")
            self.balls = [copy.deepcopy(b) for b in balls]
        else:
            canvas = self.config.canvas_size
            self.balls = [
                self._create_ball(0, Color.LIGHT, canvas * 0.25, canvas * 0.5),
                self._create_ball(1, Color.DARK, canvas * 0.75, canvas * 0.5),
            ]

        self.time = 0
        self.capture_log = []
        return self.balls

    def _create_ball(self, ball_id: int, color: Color, x: float, y: float) -> Ball:
        angle = self.rng.uniform(0, 2 * np.pi)
        vx = self.config.ball_speed * math.cos(angle)
        vy = self.config.ball_speed * math.sin(angle)
        return Ball(x=x, y=y, vx=vx, vy=vy, color=color,
                    radius=self.config.ball_radius, ball_id=ball_id)

    def tick(self) -> None:
        for ball in self.balls:
            capture = step_ball(ball, self.grid, self.config)
            if capture is not None:
                capture.update(time=self.time, ball_id=ball.ball_id)
                self.capture_log.append(capture)
        self.time += 1

    # State access

    @property
    def n_balls(self) -> int:
        return len(self.balls)

    def grid_snapshot(self) -> np.ndarray:
        """(grid_size, grid_size) read-only int8, indexed [y, x]."""
        return self.grid.snapshot()

    def ball_snapshot(self, i: int) -> BallSnapshot:
        b = self.balls[i]
        return BallSnapshot(x=b.x, y=b.y, vx=b.vx, vy=b.vy, color=b.color,
                            radius=b.radius, ball_id=b.ball_id)

    def get_state(self) -> np.ndarray:
        """(n_balls, 4) → [x, y, vx, vy]"""
        return np.array([b.state for b in self.balls])

    def set_state(self, state: np.ndarray):
        assert state.shape == (len(self.balls), 4)
        for i, ball in enumerate(self.balls):
            ball.x, ball.y, ball.vx, ball.vy = (float(v) for v in state[i])

    # Territory

    def territory(self) -> Dict[Color, int]:
        return {c: self.grid.count_color(c) for c in Color}

    def territory_ratio(self, color: Color) -> float:
        return self.grid.count_color(color) / self.config.total_cells

    def invariants(self) -> Dict:
        counts = self.territory()
        return {
            'territory': counts,
            'total_cells': sum(counts.values()),
            'speeds': [b.speed for b in self.balls],
        }


def generate_trajectory(config: WorldConfig, n_steps: int = T.N_STEPS,
                        balls: Optional[List[Ball]] = None) -> Dict:
    """Returns dict with states, grids, territory, speeds, captures."""
    engine = TerritoryEngine(config)
    if balls is not None:
        engine.initialize(balls=balls)

    def territory_row():
        counts = engine.territory()
        return [counts[Color.DARK], counts[Color.LIGHT]]

    states = [engine.get_state()]
    grids = [engine.grid_snapshot()]
    territory = [territory_row()]
    speeds = [[b.speed for b in engine.balls]]

    for _ in range(n_steps):
        engine.tick()
        states.append(engine.get_state())
        grids.append(engine.grid_snapshot())
        territory.append(territory_row())
        speeds.append([b.speed for b in engine.balls])

    return {
        'states': np.array(states),
        'grids': np.array(grids, dtype=np.int8),
        'territory': np.array(territory),
        'speeds': np.array(speeds),
        'colors': np.array([int(b.color) for b in engine.balls]),
        'captures': engine.capture_log,
        'config': config,
    }


def generate_dataset(n_trajectories: int = T.N_TRAJECTORIES,
                     n_steps: int = T.N_STEPS,
                     seed: int = T.SEED,
                     **kwargs) -> List[Dict]:
    trajectories = []
    for i in range(n_trajectories):
        config = WorldConfig(seed=seed + i, **kwargs)
        traj = generate_trajectory(config, n_steps=n_steps)
        trajectories.append(traj)
    return trajectories
