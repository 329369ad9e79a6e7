import numpy as np
from typing import List, Tuple, Optional, Dict
from dataclasses import dataclass
import os

import territory as T
from territory.grid import Color

os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = '1'
import pygame


@dataclass
class AppearanceConfig:
    """Pixels only — nothing here feeds back into the simulation."""
    scale: int = T.SCALE
    dark_color: Tuple[int, int, int] = T.DARK_COLOR
    light_color: Tuple[int, int, int] = T.LIGHT_COLOR


class Renderer:
    """Maps grid + ball state → pixel frames. Canvas units are pixels × scale."""

    def __init__(self, grid_size: int, square_size: float,
                 config: Optional[AppearanceConfig] = None):
        self.grid_size = grid_size
        self.square_size = square_size
        self.config = config or AppearanceConfig()
        self._display_initialized = False

    @property
    def resolution(self) -> int:
        return int(round(self.grid_size * self.square_size * self.config.scale))

    def _palette(self) -> Dict[int, Tuple[int, int, int]]:
        return {int(Color.DARK): self.config.dark_color,
                int(Color.LIGHT): self.config.light_color}

    def render(self, grid: np.ndarray, states: np.ndarray, radius: float,
               colors: List[int]) -> np.ndarray:
        """Render single frame → (res, res, 3) uint8.

        grid: (n, n) Color values indexed [y, x]; states: (n_balls, 4).
        """
        res = self.resolution
        scale = self.config.scale
        palette = self._palette()
        side = self.square_size * scale

        surface = pygame.Surface((res, res))
        for gy in range(self.grid_size):
            for gx in range(self.grid_size):
                rect = pygame.Rect(int(gx * side), int(gy * side),
                                   int(np.ceil(side)), int(np.ceil(side)))
                surface.fill(palette[int(grid[gy, gx])], rect)

        pr = max(1, int(radius * scale))
        for i in range(states.shape[0]):
            px = int(states[i, 0] * scale)
            py = int(states[i, 1] * scale)
            pygame.draw.circle(surface, palette[int(colors[i])], (px, py), pr)

        return pygame.surfarray.array3d(surface).transpose(1, 0, 2)

    def render_trajectory(self, trajectory: Dict) -> np.ndarray:
        """Render full trajectory → (T+1, res, res, 3) uint8."""
        states = trajectory['states']
        grids = trajectory['grids']
        radius = trajectory['config'].ball_radius
        colors = trajectory['colors']
        res = self.resolution

        frames = np.zeros((len(states), res, res, 3), dtype=np.uint8)
        for t in range(len(states)):
            frames[t] = self.render(grids[t], states[t], radius, colors)
        return frames

    def play(self, engine, fps: int = T.FPS, max_ticks: Optional[int] = None):
        """Drive engine.tick() once per frame. Press Q or close window to exit."""
        if not self._display_initialized:
            pygame.init()
            self._display_initialized = True

        res = self.resolution
        screen = pygame.display.set_mode((res, res))
        pygame.display.set_caption('Territory')
        clock = pygame.time.Clock()
        colors = [int(b.color) for b in engine.balls]

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                if event.type == pygame.KEYDOWN and event.key == pygame.K_q:
                    running = False

            engine.tick()
            frame = self.render(engine.grid_snapshot(), engine.get_state(),
                                engine.config.ball_radius, colors)
            surf = pygame.surfarray.make_surface(frame.transpose(1, 0, 2))
            screen.blit(surf, (0, 0))
            pygame.display.flip()

            if max_ticks is not None and engine.time >= max_ticks:
                running = False
            clock.tick(fps)

        pygame.quit()
        self._display_initialized = False


def save_frames(frames: np.ndarray, path: str):
    """Save frames as individual PNGs."""
    os.makedirs(path, exist_ok=True)
    for t in range(len(frames)):
        surf = pygame.surfarray.make_surface(frames[t].transpose(1, 0, 2))
        pygame.image.save(surf, os.path.join(path, f'frame_{t:05d}.png'))
