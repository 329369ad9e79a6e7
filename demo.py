"""
Quick demo — watch the two balls fight over the grid.
Run: venv/bin/python demo.py
Press Q or close window to exit.
"""
from territory.engine import TerritoryEngine, WorldConfig
from territory.grid import Color
from territory.renderer import Renderer, AppearanceConfig
import territory as T

config = WorldConfig(seed=T.SEED)
engine = TerritoryEngine(config)

renderer = Renderer(config.grid_size, config.square_size, AppearanceConfig())
renderer.play(engine, fps=T.FPS)

print(f"Ticks: {engine.time}")
print(f"Captures: {len(engine.capture_log)}")
print(f"Light share: {engine.territory_ratio(Color.LIGHT):.3f}")
