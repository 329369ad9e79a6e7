# ── Central defaults (tune here, not scattered across files) ──

# World
GRID_SIZE = 32
SQUARE_SIZE = 16.0
BALL_SPEED = 4.0
SPEED_RATIO = 4.0
N_BALLS = 2

# Rendering
SCALE = 1
DARK_COLOR = (15, 23, 42)      # #0f172a
LIGHT_COLOR = (241, 245, 249)  # #f1f5f9
FPS = 60

# Simulation
N_STEPS = 2000
N_TRAJECTORIES = 20
SEED = 42
