class InvalidConfiguration(ValueError):
    """Raised when a world cannot be built from the supplied parameters."""


class OutOfBounds(IndexError):
    """Cell index outside [0, grid_size). Always a physics bug, never clamped."""
