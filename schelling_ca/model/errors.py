"""Error kinds raised by the Schelling CA model."""

from typing import Optional


class SimulationError(Exception):
    """Base class for model validation failures."""


class OutOfBounds(SimulationError, IndexError):
    """Coordinate lies outside the grid."""

    def __init__(self, row: int, col: int, size: int):
        self.row = row
        self.col = col
        self.size = size
        super().__init__(
            f"Coordinate ({row}, {col}) outside grid of size {size}"
        )


class InvalidDistribution(SimulationError, ValueError):
    """Population fractions are negative, unnormalized or overfull."""


class InvalidThreshold(SimulationError, ValueError):
    """Satisfaction threshold outside [0, 1]."""

    def __init__(self, threshold: float, message: Optional[str] = None):
        self.threshold = threshold
        super().__init__(
            message or f"Threshold must lie in [0, 1], got {threshold!r}"
        )
