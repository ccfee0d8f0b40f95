"""State snapshot dataclasses for Schelling CA simulation."""

from dataclasses import dataclass
from typing import Dict

import numpy as np

from .cell import CellState


@dataclass
class SimulationState:
    """Complete snapshot of simulation state after a given round."""
    step: int
    cells: np.ndarray          # Copy of the grid's state array
    metrics: Dict[str, float]  # counts, movement, satisfaction, segregation

    @property
    def size(self) -> int:
        return self.cells.shape[0]

    def count(self, state: CellState) -> int:
        return int(np.count_nonzero(self.cells == state))

    @property
    def converged(self) -> bool:
        """True when the round that produced this state found no unsatisfied agent."""
        return self.metrics.get('round_unsatisfied', 0) == 0
