"""Relocation of unsatisfied agents to random vacancies."""

from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np

from .cell import CellState, SatisfactionState
from .grid import Grid, Coordinate


@dataclass
class RelocationResult:
    """Outcome of one relocation round."""
    moves: List[Tuple[Coordinate, Coordinate]] = field(default_factory=list)
    unsatisfied: int = 0
    vacancies: int = 0

    @property
    def moved(self) -> int:
        return len(self.moves)

    @property
    def stranded(self) -> int:
        """Unsatisfied agents left in place because vacancies ran out."""
        return self.unsatisfied - self.moved


def relocate(grid: Grid, classification: np.ndarray,
             rng: np.random.Generator) -> RelocationResult:
    """
    Move every unsatisfied agent to a distinct random vacancy.

    Movers are visited in random order and each takes the next vacancy from
    a shuffled pool drawn without replacement. Both lists come from the
    snapshot before any move, so cells vacated this round are not reused and
    no agent moves twice. Movers left over once the pool is exhausted stay
    put until the next round.
    """
    if classification.shape != grid.cells.shape:
        raise ValueError(
            f"Classification shape {classification.shape} does not match "
            f"grid shape {grid.cells.shape}"
        )

    movers = np.argwhere(
        (classification == SatisfactionState.UNSATISFIED)
        & (grid.cells != CellState.EMPTY)
    )
    vacancies = grid.positions_of(CellState.EMPTY)

    rng.shuffle(movers)
    rng.shuffle(vacancies)

    result = RelocationResult(unsatisfied=len(movers), vacancies=len(vacancies))

    # zip stops at the shorter list: surplus movers are stranded
    for (r, c), (vr, vc) in zip(movers, vacancies):
        origin = (int(r), int(c))
        destination = (int(vr), int(vc))
        grid.move(origin, destination)
        result.moves.append((origin, destination))

    return result
