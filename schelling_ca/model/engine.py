"""Simulation engine and public step interface for Schelling CA."""

import threading
from typing import Dict, Optional, TYPE_CHECKING

import numpy as np

from .cell import CellState, SatisfactionState
from .grid import Grid
from .population import Distribution, initialize
from .relocation import RelocationResult, relocate
from .satisfaction import evaluate, like_fractions, validate_threshold
from .state import SimulationState

if TYPE_CHECKING:
    from ..config import SimulationConfig


def step(grid: Grid, threshold: float,
         rng: Optional[np.random.Generator] = None) -> RelocationResult:
    """
    Run one round: classify every cell, then relocate unsatisfied agents.

    The grid is mutated in place and is the result of the round. Evaluation
    finishes before any move, so the round only ever sees one consistent
    snapshot. The returned RelocationResult is optional bookkeeping (moves,
    counts) that callers are free to ignore.
    """
    threshold = validate_threshold(threshold)
    if rng is None:
        rng = np.random.default_rng()

    classification = evaluate(grid, threshold)
    return relocate(grid, classification, rng)


def read_cell(grid: Grid, row: int, col: int) -> CellState:
    """Bounds-checked read of a single cell."""
    return grid.get(row, col)


class SimulationEngine:
    """
    Owns the grid and random stream for a configured run.

    Each call to step() completes a full evaluate-then-relocate round under
    a lock; snapshot() takes the same lock, so a reader on another thread
    only ever observes completed rounds.
    """

    def __init__(self, config: "SimulationConfig"):
        self.config = config
        self.threshold = validate_threshold(config.threshold)
        self.current_step = 0
        self.rng = np.random.default_rng(config.seed)
        self._lock = threading.Lock()

        dist = config.world.distribution
        self.grid = initialize(
            config.world.total_cells,
            Distribution(dist.frac_a, dist.frac_b, dist.frac_empty),
            rng=self.rng
        )
        self.initial_counts = self.grid.counts()

        # Metrics tracking
        self.total_moves = 0
        self.last_result: Optional[RelocationResult] = None

    def step(self) -> SimulationState:
        """Execute one round and return the resulting snapshot."""
        with self._lock:
            result = step(self.grid, self.threshold, self.rng)
            self.current_step += 1
            self.total_moves += result.moved
            self.last_result = result
            return self._create_state_snapshot(result)

    def snapshot(self) -> SimulationState:
        """Snapshot of the grid as of the last completed round."""
        with self._lock:
            return self._create_state_snapshot(self.last_result)

    def _create_state_snapshot(self,
                               result: Optional[RelocationResult]) -> SimulationState:
        counts = self.grid.counts()
        agents = counts[CellState.TYPE_A] + counts[CellState.TYPE_B]

        # Satisfaction is re-read from the grid as it stands now, so it
        # describes the same cells the snapshot carries
        unsatisfied = int(np.count_nonzero(
            evaluate(self.grid, self.threshold)
            == SatisfactionState.UNSATISFIED
        ))

        if result is None:
            # No round yet: the next round would see exactly this grid
            round_unsatisfied = unsatisfied
            moved = stranded = 0
        else:
            round_unsatisfied, moved, stranded = (result.unsatisfied,
                                                  result.moved,
                                                  result.stranded)

        fractions = like_fractions(self.grid)
        defined = ~np.isnan(fractions)

        metrics = {
            'type_a': counts[CellState.TYPE_A],
            'type_b': counts[CellState.TYPE_B],
            'empty': counts[CellState.EMPTY],
            'round_unsatisfied': round_unsatisfied,  # before this round's moves
            'moved': moved,
            'stranded': stranded,
            'unsatisfied': unsatisfied,              # after this round's moves
            'satisfied_fraction': (1 - unsatisfied / agents) if agents else 1.0,
            'segregation': (float(fractions[defined].mean())
                            if np.any(defined) else 0.0),
        }

        return SimulationState(
            step=self.current_step,
            cells=self.grid.cells.copy(),
            metrics=metrics
        )

    def is_converged(self) -> bool:
        """True once a round found no unsatisfied agent."""
        return self.last_result is not None and self.last_result.unsatisfied == 0

    def is_finished(self) -> bool:
        """Check if simulation should terminate."""
        return (self.current_step >= self.config.max_steps or
                self.is_converged())

    def get_summary(self) -> Dict:
        """Get summary statistics for the simulation."""
        counts = self.grid.counts()
        return {
            'total_steps': self.current_step,
            'total_moves': self.total_moves,
            'converged': self.is_converged(),
            'type_a': counts[CellState.TYPE_A],
            'type_b': counts[CellState.TYPE_B],
            'empty': counts[CellState.EMPTY],
        }
