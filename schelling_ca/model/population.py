"""Unbiased random placement of the initial population."""

import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

import numpy as np

from .cell import CellState
from .errors import InvalidDistribution
from .grid import Grid

# Allowed deviation of the fraction sum from 1.0
SUM_TOLERANCE = 1e-6


@dataclass(frozen=True)
class Distribution:
    """Fractions of type A, type B and empty cells; must sum to 1.0."""
    frac_a: float
    frac_b: float
    frac_empty: float

    def __post_init__(self):
        fractions = (self.frac_a, self.frac_b, self.frac_empty)
        if any(not math.isfinite(f) for f in fractions):
            raise InvalidDistribution(f"Fractions must be finite: {fractions}")
        if any(f < 0 for f in fractions):
            raise InvalidDistribution(f"Fractions must be non-negative: {fractions}")
        total = sum(fractions)
        if abs(total - 1.0) > SUM_TOLERANCE:
            raise InvalidDistribution(
                f"Fractions must sum to 1.0 (got {total:.9f})"
            )

    @classmethod
    def coerce(cls, value: Union["Distribution", Sequence[float]]) -> "Distribution":
        """Accept a Distribution or a (frac_a, frac_b, frac_empty) sequence."""
        if isinstance(value, Distribution):
            return value
        try:
            frac_a, frac_b, frac_empty = (float(v) for v in value)
        except (TypeError, ValueError) as e:
            raise InvalidDistribution(
                f"Expected three fractions, got {value!r}"
            ) from e
        return cls(frac_a, frac_b, frac_empty)

    def target_counts(self, cell_count: int) -> Tuple[int, int, int]:
        """
        Floor the agent fractions against cell_count.

        The rounding remainder is absorbed by the empty count, so agents are
        never created or dropped relative to the floored targets.
        """
        count_a = math.floor(self.frac_a * cell_count)
        count_b = math.floor(self.frac_b * cell_count)
        count_empty = cell_count - count_a - count_b
        if count_empty < 0:
            raise InvalidDistribution(
                f"Agent counts {count_a} + {count_b} exceed {cell_count} cells"
            )
        return count_a, count_b, count_empty


def side_length(total_cells: int) -> int:
    """Side of the largest square lattice that fits total_cells."""
    if total_cells < 1:
        raise ValueError(f"total_cells must be positive, got {total_cells}")
    return math.isqrt(int(total_cells))


def populate(grid: Grid, distribution: Distribution,
             rng: np.random.Generator) -> Grid:
    """
    Fill every cell of grid with a uniformly random arrangement.

    Builds a flat pool holding the exact target counts, permutes it with
    Fisher-Yates and writes it row-major, so placement is independent of
    grid geometry.
    """
    cell_count = grid.size() ** 2
    count_a, count_b, count_empty = distribution.target_counts(cell_count)

    pool = np.empty(cell_count, dtype=np.int8)
    pool[:count_a] = CellState.TYPE_A
    pool[count_a:count_a + count_b] = CellState.TYPE_B
    pool[count_a + count_b:] = CellState.EMPTY

    # Generator.shuffle is an in-place Fisher-Yates
    rng.shuffle(pool)

    grid.fill(pool)
    return grid


def initialize(total_cells: int,
               distribution: Union[Distribution, Sequence[float]],
               rng_seed: Optional[int] = None,
               rng: Optional[np.random.Generator] = None) -> Grid:
    """
    Create and populate a grid of floor(sqrt(total_cells))**2 cells.

    Pass rng_seed for a replayable placement, or an existing rng to share
    one random stream with later steps. Passing both is an error.
    """
    if rng_seed is not None and rng is not None:
        raise ValueError("Pass either rng_seed or rng, not both")
    distribution = Distribution.coerce(distribution)
    if rng is None:
        rng = np.random.default_rng(rng_seed)

    grid = Grid(side_length(total_cells))
    return populate(grid, distribution, rng)
