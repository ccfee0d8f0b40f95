"""Neighbourhood satisfaction evaluation."""

import math

import numpy as np
from scipy.ndimage import convolve

from .cell import AGENT_TYPES, CellState, SatisfactionState
from .errors import InvalidThreshold
from .grid import Grid

# Moore neighbourhood without the centre cell
MOORE_KERNEL = np.array([
    [1, 1, 1],
    [1, 0, 1],
    [1, 1, 1]
], dtype=np.int32)


def validate_threshold(threshold: float) -> float:
    """Return threshold as float, or raise InvalidThreshold."""
    try:
        value = float(threshold)
    except (TypeError, ValueError) as e:
        raise InvalidThreshold(threshold) from e
    if math.isnan(value) or not 0.0 <= value <= 1.0:
        raise InvalidThreshold(threshold)
    return value


def _neighbour_count(mask: np.ndarray) -> np.ndarray:
    """Count True cells in each Moore neighbourhood. Off-grid cells are absent."""
    return convolve(mask.astype(np.int32), MOORE_KERNEL,
                    mode='constant', cval=0)


def neighbour_counts(grid: Grid):
    """
    Return (like, occupied) neighbour counts for every cell.

    like[r, c] counts neighbours sharing the type of cell (r, c); it is zero
    for empty cells. occupied[r, c] counts non-empty neighbours.
    """
    cells = grid.cells
    occupied = _neighbour_count(cells != CellState.EMPTY)

    like = np.zeros_like(occupied)
    for agent_type in AGENT_TYPES:
        is_type = cells == agent_type
        like[is_type] = _neighbour_count(is_type)[is_type]

    return like, occupied


def like_fractions(grid: Grid) -> np.ndarray:
    """
    Fraction of like-typed occupied neighbours per cell.

    NaN where the fraction is undefined: empty cells and agents with no
    occupied neighbour.
    """
    like, occupied = neighbour_counts(grid)
    defined = (grid.cells != CellState.EMPTY) & (occupied > 0)
    fractions = np.full(like.shape, np.nan, dtype=np.float64)
    fractions[defined] = like[defined] / occupied[defined]
    return fractions


def evaluate(grid: Grid, threshold: float) -> np.ndarray:
    """
    Classify every cell against the satisfaction threshold.

    Returns an int8 array of SatisfactionState values. Agents whose like
    fraction is at least threshold are satisfied; agents with no occupied
    neighbour are satisfied vacuously. The grid is only read.
    """
    threshold = validate_threshold(threshold)

    cells = grid.cells
    like, occupied = neighbour_counts(grid)
    agents = cells != CellState.EMPTY

    classification = np.full(cells.shape, SatisfactionState.NOT_APPLICABLE,
                             dtype=np.int8)
    classification[agents] = SatisfactionState.SATISFIED

    judged = agents & (occupied > 0)
    fractions = like[judged] / occupied[judged]
    unhappy = np.zeros(cells.shape, dtype=bool)
    unhappy[judged] = fractions < threshold
    classification[unhappy] = SatisfactionState.UNSATISFIED

    return classification
