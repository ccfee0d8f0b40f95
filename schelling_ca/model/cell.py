"""Cell and satisfaction enumerations."""

from enum import IntEnum


class CellState(IntEnum):
    """Content of a single grid cell. Values are stored in the grid array."""
    EMPTY = 0
    TYPE_A = 1
    TYPE_B = 2


class SatisfactionState(IntEnum):
    """Per-cell classification produced by the satisfaction evaluator."""
    NOT_APPLICABLE = 0  # Empty cells only
    SATISFIED = 1
    UNSATISFIED = 2


AGENT_TYPES = (CellState.TYPE_A, CellState.TYPE_B)
