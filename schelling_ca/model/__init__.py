"""Model package for Schelling CA simulation."""

from .cell import CellState, SatisfactionState
from .errors import (SimulationError, OutOfBounds, InvalidDistribution,
                     InvalidThreshold)
from .grid import Grid
from .population import Distribution, initialize, populate
from .satisfaction import evaluate, like_fractions
from .relocation import RelocationResult, relocate
from .state import SimulationState
from .engine import SimulationEngine, step, read_cell

__all__ = [
    'CellState',
    'SatisfactionState',
    'SimulationError',
    'OutOfBounds',
    'InvalidDistribution',
    'InvalidThreshold',
    'Grid',
    'Distribution',
    'initialize',
    'populate',
    'evaluate',
    'like_fractions',
    'RelocationResult',
    'relocate',
    'SimulationState',
    'SimulationEngine',
    'step',
    'read_cell',
]
