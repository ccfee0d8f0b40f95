import numpy as np
import pytest

from schelling_ca.model.cell import CellState
from schelling_ca.model.grid import Grid

A = CellState.TYPE_A
B = CellState.TYPE_B
E = CellState.EMPTY


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def literal_grid() -> Grid:
    """3x3 world with a dissatisfied B in the centre."""
    return Grid.from_rows([
        [A, A, E],
        [E, B, E],
        [A, E, B],
    ])
