import numpy as np
import pytest

from schelling_ca.model.cell import CellState
from schelling_ca.model.errors import OutOfBounds
from schelling_ca.model.grid import Grid

A = CellState.TYPE_A
B = CellState.TYPE_B
E = CellState.EMPTY


def test_new_grid_is_empty():
    grid = Grid(4)
    assert grid.size() == 4
    assert grid.counts() == {E: 16, A: 0, B: 0}


def test_set_then_get():
    grid = Grid(3)
    grid.set(2, 1, B)
    assert grid.get(2, 1) is B
    assert grid.get(1, 2) is E


@pytest.mark.parametrize("row, col", [(3, 0), (0, 3), (-1, 0), (0, -1), (5, 5)])
def test_out_of_bounds_access_is_rejected(row, col):
    grid = Grid(3)
    with pytest.raises(OutOfBounds) as info:
        grid.get(row, col)
    assert (info.value.row, info.value.col, info.value.size) == (row, col, 3)
    with pytest.raises(OutOfBounds):
        grid.set(row, col, A)
    assert grid.counts()[A] == 0


def test_out_of_bounds_is_an_index_error():
    with pytest.raises(IndexError):
        Grid(2).get(2, 0)


def test_from_rows_requires_square_input():
    with pytest.raises(ValueError):
        Grid.from_rows([[A, B], [E]])
    with pytest.raises(ValueError):
        Grid.from_rows([])


def test_cells_view_is_read_only(literal_grid):
    with pytest.raises(ValueError):
        literal_grid.cells[0, 0] = B


def test_move_swaps_agent_into_vacancy(literal_grid):
    literal_grid.move((1, 1), (0, 2))
    assert literal_grid.get(1, 1) is E
    assert literal_grid.get(0, 2) is B


def test_rejected_move_leaves_grid_untouched(literal_grid):
    before = literal_grid.cells.copy()

    with pytest.raises(ValueError):
        literal_grid.move((1, 1), (0, 0))   # occupied destination
    with pytest.raises(ValueError):
        literal_grid.move((0, 2), (1, 0))   # nothing to move
    with pytest.raises(OutOfBounds):
        literal_grid.move((1, 1), (3, 1))

    np.testing.assert_array_equal(literal_grid.cells, before)


def test_fill_writes_row_major():
    grid = Grid(2)
    grid.fill([A, B, E, A])
    assert [grid.get(0, 0), grid.get(0, 1), grid.get(1, 0), grid.get(1, 1)] == [A, B, E, A]
    with pytest.raises(ValueError):
        grid.fill([A, B, E])


def test_copy_is_independent(literal_grid):
    clone = literal_grid.copy()
    clone.set(0, 0, E)
    assert literal_grid.get(0, 0) is A
    assert clone.counts()[A] == literal_grid.counts()[A] - 1
