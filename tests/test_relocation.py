import numpy as np
import pytest

from schelling_ca.model.cell import CellState, SatisfactionState
from schelling_ca.model.grid import Grid
from schelling_ca.model.population import initialize
from schelling_ca.model.relocation import relocate
from schelling_ca.model.satisfaction import evaluate

A = CellState.TYPE_A
B = CellState.TYPE_B
E = CellState.EMPTY


def _all_unsatisfied(grid):
    classification = np.full(grid.cells.shape, SatisfactionState.UNSATISFIED,
                             dtype=np.int8)
    classification[grid.cells == E] = SatisfactionState.NOT_APPLICABLE
    return classification


def test_vacancies_limit_number_of_moves(rng):
    grid = Grid.from_rows([
        [A, B, A],
        [B, E, B],
        [A, B, E],
    ])
    vacancies = {tuple(p) for p in grid.positions_of(E)}

    result = relocate(grid, _all_unsatisfied(grid), rng)

    assert result.unsatisfied == 7
    assert result.vacancies == 2
    assert result.moved == 2
    assert result.stranded == 5
    assert {dest for _, dest in result.moves} == vacancies
    for origin, _ in result.moves:
        assert grid.get(*origin) is E


def test_moves_use_distinct_pre_round_vacancies(rng):
    grid = initialize(900, (0.45, 0.45, 0.1), rng_seed=2)
    before = grid.copy()
    classification = evaluate(grid, 0.75)
    unsatisfied = int(np.count_nonzero(classification == SatisfactionState.UNSATISFIED))
    vacancy_count = before.counts()[E]

    result = relocate(grid, classification, rng)

    origins = [o for o, _ in result.moves]
    destinations = [d for _, d in result.moves]
    assert result.moved == min(unsatisfied, vacancy_count)
    assert len(set(origins)) == len(origins)
    assert len(set(destinations)) == len(destinations)
    for origin, dest in result.moves:
        assert before.get(*dest) is E
        assert classification[origin] == SatisfactionState.UNSATISFIED
        assert grid.get(*dest) is before.get(*origin)
    assert not set(origins) & set(destinations)


def test_relocation_conserves_counts(rng):
    grid = initialize(2500, (0.4, 0.4, 0.2), rng_seed=8)
    counts = grid.counts()
    relocate(grid, evaluate(grid, 0.7), rng)
    assert grid.counts() == counts


def test_satisfied_agents_stay_put(rng):
    grid = initialize(400, (0.4, 0.4, 0.2), rng_seed=4)
    before = grid.copy()
    classification = evaluate(grid, 0.5)
    relocate(grid, classification, rng)

    stayed = classification == SatisfactionState.SATISFIED
    np.testing.assert_array_equal(grid.cells[stayed], before.cells[stayed])


def test_every_unsatisfied_agent_moves_when_room(rng):
    grid = Grid.from_rows([
        [A, E, E],
        [E, E, E],
        [E, E, B],
    ])
    classification = _all_unsatisfied(grid)
    result = relocate(grid, classification, rng)
    assert result.moved == 2
    assert result.stranded == 0
    assert grid.get(0, 0) is E and grid.get(2, 2) is E


def test_no_vacancies_is_not_an_error(rng):
    grid = Grid.from_rows([[A, B], [B, A]])
    result = relocate(grid, _all_unsatisfied(grid), rng)
    assert result.moved == 0
    assert result.stranded == 4
    assert grid.get(0, 0) is A


def test_unsatisfied_mark_on_empty_cell_is_ignored(rng):
    grid = Grid.from_rows([[A, E], [E, E]])
    classification = np.full((2, 2), SatisfactionState.UNSATISFIED, dtype=np.int8)
    result = relocate(grid, classification, rng)
    assert result.unsatisfied == 1
    assert grid.counts()[A] == 1


def test_shape_mismatch_is_rejected(rng, literal_grid):
    with pytest.raises(ValueError):
        relocate(literal_grid, np.zeros((2, 2), dtype=np.int8), rng)
