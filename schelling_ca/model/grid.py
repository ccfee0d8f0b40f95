"""Square lattice of cell states for the Schelling CA."""

import numpy as np
from typing import Dict, Iterable, Sequence, Tuple

from .cell import CellState
from .errors import OutOfBounds

Coordinate = Tuple[int, int]


class Grid:
    """
    Owns the N x N lattice of cell states.

    Coordinate convention: (row, col) for the API and [row, col] for array
    indexing. All single-cell writes go through set(); move() is the only
    multi-cell write and is built on the same bounds validation.
    """

    def __init__(self, size: int):
        if size < 1:
            raise ValueError(f"Grid size must be positive, got {size}")
        self._size = int(size)

        # 0 = empty, 1 = type A, 2 = type B
        self._cells = np.full((self._size, self._size), CellState.EMPTY,
                              dtype=np.int8)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[CellState]]) -> "Grid":
        """Build a grid from a square nested sequence of cell states."""
        size = len(rows)
        if size == 0 or any(len(row) != size for row in rows):
            raise ValueError("Rows must form a non-empty square matrix")
        grid = cls(size)
        for r, row in enumerate(rows):
            for c, state in enumerate(row):
                grid.set(r, c, CellState(state))
        return grid

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the underlying state array."""
        view = self._cells.view()
        view.flags.writeable = False
        return view

    def size(self) -> int:
        return self._size

    def in_bounds(self, row: int, col: int) -> bool:
        """Check if coordinate lies within [0, N) x [0, N)."""
        return 0 <= row < self._size and 0 <= col < self._size

    def _check(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise OutOfBounds(row, col, self._size)

    def get(self, row: int, col: int) -> CellState:
        self._check(row, col)
        return CellState(int(self._cells[row, col]))

    def set(self, row: int, col: int, state: CellState) -> None:
        self._check(row, col)
        self._cells[row, col] = CellState(state)

    def move(self, origin: Coordinate, destination: Coordinate) -> None:
        """
        Atomically move an agent into an empty cell.

        Both endpoints are validated before either cell is written, so a
        rejected move leaves the grid unchanged.
        """
        agent = self.get(*origin)
        target = self.get(*destination)
        if agent == CellState.EMPTY:
            raise ValueError(f"No agent at {origin} to move")
        if target != CellState.EMPTY:
            raise ValueError(f"Destination {destination} is occupied")

        self.set(*destination, agent)
        self.set(*origin, CellState.EMPTY)

    def fill(self, states: Iterable[CellState]) -> None:
        """Write a flat sequence of exactly N*N states in row-major order."""
        flat = np.fromiter((int(s) for s in states), dtype=np.int8)
        if flat.size != self._size * self._size:
            raise ValueError(
                f"Expected {self._size * self._size} states, got {flat.size}"
            )
        self._cells[:, :] = flat.reshape(self._size, self._size)

    def positions_of(self, state: CellState) -> np.ndarray:
        """Return (k, 2) array of (row, col) coordinates holding state."""
        return np.argwhere(self._cells == state)

    def counts(self) -> Dict[CellState, int]:
        """Number of cells of each state."""
        return {s: int(np.count_nonzero(self._cells == s)) for s in CellState}

    def copy(self) -> "Grid":
        """Independent snapshot of this grid."""
        clone = Grid(self._size)
        clone._cells[:, :] = self._cells
        return clone

    def __repr__(self) -> str:
        counts = self.counts()
        return (f"Grid(size={self._size}, a={counts[CellState.TYPE_A]}, "
                f"b={counts[CellState.TYPE_B]}, "
                f"empty={counts[CellState.EMPTY]})")
