"""
Board and cell model for 9x9 Sudoku.

Cells are addressed by a row-major position in [0, 81). Each cell knows the
nine positions of its row, column and 3x3 box (its own position included);
the board owns every cell plus the queue of positions not yet decided.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Iterator, Optional, Tuple

import numpy as np

from .min_queue import IndexedMinQueue

NUM_CELLS = 81
DIGITS = range(1, 10)


class InvalidPosition(ValueError):
    """Raised when a position outside [0, 80] reaches the board."""


def check_position(position: int) -> int:
    if not isinstance(position, (int, np.integer)) or isinstance(position, bool):
        raise InvalidPosition(f"Position must be an integer, got {position!r}")
    if not 0 <= position < NUM_CELLS:
        raise InvalidPosition(f"Position {position} is outside [0, {NUM_CELLS - 1}]")
    return int(position)


def row_positions(position: int) -> Tuple[int, ...]:
    return tuple(9 * (position // 9) + i for i in range(9))


def col_positions(position: int) -> Tuple[int, ...]:
    return tuple(9 * i + position % 9 for i in range(9))


def box_positions(position: int) -> Tuple[int, ...]:
    return tuple(
        ((position // 27) * 3 + i) * 9 + ((position % 9) // 3) * 3 + j
        for i in range(3)
        for j in range(3)
    )


class Cell:
    """
    One grid square.

    Attributes:
        position (int): row-major index in [0, 81)
        value (int): committed digit, 0 while unfilled
        row, col, box (tuple[int, ...]): the 9 positions sharing each unit,
            including this cell's own position
        peers (frozenset[int]): row | col | box without this cell (20 positions)
        candidates (frozenset[int]): last candidate set stored by the
            candidate-set strategy; empty until computed
    """

    __slots__ = ("position", "value", "row", "col", "box", "peers", "candidates")

    def __init__(self, position: int, value: int = 0):
        position = check_position(position)
        if not 0 <= value <= 9:
            raise ValueError(f"Cell value must be in [0, 9], got {value}")
        self.position = position
        self.value = int(value)
        self.row = row_positions(position)
        self.col = col_positions(position)
        self.box = box_positions(position)
        self.peers: FrozenSet[int] = frozenset(self.row + self.col + self.box) - {position}
        self.candidates: FrozenSet[int] = frozenset()

    @property
    def is_filled(self) -> bool:
        return self.value != 0

    def __repr__(self) -> str:
        r, c = divmod(self.position, 9)
        return f"Cell(r{r + 1}c{c + 1}, value={self.value})"


class Board:
    """
    Exclusive owner of up to 81 cells and of the `pending` queue of
    positions that still need a value.
    """

    def __init__(self):
        self.cells: Dict[int, Cell] = {}
        self.pending = IndexedMinQueue()

    @classmethod
    def from_array(cls, grid: np.ndarray) -> "Board":
        """Build a board from a 9x9 integer grid (0 = empty) and fill the blanks."""
        grid = np.asarray(grid)
        if grid.shape != (9, 9):
            raise ValueError(f"Expected a 9x9 grid, got shape {grid.shape}")
        board = cls()
        for position, value in enumerate(grid.ravel()):
            if value != 0:
                board.add_cell(position, int(value))
        board.fill_remaining()
        return board

    def to_array(self) -> np.ndarray:
        """Current values as a 9x9 int array; absent cells read as 0."""
        grid = np.zeros(NUM_CELLS, dtype=int)
        for position, cell in self.cells.items():
            grid[position] = cell.value
        return grid.reshape(9, 9)

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells[p] for p in sorted(self.cells))

    def add_cell(self, position: int, value: int = 0) -> Cell:
        """
        Add a cell at `position` unless one is already there.

        A second call for the same position leaves the board untouched and
        returns the cell stored by the first call.
        """
        position = check_position(position)
        if position not in self.cells:
            self.cells[position] = Cell(position, value)
        return self.cells[position]

    def get_cell(self, position: int) -> Optional[Cell]:
        return self.cells.get(check_position(position))

    def fill_remaining(self) -> None:
        """
        Add an empty cell for every absent position and queue it as
        undecided. The default priority is the position itself; the solver
        re-prioritises before searching.
        """
        for position in range(NUM_CELLS):
            if position not in self.cells:
                self.add_cell(position, 0)
                self.pending.add_or_update(position, position)

    def is_complete(self) -> bool:
        return len(self.cells) == NUM_CELLS and all(c.is_filled for c in self.cells.values())

    def _cell(self, cell) -> Cell:
        if isinstance(cell, Cell):
            return cell
        found = self.get_cell(cell)
        if found is None:
            raise KeyError(f"No cell at position {cell}")
        return found

    def candidates(self, cell) -> FrozenSet[int]:
        """
        Digits 1-9 not committed anywhere in the cell's row, column or box.

        Only non-zero neighbor values constrain the result, and the cell's
        own value is ignored. Recomputed on every call.
        """
        cell = self._cell(cell)
        taken = set()
        for position in cell.peers:
            neighbor = self.cells.get(position)
            if neighbor is not None and neighbor.value:
                taken.add(neighbor.value)
        return frozenset(d for d in DIGITS if d not in taken)

    def is_consistent(self, cell, value: int) -> bool:
        """True iff no row, column or box neighbor already holds `value`."""
        cell = self._cell(cell)
        for unit in (cell.row, cell.col, cell.box):
            for position in unit:
                if position == cell.position:
                    continue
                neighbor = self.cells.get(position)
                if neighbor is not None and neighbor.value == value:
                    return False
        return True

    def solve(self, strategy=None, max_steps: int = 200000, debug: bool = False):
        """
        Solve in place with the backtracking solver.

        Returns:
            SolveResult: SOLVED with the board filled, or UNSOLVABLE /
            STEP_LIMIT with the board left as it was given
        """
        from .solver import BacktrackingSolver, Strategy

        if strategy is None:
            strategy = Strategy.CANDIDATES
        return BacktrackingSolver(self, strategy, max_steps=max_steps, debug=debug).solve()


def validate_givens(board: np.ndarray) -> tuple[bool, str]:
    """Check for duplicate givens; fails fast to avoid long searches."""
    board = np.asarray(board)
    for i in range(9):
        row_vals = [v for v in board[i, :] if v != 0]
        if len(row_vals) != len(set(row_vals)):
            return False, f"Row {i+1} has duplicate given digit"

        col_vals = [v for v in board[:, i] if v != 0]
        if len(col_vals) != len(set(col_vals)):
            return False, f"Column {i+1} has duplicate given digit"

    for br in range(3):
        for bc in range(3):
            block = board[br*3:(br+1)*3, bc*3:(bc+1)*3].ravel()
            block_vals = [v for v in block if v != 0]
            if len(block_vals) != len(set(block_vals)):
                return False, f"3x3 block ({br+1},{bc+1}) has duplicate given digit"

    return True, ""
