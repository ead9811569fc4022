"""
Backtracking Sudoku solver with MRV cell ordering.

Undecided cells wait in the board's `pending` queue, prioritised by how many
digits are still admissible for them. The search repeatedly takes the most
constrained cell, tries its admissible digits in increasing order and
backtracks on dead ends. The decision history lives in an explicit stack of
frames instead of the Python call stack.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

import numpy as np

from .board import DIGITS, Board, Cell, validate_givens


class Strategy(Enum):
    """How admissible digits are found for a cell."""

    # Materialise the candidate set once per decision and keep it on the cell.
    CANDIDATES = "candidates"
    # Scan the neighbors for each digit 1-9; nothing stored.
    CONSISTENCY = "consistency"


class SolveStatus(Enum):
    SOLVED = "solved"
    UNSOLVABLE = "unsolvable"
    STEP_LIMIT = "step_limit"


class NextKind(Enum):
    DECIDED = "decided"
    SEARCH_COMPLETE = "search_complete"
    EMPTY_ON_ERROR = "empty_on_error"


@dataclass(frozen=True)
class NextCell:
    """Outcome of asking for the next cell to decide."""

    kind: NextKind
    position: Optional[int] = None


@dataclass
class SolveResult:
    status: SolveStatus
    board: Board
    steps: int = 0
    backtracks: int = 0
    message: str = ""

    @property
    def solved(self) -> bool:
        return self.status is SolveStatus.SOLVED

    def values(self) -> Dict[int, int]:
        """Total mapping position -> digit. Only defined for a solved board."""
        if not self.solved:
            raise ValueError(f"No values for a {self.status.value} result")
        return {cell.position: cell.value for cell in self.board}


@dataclass
class Frame:
    """One decision: the cell being tried and the digits it has left."""

    cell: Cell
    remaining: List[int] = field(default_factory=list)
    assigned: int = 0


def admissible_values(board: Board, cell: Cell, strategy: Strategy) -> List[int]:
    """Digits that may go in `cell` under the current board, ascending."""
    if strategy is Strategy.CANDIDATES:
        cell.candidates = board.candidates(cell)
        return sorted(cell.candidates)
    return [v for v in DIGITS if board.is_consistent(cell, v)]


class BacktrackingSolver:
    """
    Solve a board in place.

    The solver owns the board for the duration of `solve()`: every digit it
    writes is either part of the final solution or undone before the call
    returns.
    """

    def __init__(self, board: Board, strategy: Strategy = Strategy.CANDIDATES,
                 max_steps: int = 200000, debug: bool = False):
        self.board = board
        self.strategy = Strategy(strategy)
        self.max_steps = max_steps
        self.debug = debug
        self.steps = 0
        self.backtracks = 0

    def priority_of(self, cell: Cell) -> int:
        """Number of admissible digits for `cell`; the MRV priority."""
        if self.strategy is Strategy.CANDIDATES:
            return len(self.board.candidates(cell))
        return sum(1 for v in DIGITS if self.board.is_consistent(cell, v))

    def next_cell(self) -> NextCell:
        """
        Pop the most constrained undecided cell.

        An empty queue means SEARCH_COMPLETE when every cell holds a digit,
        and EMPTY_ON_ERROR when some cell is unfilled but nobody is tracking it.
        """
        pending = self.board.pending
        if not pending.is_empty():
            return NextCell(NextKind.DECIDED, pending.remove_min())
        if self.board.is_complete():
            return NextCell(NextKind.SEARCH_COMPLETE)
        return NextCell(NextKind.EMPTY_ON_ERROR)

    def solve(self) -> SolveResult:
        board = self.board
        ok, reason = validate_givens(board.to_array())
        if not ok:
            return self._result(SolveStatus.UNSOLVABLE, reason)

        self._seed()
        nxt = self.next_cell()
        if nxt.kind is NextKind.SEARCH_COMPLETE:
            return self._result(SolveStatus.SOLVED, "Board already complete")
        if nxt.kind is NextKind.EMPTY_ON_ERROR:
            raise RuntimeError("Pending queue is empty but the board has unfilled cells")

        stack = [self._open_frame(nxt.position)]
        while stack:
            frame = stack[-1]
            if frame.assigned:
                self._undo(frame)

            if not frame.remaining:
                stack.pop()
                self._requeue(frame.cell)
                continue

            if self.steps >= self.max_steps:
                self._unwind(stack)
                return self._result(
                    SolveStatus.STEP_LIMIT,
                    f"Stopped after {self.steps} steps (limit {self.max_steps})",
                )

            self._assign(frame, frame.remaining.pop(0))
            self.steps += 1

            nxt = self.next_cell()
            if nxt.kind is NextKind.SEARCH_COMPLETE:
                return self._result(
                    SolveStatus.SOLVED,
                    f"Solved in {self.steps} steps ({self.backtracks} backtracks)",
                )
            if nxt.kind is NextKind.EMPTY_ON_ERROR:
                self._unwind(stack)
                raise RuntimeError("Pending queue is empty but the board has unfilled cells")
            stack.append(self._open_frame(nxt.position))

        return self._result(SolveStatus.UNSOLVABLE, "No solution found")

    def _result(self, status: SolveStatus, message: str) -> SolveResult:
        return SolveResult(status, self.board, self.steps, self.backtracks, message)

    def _seed(self) -> None:
        """Queue every unfilled cell with its admissible count."""
        board = self.board
        board.fill_remaining()
        for cell in board:
            if not cell.is_filled:
                board.pending.add_or_update(cell.position, self.priority_of(cell))

    def _open_frame(self, position: int) -> Frame:
        cell = self.board.cells[position]
        return Frame(cell, admissible_values(self.board, cell, self.strategy))

    def _refresh_peers(self, cell: Cell) -> None:
        pending = self.board.pending
        cells = self.board.cells
        for position in cell.peers:
            if position in pending:
                pending.add_or_update(position, self.priority_of(cells[position]))

    def _assign(self, frame: Frame, value: int) -> None:
        frame.cell.value = value
        frame.assigned = value
        self._refresh_peers(frame.cell)

    def _undo(self, frame: Frame) -> None:
        if self.debug:
            print(f"      backtrack: {frame.cell!r} drops {frame.assigned}")
        frame.cell.value = 0
        frame.assigned = 0
        self.backtracks += 1
        self._refresh_peers(frame.cell)

    def _requeue(self, cell: Cell) -> None:
        self.board.pending.add_or_update(cell.position, self.priority_of(cell))

    def _unwind(self, stack: List[Frame]) -> None:
        """Undo every open frame, innermost first, and requeue its cell."""
        while stack:
            frame = stack.pop()
            if frame.assigned:
                self._undo(frame)
            self._requeue(frame.cell)


def solve_puzzle(board: np.ndarray, max_steps: int = 200000,
                 strategy: Strategy = Strategy.CANDIDATES) -> tuple[np.ndarray | None, str]:
    """
    Return a solved copy of the board, or (None, reason) if unsolvable or invalid.
    Limits the search to max_steps expansions to avoid runaway loops.
    """
    working = Board.from_array(board)
    result = working.solve(strategy, max_steps=max_steps)
    if result.solved:
        return working.to_array(), result.message
    return None, result.message
