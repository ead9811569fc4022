from pathlib import Path

import numpy as np
import pytest

from sudoku_mrv.board import Board
from sudoku_mrv.formatting import parse_puzzle
from sudoku_mrv.solver import (
    BacktrackingSolver, NextKind, SolveStatus, Strategy, solve_puzzle,
)

PUZZLE_DIR = Path(__file__).resolve().parents[1] / "puzzles"

CLASSIC = "53..7....6..195....98....6.8...6...34..8.3..17...2...6.6....28....419..5....8..79"
CLASSIC_SOLUTION = "534678912672195348198342567859761423426853791713924856961537284287419635345286179"

INKALA = "8..........36......7..9.2...5...7.......457.....1...3...1....68..85...1..9....4.."
INKALA_SOLUTION = "812753649943682175675491283154237896369845721287169534521974368438526917796318452"

BOTH = [Strategy.CANDIDATES, Strategy.CONSISTENCY]


def grid_of(line: str) -> np.ndarray:
    return parse_puzzle(line)


def assert_valid_solution(grid: np.ndarray, givens: np.ndarray):
    digits = set(range(1, 10))
    for i in range(9):
        assert set(grid[i, :]) == digits
        assert set(grid[:, i]) == digits
    for br in range(3):
        for bc in range(3):
            assert set(grid[br*3:(br+1)*3, bc*3:(bc+1)*3].ravel()) == digits
    mask = givens != 0
    assert np.array_equal(grid[mask], givens[mask])


def two_cell_dead_end() -> Board:
    """Cells 0 and 1 both need the digit 2; whichever takes it starves the other."""
    board = Board()
    for col, digit in enumerate(range(3, 10), start=2):
        board.add_cell(col, digit)
    board.add_cell(27, 1)   # r4c1
    board.add_cell(55, 1)   # r7c2
    board.fill_remaining()
    return board


def test_classic_matches_bundled_file():
    bundled = parse_puzzle((PUZZLE_DIR / "classic.txt").read_text(encoding="utf-8"))
    assert len(CLASSIC) == 81
    assert np.array_equal(grid_of(CLASSIC), bundled)


@pytest.mark.parametrize("strategy", BOTH)
def test_solves_classic_puzzle(strategy):
    board = Board.from_array(grid_of(CLASSIC))
    result = board.solve(strategy)
    assert result.status is SolveStatus.SOLVED
    assert result.solved
    assert result.message.startswith("Solved in")
    assert np.array_equal(board.to_array(), grid_of(CLASSIC_SOLUTION))
    assert board.pending.is_empty()


def test_solves_hard_puzzle():
    board = Board.from_array(grid_of(INKALA))
    result = board.solve(Strategy.CANDIDATES)
    assert result.solved
    assert result.backtracks > 0
    assert np.array_equal(board.to_array(), grid_of(INKALA_SOLUTION))


def test_strategies_run_identical_searches():
    a = Board.from_array(grid_of(CLASSIC))
    b = Board.from_array(grid_of(CLASSIC))
    ra = a.solve(Strategy.CANDIDATES)
    rb = b.solve(Strategy.CONSISTENCY)
    assert ra.status is rb.status
    assert (ra.steps, ra.backtracks) == (rb.steps, rb.backtracks)
    assert np.array_equal(a.to_array(), b.to_array())


def test_values_is_total_mapping():
    board = Board.from_array(grid_of(CLASSIC))
    values = board.solve().values()
    assert sorted(values) == list(range(81))
    assert all(1 <= v <= 9 for v in values.values())


def test_resolving_solved_board_is_noop():
    solution = grid_of(CLASSIC_SOLUTION)
    board = Board.from_array(solution)
    result = board.solve()
    assert result.solved
    assert result.steps == 0
    assert result.message == "Board already complete"
    assert np.array_equal(board.to_array(), solution)

    again = board.solve()
    assert again.solved
    assert np.array_equal(board.to_array(), solution)


def test_solve_after_solve_keeps_board():
    board = Board.from_array(grid_of(CLASSIC))
    board.solve()
    first = board.to_array()
    assert board.solve().steps == 0
    assert np.array_equal(board.to_array(), first)


@pytest.mark.parametrize("strategy", BOTH)
def test_duplicate_in_row_is_unsolvable(strategy):
    grid = grid_of(CLASSIC)
    grid[0, 8] = 5
    board = Board.from_array(grid)
    result = board.solve(strategy)
    assert result.status is SolveStatus.UNSOLVABLE
    assert not result.solved
    assert "Row 1" in result.message
    assert np.array_equal(board.to_array(), grid)


def test_duplicate_in_full_board_is_unsolvable():
    grid = grid_of(CLASSIC_SOLUTION)
    grid[0, 1] = grid[0, 0]
    result = Board.from_array(grid).solve()
    assert result.status is SolveStatus.UNSOLVABLE


def test_unsolved_result_has_no_values():
    grid = grid_of(CLASSIC)
    grid[0, 8] = 5
    result = Board.from_array(grid).solve()
    with pytest.raises(ValueError):
        result.values()


def test_cell_without_candidates_is_unsolvable():
    board = Board()
    for col, digit in enumerate(range(1, 9), start=1):
        board.add_cell(col, digit)
    board.add_cell(27, 9)
    board.fill_remaining()
    result = board.solve()
    assert result.status is SolveStatus.UNSOLVABLE
    assert result.steps == 0
    assert result.message == "No solution found"


@pytest.mark.parametrize("strategy", BOTH)
def test_dead_end_backtracks_and_restores_board(strategy):
    board = two_cell_dead_end()
    before = board.to_array()
    pending_before = board.pending.size()

    result = board.solve(strategy)

    assert result.status is SolveStatus.UNSOLVABLE
    assert result.steps == 1
    assert result.backtracks == 1
    assert np.array_equal(board.to_array(), before)
    assert board.pending.size() == pending_before
    assert board.pending.check_invariant()
    # requeued cells carry their admissible count, not their position
    assert board.pending.priority(0) == 1
    assert board.pending.priority(1) == 1


def test_debug_prints_backtracks(capsys):
    two_cell_dead_end().solve(debug=True)
    assert "backtrack" in capsys.readouterr().out


def test_quiet_by_default(capsys):
    two_cell_dead_end().solve()
    assert capsys.readouterr().out == ""


def test_step_limit_unwinds_everything():
    grid = grid_of(INKALA)
    board = Board.from_array(grid)
    result = board.solve(max_steps=5)
    assert result.status is SolveStatus.STEP_LIMIT
    assert result.steps == 5
    assert "limit 5" in result.message
    assert np.array_equal(board.to_array(), grid)
    assert board.pending.size() == int(np.sum(grid == 0))
    solver = BacktrackingSolver(board)
    for position in board.pending:
        assert board.pending.priority(position) == solver.priority_of(board.cells[position])


def test_unfilled_cell_added_explicitly_is_searched():
    board = Board()
    for position, value in enumerate(grid_of(CLASSIC).ravel()):
        board.add_cell(position, int(value))
    result = board.solve()
    assert result.solved
    assert np.array_equal(board.to_array(), grid_of(CLASSIC_SOLUTION))


def test_next_cell_tri_state():
    board = Board.from_array(grid_of(CLASSIC_SOLUTION))
    solver = BacktrackingSolver(board)
    assert solver.next_cell().kind is NextKind.SEARCH_COMPLETE

    board = Board()
    board.fill_remaining()
    solver = BacktrackingSolver(board)
    nxt = solver.next_cell()
    assert nxt.kind is NextKind.DECIDED
    assert nxt.position == 0
    assert 0 not in board.pending

    partial = Board()
    partial.add_cell(0, 0)
    assert BacktrackingSolver(partial).next_cell().kind is NextKind.EMPTY_ON_ERROR


def test_strategy_accepts_string():
    solver = BacktrackingSolver(Board(), "consistency")
    assert solver.strategy is Strategy.CONSISTENCY


def test_solve_puzzle_returns_copy():
    grid = grid_of(CLASSIC)
    original = grid.copy()
    solved, message = solve_puzzle(grid)
    assert message.startswith("Solved in")
    assert np.array_equal(solved, grid_of(CLASSIC_SOLUTION))
    assert np.array_equal(grid, original)


def test_solve_puzzle_reports_bad_givens():
    grid = grid_of(CLASSIC)
    grid[1, 0] = 5
    solved, message = solve_puzzle(grid)
    assert solved is None
    assert "duplicate" in message


@pytest.mark.parametrize("path", sorted(PUZZLE_DIR.glob("*.txt")), ids=lambda p: p.stem)
def test_bundled_puzzles_solve_identically_under_both_strategies(path):
    givens = parse_puzzle(path.read_text(encoding="utf-8"))
    results = []
    for strategy in BOTH:
        board = Board.from_array(givens)
        result = board.solve(strategy, max_steps=3000)
        assert result.solved, f"{path.name}: {result.message}"
        assert_valid_solution(board.to_array(), givens)
        results.append((result.steps, board.to_array()))
    (na, ga), (nb, gb) = results
    assert na == nb
    assert np.array_equal(ga, gb)
