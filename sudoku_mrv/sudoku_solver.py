"""
Sudoku Solver - Main Application Module
"""

import argparse
import os
import sys

import numpy as np

from .board import Board, validate_givens
from .formatting import format_board, parse_puzzle, to_line
from .solver import SolveStatus, Strategy


class SudokuSolver:
    """
    Main class for the Sudoku Solver application.

    Wraps the pipeline text -> grid -> board -> backtracking search and
    reports each stage as it goes.
    """

    def __init__(self, strategy=Strategy.CANDIDATES, max_steps=200000, verbose=True, debug=False):
        """
        Initialize the Sudoku Solver.

        Args:
            strategy (Strategy | str): How admissible digits are computed
            max_steps (int): Assignment budget before the search gives up
            verbose (bool): Print stage-by-stage progress
            debug (bool): Print every backtrack
        """
        self.strategy = Strategy(strategy)
        self.max_steps = max_steps
        self.verbose = verbose
        self.debug = debug

    def _log(self, message=""):
        if self.verbose:
            print(message)

    def process_puzzle(self, text, label="puzzle", compare=False):
        """
        Parse and solve one puzzle.

        Pipeline steps:
        1. Parse the puzzle text into a 9x9 grid
        2. Check the givens for duplicates
        3. Run the backtracking search

        Args:
            text (str): Puzzle text (81 characters or 9 lines)
            label (str): Name shown in the banner
            compare (bool): Also solve with the other strategy and check
                that both agree

        Returns:
            dict: Results containing the input grid, the solution (or None),
            the SolveResult and whether the strategies agreed
        """
        self._log(f"\n{'='*60}")
        self._log(f"Processing: {label}")
        self._log(f"{'='*60}")

        self._log("\n[1/3] Parsing puzzle...")
        grid = parse_puzzle(text)
        given_count = np.count_nonzero(grid)
        self._log(format_board(grid))
        self._log(f"      Givens: {given_count}")

        self._log("\n[2/3] Checking givens...")
        ok, reason = validate_givens(grid)
        if ok:
            self._log("      ✓ No duplicate givens")
        else:
            self._log(f"      ✗ {reason}")

        self._log(f"\n[3/3] Solving ({self.strategy.value} strategy)...")
        board = Board.from_array(grid)
        result = board.solve(self.strategy, max_steps=self.max_steps, debug=self.debug)

        solution = None
        if result.solved:
            solution = board.to_array()
            self._log(f"      ✓ Solved puzzle ({result.message}):")
            self._log(format_board(solution))
        else:
            self._log(f"      ✗ Could not solve: {result.message}")

        agreed = None
        if compare:
            other = (Strategy.CONSISTENCY if self.strategy is Strategy.CANDIDATES
                     else Strategy.CANDIDATES)
            other_board = Board.from_array(grid)
            other_result = other_board.solve(other, max_steps=self.max_steps)
            agreed = other_result.status is result.status
            if agreed and result.solved:
                agreed = np.array_equal(other_board.to_array(), solution)
            mark = "✓" if agreed else "✗"
            self._log(f"      {mark} {other.value} strategy: {other_result.message}")

        return {
            'grid': grid,
            'solution': solution,
            'result': result,
            'strategies_agree': agreed,
        }


def main(argv=None):
    """
    Main entry point for the Sudoku Solver application.

    Handles command-line arguments and solves one puzzle.
    """
    parser = argparse.ArgumentParser(
        description='Sudoku Solver - backtracking search with MRV ordering',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Solve a puzzle given inline:
    python -m sudoku_mrv --puzzle 53..7....6..195....98....6.8...6...34..8.3..17...2...6.6....28....419..5....8..79

  Solve a puzzle file with the consistency-check strategy:
    python -m sudoku_mrv --file puzzle.txt --strategy consistency

  Check that both strategies agree:
    python -m sudoku_mrv --file puzzle.txt --compare
        """
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('--puzzle', '-p',
                        help='Puzzle as 81 characters (digits, . or 0 for blanks)')
    source.add_argument('--file', '-f',
                        help='Path to a puzzle text file')
    parser.add_argument('--strategy', '-s', default='candidates',
                        choices=[s.value for s in Strategy],
                        help='How admissible digits are computed (default: candidates)')
    parser.add_argument('--max-steps', type=int, default=200000,
                        help='Assignment budget before giving up (default: 200000)')
    parser.add_argument('--compare', action='store_true',
                        help='Also solve with the other strategy and check both agree')
    parser.add_argument('--quiet', '-q', action='store_true',
                        help='Only print the solution line')
    parser.add_argument('--debug', action='store_true',
                        help='Print every backtrack')

    args = parser.parse_args(argv)

    if args.file is not None:
        if not os.path.exists(args.file):
            print(f"Error: Puzzle file not found: {args.file}")
            sys.exit(1)
        with open(args.file, encoding='utf-8') as fh:
            text = fh.read()
        label = os.path.basename(args.file)
    else:
        text = args.puzzle
        label = "command line"

    solver = SudokuSolver(
        strategy=args.strategy,
        max_steps=args.max_steps,
        verbose=not args.quiet,
        debug=args.debug,
    )

    try:
        outcome = solver.process_puzzle(text, label=label, compare=args.compare)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if args.quiet and outcome['solution'] is not None:
        print(to_line(outcome['solution']))

    if outcome['result'].status is not SolveStatus.SOLVED:
        if args.quiet:
            print(outcome['result'].message)
        sys.exit(1)
    if outcome['strategies_agree'] is False:
        sys.exit(1)


if __name__ == '__main__':
    main()
