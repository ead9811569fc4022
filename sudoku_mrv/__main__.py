"""
Entry point for running the solver as a package.

Usage:
    python -m sudoku_mrv --puzzle 53..7....6..195....98....6.8...6...34..8.3..17...2...6.6....28....419..5....8..79
"""

from .sudoku_solver import main

if __name__ == '__main__':
    main()
