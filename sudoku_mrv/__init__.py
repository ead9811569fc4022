"""
Sudoku MRV - backtracking Sudoku solver

This package contains modules for:
- An indexed min-priority queue with O(log n) priority updates
- The 81-cell board model and its candidate / consistency checks
- Backtracking search ordered by fewest remaining candidates
- Puzzle text parsing and formatting
"""

from .board import Board, Cell, InvalidPosition
from .min_queue import EmptyQueue, IndexedMinQueue
from .solver import BacktrackingSolver, SolveResult, SolveStatus, Strategy, solve_puzzle

__version__ = "1.0.0"
