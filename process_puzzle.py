#!/usr/bin/env python3
"""
Convenience script to solve a Sudoku puzzle.

This script provides a simple interface to the Sudoku Solver pipeline.

Usage:
    python process_puzzle.py --file puzzles/classic.txt
    python process_puzzle.py --puzzle 53..7....6..195.... --strategy consistency
"""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from sudoku_mrv.sudoku_solver import main

if __name__ == '__main__':
    main()
