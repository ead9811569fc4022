"""
Print, for every empty cell of a puzzle, the digits each strategy admits.

Usage:
  python scripts/compare_strategies.py puzzles/classic.txt
  python scripts/compare_strategies.py puzzles/nyt_b.txt --only-disagreements
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from sudoku_mrv.board import Board
from sudoku_mrv.formatting import parse_puzzle
from sudoku_mrv.solver import Strategy, admissible_values


def compare_cells(board: Board, only_disagreements: bool = False) -> int:
    """Print both strategies' admissible digits per empty cell. Returns the disagreement count."""
    disagreements = 0
    for cell in board:
        if cell.is_filled:
            continue
        by_set = admissible_values(board, cell, Strategy.CANDIDATES)
        by_scan = admissible_values(board, cell, Strategy.CONSISTENCY)
        agree = by_set == by_scan
        if not agree:
            disagreements += 1
        if agree and only_disagreements:
            continue
        r, c = divmod(cell.position, 9)
        set_str = "".join(str(d) for d in by_set) or "-"
        scan_str = "".join(str(d) for d in by_scan) or "-"
        flag = "ok" if agree else "MISMATCH"
        print(f"r{r + 1}c{c + 1}: candidates={set_str:<9} consistency={scan_str:<9} {flag}")
    return disagreements


def main() -> None:
    parser = argparse.ArgumentParser(description="Compare admissible digits across solver strategies.")
    parser.add_argument("puzzle", type=Path, help="Path to a puzzle text file.")
    parser.add_argument("--only-disagreements", action="store_true", help="Skip cells where both agree.")
    args = parser.parse_args()

    board = Board.from_array(parse_puzzle(args.puzzle.read_text(encoding="utf-8")))
    disagreements = compare_cells(board, only_disagreements=args.only_disagreements)
    print(f"{disagreements} disagreement(s) over {len(board.pending)} empty cells")
    if disagreements:
        sys.exit(1)


if __name__ == "__main__":
    main()
