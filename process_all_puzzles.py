#!/usr/bin/env python3
"""
Solve every puzzle file in a directory and print a summary.

Usage:
    python process_all_puzzles.py            # puzzles/ next to this script
    python process_all_puzzles.py my_puzzles/ --strategy consistency
"""

import argparse
import sys
import os
import glob

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from sudoku_mrv.sudoku_solver import SudokuSolver


def main():
    """Solve all .txt and .sdk puzzles in the given directory."""
    parser = argparse.ArgumentParser(description="Solve every puzzle file in a directory.")
    parser.add_argument("directory", nargs="?",
                        default=os.path.join(os.path.dirname(os.path.abspath(__file__)), "puzzles"))
    parser.add_argument("--strategy", default="candidates", choices=["candidates", "consistency"])
    parser.add_argument("--max-steps", type=int, default=200000)
    args = parser.parse_args()

    puzzle_files = sorted(
        glob.glob(os.path.join(args.directory, "*.txt"))
        + glob.glob(os.path.join(args.directory, "*.sdk"))
    )

    if not puzzle_files:
        print(f"No .txt or .sdk files found in {args.directory}!")
        return

    print(f"Found {len(puzzle_files)} puzzles to solve")
    print("=" * 60)

    solver = SudokuSolver(strategy=args.strategy, max_steps=args.max_steps, verbose=False)

    results = {
        'solved': [],
        'unsolved': [],
        'error': []
    }

    for i, path in enumerate(puzzle_files, 1):
        name = os.path.basename(path)
        print(f"\n[{i}/{len(puzzle_files)}] Solving {name}...")

        try:
            with open(path, encoding="utf-8") as fh:
                outcome = solver.process_puzzle(fh.read(), label=name)
        except (OSError, ValueError) as e:
            print(f"Error processing {name}: {e}")
            results['error'].append(name)
            continue

        print(f"      {outcome['result'].message}")
        if outcome['solution'] is not None:
            results['solved'].append(name)
        else:
            results['unsolved'].append(name)

    print("\n" + "=" * 60)
    print("SUMMARY")
    print("=" * 60)
    print(f"✅ Solved:    {len(results['solved'])}/{len(puzzle_files)}")
    print(f"❌ Unsolved:  {len(results['unsolved'])}/{len(puzzle_files)}")
    print(f"⚠️  Errors:    {len(results['error'])}/{len(puzzle_files)}")

    if results['unsolved']:
        print(f"\nUnsolved puzzles: {', '.join(results['unsolved'])}")


if __name__ == '__main__':
    main()
