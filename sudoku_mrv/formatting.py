"""Reading and printing puzzles as text."""

import numpy as np

# Grid decoration tolerated (and ignored) in puzzle text.
_DECORATION = set(" \t\r|-+")
_BLANKS = set(".0")


def parse_puzzle(text: str) -> np.ndarray:
    """
    Parse a puzzle into a 9x9 int array (0 = empty).

    Accepts an 81-character string or 9 lines of 9 characters. Digits 1-9
    are givens, '.' or '0' are blanks; spaces and '|', '-', '+' separators
    are ignored, so the output of `format_board` parses back.
    """
    values = []
    for ch in text:
        if ch in _DECORATION or ch == "\n":
            continue
        if ch in _BLANKS:
            values.append(0)
        elif ch in "123456789":
            values.append(int(ch))
        else:
            raise ValueError(f"Unexpected character {ch!r} in puzzle")

    if len(values) != 81:
        raise ValueError(f"Expected 81 cells, found {len(values)}")
    return np.array(values, dtype=int).reshape(9, 9)


def format_board(board: np.ndarray) -> str:
    """Render the 9x9 board as a human-friendly string."""
    lines = []
    for r, row in enumerate(board):
        parts = []
        for c, val in enumerate(row):
            parts.append(str(val) if val != 0 else ".")
            if c in {2, 5}:
                parts.append("|")
        line = " ".join(parts)
        lines.append(line)
        if r in {2, 5}:
            lines.append("-" * len(line))
    return "\n".join(lines)


def to_line(board: np.ndarray) -> str:
    return "".join(str(v) if v != 0 else "." for v in np.asarray(board).ravel())
