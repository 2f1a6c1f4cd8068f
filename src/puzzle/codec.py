"""
Puzzle codec: project row words through the diagonal partition.

Piece sequences are read straight off the geometry's own cell lists, so the
mapping from rows to pieces always agrees with where the engine writes a
placed piece. Projecting a filled board the same way returns the letters
currently sitting on each target.
"""

from typing import List, Sequence

from .geometry import generate_diagonals
from .models import Board, DEFAULT_GRID_SIZE


def _normalize_rows(rows: Sequence[str], grid_size: int) -> List[str]:
    if len(rows) != grid_size:
        raise ValueError(f"Expected {grid_size} rows, got {len(rows)}")
    normalized = [row.upper() for row in rows]
    for i, row in enumerate(normalized):
        if len(row) < grid_size:
            raise ValueError(f"Row {i} '{row}' is shorter than {grid_size} letters")
    return normalized


def derive_sequences(rows: Sequence[str], grid_size: int = DEFAULT_GRID_SIZE) -> List[str]:
    """
    Derive one letter sequence per non-main diagonal from the answer rows.

    Args:
        rows: One word per grid row, each at least grid_size letters
        grid_size: Side length of the grid

    Returns:
        Sequences in target order (the order generate_diagonals emits)
    """
    letters = _normalize_rows(rows, grid_size)
    return [
        "".join(letters[cell.row][cell.col] for cell in diagonal)
        for diagonal in generate_diagonals(grid_size)[1:]
    ]


def main_diagonal_word(rows: Sequence[str]) -> str:
    """Letters the rows place on the main diagonal."""
    letters = _normalize_rows(rows, len(rows))
    return "".join(letters[i][i] for i in range(len(letters)))


def rows_from_board(board: Board) -> List[str]:
    """Join each board row into a string. Blank cells contribute nothing."""
    return ["".join(row) for row in board]


def sequences_from_board(board: Board) -> List[str]:
    """Read the letters on every non-main diagonal of a board, in target order."""
    return [
        "".join(board[cell.row][cell.col] for cell in diagonal)
        for diagonal in generate_diagonals(len(board))[1:]
    ]
