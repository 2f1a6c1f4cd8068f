"""Board rendering and construction utilities."""

from typing import List, Sequence

from ..puzzle.models import Board


def render_board(board: Board, blank: str = ".") -> str:
    """Render the board to a string, one line per row."""
    if not board:
        return ""

    lines = [
        ''.join(cell or blank for cell in row)
        for row in board
    ]

    return '\n'.join(lines)


def board_from_rows(rows: Sequence[str]) -> Board:
    """
    Build a fully-filled board from row words.

    Each row contributes its first len(rows) letters, upper-cased.
    """
    size = len(rows)
    return tuple(
        tuple(letter for letter in row.upper()[:size])
        for row in rows
    )


def blank_cells(board: Board) -> List[tuple]:
    """(row, col) of every empty cell, row-major."""
    return [
        (r, c)
        for r, row in enumerate(board)
        for c, cell in enumerate(row)
        if not cell
    ]
