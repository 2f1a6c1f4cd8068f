"""
Board geometry: the fixed partition of the grid into diagonals.

The main diagonal comes first, then every diagonal parallel to it, sorted
by length and then by starting cell so the two diagonals of each length
sit next to each other (upper before lower). Target ids and piece
sequences are both derived from this ordering, so it must not change.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from .models import Cell, DEFAULT_GRID_SIZE


Diagonal = Tuple[Cell, ...]


def _walk(start_row: int, start_col: int, grid_size: int) -> Diagonal:
    """Collect cells from a start cell stepping (+1, +1) until leaving the grid."""
    cells: List[Cell] = []
    row, col = start_row, start_col
    while row < grid_size and col < grid_size:
        cells.append(Cell(row=row, col=col))
        row += 1
        col += 1
    return tuple(cells)


def main_diagonal_cells(grid_size: int = DEFAULT_GRID_SIZE) -> Diagonal:
    """Cells where row == col."""
    return _walk(0, 0, grid_size)


def generate_diagonals(grid_size: int = DEFAULT_GRID_SIZE) -> List[Diagonal]:
    """
    Partition an N×N grid into its 2N-1 top-left to bottom-right diagonals.

    Args:
        grid_size: Side length of the grid

    Returns:
        List with the main diagonal at index 0 followed by the non-main
        diagonals sorted by (length, first row, first col)
    """
    if grid_size < 1:
        raise ValueError(f"Grid size must be positive, got {grid_size}")

    others: List[Diagonal] = []
    for offset in range(1, grid_size):
        others.append(_walk(0, offset, grid_size))  # Upper
        others.append(_walk(offset, 0, grid_size))  # Lower

    others.sort(key=lambda d: (len(d), d[0].row, d[0].col))
    return [main_diagonal_cells(grid_size)] + others


def assign_target_ids(diagonals: Sequence[Diagonal]) -> List[str]:
    """
    Name each non-main diagonal ``d_len{L}_{suffix}``.

    Expects the full list from generate_diagonals (main diagonal first).
    The first diagonal of a new length gets suffix ``a``, the next ``b``.
    """
    ids: List[str] = []
    current_length = 0
    suffix_idx = 0
    for diagonal in diagonals[1:]:
        if len(diagonal) != current_length:
            current_length = len(diagonal)
            suffix_idx = 0
        ids.append(f"d_len{current_length}_{chr(ord('a') + suffix_idx)}")
        suffix_idx += 1
    return ids


def build_cell_index(diagonals: Sequence[Diagonal]) -> Dict[Cell, Optional[str]]:
    """Map every cell to the id of the target covering it (None on the main diagonal)."""
    index: Dict[Cell, Optional[str]] = {}
    for target_id, diagonal in zip(assign_target_ids(diagonals), diagonals[1:]):
        for cell in diagonal:
            index[cell] = target_id
    for cell in diagonals[0] if diagonals else ():
        index[cell] = None
    return index


def check_partition(diagonals: Sequence[Diagonal], grid_size: int = DEFAULT_GRID_SIZE) -> List[str]:
    """
    Check that the diagonals cover every cell of the grid exactly once.

    Returns:
        List of problems found; empty when the partition is exact
    """
    problems: List[str] = []
    seen: Dict[Cell, int] = {}

    for i, diagonal in enumerate(diagonals):
        for cell in diagonal:
            if cell.row >= grid_size or cell.col >= grid_size:
                problems.append(f"Cell ({cell.row}, {cell.col}) in diagonal {i} is outside the grid")
            elif cell in seen:
                problems.append(
                    f"Cell ({cell.row}, {cell.col}) appears in diagonals {seen[cell]} and {i}"
                )
            else:
                seen[cell] = i

    for row in range(grid_size):
        for col in range(grid_size):
            if Cell(row=row, col=col) not in seen:
                problems.append(f"Cell ({row}, {col}) is not covered by any diagonal")

    return problems
