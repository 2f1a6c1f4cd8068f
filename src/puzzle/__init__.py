"""Puzzle geometry, state model and definition files."""

from .models import (
    Board,
    Cell,
    GamePiece,
    GameTarget,
    MainDiagonal,
    GameState,
    PuzzleConfiguration,
    PuzzleDefinition,
    DEFAULT_GRID_SIZE,
    DEFAULT_PIECE_LETTERS,
    empty_board,
)
from .geometry import (
    generate_diagonals,
    assign_target_ids,
    main_diagonal_cells,
    build_cell_index,
    check_partition,
)
from .codec import derive_sequences, main_diagonal_word, rows_from_board, sequences_from_board
from .puzzles import load_puzzle_file, parse_puzzles

__all__ = [
    # Models
    "Board",
    "Cell",
    "GamePiece",
    "GameTarget",
    "MainDiagonal",
    "GameState",
    "PuzzleConfiguration",
    "PuzzleDefinition",
    "DEFAULT_GRID_SIZE",
    "DEFAULT_PIECE_LETTERS",
    "empty_board",
    # Geometry
    "generate_diagonals",
    "assign_target_ids",
    "main_diagonal_cells",
    "build_cell_index",
    "check_partition",
    # Codec
    "derive_sequences",
    "main_diagonal_word",
    "rows_from_board",
    "sequences_from_board",
    # Puzzle files
    "load_puzzle_file",
    "parse_puzzles",
]
