"""
Pydantic models for puzzle definitions and game state.

State values (cells, pieces, targets, the main diagonal and the game state
itself) are frozen and hold tuples, so a snapshot kept for undo/redo or
written to disk can be shared by reference and never changes afterwards.
Mutation happens only in GameEngine, which builds new values with
``model_copy(update=...)``.
"""

from typing import Dict, Optional, Sequence, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


DEFAULT_GRID_SIZE = 6

# Demo piece set used until a puzzle is loaded
DEFAULT_PIECE_LETTERS: Tuple[str, ...] = (
    "M", "E",
    "RA", "SE",
    "ALD", "WEN",
    "FAGI", "RBEY",
    "RAYAA", "HBLAN",
)

# Type aliases
Board = Tuple[Tuple[str, ...], ...]


class Cell(BaseModel):
    """A zero-indexed (row, col) coordinate on the board."""
    model_config = ConfigDict(frozen=True)

    row: int = Field(..., ge=0)
    col: int = Field(..., ge=0)


class GamePiece(BaseModel):
    """A letter sequence that can be dropped onto a target of equal length."""
    model_config = ConfigDict(frozen=True)

    id: str
    letters: str = Field(..., min_length=1, pattern=r'^[A-Z]+$')
    placed_on: Optional[str] = None

    @property
    def length(self) -> int:
        return len(self.letters)


class GameTarget(BaseModel):
    """One non-main diagonal. Cells run top-left to bottom-right."""
    model_config = ConfigDict(frozen=True)

    id: str
    cells: Tuple[Cell, ...]
    piece_id: Optional[str] = None

    @property
    def length(self) -> int:
        return len(self.cells)


class MainDiagonal(BaseModel):
    """The cells where row == col and the letters typed into them."""
    model_config = ConfigDict(frozen=True)

    cells: Tuple[Cell, ...]
    value: Tuple[str, ...]

    @model_validator(mode="after")
    def _check_lengths(self) -> "MainDiagonal":
        if len(self.value) != len(self.cells):
            raise ValueError(
                f"Main diagonal has {len(self.cells)} cells but {len(self.value)} values"
            )
        return self

    @classmethod
    def empty(cls, cells: Sequence[Cell]) -> "MainDiagonal":
        return cls(cells=tuple(cells), value=("",) * len(cells))

    @property
    def is_filled(self) -> bool:
        return all(self.value)

    @property
    def word(self) -> str:
        return "".join(self.value)


class GameState(BaseModel):
    """
    Complete snapshot of a game in progress.

    This is the unit of undo/redo and persistence. ``board`` is derived
    from the other fields and is only ever rebuilt by the engine.
    """
    model_config = ConfigDict(frozen=True)

    board: Board
    targets: Tuple[GameTarget, ...]
    main_diagonal: MainDiagonal
    pieces: Tuple[GamePiece, ...]
    solved: bool = False

    def piece(self, piece_id: str) -> Optional[GamePiece]:
        return next((p for p in self.pieces if p.id == piece_id), None)

    def target(self, target_id: str) -> Optional[GameTarget]:
        return next((t for t in self.targets if t.id == target_id), None)

    @property
    def all_placed(self) -> bool:
        """True when every target holds a piece."""
        return all(t.piece_id is not None for t in self.targets)

    @property
    def is_complete(self) -> bool:
        """True when every target is occupied and the main diagonal is filled."""
        return self.all_placed and self.main_diagonal.is_filled


class PuzzleConfiguration(BaseModel):
    """
    Static shape from which a fresh GameState is built.

    Attributes:
        diagonals: Every diagonal of the grid, main diagonal first
        piece_letters: One letter sequence per piece, in piece id order
    """
    model_config = ConfigDict(frozen=True)

    diagonals: Tuple[Tuple[Cell, ...], ...]
    piece_letters: Tuple[str, ...]

    @field_validator("piece_letters", mode="before")
    @classmethod
    def _upper_letters(cls, value):
        return tuple(str(letters).strip().upper() for letters in value)

    @property
    def grid_size(self) -> int:
        return len(self.diagonals[0]) if self.diagonals else 0

    @property
    def target_count(self) -> int:
        return max(len(self.diagonals) - 1, 0)

    @classmethod
    def default(cls) -> "PuzzleConfiguration":
        """The demo configuration: standard 6×6 geometry with the demo pieces."""
        from .geometry import generate_diagonals

        return cls(
            diagonals=tuple(generate_diagonals(DEFAULT_GRID_SIZE)),
            piece_letters=DEFAULT_PIECE_LETTERS,
        )

    @classmethod
    def from_rows(cls, rows: Sequence[str], grid_size: int = DEFAULT_GRID_SIZE) -> "PuzzleConfiguration":
        """Build a configuration whose pieces spell out the given answer rows."""
        from .geometry import generate_diagonals
        from .codec import derive_sequences

        return cls(
            diagonals=tuple(generate_diagonals(grid_size)),
            piece_letters=tuple(derive_sequences(rows, grid_size)),
        )


class PuzzleDefinition(BaseModel):
    """
    Answer key for one puzzle: six row words and the main diagonal word.

    Row words may be longer than the grid; only their first six letters
    land on the board.
    """
    name: str = ""
    rows: Tuple[str, ...]
    diagonal_word: str

    @field_validator("rows", mode="before")
    @classmethod
    def _normalize_rows(cls, value):
        return tuple(str(word).strip().upper() for word in value)

    @field_validator("rows")
    @classmethod
    def _check_rows(cls, rows: Tuple[str, ...]) -> Tuple[str, ...]:
        if len(rows) != DEFAULT_GRID_SIZE:
            raise ValueError(f"Expected {DEFAULT_GRID_SIZE} row words, got {len(rows)}")
        for word in rows:
            if len(word) < DEFAULT_GRID_SIZE or not word.isalpha():
                raise ValueError(
                    f"Row word '{word}' must be at least {DEFAULT_GRID_SIZE} letters"
                )
        return rows

    @field_validator("diagonal_word", mode="before")
    @classmethod
    def _normalize_diagonal(cls, value):
        return str(value).strip().upper()

    @field_validator("diagonal_word")
    @classmethod
    def _check_diagonal(cls, word: str) -> str:
        if len(word) != DEFAULT_GRID_SIZE or not word.isalpha():
            raise ValueError(f"Diagonal word '{word}' must be exactly {DEFAULT_GRID_SIZE} letters")
        return word

    @classmethod
    def from_words(cls, words: Sequence[str], name: str = "") -> "PuzzleDefinition":
        """Build from the file format: six row words followed by the diagonal word."""
        if len(words) < DEFAULT_GRID_SIZE + 1:
            raise ValueError(
                f"Puzzle '{name}' needs {DEFAULT_GRID_SIZE + 1} words, got {len(words)}"
            )
        return cls(name=name, rows=words[:DEFAULT_GRID_SIZE], diagonal_word=words[DEFAULT_GRID_SIZE])

    @property
    def is_consistent(self) -> bool:
        """Whether the diagonal word matches the letters the rows put on the diagonal."""
        from .codec import main_diagonal_word

        return main_diagonal_word(self.rows) == self.diagonal_word


def empty_board(grid_size: int = DEFAULT_GRID_SIZE) -> Board:
    """An N×N board with every cell blank."""
    return tuple(("",) * grid_size for _ in range(grid_size))


def index_by_id(items: Sequence) -> Dict[str, int]:
    """Map each item's ``id`` to its position."""
    return {item.id: i for i, item in enumerate(items)}
