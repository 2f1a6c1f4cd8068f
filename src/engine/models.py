"""
Pydantic models for the engine layer.

Operation results, engine errors, change events and the CLI configuration.
The game state itself lives in ``src.puzzle.models``.
"""

from typing import List, Optional, Literal
from pydantic import BaseModel, Field, field_validator

from ..puzzle.models import GameState


# Type aliases
Action = Literal[
    "RESET", "LOAD", "PLACE", "REPLACE", "REMOVE",
    "DIAGONAL", "UNDO", "REDO", "RESTORE",
]
ErrorCode = Literal[
    "UNKNOWN_ID",
    "LENGTH_MISMATCH",
    "ALREADY_PLACED",
    "TARGET_OCCUPIED",
    "LETTER_CONFLICT",
    "INVALID_DIAGONAL",
    "MALFORMED_PUZZLE_SOURCE",
    "INCORRECT_SOLUTION",
]
MoveAction = Literal["PLACE", "REPLACE", "REMOVE", "DIAGONAL", "CLEAR", "UNDO", "REDO", "RESET"]


class EngineError(BaseModel):
    """Why an operation was refused, or a soft warning for the player."""
    code: ErrorCode
    message: str
    piece_id: Optional[str] = None
    target_id: Optional[str] = None


class MoveResult(BaseModel):
    """Outcome of a single engine operation."""
    success: bool
    action: Action
    error: Optional[EngineError] = None
    warnings: List[EngineError] = Field(default_factory=list)
    replaced_piece_id: Optional[str] = None  # Evicted by place_or_replace
    removed_piece_id: Optional[str] = None
    complete: bool = False
    solved: bool = False

    @property
    def needs_retry(self) -> bool:
        """Board is full but not accepted; the caller may clear the diagonal."""
        return self.complete and not self.solved


class StateChange(BaseModel):
    """Event delivered to engine subscribers after the state is replaced."""
    action: Action
    state: GameState
    result: Optional[MoveResult] = None


class GameConfig(BaseModel):
    """Configuration for a CLI session."""
    puzzle_file: Optional[str] = None
    puzzle_name: Optional[str] = None
    save_path: Optional[str] = None
    validation: Literal["auto", "exact", "dictionary"] = "auto"
    word_list: Optional[str] = None  # Plain word list replacing wordfreq lookups
    min_zipf_frequency: float = Field(default=2.0, ge=0.0)
    history_depth: Optional[int] = Field(default=None, ge=1)
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()


class Move(BaseModel):
    """One parsed line of a move script."""
    action: MoveAction
    piece_id: Optional[str] = None
    target_id: Optional[str] = None
    letters: Optional[List[str]] = None  # DIAGONAL only; '' marks a blank cell
    line: Optional[int] = None
