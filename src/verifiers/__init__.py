"""Solution verification for the Diagone engine."""

from .models import ValidationError, ValidationResult, ValidationMode
from .solution import (
    SolutionValidator,
    ExactAnswerValidator,
    DictionaryValidator,
    build_validator,
    validate_completion,
)
from .grid import render_board, board_from_rows, blank_cells
from .data import check_word

__all__ = [
    # Strategies
    "SolutionValidator",
    "ExactAnswerValidator",
    "DictionaryValidator",
    "build_validator",
    "validate_completion",
    # Models
    "ValidationError",
    "ValidationResult",
    "ValidationMode",
    # Grid utilities
    "render_board",
    "board_from_rows",
    "blank_cells",
    # Dictionary
    "check_word",
]
