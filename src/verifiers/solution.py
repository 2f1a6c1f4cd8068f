"""
Solution strategies for deciding whether a game is solved.

Two interchangeable validators share one interface:
1. ExactAnswerValidator - board must reproduce a loaded answer key
   (rows, main diagonal word and every diagonal sequence)
2. DictionaryValidator - every row must be a real word

Both are pure predicates over a GameState and never modify it.
"""

from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from .models import ValidationError, ValidationResult, ValidationMode
from .grid import render_board
from .data import check_word
from ..puzzle.models import GameState, PuzzleDefinition
from ..puzzle.codec import derive_sequences, rows_from_board
from ..puzzle.geometry import assign_target_ids, generate_diagonals


def validate_completion(state: GameState) -> List[ValidationError]:
    """Check every target is occupied and every main-diagonal cell is filled."""
    errors: List[ValidationError] = []

    vacant = [t.id for t in state.targets if t.piece_id is None]
    if vacant:
        errors.append(ValidationError(
            code="INCOMPLETE_TARGETS",
            message=f"{len(vacant)} target(s) still empty: {', '.join(vacant)}"
        ))

    blanks = [i for i, letter in enumerate(state.main_diagonal.value) if not letter]
    if blanks:
        errors.append(ValidationError(
            code="INCOMPLETE_DIAGONAL",
            message=f"Main diagonal missing {len(blanks)} letter(s) at position(s) "
                    f"{', '.join(str(i + 1) for i in blanks)}"
        ))

    return errors


class SolutionValidator(BaseModel, ABC):
    """Base class for solution strategies. Subclasses implement validate_rows."""

    mode: ValidationMode

    @abstractmethod
    def validate_rows(self, state: GameState) -> List[ValidationError]:
        """Row checks for a complete board."""

    def check(self, state: GameState) -> ValidationResult:
        """
        Validate a state and report every problem found.

        Completion is checked first; row checks only run on a full board.
        """
        errors = validate_completion(state)
        if not errors:
            errors = self.validate_rows(state)

        return ValidationResult(
            valid=len(errors) == 0,
            mode=self.mode,
            errors=errors,
            rows=rows_from_board(state.board),
            grid=render_board(state.board),
        )

    def is_solved(self, state: GameState) -> bool:
        return self.check(state).valid


class ExactAnswerValidator(SolutionValidator):
    """Accepts only the board described by the answer key. Case-insensitive."""

    mode: Literal["exact"] = "exact"
    answer: PuzzleDefinition

    def validate_rows(self, state: GameState) -> List[ValidationError]:
        errors: List[ValidationError] = []
        size = len(state.board)

        for i, (row, expected) in enumerate(zip(rows_from_board(state.board), self.answer.rows)):
            if row.upper() != expected[:size]:
                errors.append(ValidationError(
                    code="ROW_MISMATCH",
                    message=f"Row {i + 1} reads '{row}', expected '{expected[:size]}'",
                    word=row,
                    line=i + 1
                ))

        diagonal = state.main_diagonal.word.upper()
        if diagonal != self.answer.diagonal_word:
            errors.append(ValidationError(
                code="DIAGONAL_MISMATCH",
                message=f"Main diagonal reads '{diagonal}', expected '{self.answer.diagonal_word}'",
                word=diagonal
            ))

        expected_sequences: Dict[str, str] = dict(zip(
            assign_target_ids(generate_diagonals(size)),
            derive_sequences(self.answer.rows, size)
        ))
        for target in state.targets:
            placed = "".join(state.board[c.row][c.col] for c in target.cells).upper()
            expected = expected_sequences.get(target.id)
            if placed != expected:
                errors.append(ValidationError(
                    code="SEQUENCE_MISMATCH",
                    message=f"Diagonal {target.id} holds '{placed}', expected '{expected}'",
                    word=placed,
                    target_id=target.id
                ))

        return errors


class DictionaryValidator(SolutionValidator):
    """Accepts any full board whose rows are all dictionary words."""

    mode: Literal["dictionary"] = "dictionary"
    word_checker: Callable[[str], bool] = Field(default=check_word, exclude=True)

    def validate_rows(self, state: GameState) -> List[ValidationError]:
        errors: List[ValidationError] = []

        for i, row in enumerate(rows_from_board(state.board)):
            if len(row) <= 1 or not self.word_checker(row):
                errors.append(ValidationError(
                    code="INVALID_WORD",
                    message=f"Row {i + 1} '{row}' is not a valid dictionary word",
                    word=row,
                    line=i + 1
                ))

        return errors


def build_validator(
    answer: Optional[PuzzleDefinition] = None,
    word_checker: Optional[Callable[[str], bool]] = None
) -> SolutionValidator:
    """Exact mode when an answer key is given, dictionary mode otherwise."""
    if answer is not None:
        return ExactAnswerValidator(answer=answer)
    if word_checker is not None:
        return DictionaryValidator(word_checker=word_checker)
    return DictionaryValidator()
