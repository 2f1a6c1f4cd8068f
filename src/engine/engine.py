"""
Placement engine for the Diagone puzzle.

Owns the current GameState and applies validated mutations to it. Every
operation is synchronous and returns a MoveResult instead of raising for
player mistakes. Successful mutations record the previous state in the
HistoryManager, rebuild the board from scratch, re-evaluate ``solved``
with the active SolutionValidator and notify subscribers.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from .history import HistoryManager
from .persistence import saved_state_problems
from .models import Action, EngineError, ErrorCode, MoveResult, StateChange
from ..puzzle.models import (
    Board,
    Cell,
    GamePiece,
    GameState,
    GameTarget,
    MainDiagonal,
    PuzzleConfiguration,
    PuzzleDefinition,
    empty_board,
    index_by_id,
)
from ..puzzle.geometry import assign_target_ids, build_cell_index
from ..verifiers.models import ValidationResult
from ..verifiers.solution import SolutionValidator, ExactAnswerValidator, build_validator


logger = logging.getLogger(__name__)

Listener = Callable[[StateChange], None]


def create_initial_state(configuration: PuzzleConfiguration) -> GameState:
    """Fresh state: pieces p1..pN unplaced, every target vacant, board blank."""
    pieces = tuple(
        GamePiece(id=f"p{i + 1}", letters=letters)
        for i, letters in enumerate(configuration.piece_letters)
    )
    targets = tuple(
        GameTarget(id=target_id, cells=cells)
        for target_id, cells in zip(assign_target_ids(configuration.diagonals), configuration.diagonals[1:])
    )
    main = MainDiagonal.empty(configuration.diagonals[0] if configuration.diagonals else ())

    return GameState(
        board=empty_board(configuration.grid_size),
        targets=targets,
        main_diagonal=main,
        pieces=pieces,
    )


def adopt_saved_state(saved: GameState, configuration: PuzzleConfiguration) -> GameState:
    """
    Fresh state for the configuration carrying over a save's occupancy and diagonal letters.

    Expects a save that passed saved_state_problems.
    """
    fresh = create_initial_state(configuration)
    holders = {t.id: t.piece_id for t in saved.targets}
    placed_on = {p.id: p.placed_on for p in saved.pieces}
    letters = tuple(_normalize_letter(v) for v in saved.main_diagonal.value)

    return fresh.model_copy(update={
        "targets": tuple(t.model_copy(update={"piece_id": holders[t.id]}) for t in fresh.targets),
        "pieces": tuple(p.model_copy(update={"placed_on": placed_on[p.id]}) for p in fresh.pieces),
        "main_diagonal": fresh.main_diagonal.model_copy(update={"value": letters}),
    })


def compute_board(
    targets: Sequence[GameTarget],
    pieces: Sequence[GamePiece],
    main_diagonal: MainDiagonal,
    grid_size: int
) -> Board:
    """Build the board from placements and the main diagonal."""
    grid = [[""] * grid_size for _ in range(grid_size)]
    letters_by_piece = {p.id: p.letters for p in pieces}

    for target in targets:
        if target.piece_id is None or target.piece_id not in letters_by_piece:
            continue
        for letter, cell in zip(letters_by_piece[target.piece_id], target.cells):
            grid[cell.row][cell.col] = letter

    # Main diagonal is written last and wins any double write
    for letter, cell in zip(main_diagonal.value, main_diagonal.cells):
        grid[cell.row][cell.col] = letter

    return tuple(tuple(row) for row in grid)


def _normalize_letter(value: Any) -> str:
    """First non-blank character, upper-cased; '' for empty input."""
    if not value:
        return ""
    return str(value).strip().upper()[:1]


class GameEngine(BaseModel):
    """
    Mutable holder of the current puzzle state.

    Attributes:
        configuration: Static puzzle shape the state is built from
        solution_validator: Strategy deciding whether the board is solved
        history: Undo/redo snapshots
        state: Current immutable GameState
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    configuration: PuzzleConfiguration = Field(default_factory=PuzzleConfiguration.default)
    solution_validator: SolutionValidator = Field(default_factory=build_validator)
    history: HistoryManager = Field(default_factory=HistoryManager)
    state: Optional[GameState] = None
    _listeners: List[Listener] = PrivateAttr(default_factory=list)

    def model_post_init(self, __context) -> None:
        """Build the initial state when none was supplied."""
        if self.state is None:
            self.state = self._evaluate(create_initial_state(self.configuration))

    @classmethod
    def create(
        cls,
        configuration: Optional[PuzzleConfiguration] = None,
        answer: Optional[PuzzleDefinition] = None,
        word_checker: Optional[Callable[[str], bool]] = None,
        history_depth: Optional[int] = None
    ) -> "GameEngine":
        """
        Factory method to create an engine.

        Args:
            configuration: Puzzle shape; derived from ``answer`` when omitted,
                otherwise the demo configuration
            answer: Answer key; enables exact-answer validation
            word_checker: Spell checker for dictionary validation
            history_depth: Optional cap on undo snapshots

        Returns:
            A new GameEngine with a fresh state
        """
        if configuration is None:
            configuration = (
                PuzzleConfiguration.from_rows(answer.rows) if answer is not None
                else PuzzleConfiguration.default()
            )
        return cls(
            configuration=configuration,
            solution_validator=build_validator(answer, word_checker),
            history=HistoryManager(max_depth=history_depth),
        )

    # Queries

    @property
    def answer(self) -> Optional[PuzzleDefinition]:
        """The loaded answer key, if validating in exact mode."""
        if isinstance(self.solution_validator, ExactAnswerValidator):
            return self.solution_validator.answer
        return None

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    @property
    def is_complete(self) -> bool:
        return self.state.is_complete

    def piece(self, piece_id: str) -> Optional[GamePiece]:
        return self.state.piece(piece_id)

    def target(self, target_id: str) -> Optional[GameTarget]:
        return self.state.target(target_id)

    def target_at(self, row: int, col: int) -> Optional[str]:
        """Id of the target covering a cell; None on the main diagonal or off the grid."""
        if row < 0 or col < 0:
            return None
        return build_cell_index(self.configuration.diagonals).get(Cell(row=row, col=col))

    def valid_targets(self, piece_id: str) -> List[str]:
        """Vacant targets whose length matches the piece, in target order."""
        piece = self.state.piece(piece_id)
        if piece is None:
            return []
        return [
            t.id for t in self.state.targets
            if t.length == piece.length and t.piece_id is None
        ]

    def check_solution(self) -> ValidationResult:
        """Detailed report from the active validator for the current state."""
        return self.solution_validator.check(self.state)

    # Subscriptions

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a callback invoked with a StateChange after every state replacement.

        A listener that raises is logged and skipped; the operation that
        triggered it still returns its result.

        Returns:
            A function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, action: Action, result: Optional[MoveResult] = None) -> None:
        event = StateChange(action=action, state=self.state, result=result)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception(f"Listener {listener!r} failed on {action}")

    # Lifecycle

    def reset(self, configuration: Optional[PuzzleConfiguration] = None) -> MoveResult:
        """Rebuild the state from the (optionally new) configuration and clear history."""
        return self._rebuild("RESET", configuration)

    def load_puzzle(self, definition: PuzzleDefinition) -> MoveResult:
        """Switch to the given answer key: pieces from its rows, exact validation."""
        self.solution_validator = ExactAnswerValidator(answer=definition)
        logger.info(f"Loaded puzzle '{definition.name}'")
        return self._rebuild("LOAD", PuzzleConfiguration.from_rows(definition.rows))

    def restore(self, state: GameState) -> bool:
        """
        Replace the current state with a saved one.

        Only occupancy and main-diagonal letters are read from the save;
        cells and piece letters come from the configuration. The save is
        rejected when its ids, links or lengths do not fit the
        configuration. Board and ``solved`` are recomputed; history is
        cleared.
        """
        problems = saved_state_problems(state, self.configuration)
        if problems:
            logger.warning(f"Ignoring saved state: {'; '.join(problems)}")
            return False

        self.history.reset()
        self.state = self._evaluate(adopt_saved_state(state, self.configuration))
        self._notify("RESTORE")
        return True

    def _rebuild(self, action: Action, configuration: Optional[PuzzleConfiguration]) -> MoveResult:
        if configuration is not None:
            self.configuration = configuration
        self.history.reset()
        self.state = self._evaluate(create_initial_state(self.configuration))
        result = MoveResult(success=True, action=action)
        self._notify(action, result)
        return result

    # Mutations

    def place(self, piece_id: str, target_id: str) -> MoveResult:
        """
        Put an unplaced piece on a vacant target of the same length.

        Fails with UNKNOWN_ID, ALREADY_PLACED, LENGTH_MISMATCH,
        TARGET_OCCUPIED or LETTER_CONFLICT and leaves the state unchanged.
        """
        return self._place("PLACE", piece_id, target_id, replace=False)

    def place_or_replace(self, piece_id: str, target_id: str) -> MoveResult:
        """
        Like place, but evicts a different piece already on the target.

        The evicted piece id is reported in ``replaced_piece_id`` so the
        caller can offer it again.
        """
        return self._place("REPLACE", piece_id, target_id, replace=True)

    def _place(self, action: Action, piece_id: str, target_id: str, replace: bool) -> MoveResult:
        piece_idx = index_by_id(self.state.pieces)
        target_idx = index_by_id(self.state.targets)

        if piece_id not in piece_idx:
            return self._fail(action, "UNKNOWN_ID", f"Unknown piece '{piece_id}'", piece_id, target_id)
        if target_id not in target_idx:
            return self._fail(action, "UNKNOWN_ID", f"Unknown target '{target_id}'", piece_id, target_id)

        piece = self.state.pieces[piece_idx[piece_id]]
        target = self.state.targets[target_idx[target_id]]

        if piece.placed_on is not None:
            return self._fail(
                action, "ALREADY_PLACED",
                f"Piece '{piece_id}' is already on '{piece.placed_on}'", piece_id, target_id
            )
        if piece.length != target.length:
            return self._fail(
                action, "LENGTH_MISMATCH",
                f"Piece '{piece_id}' has {piece.length} letters but '{target_id}' has {target.length} cells",
                piece_id, target_id
            )

        replaced_id = target.piece_id
        if replaced_id is not None and not replace:
            return self._fail(
                action, "TARGET_OCCUPIED",
                f"Target '{target_id}' already holds '{replaced_id}'", piece_id, target_id
            )

        pieces: List[GamePiece] = list(self.state.pieces)
        targets: List[GameTarget] = list(self.state.targets)
        if replaced_id is not None and replaced_id in piece_idx:
            evicted = pieces[piece_idx[replaced_id]]
            pieces[piece_idx[replaced_id]] = evicted.model_copy(update={"placed_on": None})
        targets[target_idx[target_id]] = target.model_copy(update={"piece_id": None})

        # Diagonals never share cells, so this only fires on a broken configuration
        board = compute_board(targets, pieces, self.state.main_diagonal, self.configuration.grid_size)
        for letter, cell in zip(piece.letters, target.cells):
            existing = board[cell.row][cell.col]
            if existing and existing != letter:
                logger.warning(
                    f"LETTER_CONFLICT placing '{piece_id}' on '{target_id}': cell ({cell.row}, {cell.col}) "
                    f"holds '{existing}', piece has '{letter}'. Diagonals overlap in this configuration."
                )
                return self._fail(
                    action, "LETTER_CONFLICT",
                    f"Conflicting letter at row {cell.row + 1}, col {cell.col + 1}", piece_id, target_id
                )

        pieces[piece_idx[piece_id]] = piece.model_copy(update={"placed_on": target_id})
        targets[target_idx[target_id]] = target.model_copy(update={"piece_id": piece_id})

        logger.debug(f"{action} {piece_id} -> {target_id}" + (f" (evicted {replaced_id})" if replaced_id else ""))
        return self._commit(
            action,
            {"pieces": tuple(pieces), "targets": tuple(targets)},
            replaced_piece_id=replaced_id,
        )

    def remove(self, target_id: str) -> MoveResult:
        """
        Take the piece off a target.

        Returns a failed result with no ``removed_piece_id`` when the target
        is unknown or already empty.
        """
        target_idx = index_by_id(self.state.targets)
        if target_id not in target_idx:
            return self._fail("REMOVE", "UNKNOWN_ID", f"Unknown target '{target_id}'", target_id=target_id)

        target = self.state.targets[target_idx[target_id]]
        if target.piece_id is None:
            return MoveResult(
                success=False,
                action="REMOVE",
                complete=self.state.is_complete,
                solved=self.state.solved,
            )

        removed_id = target.piece_id
        pieces: List[GamePiece] = list(self.state.pieces)
        targets: List[GameTarget] = list(self.state.targets)
        targets[target_idx[target_id]] = target.model_copy(update={"piece_id": None})
        for i, piece in enumerate(pieces):
            if piece.id == removed_id:
                pieces[i] = piece.model_copy(update={"placed_on": None})

        logger.debug(f"REMOVE {removed_id} <- {target_id}")
        return self._commit(
            "REMOVE",
            {"pieces": tuple(pieces), "targets": tuple(targets)},
            removed_piece_id=removed_id,
        )

    def set_main_diagonal(self, values: Sequence[str]) -> MoveResult:
        """
        Overwrite the main diagonal.

        Accepts one value per diagonal cell (a list of strings, or a string
        with one letter per cell). Each value keeps only its first
        non-blank character, upper-cased.
        """
        values = list(values)
        size = len(self.state.main_diagonal.cells)
        if len(values) != size:
            return self._fail(
                "DIAGONAL", "INVALID_DIAGONAL",
                f"Main diagonal needs {size} values, got {len(values)}"
            )

        letters = tuple(_normalize_letter(v) for v in values)
        return self._commit(
            "DIAGONAL",
            {"main_diagonal": self.state.main_diagonal.model_copy(update={"value": letters})},
        )

    def clear_main_diagonal(self) -> MoveResult:
        """Blank every main-diagonal cell, e.g. after an incorrect attempt."""
        return self.set_main_diagonal([""] * len(self.state.main_diagonal.cells))

    def undo(self) -> bool:
        """Restore the state before the last mutation. False if there is none."""
        previous = self.history.undo(self.state)
        if previous is None:
            return False
        self.state = previous
        self._notify("UNDO")
        return True

    def redo(self) -> bool:
        """Re-apply the last undone mutation. False if there is none."""
        following = self.history.redo(self.state)
        if following is None:
            return False
        self.state = following
        self._notify("REDO")
        return True

    # Internals

    def _evaluate(self, state: GameState) -> GameState:
        """Rebuild the board and re-check the solution for a candidate state."""
        board = compute_board(state.targets, state.pieces, state.main_diagonal, self.configuration.grid_size)
        candidate = state.model_copy(update={"board": board, "solved": False})
        return candidate.model_copy(update={"solved": self.solution_validator.is_solved(candidate)})

    def _commit(self, action: Action, update: Dict[str, Any], **result_fields: Any) -> MoveResult:
        self.history.before_mutate(self.state)
        self.state = self._evaluate(self.state.model_copy(update=update))

        result = MoveResult(
            success=True,
            action=action,
            complete=self.state.is_complete,
            solved=self.state.solved,
            **result_fields,
        )
        if result.needs_retry:
            result.warnings.append(EngineError(
                code="INCORRECT_SOLUTION",
                message="Every cell is filled but the solution is not correct"
            ))
        self._notify(action, result)
        return result

    def _fail(
        self,
        action: Action,
        code: ErrorCode,
        message: str,
        piece_id: Optional[str] = None,
        target_id: Optional[str] = None
    ) -> MoveResult:
        logger.debug(f"{action} refused: {code} {message}")
        return MoveResult(
            success=False,
            action=action,
            error=EngineError(code=code, message=message, piece_id=piece_id, target_id=target_id),
            complete=self.state.is_complete,
            solved=self.state.solved,
        )
