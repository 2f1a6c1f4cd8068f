"""
Move script parsing and playback.

A move script drives the engine from text, one move per line:

    PLACE p1 d_len1_a
    REPLACE p2 d_len1_a
    REMOVE d_len1_a
    DIAGONAL SMBQIT        # '.' leaves a cell blank, e.g. SMB...
    CLEAR
    UNDO
    REDO
    RESET

Keywords are case-insensitive, ids are lower-cased, and ``#`` starts a
comment.
"""

import re
from typing import List, Tuple

from .engine import GameEngine
from .models import Move, MoveResult
from ..verifiers.models import ValidationError


PLACE_PATTERN = r'^(PLACE|REPLACE)\s+(\S+)\s+(\S+)$'
REMOVE_PATTERN = r'^REMOVE\s+(\S+)$'
DIAGONAL_PATTERN = r'^DIAGONAL\s+([A-Z.\s]+)$'
BARE_PATTERN = r'^(CLEAR|UNDO|REDO|RESET)$'


def strip_comment(line: str) -> str:
    """Drop everything after '#' and surrounding whitespace."""
    return line.split('#', 1)[0].strip()


def parse_moves(script: str) -> Tuple[List[Move], List[ValidationError]]:
    """
    Parse a move script into moves with error collection.

    Returns a tuple of (moves, errors). Lines that fail to parse are
    reported and skipped; the remaining moves are still returned.
    """
    errors: List[ValidationError] = []
    moves: List[Move] = []

    lines = [
        (i, strip_comment(line))
        for i, line in enumerate(script.split('\n'), start=1)
    ]
    lines = [(i, line) for i, line in lines if line]

    if not lines:
        errors.append(ValidationError(
            code="EMPTY_SCRIPT",
            message="Move script is empty"
        ))
        return moves, errors

    for i, line in lines:
        match = re.match(PLACE_PATTERN, line, re.IGNORECASE)
        if match:
            moves.append(Move(
                action=match.group(1).upper(),
                piece_id=match.group(2).lower(),
                target_id=match.group(3).lower(),
                line=i
            ))
            continue

        match = re.match(REMOVE_PATTERN, line, re.IGNORECASE)
        if match:
            moves.append(Move(action="REMOVE", target_id=match.group(1).lower(), line=i))
            continue

        match = re.match(DIAGONAL_PATTERN, line, re.IGNORECASE)
        if match:
            letters = re.sub(r'\s+', '', match.group(1)).upper()
            moves.append(Move(
                action="DIAGONAL",
                letters=["" if ch == "." else ch for ch in letters],
                line=i
            ))
            continue

        match = re.match(BARE_PATTERN, line, re.IGNORECASE)
        if match:
            moves.append(Move(action=match.group(1).upper(), line=i))
            continue

        errors.append(ValidationError(
            code="INVALID_LINE",
            message=f"Invalid line format: '{line}'",
            line=i
        ))

    return moves, errors


def apply_move(engine: GameEngine, move: Move) -> MoveResult:
    """Run one move against the engine."""
    if move.action == "PLACE":
        return engine.place(move.piece_id, move.target_id)
    if move.action == "REPLACE":
        return engine.place_or_replace(move.piece_id, move.target_id)
    if move.action == "REMOVE":
        return engine.remove(move.target_id)
    if move.action == "DIAGONAL":
        return engine.set_main_diagonal(move.letters or [])
    if move.action == "CLEAR":
        return engine.clear_main_diagonal()
    if move.action == "RESET":
        return engine.reset()

    # UNDO / REDO report success only
    done = engine.undo() if move.action == "UNDO" else engine.redo()
    return MoveResult(
        success=done,
        action=move.action,
        complete=engine.state.is_complete,
        solved=engine.state.solved,
    )


def apply_moves(engine: GameEngine, moves: List[Move]) -> List[MoveResult]:
    """Run every move in order, returning one result per move."""
    return [apply_move(engine, move) for move in moves]
