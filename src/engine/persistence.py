"""Saving and restoring game progress as JSON."""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from ..puzzle.geometry import assign_target_ids
from ..puzzle.models import GameState, PuzzleConfiguration


logger = logging.getLogger(__name__)


def save_state(state: GameState, path: Union[str, Path]) -> Path:
    """Write the state to ``path`` (parent directories are created)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        json.dump(state.model_dump(mode="json"), f, indent=2)

    return path


def matches_configuration(state: GameState, configuration: PuzzleConfiguration) -> bool:
    """Whether a saved state has the target and piece counts of the configuration."""
    return (
        len(state.targets) == configuration.target_count
        and len(state.pieces) == len(configuration.piece_letters)
    )


def saved_state_problems(state: GameState, configuration: PuzzleConfiguration) -> List[str]:
    """
    Check that a saved state can be restored into the configuration.

    Only occupancy and main-diagonal letters are taken from a save, so the
    checks cover ids, piece/target links and lengths. Saved cells and
    letters are not compared; the configuration's own are used instead.

    Returns:
        List of problems found; empty when the save can be restored
    """
    if not matches_configuration(state, configuration):
        return [
            f"save has {len(state.targets)} targets and {len(state.pieces)} pieces, "
            f"configuration expects {configuration.target_count} and {len(configuration.piece_letters)}"
        ]

    cells_by_target = dict(zip(assign_target_ids(configuration.diagonals), configuration.diagonals[1:]))
    letters_by_piece = {f"p{i + 1}": letters for i, letters in enumerate(configuration.piece_letters)}

    problems: List[str] = []
    unknown_targets = sorted({t.id for t in state.targets} ^ set(cells_by_target))
    if unknown_targets:
        problems.append(f"target ids do not match the configuration: {', '.join(unknown_targets)}")
    unknown_pieces = sorted({p.id for p in state.pieces} ^ set(letters_by_piece))
    if unknown_pieces:
        problems.append(f"piece ids do not match the configuration: {', '.join(unknown_pieces)}")
    if len(state.main_diagonal.cells) != configuration.grid_size:
        problems.append(
            f"main diagonal has {len(state.main_diagonal.cells)} cells, expected {configuration.grid_size}"
        )
    if problems:
        return problems

    placed_on = {p.id: p.placed_on for p in state.pieces}
    holders: Dict[str, str] = {}
    for target in state.targets:
        piece_id = target.piece_id
        if piece_id is None:
            continue
        if piece_id not in letters_by_piece:
            problems.append(f"target '{target.id}' holds unknown piece '{piece_id}'")
            continue
        if piece_id in holders:
            problems.append(f"piece '{piece_id}' sits on both '{holders[piece_id]}' and '{target.id}'")
            continue
        holders[piece_id] = target.id
        if len(letters_by_piece[piece_id]) != len(cells_by_target[target.id]):
            problems.append(
                f"piece '{piece_id}' has {len(letters_by_piece[piece_id])} letters "
                f"but '{target.id}' has {len(cells_by_target[target.id])} cells"
            )
        if placed_on[piece_id] != target.id:
            problems.append(f"target '{target.id}' holds '{piece_id}' but the piece is on '{placed_on[piece_id]}'")

    for piece in state.pieces:
        if piece.placed_on is not None and holders.get(piece.id) != piece.placed_on:
            problems.append(f"piece '{piece.id}' is on '{piece.placed_on}' but that target does not hold it")

    return problems


def load_state(
    path: Union[str, Path],
    configuration: Optional[PuzzleConfiguration] = None
) -> Optional[GameState]:
    """
    Read a saved state.

    Args:
        path: File written by save_state
        configuration: When given, saves that do not fit it are rejected

    Returns:
        The saved GameState, or None if the file is missing, unreadable or stale
    """
    path = Path(path)

    if not path.exists():
        return None

    try:
        with open(path) as f:
            data = json.load(f)
        state = GameState.model_validate(data)
    except (OSError, ValueError) as e:
        logger.warning(f"Could not restore saved state from {path}: {e}")
        return None

    if configuration is not None:
        problems = saved_state_problems(state, configuration)
        if problems:
            logger.warning(
                f"Saved state in {path} belongs to a different puzzle shape or is inconsistent "
                f"({'; '.join(problems)}); ignoring it"
            )
            return None

    return state
