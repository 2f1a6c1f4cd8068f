"""Placement engine, history and persistence for Diagone."""

from .models import (
    Action,
    ErrorCode,
    EngineError,
    MoveResult,
    StateChange,
    GameConfig,
    Move,
    MoveAction,
)
from .history import HistoryManager
from .engine import GameEngine, create_initial_state, adopt_saved_state, compute_board
from .persistence import save_state, load_state, matches_configuration, saved_state_problems
from .parsing import parse_moves, apply_move, apply_moves

__all__ = [
    # Models
    "Action",
    "ErrorCode",
    "EngineError",
    "MoveResult",
    "StateChange",
    "GameConfig",
    "Move",
    "MoveAction",
    # Engine
    "HistoryManager",
    "GameEngine",
    "create_initial_state",
    "adopt_saved_state",
    "compute_board",
    # Persistence
    "save_state",
    "load_state",
    "matches_configuration",
    "saved_state_problems",
    # Move scripts
    "parse_moves",
    "apply_move",
    "apply_moves",
]
