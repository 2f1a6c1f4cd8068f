from typing import List, Optional
from pydantic import BaseModel, Field

from ..puzzle.models import GameState


class HistoryManager(BaseModel):
    """
    Undo/redo stacks of whole GameState snapshots.

    GameState is frozen, so pushing the current value is already a safe
    snapshot; no deep copy is needed.

    Attributes:
        history: Past states, most recent last
        future: Undone states, most recent last
        max_depth: Optional cap on the number of past states kept
    """

    history: List[GameState] = Field(default_factory=list)
    future: List[GameState] = Field(default_factory=list)
    max_depth: Optional[int] = Field(default=None, ge=1)

    @property
    def can_undo(self) -> bool:
        return bool(self.history)

    @property
    def can_redo(self) -> bool:
        return bool(self.future)

    def before_mutate(self, current: GameState) -> None:
        """Record the state about to be replaced and drop the redo stack."""
        self.history.append(current)
        self.future.clear()
        if self.max_depth is not None and len(self.history) > self.max_depth:
            # Oldest snapshots go first
            del self.history[: len(self.history) - self.max_depth]

    def undo(self, current: GameState) -> Optional[GameState]:
        """
        Step back one state.

        Returns:
            The state to restore, or None if there is nothing to undo
        """
        if not self.history:
            return None
        self.future.append(current)
        return self.history.pop()

    def redo(self, current: GameState) -> Optional[GameState]:
        """Step forward one undone state; None if nothing was undone."""
        if not self.future:
            return None
        self.history.append(current)
        return self.future.pop()

    def reset(self) -> None:
        self.history.clear()
        self.future.clear()
