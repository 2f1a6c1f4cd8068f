"""Tests for the undo/redo history."""

import pytest
from pydantic import ValidationError

from src.engine import HistoryManager, create_initial_state
from src.puzzle import PuzzleConfiguration


@pytest.fixture
def states():
    """Three distinct snapshots."""
    base = create_initial_state(PuzzleConfiguration.default())
    return [base.model_copy(update={"solved": flag}) for flag in (False, True)] + [
        base.model_copy(update={"board": tuple(("A",) * 6 for _ in range(6))})
    ]


class TestHistoryManager:
    """Test the snapshot stacks directly."""

    def test_empty(self):
        history = HistoryManager()
        assert history.can_undo is False
        assert history.can_redo is False

    def test_undo_returns_previous(self, states):
        history = HistoryManager()
        history.before_mutate(states[0])
        assert history.can_undo is True
        assert history.undo(states[1]) is states[0]
        assert history.can_redo is True

    def test_redo_returns_undone(self, states):
        history = HistoryManager()
        history.before_mutate(states[0])
        history.undo(states[1])
        assert history.redo(states[0]) is states[1]
        assert history.can_redo is False
        assert history.can_undo is True

    def test_nothing_to_undo(self, states):
        history = HistoryManager()
        assert history.undo(states[0]) is None
        assert history.redo(states[0]) is None

    def test_mutation_clears_future(self, states):
        history = HistoryManager()
        history.before_mutate(states[0])
        history.undo(states[1])
        history.before_mutate(states[0])
        assert history.can_redo is False

    def test_max_depth_drops_oldest(self, states):
        """Only the most recent snapshots are kept."""
        history = HistoryManager(max_depth=2)
        for state in states:
            history.before_mutate(state)
        assert history.history == [states[1], states[2]]

    def test_invalid_depth(self):
        with pytest.raises(ValidationError):
            HistoryManager(max_depth=0)

    def test_reset(self, states):
        history = HistoryManager()
        history.before_mutate(states[0])
        history.before_mutate(states[1])
        history.undo(states[2])
        history.reset()
        assert history.can_undo is False
        assert history.can_redo is False


class TestSnapshots:
    """Test that snapshots cannot drift after being recorded."""

    def test_state_is_frozen(self, states):
        with pytest.raises(ValidationError):
            states[0].solved = True

    def test_recorded_state_unchanged_by_engine(self, engine):
        """Later mutations never alter an earlier snapshot."""
        engine.place("p1", "d_len1_a")
        snapshot = engine.history.history[-1]
        engine.place("p2", "d_len1_b")
        engine.set_main_diagonal("SMBQIT")
        assert snapshot.target("d_len1_a").piece_id is None
        assert all(cell == "" for row in snapshot.board for cell in row)
