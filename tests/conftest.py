"""Shared fixtures for the Diagone test suite."""

import pytest

from src.engine import GameEngine
from src.puzzle import PuzzleDefinition
from src.verifiers import DictionaryValidator


ROWS = ["SALUTE", "AMBLER", "LOBOTO", "UBIQUI", "TEOTIH", "ERRANT"]
DIAGONAL = "SMBQIT"

# Piece letters for ROWS, in target order d_len1_a, d_len1_b, ..., d_len5_b
SEQUENCES = ["E", "E", "TR", "TR", "UEO", "UER", "LLTI", "LBOA", "ABOUH", "AOITN"]

TARGET_IDS = [
    "d_len1_a", "d_len1_b",
    "d_len2_a", "d_len2_b",
    "d_len3_a", "d_len3_b",
    "d_len4_a", "d_len4_b",
    "d_len5_a", "d_len5_b",
]


def place_all(engine: GameEngine) -> None:
    """Place piece p{i+1} on the i-th target."""
    for i, target_id in enumerate(TARGET_IDS):
        result = engine.place(f"p{i + 1}", target_id)
        assert result.success, result.error


@pytest.fixture
def answer() -> PuzzleDefinition:
    return PuzzleDefinition(name="test", rows=ROWS, diagonal_word=DIAGONAL)


@pytest.fixture
def engine(answer) -> GameEngine:
    """Engine with the test puzzle loaded in exact-answer mode."""
    return GameEngine.create(answer=answer)


@pytest.fixture
def demo_engine() -> GameEngine:
    """Demo configuration, dictionary mode accepting every word."""
    return GameEngine(solution_validator=DictionaryValidator(word_checker=lambda word: True))
