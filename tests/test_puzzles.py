"""Tests for puzzle definitions and puzzle file loading."""

import json
import logging

import pytest
from pydantic import ValidationError

from src.puzzle import PuzzleDefinition, PuzzleConfiguration, load_puzzle_file, parse_puzzles
from conftest import ROWS, DIAGONAL, SEQUENCES


@pytest.fixture
def puzzle_file(tmp_path):
    """Two puzzles; the second uses the same rows in reverse order."""
    path = tmp_path / "puzzles.json"
    path.write_text(json.dumps({
        "daily-001": ROWS + [DIAGONAL],
        "daily-002": list(reversed(ROWS)) + ["EEIOEE"],
    }))
    return path


class TestPuzzleDefinition:
    """Test answer key validation."""

    def test_from_words(self):
        definition = PuzzleDefinition.from_words(ROWS + [DIAGONAL], name="x")
        assert definition.rows == tuple(ROWS)
        assert definition.diagonal_word == DIAGONAL
        assert definition.is_consistent is True

    def test_extra_words_ignored(self):
        definition = PuzzleDefinition.from_words(ROWS + [DIAGONAL, "EXTRA"])
        assert definition.diagonal_word == DIAGONAL

    def test_too_few_words(self):
        with pytest.raises(ValueError):
            PuzzleDefinition.from_words(ROWS)

    def test_short_row(self):
        with pytest.raises(ValidationError):
            PuzzleDefinition(rows=ROWS[:5] + ["SHORT"], diagonal_word=DIAGONAL)

    def test_non_letters(self):
        with pytest.raises(ValidationError):
            PuzzleDefinition(rows=ROWS[:5] + ["ERR4NT"], diagonal_word=DIAGONAL)

    def test_diagonal_length(self):
        with pytest.raises(ValidationError):
            PuzzleDefinition(rows=ROWS, diagonal_word="SMBQI")

    def test_inconsistent_diagonal(self):
        assert PuzzleDefinition(rows=ROWS, diagonal_word="SALOON").is_consistent is False

    def test_configuration_from_rows(self):
        configuration = PuzzleConfiguration.from_rows(ROWS)
        assert list(configuration.piece_letters) == SEQUENCES
        assert configuration.grid_size == 6


class TestParsePuzzles:
    """Test parsing puzzle file contents."""

    def test_single_quotes(self):
        data = parse_puzzles("{'a': ['SALUTE', 'AMBLER']}")
        assert data == {"a": ["SALUTE", "AMBLER"]}

    def test_not_an_object(self):
        with pytest.raises(ValueError):
            parse_puzzles('["SALUTE"]')

    def test_entry_not_a_list(self):
        with pytest.raises(ValueError):
            parse_puzzles('{"a": "SALUTE"}')

    def test_invalid_json(self):
        with pytest.raises(ValueError):
            parse_puzzles("{not json")


class TestLoadPuzzleFile:
    """Test selecting a puzzle from a file."""

    def test_named_puzzle(self, puzzle_file):
        definition = load_puzzle_file(puzzle_file, "daily-001")
        assert definition.name == "daily-001"
        assert definition.rows == tuple(ROWS)

    def test_second_puzzle(self, puzzle_file):
        definition = load_puzzle_file(puzzle_file, "daily-002")
        assert definition.rows[0] == "ERRANT"
        assert definition.is_consistent is True

    def test_missing_name_falls_back_to_first(self, puzzle_file, caplog):
        with caplog.at_level(logging.INFO):
            definition = load_puzzle_file(puzzle_file, "daily-999")
        assert definition.name == "daily-001"
        assert "daily-999" in caplog.text

    def test_no_name_uses_first(self, puzzle_file):
        assert load_puzzle_file(puzzle_file).name == "daily-001"

    def test_single_quoted_file(self, tmp_path):
        path = tmp_path / "puzzles.json"
        path.write_text("{'p': [" + ", ".join(f"'{w}'" for w in ROWS + [DIAGONAL]) + "]}")
        assert load_puzzle_file(path).diagonal_word == DIAGONAL

    def test_missing_file(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING):
            assert load_puzzle_file(tmp_path / "nope.json") is None
        assert "MALFORMED_PUZZLE_SOURCE" in caplog.text

    def test_bad_json(self, tmp_path, caplog):
        path = tmp_path / "puzzles.json"
        path.write_text("{oops")
        with caplog.at_level(logging.WARNING):
            assert load_puzzle_file(path) is None
        assert "MALFORMED_PUZZLE_SOURCE" in caplog.text

    def test_empty_object(self, tmp_path):
        path = tmp_path / "puzzles.json"
        path.write_text("{}")
        assert load_puzzle_file(path) is None

    def test_too_few_words(self, tmp_path):
        path = tmp_path / "puzzles.json"
        path.write_text(json.dumps({"p": ROWS}))
        assert load_puzzle_file(path) is None

    def test_short_word(self, tmp_path):
        path = tmp_path / "puzzles.json"
        path.write_text(json.dumps({"p": ROWS[:5] + ["SHORT", DIAGONAL]}))
        assert load_puzzle_file(path) is None

    def test_inconsistent_key_warns(self, tmp_path, caplog):
        """An unsolvable key still loads but is flagged."""
        path = tmp_path / "puzzles.json"
        path.write_text(json.dumps({"p": ROWS + ["SALOON"]}))
        with caplog.at_level(logging.WARNING):
            definition = load_puzzle_file(path)
        assert definition is not None
        assert definition.diagonal_word == "SALOON"
        assert "cannot be solved" in caplog.text
