"""Tests for the command-line driver."""

import json
import sys

import pytest
import yaml

from src.engine import GameConfig, load_state, save_state
from src.main import load_config, build_engine, main
from src.verifiers import DictionaryValidator, ExactAnswerValidator
from conftest import ROWS, DIAGONAL, SEQUENCES, TARGET_IDS


@pytest.fixture
def puzzle_file(tmp_path):
    path = tmp_path / "puzzles.json"
    path.write_text(json.dumps({"daily-001": ROWS + [DIAGONAL]}))
    return path


@pytest.fixture
def config_file(tmp_path, puzzle_file):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({
        "puzzle_file": str(puzzle_file),
        "puzzle_name": "daily-001",
        "save_path": str(tmp_path / "saves" / "state.json"),
        "log_level": "info",
    }))
    return path


@pytest.fixture
def moves_file(tmp_path):
    path = tmp_path / "moves.txt"
    lines = [f"PLACE p{i + 1} {target_id}" for i, target_id in enumerate(TARGET_IDS)]
    path.write_text("\n".join(lines))
    return path


def run_main(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["diagone", *[str(a) for a in args]])
    return main()


class TestLoadConfig:
    """Test YAML configuration loading."""

    def test_defaults_without_path(self):
        assert load_config(None) == GameConfig()

    def test_reads_yaml(self, config_file, puzzle_file):
        config = load_config(str(config_file))
        assert config.puzzle_file == str(puzzle_file)
        assert config.validation == "auto"
        assert config.log_level == "INFO"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "missing.yaml"))

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(str(path)) == GameConfig()


class TestBuildEngine:
    """Test engine construction from configuration."""

    def test_demo_defaults(self):
        engine = build_engine(GameConfig())
        assert isinstance(engine.solution_validator, DictionaryValidator)
        assert engine.state.piece("p1").letters == "M"

    def test_puzzle_enables_exact_mode(self, puzzle_file):
        engine = build_engine(GameConfig(puzzle_file=str(puzzle_file)))
        assert isinstance(engine.solution_validator, ExactAnswerValidator)
        assert [p.letters for p in engine.state.pieces] == SEQUENCES

    def test_dictionary_mode_keeps_puzzle_pieces(self, puzzle_file):
        engine = build_engine(GameConfig(puzzle_file=str(puzzle_file), validation="dictionary"))
        assert isinstance(engine.solution_validator, DictionaryValidator)
        assert [p.letters for p in engine.state.pieces] == SEQUENCES

    def test_exact_mode_requires_puzzle(self, tmp_path):
        with pytest.raises(ValueError):
            build_engine(GameConfig(puzzle_file=str(tmp_path / "missing.json"), validation="exact"))

    def test_missing_puzzle_falls_back_in_auto_mode(self, tmp_path):
        engine = build_engine(GameConfig(puzzle_file=str(tmp_path / "missing.json")))
        assert isinstance(engine.solution_validator, DictionaryValidator)

    def test_word_list(self, tmp_path):
        words = tmp_path / "words.txt"
        words.write_text("salute\n")
        engine = build_engine(GameConfig(word_list=str(words)))
        assert engine.solution_validator.word_checker("SALUTE") is True
        assert engine.solution_validator.word_checker("AMBLER") is False

    def test_word_list_unused_in_exact_mode(self, puzzle_file, tmp_path):
        """A missing word list only matters when dictionary mode needs it."""
        config = GameConfig(puzzle_file=str(puzzle_file), word_list=str(tmp_path / "missing.txt"))
        engine = build_engine(config)
        assert isinstance(engine.solution_validator, ExactAnswerValidator)

    def test_missing_word_list_in_dictionary_mode(self, tmp_path):
        with pytest.raises(OSError):
            build_engine(GameConfig(word_list=str(tmp_path / "missing.txt")))

    def test_history_depth(self):
        engine = build_engine(GameConfig(history_depth=3))
        assert engine.history.max_depth == 3


class TestMain:
    """Test full CLI runs."""

    def test_solves_from_script(self, monkeypatch, capsys, config_file, moves_file, tmp_path):
        with open(moves_file, "a") as f:
            f.write(f"\nDIAGONAL {DIAGONAL}\n")

        assert run_main(monkeypatch, config_file, "--moves", moves_file) == 0

        out = capsys.readouterr().out
        assert "=== Diagone Summary ===" in out
        assert "Mode: exact" in out
        assert "Targets filled: 10/10" in out
        assert "Solved: yes" in out
        assert "\n".join(ROWS) in out

        saved = load_state(tmp_path / "saves" / "state.json")
        assert saved.solved is True

    def test_resumes_saved_progress(self, monkeypatch, capsys, config_file, moves_file, tmp_path):
        """A second run continues from the state saved by the first."""
        run_main(monkeypatch, config_file, "--moves", moves_file)
        assert "Solved: no" in capsys.readouterr().out

        diagonal = tmp_path / "diagonal.txt"
        diagonal.write_text(f"DIAGONAL {DIAGONAL}\n")
        run_main(monkeypatch, config_file, "--moves", diagonal)
        assert "Solved: yes" in capsys.readouterr().out

    def test_reports_failed_moves(self, monkeypatch, capsys, tmp_path):
        moves = tmp_path / "moves.txt"
        moves.write_text("PLACE p3 d_len3_a\nBOGUS\n")

        assert run_main(monkeypatch, "--moves", moves, "--output", tmp_path / "out.json") == 0

        captured = capsys.readouterr()
        assert "LENGTH_MISMATCH" in captured.out
        assert "Line 2" in captured.err
        assert "Mode: dictionary" in captured.out
        assert (tmp_path / "out.json").exists()

    def test_wrong_diagonal_warns(self, monkeypatch, capsys, config_file, moves_file):
        with open(moves_file, "a") as f:
            f.write("\nDIAGONAL SMBQIX\n")

        run_main(monkeypatch, config_file, "--moves", moves_file)

        out = capsys.readouterr().out
        assert "not correct" in out
        assert "Solved: no" in out

    def test_missing_config_exits(self, monkeypatch, tmp_path):
        with pytest.raises(SystemExit) as exc:
            run_main(monkeypatch, tmp_path / "missing.yaml")
        assert exc.value.code == 1

    def test_inconsistent_resume_ignored(self, monkeypatch, capsys, tmp_path):
        """A hand-edited save with broken links starts a fresh game instead of crashing."""
        engine = build_engine(GameConfig())
        targets = tuple(
            t.model_copy(update={"piece_id": "p9"}) if t.id == "d_len1_a" else t
            for t in engine.state.targets
        )
        bad = tmp_path / "bad.json"
        save_state(engine.state.model_copy(update={"targets": targets}), bad)

        assert run_main(monkeypatch, "--resume", bad) == 0
        assert "Targets filled: 0/10" in capsys.readouterr().out

    def test_exact_without_puzzle_exits(self, monkeypatch, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("validation: exact\n")
        with pytest.raises(SystemExit) as exc:
            run_main(monkeypatch, config)
        assert exc.value.code == 1
