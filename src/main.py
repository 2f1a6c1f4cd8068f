"""
Main entry point for running Diagone sessions from the command line.

Usage:
    python -m src.main config.yaml --moves moves.txt
    python -m src.main config.yaml --resume saves/state.json --output saves/state.json --verbose
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

import yaml

from .engine import GameConfig, GameEngine, HistoryManager, apply_moves, parse_moves, load_state, save_state
from .puzzle import PuzzleConfiguration, load_puzzle_file
from .verifiers import DictionaryValidator, build_validator, render_board
from .verifiers.data import checker, load_word_list


def load_config(config_path: Optional[str]) -> GameConfig:
    """Load session configuration from a YAML file (defaults when no path is given)."""
    if not config_path:
        return GameConfig()

    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return GameConfig(**data)


def build_engine(config: GameConfig) -> GameEngine:
    """Create an engine from the session configuration."""
    answer = None
    if config.puzzle_file:
        answer = load_puzzle_file(config.puzzle_file, config.puzzle_name)
    if answer is None and config.validation == "exact":
        raise ValueError(f"Exact validation needs a valid puzzle file, got: {config.puzzle_file}")

    # Pieces come from the puzzle whenever one loaded; dictionary mode just ignores its answers
    if answer is not None:
        configuration = PuzzleConfiguration.from_rows(answer.rows)
    else:
        configuration = PuzzleConfiguration.default()

    if answer is not None and config.validation != "dictionary":
        validator = build_validator(answer=answer)
    elif config.word_list:
        validator = DictionaryValidator(word_checker=load_word_list(config.word_list))
    else:
        validator = DictionaryValidator(word_checker=checker(config.min_zipf_frequency))

    return GameEngine(
        configuration=configuration,
        solution_validator=validator,
        history=HistoryManager(max_depth=config.history_depth),
    )


def main():
    parser = argparse.ArgumentParser(
        description="Play a Diagone puzzle from a move script",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  puzzle_file: puzzles/puzzles.json
  puzzle_name: daily-001
  save_path: saves/state.json
  validation: auto
  log_level: INFO

Example moves.txt:
  PLACE p1 d_len1_a
  PLACE p2 d_len1_b
  DIAGONAL SMBQIT
        """
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to YAML configuration file (defaults apply when omitted)"
    )
    parser.add_argument(
        "--moves", "-m",
        help="Path to a move script to apply"
    )
    parser.add_argument(
        "--resume",
        help="Restore progress from a saved state JSON file (defaults to save_path)"
    )
    parser.add_argument(
        "--output", "-o",
        help="Path to save the final state (defaults to save_path)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every move"
    )

    args = parser.parse_args()

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, config.log_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        engine = build_engine(config)
    except Exception as e:
        print(f"Error building engine: {e}", file=sys.stderr)
        sys.exit(1)

    # Restore saved progress if there is any
    resume_path = args.resume or config.save_path
    if resume_path:
        saved = load_state(resume_path, engine.configuration)
        if saved is not None and engine.restore(saved):
            if args.verbose:
                print(f"Resumed from: {resume_path}")

    # Apply the move script
    if args.moves:
        try:
            script = Path(args.moves).read_text()
        except OSError as e:
            print(f"Error reading moves: {e}", file=sys.stderr)
            sys.exit(1)

        moves, errors = parse_moves(script)
        for err in errors:
            print(f"Line {err.line}: {err.message}" if err.line else err.message, file=sys.stderr)

        for move, result in zip(moves, apply_moves(engine, moves)):
            if not result.success and result.error:
                print(f"Line {move.line}: {move.action} failed ({result.error.code}): {result.error.message}")
            for warning in result.warnings:
                print(f"Line {move.line}: {warning.message}")

    # Save results
    output_path = args.output or config.save_path
    if output_path:
        save_state(engine.state, output_path)
        if args.verbose:
            print(f"State saved to: {output_path}")

    # Print summary
    validation = engine.check_solution()
    placed = sum(1 for t in engine.state.targets if t.piece_id is not None)

    print()
    print(render_board(engine.state.board))
    print()
    print("=== Diagone Summary ===")
    print(f"Mode: {validation.mode}")
    print(f"Targets filled: {placed}/{len(engine.state.targets)}")
    print(f"Main diagonal: {engine.state.main_diagonal.word or '(empty)'}")
    print(f"Solved: {'yes' if engine.state.solved else 'no'}")
    if not validation.valid:
        for err in validation.errors[:3]:
            print(f"  - {err.message}")
        if len(validation.errors) > 3:
            print(f"  ... and {len(validation.errors) - 3} more")

    return 0


if __name__ == "__main__":
    sys.exit(main())
