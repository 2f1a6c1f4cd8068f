"""
Puzzle file loading.

A puzzle file is a JSON object mapping puzzle names to seven uppercase
words: six row words followed by the main diagonal word, e.g.

    {"daily-001": ["SALUTE", "AMBLER", "LOBOTO", "UBIQUI", "TEOTIH", "ERRANT", "SMBQIT"]}

Hand-edited files often use single quotes, so those are normalized before
parsing. Any failure is logged and reported as ``None`` so the caller keeps
its current configuration.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from .models import PuzzleDefinition


logger = logging.getLogger(__name__)


def parse_puzzles(text: str) -> Dict[str, List[str]]:
    """
    Parse the contents of a puzzle file.

    Raises:
        ValueError: If the text is not a JSON object of word lists
    """
    data = json.loads(text.replace("'", '"'))
    if not isinstance(data, dict):
        raise ValueError("Puzzle file must contain a JSON object")
    for name, words in data.items():
        if not isinstance(words, list) or not all(isinstance(w, str) for w in words):
            raise ValueError(f"Puzzle '{name}' must be a list of words")
    return data


def load_puzzle_file(
    path: Union[str, Path],
    name: Optional[str] = None
) -> Optional[PuzzleDefinition]:
    """
    Load one puzzle from a puzzle file.

    Args:
        path: Path to the JSON puzzle file
        name: Puzzle to select; falls back to the first entry when absent
            or not found

    Returns:
        The selected PuzzleDefinition, or None when the file is missing,
        unparseable, empty or the selected entry is malformed
    """
    path = Path(path)

    if not path.exists():
        logger.warning(f"MALFORMED_PUZZLE_SOURCE: puzzle file not found: {path}")
        return None

    try:
        puzzles = parse_puzzles(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning(f"MALFORMED_PUZZLE_SOURCE: could not read {path}: {e}")
        return None

    if not puzzles:
        logger.warning(f"MALFORMED_PUZZLE_SOURCE: {path} contains no puzzles")
        return None

    if name is not None and name in puzzles:
        key = name
    else:
        key = next(iter(puzzles))
        if name is not None:
            logger.info(f"Puzzle '{name}' not in {path}, using '{key}'")

    try:
        definition = PuzzleDefinition.from_words(puzzles[key], name=key)
    except ValueError as e:
        logger.warning(f"MALFORMED_PUZZLE_SOURCE: puzzle '{key}' in {path} is invalid: {e}")
        return None

    if not definition.is_consistent:
        logger.warning(
            f"Puzzle '{key}': diagonal word '{definition.diagonal_word}' does not match "
            f"the rows' diagonal letters; the puzzle cannot be solved"
        )

    logger.debug(f"Loaded puzzle '{key}' rows={list(definition.rows)} diagonal={definition.diagonal_word}")
    return definition
