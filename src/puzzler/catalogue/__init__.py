"""Puzzle catalogue: JSON loading and navigation (read-only)."""

from puzzler.catalogue.loader import (
    PuzzleCatalogue,
    load_bundled_puzzles,
    load_puzzles,
    parse_puzzles,
)

__all__ = [
    "PuzzleCatalogue",
    "load_bundled_puzzles",
    "load_puzzles",
    "parse_puzzles",
]
