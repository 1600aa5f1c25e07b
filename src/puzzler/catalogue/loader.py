"""Read-only puzzle catalogue loading and navigation."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path

from puzzler.core.errors import PuzzleFormatError
from puzzler.core.models import Puzzle

_LOGGER = logging.getLogger(__name__)
_BUNDLED_PUZZLES = Path(__file__).resolve().parent / "data" / "sample_puzzles.json"


def parse_puzzles(text: str, *, strict: bool = False) -> list[Puzzle]:
    """Parse a JSON array of puzzle records.

    Invalid records are skipped with a warning, or raise when *strict*.

    Raises:
        PuzzleFormatError: if *text* is not a JSON array, or (when *strict*)
            if any record is invalid.
    """
    try:
        data = json.loads(text)
    except ValueError as exc:
        raise PuzzleFormatError(f"Puzzle catalogue is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise PuzzleFormatError("Puzzle catalogue must be a JSON array")

    puzzles: list[Puzzle] = []
    for index, record in enumerate(data):
        try:
            if not isinstance(record, dict):
                raise PuzzleFormatError(f"Record {index} is not an object")
            puzzles.append(Puzzle.from_dict(record))
        except PuzzleFormatError as exc:
            if strict:
                raise
            _LOGGER.warning("Skipping puzzle record %d: %s", index, exc)
    return puzzles


def load_puzzles(path: Path | str, *, strict: bool = False) -> list[Puzzle]:
    """Load puzzles from a JSON file on disk."""
    return parse_puzzles(Path(path).read_text(encoding="utf-8"), strict=strict)


def load_bundled_puzzles() -> list[Puzzle]:
    """The sample catalogue shipped with the package."""
    return load_puzzles(_BUNDLED_PUZZLES, strict=True)


class PuzzleCatalogue:
    """Cursor over an ordered puzzle list; next/previous wrap around."""

    __slots__ = ("_puzzles", "_index")

    def __init__(self, puzzles: Sequence[Puzzle]) -> None:
        self._puzzles: tuple[Puzzle, ...] = tuple(puzzles)
        self._index = 0

    def __len__(self) -> int:
        return len(self._puzzles)

    @property
    def index(self) -> int:
        return self._index

    @property
    def current(self) -> Puzzle | None:
        if not self._puzzles:
            return None
        return self._puzzles[self._index]

    def go_to(self, index: int) -> Puzzle | None:
        """Select puzzle *index*; out-of-range indices change nothing."""
        if 0 <= index < len(self._puzzles):
            self._index = index
            return self._puzzles[index]
        return None

    def next(self) -> Puzzle | None:
        if not self._puzzles:
            return None
        return self.go_to((self._index + 1) % len(self._puzzles))

    def previous(self) -> Puzzle | None:
        if not self._puzzles:
            return None
        return self.go_to((self._index - 1) % len(self._puzzles))

    def find(self, puzzle_id: str) -> Puzzle | None:
        return next((p for p in self._puzzles if p.id == puzzle_id), None)
