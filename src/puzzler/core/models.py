"""Immutable domain records: puzzles, moves, hints and feedback."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias

from puzzler.core.enums import FeedbackKind, Side
from puzzler.core.errors import PuzzleFormatError


@dataclass(frozen=True, slots=True)
class CoordinateMove:
    """A move given as origin square, destination square and optional promotion."""

    from_square: str
    to_square: str
    promotion: str | None = None

    @property
    def uci(self) -> str:
        return f"{self.from_square}{self.to_square}{(self.promotion or '').lower()}"

    def __str__(self) -> str:
        return self.uci


@dataclass(frozen=True, slots=True)
class AppliedMove:
    """A move as reported back by the rules engine.

    Carries both the coordinate squares and the algebraic (SAN) spelling
    computed for the position the move was played from.
    """

    from_square: str
    to_square: str
    promotion: str | None
    san: str

    @property
    def coordinate(self) -> CoordinateMove:
        return CoordinateMove(self.from_square, self.to_square, self.promotion)

    def __str__(self) -> str:
        return self.san


# A solution entry or a candidate move: algebraic/coordinate text or a triple.
MoveSpec: TypeAlias = str | CoordinateMove | AppliedMove


@dataclass(frozen=True, slots=True)
class Hint:
    """Squares to highlight for the next expected move."""

    from_square: str
    to_square: str


@dataclass(frozen=True, slots=True)
class Feedback:
    """A tagged message for the user."""

    kind: FeedbackKind
    text: str


@dataclass(frozen=True, slots=True)
class Puzzle:
    """A pre-authored puzzle: a start position and the exact line to reproduce.

    ``solution`` alternates player and opponent moves, starting with the
    player's side. Entries keep the notation they were authored in.
    """

    id: str
    starting_fen: str
    solution: tuple[str | CoordinateMove, ...]
    player_color: Side
    difficulty: int = 0
    category: str = ""
    description: str = ""

    def __post_init__(self) -> None:
        if not self.solution:
            raise PuzzleFormatError(f"Puzzle {self.id!r} has an empty solution")
        if self.difficulty < 0:
            raise PuzzleFormatError(
                f"Puzzle {self.id!r} has negative difficulty {self.difficulty}"
            )
        if not isinstance(self.player_color, Side):
            raise PuzzleFormatError(
                f"Puzzle {self.id!r} has invalid player color {self.player_color!r}"
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Puzzle:
        """Build a puzzle from a catalogue record (camelCase field names)."""
        try:
            puzzle_id = str(data["id"])
            fen = data["fen"]
            raw_solution = data["solution"]
            raw_color = data["playerColor"]
        except KeyError as exc:
            raise PuzzleFormatError(f"Puzzle record missing field {exc}") from None

        try:
            color = Side(str(raw_color).lower())
        except ValueError:
            raise PuzzleFormatError(
                f"Puzzle {puzzle_id!r} has invalid player color {raw_color!r}"
            ) from None

        if isinstance(raw_solution, (str, bytes)) or not isinstance(
            raw_solution, (list, tuple)
        ):
            raise PuzzleFormatError(f"Puzzle {puzzle_id!r} solution must be a list")

        try:
            difficulty = int(data.get("difficulty", 0))
        except (TypeError, ValueError):
            raise PuzzleFormatError(
                f"Puzzle {puzzle_id!r} has non-integer difficulty"
            ) from None

        return cls(
            id=puzzle_id,
            starting_fen=str(fen),
            solution=tuple(_solution_entry(puzzle_id, e) for e in raw_solution),
            player_color=color,
            difficulty=difficulty,
            category=str(data.get("category", "")),
            description=str(data.get("description", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "fen": self.starting_fen,
            "solution": [str(e) for e in self.solution],
            "playerColor": self.player_color.value,
            "difficulty": self.difficulty,
            "category": self.category,
            "description": self.description,
        }


def _solution_entry(puzzle_id: str, entry: object) -> str | CoordinateMove:
    if isinstance(entry, str):
        return entry
    if isinstance(entry, Mapping) and "from" in entry and "to" in entry:
        return CoordinateMove(
            str(entry["from"]), str(entry["to"]), entry.get("promotion") or None
        )
    raise PuzzleFormatError(f"Puzzle {puzzle_id!r} has unreadable move {entry!r}")
