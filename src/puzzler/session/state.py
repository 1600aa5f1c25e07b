"""Mutable per-attempt state owned by :class:`PuzzleSession`."""

from __future__ import annotations

from dataclasses import dataclass, field

from puzzler.core.enums import HighlightKind, SessionStatus
from puzzler.core.models import CoordinateMove, Feedback, Hint, Puzzle


@dataclass(frozen=True, slots=True)
class AttemptSummary:
    """What the completion dialog shows once an attempt ends."""

    puzzle_id: str
    success: bool
    time_spent_seconds: int
    title: str
    message: str
    persisted: bool


@dataclass(slots=True)
class SessionState:
    """State of one puzzle attempt.

    ``solution_index`` only grows while the attempt is active and never
    exceeds ``len(puzzle.solution)``.
    """

    puzzle: Puzzle
    attempt_id: int
    solution_index: int = 0
    status: SessionStatus = SessionStatus.INITIALIZING
    initialized: bool = False
    accepting_moves: bool = False
    feedback: Feedback | None = None
    hint: Hint | None = None
    highlights: dict[str, HighlightKind] = field(default_factory=dict)
    last_move: tuple[str, str] | None = None
    summary: AttemptSummary | None = None

    @property
    def expected_move(self) -> str | CoordinateMove | None:
        """Next solution entry, or ``None`` once the line is exhausted."""
        if self.solution_index < len(self.puzzle.solution):
            return self.puzzle.solution[self.solution_index]
        return None

    @property
    def remaining_solution(self) -> tuple[str | CoordinateMove, ...]:
        return self.puzzle.solution[self.solution_index :]

    @property
    def is_solution_exhausted(self) -> bool:
        return self.solution_index >= len(self.puzzle.solution)
