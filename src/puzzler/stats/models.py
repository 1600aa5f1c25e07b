"""Data models for user rating and attempt history."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

DEFAULT_RATING = 1200


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


@dataclass(frozen=True, slots=True)
class AttemptRecord:
    """Outcome of one finished attempt. Never mutated once produced."""

    puzzle_id: str
    success: bool
    time_spent_seconds: int
    timestamp: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "puzzleId": self.puzzle_id,
            "success": self.success,
            "timeSpent": self.time_spent_seconds,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AttemptRecord:
        return cls(
            puzzle_id=str(data["puzzleId"]),
            success=bool(data["success"]),
            time_spent_seconds=int(data["timeSpent"]),
            timestamp=datetime.fromisoformat(str(data["timestamp"])),
        )


@dataclass(frozen=True, slots=True)
class UserStats:
    """Lifetime statistics.

    ``accuracy`` and ``average_time_seconds`` are derived from ``history``
    on every access and are never stored on their own.
    """

    rating: int
    solved: int
    streak: int
    history: tuple[AttemptRecord, ...] = ()

    @classmethod
    def initial(cls, rating: int = DEFAULT_RATING) -> UserStats:
        return cls(rating=rating, solved=0, streak=0)

    @property
    def accuracy(self) -> int:
        """Percentage of successful attempts, 0 with no history."""
        if not self.history:
            return 0
        successes = sum(1 for a in self.history if a.success)
        return round_half_up(100 * successes / len(self.history))

    @property
    def average_time_seconds(self) -> int:
        if not self.history:
            return 0
        total = sum(a.time_spent_seconds for a in self.history)
        return round_half_up(total / len(self.history))

    def to_dict(self) -> dict[str, Any]:
        # Derived fields are written for external readers only.
        return {
            "rating": self.rating,
            "solved": self.solved,
            "streak": self.streak,
            "accuracy": self.accuracy,
            "averageTime": self.average_time_seconds,
            "history": [a.to_dict() for a in self.history],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> UserStats:
        return cls(
            rating=int(data.get("rating", DEFAULT_RATING)),
            solved=int(data.get("solved", 0)),
            streak=int(data.get("streak", 0)),
            history=tuple(AttemptRecord.from_dict(h) for h in data.get("history", ())),
        )


@dataclass(frozen=True, slots=True)
class SessionStats:
    """Today's figures next to lifetime streak and rating."""

    solved: int
    accuracy: int
    streak: int
    rating: int
