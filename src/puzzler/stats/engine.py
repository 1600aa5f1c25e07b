"""Stats engine: pure updates of :class:`UserStats` from finished attempts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from puzzler.stats.models import (
    DEFAULT_RATING,
    AttemptRecord,
    SessionStats,
    UserStats,
    round_half_up,
)


@dataclass(frozen=True)
class StatsPolicy:
    """Rating rules. The rating has a hard floor and no ceiling."""

    initial_rating: int = DEFAULT_RATING
    success_delta: int = 10
    failure_delta: int = 5
    rating_floor: int = 800


DEFAULT_POLICY = StatsPolicy()


def record_attempt(
    stats: UserStats,
    attempt: AttemptRecord,
    policy: StatsPolicy = DEFAULT_POLICY,
) -> UserStats:
    """Return *stats* with *attempt* appended and counters updated.

    Always appends exactly one history entry. ``solved`` only grows; the
    streak resets on failure.
    """
    history = (*stats.history, attempt)
    if attempt.success:
        return UserStats(
            rating=stats.rating + policy.success_delta,
            solved=stats.solved + 1,
            streak=stats.streak + 1,
            history=history,
        )
    return UserStats(
        rating=max(policy.rating_floor, stats.rating - policy.failure_delta),
        solved=stats.solved,
        streak=0,
        history=history,
    )


def session_view(stats: UserStats, now: datetime | None = None) -> SessionStats:
    """Solved count and accuracy over today's attempts only.

    "Today" starts at local midnight of *now*. Streak and rating are the
    lifetime values.
    """
    local_now = (now or datetime.now()).astimezone()
    day_start = local_now.replace(hour=0, minute=0, second=0, microsecond=0)
    today = [a for a in stats.history if a.timestamp.astimezone() >= day_start]

    solved = sum(1 for a in today if a.success)
    accuracy = round_half_up(100 * solved / len(today)) if today else 0
    return SessionStats(
        solved=solved,
        accuracy=accuracy,
        streak=stats.streak,
        rating=stats.rating,
    )
