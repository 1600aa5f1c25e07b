"""User statistics: models, the pure stats engine and persistence."""

from puzzler.stats.engine import (
    DEFAULT_POLICY,
    StatsPolicy,
    record_attempt,
    session_view,
)
from puzzler.stats.models import AttemptRecord, SessionStats, UserStats
from puzzler.stats.store import IStatsStore, JsonStatsStore, MemoryStatsStore

__all__ = [
    "AttemptRecord",
    "DEFAULT_POLICY",
    "IStatsStore",
    "JsonStatsStore",
    "MemoryStatsStore",
    "SessionStats",
    "StatsPolicy",
    "UserStats",
    "record_attempt",
    "session_view",
]
