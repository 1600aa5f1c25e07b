"""Stats persistence: read/write capability and two implementations."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path

from puzzler.core.errors import StatsStoreError
from puzzler.stats.models import DEFAULT_RATING, UserStats


class IStatsStore(ABC):
    """Where user statistics live between sessions."""

    @abstractmethod
    def read_stats(self) -> UserStats:
        """Load stored stats, or a fresh profile if none exist.

        Raises:
            StatsStoreError: if stored data exists but cannot be read.
        """

    @abstractmethod
    def write_stats(self, stats: UserStats) -> None:
        """Persist *stats*, replacing what was stored.

        Raises:
            StatsStoreError: if the data could not be written.
        """

    def reset(self, rating: int = DEFAULT_RATING) -> UserStats:
        """Replace stored stats with a fresh profile and return it."""
        stats = UserStats.initial(rating)
        self.write_stats(stats)
        return stats


class MemoryStatsStore(IStatsStore):
    """Keeps stats in process memory only."""

    __slots__ = ("_stats",)

    def __init__(self, stats: UserStats | None = None) -> None:
        self._stats = stats

    def read_stats(self) -> UserStats:
        return self._stats if self._stats is not None else UserStats.initial()

    def write_stats(self, stats: UserStats) -> None:
        self._stats = stats


class JsonStatsStore(IStatsStore):
    """Stores stats as one JSON document on disk."""

    __slots__ = ("_path",)

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read_stats(self) -> UserStats:
        if not self._path.is_file():
            return UserStats.initial()
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            return UserStats.from_dict(data)
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as exc:
            msg = f"Cannot read stats from {self._path}: {exc}"
            raise StatsStoreError(msg) from exc

    def write_stats(self, stats: UserStats) -> None:
        payload = json.dumps(stats.to_dict(), indent=2)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload, encoding="utf-8")
            tmp_path.replace(self._path)
        except OSError as exc:
            raise StatsStoreError(f"Cannot write stats to {self._path}: {exc}") from exc
