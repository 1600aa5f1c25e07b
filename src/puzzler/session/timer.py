"""Attempt stopwatch with whole-second resolution."""

from __future__ import annotations

import time
from collections.abc import Callable

from puzzler.session.interfaces import ITimer


class ElapsedTimer(ITimer):
    """Counts elapsed attempt time.

    Uses monotonic time; ``elapsed_seconds`` advances once per whole second
    while running.
    """

    __slots__ = ("_now", "_accumulated", "_started_at", "_running")

    def __init__(self, now: Callable[[], float] = time.monotonic) -> None:
        self._now = now
        self._accumulated: float = 0.0
        self._started_at: float = 0.0
        self._running: bool = False

    # ── ITimer implementation ────────────────────────────────────────────

    def start(self) -> None:
        if self._running:
            return
        self._started_at = self._now()
        self._running = True

    def stop(self) -> None:
        if self._running:
            self._accumulated += self._now() - self._started_at
            self._running = False

    def reset(self) -> None:
        self._accumulated = 0.0
        self._running = False

    def restart(self) -> None:
        self.reset()
        self.start()

    @property
    def elapsed_seconds(self) -> int:
        total = self._accumulated
        if self._running:
            total += self._now() - self._started_at
        return int(max(0.0, total))

    @property
    def is_running(self) -> bool:
        return self._running


def format_elapsed(seconds: int) -> str:
    """``MM:SS`` display form of *seconds*."""
    s = max(0, int(seconds))
    return f"{s // 60:02d}:{s % 60:02d}"
