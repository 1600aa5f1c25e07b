"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterator
from typing import Any

import pytest

from puzzler.core.enums import Side
from puzzler.core.errors import StatsStoreError
from puzzler.core.models import Puzzle
from puzzler.rules.board_rules import STARTING_FEN, BoardRules
from puzzler.session.controller import PuzzleSession
from puzzler.session.interfaces import DeferredAction, IScheduler
from puzzler.session.timer import ElapsedTimer
from puzzler.stats.models import UserStats
from puzzler.stats.store import IStatsStore

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QApplication for timer-driven tests."""
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


# ── Test doubles ─────────────────────────────────────────────────────────────


class ManualScheduler(IScheduler):
    """Deferred actions that only fire when a test says so."""

    def __init__(self) -> None:
        self.pending: dict[DeferredAction, tuple[int, Callable[[], None]]] = {}
        self.scheduled: list[DeferredAction] = []

    def schedule(
        self, action: DeferredAction, delay_ms: int, callback: Callable[[], None]
    ) -> None:
        self.pending[action] = (delay_ms, callback)
        self.scheduled.append(action)

    def cancel(self, action: DeferredAction) -> None:
        self.pending.pop(action, None)

    def cancel_all(self) -> None:
        self.pending.clear()

    def is_pending(self, action: DeferredAction) -> bool:
        return action in self.pending

    def delay_of(self, action: DeferredAction) -> int:
        return self.pending[action][0]

    def fire(self, action: DeferredAction) -> bool:
        entry = self.pending.pop(action, None)
        if entry is None:
            return False
        entry[1]()
        return True

    def run_all(self) -> None:
        """Fire pending actions shortest delay first until none remain."""
        for _ in range(100):
            if not self.pending:
                return
            action = min(self.pending, key=lambda a: self.pending[a][0])
            self.fire(action)
        raise AssertionError("deferred actions keep rescheduling")


class FakeClock:
    """Monotonic time source advanced by hand."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FailingStatsStore(IStatsStore):
    """Store whose every operation fails."""

    def read_stats(self) -> UserStats:
        raise StatsStoreError("read failed")

    def write_stats(self, stats: UserStats) -> None:
        raise StatsStoreError("disk full")


# ── Fixtures ─────────────────────────────────────────────────────────────────


_OPENING_PUZZLE = Puzzle(
    id="open-1",
    starting_fen=STARTING_FEN,
    solution=("e2e4", "e7e5"),
    player_color=Side.WHITE,
)

_LONG_PUZZLE = Puzzle(
    id="open-2",
    starting_fen=STARTING_FEN,
    solution=("e2e4", "e7e5", "Nf3", "Nc6"),
    player_color=Side.WHITE,
)

_SCHOLAR_FEN = "r1bqkb1r/pppp1ppp/2n2n2/4p2Q/2B1P3/8/PPPP1PPP/RNB1K1NR w KQkq - 0 1"

_MATE_PUZZLE = Puzzle(
    id="mate-1",
    starting_fen=_SCHOLAR_FEN,
    solution=("Qxf7+",),
    player_color=Side.WHITE,
)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_session(
    scheduler: ManualScheduler, clock: FakeClock
) -> Callable[..., PuzzleSession]:
    def _make(**kwargs: Any) -> PuzzleSession:
        kwargs.setdefault("timer", ElapsedTimer(now=clock))
        return PuzzleSession(BoardRules(), scheduler, **kwargs)

    return _make


@pytest.fixture
def opening_puzzle() -> Puzzle:
    """White plays e2e4, black replies e7e5."""
    return _OPENING_PUZZLE


@pytest.fixture
def long_puzzle() -> Puzzle:
    return _LONG_PUZZLE


@pytest.fixture
def mate_puzzle() -> Puzzle:
    return _MATE_PUZZLE


@pytest.fixture
def failing_store() -> FailingStatsStore:
    return FailingStatsStore()


@pytest.fixture
def open_input(scheduler: ManualScheduler) -> Callable[[], None]:
    """Let the initialization delays of a freshly loaded puzzle elapse."""

    def _open() -> None:
        scheduler.fire(DeferredAction.INIT_GRACE)
        scheduler.fire(DeferredAction.ENABLE_INPUT)

    return _open
