"""Tests for rating, streak and session figures."""

from datetime import datetime, timedelta

import pytest

from puzzler.stats.engine import StatsPolicy, record_attempt, session_view
from puzzler.stats.models import AttemptRecord, UserStats

_NOON = datetime(2024, 5, 17, 12, 0).astimezone()


def _attempt(success: bool, seconds: int = 30, when: datetime = _NOON) -> AttemptRecord:
    return AttemptRecord("p", success, seconds, when)


class TestRecordAttempt:
    def test_success(self) -> None:
        stats = record_attempt(UserStats.initial(), _attempt(True))
        assert (stats.rating, stats.solved, stats.streak) == (1210, 1, 1)

    def test_failure(self) -> None:
        before = UserStats(rating=1300, solved=4, streak=3)
        stats = record_attempt(before, _attempt(False))
        assert (stats.rating, stats.solved, stats.streak) == (1295, 4, 0)

    def test_exactly_one_history_entry(self) -> None:
        stats = UserStats.initial()
        for i, success in enumerate((True, False, True)):
            attempt = _attempt(success)
            stats = record_attempt(stats, attempt)
            assert len(stats.history) == i + 1
            assert stats.history[-1] is attempt

    def test_input_not_mutated(self) -> None:
        before = UserStats.initial()
        record_attempt(before, _attempt(True))
        assert before == UserStats.initial()

    @pytest.mark.parametrize(
        ("rating", "expected"), [(805, 800), (803, 800), (800, 800), (700, 800)]
    )
    def test_rating_floor(self, rating: int, expected: int) -> None:
        stats = record_attempt(UserStats(rating, 0, 0), _attempt(False))
        assert stats.rating == expected

    def test_no_ceiling(self) -> None:
        stats = record_attempt(UserStats(3000, 0, 0), _attempt(True))
        assert stats.rating == 3010

    def test_custom_policy(self) -> None:
        policy = StatsPolicy(success_delta=16, failure_delta=16, rating_floor=100)
        stats = record_attempt(UserStats(110, 0, 0), _attempt(False), policy)
        assert stats.rating == 100
        assert record_attempt(stats, _attempt(True), policy).rating == 116

    def test_solved_never_decreases(self) -> None:
        stats = UserStats.initial()
        solved = []
        for success in (True, False, True, False, False):
            stats = record_attempt(stats, _attempt(success))
            solved.append(stats.solved)
        assert solved == sorted(solved)
        assert solved[-1] == 2


class TestDerivedFigures:
    def test_empty_history(self) -> None:
        stats = UserStats.initial()
        assert stats.accuracy == 0
        assert stats.average_time_seconds == 0

    def test_accuracy_rounds_half_up(self) -> None:
        stats = UserStats.initial()
        for success in (True, True, True, True, True, True, True, False):
            stats = record_attempt(stats, _attempt(success))
        # 7 / 8 = 87.5%
        assert stats.accuracy == 88

    def test_accuracy_thirds(self) -> None:
        stats = UserStats.initial()
        for success in (True, False, False):
            stats = record_attempt(stats, _attempt(success))
        assert stats.accuracy == 33

    def test_average_time(self) -> None:
        stats = UserStats.initial()
        for seconds in (10, 15):
            stats = record_attempt(stats, _attempt(True, seconds))
        assert stats.average_time_seconds == 13  # 12.5


class TestSessionView:
    def test_only_today_counts(self) -> None:
        yesterday = _NOON - timedelta(days=1)
        stats = UserStats.initial()
        for attempt in (
            _attempt(True, when=yesterday),
            _attempt(True, when=yesterday),
            _attempt(True),
            _attempt(False),
        ):
            stats = record_attempt(stats, attempt)
        view = session_view(stats, now=_NOON)
        assert view.solved == 1
        assert view.accuracy == 50
        assert view.streak == stats.streak == 0
        assert view.rating == stats.rating

    def test_midnight_boundary(self) -> None:
        midnight = _NOON.replace(hour=0)
        before = midnight - timedelta(seconds=1)
        stats = UserStats.initial()
        stats = record_attempt(stats, _attempt(True, when=before))
        stats = record_attempt(stats, _attempt(True, when=midnight))
        assert session_view(stats, now=_NOON).solved == 1

    def test_nothing_today(self) -> None:
        stats = record_attempt(
            UserStats.initial(), _attempt(True, when=_NOON - timedelta(days=2))
        )
        view = session_view(stats, now=_NOON)
        assert (view.solved, view.accuracy) == (0, 0)
        assert view.streak == 1
