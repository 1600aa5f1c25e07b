"""PuzzleSession: the state machine of one puzzle attempt.

Coordinates: rules engine, deferred actions, timer, stats engine.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime

from puzzler.core.enums import FeedbackKind, HighlightKind, SessionStatus
from puzzler.core.errors import StatsStoreError
from puzzler.core.hints import resolve_hint
from puzzler.core.matcher import matches
from puzzler.core.messages import MESSAGES
from puzzler.core.models import (
    AppliedMove,
    CoordinateMove,
    Feedback,
    Hint,
    MoveSpec,
    Puzzle,
)
from puzzler.rules.interfaces import IRulesEngine
from puzzler.session.config import SessionTimings
from puzzler.session.interfaces import DeferredAction, IScheduler, ITimer
from puzzler.session.state import AttemptSummary, SessionState
from puzzler.session.timer import ElapsedTimer
from puzzler.stats.engine import (
    DEFAULT_POLICY,
    StatsPolicy,
    record_attempt,
    session_view,
)
from puzzler.stats.models import AttemptRecord, SessionStats, UserStats
from puzzler.stats.store import IStatsStore

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

StatusCallback = Callable[[SessionStatus], None]
FeedbackCallback = Callable[[Feedback | None], None]
HighlightsCallback = Callable[[dict[str, HighlightKind]], None]
PositionCallback = Callable[[str], None]  # fen
FinishedCallback = Callable[[AttemptSummary], None]
StatsCallback = Callable[[UserStats], None]

# Deferred actions tied to the flow of an attempt (not just display).
_FLOW_ACTIONS = (
    DeferredAction.INIT_GRACE,
    DeferredAction.ENABLE_INPUT,
    DeferredAction.AUTO_PLAY,
)


def _local_now() -> datetime:
    return datetime.now().astimezone()


@dataclass
class SessionEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_status_changed: list[StatusCallback] = field(default_factory=list)
    on_feedback: list[FeedbackCallback] = field(default_factory=list)
    on_highlights_changed: list[HighlightsCallback] = field(default_factory=list)
    on_position_changed: list[PositionCallback] = field(default_factory=list)
    on_finished: list[FinishedCallback] = field(default_factory=list)
    on_stats_changed: list[StatsCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class PuzzleSession:
    """Drives one puzzle attempt at a time: validates player moves against
    the solution, plays the scripted replies, serves hints and records the
    outcome.

    Thread-safety: every method, and every deferred callback, runs on one
    thread (the Qt main thread). Loading a puzzle cancels all deferred
    actions of the previous attempt; each callback also re-checks the
    attempt id it was scheduled for before touching any state.
    """

    __slots__ = (
        "_rules",
        "_scheduler",
        "_store",
        "_timer",
        "_timings",
        "_policy",
        "_now",
        "_state",
        "_stats",
        "_attempt_id",
        "events",
    )

    def __init__(
        self,
        rules: IRulesEngine,
        scheduler: IScheduler,
        *,
        stats_store: IStatsStore | None = None,
        timer: ITimer | None = None,
        timings: SessionTimings | None = None,
        policy: StatsPolicy = DEFAULT_POLICY,
        now: Callable[[], datetime] = _local_now,
    ) -> None:
        self._rules = rules
        self._scheduler = scheduler
        self._store = stats_store
        self._timer = timer or ElapsedTimer()
        self._timings = timings or SessionTimings()
        self._policy = policy
        self._now = now
        self._state: SessionState | None = None
        self._attempt_id = 0
        self._stats = self._load_stats()
        self.events = SessionEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> SessionState | None:
        return self._state

    @property
    def stats(self) -> UserStats:
        return self._stats

    @property
    def position(self) -> str:
        """FEN of the board as the rules engine currently holds it."""
        return self._rules.current_position()

    @property
    def elapsed_seconds(self) -> int:
        return self._timer.elapsed_seconds

    @property
    def timer(self) -> ITimer:
        return self._timer

    def session_stats(self, now: datetime | None = None) -> SessionStats:
        """Today's stats next to the lifetime streak and rating."""
        return session_view(self._stats, now or self._now())

    # ── Attempt lifecycle ────────────────────────────────────────────────

    def load_puzzle(self, puzzle: Puzzle) -> None:
        """Start a new attempt at *puzzle*.

        The position is loaded first. Only then is every deferred action of
        the previous attempt cancelled and the attempt state replaced.

        Raises:
            PositionError: if the rules engine rejects the starting FEN. The
                previous attempt, its position and its pending actions are
                left untouched.
        """
        self._rules.load_position(puzzle.starting_fen)

        self._scheduler.cancel_all()
        self._attempt_id += 1
        self._state = SessionState(puzzle=puzzle, attempt_id=self._attempt_id)
        _LOGGER.debug("Loading puzzle %s (attempt %d)", puzzle.id, self._attempt_id)
        self._timer.restart()

        self._emit_status(SessionStatus.INITIALIZING)
        self._emit_feedback(None)
        self._emit_highlights()
        self._emit_position()

        self._schedule(
            DeferredAction.INIT_GRACE,
            self._timings.init_grace_ms,
            self._on_init_grace,
        )
        self._schedule(
            DeferredAction.ENABLE_INPUT,
            self._timings.input_enable_ms,
            self._on_enable_input,
        )

    def restart(self) -> None:
        """Start a fresh attempt at the current puzzle."""
        if self._state is not None:
            self.load_puzzle(self._state.puzzle)

    def submit_move(self, move: MoveSpec) -> bool:
        """Play the user's candidate *move*. Returns True if it was correct.

        Rejected without any effect when input is closed or it is not the
        player's turn. Illegal and incorrect moves leave the position and
        ``solution_index`` unchanged.
        """
        state = self._state
        if state is None or not self._accepts_input(state):
            _LOGGER.debug("Move %s rejected: input closed", move)
            return False
        if self._rules.current_turn() != state.puzzle.player_color:
            _LOGGER.debug("Move %s rejected: not the player's turn", move)
            return False

        state.status = SessionStatus.VALIDATING
        applied = self._rules.apply_move(move)
        if applied is None:
            state.status = SessionStatus.AWAITING_INPUT
            self._set_feedback(Feedback(FeedbackKind.ERROR, MESSAGES.illegal_move))
            return False

        if not matches(applied, state.expected_move):
            self._rules.undo_last_move()
            state.status = SessionStatus.AWAITING_INPUT
            self._set_highlights(_squares(applied, HighlightKind.INCORRECT))
            self._set_feedback(Feedback(FeedbackKind.ERROR, MESSAGES.incorrect_move))
            state.hint = None
            self._schedule_clear(
                DeferredAction.ERROR_CLEAR,
                self._timings.error_clear_ms,
                self._clear_feedback_and_highlights,
            )
            return False

        state.solution_index += 1
        state.last_move = (applied.from_square, applied.to_square)
        state.hint = None
        self._scheduler.cancel(DeferredAction.HINT_CLEAR)
        self._scheduler.cancel(DeferredAction.ERROR_CLEAR)
        self._set_highlights(_squares(applied, HighlightKind.CORRECT))
        self._set_feedback(Feedback(FeedbackKind.SUCCESS, MESSAGES.correct_move))
        self._emit_position()

        if state.is_solution_exhausted:
            self._finish(success=True)
            return True

        state.accepting_moves = False
        self._set_status(SessionStatus.AUTO_PLAYING)
        self._schedule(
            DeferredAction.AUTO_PLAY,
            self._timings.auto_play_ms,
            self._on_auto_play,
        )
        return True

    def request_hint(self) -> Hint | None:
        """Highlight the next expected move for a while.

        Only honoured while awaiting input. An entry that matches no legal
        move is bad puzzle data and surfaces as an error message.
        """
        state = self._state
        if state is None or not self._accepts_input(state):
            return None
        expected = state.expected_move
        if expected is None:
            return None

        hint = resolve_hint(expected, self._rules.legal_moves())
        if hint is None:
            _LOGGER.warning(
                "Puzzle %s: solution entry %r matches no legal move",
                state.puzzle.id,
                str(expected),
            )
            self._set_feedback(Feedback(FeedbackKind.ERROR, MESSAGES.hint_unavailable))
            self._schedule_clear(
                DeferredAction.HINT_CLEAR,
                self._timings.hint_error_clear_ms,
                self._on_hint_clear,
            )
            return None

        state.hint = hint
        self._set_highlights(
            {hint.from_square: HighlightKind.HINT, hint.to_square: HighlightKind.HINT}
        )
        self._set_feedback(
            Feedback(
                FeedbackKind.INFO,
                MESSAGES.hint.format(src=hint.from_square, dst=hint.to_square),
            )
        )
        self._schedule_clear(
            DeferredAction.HINT_CLEAR,
            self._timings.hint_clear_ms,
            self._on_hint_clear,
        )
        return hint

    def show_solution(self) -> tuple[str | CoordinateMove, ...]:
        """Return (and announce) the rest of the solution.

        Never changes ``status`` or ``solution_index``.
        """
        state = self._state
        if state is None:
            return ()
        remaining = state.remaining_solution
        if remaining:
            text = MESSAGES.solution.format(moves=", ".join(str(m) for m in remaining))
            self._set_feedback(Feedback(FeedbackKind.INFO, text))
        return remaining

    def give_up(self) -> AttemptSummary | None:
        """End the attempt as a failure. No-op once the attempt has ended."""
        state = self._state
        if state is None or state.status.is_terminal:
            return None
        return self._finish(success=False)

    # ── Deferred actions ─────────────────────────────────────────────────

    def _schedule(
        self, action: DeferredAction, delay_ms: int, handler: Callable[[], None]
    ) -> None:
        attempt_id = self._attempt_id
        self._scheduler.schedule(
            action, delay_ms, lambda: self._run_deferred(attempt_id, action, handler)
        )

    def _schedule_clear(
        self, action: DeferredAction, delay_ms: int, handler: Callable[[], None]
    ) -> None:
        # Error and hint clears share the display; only the latest may run.
        other = (
            DeferredAction.HINT_CLEAR
            if action == DeferredAction.ERROR_CLEAR
            else DeferredAction.ERROR_CLEAR
        )
        self._scheduler.cancel(other)
        self._schedule(action, delay_ms, handler)

    def _run_deferred(
        self, attempt_id: int, action: DeferredAction, handler: Callable[[], None]
    ) -> None:
        if self._state is None or attempt_id != self._attempt_id:
            _LOGGER.debug("Ignoring stale %s from attempt %d", action.name, attempt_id)
            return
        handler()

    def _on_init_grace(self) -> None:
        assert self._state is not None
        self._state.initialized = True

    def _on_enable_input(self) -> None:
        state = self._state
        assert state is not None
        if state.status != SessionStatus.INITIALIZING:
            return
        state.initialized = True
        state.accepting_moves = True
        self._set_status(SessionStatus.AWAITING_INPUT)

    def _on_auto_play(self) -> None:
        state = self._state
        assert state is not None
        if state.status != SessionStatus.AUTO_PLAYING:
            return
        if state.is_solution_exhausted:
            self._finish(success=True)
            return

        reply = state.expected_move
        assert reply is not None
        applied = self._rules.apply_move(reply)
        if applied is None:
            _LOGGER.error(
                "Puzzle %s: scripted reply %r rejected by the rules engine",
                state.puzzle.id,
                str(reply),
            )
            text = MESSAGES.bad_scripted_reply.format(move=reply)
            self._set_feedback(Feedback(FeedbackKind.ERROR, text))
            self._finish(success=False)
            return

        state.solution_index += 1
        state.last_move = (applied.from_square, applied.to_square)
        self._set_highlights({})
        self._emit_position()

        if state.is_solution_exhausted:
            self._finish(success=True)
            return
        state.accepting_moves = True
        self._set_status(SessionStatus.AWAITING_INPUT)

    def _on_hint_clear(self) -> None:
        assert self._state is not None
        self._state.hint = None
        self._clear_feedback_and_highlights()

    def _clear_feedback_and_highlights(self) -> None:
        self._set_highlights({})
        self._set_feedback(None)

    # ── Completion ───────────────────────────────────────────────────────

    def _halt(self, status: SessionStatus) -> None:
        """Stop the flow of the attempt and enter terminal *status*."""
        assert self._state is not None
        for action in _FLOW_ACTIONS:
            self._scheduler.cancel(action)
        self._timer.stop()
        self._state.accepting_moves = False
        self._set_status(status)

    def _finish(self, *, success: bool) -> AttemptSummary | None:
        state = self._state
        if state is None or state.status.is_terminal:
            return None
        self._halt(SessionStatus.COMPLETED if success else SessionStatus.FAILED)

        seconds = self._timer.elapsed_seconds
        record = AttemptRecord(
            puzzle_id=state.puzzle.id,
            success=success,
            time_spent_seconds=seconds,
            timestamp=self._now(),
        )
        self._stats = record_attempt(self._stats, record, self._policy)
        persisted = self._persist_stats()
        _LOGGER.info(
            "Puzzle %s finished: success=%s time=%ds", state.puzzle.id, success, seconds
        )

        if success:
            title = MESSAGES.solved_title
            elapsed = f"{seconds // 60}:{seconds % 60:02d}"
            message = MESSAGES.solved_message.format(time=elapsed)
        else:
            title = MESSAGES.failed_title
            message = MESSAGES.failed_message
        summary = AttemptSummary(
            puzzle_id=state.puzzle.id,
            success=success,
            time_spent_seconds=seconds,
            title=title,
            message=message,
            persisted=persisted,
        )
        state.summary = summary

        for cb in self.events.on_stats_changed:
            cb(self._stats)
        for cb in self.events.on_finished:
            cb(summary)
        return summary

    # ── Stats persistence ────────────────────────────────────────────────

    def _load_stats(self) -> UserStats:
        if self._store is None:
            return UserStats.initial(self._policy.initial_rating)
        try:
            return self._store.read_stats()
        except StatsStoreError as exc:
            _LOGGER.warning("Could not read stats, starting fresh: %s", exc)
            return UserStats.initial(self._policy.initial_rating)

    def _persist_stats(self) -> bool:
        if self._store is None:
            return False
        try:
            self._store.write_stats(self._stats)
        except StatsStoreError as exc:
            _LOGGER.warning("Could not save stats: %s", exc)
            return False
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    @staticmethod
    def _accepts_input(state: SessionState) -> bool:
        return (
            state.initialized
            and state.accepting_moves
            and state.status == SessionStatus.AWAITING_INPUT
        )

    def _set_status(self, status: SessionStatus) -> None:
        assert self._state is not None
        if self._state.status == status:
            return
        self._state.status = status
        self._emit_status(status)

    def _set_feedback(self, feedback: Feedback | None) -> None:
        assert self._state is not None
        self._state.feedback = feedback
        self._emit_feedback(feedback)

    def _set_highlights(self, highlights: Mapping[str, HighlightKind]) -> None:
        assert self._state is not None
        self._state.highlights = dict(highlights)
        self._emit_highlights()

    def _emit_status(self, status: SessionStatus) -> None:
        for cb in self.events.on_status_changed:
            cb(status)

    def _emit_feedback(self, feedback: Feedback | None) -> None:
        for cb in self.events.on_feedback:
            cb(feedback)

    def _emit_highlights(self) -> None:
        assert self._state is not None
        for cb in self.events.on_highlights_changed:
            cb(dict(self._state.highlights))

    def _emit_position(self) -> None:
        fen = self.position
        for cb in self.events.on_position_changed:
            cb(fen)


def _squares(move: AppliedMove, kind: HighlightKind) -> dict[str, HighlightKind]:
    return {move.from_square: kind, move.to_square: kind}
