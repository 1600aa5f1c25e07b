"""User-facing strings for session feedback and summaries.

Usage::

    from puzzler.core.messages import MESSAGES

    print(MESSAGES.hint.format(src="g1", dst="f3"))
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Messages:
    # ── Move feedback ────────────────────────────────────────────────────
    correct_move: str
    illegal_move: str
    incorrect_move: str

    # ── Hints / solution ─────────────────────────────────────────────────
    hint: str  # "{src}" / "{dst}"
    hint_unavailable: str
    solution: str  # "{moves}"
    bad_scripted_reply: str  # "{move}"

    # ── Completion dialog ────────────────────────────────────────────────
    solved_title: str
    solved_message: str  # "{time}"
    failed_title: str
    failed_message: str


MESSAGES = Messages(
    correct_move="Correct move!",
    illegal_move="Illegal move!",
    incorrect_move="Incorrect move! Try again.",
    hint="Hint: Move the piece from {src} to {dst}",
    hint_unavailable="Could not determine hint for this move",
    solution="The solution is: {moves}",
    bad_scripted_reply="Puzzle data error: scripted move {move} is not playable",
    solved_title="Puzzle Solved!",
    solved_message="Great job! You solved the puzzle in {time}",
    failed_title="Puzzle Failed",
    failed_message="Better luck next time! Try the next puzzle.",
)
