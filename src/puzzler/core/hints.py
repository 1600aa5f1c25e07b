"""Hint resolution for the next expected solution entry."""

from __future__ import annotations

from collections.abc import Iterable

from puzzler.core.matcher import matches
from puzzler.core.models import AppliedMove, Hint, MoveSpec
from puzzler.core.notation import parse_coordinate


def resolve_hint(expected: MoveSpec, legal_moves: Iterable[AppliedMove]) -> Hint | None:
    """Origin/destination squares of *expected*, or ``None`` if unresolvable.

    Coordinate entries are answered directly and *legal_moves* is never
    iterated. Algebraic entries are looked up among *legal_moves* (as
    produced by the rules engine for the current position); the first
    matching move wins.
    """
    coordinate = parse_coordinate(expected)
    if coordinate is not None:
        return Hint(coordinate.from_square, coordinate.to_square)

    for move in legal_moves:
        if matches(move, expected):
            return Hint(move.from_square, move.to_square)
    return None
