"""Move notation normalisation.

Every move representation the engine meets (coordinate text such as
``e2e4``, algebraic text such as ``Nf3+``, a :class:`CoordinateMove` triple,
or an :class:`AppliedMove` reported by the rules engine) is reduced here to
a *canonical key*. Two moves are equal iff their keys are equal. No legality
or geometry checks happen in this module.
"""

from __future__ import annotations

import re

from puzzler.core.models import AppliedMove, CoordinateMove, MoveSpec

COORDINATE_RE = re.compile(r"^([a-h][1-8])([a-h][1-8])([qrbnQRBN])?$")
_ANNOTATION_CHARS = "+#"


def strip_annotations(text: str) -> str:
    """Drop surrounding whitespace and trailing check/mate markers."""
    return text.strip().rstrip(_ANNOTATION_CHARS)


def parse_coordinate(move: object) -> CoordinateMove | None:
    """Return *move* as a coordinate triple, or ``None`` if it is not one.

    Strings qualify only when they are two squares plus an optional
    promotion letter (``e2e4``, ``e7e8q``).
    """
    if isinstance(move, CoordinateMove):
        return move
    if isinstance(move, AppliedMove):
        return move.coordinate
    if not isinstance(move, str):
        return None
    m = COORDINATE_RE.match(strip_annotations(move))
    if m is None:
        return None
    promotion = m.group(3).lower() if m.group(3) else None
    return CoordinateMove(m.group(1), m.group(2), promotion)


def normalize(move: MoveSpec | None) -> str:
    """Canonical key of *move*.

    Empty or unrecognised input yields ``""``, which never matches anything.
    """
    if isinstance(move, str):
        coordinate = parse_coordinate(move)
        return coordinate.uci if coordinate is not None else strip_annotations(move)
    if isinstance(move, AppliedMove):
        return move.coordinate.uci
    if isinstance(move, CoordinateMove):
        if not move.from_square or not move.to_square:
            return ""
        return move.uci
    return ""


def canonical_keys(move: MoveSpec | None) -> frozenset[str]:
    """All non-empty keys under which *move* may be matched.

    An :class:`AppliedMove` is known under both its coordinate key and its
    algebraic key, so it can be compared against solution entries authored
    in either notation.
    """
    keys = {normalize(move)}
    if isinstance(move, AppliedMove):
        keys.add(strip_annotations(move.san))
    keys.discard("")
    return frozenset(keys)
